"""
Exceptions raised by the rules engine.

The registry and turn manager raise these; the interaction controller
turns them into ignored actions so player input is never fatal.
"""


class WargameError(RuntimeError):
    """Base class for rules engine errors."""


class UnitNotFound(WargameError):
    """Raised when a unit id is no longer in the registry."""

    def __init__(self, unit_id: str):
        super().__init__(f"Unit not found: {unit_id}")
        self.unit_id = unit_id


class DuplicateUnit(WargameError):
    """Raised when registering a unit id twice."""

    def __init__(self, unit_id: str):
        super().__init__(f"Unit already registered: {unit_id}")
        self.unit_id = unit_id


class OutOfBounds(WargameError):
    """Raised for coordinates outside the grid."""

    def __init__(self, x: int, y: int):
        super().__init__(f"Cell ({x}, {y}) is outside the grid")
        self.x = x
        self.y = y


class IllegalMove(WargameError):
    """Raised when a move or selection breaks the movement rules."""


class CellOccupied(IllegalMove):
    def __init__(self, x: int, y: int, occupant_id: str):
        super().__init__(f"Cell ({x}, {y}) is occupied by {occupant_id}")
        self.x = x
        self.y = y
        self.occupant_id = occupant_id


class NotAdjacent(IllegalMove):
    def __init__(self, unit_id: str, distance: int, max_distance: int):
        super().__init__(
            f"Unit {unit_id} cannot move {distance} cells (max {max_distance})"
        )
        self.unit_id = unit_id
        self.distance = distance


class NotYourUnit(IllegalMove):
    def __init__(self, unit_id: str, faction: str):
        super().__init__(f"Unit {unit_id} does not belong to {faction}")
        self.unit_id = unit_id
        self.faction = faction


class ScenarioError(WargameError):
    """Raised for a malformed scenario file."""


class DestroyedUnit(WargameError):
    """Raised when registering a unit with no health left."""

    def __init__(self, unit_id: str, health: int):
        super().__init__(f"Unit {unit_id} has no health left ({health})")
        self.unit_id = unit_id
        self.health = health
