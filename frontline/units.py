"""
Unit state management for the frontline wargame.

The UnitManager is the single authority on which units exist. Every
other component reads units through it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .map import GridMap, manhattan_distance
from .errors import (
    CellOccupied, DestroyedUnit, DuplicateUnit, ScenarioError, UnitNotFound,
    WargameError,
)

logger = logging.getLogger(__name__)


class Faction(Enum):
    GERMANY = "germany"
    RUSSIA = "russia"

    @property
    def opponent(self) -> "Faction":
        return Faction.RUSSIA if self is Faction.GERMANY else Faction.GERMANY

    @property
    def label(self) -> str:
        return self.value.title()


STARTING_HEALTH = 100
DEFAULT_VISION_RANGE = 2


@dataclass
class Unit:
    """A single counter on the board."""
    id: str
    faction: Faction
    unit_type: str  # Display label, e.g. "Panzer", "T-34"
    x: int
    y: int
    health: int = STARTING_HEALTH
    vision_range: int = DEFAULT_VISION_RANGE

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def distance_to(self, x: int, y: int) -> int:
        return manhattan_distance(self.x, self.y, x, y)

    def take_damage(self, amount: int) -> int:
        """Apply damage and return remaining health (may go negative)."""
        self.health -= amount
        return self.health

    def is_destroyed(self) -> bool:
        return self.health <= 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "faction": self.faction.value,
            "type": self.unit_type,
            "location": self.position,
            "health": self.health,
            "vision_range": self.vision_range,
        }


class UnitManager:
    """Registry of all units on the board, keyed by id in registration order."""

    def __init__(self, grid_map: GridMap):
        self.grid_map = grid_map
        self.units: dict[str, Unit] = {}

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(list(self.units.values()))

    def add_unit(self, unit: Unit) -> Unit:
        """Register a unit on a free in-bounds cell."""
        if unit.id in self.units:
            raise DuplicateUnit(unit.id)
        if unit.is_destroyed():
            raise DestroyedUnit(unit.id, unit.health)
        self.grid_map.require_in_bounds(unit.x, unit.y)
        occupant = self.unit_at(unit.x, unit.y)
        if occupant:
            raise CellOccupied(unit.x, unit.y, occupant.id)

        self.units[unit.id] = unit
        logger.debug(f"Registered {unit.id} ({unit.unit_type}) at {unit.position}")
        return unit

    def remove(self, unit_id: str) -> Unit:
        """Remove a unit from the board."""
        unit = self.units.pop(unit_id, None)
        if unit is None:
            raise UnitNotFound(unit_id)
        logger.debug(f"Removed {unit_id}")
        return unit

    def move_unit(self, unit_id: str, x: int, y: int) -> Unit:
        """Place a unit on another free cell. Distance is not checked here."""
        unit = self.require_unit(unit_id)
        self.grid_map.require_in_bounds(x, y)
        occupant = self.unit_at(x, y)
        if occupant and occupant.id != unit_id:
            raise CellOccupied(x, y, occupant.id)

        unit.x, unit.y = x, y
        return unit

    # Roster loading
    def load_roster(self, entries: list[dict]):
        """Create units from roster entries (as found in scenario YAML).

        All entries are parsed before any is registered, and a failed
        placement unregisters the units added so far.
        """
        units = [self._create_unit(entry) for entry in entries]

        added = []
        try:
            for unit in units:
                added.append(self.add_unit(unit))
        except WargameError:
            for unit in added:
                del self.units[unit.id]
            raise

    def load_default_roster(self):
        """One tank per side in opposite corners."""
        self.load_roster([
            {"id": "g1", "faction": "germany", "type": "Panzer", "x": 1, "y": 1},
            {
                "id": "r1", "faction": "russia", "type": "T-34",
                "x": self.grid_map.cols - 2, "y": self.grid_map.rows - 2,
            },
        ])

    def _create_unit(self, data: dict) -> Unit:
        """Create a unit from a roster entry."""
        try:
            unit = Unit(
                id=str(data["id"]),
                faction=Faction(str(data["faction"]).lower()),
                unit_type=data.get("type", "Infantry"),
                x=int(data["x"]),
                y=int(data["y"]),
                health=int(data.get("health", STARTING_HEALTH)),
                vision_range=int(data.get("vision_range", DEFAULT_VISION_RANGE)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ScenarioError(f"Invalid unit entry {data!r}: {e}") from e

        if unit.health <= 0:
            raise ScenarioError(f"Unit {unit.id} must start with positive health")
        if unit.vision_range < 0:
            raise ScenarioError(f"Unit {unit.id} has negative vision range")
        return unit

    # Query methods
    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return self.units.get(unit_id)

    def require_unit(self, unit_id: str) -> Unit:
        unit = self.units.get(unit_id)
        if unit is None:
            raise UnitNotFound(unit_id)
        return unit

    def unit_at(self, x: int, y: int) -> Optional[Unit]:
        for unit in self.units.values():
            if unit.x == x and unit.y == y:
                return unit
        return None

    def all_units(self) -> list[Unit]:
        return list(self.units.values())

    def get_units_by_faction(self, faction: Faction) -> list[Unit]:
        return [u for u in self.units.values() if u.faction == faction]

    def get_adjacent_enemies(self, unit: Unit) -> list[Unit]:
        """Enemy units exactly one cell away, in registration order."""
        return [
            u for u in self.units.values()
            if u.faction != unit.faction and u.distance_to(unit.x, unit.y) == 1
        ]

    def get_stats(self) -> dict:
        """Get unit statistics."""
        stats = {
            "total_units": len(self.units),
            "by_faction": {},
        }

        for faction in Faction:
            stats["by_faction"][faction.value] = len(self.get_units_by_faction(faction))

        return stats
