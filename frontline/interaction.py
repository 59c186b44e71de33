"""
Player interaction: turns a clicked cell into select / move / attack.

Every call returns an ActionResult so callers can tell an ignored click
from one that changed the game, without inspecting state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .combat import GroundCombat, CombatReport
from .turn import TurnManager
from .units import Unit
from .errors import CellOccupied, NotAdjacent

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    SELECTED = "selected"
    MOVED = "moved"
    IGNORED = "ignored"


class IgnoreReason(Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    NO_SELECTION = "no_selection"  # Empty or enemy cell with nothing selected
    NOT_ADJACENT = "not_adjacent"
    OCCUPIED = "occupied"


@dataclass
class ActionResult:
    """Outcome of one click."""
    kind: ActionKind
    target: tuple[int, int]
    unit_id: Optional[str] = None
    reason: Optional[IgnoreReason] = None
    origin: Optional[tuple[int, int]] = None
    combat: Optional[CombatReport] = None

    @property
    def changed(self) -> bool:
        return self.kind != ActionKind.IGNORED

    @classmethod
    def ignored(cls, target: tuple[int, int], reason: IgnoreReason,
                unit_id: Optional[str] = None) -> "ActionResult":
        return cls(kind=ActionKind.IGNORED, target=target, unit_id=unit_id, reason=reason)


class InteractionController:
    """Applies click events to the game, one complete action at a time."""

    def __init__(self, turn_manager: TurnManager, combat: Optional[GroundCombat] = None):
        self.turns = turn_manager
        self.grid_map = turn_manager.grid_map
        self.units = turn_manager.units
        self.combat = combat or GroundCombat(turn_manager.rules)

    def handle_pointer(self, px: float, py: float) -> ActionResult:
        """Handle a pointer click in pixel coordinates."""
        gx, gy = self.grid_map.cell_at_pixel(px, py)
        return self.handle_cell(gx, gy)

    def handle_cell(self, gx: int, gy: int) -> ActionResult:
        """Handle a click on grid cell (gx, gy)."""
        target = (gx, gy)
        if not self.grid_map.in_bounds(gx, gy):
            logger.debug(f"Ignoring click outside grid at {target}")
            return ActionResult.ignored(target, IgnoreReason.OUT_OF_BOUNDS)

        active = self.turns.active_faction
        occupant = self.units.unit_at(gx, gy)

        # Clicking a friendly unit (re)selects it
        if occupant and occupant.faction == active:
            self.turns.select(occupant.id)
            return ActionResult(kind=ActionKind.SELECTED, target=target, unit_id=occupant.id)

        selected = self.turns.selected_unit()
        if selected is None:
            logger.debug(f"Nothing selected, ignoring click at {target}")
            return ActionResult.ignored(target, IgnoreReason.NO_SELECTION)

        try:
            self.validate_move(selected, gx, gy)
        except NotAdjacent as e:
            logger.debug(str(e))
            return ActionResult.ignored(target, IgnoreReason.NOT_ADJACENT, selected.id)
        except CellOccupied as e:
            logger.debug(str(e))
            return ActionResult.ignored(target, IgnoreReason.OCCUPIED, selected.id)

        return self._move_and_engage(selected.id, gx, gy)

    def validate_move(self, unit: Unit, gx: int, gy: int):
        """Raise IllegalMove (or OutOfBounds) unless unit may step to (gx, gy)."""
        self.grid_map.require_in_bounds(gx, gy)

        distance = unit.distance_to(gx, gy)
        if distance > self.turns.rules.move_range:
            raise NotAdjacent(unit.id, distance, self.turns.rules.move_range)

        # Moving onto an occupied cell never attacks
        occupant = self.units.unit_at(gx, gy)
        if occupant:
            raise CellOccupied(gx, gy, occupant.id)

    def _move_and_engage(self, unit_id: str, gx: int, gy: int) -> ActionResult:
        """Move, attack the first adjacent enemy, then end the turn."""
        unit = self.units.require_unit(unit_id)
        origin = unit.position

        self.units.move_unit(unit_id, gx, gy)
        logger.info(f"Moved unit {unit_id} to ({gx}, {gy})")

        report = None
        enemies = self.units.get_adjacent_enemies(unit)
        if enemies:
            defender = enemies[0]
            report = self.combat.resolve(unit, defender, self.turns.weather)
            report.turn = self.turns.game_state.turn + 1
            if report.defender_destroyed:
                self.units.remove(defender.id)

        self.turns.end_turn()

        return ActionResult(
            kind=ActionKind.MOVED,
            target=(gx, gy),
            unit_id=unit_id,
            origin=origin,
            combat=report,
        )
