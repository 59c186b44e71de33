"""
Fog of War for the frontline wargame.

A cell is visible to a faction when at least one of its units is within
vision range (Manhattan distance). Everything else is fogged.

The mask is recomputed from scratch whenever the set of friendly unit
positions or vision ranges changes; results are cached on exactly that key.
"""

import logging
from typing import Optional

from .map import GridMap
from .units import UnitManager, Faction, Unit

logger = logging.getLogger(__name__)

FogKey = tuple[Faction, frozenset]


class FogOfWar:
    """Computes visibility for either faction from the unit registry."""

    def __init__(self, grid_map: GridMap, unit_manager: UnitManager):
        self.grid_map = grid_map
        self.units = unit_manager
        self._cache_key: Optional[FogKey] = None
        self._cached_visible: frozenset = frozenset()

    def _key(self, faction: Faction) -> FogKey:
        return (
            faction,
            frozenset(
                (u.x, u.y, u.vision_range)
                for u in self.units.get_units_by_faction(faction)
            ),
        )

    def visible_cells(self, faction: Faction) -> frozenset:
        """All cells some unit of the faction can see."""
        key = self._key(faction)
        if key == self._cache_key:
            return self._cached_visible

        visible = set()
        for unit in self.units.get_units_by_faction(faction):
            visible.update(
                self.grid_map.get_cells_in_radius(unit.x, unit.y, unit.vision_range)
            )

        self._cache_key = key
        self._cached_visible = frozenset(visible)
        logger.debug(
            f"Fog recomputed for {faction.value}: "
            f"{len(visible)}/{self.grid_map.cell_count} cells visible"
        )
        return self._cached_visible

    def compute_fog(self, faction: Faction) -> frozenset:
        """Cells NOT visible to the faction."""
        visible = self.visible_cells(faction)
        return frozenset(cell for cell in self.grid_map.cells() if cell not in visible)

    def is_visible(self, faction: Faction, x: int, y: int) -> bool:
        return (x, y) in self.visible_cells(faction)

    def is_unit_detected(self, observing_faction: Faction, unit: Unit) -> bool:
        """Own units are always known; enemies only on visible cells."""
        if unit.faction == observing_faction:
            return True
        return self.is_visible(observing_faction, unit.x, unit.y)

    def get_visible_state(self, faction: Faction) -> dict:
        """Get board state as visible to a faction."""
        visible_state = {
            "own_units": [],
            "known_enemies": [],
        }

        for unit in self.units.all_units():
            if unit.faction == faction:
                visible_state["own_units"].append(unit.to_dict())
            elif self.is_unit_detected(faction, unit):
                visible_state["known_enemies"].append({
                    "id": unit.id,
                    "type": unit.unit_type,
                    "location": unit.position,
                    "health": unit.health,
                })

        return visible_state

    def get_intel_summary(self, faction: Faction) -> dict:
        """Get a summary of what a faction can see."""
        visible = self.visible_cells(faction)
        enemies = [
            u for u in self.units.get_units_by_faction(faction.opponent)
            if u.position in visible
        ]
        return {
            "visible_cells": len(visible),
            "fogged_cells": self.grid_map.cell_count - len(visible),
            "enemies_in_sight": len(enemies),
        }
