"""
Turn sequencing for the frontline wargame.

Factions alternate strictly. A full round ends when play returns to the
faction that moves first; the weather then advances one season.
Each turn currently fuses movement and combat, so the phase never changes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Callable

from .config import RulesConfig
from .map import GridMap, Weather
from .units import UnitManager, Faction, Unit
from .fog_of_war import FogOfWar
from .errors import NotYourUnit

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Turn phases. Tracked for display, not enforced."""
    MOVEMENT = "movement"
    COMBAT = "combat"
    REINFORCEMENT = "reinforcement"


@dataclass
class GameState:
    """Complete game state."""
    active_faction: Faction = Faction.GERMANY
    phase: Phase = Phase.MOVEMENT
    weather: Weather = Weather.SUMMER
    selected_unit_id: Optional[str] = None
    turn: int = 0  # Completed turns
    round: int = 1


class TurnManager:
    """Owns the game state and advances turns and weather."""

    def __init__(
        self,
        grid_map: GridMap,
        unit_manager: UnitManager,
        fog_of_war: FogOfWar,
        rules: Optional[RulesConfig] = None,
    ):
        self.grid_map = grid_map
        self.units = unit_manager
        self.fog = fog_of_war
        self.rules = rules or RulesConfig()

        self.game_state = GameState(
            active_faction=self.rules.starting_faction,
            weather=self.rules.starting_weather,
        )

        # Callbacks for presentation integration
        self.on_turn_end: Optional[Callable[[GameState], None]] = None
        self.on_weather_change: Optional[Callable[[Weather, Weather], None]] = None

    @property
    def active_faction(self) -> Faction:
        return self.game_state.active_faction

    @property
    def weather(self) -> Weather:
        return self.game_state.weather

    # Selection
    def select(self, unit_id: str) -> Unit:
        """Select a unit of the active faction."""
        unit = self.units.require_unit(unit_id)
        if unit.faction != self.active_faction:
            raise NotYourUnit(unit_id, self.active_faction.value)

        self.game_state.selected_unit_id = unit.id
        logger.info(f"Selected unit: {unit.id}")
        return unit

    def selected_unit(self) -> Optional[Unit]:
        """Resolve the selection through the registry, dropping stale ids."""
        unit_id = self.game_state.selected_unit_id
        if unit_id is None:
            return None

        unit = self.units.get_unit(unit_id)
        if unit is None or unit.faction != self.active_faction:
            logger.debug(f"Dropping stale selection {unit_id}")
            self.game_state.selected_unit_id = None
            return None
        return unit

    def clear_selection(self):
        self.game_state.selected_unit_id = None

    # Turn flow
    def end_turn(self) -> GameState:
        """End the active faction's turn."""
        state = self.game_state
        ending = state.active_faction

        state.active_faction = ending.opponent
        state.turn += 1

        # A full round ends when play returns to the first faction
        if state.active_faction == self.rules.starting_faction:
            old_weather = state.weather
            state.weather = old_weather.next()
            state.round += 1
            logger.info(f"Round {state.round}: weather {old_weather.label} -> {state.weather.label}")
            if self.on_weather_change:
                self.on_weather_change(old_weather, state.weather)

        self.clear_selection()

        logger.info(f"{ending.label} ends turn {state.turn}; {state.active_faction.label} to move")

        if self.on_turn_end:
            self.on_turn_end(state)

        return state

    # Views
    def status_text(self) -> str:
        state = self.game_state
        return (
            f"Turn: {state.active_faction.label} ({state.phase.value}) "
            f"- Weather: {state.weather.label}"
        )

    def snapshot(self) -> dict:
        """Read-only view of everything the presentation layer draws."""
        state = self.game_state
        return {
            "active_faction": state.active_faction.value,
            "phase": state.phase.value,
            "weather": state.weather.value,
            "turn": state.turn,
            "round": state.round,
            "selected_unit_id": state.selected_unit_id,
            "status": self.status_text(),
            "grid": {
                "cols": self.grid_map.cols,
                "rows": self.grid_map.rows,
                "cell_size": self.grid_map.cell_size,
                "pixel_size": self.grid_map.pixel_size,
            },
            "units": [u.to_dict() for u in self.units.all_units()],
            "fog": sorted(self.fog.compute_fog(state.active_faction)),
        }

    def get_game_state_for_player(self, faction: Faction) -> dict:
        """Get game state visible to one faction."""
        visible = self.fog.get_visible_state(faction)

        return {
            "turn": self.game_state.turn,
            "round": self.game_state.round,
            "weather": self.game_state.weather.value,
            "active_faction": self.game_state.active_faction.value,
            "own_units": visible["own_units"],
            "known_enemies": visible["known_enemies"],
            "intel_summary": self.fog.get_intel_summary(faction),
        }
