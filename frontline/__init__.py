"""
Turn-based grid wargame rules engine.

Core modules:
- map: Grid dimensions, weather seasons, distances
- units: Unit registry
- fog_of_war: Visibility from friendly vision ranges
- combat/: Combat resolution
- turn: Turn order, weather cycle, game state
- interaction: Click handling (select / move / attack)
- config: Scenario loading
"""

from .map import GridMap, Weather, manhattan_distance
from .units import UnitManager, Unit, Faction
from .fog_of_war import FogOfWar
from .combat import GroundCombat, CombatReport
from .turn import TurnManager, GameState, Phase
from .interaction import InteractionController, ActionResult, ActionKind, IgnoreReason
from .config import RulesConfig, ScenarioConfig, load_scenario, scenario_path
from .errors import (
    WargameError, UnitNotFound, DuplicateUnit, DestroyedUnit, OutOfBounds,
    IllegalMove, CellOccupied, NotAdjacent, NotYourUnit, ScenarioError,
)

__all__ = [
    # Map
    "GridMap", "Weather", "manhattan_distance",
    # Units
    "UnitManager", "Unit", "Faction",
    # Fog of War
    "FogOfWar",
    # Combat
    "GroundCombat", "CombatReport",
    # Turn Management
    "TurnManager", "GameState", "Phase",
    # Interaction
    "InteractionController", "ActionResult", "ActionKind", "IgnoreReason",
    # Config
    "RulesConfig", "ScenarioConfig", "load_scenario", "scenario_path",
    # Errors
    "WargameError", "UnitNotFound", "DuplicateUnit", "DestroyedUnit", "OutOfBounds",
    "IllegalMove", "CellOccupied", "NotAdjacent", "NotYourUnit", "ScenarioError",
]
