"""
Scenario configuration loaded from YAML.

Scenarios live in data/scenarios/<name>.yaml. Every section is optional;
missing values fall back to the classic one-tank-per-side setup.
"""

import logging
import yaml
from dataclasses import dataclass, field
from pathlib import Path

from .map import GridMap, Weather
from .units import Faction
from .errors import ScenarioError

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO = "eastern_front"


@dataclass
class RulesConfig:
    """Tunable rule constants."""
    base_damage: int = 30
    winter_penalty: int = 10
    winter_penalised_faction: Faction = Faction.GERMANY
    move_range: int = 1
    starting_faction: Faction = Faction.GERMANY
    starting_weather: Weather = Weather.SUMMER


@dataclass
class ScenarioConfig:
    """Everything needed to set up a game."""
    name: str = DEFAULT_SCENARIO
    grid: GridMap = field(default_factory=GridMap)
    rules: RulesConfig = field(default_factory=RulesConfig)
    units: list[dict] = field(default_factory=list)  # empty means default roster


def scenario_path(data_path: Path | str, name: str) -> Path:
    return Path(data_path) / "scenarios" / f"{name}.yaml"


def load_scenario(path: Path | str) -> ScenarioConfig:
    """Load a scenario file, using defaults if it does not exist."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Scenario not found: {path}, using defaults")
        return ScenarioConfig(name=path.stem)

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ScenarioError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ScenarioError(f"Scenario {path} must be a mapping")

    scenario = ScenarioConfig(
        name=data.get("name", path.stem),
        grid=_parse_grid(data.get("grid") or {}),
        rules=_parse_rules(data.get("rules") or {}),
        units=list(data.get("units") or []),
    )

    logger.info(
        f"Scenario loaded: {scenario.name} "
        f"({scenario.grid.cols}x{scenario.grid.rows}, {len(scenario.units)} units)"
    )
    return scenario


def _parse_grid(data: dict) -> GridMap:
    if not isinstance(data, dict):
        raise ScenarioError(f"grid section must be a mapping, got {data!r}")
    defaults = GridMap()
    try:
        grid = GridMap(
            cols=int(data.get("cols", defaults.cols)),
            rows=int(data.get("rows", defaults.rows)),
            cell_size=int(data.get("cell_size", defaults.cell_size)),
        )
    except (TypeError, ValueError) as e:
        raise ScenarioError(f"Invalid grid section {data!r}: {e}") from e
    return grid


def _parse_rules(data: dict) -> RulesConfig:
    if not isinstance(data, dict):
        raise ScenarioError(f"rules section must be a mapping, got {data!r}")
    defaults = RulesConfig()
    try:
        rules = RulesConfig(
            base_damage=int(data.get("base_damage", defaults.base_damage)),
            winter_penalty=int(data.get("winter_penalty", defaults.winter_penalty)),
            winter_penalised_faction=Faction(
                str(data.get("winter_penalised_faction", defaults.winter_penalised_faction.value)).lower()
            ),
            move_range=int(data.get("move_range", defaults.move_range)),
            starting_faction=Faction(
                str(data.get("starting_faction", defaults.starting_faction.value)).lower()
            ),
            starting_weather=Weather(
                str(data.get("starting_weather", defaults.starting_weather.value)).lower()
            ),
        )
    except (TypeError, ValueError) as e:
        raise ScenarioError(f"Invalid rules section {data!r}: {e}") from e

    if rules.move_range < 1:
        raise ScenarioError("move_range must be at least 1")
    return rules
