"""
Console runner for the frontline wargame.

Reads clicks from stdin as "x y" cell coordinates (or pixel coordinates
with --pixels), applies them to the rules engine, and redraws the board.
"""

import sys
import math
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from frontline import (
    UnitManager, FogOfWar, TurnManager, InteractionController,
    ActionResult, ActionKind, GameState, Faction, Weather,
    load_scenario, scenario_path,
)
from frontline.config import DEFAULT_SCENARIO

logger = logging.getLogger(__name__)

FACTION_MARKERS = {
    Faction.GERMANY: "G",
    Faction.RUSSIA: "R",
}
FOG_MARKER = "~"
EMPTY_MARKER = "."


class WargameSession:
    """Wires the engine components together for one local game."""

    def __init__(
        self,
        data_path: str = "data",
        scenario: str = DEFAULT_SCENARIO,
    ):
        self.data_path = Path(data_path)
        self.scenario_name = scenario

        logger.info(f"Loading scenario: {scenario}")
        self.scenario = load_scenario(scenario_path(self.data_path, scenario))
        self.grid_map = self.scenario.grid

        logger.info("Initializing unit manager...")
        self.units = UnitManager(self.grid_map)
        if self.scenario.units:
            self.units.load_roster(self.scenario.units)
        else:
            self.units.load_default_roster()

        self.fog = FogOfWar(self.grid_map, self.units)
        self.turn_manager = TurnManager(
            self.grid_map, self.units, self.fog, self.scenario.rules,
        )
        self.controller = InteractionController(self.turn_manager)

        self.turn_manager.on_turn_end = self._on_turn_end
        self.turn_manager.on_weather_change = self._on_weather_change

        # Game log
        self.game_log: list[dict] = []
        self._log_event("game_start", {
            "scenario": self.scenario.name,
            "units": self.units.get_stats(),
            "status": self.turn_manager.status_text(),
        })

    def click_cell(self, x: int, y: int) -> ActionResult:
        result = self.controller.handle_cell(x, y)
        self._record(result)
        return result

    def click_pixel(self, px: float, py: float) -> ActionResult:
        result = self.controller.handle_pointer(px, py)
        self._record(result)
        return result

    def snapshot(self) -> dict:
        return self.turn_manager.snapshot()

    def _record(self, result: ActionResult):
        if result.kind == ActionKind.SELECTED:
            self._log_event("select", {"unit_id": result.unit_id, "cell": result.target})
        elif result.kind == ActionKind.MOVED:
            self._log_event("move", {
                "unit_id": result.unit_id,
                "from": result.origin,
                "to": result.target,
            })
            if result.combat:
                self._log_event("combat", result.combat.to_dict())
                if result.combat.defender_destroyed:
                    self._log_event("destroyed", {"unit_id": result.combat.defender_id})

    def _on_turn_end(self, state: GameState):
        self._log_event("turn_end", {
            "turn": state.turn,
            "active_faction": state.active_faction.value,
        })

    def _on_weather_change(self, old: Weather, new: Weather):
        self._log_event("weather", {"from": old.value, "to": new.value})

    def _log_event(self, event_type: str, data: dict):
        """Log a game event."""
        self.game_log.append({
            "timestamp": datetime.now().isoformat(),
            "event": event_type,
            "data": data,
        })


def render_board(snapshot: dict) -> str:
    """Draw the board as text from a turn manager snapshot."""
    cols = snapshot["grid"]["cols"]
    rows = snapshot["grid"]["rows"]
    fog = {tuple(cell) for cell in snapshot["fog"]}
    units = {tuple(u["location"]): u for u in snapshot["units"]}
    active = snapshot["active_faction"]

    lines = ["   " + "".join(f"{x:>3}" for x in range(cols))]
    for y in range(rows):
        row = []
        for x in range(cols):
            unit = units.get((x, y))
            # Enemy units under fog stay hidden
            if (x, y) in fog and not (unit and unit["faction"] == active):
                marker = FOG_MARKER
            elif unit:
                marker = FACTION_MARKERS[Faction(unit["faction"])]
                if unit["id"] == snapshot["selected_unit_id"]:
                    marker = f"[{marker}"
            else:
                marker = EMPTY_MARKER
            row.append(f"{marker:>3}")
        lines.append(f"{y:>3}" + "".join(row))

    lines.append(snapshot["status"])
    return "\n".join(lines)


def describe(result: ActionResult) -> str:
    """One-line summary of an action for the console."""
    if result.kind == ActionKind.SELECTED:
        return f"Selected {result.unit_id}"
    if result.kind == ActionKind.IGNORED:
        return f"Ignored click at {result.target}: {result.reason.value}"

    text = f"{result.unit_id} moved {result.origin} -> {result.target}"
    if result.combat:
        c = result.combat
        text += f"; hit {c.defender_id} for {c.damage} ({c.defender_health} left)"
        if c.defender_destroyed:
            text += f", {c.defender_id} destroyed"
    return text


def run(session: WargameSession, stream: TextIO, out: TextIO, pixels: bool = False):
    """Read clicks until EOF or 'q'."""
    print(render_board(session.snapshot()), file=out)

    for line in stream:
        line = line.strip()
        if not line:
            continue
        if line.lower() in ("q", "quit", "exit"):
            break

        try:
            a, b = line.split()
            coords = (float(a), float(b)) if pixels else (int(a), int(b))
            if not all(math.isfinite(c) for c in coords):
                raise ValueError(line)
        except ValueError:
            print(f"Expected two numbers, got: {line!r}", file=out)
            continue

        if pixels:
            result = session.click_pixel(*coords)
        else:
            result = session.click_cell(*coords)

        print(describe(result), file=out)
        if result.changed:
            print(render_board(session.snapshot()), file=out)


def main(argv: Optional[list[str]] = None):
    """Play a hot-seat game in the terminal."""
    import argparse

    parser = argparse.ArgumentParser(description="Frontline grid wargame")
    parser.add_argument("--scenario", default=DEFAULT_SCENARIO, help="Scenario name")
    parser.add_argument("--data", default="data", help="Data directory path")
    parser.add_argument("--pixels", action="store_true",
                        help="Read pixel coordinates instead of cells")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    session = WargameSession(data_path=args.data, scenario=args.scenario)
    run(session, sys.stdin, sys.stdout, pixels=args.pixels)


if __name__ == "__main__":
    main()
