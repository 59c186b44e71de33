"""
End-to-end tests of the console session against the bundled scenario.
"""

import io
from pathlib import Path

import pytest

from frontline import ActionKind, Faction, Weather
from game import WargameSession, render_board, run, main

DATA_PATH = Path(__file__).parent / "data"


@pytest.fixture
def session() -> WargameSession:
    return WargameSession(data_path=str(DATA_PATH), scenario="eastern_front")


def board_rows(board: str) -> list[str]:
    # Drop the column header and the status line
    return board.splitlines()[1:-1]


def test_bundled_scenario_sets_up_classic_board(session):
    assert len(session.units) == 2
    assert session.units.get_unit("g1").position == (1, 1)
    assert session.units.get_unit("r1").position == (10, 7)
    assert session.turn_manager.status_text() == "Turn: Germany (movement) - Weather: Summer"
    assert session.game_log[0]["event"] == "game_start"


def test_missing_scenario_falls_back_to_default_roster(tmp_path):
    session = WargameSession(data_path=str(tmp_path), scenario="does_not_exist")

    assert session.grid_map.cols == 12
    assert {u.id for u in session.units} == {"g1", "r1"}


def test_one_full_round(session):
    assert session.click_cell(1, 1).kind == ActionKind.SELECTED
    assert session.click_cell(2, 1).kind == ActionKind.MOVED
    assert session.turn_manager.active_faction == Faction.RUSSIA

    assert session.click_cell(10, 7).kind == ActionKind.SELECTED
    assert session.click_cell(9, 7).kind == ActionKind.MOVED

    state = session.turn_manager.game_state
    assert state.active_faction == Faction.GERMANY
    assert state.weather == Weather.FALL
    assert state.round == 2

    events = [e["event"] for e in session.game_log]
    assert events.count("select") == 2
    assert events.count("move") == 2
    assert events.count("turn_end") == 2
    assert events.count("weather") == 1


def test_tanks_meet_and_fight(session):
    units = session.units
    # March the panzer toward the T-34 until it is adjacent
    units.move_unit("g1", 8, 7)
    units.move_unit("r1", 10, 7)

    session.click_cell(8, 7)
    result = session.click_cell(9, 7)

    assert result.combat.defender_id == "r1"
    assert units.get_unit("r1").health == 70
    assert "combat" in [e["event"] for e in session.game_log]


def test_board_hides_enemy_in_fog(session):
    board = render_board(session.snapshot())
    rows = board_rows(board)

    assert "G" in rows[1]
    assert not any("R" in row for row in rows)
    assert "~" in rows[7]
    assert board.splitlines()[-1] == "Turn: Germany (movement) - Weather: Summer"


def test_board_marks_selected_unit(session):
    session.click_cell(1, 1)
    rows = board_rows(render_board(session.snapshot()))
    assert "[G" in rows[1]


def test_run_reads_cell_clicks():
    session = WargameSession(data_path=str(DATA_PATH))
    out = io.StringIO()

    run(session, io.StringIO("1 1\nnonsense\n\n5 5\n2 1\nq\n1 1\n"), out)

    text = out.getvalue()
    assert "Selected g1" in text
    assert "Expected two numbers, got: 'nonsense'" in text
    assert "Ignored click at (5, 5): not_adjacent" in text
    assert "g1 moved (1, 1) -> (2, 1)" in text
    # Input after 'q' is never read
    assert session.turn_manager.active_faction == Faction.RUSSIA


def test_run_reads_pixel_clicks():
    session = WargameSession(data_path=str(DATA_PATH))
    out = io.StringIO()

    run(session, io.StringIO("70 70\n140 70\nnan 3\n"), out, pixels=True)

    assert session.units.get_unit("g1").position == (2, 1)
    assert "Expected two numbers" in out.getvalue()


def test_main_runs_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 1\nq\n"))
    main(["--data", str(DATA_PATH), "--log-level", "debug"])

    assert "Selected g1" in capsys.readouterr().out
