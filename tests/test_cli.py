"""Tests for the command-line interface and debug configuration."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect4_solver.debug import DebugLevel, DebugManager, debug
from connect4_solver.interfaces.cli import main

EMPTY_POSITION = ",".join(["0"] * 42)
WIN_IN_ONE = ",".join(["0"] * 28 + ["2", "2", "2", "0", "0", "0", "0"] + ["1", "1", "1", "0", "0", "0", "0"])


@pytest.fixture(autouse=True)
def quiet_debug():
    yield
    debug.configure(level=DebugLevel.WARNING)


def test_moves_on_empty_board(capsys):
    """Test the moves command prints the center column at depth 1."""
    assert main(["moves", "--position", EMPTY_POSITION, "--depth", "1"]) == 0
    out = capsys.readouterr().out
    assert "Optimal moves for X at depth 1: [3]" in out


def test_moves_finds_win(capsys):
    """Test the moves command finds a win in one for either search mode."""
    for extra in ([], ["--prune"]):
        assert main(["moves", "--position", WIN_IN_ONE, "--depth", "2"] + extra) == 0
        assert ": [3]" in capsys.readouterr().out


def test_moves_bad_position(capsys):
    """Test a malformed position is reported, not raised."""
    assert main(["moves", "--position", "0,1,2"]) == 1
    assert "Error parsing position" in capsys.readouterr().out


def test_moves_floating_position(capsys):
    """Test a position with a floating piece is reported before any search."""
    floating = ",".join(["1"] + ["0"] * 41)
    assert main(["moves", "--position", floating, "--depth", "1"]) == 1
    out = capsys.readouterr().out
    assert "Error parsing position" in out
    assert "Optimal moves" not in out


def test_moves_no_moves(capsys):
    """Test a won position reports no moves."""
    won = ",".join(["0"] * 35 + ["1", "1", "1", "1", "2", "2", "2"])
    assert main(["moves", "--position", won, "--player", "2", "--depth", "2"]) == 0
    out = capsys.readouterr().out
    assert "X has already won" in out
    assert "No moves available" in out


def test_no_command(capsys):
    """Test running without a command asks for one."""
    assert main([]) == 1
    assert "Please specify a command" in capsys.readouterr().out


def test_play_quit_and_undo(monkeypatch, capsys):
    """Test the interactive loop handles moves, undo and quit."""
    inputs = iter(["3", "u", "x", "9", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    assert main(["play", "--ai", "none"]) == 0
    out = capsys.readouterr().out
    assert "Move undone." in out
    assert "Invalid input" in out
    assert "Column must be between 0 and 6." in out
    assert "Quitting game." in out


def test_play_against_minimax(monkeypatch, capsys):
    """Test the AI replies to a human move."""
    inputs = iter(["3", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    assert main(["play", "--depth", "1"]) == 0
    assert "AI plays column" in capsys.readouterr().out


def test_benchmark(capsys):
    """Test the benchmark reports both search modes."""
    assert main(["benchmark", "--depth", "2"]) == 0
    out = capsys.readouterr().out
    assert "Tree building: 57 states" in out
    assert "minimax:" in out
    assert "alpha-beta:" in out


def test_debug_level_from_string():
    """Test level names parse case-insensitively."""
    assert DebugLevel.from_string("Trace") == DebugLevel.TRACE
    with pytest.raises(ValueError):
        DebugLevel.from_string("verbose")


def test_debug_component_filter():
    """Test component filtering and level gating."""
    manager = DebugManager("connect4_solver.test")
    manager.configure(level=DebugLevel.DEBUG, components=["tree"])
    assert manager.is_enabled_for(DebugLevel.DEBUG, "tree")
    assert not manager.is_enabled_for(DebugLevel.DEBUG, "board")
    assert not manager.is_enabled_for(DebugLevel.TRACE, "tree")
    manager.configure(level=DebugLevel.NONE)
    assert not manager.is_enabled_for(DebugLevel.ERROR, "tree")


def test_debug_timer():
    """Test timers return elapsed time once."""
    manager = DebugManager("connect4_solver.test")
    manager.start_timer("t")
    assert manager.end_timer("t") >= 0
    assert manager.end_timer("t") is None
