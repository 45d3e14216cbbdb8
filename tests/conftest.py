"""Shared fixtures for rotation tracker tests."""

import pytest

from rotation_tracker.engine import RotationEngine


ROSTER = [
    {"name": "Ana", "number": "4", "position": "PG"},
    {"name": "Bea", "number": "5", "position": "SG"},
    {"name": "Cris", "number": "7", "position": "SF"},
    {"name": "Dani", "number": "8", "position": "PF"},
    {"name": "Eva", "number": "9", "position": "C"},
    {"name": "Fer", "number": "10", "position": "PG", "secondary_positions": ["SG"]},
    {"name": "Gala", "number": "11", "position": "SF"},
    {"name": "Hana", "number": "12", "position": "PF"},
    {"name": "Ines", "number": "13", "position": "C"},
    {"name": "Julia", "number": "14", "position": "SG"},
    {"name": "Kira", "number": "15", "position": "Unselected"},
    {"name": "Luz", "number": "20"},
]

STARTERS = [1, 2, 3, 4, 5]


@pytest.fixture
def roster_entries():
    """Twelve roster entries in id order."""
    return [dict(entry) for entry in ROSTER]


@pytest.fixture
def engine(roster_entries):
    """Fresh 12-player game, not started."""
    return RotationEngine.new_game(roster_entries, our_team_name="Lions", rival_team_name="Tigers")


@pytest.fixture
def started_engine(engine):
    """Game in progress with players 1-5 on court and the clock running."""
    result = engine.start_game(STARTERS)
    assert result.ok
    engine.start_quarter()
    return engine
