"""End-to-end tests for the command line interface."""

import json

import pytest

from rotation_tracker.data.loader import DataLoader, DataRequirementError
from rotation_tracker.main import main


@pytest.fixture
def roster_file(tmp_path, roster_entries):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"players": roster_entries}))
    return path


@pytest.fixture
def game_file(tmp_path, roster_file):
    path = tmp_path / "game.json"
    code = main([
        "new", "--roster", str(roster_file), "--starters", "1", "2", "3", "4", "5",
        "--us", "Lions", "--rival", "Tigers", "-o", str(path),
    ])
    assert code == 0
    return path


def test_new_game_writes_started_snapshot(game_file):
    """Test the new command saves a started game."""
    snapshot = DataLoader.load_snapshot(str(game_file))
    assert snapshot["game"]["status"] == "in_progress"
    assert snapshot["game"]["home_team_name"] == "Lions"
    assert snapshot["quintets"]["open"]["key"] == "1-2-3-4-5"


def test_new_game_rejects_bad_starters(tmp_path, roster_file, capsys):
    """Test the new command fails on an invalid opening lineup."""
    code = main(["new", "--roster", str(roster_file), "--starters", "1", "2", "3", "-o", str(tmp_path / "g.json")])
    assert code == 1
    assert "Opening lineup" in capsys.readouterr().out


def test_play_and_report(tmp_path, game_file, capsys):
    """Test replaying a script and reporting on the result."""
    actions = [
        {"type": "start_quarter"},
        {"type": "tick", "seconds": 120},
        {"type": "points", "side": "us", "amount": 2, "player": 1},
        {"type": "substitute", "out": 1, "in": 6},
        {"type": "tick", "seconds": 60},
        {"type": "points", "side": "them", "amount": 3},
        {"type": "foul", "player": 2},
        {"type": "substitute", "out": 7, "in": 8},
        {"type": "advance_quarter"},
        {"type": "edit", "player": 12, "changes": {"position": "SG"}},
        {"type": "undo"},
        {"type": "finish"},
    ]
    actions_file = tmp_path / "actions.json"
    actions_file.write_text(json.dumps(actions))

    assert main(["play", "--snapshot", str(game_file), "--actions", str(actions_file)]) == 0
    out = capsys.readouterr().out
    assert "substitute rejected: INVALID_SUBSTITUTION" in out
    assert "1 actions rejected" in out

    snapshot = DataLoader.load_snapshot(str(game_file))
    assert snapshot["game"]["status"] == "finished"
    assert snapshot["game"]["our_score"] == 2
    assert snapshot["players"][11]["position"] == "Unselected"

    report_path = tmp_path / "report.json"
    csv_dir = tmp_path / "tables"
    code = main([
        "report", "--snapshot", str(game_file), "-o", str(report_path), "--csv-dir", str(csv_dir),
    ])
    assert code == 0

    report = json.loads(report_path.read_text())
    assert report["real_substitutions"] == 1
    assert report["quintets_by_time"][0]["key"] == "1-2-3-4-5"
    assert (csv_dir / "player_stints.csv").exists()


def test_play_rejects_malformed_snapshot(tmp_path, game_file, capsys):
    """Test the play command refuses an inconsistent snapshot."""
    snapshot = DataLoader.load_snapshot(str(game_file))
    snapshot["players"][0]["on_court"] = False
    DataLoader.save_snapshot(snapshot, str(game_file))
    actions_file = tmp_path / "actions.json"
    actions_file.write_text("[]")

    assert main(["play", "--snapshot", str(game_file), "--actions", str(actions_file)]) == 1
    assert "malformed" in capsys.readouterr().out


def test_load_actions_requires_types(tmp_path):
    """Test every scripted action needs a type."""
    path = tmp_path / "actions.json"
    path.write_text(json.dumps({"actions": [{"seconds": 3}]}))
    with pytest.raises(DataRequirementError):
        DataLoader.load_actions(str(path))


def test_no_command_prints_help():
    """Test running without a command."""
    assert main([]) == 1


def test_play_shot_steps_and_recommend(tmp_path, game_file, capsys):
    """Test shot steps replay from a script and recommendations print for the saved game."""
    actions = [
        {"type": "start_quarter"},
        {"type": "tick", "seconds": 300},
        {"type": "miss", "player": 1, "value": 3},
        {"type": "free_throws", "player": 1, "attempts": 2, "made": 2},
        {"type": "foul", "player": 3},
        {"type": "remove_foul", "player": 3},
    ]
    actions_file = tmp_path / "actions.json"
    actions_file.write_text(json.dumps(actions))

    assert main(["play", "--snapshot", str(game_file), "--actions", str(actions_file)]) == 0
    snapshot = DataLoader.load_snapshot(str(game_file))
    ana = snapshot["players"][0]
    assert snapshot["game"]["our_score"] == 2
    assert ana["shot_stats"] == {"pts1": {"made": 2, "missed": 0}, "pts3": {"made": 0, "missed": 1}}
    assert snapshot["players"][2]["fouls"] == 0
    capsys.readouterr()

    assert main(["recommend", "--snapshot", str(game_file)]) == 0
    out = capsys.readouterr().out
    assert "#4 Ana (rest" in out
    assert "same position: #10 Fer" in out
