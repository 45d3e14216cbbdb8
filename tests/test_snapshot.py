"""Tests for snapshot encoding, validation and rehydration."""

import json

import pytest

from rotation_tracker.data.validators import validate_roster_payload, validate_snapshot
from rotation_tracker.engine import MalformedSnapshot, RotationEngine


@pytest.fixture
def played_engine(started_engine):
    """Game with points, a substitution, a foul and a miss already played."""
    started_engine.tick(60)
    started_engine.add_points("us", 2, player_id=1)
    started_engine.substitute(1, 6)
    started_engine.tick(30)
    started_engine.add_foul(3)
    started_engine.add_points("them", 3)
    started_engine.add_miss(2, 3)
    return started_engine


def test_snapshot_is_json_compatible(played_engine):
    """Test snapshots survive JSON encoding."""
    snapshot = played_engine.to_snapshot()
    assert json.loads(json.dumps(snapshot)) == snapshot
    assert snapshot["schema_version"] == 1
    assert snapshot["clock"]["game_time"] == 90
    assert set(snapshot["quintets"]) == {"intervals", "open"}


def test_snapshot_is_independent_copy(played_engine):
    """Test snapshots share no state with the engine."""
    snapshot = played_engine.to_snapshot()
    snapshot["players"][0]["stints"].append(999)
    snapshot["game"]["our_score"] = 100

    assert played_engine.player(1).stint_durations == [60.0]
    assert played_engine.game.our_score == 2


def test_round_trip_next_action_matches(played_engine):
    """Test a restored engine behaves like the original."""
    restored = RotationEngine.from_snapshot(json.loads(json.dumps(played_engine.to_snapshot())))
    assert restored.to_snapshot() == played_engine.to_snapshot()

    for engine in (played_engine, restored):
        engine.tick(12)
        assert engine.substitute(2, 7).ok

    assert restored.to_snapshot() == played_engine.to_snapshot()


def test_snapshot_sink_receives_each_change(roster_entries):
    """Test the sink sees every applied change."""
    received = []
    engine = RotationEngine.new_game(roster_entries, snapshot_sink=received.append)
    engine.start_game([1, 2, 3, 4, 5])
    engine.add_points("us", 2)
    engine.add_points("us", 9)  # rejected, no snapshot
    engine.undo_last()
    final = engine.close()

    assert len(received) == 4
    assert received[-1] == final
    assert received[1]["game"]["our_score"] == 2
    assert received[2]["game"]["our_score"] == 0


def test_failing_sink_is_not_fatal(roster_entries):
    """Test a failing sink does not stop the game."""
    def broken_sink(snapshot):
        raise IOError("disk full")

    engine = RotationEngine.new_game(roster_entries, snapshot_sink=broken_sink)
    assert engine.start_game([1, 2, 3, 4, 5]).ok
    assert engine.add_points("us", 2).ok
    assert engine.game.our_score == 2


def test_closed_engine_rejects_actions(started_engine):
    """Test a closed engine refuses actions."""
    started_engine.close()
    assert started_engine.add_points("us", 2).error == "ENGINE_CLOSED"
    assert started_engine.undo_last().error == "ENGINE_CLOSED"


def test_valid_snapshot_has_no_errors(played_engine):
    """Test a consistent snapshot validates cleanly."""
    assert validate_snapshot(played_engine.to_snapshot()) == []


def test_not_started_snapshot_round_trip(engine):
    """Test restoring a game that has not started."""
    restored = RotationEngine.from_snapshot(engine.to_snapshot())
    assert restored.to_snapshot() == engine.to_snapshot()
    assert restored.start_game([1, 2, 3, 4, 5]).ok


@pytest.mark.parametrize(
    "corrupt,message",
    [
        (lambda s: s["players"][1]["stint_plus_minus"].append(3), "plus/minus"),
        (lambda s: s["players"][6].update(on_court=True), "on court"),
        (lambda s: s["players"][1].update(current_stint_start=None), "without an open stint"),
        (lambda s: s["quintets"]["open"].update(key="1-2-3-4-9"), "does not match"),
        (lambda s: s["history"].append({"kind": "teleport"}), "unknown action kind"),
        (lambda s: s["players"][2].update(id=1), "duplicates id"),
        (lambda s: s.update(schema_version=99), "schema_version"),
        (lambda s: s["clock"].update(remaining=-5), "clock.remaining"),
        (lambda s: s["players"][0].update(stints=5), "lists of numbers"),
        (lambda s: s["quintets"].update(open="1-2-3-4-5"), "quintets.open"),
        (lambda s: s["players"][3].update(id=[4]), "id must be an integer"),
        (lambda s: s["config"].update(court_size="five"), "config.court_size"),
        (lambda s: s["quintets"]["intervals"][0].update(player_ids=7), "player_ids"),
        (lambda s: s["history"][1].update(incoming_id=99), "unknown player"),
        (lambda s: s.update(game=[]), "game must be an object"),
    ],
    ids=[
        "misaligned_stints",
        "six_on_court",
        "on_court_without_start",
        "quintet_key_mismatch",
        "unknown_kind",
        "duplicate_id",
        "schema_version",
        "negative_clock",
        "stints_not_a_list",
        "open_quintet_not_an_object",
        "unhashable_id",
        "court_size_not_a_number",
        "interval_ids_not_a_list",
        "history_unknown_player",
        "game_not_an_object",
    ],
)
def test_malformed_snapshots_rejected(played_engine, corrupt, message):
    """Test inconsistent or mistyped snapshots are refused."""
    snapshot = played_engine.to_snapshot()
    corrupt(snapshot)

    with pytest.raises(MalformedSnapshot) as exc_info:
        RotationEngine.from_snapshot(snapshot)
    assert any(message in error for error in exc_info.value.errors)


def test_missing_sections_rejected():
    """Test a snapshot missing its sections."""
    with pytest.raises(MalformedSnapshot):
        RotationEngine.from_snapshot({"schema_version": 1})


def test_validate_roster_payload():
    """Test roster payload validation."""
    assert validate_roster_payload({"players": [{"name": f"P{i}"} for i in range(5)]}) == []

    errors = validate_roster_payload({"players": [{"name": "Solo"}, {"number": 4}]})
    assert any("missing name" in e for e in errors)
    assert any("at least 5" in e for e in errors)
    assert validate_roster_payload({}) == ["roster payload must include non-empty 'players' list"]


def test_last_substitution_must_match_lineup(started_engine):
    """Test a snapshot whose last substitution disagrees with the lineup is refused."""
    started_engine.tick(20)
    started_engine.substitute(1, 6)
    snapshot = started_engine.to_snapshot()
    snapshot["history"][-1]["incoming_id"] = 7
    snapshot["history"][-1]["outgoing_id"] = 2

    with pytest.raises(MalformedSnapshot) as exc_info:
        RotationEngine.from_snapshot(snapshot)
    errors = exc_info.value.errors
    assert any("who is not on court" in error for error in errors)
    assert any("still on court" in error for error in errors)


def test_last_foul_must_match_player(played_engine):
    """Test a snapshot whose last foul record disagrees with the player's fouls is refused."""
    played_engine.add_foul(4)
    snapshot = played_engine.to_snapshot()
    snapshot["players"][3]["fouls"] = 3

    with pytest.raises(MalformedSnapshot) as exc_info:
        RotationEngine.from_snapshot(snapshot)
    assert any("foul count" in error for error in exc_info.value.errors)


def test_shot_stats_survive_round_trip(played_engine):
    """Test made and missed counts are kept in snapshots."""
    played_engine.add_free_throws(2, 2, 1)
    restored = RotationEngine.from_snapshot(json.loads(json.dumps(played_engine.to_snapshot())))

    assert restored.player(2).shot_counts(1) == {"made": 1, "missed": 1}
    assert restored.player(2).shot_counts(3) == {"made": 0, "missed": 1}
    assert restored.player(1).shot_counts(2) == {"made": 1, "missed": 0}
    assert restored.undo_last().ok
    assert restored.player(2).shot_counts(1) == {"made": 0, "missed": 0}
