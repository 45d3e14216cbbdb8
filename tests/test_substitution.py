"""Tests for the opening lineup, substitutions and stint bookkeeping."""

import pytest

from rotation_tracker.engine import RotationEngine
from rotation_tracker.models import GameStatus, Side


def test_new_game_assigns_ids_from_roster_order(engine):
    """Test ids follow roster order."""
    assert [p.player_id for p in engine.players] == list(range(1, 13))
    assert engine.player(1).name == "Ana"
    assert engine.status is GameStatus.NOT_STARTED
    assert engine.on_court_ids == []


def test_new_game_requires_enough_players(roster_entries):
    """Test a roster smaller than the court."""
    with pytest.raises(ValueError):
        RotationEngine.new_game(roster_entries[:4])


def test_start_game_counts_opening_entries(engine):
    """Test the opening lineup counts as entries."""
    result = engine.start_game([5, 4, 3, 2, 1])

    assert result.ok
    assert engine.status is GameStatus.IN_PROGRESS
    assert sorted(engine.on_court_ids) == [1, 2, 3, 4, 5]
    assert engine.game.substitutions_by_quarter[1] == 5
    assert engine.game.opening_substitutions == 5
    assert engine.quintets.current_key == "1-2-3-4-5"
    assert not engine.history


@pytest.mark.parametrize("starters", [[1, 2, 3, 4], [1, 1, 2, 3, 4], [1, 2, 3, 4, 5, 6]])
def test_start_game_rejects_bad_lineups(engine, starters):
    """Test invalid opening lineups."""
    result = engine.start_game(starters)
    assert not result.ok
    assert result.error == "INVALID_SUBSTITUTION"
    assert engine.status is GameStatus.NOT_STARTED
    assert engine.on_court_ids == []


def test_start_game_rejects_unknown_player(engine):
    """Test an opening lineup with an unknown player."""
    result = engine.start_game([1, 2, 3, 4, 99])
    assert result.error == "UNKNOWN_PLAYER"
    assert engine.on_court_ids == []


def test_start_game_twice_rejected(started_engine):
    """Test starting a game twice."""
    result = started_engine.start_game([6, 7, 8, 9, 10])
    assert result.error == "GAME_NOT_IN_PROGRESS"
    assert sorted(started_engine.on_court_ids) == [1, 2, 3, 4, 5]


def test_substitute_before_start_rejected(engine):
    """Test substitutions before tip-off."""
    result = engine.substitute(1, 6)
    assert not result.ok
    assert result.error == "GAME_NOT_IN_PROGRESS"


def test_scenario_score_then_substitute(started_engine):
    """12-player game: 2 points for us, then 1 out for 6."""
    started_engine.tick(90)
    assert started_engine.add_points(Side.US, 2, player_id=1).ok
    started_engine.tick(30)

    result = started_engine.substitute(1, 6)

    assert result.ok
    outgoing = started_engine.player(1)
    incoming = started_engine.player(6)
    assert not outgoing.on_court
    assert outgoing.current_stint_start is None
    assert outgoing.stint_durations == [120.0]
    assert outgoing.stint_plus_minus == [2]
    assert outgoing.points == 2

    assert incoming.on_court
    assert incoming.current_stint_start.our_score == 2
    assert incoming.current_stint_start.rival_score == 0
    assert incoming.current_stint_start.clock_time == 120.0

    intervals = started_engine.quintets.intervals
    assert len(intervals) == 1
    assert intervals[0].key == "1-2-3-4-5"
    assert intervals[0].duration == 120.0
    assert intervals[0].points_scored == 2
    assert started_engine.quintets.current_key == "2-3-4-5-6"
    assert started_engine.game.substitutions_by_quarter[1] == 6


def test_plus_minus_counts_both_sides(started_engine):
    """Test stint plus/minus uses both scores."""
    started_engine.add_points("us", 3)
    started_engine.add_points("them", 2)
    started_engine.add_points("them", 2)
    started_engine.substitute(2, 7)

    assert started_engine.player(2).stint_plus_minus == [-1]


def test_invalid_substitutions_leave_state_unchanged(started_engine):
    """Test invalid substitutions change nothing."""
    before = started_engine.to_snapshot()

    assert started_engine.substitute(6, 7).error == "INVALID_SUBSTITUTION"  # outgoing on bench
    assert started_engine.substitute(1, 2).error == "INVALID_SUBSTITUTION"  # incoming on court
    assert started_engine.substitute(1, 42).error == "UNKNOWN_PLAYER"

    assert started_engine.to_snapshot() == before


def test_five_on_court_after_any_sequence(started_engine):
    """Test the court always holds five."""
    swaps = [(1, 6), (2, 7), (6, 1), (3, 8), (7, 9), (4, 10), (1, 11)]
    for outgoing, incoming in swaps:
        started_engine.tick(15)
        assert started_engine.substitute(outgoing, incoming).ok
        assert len(started_engine.on_court_ids) == 5

    for player in started_engine.players:
        assert (player.current_stint_start is not None) == player.on_court


def test_substitutions_across_quarters(started_engine):
    """Test substitution counts per quarter."""
    started_engine.tick(60)
    started_engine.substitute(1, 6)
    started_engine.substitute(2, 7)
    assert started_engine.advance_quarter().ok
    started_engine.start_quarter()
    started_engine.tick(30)
    started_engine.substitute(3, 8)

    subs = started_engine.game.substitutions_by_quarter
    assert subs[1] == 7
    assert subs[2] == 1
    assert started_engine.game.total_substitutions == 8


def test_quintet_durations_sum_to_elapsed_time(started_engine):
    """Test quintet intervals cover all game time across substitutions and quarters."""
    steps = [(1, 6), "advance", (2, 7), (6, 1), "advance", (3, 8)]
    for step in steps:
        started_engine.tick(37.5)
        if step == "advance":
            assert started_engine.advance_quarter().ok
            started_engine.start_quarter()
        else:
            assert started_engine.substitute(*step).ok
        assert started_engine.quintets.total_time(started_engine.game_time) == pytest.approx(
            started_engine.game_time
        )
    started_engine.tick(12)

    assert started_engine.game_time == pytest.approx(37.5 * len(steps) + 12)
    assert [i.quarter for i in started_engine.quintets.intervals] == [1, 1, 2, 2, 2, 3]

    assert started_engine.quintets.total_time(started_engine.game_time) == pytest.approx(
        started_engine.game_time
    )


def test_event_log_records_lineup(started_engine):
    """Test events carry the lineup on court."""
    started_engine.tick(20)
    started_engine.substitute(1, 6)

    sub_out, sub_in = started_engine.event_log[-2:]
    assert sub_out.kind.value == "sub_out"
    assert sub_out.player_id == 1
    assert 1 not in sub_out.lineup
    assert sub_in.kind.value == "sub_in"
    assert sorted(sub_in.lineup) == [2, 3, 4, 5, 6]
    assert sub_in.game_time == 20


def test_finish_game_blocks_actions(started_engine):
    """Test a finished game refuses actions."""
    assert started_engine.finish_game().ok
    assert started_engine.status is GameStatus.FINISHED

    assert started_engine.substitute(1, 6).error == "GAME_NOT_IN_PROGRESS"
    assert started_engine.add_points("us", 2).error == "GAME_NOT_IN_PROGRESS"
    assert started_engine.undo_last().error == "GAME_NOT_IN_PROGRESS"
    assert not started_engine.finish_game().ok


def test_clock_controls_ignored_before_start(engine):
    """Test clock controls before tip-off."""
    assert not engine.start_quarter()
    assert engine.tick(30) == 0.0
    assert engine.game_time == 0.0
