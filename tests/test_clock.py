"""Unit tests for the game clock and engine configuration."""

import pytest

from rotation_tracker.engine import EngineConfig, GameClock, InvalidQuarterAdvance, RotationEngine


def test_tick_while_paused_is_noop():
    """Test ticks are ignored while the clock is paused."""
    clock = GameClock()
    assert clock.tick(30) == 0.0
    assert clock.remaining == 600.0
    assert clock.game_time == 0.0


def test_tick_counts_down_and_tracks_game_time():
    """Test ticking counts down and adds to game time."""
    clock = GameClock()
    clock.start_quarter()
    assert clock.tick(45.5) == 45.5
    assert clock.remaining == pytest.approx(554.5)
    assert clock.game_time == pytest.approx(45.5)


def test_tick_never_goes_below_zero_and_stops():
    """Test the clock stops at zero."""
    clock = GameClock(EngineConfig(quarter_length_seconds=60))
    clock.start_quarter()
    assert clock.tick(100) == 60
    assert clock.remaining == 0.0
    assert not clock.running
    assert clock.expired

    # Resuming an expired quarter keeps the clock stopped
    clock.resume()
    assert not clock.running


def test_negative_tick_rejected():
    """Test the bare clock refuses negative ticks."""
    clock = GameClock()
    clock.start_quarter()
    with pytest.raises(ValueError):
        clock.tick(-1)


def test_advance_quarter_keeps_game_time_monotonic():
    """Test game time keeps growing across quarters."""
    clock = GameClock(EngineConfig(quarter_length_seconds=100))
    clock.start_quarter()
    clock.tick(40)
    clock.advance_quarter()

    assert clock.quarter == 2
    assert clock.remaining == 100
    assert not clock.running
    assert clock.game_time == pytest.approx(40)

    clock.start_quarter()
    clock.tick(10)
    assert clock.game_time == pytest.approx(50)


def test_advance_past_max_quarters_raises():
    """Test the clock cannot pass the last quarter."""
    clock = GameClock(EngineConfig(regulation_quarters=2, max_quarters=2))
    clock.advance_quarter()
    with pytest.raises(InvalidQuarterAdvance):
        clock.advance_quarter()


def test_overtime_period_length():
    """Test overtime periods use their own length."""
    config = EngineConfig(max_quarters=5, overtime_length_seconds=300)
    clock = GameClock(config)
    for _ in range(4):
        clock.advance_quarter()
    assert clock.quarter == 5
    assert clock.remaining == 300


def test_snapshot_and_restore_are_independent():
    """Test clock snapshots are detached copies."""
    clock = GameClock()
    clock.start_quarter()
    clock.tick(10)
    state = clock.snapshot()
    clock.tick(20)
    assert state.remaining == pytest.approx(590)

    clock.restore(state)
    assert clock.remaining == pytest.approx(590)
    assert clock.running


def test_config_validation():
    """Test invalid configurations are rejected."""
    with pytest.raises(ValueError):
        EngineConfig(quarter_length_seconds=0)
    with pytest.raises(ValueError):
        EngineConfig(max_quarters=3)
    with pytest.raises(ValueError):
        EngineConfig(court_size=0)


def test_config_round_trip_ignores_unknown_keys():
    """Test config loading skips unknown keys."""
    config = EngineConfig(foul_limit=6)
    data = config.to_dict()
    data["unused"] = True
    assert EngineConfig.from_dict(data) == config


def test_engine_rejects_advance_past_max_quarters(roster_entries):
    """Test the engine reports an invalid quarter advance and keeps its state."""
    engine = RotationEngine.new_game(roster_entries, config=EngineConfig(regulation_quarters=2, max_quarters=2))
    engine.start_game([1, 2, 3, 4, 5])
    assert engine.advance_quarter().ok
    before = engine.to_snapshot()

    result = engine.advance_quarter()

    assert not result.ok
    assert result.error == "INVALID_QUARTER_ADVANCE"
    assert engine.to_snapshot() == before


def test_engine_ignores_negative_tick(started_engine):
    """Test a negative tick through the engine is ignored rather than raised."""
    started_engine.tick(20)
    assert started_engine.tick(-1) == 0.0
    assert started_engine.game_time == pytest.approx(20)
    assert started_engine.clock.running


def test_time_threshold_validation():
    """Test court and bench thresholds must be positive and ordered."""
    with pytest.raises(ValueError):
        EngineConfig(court_green_seconds=300, court_yellow_seconds=200)
    with pytest.raises(ValueError):
        EngineConfig(bench_red_seconds=0)
    with pytest.raises(ValueError):
        EngineConfig(max_free_throws=0)
