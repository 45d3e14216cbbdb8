"""Tests for the rotation report aggregator."""

import pandas as pd
import pytest

from rotation_tracker.reporting import (
    ReportInputError,
    build_report,
    format_time,
    real_substitution_count,
)


@pytest.mark.parametrize("seconds,expected", [(0, "0:00"), (65, "1:05"), (600, "10:00"), (59.9, "0:59"), (-3, "0:00")])
def test_format_time(seconds, expected):
    """Test time formatting."""
    assert format_time(seconds) == expected


def test_real_substitutions_subtract_opening_entries():
    """Test opening entries are not real substitutions."""
    assert real_substitution_count({1: 7, 2: 1}, 5) == 3
    assert real_substitution_count({1: 3}, 5) == 0


def test_scenario_three_substitutions_over_two_quarters(started_engine):
    """Test substitution counts over two quarters."""
    started_engine.tick(60)
    started_engine.substitute(1, 6)
    started_engine.substitute(2, 7)
    started_engine.advance_quarter()
    started_engine.substitute(3, 8)

    report = build_report(started_engine.to_snapshot())

    assert report.substitutions_by_quarter[1] == 7
    assert report.substitutions_by_quarter[2] == 1
    assert report.total_substitutions == 8
    assert report.real_substitutions == 3


def test_repeated_quintet_is_summed(started_engine):
    """Test a quintet that plays twice is summed."""
    started_engine.tick(100)
    started_engine.add_points("us", 2)
    started_engine.substitute(1, 6)
    started_engine.tick(40)
    started_engine.add_points("them", 3)
    started_engine.substitute(6, 1)
    started_engine.tick(50)
    started_engine.add_points("us", 3)

    report = build_report(started_engine.to_snapshot())

    top = report.quintets_by_time[0]
    assert top.key == "1-2-3-4-5"
    assert top.occurrences == 2
    assert top.total_time == pytest.approx(150)
    assert top.points_scored == 5
    assert top.points_allowed == 0
    assert top.player_names == ("Ana", "Bea", "Cris", "Dani", "Eva")

    second = report.quintets_by_time[1]
    assert second.key == "2-3-4-5-6"
    assert second.differential == -3
    assert [q.key for q in report.quintets_by_differential] == ["1-2-3-4-5", "2-3-4-5-6"]


def test_open_stints_finalized_virtually(started_engine):
    """Test open stints are reported without touching the snapshot."""
    started_engine.tick(80)
    started_engine.add_points("us", 2)
    snapshot = started_engine.to_snapshot()

    report = build_report(snapshot)

    ana = next(p for p in report.player_stints if p.player_id == 1)
    assert ana.stint_durations == [80.0]
    assert ana.plus_minus == 2
    # The snapshot itself is untouched
    assert snapshot["players"][0]["stints"] == []
    assert snapshot["quintets"]["intervals"] == []


def test_player_rows_skip_unselected_and_unused(started_engine):
    """Test which players appear in the report."""
    started_engine.tick(30)
    started_engine.substitute(5, 11)  # Kira has no selected position
    started_engine.tick(30)

    report = build_report(started_engine.to_snapshot())
    ids = [p.player_id for p in report.player_stints]

    assert 11 not in ids
    assert 12 not in ids  # never played
    assert ids[:4] == [1, 2, 3, 4]
    assert ids[-1] == 5


def test_player_stint_statistics(started_engine):
    """Test stint count, total and average."""
    started_engine.tick(60)
    started_engine.substitute(1, 6)
    started_engine.tick(30)
    started_engine.substitute(6, 1)
    started_engine.tick(30)

    report = build_report(started_engine.to_snapshot())
    ana = next(p for p in report.player_stints if p.player_id == 1)

    assert ana.stint_count == 2
    assert ana.total_time == pytest.approx(90)
    assert ana.average_stint == pytest.approx(45)


def test_report_carries_score_flow(started_engine):
    """Test score flow in the report."""
    started_engine.add_points("them", 2)
    started_engine.add_points("us", 3)
    started_engine.finish_game()

    report = build_report(started_engine.to_snapshot())
    assert report.status == "finished"
    assert report.lead_changes == 1
    assert report.biggest_lead_them == 2
    assert report.to_dict()["biggest_lead"] == {"us": 1, "them": 2}


def test_not_started_report_is_empty(engine):
    """Test reporting a game that has not started."""
    report = build_report(engine.to_snapshot())
    assert report.quintets_by_time == []
    assert report.player_stints == []
    assert report.real_substitutions == 0


def test_to_frames(started_engine):
    """Test report tables as DataFrames."""
    started_engine.tick(30)
    started_engine.substitute(1, 6)
    frames = build_report(started_engine.to_snapshot()).to_frames()

    assert set(frames) == {"quintets_by_time", "quintets_by_differential", "player_stints"}
    assert isinstance(frames["player_stints"], pd.DataFrame)
    assert len(frames["quintets_by_time"]) == 2
    assert frames["player_stints"]["total_time"].is_monotonic_decreasing


def test_report_requires_snapshot_sections():
    """Test reporting an incomplete snapshot."""
    with pytest.raises(ReportInputError):
        build_report({"game": {}})


def test_player_rows_carry_shot_columns(started_engine):
    """Test made and missed attempts per shot value reach the player table."""
    started_engine.tick(40)
    started_engine.add_points("us", 3, player_id=2)
    started_engine.add_miss(2, 3)
    started_engine.add_miss(2, 2)
    started_engine.add_free_throws(2, 2, 1)

    report = build_report(started_engine.to_snapshot())
    bea = next(p for p in report.player_stints if p.player_id == 2).to_dict()

    assert bea["points"] == 4
    assert (bea["pts1_made"], bea["pts1_missed"]) == (1, 1)
    assert (bea["pts2_made"], bea["pts2_missed"]) == (0, 1)
    assert (bea["pts3_made"], bea["pts3_missed"]) == (1, 1)

    frame = report.to_frames()["player_stints"]
    row = frame[frame["player_id"] == 2].iloc[0]
    assert row["pts3_made"] == 1
    assert frame["pts2_made"].sum() == 0
