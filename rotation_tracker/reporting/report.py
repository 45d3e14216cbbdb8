"""Game report: quintet and player stint summaries built from a snapshot."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from ..models.player import SHOT_VALUES, UNSELECTED_POSITION, shot_key

logger = logging.getLogger(__name__)

_QUINTET_COLUMNS = ["key", "duration", "points_scored", "points_allowed"]


class ReportInputError(ValueError):
    """Raised when a snapshot cannot be summarized."""


def format_time(seconds: float) -> str:
    """Format seconds as ``m:ss`` (e.g. ``7:05``)."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def real_substitution_count(substitutions_by_quarter: Dict, opening_substitutions: int) -> int:
    """Substitutions made during play, excluding the opening lineup entries."""
    total = sum(int(n) for n in substitutions_by_quarter.values())
    return max(0, total - int(opening_substitutions))


@dataclass
class QuintetSummary:
    """Aggregated totals for one five-player unit across all its intervals."""

    key: str
    player_ids: Tuple[int, ...]
    player_names: Tuple[str, ...]
    total_time: float
    points_scored: int
    points_allowed: int
    occurrences: int

    @property
    def differential(self) -> int:
        return self.points_scored - self.points_allowed

    def to_dict(self) -> dict:
        data = asdict(self)
        data["player_ids"] = list(self.player_ids)
        data["player_names"] = list(self.player_names)
        data["differential"] = self.differential
        data["total_time_display"] = format_time(self.total_time)
        return data


@dataclass
class PlayerStintSummary:
    """Per-player stint breakdown."""

    player_id: int
    name: str
    number: str
    position: str
    stint_durations: List[float]
    plus_minus: int
    points: int = 0
    fouls: int = 0
    shot_stats: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def stint_count(self) -> int:
        return len(self.stint_durations)

    @property
    def total_time(self) -> float:
        return float(sum(self.stint_durations))

    @property
    def average_stint(self) -> float:
        if not self.stint_durations:
            return 0.0
        return float(np.mean(self.stint_durations))

    def to_dict(self) -> dict:
        data = asdict(self)
        data.update(
            stint_count=self.stint_count,
            total_time=self.total_time,
            average_stint=self.average_stint,
            total_time_display=format_time(self.total_time),
            average_stint_display=format_time(self.average_stint),
        )
        for value in SHOT_VALUES:
            counts = self.shot_stats.get(shot_key(value), {})
            data[f"{shot_key(value)}_made"] = int(counts.get("made", 0))
            data[f"{shot_key(value)}_missed"] = int(counts.get("missed", 0))
        return data


@dataclass
class GameReport:
    """Read-only summary of a game, finished or in progress."""

    our_team_name: str
    rival_team_name: str
    our_score: int
    rival_score: int
    status: str
    quarter: int
    game_time: float
    real_substitutions: int
    total_substitutions: int
    substitutions_by_quarter: Dict[int, int]
    quintets_by_time: List[QuintetSummary]
    quintets_by_differential: List[QuintetSummary]
    player_stints: List[PlayerStintSummary]
    scores_by_quarter: Dict[int, Dict[str, int]] = field(default_factory=dict)
    lead_changes: int = 0
    ties: int = 0
    biggest_lead_us: int = 0
    biggest_lead_them: int = 0

    def to_dict(self) -> dict:
        return {
            "our_team_name": self.our_team_name,
            "rival_team_name": self.rival_team_name,
            "our_score": self.our_score,
            "rival_score": self.rival_score,
            "status": self.status,
            "quarter": self.quarter,
            "game_time": self.game_time,
            "game_time_display": format_time(self.game_time),
            "real_substitutions": self.real_substitutions,
            "total_substitutions": self.total_substitutions,
            "substitutions_by_quarter": {str(q): n for q, n in sorted(self.substitutions_by_quarter.items())},
            "quintets_by_time": [q.to_dict() for q in self.quintets_by_time],
            "quintets_by_differential": [q.to_dict() for q in self.quintets_by_differential],
            "player_stints": [p.to_dict() for p in self.player_stints],
            "scores_by_quarter": {str(q): dict(s) for q, s in sorted(self.scores_by_quarter.items())},
            "lead_changes": self.lead_changes,
            "ties": self.ties,
            "biggest_lead": {"us": self.biggest_lead_us, "them": self.biggest_lead_them},
        }

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """The quintet and player tables as DataFrames, keyed by table name."""
        quintet_columns = [
            "key", "player_ids", "player_names", "total_time", "points_scored",
            "points_allowed", "occurrences", "differential", "total_time_display",
        ]
        player_columns = [
            "player_id", "name", "number", "position", "stint_count", "total_time",
            "average_stint", "plus_minus", "points", "fouls", "stint_durations",
        ] + [f"{shot_key(v)}_{outcome}" for v in SHOT_VALUES for outcome in ("made", "missed")]
        return {
            "quintets_by_time": pd.DataFrame(
                [q.to_dict() for q in self.quintets_by_time], columns=quintet_columns
            ),
            "quintets_by_differential": pd.DataFrame(
                [q.to_dict() for q in self.quintets_by_differential], columns=quintet_columns
            ),
            "player_stints": pd.DataFrame(
                [p.to_dict() for p in self.player_stints], columns=player_columns
            ),
        }


def _snapshot_game_time(snapshot: dict) -> float:
    clock = snapshot["clock"]
    if "game_time" in clock:
        return float(clock["game_time"])
    # Older snapshots without the derived field
    config = snapshot.get("config") or {}
    quarter = int(clock["quarter"])
    regulation = int(config.get("regulation_quarters", 4))
    length_key = "overtime_length_seconds" if quarter > regulation else "quarter_length_seconds"
    period = float(config.get(length_key, 300.0 if quarter > regulation else 600.0))
    return float(clock.get("elapsed_before_quarter", 0.0)) + period - float(clock["remaining"])


def _interval_rows(snapshot: dict, now: float, our: int, rival: int) -> List[dict]:
    quintets = snapshot["quintets"]
    rows = [
        {
            "key": interval["key"],
            "player_ids": tuple(sorted(interval["player_ids"])),
            "duration": float(interval["duration"]),
            "points_scored": int(interval["points_scored"]),
            "points_allowed": int(interval["points_allowed"]),
        }
        for interval in quintets.get("intervals") or []
    ]
    current = quintets.get("open")
    if current:
        rows.append(
            {
                "key": current["key"],
                "player_ids": tuple(sorted(current["player_ids"])),
                "duration": max(0.0, now - float(current["start_time"])),
                "points_scored": our - int(current["start_our_score"]),
                "points_allowed": rival - int(current["start_rival_score"]),
            }
        )
    return rows


def summarize_quintets(rows: List[dict], names: Dict[int, str]) -> List[QuintetSummary]:
    """
    Group quintet intervals by key.

    Args:
        rows: Interval rows with key, player_ids, duration, points_scored, points_allowed
        names: Player id to name lookup

    Returns:
        One QuintetSummary per distinct five, in key order
    """
    if not rows:
        return []

    ids_by_key = {row["key"]: row["player_ids"] for row in rows}
    df = pd.DataFrame(rows, columns=_QUINTET_COLUMNS)
    grouped = (
        df.groupby("key", as_index=False)
        .agg(
            total_time=("duration", "sum"),
            points_scored=("points_scored", "sum"),
            points_allowed=("points_allowed", "sum"),
            occurrences=("duration", "size"),
        )
        .sort_values("key")
    )

    summaries = []
    for row in grouped.itertuples(index=False):
        player_ids = ids_by_key[row.key]
        summaries.append(
            QuintetSummary(
                key=row.key,
                player_ids=player_ids,
                player_names=tuple(names.get(pid, str(pid)) for pid in player_ids),
                total_time=float(row.total_time),
                points_scored=int(row.points_scored),
                points_allowed=int(row.points_allowed),
                occurrences=int(row.occurrences),
            )
        )
    return summaries


def _player_summaries(players: List[dict], now: float, our: int, rival: int) -> List[PlayerStintSummary]:
    summaries = []
    for row in players:
        position = row.get("position") or UNSELECTED_POSITION
        if position == UNSELECTED_POSITION:
            continue

        durations = [float(d) for d in row.get("stints") or []]
        plus_minus = sum(int(pm) for pm in row.get("stint_plus_minus") or [])
        start = row.get("current_stint_start")
        if start:
            durations.append(max(0.0, now - float(start["clock_time"])))
            plus_minus += (our - int(start["our_score"])) - (rival - int(start["rival_score"]))
        if not durations:
            continue

        summaries.append(
            PlayerStintSummary(
                player_id=int(row["id"]),
                name=row["name"],
                number=str(row.get("number", "")),
                position=position,
                stint_durations=durations,
                plus_minus=plus_minus,
                points=int(row.get("points", 0)),
                fouls=int(row.get("fouls", 0)),
                shot_stats={key: dict(counts) for key, counts in (row.get("shot_stats") or {}).items()},
            )
        )
    summaries.sort(key=lambda s: (-s.total_time, s.player_id))
    return summaries


def build_report(snapshot: dict) -> GameReport:
    """
    Summarize a snapshot without modifying it.

    Open stints and the open quintet are finalized virtually at the
    snapshot's game time, so in-progress games can be reported too.

    Args:
        snapshot: Snapshot dict produced by ``RotationEngine.to_snapshot``

    Returns:
        GameReport
    """
    missing = [k for k in ("game", "clock", "players", "quintets") if k not in snapshot]
    if missing:
        raise ReportInputError(f"Snapshot missing fields: {', '.join(missing)}")

    game = snapshot["game"]
    now = _snapshot_game_time(snapshot)
    our, rival = int(game["our_score"]), int(game["rival_score"])
    is_home = bool(game.get("is_home_team", True))
    home_name = game.get("home_team_name", "Home")
    away_name = game.get("away_team_name", "Away")

    names = {int(p["id"]): p["name"] for p in snapshot["players"]}
    quintets = summarize_quintets(_interval_rows(snapshot, now, our, rival), names)
    by_time = sorted(quintets, key=lambda q: (-q.total_time, q.key))
    by_differential = sorted(quintets, key=lambda q: (-q.differential, -q.total_time, q.key))

    subs_by_quarter = {int(q): int(n) for q, n in (game.get("substitutions_by_quarter") or {}).items()}
    biggest = game.get("biggest_lead") or {}

    report = GameReport(
        our_team_name=home_name if is_home else away_name,
        rival_team_name=away_name if is_home else home_name,
        our_score=our,
        rival_score=rival,
        status=game.get("status", "not_started"),
        quarter=int(snapshot["clock"]["quarter"]),
        game_time=now,
        real_substitutions=real_substitution_count(subs_by_quarter, game.get("opening_substitutions", 0)),
        total_substitutions=sum(subs_by_quarter.values()),
        substitutions_by_quarter=subs_by_quarter,
        quintets_by_time=by_time,
        quintets_by_differential=by_differential,
        player_stints=_player_summaries(snapshot["players"], now, our, rival),
        scores_by_quarter={
            int(q): {"us": int(s.get("us", 0)), "them": int(s.get("them", 0))}
            for q, s in (game.get("scores_by_quarter") or {}).items()
        },
        lead_changes=int(game.get("lead_changes", 0)),
        ties=int(game.get("ties", 0)),
        biggest_lead_us=int(biggest.get("us", 0)),
        biggest_lead_them=int(biggest.get("them", 0)),
    )
    logger.debug("Built report with %d quintets and %d players", len(quintets), len(report.player_stints))
    return report
