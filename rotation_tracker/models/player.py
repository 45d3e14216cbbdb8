"""Player model with stint bookkeeping for rotation tracking."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


UNSELECTED_POSITION = "Unselected"


class FoulStatus(Enum):
    """Foul trouble level relative to the current quarter."""
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


# Highest foul count that is still "safe" in each quarter; later quarters use the Q3 value.
_SAFE_FOULS_BY_QUARTER = {1: 0, 2: 1, 3: 2}


def foul_status(fouls: int, quarter: int) -> FoulStatus:
    """
    Classify a player's foul count for the given quarter.

    One foul above the safe ceiling is a warning, anything higher is danger.

    Args:
        fouls: Personal fouls committed so far
        quarter: Current quarter (1-based, overtime periods > 4)

    Returns:
        FoulStatus for the player
    """
    safe_max = _SAFE_FOULS_BY_QUARTER.get(quarter, 2)
    if fouls <= safe_max:
        return FoulStatus.SAFE
    if fouls == safe_max + 1:
        return FoulStatus.WARNING
    return FoulStatus.DANGER


class TimeStatus(Enum):
    """Traffic-light rating of a stint on court or a rest on the bench."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def court_time_status(seconds: float, green_limit: float, yellow_limit: float) -> TimeStatus:
    """Fresh players are green; red once the current stint reaches ``yellow_limit``."""
    if seconds < green_limit:
        return TimeStatus.GREEN
    if seconds < yellow_limit:
        return TimeStatus.YELLOW
    return TimeStatus.RED


def bench_time_status(seconds: Optional[float], red_limit: float, yellow_limit: float) -> TimeStatus:
    """
    Rate how rested a bench player is.

    A short rest is red and a long one green. ``None`` means the player has not
    left the court yet, which never blocks them from coming in.
    """
    if seconds is None:
        return TimeStatus.GREEN
    if seconds < red_limit:
        return TimeStatus.RED
    if seconds < yellow_limit:
        return TimeStatus.YELLOW
    return TimeStatus.GREEN


SHOT_VALUES = (1, 2, 3)


def shot_key(value: int) -> str:
    return f"pts{value}"


@dataclass(frozen=True)
class StintStart:
    """Score and game time captured when a player checks in."""

    our_score: int
    rival_score: int
    clock_time: float

    def to_dict(self) -> dict:
        return {
            "our_score": self.our_score,
            "rival_score": self.rival_score,
            "clock_time": self.clock_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StintStart":
        return cls(
            our_score=int(data["our_score"]),
            rival_score=int(data["rival_score"]),
            clock_time=float(data["clock_time"]),
        )


@dataclass(frozen=True)
class StintRecord:
    """A completed stint: seconds on court paired with the plus/minus accrued."""

    duration: float
    plus_minus: int


@dataclass
class Player:
    """
    A roster player tracked during a single game.

    ``player_id`` is assigned from roster order when the game is created and is
    only stable within that game. Completed stints are kept as paired records so
    durations and plus/minus values can never drift out of alignment.
    """

    player_id: int
    name: str
    number: str = ""
    position: str = UNSELECTED_POSITION
    secondary_positions: List[str] = field(default_factory=list)

    # Live state
    on_court: bool = False
    points: int = 0
    fouls: int = 0
    current_stint_start: Optional[StintStart] = None
    stints: List[StintRecord] = field(default_factory=list)
    # Made and missed attempts keyed by shot value, e.g. {"pts2": {"made": 3, "missed": 1}}
    shot_stats: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """Display label, e.g. ``#7 Ana``."""
        return f"#{self.number} {self.name}"

    @property
    def has_selected_position(self) -> bool:
        return bool(self.position) and self.position != UNSELECTED_POSITION

    @property
    def stint_durations(self) -> List[float]:
        return [stint.duration for stint in self.stints]

    @property
    def stint_plus_minus(self) -> List[int]:
        return [stint.plus_minus for stint in self.stints]

    @property
    def missed_shots(self) -> int:
        return sum(counts.get("missed", 0) for counts in self.shot_stats.values())

    def shot_counts(self, value: int) -> Dict[str, int]:
        counts = self.shot_stats.get(shot_key(value), {})
        return {"made": counts.get("made", 0), "missed": counts.get("missed", 0)}

    def add_shots(self, value: int, made: int = 0, missed: int = 0) -> None:
        """Adjust the made/missed counters for one shot value (negative to revert)."""
        counts = self.shot_counts(value)
        counts["made"] += made
        counts["missed"] += missed
        if counts["made"] < 0 or counts["missed"] < 0:
            raise ValueError(f"{self.label}: shot counts for {shot_key(value)} would go negative")
        if counts["made"] or counts["missed"]:
            self.shot_stats[shot_key(value)] = counts
        else:
            self.shot_stats.pop(shot_key(value), None)

    def current_seconds(self, now: float) -> float:
        """Seconds elapsed in the open stint (0 when on the bench)."""
        if self.current_stint_start is None:
            return 0.0
        return max(0.0, now - self.current_stint_start.clock_time)

    def to_dict(self) -> dict:
        """Convert player to its snapshot representation."""
        return {
            "id": self.player_id,
            "name": self.name,
            "number": self.number,
            "position": self.position,
            "secondary_positions": list(self.secondary_positions),
            "on_court": self.on_court,
            "points": self.points,
            "fouls": self.fouls,
            "current_stint_start": (
                self.current_stint_start.to_dict() if self.current_stint_start else None
            ),
            "stints": self.stint_durations,
            "stint_plus_minus": self.stint_plus_minus,
            "shot_stats": {key: dict(counts) for key, counts in sorted(self.shot_stats.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """Create player from its snapshot representation."""
        durations = data.get("stints", [])
        plus_minus = data.get("stint_plus_minus", [])
        if len(durations) != len(plus_minus):
            raise ValueError(
                f"Player {data.get('id')}: {len(durations)} stints but {len(plus_minus)} plus/minus values"
            )

        start = data.get("current_stint_start")
        return cls(
            player_id=int(data["id"]),
            name=data["name"],
            number=str(data.get("number", "")),
            position=data.get("position") or UNSELECTED_POSITION,
            secondary_positions=list(data.get("secondary_positions") or []),
            on_court=bool(data.get("on_court", False)),
            points=int(data.get("points", 0)),
            fouls=int(data.get("fouls", 0)),
            current_stint_start=StintStart.from_dict(start) if start else None,
            stints=[
                StintRecord(duration=float(d), plus_minus=int(pm))
                for d, pm in zip(durations, plus_minus)
            ],
            shot_stats={
                str(key): {"made": int(counts.get("made", 0)), "missed": int(counts.get("missed", 0))}
                for key, counts in (data.get("shot_stats") or {}).items()
            },
        )

    @classmethod
    def from_roster_entry(cls, player_id: int, entry: Dict) -> "Player":
        """Seed a fresh game player from a roster entry (no live state)."""
        return cls(
            player_id=player_id,
            name=entry["name"],
            number=str(entry.get("number", "")),
            position=entry.get("position") or UNSELECTED_POSITION,
            secondary_positions=list(entry.get("secondary_positions") or []),
        )
