"""Quintet (five-player unit) interval models."""

from dataclasses import dataclass
from typing import Iterable, Tuple


def canonical_ids(player_ids: Iterable[int]) -> Tuple[int, ...]:
    """Sorted, order-independent form of a lineup."""
    return tuple(sorted(int(pid) for pid in player_ids))


def quintet_key(player_ids: Iterable[int]) -> str:
    """Key shared by every interval of the same five players, e.g. ``1-2-3-4-6``."""
    return "-".join(str(pid) for pid in canonical_ids(player_ids))


@dataclass(frozen=True)
class QuintetInterval:
    """A closed interval during which one five-player unit held the court."""

    key: str
    player_ids: Tuple[int, ...]
    duration: float
    points_scored: int
    points_allowed: int
    quarter: int

    @property
    def differential(self) -> int:
        return self.points_scored - self.points_allowed

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "player_ids": list(self.player_ids),
            "duration": self.duration,
            "points_scored": self.points_scored,
            "points_allowed": self.points_allowed,
            "quarter": self.quarter,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuintetInterval":
        return cls(
            key=data["key"],
            player_ids=canonical_ids(data["player_ids"]),
            duration=float(data["duration"]),
            points_scored=int(data["points_scored"]),
            points_allowed=int(data["points_allowed"]),
            quarter=int(data.get("quarter", 1)),
        )


@dataclass(frozen=True)
class OpenQuintet:
    """
    The interval currently accruing for the five players on court.

    Scores are not attributed as they happen; the deltas against the scores
    captured here are read when the interval closes.
    """

    key: str
    player_ids: Tuple[int, ...]
    start_time: float
    start_our_score: int
    start_rival_score: int
    quarter: int

    @classmethod
    def from_lineup(
        cls,
        player_ids: Iterable[int],
        start_time: float,
        our_score: int,
        rival_score: int,
        quarter: int,
    ) -> "OpenQuintet":
        ids = canonical_ids(player_ids)
        return cls(
            key=quintet_key(ids),
            player_ids=ids,
            start_time=start_time,
            start_our_score=our_score,
            start_rival_score=rival_score,
            quarter=quarter,
        )

    def elapsed(self, now: float) -> float:
        return max(0.0, now - self.start_time)

    def close(self, now: float, our_score: int, rival_score: int) -> QuintetInterval:
        """Build the closed interval as of ``now`` (does not mutate anything)."""
        return QuintetInterval(
            key=self.key,
            player_ids=self.player_ids,
            duration=self.elapsed(now),
            points_scored=our_score - self.start_our_score,
            points_allowed=rival_score - self.start_rival_score,
            quarter=self.quarter,
        )

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "player_ids": list(self.player_ids),
            "start_time": self.start_time,
            "start_our_score": self.start_our_score,
            "start_rival_score": self.start_rival_score,
            "quarter": self.quarter,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OpenQuintet":
        return cls(
            key=data["key"],
            player_ids=canonical_ids(data["player_ids"]),
            start_time=float(data["start_time"]),
            start_our_score=int(data["start_our_score"]),
            start_rival_score=int(data["start_rival_score"]),
            quarter=int(data.get("quarter", 1)),
        )
