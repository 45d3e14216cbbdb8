"""Quintet ledger: intervals during which a specific five held the court."""

from typing import Iterable, List, Optional

from ..models.quintet import OpenQuintet, QuintetInterval, canonical_ids


class QuintetLedger:
    """Closed intervals in order, plus at most one open interval."""

    def __init__(
        self,
        court_size: int = 5,
        intervals: Optional[List[QuintetInterval]] = None,
        current: Optional[OpenQuintet] = None,
    ):
        self.court_size = court_size
        self.intervals: List[QuintetInterval] = list(intervals or [])
        self.current: Optional[OpenQuintet] = current

    @property
    def current_key(self) -> Optional[str]:
        return self.current.key if self.current else None

    def open(
        self,
        player_ids: Iterable[int],
        now: float,
        our_score: int,
        rival_score: int,
        quarter: int,
    ) -> OpenQuintet:
        ids = canonical_ids(player_ids)
        if len(set(ids)) != self.court_size:
            raise ValueError(f"A quintet needs {self.court_size} distinct players, got {list(ids)}")
        if self.current is not None:
            raise ValueError(f"Quintet {self.current.key} is still open")
        self.current = OpenQuintet.from_lineup(ids, now, our_score, rival_score, quarter)
        return self.current

    def close(self, now: float, our_score: int, rival_score: int) -> Optional[QuintetInterval]:
        """Close the open interval (if any) against the current time and score."""
        if self.current is None:
            return None
        interval = self.current.close(now, our_score, rival_score)
        self.intervals.append(interval)
        self.current = None
        return interval

    def discard_open(self) -> Optional[OpenQuintet]:
        discarded, self.current = self.current, None
        return discarded

    def pop_closed(self) -> QuintetInterval:
        if not self.intervals:
            raise ValueError("No closed quintet interval to remove")
        return self.intervals.pop()

    def restore_open(self, quintet: OpenQuintet) -> None:
        if self.current is not None:
            raise ValueError(f"Quintet {self.current.key} is still open")
        self.current = quintet

    def total_time(self, now: float) -> float:
        """Closed durations plus the open interval's elapsed time."""
        total = sum(interval.duration for interval in self.intervals)
        if self.current is not None:
            total += self.current.elapsed(now)
        return total
