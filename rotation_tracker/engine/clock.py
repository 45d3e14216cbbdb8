"""Game clock: per-quarter countdown plus a running total of game time."""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .config import EngineConfig
from .errors import InvalidQuarterAdvance

logger = logging.getLogger(__name__)


@dataclass
class ClockState:
    """Serializable clock position."""

    quarter: int = 1
    remaining: float = 600.0
    elapsed_before_quarter: float = 0.0
    running: bool = False

    def to_dict(self) -> dict:
        return {
            "quarter": self.quarter,
            "remaining": self.remaining,
            "elapsed_before_quarter": self.elapsed_before_quarter,
            "running": self.running,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClockState":
        return cls(
            quarter=int(data["quarter"]),
            remaining=float(data["remaining"]),
            elapsed_before_quarter=float(data.get("elapsed_before_quarter", 0.0)),
            running=bool(data.get("running", False)),
        )


class GameClock:
    """
    Countdown clock for quarters and overtime periods.

    ``game_time`` only ever grows: it is the total number of seconds played
    across all periods, and is the time base for stints and quintet intervals.
    Advancing the quarter does not close any interval; the engine decides that.
    """

    def __init__(self, config: Optional[EngineConfig] = None, state: Optional[ClockState] = None):
        self.config = config or EngineConfig()
        self._state = state or ClockState(remaining=self.config.period_length(1))

    @property
    def quarter(self) -> int:
        return self._state.quarter

    @property
    def remaining(self) -> float:
        return self._state.remaining

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def period_length(self) -> float:
        return self.config.period_length(self._state.quarter)

    @property
    def quarter_elapsed(self) -> float:
        return self.period_length - self._state.remaining

    @property
    def game_time(self) -> float:
        """Seconds played since tip-off."""
        return self._state.elapsed_before_quarter + self.quarter_elapsed

    @property
    def expired(self) -> bool:
        return self._state.remaining <= 0

    def start_quarter(self) -> None:
        """Start the clock for the current quarter."""
        if self.quarter_elapsed == 0:
            logger.info("Quarter %d started", self._state.quarter)
        self.resume()

    def pause(self) -> None:
        self._state.running = False

    def resume(self) -> None:
        # An expired quarter stays stopped until it is advanced.
        if not self.expired:
            self._state.running = True

    def tick(self, delta_seconds: float) -> float:
        """
        Run the clock forward.

        Args:
            delta_seconds: Wall-clock seconds since the previous tick

        Returns:
            Seconds actually taken off the clock (0 while paused)
        """
        if delta_seconds < 0:
            raise ValueError(f"Cannot tick backwards: {delta_seconds}")
        if not self._state.running:
            return 0.0

        applied = min(float(delta_seconds), self._state.remaining)
        self._state.remaining -= applied
        if self._state.remaining <= 0:
            self._state.remaining = 0.0
            self._state.running = False
            logger.info("End of quarter %d", self._state.quarter)
        return applied

    def can_advance(self) -> bool:
        return self._state.quarter < self.config.max_quarters

    def advance_quarter(self) -> None:
        """Move to the next quarter with a full, stopped clock."""
        if not self.can_advance():
            raise InvalidQuarterAdvance(
                f"Cannot advance past quarter {self.config.max_quarters}"
            )
        played = self.quarter_elapsed
        self._state.elapsed_before_quarter += played
        self._state.quarter += 1
        self._state.remaining = self.config.period_length(self._state.quarter)
        self._state.running = False

    def snapshot(self) -> ClockState:
        return replace(self._state)

    def restore(self, state: ClockState) -> None:
        self._state = replace(state)
