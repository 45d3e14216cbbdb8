"""Engine configuration."""

from dataclasses import asdict, dataclass, fields


@dataclass
class EngineConfig:
    """Configuration for a tracked game."""

    quarter_length_seconds: float = 600.0
    overtime_length_seconds: float = 300.0
    regulation_quarters: int = 4
    max_quarters: int = 4  # raise above regulation_quarters to allow overtime periods
    court_size: int = 5
    foul_limit: int = 5
    max_points_per_action: int = 3
    max_free_throws: int = 3

    # Stint length (seconds on court) at which a player turns yellow, then red
    court_green_seconds: float = 180.0
    court_yellow_seconds: float = 270.0
    # Rest length (seconds on the bench) below which a player is still red, then yellow
    bench_red_seconds: float = 180.0
    bench_yellow_seconds: float = 270.0

    def __post_init__(self):
        if self.quarter_length_seconds <= 0 or self.overtime_length_seconds <= 0:
            raise ValueError("Period lengths must be positive")
        if self.regulation_quarters < 1:
            raise ValueError(f"regulation_quarters must be >= 1, got {self.regulation_quarters}")
        if self.max_quarters < self.regulation_quarters:
            raise ValueError(
                f"max_quarters ({self.max_quarters}) must be >= regulation_quarters ({self.regulation_quarters})"
            )
        if self.court_size < 1:
            raise ValueError(f"court_size must be positive, got {self.court_size}")
        if self.foul_limit < 1:
            raise ValueError(f"foul_limit must be positive, got {self.foul_limit}")
        if self.max_points_per_action < 1:
            raise ValueError(f"max_points_per_action must be positive, got {self.max_points_per_action}")
        if self.max_free_throws < 1:
            raise ValueError(f"max_free_throws must be positive, got {self.max_free_throws}")
        if not 0 < self.court_green_seconds <= self.court_yellow_seconds:
            raise ValueError("Court time thresholds must be positive and ordered green <= yellow")
        if not 0 < self.bench_red_seconds <= self.bench_yellow_seconds:
            raise ValueError("Bench time thresholds must be positive and ordered red <= yellow")

    def period_length(self, quarter: int) -> float:
        """Length in seconds of a regulation quarter or overtime period."""
        if quarter > self.regulation_quarters:
            return float(self.overtime_length_seconds)
        return float(self.quarter_length_seconds)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
