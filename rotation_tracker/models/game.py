"""Game-level state: score, status, substitution counts and score flow."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class GameStatus(Enum):
    """Lifecycle of a tracked game."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Side(Enum):
    """Which team a score belongs to."""
    US = "us"
    THEM = "them"


def _per_quarter(quarters: int, value) -> Dict[int, object]:
    return {q: value() for q in range(1, quarters + 1)}


@dataclass
class GameState:
    """
    Running totals for one game.

    ``substitutions_by_quarter`` counts every check-in, including the synthetic
    entries that establish the opening lineup; ``opening_substitutions`` records
    how many of those there were so reports can subtract them.
    """

    our_score: int = 0
    rival_score: int = 0
    is_home_team: bool = True
    home_team_name: str = "Home"
    away_team_name: str = "Away"
    status: GameStatus = GameStatus.NOT_STARTED
    substitutions_by_quarter: Dict[int, int] = field(default_factory=dict)
    opening_substitutions: int = 0

    # Score flow
    scores_by_quarter: Dict[int, Dict[str, int]] = field(default_factory=dict)
    lead_changes: int = 0
    ties: int = 0
    biggest_lead_us: int = 0
    biggest_lead_them: int = 0

    @classmethod
    def new(
        cls,
        quarters: int,
        is_home_team: bool = True,
        our_team_name: str = "Us",
        rival_team_name: str = "Rival",
    ) -> "GameState":
        """Fresh state with a counter slot for every playable quarter."""
        home, away = (our_team_name, rival_team_name) if is_home_team else (rival_team_name, our_team_name)
        return cls(
            is_home_team=is_home_team,
            home_team_name=home,
            away_team_name=away,
            substitutions_by_quarter=_per_quarter(quarters, int),
            scores_by_quarter=_per_quarter(quarters, lambda: {"us": 0, "them": 0}),
        )

    @property
    def our_team_name(self) -> str:
        return self.home_team_name if self.is_home_team else self.away_team_name

    @property
    def rival_team_name(self) -> str:
        return self.away_team_name if self.is_home_team else self.home_team_name

    @property
    def home_score(self) -> int:
        return self.our_score if self.is_home_team else self.rival_score

    @property
    def away_score(self) -> int:
        return self.rival_score if self.is_home_team else self.our_score

    @property
    def margin(self) -> int:
        return self.our_score - self.rival_score

    @property
    def total_substitutions(self) -> int:
        return sum(self.substitutions_by_quarter.values())

    def record_substitution(self, quarter: int) -> None:
        self.substitutions_by_quarter[quarter] = self.substitutions_by_quarter.get(quarter, 0) + 1

    def unrecord_substitution(self, quarter: int) -> None:
        self.substitutions_by_quarter[quarter] = max(0, self.substitutions_by_quarter.get(quarter, 0) - 1)

    def flow(self) -> Tuple[int, int, int, int]:
        """Lead changes, ties and biggest leads, in that order."""
        return (self.lead_changes, self.ties, self.biggest_lead_us, self.biggest_lead_them)

    def restore_flow(self, flow: Tuple[int, int, int, int]) -> None:
        self.lead_changes, self.ties, self.biggest_lead_us, self.biggest_lead_them = flow

    def to_dict(self) -> dict:
        """Convert to snapshot form (quarter keys become strings for JSON)."""
        return {
            "our_score": self.our_score,
            "rival_score": self.rival_score,
            "is_home_team": self.is_home_team,
            "home_team_name": self.home_team_name,
            "away_team_name": self.away_team_name,
            "status": self.status.value,
            "substitutions_by_quarter": {str(q): n for q, n in sorted(self.substitutions_by_quarter.items())},
            "opening_substitutions": self.opening_substitutions,
            "scores_by_quarter": {
                str(q): {"us": s["us"], "them": s["them"]}
                for q, s in sorted(self.scores_by_quarter.items())
            },
            "lead_changes": self.lead_changes,
            "ties": self.ties,
            "biggest_lead": {"us": self.biggest_lead_us, "them": self.biggest_lead_them},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        biggest = data.get("biggest_lead", {}) or {}
        return cls(
            our_score=int(data["our_score"]),
            rival_score=int(data["rival_score"]),
            is_home_team=bool(data.get("is_home_team", True)),
            home_team_name=data.get("home_team_name", "Home"),
            away_team_name=data.get("away_team_name", "Away"),
            status=GameStatus(data["status"]),
            substitutions_by_quarter={
                int(q): int(n) for q, n in (data.get("substitutions_by_quarter") or {}).items()
            },
            opening_substitutions=int(data.get("opening_substitutions", 0)),
            scores_by_quarter={
                int(q): {"us": int(s.get("us", 0)), "them": int(s.get("them", 0))}
                for q, s in (data.get("scores_by_quarter") or {}).items()
            },
            lead_changes=int(data.get("lead_changes", 0)),
            ties=int(data.get("ties", 0)),
            biggest_lead_us=int(biggest.get("us", 0)),
            biggest_lead_them=int(biggest.get("them", 0)),
        )


class EventKind(Enum):
    """Entries written to the game event log."""
    SCORE = "score"
    FOUL = "foul"
    SUB_IN = "sub_in"
    SUB_OUT = "sub_out"
    MISS = "miss"


FREE_THROW = "free_throw"


@dataclass(frozen=True)
class GameEvent:
    """One line of the play-by-play log, stamped with the lineup on court."""

    kind: EventKind
    quarter: int
    game_time: float
    player_id: Optional[int] = None
    side: Optional[str] = None
    value: int = 0
    lineup: Tuple[int, ...] = ()
    play_type: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "quarter": self.quarter,
            "game_time": self.game_time,
            "player_id": self.player_id,
            "side": self.side,
            "value": self.value,
            "lineup": list(self.lineup),
            "play_type": self.play_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameEvent":
        player_id = data.get("player_id")
        return cls(
            kind=EventKind(data["kind"]),
            quarter=int(data["quarter"]),
            game_time=float(data["game_time"]),
            player_id=int(player_id) if player_id is not None else None,
            side=data.get("side"),
            value=int(data.get("value", 0)),
            lineup=tuple(int(pid) for pid in data.get("lineup") or []),
            play_type=data.get("play_type"),
        )
