"""Action requests, undo records and results.

Requests describe what the caller wants to happen. Records are pushed to the
history once a request has been applied and carry exactly the pre-state needed
to revert it.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from ..models.game import Side
from ..models.player import StintStart
from ..models.quintet import OpenQuintet
from .clock import ClockState


# Requests

@dataclass(frozen=True)
class Substitution:
    kind: ClassVar[str] = "substitute"

    outgoing_id: int
    incoming_id: int


@dataclass(frozen=True)
class PointsScored:
    kind: ClassVar[str] = "points"

    side: Union[Side, str]
    amount: int
    player_id: Optional[int] = None


@dataclass(frozen=True)
class FoulCommitted:
    kind: ClassVar[str] = "foul"

    player_id: int


@dataclass(frozen=True)
class ShotMissed:
    kind: ClassVar[str] = "miss"

    player_id: int
    value: int


@dataclass(frozen=True)
class FreeThrows:
    kind: ClassVar[str] = "free_throws"

    player_id: int
    attempts: int
    made: int


@dataclass(frozen=True)
class FoulCorrection:
    kind: ClassVar[str] = "remove_foul"

    player_id: int


@dataclass(frozen=True)
class AdvanceQuarter:
    kind: ClassVar[str] = "advance_quarter"


@dataclass(frozen=True)
class EditPlayer:
    kind: ClassVar[str] = "edit"

    player_id: int
    changes: Dict[str, Any] = field(default_factory=dict)


# Undo records

def _optional_quintet(data: Optional[dict]) -> Optional[OpenQuintet]:
    return OpenQuintet.from_dict(data) if data else None


@dataclass(frozen=True)
class Substitute:
    kind: ClassVar[str] = "substitute"
    events_written: ClassVar[int] = 2

    outgoing_id: int
    incoming_id: int
    quarter: int
    outgoing_start: StintStart
    previous_quintet: Optional[OpenQuintet]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "outgoing_id": self.outgoing_id,
            "incoming_id": self.incoming_id,
            "quarter": self.quarter,
            "outgoing_start": self.outgoing_start.to_dict(),
            "previous_quintet": self.previous_quintet.to_dict() if self.previous_quintet else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Substitute":
        return cls(
            outgoing_id=int(data["outgoing_id"]),
            incoming_id=int(data["incoming_id"]),
            quarter=int(data["quarter"]),
            outgoing_start=StintStart.from_dict(data["outgoing_start"]),
            previous_quintet=_optional_quintet(data.get("previous_quintet")),
        )


@dataclass(frozen=True)
class ScoreChange:
    kind: ClassVar[str] = "score_change"
    events_written: ClassVar[int] = 1

    side: Side
    amount: int
    quarter: int
    previous_flow: Tuple[int, int, int, int]
    player_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "side": self.side.value,
            "amount": self.amount,
            "quarter": self.quarter,
            "previous_flow": list(self.previous_flow),
            "player_id": self.player_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreChange":
        player_id = data.get("player_id")
        return cls(
            side=Side(data["side"]),
            amount=int(data["amount"]),
            quarter=int(data["quarter"]),
            previous_flow=tuple(int(v) for v in data["previous_flow"]),
            player_id=int(player_id) if player_id is not None else None,
        )


@dataclass(frozen=True)
class FoulAdded:
    kind: ClassVar[str] = "foul_added"
    events_written: ClassVar[int] = 1

    player_id: int
    previous_fouls: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "player_id": self.player_id, "previous_fouls": self.previous_fouls}

    @classmethod
    def from_dict(cls, data: dict) -> "FoulAdded":
        return cls(player_id=int(data["player_id"]), previous_fouls=int(data["previous_fouls"]))


@dataclass(frozen=True)
class FoulRemoved:
    kind: ClassVar[str] = "foul_removed"
    events_written: ClassVar[int] = 0

    player_id: int
    previous_fouls: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "player_id": self.player_id, "previous_fouls": self.previous_fouls}

    @classmethod
    def from_dict(cls, data: dict) -> "FoulRemoved":
        return cls(player_id=int(data["player_id"]), previous_fouls=int(data["previous_fouls"]))


@dataclass(frozen=True)
class MissRecorded:
    kind: ClassVar[str] = "miss_recorded"
    events_written: ClassVar[int] = 1

    player_id: int
    value: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "player_id": self.player_id, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "MissRecorded":
        return cls(player_id=int(data["player_id"]), value=int(data["value"]))


@dataclass(frozen=True)
class FreeThrowsRecorded:
    """A whole free-throw trip, undone as one action."""

    kind: ClassVar[str] = "free_throws_recorded"

    player_id: int
    made: int
    missed: int
    quarter: int
    previous_flow: Tuple[int, int, int, int]

    @property
    def events_written(self) -> int:
        # one event per attempt
        return self.made + self.missed

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "player_id": self.player_id,
            "made": self.made,
            "missed": self.missed,
            "quarter": self.quarter,
            "previous_flow": list(self.previous_flow),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FreeThrowsRecorded":
        return cls(
            player_id=int(data["player_id"]),
            made=int(data["made"]),
            missed=int(data["missed"]),
            quarter=int(data["quarter"]),
            previous_flow=tuple(int(v) for v in data["previous_flow"]),
        )


@dataclass(frozen=True)
class QuarterAdvanced:
    kind: ClassVar[str] = "quarter_advanced"
    events_written: ClassVar[int] = 0

    previous_clock: ClockState
    previous_quintet: Optional[OpenQuintet]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "previous_clock": self.previous_clock.to_dict(),
            "previous_quintet": self.previous_quintet.to_dict() if self.previous_quintet else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuarterAdvanced":
        return cls(
            previous_clock=ClockState.from_dict(data["previous_clock"]),
            previous_quintet=_optional_quintet(data.get("previous_quintet")),
        )


@dataclass(frozen=True)
class ManualEdit:
    kind: ClassVar[str] = "manual_edit"
    events_written: ClassVar[int] = 0

    player_id: int
    previous: Dict[str, Any]
    changes: Dict[str, Any]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "player_id": self.player_id,
            "previous": copy.deepcopy(self.previous),
            "changes": copy.deepcopy(self.changes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ManualEdit":
        return cls(
            player_id=int(data["player_id"]),
            previous=copy.deepcopy(data["previous"]),
            changes=copy.deepcopy(data["changes"]),
        )


ActionRecord = Union[
    Substitute, ScoreChange, FoulAdded, FoulRemoved, MissRecorded, FreeThrowsRecorded, QuarterAdvanced, ManualEdit
]


@dataclass
class ActionResult:
    """Outcome of an engine operation. Failures leave the engine unchanged."""

    ok: bool
    action: str
    advisories: List[str] = field(default_factory=list)
    error: Optional[str] = None
    message: str = ""

    @classmethod
    def success(cls, action: str, advisories: Optional[List[str]] = None, message: str = "") -> "ActionResult":
        return cls(ok=True, action=action, advisories=list(advisories or []), message=message)

    @classmethod
    def failure(cls, action: str, error: Exception) -> "ActionResult":
        return cls(ok=False, action=action, error=getattr(error, "code", type(error).__name__), message=str(error))
