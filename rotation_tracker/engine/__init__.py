"""Rotation engine: substitutions, stints, quintets, score and undo."""

from .actions import (
    ActionResult,
    AdvanceQuarter,
    EditPlayer,
    FoulCommitted,
    FoulCorrection,
    FreeThrows,
    PointsScored,
    ShotMissed,
    Substitution,
)
from .clock import ClockState, GameClock
from .config import EngineConfig
from .engine import RotationEngine
from .errors import (
    EMPTY_UNDO_HISTORY,
    FOUL_OUT,
    FOUL_TROUBLE,
    EngineClosed,
    EngineError,
    GameNotInProgress,
    InvalidEdit,
    InvalidFoul,
    InvalidQuarterAdvance,
    InvalidScore,
    InvalidShot,
    InvalidSubstitution,
    InvalidUndo,
    MalformedSnapshot,
    UnknownPlayer,
)
from .recommendations import SubstitutionRecommendation, recommend_substitutions
from .snapshot import SnapshotCodec

__all__ = [
    "ActionResult",
    "AdvanceQuarter",
    "ClockState",
    "EMPTY_UNDO_HISTORY",
    "EditPlayer",
    "EngineClosed",
    "EngineConfig",
    "EngineError",
    "FOUL_OUT",
    "FOUL_TROUBLE",
    "FoulCommitted",
    "FoulCorrection",
    "FreeThrows",
    "GameClock",
    "GameNotInProgress",
    "InvalidEdit",
    "InvalidFoul",
    "InvalidQuarterAdvance",
    "InvalidScore",
    "InvalidShot",
    "InvalidSubstitution",
    "InvalidUndo",
    "MalformedSnapshot",
    "PointsScored",
    "RotationEngine",
    "ShotMissed",
    "SnapshotCodec",
    "Substitution",
    "SubstitutionRecommendation",
    "UnknownPlayer",
    "recommend_substitutions",
]
