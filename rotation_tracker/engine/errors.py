"""Errors raised by the rotation engine.

Inside the engine these are raised during validation; ``RotationEngine.apply``
turns them into failed ``ActionResult`` values so callers never see them,
except ``MalformedSnapshot`` which refuses rehydration outright.
"""

from typing import List, Optional


class EngineError(ValueError):
    """Base class for rejected engine operations."""

    code = "ENGINE_ERROR"


class InvalidSubstitution(EngineError):
    code = "INVALID_SUBSTITUTION"


class InvalidQuarterAdvance(EngineError):
    code = "INVALID_QUARTER_ADVANCE"


class InvalidScore(EngineError):
    code = "INVALID_SCORE"


class InvalidFoul(EngineError):
    code = "INVALID_FOUL"


class InvalidEdit(EngineError):
    code = "INVALID_EDIT"


class InvalidShot(EngineError):
    code = "INVALID_SHOT"


class InvalidUndo(EngineError):
    """The recorded inverse no longer fits the live state."""

    code = "INVALID_UNDO"


class UnknownPlayer(EngineError):
    code = "UNKNOWN_PLAYER"


class GameNotInProgress(EngineError):
    code = "GAME_NOT_IN_PROGRESS"


class EngineClosed(EngineError):
    code = "ENGINE_CLOSED"


class MalformedSnapshot(EngineError):
    """Snapshot failed consistency checks; the engine will not start from it."""

    code = "MALFORMED_SNAPSHOT"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "Malformed snapshot:\n" + "\n".join(self.errors))


# Advisory codes (reported on results, never raised)
EMPTY_UNDO_HISTORY = "EMPTY_UNDO_HISTORY"
FOUL_OUT = "FOUL_OUT"
FOUL_TROUBLE = "FOUL_TROUBLE"
