"""Data models for players, quintets and game state."""

from .game import FREE_THROW, EventKind, GameEvent, GameState, GameStatus, Side
from .player import (
    SHOT_VALUES,
    UNSELECTED_POSITION,
    FoulStatus,
    Player,
    StintRecord,
    StintStart,
    TimeStatus,
    bench_time_status,
    court_time_status,
    foul_status,
    shot_key,
)
from .quintet import OpenQuintet, QuintetInterval, canonical_ids, quintet_key

__all__ = [
    "EventKind",
    "FREE_THROW",
    "FoulStatus",
    "GameEvent",
    "GameState",
    "GameStatus",
    "OpenQuintet",
    "Player",
    "QuintetInterval",
    "SHOT_VALUES",
    "Side",
    "StintRecord",
    "StintStart",
    "TimeStatus",
    "UNSELECTED_POSITION",
    "bench_time_status",
    "canonical_ids",
    "court_time_status",
    "foul_status",
    "quintet_key",
    "shot_key",
]
