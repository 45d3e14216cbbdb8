"""Undo history: a stack of applied action records."""

from typing import Dict, Iterable, List, Optional, Type

from .actions import (
    ActionRecord,
    FoulAdded,
    FoulRemoved,
    FreeThrowsRecorded,
    ManualEdit,
    MissRecorded,
    QuarterAdvanced,
    ScoreChange,
    Substitute,
)

RECORD_TYPES: Dict[str, Type] = {
    record_type.kind: record_type
    for record_type in (
        Substitute,
        ScoreChange,
        FoulAdded,
        FoulRemoved,
        MissRecorded,
        FreeThrowsRecorded,
        QuarterAdvanced,
        ManualEdit,
    )
}

KNOWN_ACTION_KINDS = frozenset(RECORD_TYPES)


def record_from_dict(data: dict) -> ActionRecord:
    kind = data.get("kind")
    record_type = RECORD_TYPES.get(kind)
    if record_type is None:
        raise ValueError(f"Unknown action kind: {kind!r}")
    return record_type.from_dict(data)


class ActionHistory:
    """Single-step, chained undo stack. There is no redo."""

    def __init__(self, records: Optional[Iterable[ActionRecord]] = None):
        self._records: List[ActionRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def push(self, record: ActionRecord) -> None:
        self._records.append(record)

    def pop(self) -> Optional[ActionRecord]:
        return self._records.pop() if self._records else None

    def peek(self) -> Optional[ActionRecord]:
        return self._records[-1] if self._records else None

    def to_list(self) -> List[dict]:
        return [record.to_dict() for record in self._records]

    @classmethod
    def from_list(cls, data: Iterable[dict]) -> "ActionHistory":
        return cls(record_from_dict(item) for item in data)
