"""Snapshot codec: engine parts to and from a JSON-compatible dict."""

import copy
import logging
from dataclasses import dataclass, field
from typing import List

from ..data.validators import SNAPSHOT_SCHEMA_VERSION, validate_snapshot
from ..models.game import GameEvent, GameState
from ..models.player import Player
from ..models.quintet import OpenQuintet, QuintetInterval
from .clock import ClockState, GameClock
from .config import EngineConfig
from .errors import MalformedSnapshot
from .history import KNOWN_ACTION_KINDS, ActionHistory
from .quintets import QuintetLedger
from .roster import RosterStore

logger = logging.getLogger(__name__)


@dataclass
class GameParts:
    """Everything a rotation engine is built from."""

    config: EngineConfig
    game: GameState
    clock: GameClock
    roster: RosterStore
    quintets: QuintetLedger
    history: ActionHistory = field(default_factory=ActionHistory)
    event_log: List[GameEvent] = field(default_factory=list)


class SnapshotCodec:
    """Encodes engine state to snapshots and rebuilds it from them."""

    @staticmethod
    def encode(parts: GameParts) -> dict:
        """
        Build an independent, JSON-compatible snapshot.

        Args:
            parts: Live engine parts

        Returns:
            Snapshot dict that shares no mutable state with ``parts``
        """
        clock = parts.clock.snapshot().to_dict()
        clock["game_time"] = parts.clock.game_time
        snapshot = {
            "schema_version": SNAPSHOT_SCHEMA_VERSION,
            "config": parts.config.to_dict(),
            "game": parts.game.to_dict(),
            "clock": clock,
            "players": [player.to_dict() for player in parts.roster],
            "quintets": {
                "intervals": [interval.to_dict() for interval in parts.quintets.intervals],
                "open": parts.quintets.current.to_dict() if parts.quintets.current else None,
            },
            "event_log": [event.to_dict() for event in parts.event_log],
            "history": parts.history.to_list(),
        }
        return copy.deepcopy(snapshot)

    @staticmethod
    def decode(snapshot: dict) -> GameParts:
        """
        Validate a snapshot and rebuild engine parts from it.

        Raises:
            MalformedSnapshot: If any consistency check fails
        """
        try:
            errors = validate_snapshot(snapshot, known_action_kinds=KNOWN_ACTION_KINDS)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            errors = [f"snapshot could not be checked: {e}"]
        if errors:
            logger.warning("Refusing malformed snapshot (%d errors)", len(errors))
            raise MalformedSnapshot(errors)

        try:
            config = EngineConfig.from_dict(snapshot["config"])
            quintets = snapshot["quintets"]
            current = quintets.get("open")
            return GameParts(
                config=config,
                game=GameState.from_dict(snapshot["game"]),
                clock=GameClock(config, ClockState.from_dict(snapshot["clock"])),
                roster=RosterStore(
                    [Player.from_dict(row) for row in snapshot["players"]],
                    court_size=config.court_size,
                ),
                quintets=QuintetLedger(
                    court_size=config.court_size,
                    intervals=[QuintetInterval.from_dict(row) for row in quintets["intervals"]],
                    current=OpenQuintet.from_dict(current) if current else None,
                ),
                history=ActionHistory.from_list(snapshot["history"]),
                event_log=[GameEvent.from_dict(row) for row in snapshot["event_log"]],
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedSnapshot([str(e)]) from e
