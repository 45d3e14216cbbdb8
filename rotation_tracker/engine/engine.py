"""Rotation engine: the single writer for a tracked game."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..models.game import FREE_THROW, EventKind, GameEvent, GameState, GameStatus, Side
from ..models.player import FoulStatus, Player, TimeStatus, bench_time_status, court_time_status, foul_status
from .actions import (
    ActionRecord,
    ActionResult,
    AdvanceQuarter,
    EditPlayer,
    FoulAdded,
    FoulCommitted,
    FoulCorrection,
    FoulRemoved,
    FreeThrows,
    FreeThrowsRecorded,
    ManualEdit,
    MissRecorded,
    PointsScored,
    QuarterAdvanced,
    ScoreChange,
    ShotMissed,
    Substitute,
    Substitution,
)
from .clock import GameClock
from .config import EngineConfig
from .errors import (
    EMPTY_UNDO_HISTORY,
    FOUL_OUT,
    FOUL_TROUBLE,
    EngineClosed,
    EngineError,
    GameNotInProgress,
    InvalidEdit,
    InvalidQuarterAdvance,
    InvalidSubstitution,
    InvalidUndo,
)
from .history import ActionHistory
from .quintets import QuintetLedger
from .recommendations import SubstitutionRecommendation, last_exit_times, recommend_substitutions
from .roster import RosterStore
from .scoring import ScoreFoulLedger
from .snapshot import GameParts, SnapshotCodec
from .stints import StintLedger

logger = logging.getLogger(__name__)

SnapshotSink = Callable[[dict], Any]

EDITABLE_FIELDS = ("name", "number", "position", "secondary_positions")


class RotationEngine:
    """
    Tracks substitutions, stints, quintets and score for one game.

    Every mutation goes through ``apply`` (or ``start_game``/``finish_game``),
    which validates before touching state, pushes an inverse record and hands
    a fresh snapshot to ``snapshot_sink``. Rejected operations return a failed
    ``ActionResult`` and leave the engine exactly as it was.
    """

    def __init__(self, parts: GameParts, snapshot_sink: Optional[SnapshotSink] = None):
        self.config = parts.config
        self.game = parts.game
        self.clock = parts.clock
        self.roster = parts.roster
        self.quintets = parts.quintets
        self.history = parts.history
        self.event_log = parts.event_log
        self.snapshot_sink = snapshot_sink
        self.closed = False

        self.stints = StintLedger(self.roster)
        self.scoring = ScoreFoulLedger(
            self.game,
            self.roster,
            foul_limit=self.config.foul_limit,
            max_points=self.config.max_points_per_action,
            max_free_throws=self.config.max_free_throws,
        )

        self._apply_handlers = {
            Substitution: self._apply_substitution,
            PointsScored: self._apply_points,
            FoulCommitted: self._apply_foul,
            FoulCorrection: self._apply_foul_correction,
            ShotMissed: self._apply_miss,
            FreeThrows: self._apply_free_throws,
            AdvanceQuarter: self._apply_advance_quarter,
            EditPlayer: self._apply_edit,
        }
        self._undo_handlers = {
            Substitute: self._undo_substitute,
            ScoreChange: self._undo_score_change,
            FoulAdded: self._undo_foul,
            FoulRemoved: self._undo_foul_correction,
            MissRecorded: self._undo_miss,
            FreeThrowsRecorded: self._undo_free_throws,
            QuarterAdvanced: self._undo_quarter_advance,
            ManualEdit: self._undo_edit,
        }

    @classmethod
    def new_game(
        cls,
        roster_entries: List[Dict],
        our_team_name: str = "Us",
        rival_team_name: str = "Rival",
        is_home_team: bool = True,
        config: Optional[EngineConfig] = None,
        snapshot_sink: Optional[SnapshotSink] = None,
    ) -> "RotationEngine":
        """
        Create an engine for a game that has not started.

        Args:
            roster_entries: Ordered roster entries; ids are assigned from 1 in this order
            our_team_name: Name of the tracked team
            rival_team_name: Name of the opponent
            is_home_team: Whether the tracked team plays at home
            config: Engine configuration (defaults to ``EngineConfig()``)
            snapshot_sink: Callable receiving a snapshot after every applied change

        Returns:
            RotationEngine with every player on the bench
        """
        config = config or EngineConfig()
        parts = GameParts(
            config=config,
            game=GameState.new(config.max_quarters, is_home_team, our_team_name, rival_team_name),
            clock=GameClock(config),
            roster=RosterStore.from_entries(roster_entries, court_size=config.court_size),
            quintets=QuintetLedger(court_size=config.court_size),
        )
        logger.info(
            "New game: %s vs %s with %d players", our_team_name, rival_team_name, len(parts.roster)
        )
        return cls(parts, snapshot_sink=snapshot_sink)

    @classmethod
    def from_snapshot(cls, snapshot: dict, snapshot_sink: Optional[SnapshotSink] = None) -> "RotationEngine":
        """Rehydrate an engine; raises ``MalformedSnapshot`` on inconsistent input."""
        return cls(SnapshotCodec.decode(snapshot), snapshot_sink=snapshot_sink)

    # Read-only views

    @property
    def status(self) -> GameStatus:
        return self.game.status

    @property
    def quarter(self) -> int:
        return self.clock.quarter

    @property
    def game_time(self) -> float:
        return self.clock.game_time

    @property
    def players(self) -> List[Player]:
        return self.roster.players

    @property
    def on_court_ids(self) -> List[int]:
        return self.roster.on_court_ids()

    @property
    def can_undo(self) -> bool:
        return bool(self.history) and not self.closed and self.game.status is not GameStatus.FINISHED

    def player(self, player_id: int) -> Player:
        return self.roster.get(player_id)

    def foul_status(self, player_id: int) -> FoulStatus:
        return foul_status(self.roster.get(player_id).fouls, self.clock.quarter)

    def court_time_status(self, player_id: int) -> TimeStatus:
        player = self.roster.get(player_id)
        return court_time_status(
            player.current_seconds(self.clock.game_time),
            self.config.court_green_seconds,
            self.config.court_yellow_seconds,
        )

    def bench_seconds(self, player_id: int) -> Optional[float]:
        """Seconds since the player last left the court; None if on court or never subbed out."""
        player = self.roster.get(player_id)
        left_at = last_exit_times(self.event_log).get(player_id)
        if player.on_court or left_at is None:
            return None
        return max(0.0, self.clock.game_time - left_at)

    def bench_time_status(self, player_id: int) -> TimeStatus:
        return bench_time_status(
            self.bench_seconds(player_id), self.config.bench_red_seconds, self.config.bench_yellow_seconds
        )

    def recommend_substitutions(self) -> List[SubstitutionRecommendation]:
        """Suggested changes for tired or foul-troubled players, most urgent first."""
        return recommend_substitutions(
            self.roster.players, self.config, self.clock.quarter, self.clock.game_time, self.event_log
        )

    def to_snapshot(self) -> dict:
        return SnapshotCodec.encode(self._parts())

    # Clock controls. These are not actions: they are not undoable and do not emit.

    def start_quarter(self) -> bool:
        if not self._clock_usable():
            return False
        self.clock.start_quarter()
        return True

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> bool:
        if not self._clock_usable():
            return False
        self.clock.resume()
        return True

    def tick(self, delta_seconds: float) -> float:
        """Run the clock forward; returns the seconds applied (0 when paused or not playing)."""
        if not self._clock_usable():
            return 0.0
        if delta_seconds < 0:
            logger.warning("Ignoring negative clock tick: %s", delta_seconds)
            return 0.0
        return self.clock.tick(delta_seconds)

    # Lifecycle

    def start_game(self, starter_ids: Iterable[int]) -> ActionResult:
        """
        Put the opening lineup on court.

        Each starter is checked in like a substitution with no outgoing player,
        so quarter 1 counts ``court_size`` entries; the last one opens the first
        quintet. The opening check-ins are not undoable.
        """
        starter_ids = list(starter_ids)
        try:
            self._ensure_open()
            if self.game.status is not GameStatus.NOT_STARTED:
                raise GameNotInProgress("Game has already started")
            if len(set(starter_ids)) != len(starter_ids) or len(starter_ids) != self.config.court_size:
                raise InvalidSubstitution(
                    f"Opening lineup needs {self.config.court_size} distinct players, got {starter_ids}"
                )
            for player_id in starter_ids:
                self.roster.get(player_id)
        except EngineError as e:
            logger.warning("Rejected start_game: %s", e)
            return ActionResult.failure("start_game", e)

        self.game.status = GameStatus.IN_PROGRESS
        for player_id in starter_ids:
            self._check_in(player_id)
        self.game.opening_substitutions = self.config.court_size
        logger.info("Game started with lineup %s", self.quintets.current_key)
        self._emit()
        return ActionResult.success("start_game")

    def finish_game(self) -> ActionResult:
        try:
            self._ensure_in_progress()
        except EngineError as e:
            logger.warning("Rejected finish_game: %s", e)
            return ActionResult.failure("finish_game", e)

        self.clock.pause()
        self.game.status = GameStatus.FINISHED
        logger.info("Game finished %d-%d", self.game.our_score, self.game.rival_score)
        self._emit()
        return ActionResult.success("finish_game")

    def close(self) -> dict:
        """Emit the final snapshot and refuse any further operation."""
        if not self.closed:
            self._emit()
            self.closed = True
            logger.info("Engine closed")
        return self.to_snapshot()

    # Actions

    def substitute(self, outgoing_id: int, incoming_id: int) -> ActionResult:
        return self.apply(Substitution(outgoing_id, incoming_id))

    def add_points(self, side: Union[Side, str], amount: int, player_id: Optional[int] = None) -> ActionResult:
        return self.apply(PointsScored(side, amount, player_id))

    def add_foul(self, player_id: int) -> ActionResult:
        return self.apply(FoulCommitted(player_id))

    def remove_foul(self, player_id: int) -> ActionResult:
        return self.apply(FoulCorrection(player_id))

    def add_miss(self, player_id: int, value: int) -> ActionResult:
        return self.apply(ShotMissed(player_id, value))

    def add_free_throws(self, player_id: int, attempts: int, made: int) -> ActionResult:
        return self.apply(FreeThrows(player_id, attempts, made))

    def advance_quarter(self) -> ActionResult:
        return self.apply(AdvanceQuarter())

    def edit_player(self, player_id: int, **changes) -> ActionResult:
        return self.apply(EditPlayer(player_id, changes))

    def apply(self, action) -> ActionResult:
        """
        Validate and apply one action request.

        Args:
            action: One of the request types in ``rotation_tracker.engine.actions``

        Returns:
            ActionResult; on failure the engine state is unchanged
        """
        handler = self._apply_handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unsupported action: {action!r}")

        try:
            self._ensure_open()
            record, advisories = handler(action)
        except EngineError as e:
            logger.warning("Rejected %s: %s", action.kind, e)
            return ActionResult.failure(action.kind, e)

        self.history.push(record)
        logger.debug("Applied %s", record)
        self._emit()
        return ActionResult.success(action.kind, advisories)

    def undo_last(self) -> ActionResult:
        """Revert the most recent applied action."""
        try:
            self._ensure_open()
            if self.game.status is GameStatus.FINISHED:
                raise GameNotInProgress("Game is finished")
        except EngineError as e:
            logger.warning("Rejected undo: %s", e)
            return ActionResult.failure("undo", e)

        record = self.history.peek()
        if record is None:
            return ActionResult.success("undo", [EMPTY_UNDO_HISTORY], message="Nothing to undo")

        # Handlers check the record against live state before reverting anything
        try:
            if len(self.event_log) < record.events_written:
                raise InvalidUndo(f"Event log is shorter than {record.kind} expects")
            self._undo_handlers[type(record)](record)
        except EngineError as e:
            logger.warning("Rejected undo of %s: %s", record.kind, e)
            return ActionResult.failure("undo", e)

        self.history.pop()
        if record.events_written:
            del self.event_log[-record.events_written:]
        logger.debug("Undid %s", record)
        self._emit()
        return ActionResult.success("undo", message=f"Undid {record.kind}")

    # Apply handlers: validate everything first, then mutate.

    def _apply_substitution(self, action: Substitution) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        outgoing = self.roster.get(action.outgoing_id)
        incoming = self.roster.get(action.incoming_id)
        if not outgoing.on_court:
            raise InvalidSubstitution(f"{outgoing.label} is not on court")
        if incoming.on_court:
            raise InvalidSubstitution(f"{incoming.label} is already on court")
        if not self.roster.has_full_lineup():
            raise InvalidSubstitution(
                f"Expected {self.config.court_size} players on court, found {self.roster.on_court_count()}"
            )

        now = self.clock.game_time
        quarter = self.clock.quarter
        our, rival = self.game.our_score, self.game.rival_score
        record = Substitute(
            outgoing_id=outgoing.player_id,
            incoming_id=incoming.player_id,
            quarter=quarter,
            outgoing_start=outgoing.current_stint_start,
            previous_quintet=self.quintets.current,
        )

        self.stints.close_stint(outgoing.player_id, our, rival, now)
        self._log_event(EventKind.SUB_OUT, player_id=outgoing.player_id)
        self.stints.open_stint(incoming.player_id, our, rival, now)
        self._log_event(EventKind.SUB_IN, player_id=incoming.player_id)
        self.quintets.close(now, our, rival)
        self.quintets.open(self.roster.on_court_ids(), now, our, rival, quarter)
        self.game.record_substitution(quarter)
        return record, []

    def _apply_points(self, action: PointsScored) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        side = self.scoring.validate_points(action.side, action.amount, action.player_id)
        quarter = self.clock.quarter
        previous_flow = self.scoring.add_points(side, action.amount, quarter, action.player_id)
        if action.player_id is not None:
            self.scoring.record_shots(action.player_id, action.amount, made=1)
        self._log_event(EventKind.SCORE, player_id=action.player_id, side=side.value, value=action.amount)
        record = ScoreChange(
            side=side,
            amount=action.amount,
            quarter=quarter,
            previous_flow=previous_flow,
            player_id=action.player_id,
        )
        return record, []

    def _apply_foul(self, action: FoulCommitted) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        self.scoring.validate_foul(action.player_id)
        previous = self.scoring.add_foul(action.player_id)
        player = self.roster.get(action.player_id)
        self._log_event(EventKind.FOUL, player_id=player.player_id, value=player.fouls)

        advisories = []
        if self.scoring.fouled_out(player.player_id):
            advisories.append(FOUL_OUT)
        elif self.foul_status(player.player_id) is FoulStatus.DANGER:
            advisories.append(FOUL_TROUBLE)
        return FoulAdded(player_id=player.player_id, previous_fouls=previous), advisories

    def _apply_foul_correction(self, action: FoulCorrection) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        self.scoring.validate_foul_correction(action.player_id)
        previous = self.scoring.correct_foul(action.player_id)
        return FoulRemoved(player_id=action.player_id, previous_fouls=previous), []

    def _apply_miss(self, action: ShotMissed) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        self.scoring.validate_miss(action.player_id, action.value)
        self.scoring.record_shots(action.player_id, action.value, missed=1)
        self._log_event(EventKind.MISS, player_id=action.player_id, side=Side.US.value, value=action.value)
        return MissRecorded(player_id=action.player_id, value=action.value), []

    def _apply_free_throws(self, action: FreeThrows) -> Tuple[ActionRecord, List[str]]:
        """A free-throw trip: made ones score a point each, the whole trip is one undo step."""
        self._ensure_in_progress()
        self.scoring.validate_free_throws(action.player_id, action.attempts, action.made)
        missed = action.attempts - action.made
        quarter = self.clock.quarter
        previous_flow = self.game.flow()
        if action.made:
            self.scoring.add_points(Side.US, action.made, quarter, action.player_id)
        self.scoring.record_shots(action.player_id, 1, made=action.made, missed=missed)

        for _ in range(action.made):
            self._log_event(
                EventKind.SCORE, player_id=action.player_id, side=Side.US.value, value=1, play_type=FREE_THROW
            )
        for _ in range(missed):
            self._log_event(
                EventKind.MISS, player_id=action.player_id, side=Side.US.value, value=1, play_type=FREE_THROW
            )
        record = FreeThrowsRecorded(
            player_id=action.player_id,
            made=action.made,
            missed=missed,
            quarter=quarter,
            previous_flow=previous_flow,
        )
        return record, []

    def _apply_advance_quarter(self, action: AdvanceQuarter) -> Tuple[ActionRecord, List[str]]:
        self._ensure_in_progress()
        if not self.clock.can_advance():
            raise InvalidQuarterAdvance(f"Cannot advance past quarter {self.config.max_quarters}")

        record = QuarterAdvanced(previous_clock=self.clock.snapshot(), previous_quintet=self.quintets.current)
        now = self.clock.game_time
        our, rival = self.game.our_score, self.game.rival_score
        self.clock.advance_quarter()
        # Same five continue, but their interval is booked to the new quarter.
        if record.previous_quintet is not None:
            self.quintets.close(now, our, rival)
            self.quintets.open(record.previous_quintet.player_ids, now, our, rival, self.clock.quarter)
        logger.info("Advanced to quarter %d", self.clock.quarter)
        return record, []

    def _apply_edit(self, action: EditPlayer) -> Tuple[ActionRecord, List[str]]:
        if self.game.status is GameStatus.FINISHED:
            raise GameNotInProgress("Game is finished")
        player = self.roster.get(action.player_id)
        changes = self._clean_edit(action.changes)
        previous = {
            key: list(getattr(player, key)) if key == "secondary_positions" else getattr(player, key)
            for key in changes
        }
        for key, value in changes.items():
            setattr(player, key, value)
        return ManualEdit(player_id=player.player_id, previous=previous, changes=changes), []

    @staticmethod
    def _clean_edit(changes: Dict[str, Any]) -> Dict[str, Any]:
        if not changes:
            raise InvalidEdit("No changes given")
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise InvalidEdit(f"Fields cannot be edited: {', '.join(unknown)}")

        cleaned: Dict[str, Any] = {}
        for key, value in changes.items():
            if key == "secondary_positions":
                if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                    raise InvalidEdit("secondary_positions must be a list of strings")
                cleaned[key] = list(value)
            elif key == "number":
                if not isinstance(value, (str, int)) or isinstance(value, bool):
                    raise InvalidEdit(f"Invalid number: {value!r}")
                cleaned[key] = str(value)
            else:
                if not isinstance(value, str) or (key == "name" and not value.strip()):
                    raise InvalidEdit(f"Invalid {key}: {value!r}")
                cleaned[key] = value
        return cleaned

    # Undo handlers: check the record still fits, then revert.

    def _undo_substitute(self, record: Substitute) -> None:
        outgoing = self.roster.get(record.outgoing_id)
        incoming = self.roster.get(record.incoming_id)
        if not incoming.on_court:
            raise InvalidUndo(f"{incoming.label} is not on court")
        if outgoing.on_court or not outgoing.stints:
            raise InvalidUndo(f"{outgoing.label} has no closed stint to reopen")
        if record.previous_quintet is not None and not self.quintets.intervals:
            raise InvalidUndo("No closed quintet interval to reopen")

        self.quintets.discard_open()
        if record.previous_quintet is not None:
            self.quintets.pop_closed()
            self.quintets.restore_open(record.previous_quintet)
        self.stints.cancel_stint(incoming.player_id)
        self.stints.reopen_stint(outgoing.player_id, record.outgoing_start)
        self.game.unrecord_substitution(record.quarter)

    def _check_points_removable(self, side: Side, amount: int, quarter: int, player_id: Optional[int]) -> None:
        total = self.game.our_score if side is Side.US else self.game.rival_score
        quarter_scores = self.game.scores_by_quarter.get(quarter) or {}
        if total < amount or quarter_scores.get(side.value, 0) < amount:
            raise InvalidUndo(f"Score cannot drop {amount} points for {side.value} in quarter {quarter}")
        if player_id is not None and self.roster.get(player_id).points < amount:
            raise InvalidUndo(f"Player {player_id} has fewer than {amount} points")

    def _undo_score_change(self, record: ScoreChange) -> None:
        self._check_points_removable(record.side, record.amount, record.quarter, record.player_id)
        if record.player_id is not None and self.roster.get(record.player_id).shot_counts(record.amount)["made"] < 1:
            raise InvalidUndo(f"Player {record.player_id} has no made {record.amount}-point shot")

        self.scoring.remove_points(
            record.side, record.amount, record.quarter, record.previous_flow, player_id=record.player_id
        )
        if record.player_id is not None:
            self.scoring.record_shots(record.player_id, record.amount, made=-1)

    def _undo_foul(self, record: FoulAdded) -> None:
        player = self.roster.get(record.player_id)
        if player.fouls != record.previous_fouls + 1:
            raise InvalidUndo(f"{player.label} has {player.fouls} fouls, expected {record.previous_fouls + 1}")
        self.scoring.restore_fouls(record.player_id, record.previous_fouls)

    def _undo_foul_correction(self, record: FoulRemoved) -> None:
        player = self.roster.get(record.player_id)
        if player.fouls != record.previous_fouls - 1:
            raise InvalidUndo(f"{player.label} has {player.fouls} fouls, expected {record.previous_fouls - 1}")
        self.scoring.restore_fouls(record.player_id, record.previous_fouls)

    def _undo_miss(self, record: MissRecorded) -> None:
        player = self.roster.get(record.player_id)
        if player.shot_counts(record.value)["missed"] < 1:
            raise InvalidUndo(f"{player.label} has no missed {record.value}-point shot")
        self.scoring.record_shots(record.player_id, record.value, missed=-1)

    def _undo_free_throws(self, record: FreeThrowsRecorded) -> None:
        player = self.roster.get(record.player_id)
        counts = player.shot_counts(1)
        if counts["made"] < record.made or counts["missed"] < record.missed:
            raise InvalidUndo(f"{player.label} has fewer free throws than the trip recorded")
        if record.made:
            self._check_points_removable(Side.US, record.made, record.quarter, record.player_id)

        if record.made:
            self.scoring.remove_points(
                Side.US, record.made, record.quarter, record.previous_flow, player_id=record.player_id
            )
        self.scoring.record_shots(record.player_id, 1, made=-record.made, missed=-record.missed)

    def _undo_quarter_advance(self, record: QuarterAdvanced) -> None:
        if self.clock.quarter != record.previous_clock.quarter + 1:
            raise InvalidUndo(f"Clock is in quarter {self.clock.quarter}, not after {record.previous_clock.quarter}")
        if record.previous_quintet is not None and not self.quintets.intervals:
            raise InvalidUndo("No closed quintet interval to reopen")

        if record.previous_quintet is not None:
            self.quintets.discard_open()
            self.quintets.pop_closed()
            self.quintets.restore_open(record.previous_quintet)
        self.clock.restore(record.previous_clock)

    def _undo_edit(self, record: ManualEdit) -> None:
        player = self.roster.get(record.player_id)
        unknown = sorted(set(record.previous) - set(EDITABLE_FIELDS))
        if unknown:
            raise InvalidUndo(f"Fields cannot be restored: {', '.join(unknown)}")
        for key, value in record.previous.items():
            setattr(player, key, list(value) if key == "secondary_positions" else value)

    # Internals

    def _parts(self) -> GameParts:
        return GameParts(
            config=self.config,
            game=self.game,
            clock=self.clock,
            roster=self.roster,
            quintets=self.quintets,
            history=self.history,
            event_log=self.event_log,
        )

    def _check_in(self, player_id: int) -> None:
        """Opening-lineup entry: a substitution with no outgoing player."""
        now = self.clock.game_time
        quarter = self.clock.quarter
        our, rival = self.game.our_score, self.game.rival_score
        self.stints.open_stint(player_id, our, rival, now)
        self.game.record_substitution(quarter)
        self._log_event(EventKind.SUB_IN, player_id=player_id)
        if self.roster.has_full_lineup():
            self.quintets.open(self.roster.on_court_ids(), now, our, rival, quarter)

    def _log_event(
        self,
        kind: EventKind,
        player_id: Optional[int] = None,
        side: Optional[str] = None,
        value: int = 0,
        play_type: Optional[str] = None,
    ) -> None:
        self.event_log.append(
            GameEvent(
                kind=kind,
                quarter=self.clock.quarter,
                game_time=self.clock.game_time,
                player_id=player_id,
                side=side,
                value=value,
                lineup=tuple(self.roster.on_court_ids()),
                play_type=play_type,
            )
        )

    def _ensure_open(self) -> None:
        if self.closed:
            raise EngineClosed("Engine has been closed")

    def _ensure_in_progress(self) -> None:
        if self.game.status is not GameStatus.IN_PROGRESS:
            raise GameNotInProgress(f"Game is {self.game.status.value}")

    def _clock_usable(self) -> bool:
        return not self.closed and self.game.status is GameStatus.IN_PROGRESS

    def _emit(self) -> None:
        if self.snapshot_sink is None:
            return
        try:
            self.snapshot_sink(self.to_snapshot())
        except Exception:
            logger.warning("Snapshot sink failed", exc_info=True)
