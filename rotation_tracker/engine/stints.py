"""Stint ledger: per-player court intervals and the plus/minus accrued in each."""

from typing import Optional

from ..models.player import StintRecord, StintStart
from .errors import InvalidSubstitution
from .roster import RosterStore


def stint_plus_minus(start: StintStart, our_score: int, rival_score: int) -> int:
    """Net differential since the stint opened."""
    return (our_score - start.our_score) - (rival_score - start.rival_score)


class StintLedger:
    """Opens and closes stints on the roster's players."""

    def __init__(self, roster: RosterStore):
        self.roster = roster

    def open_stint(self, player_id: int, our_score: int, rival_score: int, now: float) -> StintStart:
        player = self.roster.get(player_id)
        if player.on_court:
            raise InvalidSubstitution(f"{player.label} is already on court")
        start = StintStart(our_score=our_score, rival_score=rival_score, clock_time=now)
        player.on_court = True
        player.current_stint_start = start
        return start

    def close_stint(self, player_id: int, our_score: int, rival_score: int, now: float) -> StintRecord:
        player = self.roster.get(player_id)
        start = player.current_stint_start
        if not player.on_court or start is None:
            raise InvalidSubstitution(f"{player.label} is not on court")
        record = StintRecord(
            duration=max(0.0, now - start.clock_time),
            plus_minus=stint_plus_minus(start, our_score, rival_score),
        )
        player.stints.append(record)
        player.current_stint_start = None
        player.on_court = False
        return record

    def reopen_stint(self, player_id: int, start: StintStart) -> StintRecord:
        """Undo a close: drop the last completed stint and restore its original start."""
        player = self.roster.get(player_id)
        if player.on_court or not player.stints:
            raise InvalidSubstitution(f"{player.label} has no closed stint to reopen")
        record = player.stints.pop()
        player.on_court = True
        player.current_stint_start = start
        return record

    def cancel_stint(self, player_id: int, previous_start: Optional[StintStart] = None) -> None:
        """Undo an open: send the player back to the bench as if never checked in."""
        player = self.roster.get(player_id)
        player.on_court = False
        player.current_stint_start = previous_start
