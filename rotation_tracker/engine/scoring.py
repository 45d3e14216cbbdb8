"""Score and foul ledger.

Scores are plain counters on the game state. Stints and quintets are not
touched here; they read the score deltas lazily when they close.
"""

import logging
from typing import Optional, Tuple, Union

from ..models.game import GameState, Side
from .errors import InvalidFoul, InvalidScore, InvalidShot
from .roster import RosterStore

logger = logging.getLogger(__name__)


def parse_side(side: Union[Side, str]) -> Side:
    if isinstance(side, Side):
        return side
    try:
        return Side(str(side).lower())
    except ValueError:
        raise InvalidScore(f"Unknown side: {side!r}") from None


class ScoreFoulLedger:
    """Applies and reverts score and foul changes."""

    def __init__(
        self,
        game: GameState,
        roster: RosterStore,
        foul_limit: int = 5,
        max_points: int = 3,
        max_free_throws: int = 3,
    ):
        self.game = game
        self.roster = roster
        self.foul_limit = foul_limit
        self.max_points = max_points
        self.max_free_throws = max_free_throws

    def validate_points(self, side: Union[Side, str], amount, player_id: Optional[int] = None) -> Side:
        side = parse_side(side)
        # bool is an int subclass; True must not count as a point
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidScore(f"Points must be an integer, got {amount!r}")
        if not 1 <= amount <= self.max_points:
            raise InvalidScore(f"Points must be between 1 and {self.max_points}, got {amount}")
        if player_id is not None:
            if side is not Side.US:
                raise InvalidScore("Only our own players can be credited with points")
            self.roster.get(player_id)
        return side

    def add_points(self, side: Side, amount: int, quarter: int, player_id: Optional[int] = None) -> Tuple[int, int, int, int]:
        """
        Add points and update the score flow.

        Args:
            side: Team that scored
            amount: Points scored (already validated)
            quarter: Quarter the points are booked to
            player_id: Optional scorer for our side

        Returns:
            The flow tuple as it was before the change, for undo
        """
        previous_flow = self.game.flow()
        previous_margin = self.game.margin

        if side is Side.US:
            self.game.our_score += amount
        else:
            self.game.rival_score += amount
        quarter_scores = self.game.scores_by_quarter.setdefault(quarter, {"us": 0, "them": 0})
        quarter_scores[side.value] += amount
        if player_id is not None:
            self.roster.get(player_id).points += amount

        self._update_flow(previous_margin, self.game.margin)
        return previous_flow

    def remove_points(
        self,
        side: Side,
        amount: int,
        quarter: int,
        previous_flow: Tuple[int, int, int, int],
        player_id: Optional[int] = None,
    ) -> None:
        if side is Side.US:
            self.game.our_score -= amount
        else:
            self.game.rival_score -= amount
        self.game.scores_by_quarter[quarter][side.value] -= amount
        if player_id is not None:
            self.roster.get(player_id).points -= amount
        self.game.restore_flow(previous_flow)

    def _update_flow(self, previous_margin: int, margin: int) -> None:
        if margin == 0 and previous_margin != 0:
            self.game.ties += 1
        if (previous_margin > 0 and margin < 0) or (previous_margin < 0 and margin > 0):
            self.game.lead_changes += 1
        self.game.biggest_lead_us = max(self.game.biggest_lead_us, margin)
        self.game.biggest_lead_them = max(self.game.biggest_lead_them, -margin)

    def validate_miss(self, player_id: int, value) -> None:
        self.roster.get(player_id)
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= self.max_points:
            raise InvalidShot(f"Shot value must be between 1 and {self.max_points}, got {value!r}")

    def validate_free_throws(self, player_id: int, attempts, made) -> None:
        self.roster.get(player_id)
        for label, count in (("attempts", attempts), ("made", made)):
            if isinstance(count, bool) or not isinstance(count, int):
                raise InvalidShot(f"Free throw {label} must be an integer, got {count!r}")
        if not 1 <= attempts <= self.max_free_throws:
            raise InvalidShot(f"Free throw attempts must be between 1 and {self.max_free_throws}, got {attempts}")
        if not 0 <= made <= attempts:
            raise InvalidShot(f"Made free throws must be between 0 and {attempts}, got {made}")

    def record_shots(self, player_id: int, value: int, made: int = 0, missed: int = 0) -> None:
        """Count made and missed attempts of one value for a player (negative counts revert)."""
        self.roster.get(player_id).add_shots(value, made=made, missed=missed)

    def validate_foul(self, player_id: int) -> None:
        player = self.roster.get(player_id)
        if player.fouls >= self.foul_limit:
            raise InvalidFoul(f"{player.label} already has {player.fouls} fouls")

    def add_foul(self, player_id: int) -> int:
        """Increment a player's fouls and return the previous count."""
        player = self.roster.get(player_id)
        previous = player.fouls
        player.fouls += 1
        if player.fouls >= self.foul_limit:
            logger.warning("%s fouled out with %d fouls", player.label, player.fouls)
        return previous

    def fouled_out(self, player_id: int) -> bool:
        return self.roster.get(player_id).fouls >= self.foul_limit

    def validate_foul_correction(self, player_id: int) -> None:
        player = self.roster.get(player_id)
        if player.fouls <= 0:
            raise InvalidFoul(f"{player.label} has no fouls to remove")

    def correct_foul(self, player_id: int) -> int:
        """Take back one foul entered by mistake and return the previous count."""
        player = self.roster.get(player_id)
        previous = player.fouls
        player.fouls -= 1
        logger.info("Removed a foul from %s (%d left)", player.label, player.fouls)
        return previous

    def restore_fouls(self, player_id: int, previous_fouls: int) -> None:
        self.roster.get(player_id).fouls = previous_fouls
