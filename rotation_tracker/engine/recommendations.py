"""Substitution recommendations from court time, rest and foul trouble.

Pure functions over players and the event log: nothing here mutates a game.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from ..models.game import EventKind, GameEvent
from ..models.player import FoulStatus, Player, TimeStatus, bench_time_status, court_time_status, foul_status
from .config import EngineConfig

REASON_FOULS_DANGER = "fouls_danger"
REASON_FOULS_WARNING = "fouls_warning"
REASON_REST = "rest"

_PRIORITY = {REASON_FOULS_DANGER: 4, REASON_FOULS_WARNING: 3, REASON_REST: 1}

# Rested players first
_REST_ORDER = {TimeStatus.GREEN: 0, TimeStatus.YELLOW: 1, TimeStatus.RED: 2}


@dataclass
class SubstitutionRecommendation:
    """One on-court player who should come out, with ranked replacements."""

    outgoing_id: int
    reason: str
    fouls: int
    court_seconds: float
    same_position: List[int] = field(default_factory=list)
    cross_position: List[int] = field(default_factory=list)

    @property
    def priority(self) -> int:
        return _PRIORITY[self.reason]

    @property
    def is_foul_issue(self) -> bool:
        return self.reason in (REASON_FOULS_DANGER, REASON_FOULS_WARNING)

    def to_dict(self) -> dict:
        return {
            "outgoing_id": self.outgoing_id,
            "reason": self.reason,
            "priority": self.priority,
            "fouls": self.fouls,
            "court_seconds": self.court_seconds,
            "same_position": list(self.same_position),
            "cross_position": list(self.cross_position),
        }


def last_exit_times(event_log: Iterable[GameEvent]) -> Dict[int, float]:
    """Game time of each player's most recent substitution out."""
    exits: Dict[int, float] = {}
    for event in event_log:
        if event.kind is EventKind.SUB_OUT and event.player_id is not None:
            exits[event.player_id] = event.game_time
    return exits


def _reason(fouls: FoulStatus, court: TimeStatus) -> Optional[str]:
    if fouls is FoulStatus.DANGER:
        return REASON_FOULS_DANGER
    if fouls is FoulStatus.WARNING:
        return REASON_FOULS_WARNING
    if court is TimeStatus.RED:
        return REASON_REST
    return None


def recommend_substitutions(
    players: List[Player],
    config: EngineConfig,
    quarter: int,
    now: float,
    event_log: Iterable[GameEvent] = (),
) -> List[SubstitutionRecommendation]:
    """
    Suggest replacements for on-court players who are tired or in foul trouble.

    Candidates are bench players with a selected position and a safe foul count.
    A player whose secondary positions include the outgoing player's position is
    offered as a cross-position option only while another bench player can still
    cover their own primary position.

    Args:
        players: Every roster player
        config: Engine configuration holding the time thresholds and foul limit
        quarter: Current quarter, for foul status
        now: Current game time in seconds
        event_log: Game events, used to find how long bench players have rested

    Returns:
        Recommendations ordered by priority (foul danger, foul warning, rest);
        players with no available replacement are left out
    """
    exits = last_exit_times(event_log)

    def rest_status(player: Player) -> TimeStatus:
        left_at = exits.get(player.player_id)
        seconds = None if left_at is None else max(0.0, now - left_at)
        return bench_time_status(seconds, config.bench_red_seconds, config.bench_yellow_seconds)

    def eligible(player: Player, accept: Callable[[FoulStatus], bool]) -> bool:
        if player.on_court or not player.has_selected_position or player.fouls >= config.foul_limit:
            return False
        return accept(foul_status(player.fouls, quarter))

    bench = [p for p in players if eligible(p, lambda status: status is FoulStatus.SAFE)]

    def has_cover(candidate: Player) -> bool:
        return any(
            other.player_id != candidate.player_id
            and other.position == candidate.position
            and eligible(other, lambda status: status is not FoulStatus.DANGER)
            for other in players
        )

    recommendations = []
    for player in players:
        if not player.on_court:
            continue
        court_seconds = player.current_seconds(now)
        court = court_time_status(court_seconds, config.court_green_seconds, config.court_yellow_seconds)
        reason = _reason(foul_status(player.fouls, quarter), court)
        if reason is None:
            continue

        same = [p for p in bench if p.position == player.position]
        cross = [
            p for p in bench
            if p.position != player.position and player.position in p.secondary_positions and has_cover(p)
        ]
        if not same and not cross:
            continue

        recommendations.append(
            SubstitutionRecommendation(
                outgoing_id=player.player_id,
                reason=reason,
                fouls=player.fouls,
                court_seconds=court_seconds,
                same_position=[p.player_id for p in sorted(same, key=lambda p: _REST_ORDER[rest_status(p)])],
                cross_position=[p.player_id for p in sorted(cross, key=lambda p: _REST_ORDER[rest_status(p)])],
            )
        )

    recommendations.sort(key=lambda r: -r.priority)
    return recommendations
