"""Roster store: the fixed set of players in a game and who is on court."""

from typing import Dict, Iterable, Iterator, List

from ..models.player import Player
from .errors import UnknownPlayer


class RosterStore:
    """Holds the game's players in roster order."""

    def __init__(self, players: Iterable[Player], court_size: int = 5):
        self.court_size = court_size
        self._players: Dict[int, Player] = {}
        for player in players:
            if player.player_id in self._players:
                raise ValueError(f"Duplicate player id: {player.player_id}")
            self._players[player.player_id] = player

    @classmethod
    def from_entries(cls, entries: List[Dict], court_size: int = 5) -> "RosterStore":
        """
        Build a roster for a new game.

        Ids are assigned from roster order starting at 1.

        Args:
            entries: Ordered roster entries with name, number, position, secondary_positions
            court_size: Players on court at once

        Returns:
            RosterStore with every player on the bench
        """
        if len(entries) < court_size:
            raise ValueError(f"Roster needs at least {court_size} players, got {len(entries)}")
        return cls(
            [Player.from_roster_entry(idx, entry) for idx, entry in enumerate(entries, start=1)],
            court_size=court_size,
        )

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players.values())

    def __len__(self) -> int:
        return len(self._players)

    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    def get(self, player_id: int) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise UnknownPlayer(f"Unknown player id: {player_id}") from None

    def on_court_ids(self) -> List[int]:
        return [p.player_id for p in self._players.values() if p.on_court]

    def on_court_count(self) -> int:
        return sum(1 for p in self._players.values() if p.on_court)

    def has_full_lineup(self) -> bool:
        return self.on_court_count() == self.court_size
