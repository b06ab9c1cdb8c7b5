# squad_core/roster.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .board import TeamBoard
from .models import Player, PlayerDraft, new_id

logger = logging.getLogger(__name__)


class RosterStore:
    """
    The player pool. Ids are assigned here and never reused. Edits and
    deletes are pushed into the team board so slots never hold a stale copy
    or a player that has left the pool.
    """

    def __init__(self, board: TeamBoard):
        self._board = board
        self._players: Dict[str, Player] = {}
        self._issued: set = set()

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._players

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players.values())

    def get(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def as_mapping(self) -> Dict[str, Player]:
        return dict(self._players)

    def skills(self) -> List[str]:
        return [p.skill for p in self._players.values()]

    def _next_id(self) -> str:
        pid = new_id()
        while pid in self._issued:
            pid = new_id()
        self._issued.add(pid)
        return pid

    def add_player(self, draft: PlayerDraft) -> Player:
        player = Player.from_draft(draft, self._next_id())
        self._players[player.id] = player
        logger.debug("Added player %s (%s)", player.id, player.name)
        return player

    def add_players(self, drafts: Iterable[PlayerDraft]) -> List[Player]:
        # build everything first so a bad draft leaves the pool untouched
        staged = [Player.from_draft(d, self._next_id()) for d in drafts]
        for p in staged:
            self._players[p.id] = p
        logger.debug("Added %d players", len(staged))
        return staged

    def update_player(self, player: Player) -> Optional[Player]:
        if player.id not in self._players:
            return None
        self._players[player.id] = player
        touched = self._board.refresh_player(player)
        logger.debug("Updated player %s (%d slot copies refreshed)", player.id, touched)
        return player

    def delete_player(self, player_id: str) -> Optional[Player]:
        removed = self._players.pop(player_id, None)
        if removed is None:
            return None
        cleared = self._board.clear_player(player_id)
        logger.debug("Deleted player %s (%d slots cleared)", player_id, cleared)
        return removed

    def replace_all(self, players: Iterable[Player]):
        """Load a persisted pool (duplicate ids keep the first record)."""
        self._players = {}
        for p in players:
            if p.id in self._players:
                logger.warning("Duplicate player id %s in stored squad; keeping first", p.id)
                continue
            self._players[p.id] = p
        self._issued.update(self._players.keys())

    def clear(self):
        self._players = {}
