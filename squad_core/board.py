# squad_core/board.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .models import Player, Team, TeamDefinition, TeamRecord
from .reconcile import reconcile, resize_slots

logger = logging.getLogger(__name__)


class TeamBoard:
    """
    Owns the current team definitions and their Team instances.

    Teams are immutable values; every change builds replacement teams and
    swaps them in through `commit`, so a reader never sees half of a move.
    """

    def __init__(self):
        self._definitions: List[TeamDefinition] = []
        self._teams: Dict[str, Team] = {}

    # -----------------------
    # Read-only views
    # -----------------------
    @property
    def definitions(self) -> Tuple[TeamDefinition, ...]:
        return tuple(self._definitions)

    @property
    def teams(self) -> Tuple[Team, ...]:
        return tuple(self._teams.values())

    def team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def definition(self, team_id: str) -> Optional[TeamDefinition]:
        t = self._teams.get(team_id)
        return t.definition if t is not None else None

    def locate(self, player_id: str) -> Optional[Tuple[str, int]]:
        for t in self._teams.values():
            idx = t.index_of(player_id)
            if idx is not None:
                return t.id, idx
        return None

    def assigned_ids(self) -> Set[str]:
        return {pid for t in self._teams.values() for pid in t.player_ids()}

    # -----------------------
    # Mutations
    # -----------------------
    def apply_definitions(self, definitions: Iterable[TeamDefinition]) -> Set[str]:
        """Replace the definitions wholesale; returns ids of players that lost their slot."""
        defs = list(definitions)
        before = self.assigned_ids()
        teams = reconcile(defs, self._teams.values())
        self._definitions = defs
        self._teams = {t.id: t for t in teams}
        released = before - self.assigned_ids()
        if released:
            logger.info("Reconciliation released %d player(s) back to the squad", len(released))
        return released

    def commit(self, changed: Iterable[Team]):
        """Swap in replacement teams (all at once)."""
        staged = list(changed)
        for t in staged:
            if t.id not in self._teams:
                raise KeyError(f"Unknown team id: {t.id}")
        for t in staged:
            self._teams[t.id] = t

    def refresh_player(self, player: Player) -> int:
        """Replace every slot copy of `player` with the new value. Returns slots touched."""
        touched = 0
        changed = []
        for t in self._teams.values():
            hits = {i: player for i, p in enumerate(t.players) if p is not None and p.id == player.id}
            if hits:
                touched += len(hits)
                changed.append(t.with_slots(hits))
        self.commit(changed)
        return touched

    def clear_player(self, player_id: str) -> int:
        cleared = 0
        changed = []
        for t in self._teams.values():
            hits = {i: None for i, p in enumerate(t.players) if p is not None and p.id == player_id}
            if hits:
                cleared += len(hits)
                changed.append(t.with_slots(hits))
        self.commit(changed)
        return cleared

    def restore(self, definitions: Iterable[TeamDefinition], records: Iterable[TeamRecord],
                pool: Mapping[str, Player]) -> int:
        """
        Rebuild teams from a persisted document. Slot entries are re-read from
        the pool by id; references to unknown or already-seated players are
        dropped. Returns the number of dropped references.
        """
        defs: List[TeamDefinition] = []
        by_id: Dict[str, TeamDefinition] = {}
        for d in definitions:
            if d.id in by_id:
                logger.warning("Duplicate team definition id %s in stored data; keeping first", d.id)
                continue
            by_id[d.id] = d
            defs.append(d)
        seen: Set[str] = set()
        dropped = 0
        prior: List[Team] = []
        for rec in records:
            d = by_id.get(rec.id)
            if d is None:
                continue
            slots: List[Optional[Player]] = []
            for p in resize_slots(rec.players, d.size):
                if p is None:
                    slots.append(None)
                elif p.id in pool and p.id not in seen:
                    seen.add(p.id)
                    slots.append(pool[p.id])
                else:
                    dropped += 1
                    slots.append(None)
            prior.append(Team(definition=d, players=tuple(slots)))
        self._definitions = defs
        self._teams = {t.id: t for t in reconcile(defs, prior)}
        if dropped:
            logger.warning("Dropped %d inconsistent slot reference(s) while restoring teams", dropped)
        return dropped

    def clear(self):
        self._definitions = []
        self._teams = {}
