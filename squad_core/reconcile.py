# squad_core/reconcile.py
from __future__ import annotations
from typing import Iterable, List, Optional

from .models import Player, Team, TeamDefinition


def resize_slots(players: Iterable[Optional[Player]], size: int) -> tuple:
    """Truncate or pad with empty slots, keeping slot contents up to min(old, new)."""
    kept = list(players)[:size]
    return tuple(kept) + (None,) * (size - len(kept))


def reconcile(new_definitions: Iterable[TeamDefinition], current_teams: Iterable[Team]) -> List[Team]:
    """
    Derive the team list for a replaced set of definitions.

    - one team per definition, in definition order
    - a team with a matching id keeps its slots up to the new size
    - players in dropped slots (or dropped teams) fall back to unassigned
    - id and name always come from the new definition
    """
    existing = {t.id: t for t in current_teams}
    out: List[Team] = []
    for d in new_definitions:
        prev = existing.get(d.id)
        if prev is None:
            out.append(Team.empty(d))
            continue
        out.append(Team(definition=d, players=resize_slots(prev.players, d.size)))
    return out
