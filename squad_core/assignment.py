# squad_core/assignment.py
from __future__ import annotations
from typing import List, Optional, Tuple

from .board import TeamBoard
from .models import Player, SelectedPlayer
from .outcomes import Outcome, Rejection
from .roster import RosterStore


class AssignmentEngine:
    """
    Moves players between the squad and team slots.

    A player is either unassigned (in the pool, in no slot) or sits in exactly
    one (team, slot). Every transition is checked against the board as it is
    right now, and a rejected transition leaves the board untouched.
    """

    def __init__(self, roster: RosterStore, board: TeamBoard):
        self._roster = roster
        self._board = board

    def _lookup(self, player_id: str) -> Optional[Player]:
        p = self._roster.get(player_id)
        if p is not None:
            return p
        loc = self._board.locate(player_id)
        if loc is None:
            return None
        team_id, idx = loc
        return self._board.team(team_id).players[idx]

    # -----------------------
    # Move into a slot
    # -----------------------
    def move_to_team(self, player_id: str, team_id: str, slot_index: int, replace: bool = False) -> Outcome:
        """
        Put a player into a slot. An occupied slot is rejected unless
        `replace` is set, in which case the occupant goes back to the squad
        in the same commit.
        """
        target = self._board.team(team_id)
        if target is None:
            return Outcome.conflict(Rejection.TEAM_NOT_FOUND, f"No team with id {team_id}.")
        if not 0 <= slot_index < target.size:
            return Outcome.conflict(
                Rejection.SLOT_OUT_OF_RANGE,
                f"Slot {slot_index} is outside {target.name} (size {target.size}).",
            )
        player = self._lookup(player_id)
        if player is None:
            return Outcome.conflict(Rejection.PLAYER_NOT_FOUND, f"No player with id {player_id}.")

        current = self._board.locate(player_id)
        if current == (team_id, slot_index):
            return Outcome.noop(f"{player.name} is already in that slot.")

        occupant = target.players[slot_index]
        if occupant is not None and not replace:
            return Outcome.conflict(
                Rejection.SLOT_OCCUPIED,
                f"Slot {slot_index + 1} of {target.name} is taken by {occupant.name}; swap instead.",
            )

        if current is not None and current[0] == team_id:
            # same team: both slot edits land in one replacement team
            self._board.commit([target.with_slots({current[1]: None, slot_index: player})])
        elif current is not None:
            source = self._board.team(current[0])
            self._board.commit([
                source.with_slots({current[1]: None}),
                target.with_slots({slot_index: player}),
            ])
        else:
            self._board.commit([target.with_slots({slot_index: player})])
        if occupant is not None:
            return Outcome.success(f"Moved {player.name} to {target.name}; {occupant.name} returned to the squad.")
        return Outcome.success(f"Moved {player.name} to {target.name}.")

    # -----------------------
    # Back to the squad
    # -----------------------
    def move_to_squad(self, player_id: str, from_team_id: str, from_slot_index: int) -> Outcome:
        team = self._board.team(from_team_id)
        if team is None or not team.holds(from_slot_index, player_id):
            return Outcome.noop("Slot no longer holds that player.")
        self._board.commit([team.with_slots({from_slot_index: None})])
        return Outcome.success("Returned player to the squad.")

    # -----------------------
    # Swap two seated players
    # -----------------------
    def swap(self, player1_id: str, team1_id: str, slot1_index: int,
             player2_id: str, team2_id: str, slot2_index: int) -> Outcome:
        team1 = self._board.team(team1_id)
        team2 = self._board.team(team2_id)
        if team1 is None or team2 is None:
            missing = team1_id if team1 is None else team2_id
            return Outcome.conflict(Rejection.TEAM_NOT_FOUND, f"No team with id {missing}.")
        if not team1.holds(slot1_index, player1_id) or not team2.holds(slot2_index, player2_id):
            return Outcome.conflict(
                Rejection.STALE_PLAYER_REFERENCE,
                "One of the selected players has moved since it was picked.",
            )
        if team1_id == team2_id and slot1_index == slot2_index:
            return Outcome.noop("Nothing to swap.")

        p1 = team1.players[slot1_index]
        p2 = team2.players[slot2_index]
        if team1_id == team2_id:
            self._board.commit([team1.with_slots({slot1_index: p2, slot2_index: p1})])
        else:
            self._board.commit([
                team1.with_slots({slot1_index: p2}),
                team2.with_slots({slot2_index: p1}),
            ])
        return Outcome.success(f"Swapped {p1.name} and {p2.name}.")


class SwapSelection:
    """Click-to-swap buffer: pick two seated players, then confirm."""

    def __init__(self):
        self._picked: List[SelectedPlayer] = []

    @property
    def picked(self) -> Tuple[SelectedPlayer, ...]:
        return tuple(self._picked)

    def clear(self):
        self._picked = []

    def select(self, selection: SelectedPlayer) -> Tuple[SelectedPlayer, ...]:
        if any(s.player_id == selection.player_id for s in self._picked):
            self._picked = []
        elif len(self._picked) >= 2:
            self._picked = [selection]
        else:
            self._picked.append(selection)
        return self.picked

    def confirm(self, engine: AssignmentEngine) -> Outcome:
        if len(self._picked) != 2:
            return Outcome.conflict(Rejection.INCOMPLETE_SELECTION, "Select two players to swap.")
        a, b = self._picked
        self._picked = []
        return engine.swap(a.player_id, a.team_id, a.slot_index, b.player_id, b.team_id, b.slot_index)
