# squad_core/session.py
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .assignment import AssignmentEngine, SwapSelection
from .autosave import Autosaver
from .board import TeamBoard
from .config import EngineConfig
from .generator import PlayerGenerator
from .models import (
    Player, PlayerDraft, SelectedPlayer, SquadSnapshot, Team, TeamDefinition, ValidationReport,
)
from .outcomes import EngineNotReady, GeneratorError, Outcome, PersistenceError, Rejection
from .persistence import SquadStore
from .roster import RosterStore
from .validation import check_player_draft, check_team_definitions, validate

logger = logging.getLogger(__name__)

DraftLike = Union[PlayerDraft, Mapping[str, Any]]
DefinitionLike = Union[TeamDefinition, Mapping[str, Any]]


def _errors_text(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors())


class TeamBuilderSession:
    """
    One user's squad, team definitions and assignments.

    Lifecycle: create with a store (and optionally a generator), `await
    login(identity)` to load, issue intents, `await logout()` to flush and
    reset. Intents return an `Outcome`; calling one before the load has
    finished raises `EngineNotReady`.
    """

    def __init__(self, store: SquadStore, generator: Optional[PlayerGenerator] = None,
                 config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._store = store
        self._generator = generator
        self._board = TeamBoard()
        self._roster = RosterStore(self._board)
        self._engine = AssignmentEngine(self._roster, self._board)
        self._selection = SwapSelection()
        self._autosaver: Optional[Autosaver] = None
        self._identity: Optional[str] = None
        self._ready = False
        self.load_failed = False
        self.load_error: Optional[str] = None

    # -----------------------
    # Lifecycle
    # -----------------------
    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def autosaver(self) -> Optional[Autosaver]:
        return self._autosaver

    @property
    def last_save_error(self) -> Optional[PersistenceError]:
        return self._autosaver.last_error if self._autosaver is not None else None

    def _reset(self):
        self._board.clear()
        self._roster.clear()
        self._selection.clear()
        self._autosaver = None
        self._ready = False
        self.load_failed = False
        self.load_error = None

    async def login(self, identity: str) -> Outcome:
        if self._identity is not None:
            await self.logout()
        self._reset()
        self._identity = identity

        snap: Optional[SquadSnapshot] = None
        try:
            snap = await self._store.load(identity)
        except PersistenceError as e:
            # degraded session: start empty and never overwrite what is stored
            self.load_failed = True
            self.load_error = str(e)
            logger.error("Load failed for %s: %s", identity, e)

        if snap is not None:
            self._roster.replace_all(snap.players)
            self._board.restore(snap.team_definitions, snap.teams, self._roster.as_mapping())

        self._autosaver = Autosaver(self._store, identity, self.snapshot, delay=self.config.autosave_delay)
        self._autosaver.enabled = not self.load_failed
        self._ready = True

        if self.load_failed:
            return Outcome.failure(Rejection.LOAD_FAILED, f"Could not load saved data: {self.load_error}")
        if snap is None:
            logger.info("No saved data for %s; starting empty", identity)
            return Outcome.success("Started a new squad.")
        logger.info("Loaded %d players and %d teams for %s", len(self._roster), len(self._board.teams), identity)
        return Outcome.success("Loaded saved data.")

    async def logout(self):
        if self._autosaver is not None:
            await self._autosaver.flush()
            await self._autosaver.close()
        logger.info("Session for %s closed", self._identity)
        self._reset()
        self._identity = None

    async def flush(self):
        if self._autosaver is not None:
            await self._autosaver.flush()

    def _require_ready(self):
        if not self._ready:
            raise EngineNotReady("Session is not loaded; call login() first.")

    def _changed(self):
        self._autosaver.mark_dirty()

    # -----------------------
    # Read-only views
    # -----------------------
    @property
    def squad(self) -> Tuple[Player, ...]:
        return self._roster.players

    @property
    def team_definitions(self) -> Tuple[TeamDefinition, ...]:
        return self._board.definitions

    @property
    def teams(self) -> Tuple[Team, ...]:
        return self._board.teams

    @property
    def unassigned_players(self) -> List[Player]:
        seated = self._board.assigned_ids()
        return [p for p in self._roster.players if p.id not in seated]

    @property
    def selection(self) -> Tuple[SelectedPlayer, ...]:
        return self._selection.picked

    def team(self, team_id: str) -> Optional[Team]:
        return self._board.team(team_id)

    def definition(self, team_id: str) -> Optional[TeamDefinition]:
        return self._board.definition(team_id)

    def locate(self, player_id: str) -> Optional[Tuple[str, int]]:
        return self._board.locate(player_id)

    def validate_team(self, team_id: str) -> Optional[ValidationReport]:
        t = self._board.team(team_id)
        return validate(t, t.definition) if t is not None else None

    def reports(self) -> Dict[str, ValidationReport]:
        return {t.id: validate(t, t.definition) for t in self._board.teams}

    def snapshot(self) -> SquadSnapshot:
        return SquadSnapshot(
            players=list(self._roster.players),
            team_definitions=list(self._board.definitions),
            teams=[t.to_record() for t in self._board.teams],
        )

    # -----------------------
    # Squad intents
    # -----------------------
    def _coerce_draft(self, draft: DraftLike) -> Tuple[Optional[PlayerDraft], List[str]]:
        if isinstance(draft, PlayerDraft):
            return draft, []
        errs = check_player_draft(draft)
        if errs:
            return None, errs
        try:
            return PlayerDraft.model_validate(dict(draft)), []
        except ValidationError as e:
            return None, [_errors_text(e)]

    def add_player(self, draft: DraftLike) -> Outcome:
        self._require_ready()
        d, errs = self._coerce_draft(draft)
        if d is None:
            return Outcome.failure(Rejection.INVALID_INPUT, " ".join(errs))
        player = self._roster.add_player(d)
        self._changed()
        return Outcome.success(f"{player.name} has been added to the squad.", value=player)

    def import_players(self, drafts: Iterable[DraftLike]) -> Outcome:
        """Add a batch (CSV import, generator output): all of it or none of it."""
        self._require_ready()
        staged: List[PlayerDraft] = []
        for i, raw in enumerate(drafts, start=1):
            d, errs = self._coerce_draft(raw)
            if d is None:
                return Outcome.failure(Rejection.INVALID_INPUT, f"Player #{i}: " + " ".join(errs))
            staged.append(d)
        added = self._roster.add_players(staged)
        if added:
            self._changed()
        return Outcome.success(f"{len(added)} new players have been added to your squad.", value=added)

    def update_player(self, player: Union[Player, Mapping[str, Any]]) -> Outcome:
        self._require_ready()
        if not isinstance(player, Player):
            try:
                player = Player.model_validate(dict(player))
            except ValidationError as e:
                return Outcome.failure(Rejection.INVALID_INPUT, _errors_text(e))
        errs = check_player_draft(player.model_dump())
        if errs:
            return Outcome.failure(Rejection.INVALID_INPUT, " ".join(errs))
        if self._roster.update_player(player) is None:
            return Outcome.conflict(Rejection.PLAYER_NOT_FOUND, f"No player with id {player.id}.")
        self._changed()
        return Outcome.success(f"{player.name} has been updated.", value=player)

    def delete_player(self, player_id: str) -> Outcome:
        self._require_ready()
        removed = self._roster.delete_player(player_id)
        if removed is None:
            return Outcome.noop("Player was already removed.")
        self._changed()
        return Outcome.success(f"{removed.name} has been removed from the squad.", value=removed)

    async def generate_players(self, count: Optional[int] = None) -> Outcome:
        self._require_ready()
        if self._generator is None:
            return Outcome.failure(Rejection.GENERATOR_FAILED, "No player generator is configured.")
        n = count if count is not None else self.config.generator_batch_size
        identity = self._identity
        try:
            drafts = await self._generator.generate(n, self._roster.skills())
        except GeneratorError as e:
            logger.warning("Player generation failed: %s", e)
            return Outcome.failure(Rejection.GENERATOR_FAILED, f"Could not generate new players: {e}")
        if not self._ready or self._identity != identity:
            logger.info("Discarding %d generated players; session changed", len(drafts))
            return Outcome.failure(Rejection.GENERATOR_FAILED, "Session changed while generating players.")
        return self.import_players(drafts)

    # -----------------------
    # Team definition intents
    # -----------------------
    def set_team_definitions(self, definitions: Iterable[DefinitionLike]) -> Outcome:
        self._require_ready()
        raw = list(definitions)
        errs = check_team_definitions(raw)
        if errs:
            return Outcome.failure(Rejection.INVALID_INPUT, " ".join(errs))
        try:
            defs = [d if isinstance(d, TeamDefinition) else TeamDefinition.model_validate(dict(d)) for d in raw]
        except ValidationError as e:
            return Outcome.failure(Rejection.INVALID_INPUT, _errors_text(e))
        released = self._board.apply_definitions(defs)
        self._selection.clear()
        self._changed()
        return Outcome.success("Team rules saved.", value=sorted(released))

    # -----------------------
    # Assignment intents
    # -----------------------
    def _after(self, outcome: Outcome) -> Outcome:
        if outcome.status == "ok":
            self._changed()
        return outcome

    def move_to_team(self, player_id: str, team_id: str, slot_index: int, replace: bool = False) -> Outcome:
        self._require_ready()
        return self._after(self._engine.move_to_team(player_id, team_id, slot_index, replace=replace))

    def move_to_squad(self, player_id: str, from_team_id: str, from_slot_index: int) -> Outcome:
        self._require_ready()
        return self._after(self._engine.move_to_squad(player_id, from_team_id, from_slot_index))

    def swap(self, player1_id: str, team1_id: str, slot1_index: int,
             player2_id: str, team2_id: str, slot2_index: int) -> Outcome:
        self._require_ready()
        return self._after(self._engine.swap(
            player1_id, team1_id, slot1_index, player2_id, team2_id, slot2_index,
        ))

    def select_for_swap(self, selection: Union[SelectedPlayer, Mapping[str, Any]]) -> Outcome:
        self._require_ready()
        if not isinstance(selection, SelectedPlayer):
            try:
                selection = SelectedPlayer.model_validate(dict(selection))
            except ValidationError as e:
                return Outcome.failure(Rejection.INVALID_INPUT, _errors_text(e))
        picked = self._selection.select(selection)
        return Outcome.success(f"{len(picked)} selected.", value=picked)

    def confirm_swap(self) -> Outcome:
        self._require_ready()
        return self._after(self._selection.confirm(self._engine))
