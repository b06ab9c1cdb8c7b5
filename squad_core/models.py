# squad_core/models.py
from __future__ import annotations
from typing import Dict, List, Literal, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .constants import MIN_NAME_LENGTH

Gender = Literal["Male", "Female", "Other"]
TeamStatus = Literal["invalid", "incomplete", "complete"]


def new_id() -> str:
    return uuid4().hex


class _Wire(BaseModel):
    """Base for records that are persisted (camelCase keys on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------
# Players
# ---------------------
class PlayerDraft(_Wire):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=MIN_NAME_LENGTH)
    gender: Gender = "Male"
    skill: str = Field(min_length=1)


class Player(_Wire):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    name: str = Field(min_length=1)
    gender: Gender = "Male"
    skill: str = ""

    @classmethod
    def from_draft(cls, draft: PlayerDraft, pid: Optional[str] = None) -> "Player":
        return cls(id=pid or new_id(), name=draft.name, gender=draft.gender, skill=draft.skill)


# ---------------------
# Team templates
# ---------------------
class RoleRequirement(_Wire):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    role: str = Field(min_length=1)
    count: int = Field(default=1, ge=1)


class TeamDefinition(_Wire):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=MIN_NAME_LENGTH)
    size: int = Field(ge=1)
    role_requirements: List[RoleRequirement] = Field(default_factory=list)
    require_female: bool = False


class Team(BaseModel):
    """
    A filled-in TeamDefinition. The definition is held by reference so the
    team id and name can never drift from it; `players` always has exactly
    `definition.size` slots (None marks an empty slot).
    """
    model_config = ConfigDict(frozen=True)

    definition: TeamDefinition
    players: Tuple[Optional[Player], ...] = ()

    @model_validator(mode="after")
    def _slots_match_size(self):
        if len(self.players) != self.definition.size:
            raise ValueError(
                f"Team {self.definition.name!r} has {len(self.players)} slots, expected {self.definition.size}"
            )
        return self

    @classmethod
    def empty(cls, definition: TeamDefinition) -> "Team":
        return cls(definition=definition, players=(None,) * definition.size)

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def size(self) -> int:
        return self.definition.size

    def assigned(self) -> List[Player]:
        return [p for p in self.players if p is not None]

    def player_ids(self) -> List[str]:
        return [p.id for p in self.players if p is not None]

    def holds(self, slot_index: int, player_id: str) -> bool:
        if not 0 <= slot_index < len(self.players):
            return False
        p = self.players[slot_index]
        return p is not None and p.id == player_id

    def index_of(self, player_id: str) -> Optional[int]:
        for i, p in enumerate(self.players):
            if p is not None and p.id == player_id:
                return i
        return None

    def with_slots(self, changes: Dict[int, Optional[Player]]) -> "Team":
        slots = list(self.players)
        for i, p in changes.items():
            slots[i] = p
        return Team(definition=self.definition, players=tuple(slots))

    def to_record(self) -> "TeamRecord":
        return TeamRecord(id=self.id, name=self.name, players=list(self.players))


class SelectedPlayer(_Wire):
    """A clicked-on assigned player waiting for a swap partner."""
    model_config = ConfigDict(frozen=True)

    player_id: str
    team_id: str
    slot_index: int = Field(ge=0)


# ---------------------
# Persistence document
# ---------------------
class TeamRecord(_Wire):
    id: str
    name: str = ""
    players: List[Optional[Player]] = Field(default_factory=list)


class SquadSnapshot(_Wire):
    players: List[Player] = Field(default_factory=list)
    team_definitions: List[TeamDefinition] = Field(default_factory=list)
    teams: List[TeamRecord] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


# ---------------------
# Validation output
# ---------------------
class RoleShortfall(BaseModel):
    role: str
    required: int
    actual: int

    @property
    def missing(self) -> int:
        return max(0, self.required - self.actual)


class ValidationReport(BaseModel):
    team_id: str
    size: int
    player_count: int = 0
    over_capacity: bool = False
    missing_female: bool = False
    role_shortfalls: List[RoleShortfall] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    is_valid: bool = False
    is_complete: bool = False

    @property
    def status(self) -> TeamStatus:
        if self.is_complete:
            return "complete"
        if self.is_valid:
            return "incomplete"
        return "invalid"
