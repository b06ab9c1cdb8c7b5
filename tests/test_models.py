# FILE: tests/test_models.py
import pytest
from pydantic import ValidationError

from squad_core.models import Player, PlayerDraft, SquadSnapshot, Team, TeamDefinition, TeamRecord


def _def(size=3, **kw):
    return TeamDefinition(id="t1", name="Red", size=size, **kw)


def test_draft_strips_and_requires_name():
    d = PlayerDraft(name="  Ann  ", gender="Female", skill=" Goalie ")
    assert d.name == "Ann"
    assert d.skill == "Goalie"
    with pytest.raises(ValidationError):
        PlayerDraft(name="A", gender="Male", skill="Goalie")
    with pytest.raises(ValidationError):
        PlayerDraft(name="Ann", gender="Robot", skill="Goalie")


def test_player_is_immutable():
    p = Player(id="p1", name="Ann", gender="Female", skill="Goalie")
    with pytest.raises(ValidationError):
        p.name = "Bea"


def test_team_slots_must_match_size():
    d = _def(size=3)
    assert Team.empty(d).players == (None, None, None)
    with pytest.raises(ValidationError):
        Team(definition=d, players=(None,))


def test_team_reads_id_and_name_from_definition():
    t = Team.empty(_def())
    assert t.id == "t1"
    assert t.name == "Red"
    assert t.size == 3


def test_with_slots_returns_new_team():
    p = Player(id="p1", name="Ann", gender="Female", skill="Goalie")
    t = Team.empty(_def())
    t2 = t.with_slots({1: p})
    assert t.players[1] is None
    assert t2.players[1] == p
    assert t2.index_of("p1") == 1
    assert t2.holds(1, "p1")
    assert not t2.holds(5, "p1")


def test_snapshot_uses_camel_case_keys():
    d = _def(require_female=True, role_requirements=[{"role": "Goalie", "count": 1}])
    snap = SquadSnapshot(players=[], team_definitions=[d], teams=[TeamRecord(id="t1", name="Red", players=[None] * 3)])
    text = snap.to_json()
    assert '"teamDefinitions"' in text
    assert '"requireFemale": true' in text
    assert '"roleRequirements"' in text
    back = SquadSnapshot.model_validate_json(text)
    assert back.team_definitions[0].require_female is True
    assert back.teams[0].players == [None, None, None]


def test_player_fields_are_trimmed():
    p = Player(id="p1", name="  Bob  ", gender="Male", skill=" Goalie ")
    assert p.name == "Bob"
    assert p.skill == "Goalie"
