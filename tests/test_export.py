# FILE: tests/test_export.py
import pytest

from squad_core.export_cards import check_export_ready, render_team_cards_pdf
from squad_core.models import Player, Team, TeamDefinition


def _team(tid, *players):
    d = TeamDefinition(id=tid, name=f"Team {tid}", size=3, require_female=True,
                       role_requirements=[{"role": "Goalie", "count": 1}])
    slots = list(players) + [None] * (3 - len(players))
    return Team(definition=d, players=tuple(slots))


ANN = Player(id="p1", name="Ann Lee", gender="Female", skill="Goalie")
BO = Player(id="p2", name="Bo Kim", gender="Male", skill="Defender")


def test_pdf_bytes():
    pdf = render_team_cards_pdf([_team("a", ANN), _team("b", BO)])
    assert pdf.startswith(b"%PDF")


def test_empty_export_still_renders():
    assert render_team_cards_pdf([]).startswith(b"%PDF")


def test_player_on_two_cards_is_refused():
    with pytest.raises(ValueError):
        render_team_cards_pdf([_team("a", ANN), _team("b", ANN)])


def test_player_twice_in_one_team_is_refused():
    with pytest.raises(ValueError):
        check_export_ready(_team("a", ANN, ANN))
