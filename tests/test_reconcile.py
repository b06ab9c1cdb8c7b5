# FILE: tests/test_reconcile.py
from squad_core.board import TeamBoard
from squad_core.models import Player, Team, TeamDefinition
from squad_core.reconcile import reconcile, resize_slots


def _players(n):
    return [Player(id=f"p{i}", name=f"Player {i}", gender="Male", skill="Defender") for i in range(n)]


def test_resize_slots():
    ps = _players(3)
    assert resize_slots(ps, 2) == (ps[0], ps[1])
    assert resize_slots(ps[:1], 3) == (ps[0], None, None)


def test_shrink_releases_tail_slots():
    ps = _players(5)
    board = TeamBoard()
    board.apply_definitions([TeamDefinition(id="a", name="Team A", size=5)])
    board.commit([Team(definition=board.definition("a"), players=tuple(ps))])

    released = board.apply_definitions([TeamDefinition(id="a", name="Team A", size=2)])
    assert board.team("a").players == (ps[0], ps[1])
    assert released == {"p2", "p3", "p4"}


def test_reconcile_follows_definition_order_and_names():
    ps = _players(1)
    old = Team(definition=TeamDefinition(id="a", name="Old", size=2), players=(ps[0], None))
    new_defs = [
        TeamDefinition(id="b", name="Fresh", size=1),
        TeamDefinition(id="a", name="Renamed", size=3),
    ]
    out = reconcile(new_defs, [old])
    assert [t.id for t in out] == ["b", "a"]
    assert out[0].players == (None,)
    assert out[1].name == "Renamed"
    assert out[1].players == (ps[0], None, None)


def test_every_team_matches_its_size():
    defs = [TeamDefinition(id=str(i), name=f"T{i}", size=i + 1) for i in range(4)]
    for t in reconcile(defs, []):
        assert len(t.players) == t.definition.size


def test_dropped_definition_releases_players():
    ps = _players(2)
    board = TeamBoard()
    board.apply_definitions([TeamDefinition(id="a", name="Team A", size=2), TeamDefinition(id="b", name="Team B", size=1)])
    board.commit([board.team("a").with_slots({0: ps[0]}), board.team("b").with_slots({0: ps[1]})])
    released = board.apply_definitions([board.definition("a")])
    assert released == {"p1"}
    assert board.team("b") is None
