# FILE: tests/test_session.py
import asyncio

import pytest

from squad_core.config import EngineConfig
from squad_core.generator import SampleGenerator
from squad_core.models import Player, SquadSnapshot, TeamDefinition, TeamRecord
from squad_core.outcomes import EngineNotReady, GeneratorError, PersistenceError, Rejection
from squad_core.persistence import MemoryStore
from squad_core.session import TeamBuilderSession

CFG = EngineConfig(autosave_delay=0)
TEAMS = [
    {"id": "a", "name": "Team A", "size": 2},
    {"id": "b", "name": "Team B", "size": 3, "require_female": True},
]


class BrokenStore(MemoryStore):
    async def load(self, identity):
        raise PersistenceError("corrupt document")


class FailingGenerator:
    async def generate(self, count, existing_skills):
        raise GeneratorError("service unavailable")


def _draft(name, gender="Male", skill="Defender"):
    return {"name": name, "gender": gender, "skill": skill}


def test_intents_before_login_raise():
    session = TeamBuilderSession(MemoryStore(), config=CFG)
    with pytest.raises(EngineNotReady):
        session.add_player(_draft("Ann"))
    with pytest.raises(EngineNotReady):
        session.move_to_team("x", "a", 0)


def test_delete_seated_player():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        ann = session.add_player(_draft("Ann")).value
        session.add_player(_draft("Bea", "Female"))
        session.move_to_team(ann.id, "a", 1)

        out = session.delete_player(ann.id)
        assert out.status == "ok"
        assert session.team("a").players[1] is None
        assert ann.id not in {p.id for p in session.unassigned_players}
        assert ann.id not in {p.id for p in session.squad}
        assert session.delete_player(ann.id).status == "noop"
        await session.logout()

    asyncio.run(run())


def test_state_survives_logout_and_login():
    store = MemoryStore()

    async def run():
        session = TeamBuilderSession(store, config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        ann = session.add_player(_draft("Ann", "Female", "Goalie")).value
        session.move_to_team(ann.id, "b", 2)
        await session.logout()
        assert not session.ready
        assert session.squad == ()
        with pytest.raises(EngineNotReady):
            session.delete_player(ann.id)

        again = TeamBuilderSession(store, config=CFG)
        out = await again.login("coach")
        assert out.status == "ok"
        assert again.locate(ann.id) == ("b", 2)
        assert [d.name for d in again.team_definitions] == ["Team A", "Team B"]
        assert again.unassigned_players == []
        await again.logout()

    asyncio.run(run())
    assert store.saves >= 1


def test_identities_are_separate():
    store = MemoryStore()

    async def run():
        session = TeamBuilderSession(store, config=CFG)
        await session.login("one")
        session.add_player(_draft("Ann"))
        await session.login("two")
        assert session.identity == "two"
        assert session.squad == ()
        await session.logout()

    asyncio.run(run())


def test_load_failure_starts_degraded():
    store = BrokenStore()

    async def run():
        session = TeamBuilderSession(store, config=CFG)
        out = await session.login("coach")
        assert out.status == "failure"
        assert out.reason == Rejection.LOAD_FAILED
        assert session.ready
        assert session.load_failed
        assert session.add_player(_draft("Ann")).status == "ok"
        await session.flush()
        await session.logout()

    asyncio.run(run())
    assert store.saves == 0


def test_restore_drops_bad_references():
    store = MemoryStore()
    ann = Player(id="p1", name="Ann", gender="Female", skill="Goalie")
    ghost = Player(id="ghost", name="Gone", gender="Male", skill="Goalie")
    d = TeamDefinition(id="a", name="Team A", size=3)
    asyncio.run(store.save("coach", SquadSnapshot(
        players=[ann],
        team_definitions=[d],
        teams=[TeamRecord(id="a", name="Team A", players=[ann, ghost, ann])],
    )))

    async def run():
        session = TeamBuilderSession(store, config=CFG)
        await session.login("coach")
        assert session.team("a").players == (ann, None, None)
        await session.logout()

    asyncio.run(run())


def test_add_player_rejects_bad_input():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        out = session.add_player(_draft("A", "Male", ""))
        assert out.status == "failure"
        assert out.reason == Rejection.INVALID_INPUT
        assert session.squad == ()
        await session.logout()

    asyncio.run(run())


def test_update_player():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        ann = session.add_player(_draft("Ann")).value
        session.move_to_team(ann.id, "a", 0)
        out = session.update_player({"id": ann.id, "name": "Ann Lee", "gender": "Female", "skill": "Goalie"})
        assert out.status == "ok"
        assert session.team("a").players[0].name == "Ann Lee"
        missing = session.update_player({"id": "nope", "name": "Who", "gender": "Male", "skill": "X"})
        assert missing.reason == Rejection.PLAYER_NOT_FOUND
        await session.logout()

    asyncio.run(run())


def test_set_team_definitions():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        bad = session.set_team_definitions([{"name": "X", "size": 0}])
        assert bad.reason == Rejection.INVALID_INPUT
        assert session.teams == ()

        session.set_team_definitions(TEAMS)
        ids = [session.add_player(_draft(f"Player {i}")).value.id for i in range(3)]
        for i, pid in enumerate(ids):
            session.move_to_team(pid, "b", i)
        session.select_for_swap({"player_id": ids[0], "team_id": "b", "slot_index": 0})

        out = session.set_team_definitions([TEAMS[0], {**TEAMS[1], "size": 1}])
        assert out.status == "ok"
        assert set(out.value) == {ids[1], ids[2]}
        assert session.selection == ()
        assert {p.id for p in session.unassigned_players} == {ids[1], ids[2]}
        await session.logout()

    asyncio.run(run())


def test_swap_through_selection():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        a = session.add_player(_draft("Ann")).value
        b = session.add_player(_draft("Bea", "Female")).value
        session.move_to_team(a.id, "a", 0)
        session.move_to_team(b.id, "b", 0)

        assert session.confirm_swap().reason == Rejection.INCOMPLETE_SELECTION
        session.select_for_swap({"player_id": a.id, "team_id": "a", "slot_index": 0})
        picked = session.select_for_swap({"player_id": b.id, "team_id": "b", "slot_index": 0}).value
        assert len(picked) == 2
        assert session.confirm_swap().status == "ok"
        assert session.locate(a.id) == ("b", 0)
        assert session.locate(b.id) == ("a", 0)
        await session.logout()

    asyncio.run(run())


def test_reports_follow_assignments():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        bea = session.add_player(_draft("Bea", "Female")).value
        assert session.validate_team("b").status == "invalid"
        session.move_to_team(bea.id, "b", 0)
        assert session.validate_team("b").status == "incomplete"
        assert session.validate_team("zzz") is None
        assert set(session.reports()) == {"a", "b"}
        await session.logout()

    asyncio.run(run())


def test_generate_players():
    async def run():
        session = TeamBuilderSession(MemoryStore(), generator=SampleGenerator(seed=7), config=CFG)
        await session.login("coach")
        out = await session.generate_players(4)
        assert out.status == "ok"
        assert len(out.value) == 4
        assert len(session.squad) == 4
        await session.logout()

    asyncio.run(run())


def test_generator_failure_leaves_pool_unchanged():
    async def run():
        session = TeamBuilderSession(MemoryStore(), generator=FailingGenerator(), config=CFG)
        await session.login("coach")
        session.add_player(_draft("Ann"))
        out = await session.generate_players(3)
        assert out.status == "failure"
        assert out.reason == Rejection.GENERATOR_FAILED
        assert len(session.squad) == 1
        await session.logout()

    asyncio.run(run())


def test_import_is_all_or_nothing():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        out = session.import_players([_draft("Ann"), _draft("B")])
        assert out.status == "failure"
        assert session.squad == ()
        out = session.import_players([_draft("Ann"), _draft("Bea", "Female")])
        assert len(out.value) == 2
        await session.logout()

    asyncio.run(run())


class FailingSaveStore(MemoryStore):
    async def save(self, identity, snapshot):
        raise PersistenceError("read-only volume")


def test_save_failure_keeps_state():
    async def run():
        session = TeamBuilderSession(FailingSaveStore(), config=CFG)
        await session.login("coach")
        assert session.add_player(_draft("Ann")).status == "ok"
        await session.flush()
        assert isinstance(session.last_save_error, PersistenceError)
        assert len(session.squad) == 1
        await session.logout()
        assert session.last_save_error is None

    asyncio.run(run())


def test_update_trims_padded_values():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        bob = session.add_player(_draft("Bob")).value
        session.update_player({"id": bob.id, "name": " Bob Lee ", "gender": "Male", "skill": " Goalie "})
        updated = session.squad[0]
        assert updated.name == "Bob Lee"
        assert updated.skill == "Goalie"
        await session.logout()

    asyncio.run(run())


def test_place_with_replace_frees_the_occupant():
    async def run():
        session = TeamBuilderSession(MemoryStore(), config=CFG)
        await session.login("coach")
        session.set_team_definitions(TEAMS)
        ann = session.add_player(_draft("Ann")).value
        bea = session.add_player(_draft("Bea", "Female")).value
        session.move_to_team(ann.id, "a", 0)
        assert session.move_to_team(bea.id, "a", 0).reason == Rejection.SLOT_OCCUPIED
        assert session.move_to_team(bea.id, "a", 0, replace=True).status == "ok"
        assert session.locate(bea.id) == ("a", 0)
        assert [p.id for p in session.unassigned_players] == [ann.id]
        await session.logout()

    asyncio.run(run())
