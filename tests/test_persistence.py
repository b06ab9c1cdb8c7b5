# FILE: tests/test_persistence.py
import asyncio

import pytest

from squad_core.models import Player, SquadSnapshot, TeamDefinition, TeamRecord
from squad_core.outcomes import PersistenceError
from squad_core.persistence import JsonFileStore, MemoryStore, SquadStore


def _snap():
    p = Player(id="p1", name="Ann", gender="Female", skill="Goalie")
    d = TeamDefinition(id="t1", name="Red", size=2, require_female=True)
    return SquadSnapshot(players=[p], team_definitions=[d], teams=[TeamRecord(id="t1", name="Red", players=[p, None])])


def test_stores_match_protocol():
    assert isinstance(MemoryStore(), SquadStore)
    assert isinstance(JsonFileStore("unused"), SquadStore)


def test_memory_store():
    store = MemoryStore()
    assert asyncio.run(store.load("u")) is None
    asyncio.run(store.save("u", _snap()))
    assert asyncio.run(store.load("u")) == _snap()
    assert asyncio.run(store.load("someone else")) is None


def test_json_file_store(tmp_path):
    store = JsonFileStore(tmp_path / "data")
    assert asyncio.run(store.load("coach@example.com")) is None
    asyncio.run(store.save("coach@example.com", _snap()))
    path = store.path_for("coach@example.com")
    assert path.exists()
    assert path.parent == tmp_path / "data"
    assert asyncio.run(store.load("coach@example.com")) == _snap()
    assert not list((tmp_path / "data").glob("*.tmp"))


def test_path_for_sanitizes_identity(tmp_path):
    store = JsonFileStore(tmp_path)
    assert store.path_for("../../etc/passwd").parent == tmp_path
    assert store.path_for("...").name.startswith("anonymous-")


def test_corrupt_file_raises(tmp_path):
    store = JsonFileStore(tmp_path)
    store.path_for("u").write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        asyncio.run(store.load("u"))


def test_similar_identities_get_separate_documents(tmp_path):
    store = JsonFileStore(tmp_path)
    ann = SquadSnapshot(players=[Player(id="a", name="Ann", gender="Female", skill="Goalie")])
    bo = SquadSnapshot(players=[Player(id="b", name="Bo", gender="Male", skill="Defender")])
    asyncio.run(store.save("alice@x.com", ann))
    assert asyncio.run(store.load("alice_x.com")) is None
    asyncio.run(store.save("alice_x.com", bo))
    assert asyncio.run(store.load("alice@x.com")) == ann
    assert asyncio.run(store.load("alice_x.com")) == bo
    assert len({store.path_for(i) for i in ["alice@x.com", "alice_x.com", "alice x.com", "alice/x.com"]}) == 4
