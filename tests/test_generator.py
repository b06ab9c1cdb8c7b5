# FILE: tests/test_generator.py
import asyncio

import pytest

from squad_core.constants import GENDERS
from squad_core.generator import PlayerGenerator, SampleGenerator
from squad_core.outcomes import GeneratorError


def test_generates_requested_count():
    gen = SampleGenerator(seed=1)
    assert isinstance(gen, PlayerGenerator)
    drafts = asyncio.run(gen.generate(6, []))
    assert len(drafts) == 6
    for d in drafts:
        assert d.gender in GENDERS
        assert len(d.name) >= 2
        assert d.skill


def test_prefers_missing_skills():
    gen = SampleGenerator(seed=3, skills=["Goalie", "Defender", "Attacker"])
    drafts = asyncio.run(gen.generate(2, ["goalie"]))
    assert {d.skill for d in drafts} == {"Defender", "Attacker"}


def test_falls_back_when_all_skills_present():
    gen = SampleGenerator(seed=3, skills=["Goalie"])
    drafts = asyncio.run(gen.generate(3, ["Goalie"]))
    assert [d.skill for d in drafts] == ["Goalie"] * 3


def test_same_seed_same_players():
    a = asyncio.run(SampleGenerator(seed=5).generate(4, []))
    b = asyncio.run(SampleGenerator(seed=5).generate(4, []))
    assert a == b


def test_bad_count_raises():
    with pytest.raises(GeneratorError):
        asyncio.run(SampleGenerator(seed=1).generate(0, []))
