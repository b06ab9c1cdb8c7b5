# squad_core/generator.py
from __future__ import annotations
import logging
from typing import List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from .constants import FIRST_NAMES, GENDERS, LAST_NAMES, SKILL_POOL, normalize_role
from .models import PlayerDraft
from .outcomes import GeneratorError

logger = logging.getLogger(__name__)


@runtime_checkable
class PlayerGenerator(Protocol):
    async def generate(self, count: int, existing_skills: Sequence[str]) -> List[PlayerDraft]:
        """Return `count` new player drafts; raise GeneratorError on failure."""
        ...


class SampleGenerator:
    """
    Offline roster filler. Names and genders are drawn at random; skills
    prefer labels the squad does not have yet, then fall back to the full pool.
    """

    def __init__(self, seed: Optional[int] = None, skills: Optional[Sequence[str]] = None):
        self.rng = np.random.default_rng(seed)
        self.skills = list(skills or SKILL_POOL)

    def _pick_skills(self, count: int, existing_skills: Sequence[str]) -> List[str]:
        have = {normalize_role(s) for s in existing_skills}
        fresh = [s for s in self.skills if normalize_role(s) not in have]
        order = list(self.rng.permutation(fresh)) if fresh else []
        out = [str(s) for s in order[:count]]
        while len(out) < count:
            out.append(str(self.rng.choice(self.skills)))
        return out

    async def generate(self, count: int, existing_skills: Sequence[str]) -> List[PlayerDraft]:
        if count <= 0:
            raise GeneratorError(f"count must be positive, got {count}")
        if not self.skills:
            raise GeneratorError("no skills configured for generation")
        skills = self._pick_skills(count, existing_skills)
        drafts: List[PlayerDraft] = []
        used_names = set()
        for i in range(count):
            gender = str(self.rng.choice(GENDERS))
            name = ""
            # a few tries for a unique name, then accept a repeat
            for _ in range(5):
                name = f"{self.rng.choice(FIRST_NAMES[gender])} {self.rng.choice(LAST_NAMES)}"
                if name not in used_names:
                    break
            used_names.add(name)
            drafts.append(PlayerDraft(name=name, gender=gender, skill=skills[i]))
        logger.info("Generated %d sample players", len(drafts))
        return drafts
