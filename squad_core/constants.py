# squad_core/constants.py
from __future__ import annotations
from typing import Dict, List, Set

# ---------------------
# Genders
# ---------------------
GENDERS: List[str] = ["Male", "Female", "Other"]

GENDER_ALIASES: Dict[str, str] = {
    "m": "Male", "male": "Male", "man": "Male",
    "f": "Female", "female": "Female", "woman": "Female",
    "o": "Other", "other": "Other", "x": "Other",
}

# -----------------------------
# Squad CSV headers (canonical)
# -----------------------------
CSV_HEADERS: List[str] = ["Name", "Gender", "Skill"]
HEADER_ALIASES: Dict[str, Set[str]] = {
    # canonical -> set of aliases
    "Name": {"name", "player", "full name"},
    "Gender": {"gender", "sex"},
    "Skill": {"skill", "role", "position", "skill/role"},
}

MIN_NAME_LENGTH = 2

# ---------------------
# Sample pools for the offline generator
# ---------------------
FIRST_NAMES: Dict[str, List[str]] = {
    "Male": ["Alex", "Blake", "Casey", "Drew", "Emery", "Finn", "Gabe", "Harper", "Jordan", "Kai"],
    "Female": ["Ava", "Bella", "Chloe", "Dana", "Elena", "Freya", "Grace", "Iris", "Jade", "Lena"],
    "Other": ["Quinn", "Riley", "Sky", "Rowan", "Sage", "Tate", "River", "Ash", "Noa", "Remy"],
}
LAST_NAMES: List[str] = [
    "Carter", "Diaz", "Ellis", "Fox", "Gray", "Hayes", "Irwin", "Jones", "Kim", "Lee",
    "Miller", "Novak", "Ortiz", "Park", "Reed", "Shaw", "Tran", "Vega", "Wyatt", "Xu",
]
SKILL_POOL: List[str] = [
    "Goalie", "Defender", "Midfielder", "Attacker", "Winger", "Sweeper",
    "Playmaker", "Striker", "Libero", "Setter", "Blocker", "Server",
]


# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    return " ".join(str(s).split())


def normalize_role(s: str) -> str:
    """Key used for case-insensitive role/skill matching."""
    if s is None:
        return ""
    return " ".join(str(s).split()).casefold()


def normalize_gender(s: str) -> str:
    if not s:
        return ""
    return GENDER_ALIASES.get(str(s).strip().lower(), str(s).strip())
