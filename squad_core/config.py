# squad_core/config.py
from __future__ import annotations
import logging
import os
import textwrap
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

# ===== App defaults =====
DEFAULT_CONFIG: Dict[str, Any] = {
    "autosave_delay": 0.75,          # seconds of quiet before a write
    "data_dir": "data",
    "generator_batch_size": 10,
    "random_seed": 42,
    "log_level": "INFO",
}


class EngineConfig(BaseModel):
    autosave_delay: float = Field(default=0.75, ge=0.0)
    data_dir: str = "data"
    generator_batch_size: int = Field(default=10, ge=1, le=100)
    random_seed: Optional[int] = 42
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = str(v).upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level: {v}")
        return v


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Defaults overlaid with the YAML file at `path` (if it exists)."""
    data = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f) or {}
        if not isinstance(obj, dict):
            raise ValueError(f"{path} must contain a mapping of settings.")
        data.update(obj)
    return EngineConfig(**data)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def ensure_assets_exist(root: str = "assets"):
    os.makedirs(root, exist_ok=True)
    teams_path = os.path.join(root, "teams.yaml")
    if not os.path.exists(teams_path):
        with open(teams_path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_TEAMS_YAML)
    squad_path = os.path.join(root, "sample_squad.csv")
    if not os.path.exists(squad_path):
        with open(squad_path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SAMPLE_SQUAD_CSV)


# ===== Default team templates (Organize page "load sample") =====
DEFAULT_TEAMS_YAML = textwrap.dedent("""\
teams:
  - name: Red Rockets
    size: 5
    requireFemale: true
    roleRequirements:
      - role: Goalie
        count: 1
      - role: Defender
        count: 2
  - name: Blue Comets
    size: 5
    requireFemale: true
    roleRequirements:
      - role: Goalie
        count: 1
      - role: Attacker
        count: 2
""")

# ===== Sample squad =====
DEFAULT_SAMPLE_SQUAD_CSV = textwrap.dedent("""\
Name,Gender,Skill
Alex Carter,Male,Goalie
Ava Diaz,Female,Goalie
Blake Ellis,Male,Defender
Bella Fox,Female,Defender
Casey Gray,Other,Defender
Chloe Hayes,Female,Attacker
Drew Irwin,Male,Attacker
Dana Jones,Female,Midfielder
Finn Kim,Male,Defender
Grace Lee,Female,Attacker
Riley Miller,Other,Midfielder
Jordan Novak,Male,Attacker
""")


# ===== UI theme (style tag injected by the pages) =====
def ui_css() -> str:
    return """
<style>
:root{
  --line:#2a3142; --sub:#B7C2D3;
  --good:#25d790; --warn:#ffb547; --danger:#ff6b6b;
  --radius:14px;
}
.block-container { padding-top: 1rem; max-width: 1200px; }
.card{
  border:1px solid var(--line);
  border-radius:var(--radius);
  padding:.75rem 1rem; margin-bottom:.75rem;
}
.badge{ display:inline-block; padding:.1rem .55rem; border-radius:999px; font-size:.8rem; font-weight:600; }
.badge.complete{ background:var(--good); color:#08130d; }
.badge.incomplete{ background:var(--warn); color:#1a1204; }
.badge.invalid{ background:var(--danger); color:#1a0505; }
.slot-open{ color:var(--sub); font-style:italic; }
</style>
"""
