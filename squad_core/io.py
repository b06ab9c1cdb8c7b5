# squad_core/io.py
from __future__ import annotations
import io
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd
import yaml
from pydantic import ValidationError

from .constants import CSV_HEADERS, GENDERS, HEADER_ALIASES, normalize_gender, normalize_name
from .models import Player, PlayerDraft, Team, TeamDefinition
from .validation import check_team_definitions


def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Map provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc == k.lower() or lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out


def load_squad_csv(file) -> List[PlayerDraft]:
    """
    Parse an uploaded squad CSV (bytes or file-like) into drafts.
    Blank-name rows are skipped; any other bad row fails the whole file.
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str)
    else:
        df = pd.read_csv(file, dtype=str)

    df = df.rename(columns=_header_map(df.columns))
    if "Name" not in df.columns:
        raise ValueError(f"Missing required column: Name (found {list(df.columns)})")
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = ""
    df = df[CSV_HEADERS].fillna("")

    drafts: List[PlayerDraft] = []
    errs: List[str] = []
    for i, r in df.iterrows():
        name = normalize_name(r["Name"])
        if not name:
            continue
        gender = normalize_gender(r["Gender"]) or "Other"
        if gender not in GENDERS:
            errs.append(f"Row {i + 2}: unknown gender {r['Gender']!r}")
            continue
        try:
            drafts.append(PlayerDraft(name=name, gender=gender, skill=r["Skill"]))
        except ValidationError as e:
            errs.append(f"Row {i + 2}: " + "; ".join(err["msg"] for err in e.errors()))
    if errs:
        raise ValueError("Invalid squad rows: " + ", ".join(errs))
    return drafts


def squad_to_dataframe(players: Iterable[Player], placement: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
    """`placement` maps player id -> team name for the Team column."""
    rows = []
    for p in players:
        row = {"id": p.id, "Name": p.name, "Gender": p.gender, "Skill": p.skill}
        if placement is not None:
            row["Team"] = placement.get(p.id, "")
        rows.append(row)
    cols = ["id"] + CSV_HEADERS + (["Team"] if placement is not None else [])
    return pd.DataFrame(rows, columns=cols)


def save_squad_csv_bytes(players: Iterable[Player]) -> bytes:
    df = squad_to_dataframe(players).drop(columns=["id"])
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def generate_template_csv_bytes() -> bytes:
    empty = pd.DataFrame(columns=CSV_HEADERS)
    buf = io.StringIO()
    empty.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def team_sheet_dataframe(team: Team) -> pd.DataFrame:
    rows = []
    for i, p in enumerate(team.players, start=1):
        rows.append({
            "Slot": i,
            "Name": p.name if p else "",
            "Gender": p.gender if p else "",
            "Skill": p.skill if p else "",
        })
    return pd.DataFrame(rows, columns=["Slot", "Name", "Gender", "Skill"])


# ---------------------
# Team definitions (YAML)
# ---------------------
def load_team_definitions_yaml(text: str) -> List[TeamDefinition]:
    obj = yaml.safe_load(text) or []
    if isinstance(obj, dict):
        obj = obj.get("teams", [])
    if not isinstance(obj, list):
        raise ValueError("Team definitions must be a list (or a mapping with a 'teams' list).")
    for item in obj:
        if not isinstance(item, dict):
            raise ValueError("Each team definition must be a mapping.")
    errs = check_team_definitions(obj)
    if errs:
        raise ValueError("; ".join(errs))
    return [TeamDefinition.model_validate(item) for item in obj]


def dump_team_definitions_yaml(definitions: Iterable[TeamDefinition]) -> str:
    data = {"teams": [d.model_dump(by_alias=True, mode="json") for d in definitions]}
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
