# squad_core/validation.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .constants import GENDERS, MIN_NAME_LENGTH, normalize_role
from .models import RoleShortfall, Team, TeamDefinition, ValidationReport


def _role_quotas(definition: TeamDefinition) -> Dict[str, RoleShortfall]:
    """
    Requirements that share a role name (case/whitespace-insensitive) are
    summed into one quota; the first spelling is kept for messages.
    """
    quotas: Dict[str, RoleShortfall] = {}
    for req in definition.role_requirements:
        key = normalize_role(req.role)
        if key in quotas:
            quotas[key].required += req.count
        else:
            quotas[key] = RoleShortfall(role=req.role, required=req.count, actual=0)
    return quotas


def validate(team: Team, definition: Optional[TeamDefinition] = None) -> ValidationReport:
    """Score a team against its definition: size, female requirement and role quotas."""
    d = definition or team.definition
    assigned = team.assigned()
    count = len(assigned)
    errors: List[str] = []

    over = count > d.size
    if over:
        errors.append(f"Team is over size limit of {d.size}.")

    missing_female = d.require_female and not any(p.gender == "Female" for p in assigned)
    if missing_female:
        errors.append("At least one female player is required.")

    quotas = _role_quotas(d)
    for p in assigned:
        q = quotas.get(normalize_role(p.skill))
        if q is not None:
            q.actual += 1
    shortfalls = [q for q in quotas.values() if q.actual < q.required]
    for q in shortfalls:
        errors.append(f"Needs {q.required} {q.role}(s), has {q.actual}.")

    is_valid = not errors and count > 0
    return ValidationReport(
        team_id=team.id,
        size=d.size,
        player_count=count,
        over_capacity=over,
        missing_female=missing_female,
        role_shortfalls=shortfalls,
        errors=errors,
        is_valid=is_valid,
        is_complete=is_valid and count == d.size,
    )


# -----------------------
# Input-shape checks (before anything reaches the engine)
# -----------------------
def check_player_draft(data: Mapping[str, Any]) -> List[str]:
    errs = []
    name = " ".join(str(data.get("name") or "").split())
    if len(name) < MIN_NAME_LENGTH:
        errs.append(f"Name must be at least {MIN_NAME_LENGTH} characters.")
    if data.get("gender") not in GENDERS:
        errs.append(f"Gender must be one of: {', '.join(GENDERS)}.")
    if not str(data.get("skill") or "").strip():
        errs.append("Skill/Role is required.")
    return errs


def check_team_definitions(definitions: Iterable[Any]) -> List[str]:
    """
    Accepts TeamDefinition models or plain dicts (form rows). Returns a list
    of messages; empty means the set can be applied.
    """
    errs: List[str] = []
    seen_names: Dict[str, int] = {}
    seen_ids = set()
    dup_names = False
    for i, raw in enumerate(definitions, start=1):
        d = raw.model_dump() if isinstance(raw, TeamDefinition) else dict(raw)
        name = str(d.get("name") or "").strip()
        label = name or f"#{i}"
        if len(name) < MIN_NAME_LENGTH:
            errs.append(f"Team {label}: name must be at least {MIN_NAME_LENGTH} characters.")
        key = name.lower()
        if key:
            if key in seen_names:
                dup_names = True
            seen_names[key] = i
        did = d.get("id")
        if did:
            if did in seen_ids:
                errs.append(f"Team {label}: duplicate id {did}.")
            seen_ids.add(did)
        try:
            size = int(d.get("size"))
        except (TypeError, ValueError):
            size = 0
        if size < 1:
            errs.append(f"Team {label}: size must be at least 1.")

        req_ids = set()
        reqs = d.get("role_requirements", d.get("roleRequirements")) or []
        for r in reqs:
            r = dict(r)
            if not str(r.get("role") or "").strip():
                errs.append(f"Team {label}: role name is required.")
            try:
                cnt = int(r.get("count"))
            except (TypeError, ValueError):
                cnt = 0
            if cnt < 1:
                errs.append(f"Team {label}: count must be at least 1.")
            rid = r.get("id")
            if rid:
                if rid in req_ids:
                    errs.append(f"Team {label}: duplicate role requirement id {rid}.")
                req_ids.add(rid)
    if dup_names:
        errs.append("Team names must be unique.")
    return errs
