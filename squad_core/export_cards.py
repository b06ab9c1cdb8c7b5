# squad_core/export_cards.py
from __future__ import annotations
import io
from typing import Iterable, List, Optional, Set

from reportlab.lib import colors
from reportlab.lib.pagesizes import A5, landscape
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from .models import Team
from .validation import validate

STATUS_LABEL = {
    "complete": "Complete",
    "incomplete": "Valid, not full",
    "invalid": "Needs attention",
}
STATUS_COLOR = {
    "complete": colors.HexColor("#25d790"),
    "incomplete": colors.HexColor("#ffb547"),
    "invalid": colors.HexColor("#ff6b6b"),
}


def check_export_ready(team: Team, seen: Optional[Set[str]] = None):
    """Raise ValueError unless the team's data is internally consistent."""
    if len(team.players) != team.definition.size:
        raise ValueError(f"{team.name}: {len(team.players)} slots for a team of {team.definition.size}.")
    ids = team.player_ids()
    if len(ids) != len(set(ids)):
        raise ValueError(f"{team.name}: a player appears in more than one slot.")
    if seen is not None:
        clash = seen.intersection(ids)
        if clash:
            raise ValueError(f"{team.name}: player(s) already placed on another card.")
        seen.update(ids)


def _card_rows(team: Team) -> List[List[str]]:
    data = [["#", "Player", "Gender", "Skill"]]
    for i, p in enumerate(team.players, start=1):
        data.append([str(i), p.name if p else "(open)", p.gender if p else "", p.skill if p else ""])
    return data


def render_team_cards_pdf(teams: Iterable[Team]) -> bytes:
    """One card (page) per team with its status and slot table."""
    teams = list(teams)
    seen: Set[str] = set()
    for t in teams:
        check_export_ready(t, seen)

    buf = io.BytesIO()
    page_size = landscape(A5)
    c = canvas.Canvas(buf, pagesize=page_size)

    for t in teams:
        report = validate(t)
        c.setFont("Helvetica-Bold", 18)
        c.drawString(36, page_size[1] - 44, t.name)

        c.setFont("Helvetica", 10)
        c.setFillColor(STATUS_COLOR[report.status])
        c.drawString(36, page_size[1] - 62, f"{STATUS_LABEL[report.status]}: {report.player_count}/{t.size} players")
        c.setFillColor(colors.black)

        y_top = page_size[1] - 80
        for err in report.errors:
            c.drawString(36, y_top, f"• {err}")
            y_top -= 13

        table = Table(_card_rows(t), repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        _, table_h = table.wrapOn(c, page_size[0] - 72, y_top - 36)
        table.drawOn(c, 36, y_top - 8 - table_h)
        c.showPage()

    if not teams:
        c.setFont("Helvetica", 12)
        c.drawString(36, page_size[1] - 44, "No teams to export.")
        c.showPage()
    c.save()
    return buf.getvalue()
