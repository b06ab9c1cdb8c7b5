# FILE: pages/2_Teams.py
import streamlit as st

from squad_core.config import ui_css
from squad_core.export_cards import STATUS_LABEL
from squad_core.models import SelectedPlayer
from squad_core.ui_helpers import apply, display_name, login_sidebar, show, show_last_message, slot_label

st.set_page_config(page_title="Teams", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

session = login_sidebar()

st.title("Teams")
if session is None:
    st.info("Sign in from the sidebar first.")
    st.stop()

show_last_message()

teams = session.teams
if not teams:
    st.write("No teams defined yet. Add some on the Organize page.")
    st.stop()

# ---------- Unassigned ----------
with st.sidebar:
    st.subheader(f"Unassigned ({len(session.unassigned_players)})")
    for p in session.unassigned_players:
        st.caption(display_name(p))

# ---------- Place a player ----------
st.markdown("#### Place a player")
pool = {p.id: p for p in session.squad}
c1, c2, c3, c4 = st.columns([3, 2, 1, 1])
with c1:
    pid = st.selectbox(
        "Player",
        [p.id for p in session.unassigned_players] + [i for i in pool if session.locate(i) is not None],
        format_func=lambda i: display_name(pool[i]) + ("" if session.locate(i) is None else " · seated"),
    )
with c2:
    team_names = {t.id: t.name for t in teams}
    tid = st.selectbox("Team", list(team_names), format_func=lambda i: team_names[i])
with c3:
    size = session.team(tid).size
    slot = st.number_input("Slot", min_value=1, max_value=size, value=1)
    replace = st.checkbox("Replace occupant", value=False)
with c4:
    st.write("")
    if st.button("Place", type="primary", use_container_width=True, disabled=pid is None):
        apply(session, session.move_to_team(pid, tid, int(slot) - 1, replace=replace))

# ---------- Swap selection ----------
picked = session.selection
if picked:
    names = [pool[s.player_id].name for s in picked if s.player_id in pool]
    st.info("Selected for swap: " + ", ".join(names))
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Swap selected", disabled=len(picked) != 2, use_container_width=True):
            apply(session, session.confirm_swap())
    with c2:
        if st.button("Clear selection", use_container_width=True):
            # selecting a picked player again clears the buffer
            show(session.select_for_swap(picked[0]))
            st.rerun()

# ---------- Team cards ----------
reports = session.reports()
cols = st.columns(min(3, len(teams)))
for n, t in enumerate(teams):
    report = reports[t.id]
    with cols[n % len(cols)]:
        st.markdown(
            f"<div class='card'><b>{t.name}</b> "
            f"<span class='badge {report.status}'>{STATUS_LABEL[report.status]}</span>"
            f"<br/>{report.player_count}/{t.size} players</div>",
            unsafe_allow_html=True,
        )
        for err in report.errors:
            st.caption(f"⚠️ {err}")
        for i, p in enumerate(t.players):
            left, mid, right = st.columns([4, 1, 1])
            with left:
                if p is None:
                    st.markdown(f"<span class='slot-open'>{slot_label(t, i)}</span>", unsafe_allow_html=True)
                else:
                    st.write(slot_label(t, i))
            if p is None:
                continue
            with mid:
                if st.button("⇄", key=f"sel_{t.id}_{i}", help="Select for swap"):
                    show(session.select_for_swap(SelectedPlayer(player_id=p.id, team_id=t.id, slot_index=i)))
                    st.rerun()
            with right:
                if st.button("✕", key=f"out_{t.id}_{i}", help="Back to squad"):
                    apply(session, session.move_to_squad(p.id, t.id, i))
