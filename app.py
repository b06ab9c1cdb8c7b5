# app.py
import asyncio
import io

import streamlit as st

from squad_core.config import DEFAULT_SAMPLE_SQUAD_CSV, ensure_assets_exist, ui_css
from squad_core.constants import GENDERS
from squad_core.io import (
    generate_template_csv_bytes,
    load_squad_csv,
    save_squad_csv_bytes,
    squad_to_dataframe,
)
from squad_core.ui_helpers import apply, display_name, login_sidebar, placement, show_last_message

# ---------- Page & Theme ----------
st.set_page_config(page_title="Squad Builder", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

ensure_assets_exist()

session = login_sidebar()

st.title("Squad")
if session is None:
    st.info("Sign in from the sidebar to load your squad.")
    st.stop()

show_last_message()

# ---------- Sidebar: generator & files ----------
with st.sidebar:
    st.subheader("Generate players")
    n = st.number_input("How many", min_value=1, max_value=100, value=session.config.generator_batch_size)
    if st.button("Generate", use_container_width=True):
        with st.spinner("Generating players..."):
            outcome = asyncio.run(session.generate_players(int(n)))
        apply(session, outcome)

    st.subheader("Files")
    st.download_button(
        "Download squad CSV",
        data=save_squad_csv_bytes(session.squad),
        file_name="squad.csv",
        mime="text/csv",
        use_container_width=True,
    )
    st.download_button(
        "Download CSV template",
        data=generate_template_csv_bytes(),
        file_name="squad_template.csv",
        mime="text/csv",
        use_container_width=True,
    )

# ---------- Import ----------
up_col1, up_col2 = st.columns([2, 1])
with up_col1:
    file = st.file_uploader("Import players from CSV", type=["csv"])
    if file is not None and st.button("Add players from file"):
        try:
            drafts = load_squad_csv(file)
        except ValueError as e:
            st.error(f"Error loading CSV: {e}")
        else:
            apply(session, session.import_players(drafts))
with up_col2:
    if st.button("Load sample squad"):
        apply(session, session.import_players(load_squad_csv(io.BytesIO(DEFAULT_SAMPLE_SQUAD_CSV.encode("utf-8")))))

# ---------- Add ----------
with st.form("add_player", clear_on_submit=True):
    st.markdown("#### Add a player")
    c1, c2, c3 = st.columns([2, 1, 2])
    with c1:
        name = st.text_input("Name")
    with c2:
        gender = st.selectbox("Gender", GENDERS)
    with c3:
        skill = st.text_input("Skill/Role")
    if st.form_submit_button("Add player", type="primary"):
        apply(session, session.add_player({"name": name, "gender": gender, "skill": skill}))

# ---------- Squad table ----------
st.markdown(f"#### Players ({len(session.squad)} total, {len(session.unassigned_players)} unassigned)")
if not session.squad:
    st.write("No players yet.")
    st.stop()

df = squad_to_dataframe(session.squad, placement(session)).drop(columns=["id"])
st.dataframe(df, use_container_width=True, hide_index=True)

# ---------- Edit / delete ----------
players = {p.id: p for p in session.squad}
pid = st.selectbox("Edit or remove", list(players), format_func=lambda i: display_name(players[i]))
current = players[pid]
with st.form(f"edit_{pid}"):
    c1, c2, c3 = st.columns([2, 1, 2])
    with c1:
        new_name = st.text_input("Name", value=current.name)
    with c2:
        new_gender = st.selectbox("Gender", GENDERS, index=GENDERS.index(current.gender))
    with c3:
        new_skill = st.text_input("Skill/Role", value=current.skill)
    save_col, del_col = st.columns(2)
    with save_col:
        save = st.form_submit_button("Save changes", use_container_width=True)
    with del_col:
        delete = st.form_submit_button("Remove from squad", use_container_width=True)
    if save:
        apply(session, session.update_player({"id": pid, "name": new_name, "gender": new_gender, "skill": new_skill}))
    elif delete:
        apply(session, session.delete_player(pid))
