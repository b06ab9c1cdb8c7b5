# FILE: pages/1_Organize.py
import streamlit as st

from squad_core.config import DEFAULT_TEAMS_YAML, ui_css
from squad_core.io import dump_team_definitions_yaml, load_team_definitions_yaml
from squad_core.ui_helpers import apply, login_sidebar, show_last_message

st.set_page_config(page_title="Organize teams", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

session = login_sidebar()

st.title("Organize teams")
st.write("Define each team's size, role requirements and whether it needs a female player.")
if session is None:
    st.info("Sign in from the sidebar first.")
    st.stop()

show_last_message()


def _parse_roles(text: str):
    """'Goalie:1, Defender:2' -> requirement dicts (count defaults to 1)."""
    out = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        role, _, count = chunk.partition(":")
        try:
            n = int(count) if count.strip() else 1
        except ValueError:
            n = 0
        out.append({"role": role.strip(), "count": n})
    return out


# ---------- Current teams ----------
defs = list(session.team_definitions)
if not defs:
    st.write("No teams defined yet.")
for d in defs:
    roles = ", ".join(f"{r.role} x{r.count}" for r in d.role_requirements) or "no role requirements"
    female = " · needs a female player" if d.require_female else ""
    c1, c2 = st.columns([5, 1])
    with c1:
        st.markdown(f"<div class='card'><b>{d.name}</b> · {d.size} players · {roles}{female}</div>",
                    unsafe_allow_html=True)
    with c2:
        if st.button("Remove", key=f"rm_{d.id}", use_container_width=True):
            apply(session, session.set_team_definitions([x for x in defs if x.id != d.id]))

# ---------- Add / edit ----------
st.markdown("#### Add or edit a team")
choices = {"": None, **{d.id: d for d in defs}}
edit_id = st.selectbox("Team", list(choices), format_func=lambda i: choices[i].name if i else "New team")
base = choices[edit_id]
with st.form(f"team_form_{edit_id or 'new'}"):
    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        name = st.text_input("Name", value=base.name if base else "")
    with c2:
        size = st.number_input("Size", min_value=1, max_value=50, value=base.size if base else 5)
    with c3:
        require_female = st.checkbox("Requires a female player", value=base.require_female if base else False)
    roles_text = st.text_input(
        "Role requirements (role:count, comma separated)",
        value=", ".join(f"{r.role}:{r.count}" for r in base.role_requirements) if base else "",
    )
    if st.form_submit_button("Save team", type="primary"):
        row = {
            "name": name,
            "size": int(size),
            "require_female": require_female,
            "role_requirements": _parse_roles(roles_text),
        }
        if base is not None:
            row["id"] = base.id
        rows = [d.model_dump() for d in defs]
        if base is None:
            rows.append(row)
        else:
            rows = [row if r["id"] == base.id else r for r in rows]
        outcome = session.set_team_definitions(rows)
        if outcome.status == "ok" and outcome.value:
            st.session_state["released_note"] = f"{len(outcome.value)} player(s) returned to the squad."
        apply(session, outcome)

note = st.session_state.pop("released_note", None)
if note:
    st.info(note)

# ---------- YAML ----------
with st.expander("Edit as YAML", expanded=False):
    text = st.text_area("teams.yaml", value=dump_team_definitions_yaml(defs), height=300)
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Apply YAML", use_container_width=True):
            try:
                parsed = load_team_definitions_yaml(text)
            except ValueError as e:
                st.error(f"Error in team definitions: {e}")
            else:
                apply(session, session.set_team_definitions(parsed))
    with c2:
        if st.button("Load sample teams", use_container_width=True):
            apply(session, session.set_team_definitions(load_team_definitions_yaml(DEFAULT_TEAMS_YAML)))
    st.download_button(
        "Download teams.yaml",
        data=dump_team_definitions_yaml(defs).encode("utf-8"),
        file_name="teams.yaml",
        mime="text/yaml",
    )
