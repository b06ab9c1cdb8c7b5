# FILE: pages/3_Export.py
import streamlit as st

from squad_core.config import ui_css
from squad_core.export_cards import STATUS_LABEL, render_team_cards_pdf
from squad_core.io import save_squad_csv_bytes, team_sheet_dataframe
from squad_core.ui_helpers import login_sidebar

st.set_page_config(page_title="Export", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

session = login_sidebar()

st.title("Export")
if session is None:
    st.info("Sign in from the sidebar first.")
    st.stop()

teams = session.teams
reports = session.reports()

# ---------- Summary ----------
for t in teams:
    report = reports[t.id]
    with st.expander(f"{t.name} · {STATUS_LABEL[report.status]} · {report.player_count}/{t.size}", expanded=False):
        for err in report.errors:
            st.caption(f"⚠️ {err}")
        st.dataframe(team_sheet_dataframe(t), use_container_width=True, hide_index=True)

# ---------- Downloads ----------
col1, col2 = st.columns(2)
with col1:
    try:
        pdf = render_team_cards_pdf(teams)
    except ValueError as e:
        st.error(f"Team cards cannot be exported: {e}")
    else:
        st.download_button(
            "Download team cards (PDF)",
            data=pdf,
            file_name="team_cards.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
with col2:
    st.download_button(
        "Download squad (CSV)",
        data=save_squad_csv_bytes(session.squad),
        file_name="squad.csv",
        mime="text/csv",
        use_container_width=True,
    )
