"""
Small helpers shared by app.py and the pages: the per-browser session,
login sidebar and outcome display.
"""
from __future__ import annotations
import asyncio
from typing import Dict, Optional

import streamlit as st

from .config import EngineConfig, configure_logging, load_config
from .generator import SampleGenerator
from .models import Player, Team
from .outcomes import Outcome
from .persistence import JsonFileStore
from .session import TeamBuilderSession

CONFIG_PATH = "squad_builder.yaml"


def _config() -> EngineConfig:
    ss = st.session_state
    if "engine_config" not in ss:
        cfg = load_config(CONFIG_PATH)
        configure_logging(cfg.log_level)
        ss["engine_config"] = cfg
    return ss["engine_config"]


def get_session() -> TeamBuilderSession:
    ss = st.session_state
    if "squad_session" not in ss:
        cfg = _config()
        ss["squad_session"] = TeamBuilderSession(
            JsonFileStore(cfg.data_dir),
            generator=SampleGenerator(seed=cfg.random_seed),
            config=cfg,
        )
    return ss["squad_session"]


def login_sidebar() -> Optional[TeamBuilderSession]:
    """Sidebar identity box. Returns the session once it is loaded, else None."""
    session = get_session()
    with st.sidebar:
        st.subheader("Account")
        if session.ready:
            st.caption(f"Signed in as **{session.identity}**")
            if session.load_failed:
                st.error(f"Saved data could not be loaded; changes will not be saved. ({session.load_error})")
            elif session.last_save_error is not None:
                st.warning(f"Last save failed: {session.last_save_error}")
            if st.button("Sign out", use_container_width=True):
                asyncio.run(session.logout())
                st.rerun()
        else:
            identity = st.text_input("Name or email", key="login_identity").strip()
            if st.button("Sign in", type="primary", use_container_width=True, disabled=not identity):
                outcome = asyncio.run(session.login(identity))
                show(outcome)
                st.rerun()
    return session if session.ready else None


def show(outcome: Outcome):
    if outcome.status == "ok":
        if outcome.message:
            st.success(outcome.message)
    elif outcome.status == "noop":
        if outcome.message:
            st.info(outcome.message)
    elif outcome.status == "conflict":
        st.warning(outcome.message)
    else:
        st.error(outcome.message)


def apply(session: TeamBuilderSession, outcome: Outcome, rerun: bool = True) -> Outcome:
    """Show the outcome, write pending changes, and redraw on success."""
    if outcome.status == "ok":
        asyncio.run(session.flush())
        # messages do not survive st.rerun, so keep the last one for the next run
        st.session_state["last_message"] = outcome.message
        if rerun:
            st.rerun()
    else:
        show(outcome)
    return outcome


def show_last_message():
    msg = st.session_state.pop("last_message", None)
    if msg:
        st.success(msg)


def display_name(p: Player) -> str:
    return f"{p.name} ({p.gender}, {p.skill})"


def placement(session: TeamBuilderSession) -> Dict[str, str]:
    """player id -> team name for every seated player."""
    return {pid: t.name for t in session.teams for pid in t.player_ids()}


def slot_label(team: Team, idx: int) -> str:
    p = team.players[idx]
    return f"{idx + 1}. {p.name} ({p.skill})" if p is not None else f"{idx + 1}. (open)"
