# app.py
from __future__ import annotations
import logging

import streamlit as st

from core.app_state import AppState, create_app_state
from core.db import get_engine, init_db
from core.navigation import Section
from core.settings import load_settings
from core.ui import (
    apply_deep_link,
    render_footer,
    render_header,
    render_nav,
    scroll_to_top,
    show_pending_notice,
)
from screens import auth, contact, events, gallery, home, team
from screens.admin import main as admin_main

logger = logging.getLogger(__name__)

SCREENS = {
    Section.HOME: home.render,
    Section.TEAM: team.render,
    Section.EVENTS: events.render,
    Section.GALLERY: gallery.render,
    Section.CONTACT: contact.render,
    Section.AUTH: auth.render,
    Section.ADMIN: admin_main.render,
}

# This function's only job is to create or retrieve the engine
# and cache it in session_state.
def _ensure_engine(settings):
    if "engine" not in st.session_state:
        st.session_state["engine"] = get_engine(settings.db.url)
    return st.session_state["engine"]

def _ensure_state(settings, engine) -> AppState:
    if "site" not in st.session_state:
        st.session_state["site"] = create_app_state(settings, engine)
    return st.session_state["site"]

def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title=settings.app.name, page_icon="🎭", layout="wide")

    engine = _ensure_engine(settings)

    if not st.session_state.get("db_initialized"):
        try:
            init_db(engine, settings)
        except Exception as e:
            logger.exception("Database initialization failed")
            st.error("Database schema initialization failed. See details below.")
            with st.expander("Diagnostics"):
                st.exception(e)
            st.stop()
        st.session_state["db_initialized"] = True

    state = _ensure_state(settings, engine)
    if state.nav.loading:
        with st.spinner("Loading..."):
            state.load()
    apply_deep_link(state)

    show_pending_notice()
    render_header(state)
    render_nav(state)

    section = state.nav.visible_section()
    if section is None:
        st.info("Loading...")
    else:
        if state.load_error:
            st.error(f"Some content could not be loaded: {state.load_error}")
        SCREENS[section](state)

    render_footer(state)
    scroll_to_top()

if __name__ == "__main__":
    main()
