# screens/admin/main.py
from __future__ import annotations
import logging
import traceback

import streamlit as st

from core.app_state import AppState, Notice
from core.navigation import Section
from core.ui import go_to
from screens import auth as auth_screen
from screens.admin import tab_admins, tab_events, tab_gallery, tab_home, tab_team

logger = logging.getLogger(__name__)

TABS = [
    ("Edit Home", tab_home.render),
    ("Manage Events", tab_events.render),
    ("Manage Gallery", tab_gallery.render),
    ("Manage Team", tab_team.render),
    ("Manage Admins", tab_admins.render),
]

def render(state: AppState):
    # the shell already redirects, but never draw the panel for a non-admin
    if not state.is_admin:
        auth_screen.render(state)
        return

    title_col, logout_col = st.columns([0.8, 0.2])
    with title_col:
        st.markdown("## Admin Panel")
        st.caption(f"Signed in as **{(state.user or {}).get('email', '')}**")
    with logout_col:
        if st.button("Logout", key="admin_logout", use_container_width=True):
            state.sign_out()
            go_to(state, Section.HOME, Notice(True, "Logged out successfully"))

    tabs = st.tabs([label for label, _ in TABS])
    for tab, (label, render_tab) in zip(tabs, TABS):
        with tab:
            try:
                render_tab(state)
            except Exception as e:
                logger.exception("Admin tab %s failed", label)
                st.error(f"{label} failed: {e}")
                st.code(traceback.format_exc())
