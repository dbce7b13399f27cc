# screens/admin/tab_home.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState
from core.ui import show_notice

def render(state: AppState):
    st.subheader("Edit Homepage")
    with st.form("admin_home_form"):
        text = st.text_area("About Us Description", value=state.cache.about_text, height=220)
        submitted = st.form_submit_button("Save Changes")
    if submitted:
        show_notice(state.save_about_text(text))
