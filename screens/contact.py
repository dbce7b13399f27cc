# screens/contact.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState

def render(state: AppState):
    st.markdown("<h2 style='text-align:center'>Contact</h2>", unsafe_allow_html=True)
    email = state.settings.app.contact_email
    if email:
        st.markdown(
            f"<p style='text-align:center; font-size:1.1rem'>✉️ <a href='mailto:{email}'>{email}</a></p>",
            unsafe_allow_html=True,
        )
    st.markdown(
        "<p style='text-align:center'>Follow us on social media for updates!</p>",
        unsafe_allow_html=True,
    )
