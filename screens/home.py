# screens/home.py
from __future__ import annotations
import html

import streamlit as st

from core.app_state import AppState

def render(state: AppState):
    st.markdown("<h2 style='text-align:center'>About Us</h2>", unsafe_allow_html=True)
    about = html.escape(state.cache.about_text or "").replace("\n", "<br>")
    st.markdown(
        f"<p style='text-align:center; max-width:850px; margin:auto; font-size:1.1rem'>{about}</p>",
        unsafe_allow_html=True,
    )
