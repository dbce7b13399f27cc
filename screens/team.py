# screens/team.py
from __future__ import annotations
from typing import List

import streamlit as st

from core.app_state import AppState
from core.models import Member
from core.ui import image_source

CARDS_PER_ROW = 4
EMPTY_DEPARTMENT_TEXT = "No members yet."

def _card(state: AppState, member: Member):
    st.image(image_source(state, member.image), width=115)
    st.markdown(f"**{member.role.upper()}**  \n{member.name}")

def _grid(state: AppState, members: List[Member], per_row: int = CARDS_PER_ROW):
    for start in range(0, len(members), per_row):
        cols = st.columns(per_row)
        for col, member in zip(cols, members[start:start + per_row]):
            with col:
                _card(state, member)

def render(state: AppState):
    st.markdown("<h2 style='text-align:center'>Organizing Team</h2>", unsafe_allow_html=True)
    roster = state.roster()

    leaders = [m for m in (roster.president, roster.vice_president) if m is not None]
    if leaders:
        _grid(state, leaders, per_row=2)

    if roster.advisory:
        st.subheader("Advisory")
        _grid(state, roster.advisory)

    for group in roster.departments:
        st.subheader(group.name)
        if group.is_empty:
            st.caption(EMPTY_DEPARTMENT_TEXT)
            continue
        _grid(state, group.members)
