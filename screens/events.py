# screens/events.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState
from core.models import Event
from core.ui import image_source, open_lightbox

def _card(state: AppState, event: Event):
    with st.container(border=True):
        if event.hero_image:
            st.image(image_source(state, event.hero_image), use_container_width=True)
        st.caption("✅ Completed" if event.is_past else "🟢 Upcoming")
        st.markdown(f"**{event.date.upper()}**")
        st.markdown(f"#### {event.title}")
        st.write(event.short_description)
        # only past events have a detail page
        if event.is_past and st.button("View details", key=f"evt_open_{event.id}"):
            state.selected_event_id = event.id
            st.rerun()

def _detail(state: AppState, event: Event):
    if st.button("← Back to Dashboard", key="evt_back"):
        state.selected_event_id = None
        st.rerun()

    if event.hero_image:
        st.image(image_source(state, event.hero_image), use_container_width=True)
        if st.button("🔍 Full screen", key="evt_hero_zoom"):
            open_lightbox(state, event.hero_image)

    st.markdown(f"## {event.title}")
    st.caption(event.date)
    st.markdown(event.description.replace("\n", "  \n"))

    if event.gallery:
        st.markdown("### Event Highlights")
        cols = st.columns(4)
        for i, url in enumerate(event.gallery):
            with cols[i % 4]:
                st.image(image_source(state, url), use_container_width=True)
                if st.button("🔍", key=f"evt_gal_{i}"):
                    open_lightbox(state, url)

def render(state: AppState):
    selected = next((e for e in state.cache.events if e.id == state.selected_event_id), None)
    if selected is not None:
        _detail(state, selected)
        return

    st.markdown("<h2 style='text-align:center'>Events Dashboard</h2>", unsafe_allow_html=True)
    past_col, upcoming_col = st.columns(2)
    with past_col:
        st.markdown("### Past Events")
        st.caption("(Open a card for details)")
        for event in state.past_events():
            _card(state, event)
    with upcoming_col:
        st.markdown("### Upcoming Events")
        for event in state.upcoming_events():
            _card(state, event)
