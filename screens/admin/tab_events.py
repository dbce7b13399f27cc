# screens/admin/tab_events.py
from __future__ import annotations
from typing import Optional

import pandas as pd
import streamlit as st

from core.app_state import AppState
from core.errors import ValidationError
from core.models import Event, EventStatus
from core.ui import confirm_action, image_source, show_notice, show_validation, to_upload

EDIT_KEY = "event_edit_id"
IMAGE_TYPES = ["png", "jpg", "jpeg", "webp"]
STATUS_LABELS = {EventStatus.UPCOMING: "Upcoming", EventStatus.PAST: "Past"}


def _editing(state: AppState) -> Optional[Event]:
    event_id = st.session_state.get(EDIT_KEY)
    return next((e for e in state.cache.events if e.id == event_id), None)


def _event_form(state: AppState):
    editing = _editing(state)
    st.subheader(f"Edit: {editing.title}" if editing else "Add Event")

    statuses = list(STATUS_LABELS)
    with st.form("admin_event_form", clear_on_submit=editing is None):
        title = st.text_input("Title", value=editing.title if editing else "")
        date = st.text_input("Date", value=editing.date if editing else "", placeholder="e.g. 12 March 2025")
        status = st.radio(
            "Status", options=statuses, horizontal=True,
            index=statuses.index(editing.status) if editing else 0,
            format_func=lambda s: STATUS_LABELS[s],
        )
        short = st.text_area("Short description", value=editing.short_description if editing else "", height=80)
        full = st.text_area("Full description", value=editing.description if editing else "", height=160)
        hero = st.file_uploader("Hero image", type=IMAGE_TYPES)
        gallery = st.file_uploader("Gallery images", type=IMAGE_TYPES, accept_multiple_files=True)
        keep_gallery = True
        if editing and editing.gallery:
            keep_gallery = st.checkbox(f"Keep the existing {len(editing.gallery)} gallery image(s)", value=True)
        c1, c2 = st.columns(2)
        with c1:
            submitted = st.form_submit_button("Save Event", type="primary")
        with c2:
            cancelled = st.form_submit_button("Cancel edit", disabled=editing is None)

    if cancelled:
        st.session_state.pop(EDIT_KEY, None)
        st.rerun()
    if not submitted:
        return
    try:
        notice = state.save_event(
            title, date, short, full, status,
            hero_image=to_upload(hero),
            gallery=[u for u in (to_upload(f) for f in gallery or []) if u is not None],
            event_id=editing.id if editing else None,
            existing_gallery=(editing.gallery if keep_gallery else []) if editing else None,
        )
    except ValidationError as e:
        show_validation(e)
        return
    if notice.ok:
        st.session_state.pop(EDIT_KEY, None)
    show_notice(notice, rerun=notice.ok)


def _event_list(state: AppState):
    st.subheader("All Events")
    events = state.cache.events
    if not events:
        st.caption("No events yet.")
        return

    df = pd.DataFrame([
        {"title": e.title, "date": e.date, "status": STATUS_LABELS[e.status], "photos": len(e.gallery)}
        for e in events
    ])
    st.dataframe(df, use_container_width=True, hide_index=True, column_config={
        "title": st.column_config.TextColumn("Title", width="large"),
        "date": st.column_config.TextColumn("Date", width="small"),
        "status": st.column_config.TextColumn("Status", width="small"),
        "photos": st.column_config.NumberColumn("Gallery", width="small"),
    })

    for e in events:
        with st.expander(f"{e.title} ({e.date})"):
            if e.hero_image:
                st.image(image_source(state, e.hero_image), width=240)
            st.write(e.short_description)
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Edit", key=f"event_edit_{e.id}"):
                    st.session_state[EDIT_KEY] = e.id
                    st.rerun()
            with c2:
                if confirm_action(f"event_del_{e.id}", "Delete", f"Delete \"{e.title}\"?"):
                    if st.session_state.get(EDIT_KEY) == e.id:
                        st.session_state.pop(EDIT_KEY, None)
                    show_notice(state.delete_event(e.id), rerun=True)


def render(state: AppState):
    _event_form(state)
    st.markdown("---")
    _event_list(state)
