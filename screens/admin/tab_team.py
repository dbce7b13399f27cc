# screens/admin/tab_team.py
from __future__ import annotations
from typing import Optional

import pandas as pd
import streamlit as st

from core.app_state import AppState
from core.errors import ValidationError
from core.models import Member
from core.ui import confirm_action, show_notice, show_validation, to_upload

EDIT_KEY = "team_edit_id"
IMAGE_TYPES = ["png", "jpg", "jpeg", "webp"]


def _editing(state: AppState) -> Optional[Member]:
    member_id = st.session_state.get(EDIT_KEY)
    return next((m for m in state.cache.members if m.id == member_id), None)


def _member_form(state: AppState):
    editing = _editing(state)
    departments = state.cache.departments
    if not departments:
        st.info("Add a department first.")
        return

    ids = [d.id for d in departments]
    names = {d.id: d.name for d in departments}
    # dangling members default to the first department
    index = ids.index(editing.department_id) if editing and editing.department_id in ids else 0

    st.subheader("Edit Member" if editing else "Add Member")
    with st.form("admin_member_form", clear_on_submit=editing is None):
        name = st.text_input("Name", value=editing.name if editing else "")
        role = st.text_input("Role", value=editing.role if editing else "", help="e.g. President, Head, Coordinator")
        dept_id = st.selectbox("Department", options=ids, index=index, format_func=lambda i: names.get(i, "?"))
        photo = st.file_uploader("Photo (optional)", type=IMAGE_TYPES)
        c1, c2 = st.columns(2)
        with c1:
            submitted = st.form_submit_button("Save", type="primary")
        with c2:
            cancelled = st.form_submit_button("Cancel edit", disabled=editing is None)

    if cancelled:
        st.session_state.pop(EDIT_KEY, None)
        st.rerun()
    if submitted:
        try:
            notice = state.save_member(
                name, role, dept_id, image=to_upload(photo), member_id=editing.id if editing else None
            )
        except ValidationError as e:
            show_validation(e)
            return
        if notice.ok:
            st.session_state.pop(EDIT_KEY, None)
        show_notice(notice, rerun=notice.ok)


def _member_list(state: AppState):
    st.subheader("Current Members")
    members = state.cache.members
    if not members:
        st.caption("No team members yet.")
        return

    df = pd.DataFrame([
        {"id": m.id, "name": m.name, "role": m.role, "department": m.department, "image": m.image}
        for m in members
    ])
    st.dataframe(df, use_container_width=True, hide_index=True, column_config={
        "id": None,
        "image": st.column_config.ImageColumn("Photo", width="small"),
        "name": st.column_config.TextColumn("Name", width="medium"),
        "role": st.column_config.TextColumn("Role", width="medium"),
        "department": st.column_config.TextColumn("Department", width="medium"),
    })

    for m in members:
        with st.expander(f"{m.name} · {m.role} ({m.department})"):
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Edit", key=f"member_edit_{m.id}"):
                    st.session_state[EDIT_KEY] = m.id
                    st.rerun()
            with c2:
                if confirm_action(f"member_del_{m.id}", "Delete", f"Delete {m.name}?"):
                    if st.session_state.get(EDIT_KEY) == m.id:
                        st.session_state.pop(EDIT_KEY, None)
                    show_notice(state.delete_member(m.id), rerun=True)


def _departments(state: AppState):
    st.subheader("Departments")
    with st.form("admin_dept_add", clear_on_submit=True):
        new_name = st.text_input("New department")
        added = st.form_submit_button("Add Department")
    if added:
        try:
            notice = state.add_department(new_name)
        except ValidationError as e:
            show_validation(e)
        else:
            show_notice(notice, rerun=notice.ok)

    deletable = state.deletable_departments()
    if not deletable:
        return
    st.caption("Deleting a department keeps its members; they show under \"Unknown\" until reassigned.")
    for d in deletable:
        with st.expander(d.name):
            with st.form(f"admin_dept_rename_{d.id}"):
                renamed = st.text_input("Name", value=d.name)
                do_rename = st.form_submit_button("Rename")
            if do_rename:
                try:
                    notice = state.rename_department(d.id, renamed)
                except ValidationError as e:
                    show_validation(e)
                else:
                    show_notice(notice, rerun=notice.ok)
            if confirm_action(f"dept_del_{d.id}", "Delete department", f"Delete the {d.name} department?"):
                show_notice(state.delete_department(d.id), rerun=True)


def render(state: AppState):
    form_col, dept_col = st.columns([0.6, 0.4])
    with form_col:
        _member_form(state)
    with dept_col:
        _departments(state)
    st.markdown("---")
    _member_list(state)
