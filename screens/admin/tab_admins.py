# screens/admin/tab_admins.py
from __future__ import annotations
import pandas as pd
import streamlit as st

from core.app_state import AppState
from core.errors import StoreError, ValidationError
from core.ui import confirm_action, show_notice, show_validation


def render(state: AppState):
    st.subheader("Grant Admin Access")
    st.caption("The account must already be registered.")
    with st.form("admin_grant_form", clear_on_submit=True):
        email = st.text_input("Email")
        submitted = st.form_submit_button("Grant admin")
    if submitted:
        try:
            notice = state.grant_admin(email)
        except ValidationError as e:
            show_validation(e)
        else:
            show_notice(notice, rerun=notice.ok)

    st.subheader("Current Admins")
    try:
        admins = state.list_admins()
    except StoreError as e:
        st.error(str(e))
        return
    if not admins:
        st.caption("No admins found.")
        return

    st.dataframe(pd.DataFrame(admins), use_container_width=True, hide_index=True, column_config={
        "user_id": None,
        "email": st.column_config.TextColumn("Email", width="medium"),
        "active": st.column_config.CheckboxColumn("Active?", width="small"),
        "granted_by": st.column_config.TextColumn("Granted by", width="medium"),
        "granted_at": st.column_config.TextColumn("Granted at", width="medium"),
    })

    me = ((state.user or {}).get("email") or "").lower()
    for admin in admins:
        with st.expander(admin["email"]):
            if admin["email"].lower() == me:
                st.caption("This is you. Another admin must revoke your access.")
                continue
            if confirm_action(f"admin_revoke_{admin['user_id']}", "Revoke admin", f"Revoke admin access for {admin['email']}?"):
                show_notice(state.revoke_admin(admin["email"]), rerun=True)
