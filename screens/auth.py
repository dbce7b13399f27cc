# screens/auth.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState, Notice
from core.auth import REASON_NOT_ADMIN
from core.navigation import Section
from core.ui import go_to, show_notice

SIGNUP_KEY = "auth_is_signup"
ERROR_KEY = "auth_error"

def _account(state: AppState):
    user = state.user or {}
    email = user.get("email", "")
    st.markdown("<h2 style='text-align:center'>My Account</h2>", unsafe_allow_html=True)
    st.markdown(f"<p style='text-align:center; font-size:1.2rem'><b>{email}</b></p>", unsafe_allow_html=True)

    if state.nav.redirected_from == Section.ADMIN and not state.is_admin:
        # signed in fine, just not an admin: retrying the password would not help
        st.warning("You are signed in, but this account does not have admin access.")
    else:
        st.caption("You are logged in")

    if st.button("Sign Out", key="auth_sign_out", use_container_width=True):
        state.sign_out()
        go_to(state, Section.HOME, Notice(True, "Logged out successfully"))

def _form(state: AppState):
    is_signup = st.session_state.get(SIGNUP_KEY, False)
    st.markdown(
        f"<h2 style='text-align:center'>{'Create Account' if is_signup else 'Login'}</h2>",
        unsafe_allow_html=True,
    )
    with st.form("auth_form"):
        st.markdown(f"#### {'Sign up to join ' + state.settings.app.name if is_signup else 'Welcome Back'}")
        email = st.text_input("Email", placeholder="Enter your email")
        password = st.text_input("Password", type="password", placeholder="Enter password")
        confirm = st.text_input("Confirm Password", type="password") if is_signup else None
        submitted = st.form_submit_button("Sign Up" if is_signup else "Login", use_container_width=True)

    if submitted:
        st.session_state.pop(ERROR_KEY, None)
        if is_signup:
            result = state.sign_up(email, password, confirm)
            if result.ok:
                st.session_state[SIGNUP_KEY] = False
                show_notice(Notice(True, "Account created! You can now log in."), rerun=True)
        else:
            result = state.sign_in(email, password, on_success=state.nav.on_auth_success)
            if result.ok:
                go_to(state, state.nav.active, Notice(True, "Logged in successfully!"))
            if result.reason == REASON_NOT_ADMIN:
                st.rerun()
        st.session_state[ERROR_KEY] = result.error

    if st.session_state.get(ERROR_KEY):
        st.error(st.session_state[ERROR_KEY])

    toggle = "Already have an account? Login" if is_signup else "Don't have an account? Sign Up"
    if st.button(toggle, key="auth_toggle", type="tertiary"):
        st.session_state[SIGNUP_KEY] = not is_signup
        st.session_state.pop(ERROR_KEY, None)
        st.rerun()

def render(state: AppState):
    _, mid, _ = st.columns([1, 2, 1])
    with mid:
        if state.user:
            _account(state)
        else:
            _form(state)
