# core/ui.py
from __future__ import annotations
import datetime
from typing import Optional

import streamlit as st
import streamlit.components.v1 as components

from core.app_state import AppState, Notice
from core.errors import ValidationError
from core.models import Upload
from core.navigation import NAV_ITEMS, Section

SCROLL_FLAG = "scroll_top"
SECTION_PARAM = "section"
FLASH_KEY = "flash_notice"


# ---------------------------------------------------------------------------
# navigation glue
# ---------------------------------------------------------------------------

def go_to(state: AppState, target: "str | Section", notice: Optional[Notice] = None) -> None:
    """Navigate, mirror the section into ?section=, and rerun (carrying ``notice`` over)."""
    if notice is not None:
        st.session_state[FLASH_KEY] = notice
    if state.navigate(target):
        st.session_state[SCROLL_FLAG] = True
    st.query_params[SECTION_PARAM] = state.nav.active.value
    st.rerun()

def apply_deep_link(state: AppState) -> None:
    """Honour ?section= once per session; unknown values fall back to home."""
    if st.session_state.get("deep_link_applied"):
        return
    st.session_state["deep_link_applied"] = True
    requested = st.query_params.get(SECTION_PARAM)
    if not requested:
        return
    try:
        state.navigate(requested)
    except ValueError:
        state.navigate(Section.HOME)

def scroll_to_top() -> None:
    if not st.session_state.pop(SCROLL_FLAG, False):
        return
    components.html(
        "<script>window.parent.document.querySelector('section.main')?.scrollTo({top: 0, behavior: 'smooth'});"
        "window.parent.scrollTo({top: 0, behavior: 'smooth'});</script>",
        height=0,
    )


# ---------------------------------------------------------------------------
# page chrome
# ---------------------------------------------------------------------------

def render_header(state: AppState) -> None:
    app_cfg = state.settings.app
    st.markdown(f"## {app_cfg.name.upper()}")
    if app_cfg.tagline:
        st.caption(app_cfg.tagline)

def render_nav(state: AppState) -> None:
    cols = st.columns(len(NAV_ITEMS))
    for col, (section, label) in zip(cols, NAV_ITEMS):
        with col:
            active = state.nav.active == section
            if st.button(label, key=f"nav_{section.value}", type="primary" if active else "secondary",
                         use_container_width=True):
                go_to(state, section)

def _expand(text: str, state: AppState) -> str:
    year = str(datetime.datetime.now().year)
    return (text or "").replace("{year}", year).replace("{name}", state.settings.app.name)

def render_footer(state: AppState) -> None:
    """Footer text, plus an Admin Panel link for signed-in admins."""
    st.markdown("---")
    text_col, link_col = st.columns([0.8, 0.2])
    with text_col:
        st.caption(_expand(state.settings.app.footer_text, state))
    if state.is_admin:
        with link_col:
            if st.button("Admin Panel", key="footer_admin", type="tertiary"):
                go_to(state, Section.ADMIN)


# ---------------------------------------------------------------------------
# images
# ---------------------------------------------------------------------------

def image_source(state: AppState, url: str) -> str:
    """
    Returns something st.image can display.
    Stored uploads resolve to their local file; anything else is passed through.
    """
    path = state.store.storage.local_path(url)
    if path is not None and path.is_file():
        return str(path)
    return url

@st.dialog("Image", width="large")
def _lightbox(src: str) -> None:
    st.image(src, use_container_width=True)

def open_lightbox(state: AppState, url: str) -> None:
    if url:
        _lightbox(image_source(state, url))

def to_upload(uploaded) -> Optional[Upload]:
    """Convert a Streamlit UploadedFile (or None) into an Upload."""
    if uploaded is None:
        return None
    return Upload(name=uploaded.name, data=uploaded.getvalue(), content_type=getattr(uploaded, "type", None))


# ---------------------------------------------------------------------------
# feedback
# ---------------------------------------------------------------------------

def show_notice(notice: Notice, rerun: bool = False) -> None:
    """Toast the outcome; with ``rerun`` the toast is kept for the next run."""
    if rerun:
        st.session_state[FLASH_KEY] = notice
        st.rerun()
    if notice.ok:
        st.toast(notice.message, icon="✅")
    else:
        st.toast(notice.message, icon="⚠️")

def show_pending_notice() -> None:
    notice = st.session_state.pop(FLASH_KEY, None)
    if notice is not None:
        show_notice(notice)

def show_validation(err: ValidationError) -> None:
    for msg in err.errors:
        st.error(msg)

def confirm_action(key: str, label: str, prompt: str) -> bool:
    """
    Two-step destructive button: the first click asks, "Confirm" returns True once.
    """
    pending_key = f"confirm_{key}"
    if not st.session_state.get(pending_key):
        if st.button(label, key=f"ask_{key}"):
            st.session_state[pending_key] = True
            st.rerun()
        return False

    st.warning(prompt)
    yes, no = st.columns(2)
    with yes:
        if st.button("Confirm", key=f"yes_{key}", type="primary"):
            st.session_state.pop(pending_key, None)
            return True
    with no:
        if st.button("Cancel", key=f"no_{key}"):
            st.session_state.pop(pending_key, None)
            st.rerun()
    return False
