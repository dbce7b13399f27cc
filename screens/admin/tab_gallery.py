# screens/admin/tab_gallery.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState
from core.errors import ValidationError
from core.ui import confirm_action, image_source, show_notice, show_validation, to_upload

IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]

def render(state: AppState):
    st.subheader("Add to Gallery")
    with st.form("admin_gallery_form", clear_on_submit=True):
        uploaded = st.file_uploader("Image", type=IMAGE_TYPES)
        alt = st.text_input("Alt text (optional)")
        submitted = st.form_submit_button("Upload")
    if submitted:
        try:
            show_notice(state.add_gallery_image(to_upload(uploaded), alt))
        except ValidationError as e:
            show_validation(e)

    st.subheader("Current Images")
    if not state.cache.gallery:
        st.caption("The gallery is empty.")
        return
    cols = st.columns(4)
    for i, img in enumerate(state.cache.gallery):
        with cols[i % 4]:
            st.image(image_source(state, img.url), caption=img.alt, use_container_width=True)
            if confirm_action(f"gal_del_{img.id}", "Delete", "Delete this image?"):
                show_notice(state.delete_gallery_image(img.id), rerun=True)
