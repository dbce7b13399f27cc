# screens/gallery.py
from __future__ import annotations
import streamlit as st

from core.app_state import AppState
from core.ui import image_source, open_lightbox

PER_ROW = 3

def render(state: AppState):
    st.markdown("<h2 style='text-align:center'>Gallery</h2>", unsafe_allow_html=True)
    st.markdown("<p style='text-align:center'>Memorable Moments & Activities</p>", unsafe_allow_html=True)

    images = state.cache.gallery
    if not images:
        st.info("No photos yet.")
        return

    for start in range(0, len(images), PER_ROW):
        cols = st.columns(PER_ROW)
        for col, img in zip(cols, images[start:start + PER_ROW]):
            with col:
                st.image(image_source(state, img.url), caption=img.alt, use_container_width=True)
                if st.button("🔍 View", key=f"gal_view_{img.id}"):
                    open_lightbox(state, img.url)
