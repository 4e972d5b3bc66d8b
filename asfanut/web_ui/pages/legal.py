"""法的情報ページ。"""
from __future__ import annotations

import streamlit as st

from asfanut.ui.controller import Controller
from asfanut.web_ui.pages.constants import FOOTER_DISCLAIMER_MARKDOWN, LEGAL_MARKDOWN


def render_legal(controller: Controller) -> None:
    st.title("⚖️ מידע משפטי")
    st.markdown(LEGAL_MARKDOWN)
    st.markdown("---")
    st.markdown(FOOTER_DISCLAIMER_MARKDOWN)
    if st.button("→ חזרה"):
        controller.go_back()
        st.rerun()
