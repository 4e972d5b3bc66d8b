"""管理者ログインページ。"""
from __future__ import annotations

import streamlit as st

from asfanut.ui.controller import Controller
from asfanut.ui.state import Screen


def render_login(controller: Controller) -> None:
    """login 画面を描画。"""
    profile = controller.state.profile
    st.title("🔐 כניסת מנהל")
    if profile:
        st.caption(profile.store_name)

    with st.form("login_form"):
        password = st.text_input("סיסמה", type="password", placeholder="••••••••")
        submitted = st.form_submit_button("התחבר", type="primary")
    if submitted:
        controller.login(password)
        st.rerun()

    if st.button("חזרה לחנות"):
        controller.navigate(Screen.STOREFRONT)
        st.rerun()
