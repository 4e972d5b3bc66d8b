"""ストア設定ページ（初回セットアップ・設定変更）。"""
from __future__ import annotations

import streamlit as st

from asfanut.store.models import StoreProfile
from asfanut.ui.controller import Controller
from asfanut.util.image import data_url_to_bytes, to_data_url
from asfanut.web_ui.pages.constants import API_KEY_GUIDE_MARKDOWN, TERMS_LABEL

_LOGO_KEY = "setup_logo"
_COLORS_KEY = "setup_suggested_colors"
_THEME_KEY = "setup_theme_color"
_API_KEY = "setup_api_key"


def _pick_color(color: str) -> None:
    st.session_state[_THEME_KEY] = color


def _reset_design(default_color: str) -> None:
    st.session_state[_COLORS_KEY] = []
    st.session_state[_THEME_KEY] = default_color


def _render_branding(controller: Controller, current: StoreProfile | None, default_color: str) -> None:
    """ロゴと配色。AI による配色候補は見た目だけなので失敗しても既定色が返る。"""
    st.markdown("#### 🎨 מיתוג ועיצוב")
    if _LOGO_KEY not in st.session_state:
        st.session_state[_LOGO_KEY] = current.logo_url if current else None
    if _THEME_KEY not in st.session_state:
        st.session_state[_THEME_KEY] = (current.theme_color if current else None) or default_color

    col_logo, col_color = st.columns(2)
    with col_logo:
        uploaded = st.file_uploader("לוגו", type=["png", "jpg", "jpeg", "webp"], key="setup_logo_upload")
        if uploaded is not None:
            logo = to_data_url(uploaded.getvalue())
            if logo != st.session_state[_LOGO_KEY]:
                st.session_state[_LOGO_KEY] = logo
                st.session_state[_COLORS_KEY] = []
        if st.session_state[_LOGO_KEY]:
            st.image(data_url_to_bytes(st.session_state[_LOGO_KEY]), width=160)

    with col_color:
        st.color_picker("צבע ראשי לחנות", key=_THEME_KEY)
        if st.session_state[_LOGO_KEY]:
            suggestions = st.session_state.get(_COLORS_KEY) or []
            if not suggestions:
                if st.button("✨ הצע צבעים מהלוגו באמצעות AI"):
                    with st.spinner("מנתח צבעים..."):
                        st.session_state[_COLORS_KEY] = controller.suggest_colors(
                            st.session_state[_LOGO_KEY], st.session_state.get(_API_KEY, "")
                        )
                    st.rerun()
            else:
                cols = st.columns(len(suggestions))
                for col, color in zip(cols, suggestions):
                    col.button(color, key=f"pick_{color}", on_click=_pick_color, args=(color,))
        st.button("אפס לברירת מחדל", on_click=_reset_design, args=(default_color,))


def render_setup(controller: Controller, default_color: str = "#2563eb") -> None:
    """setup 画面を描画。"""
    current = controller.state.profile
    if controller.state.load_failed:
        st.title("⚙️ הגדרת חנות")
        st.warning("לא ניתן לטעון את נתוני החנות כרגע. נסה לטעון שוב.")
        if st.button("🔄 טען מחדש", type="primary"):
            controller.load(st.query_params.get("item"))
            st.rerun()
        return
    st.title("⚙️ עדכון פרטי חנות" if current and not current.is_legacy else "⚙️ הגדרת חנות")
    st.caption("הזן את פרטי העסק שלך והגדרות המערכת")

    st.markdown("#### 🔐 הגדרות חיבור ל-AI (חובה)")
    st.text_input(
        "Google Gemini API Key",
        value=current.api_key if current else "",
        type="password",
        placeholder="AIzaSy...",
        key=_API_KEY,
    )
    st.markdown(API_KEY_GUIDE_MARKDOWN)

    _render_branding(controller, current, default_color)

    with st.form("setup_form"):
        st.markdown("#### 🏪 פרטי החנות")
        col1, col2 = st.columns(2)
        with col1:
            store_name = st.text_input("שם החנות", value=current.store_name if current else "", placeholder="אוסף הזהב שלי")
            phone = st.text_input("טלפון", value=current.phone if current else "", placeholder="050-1234567")
        with col2:
            owner_name = st.text_input("שם בעלים", value=current.owner_name if current else "", placeholder="ישראל ישראלי")
            email = st.text_input("אימייל", value=current.email if current else "", placeholder="example@store.com")
        address = st.text_input("כתובת", value=current.address if current else "", placeholder="רחוב הרצל 1, תל אביב")

        st.markdown("#### 🔑 סיסמת ניהול (חובה)")
        password = st.text_input(
            "סיסמה",
            value=current.password if current else "",
            type="password",
            help="סיסמה זו תשמש אותך לכניסה לממשק הוספת המוצרים.",
        )
        terms = st.checkbox(TERMS_LABEL, value=current.terms_accepted if current else False)

        submitted = st.form_submit_button("💾 שמור והמשך", type="primary")

    if submitted:
        profile = StoreProfile(
            store_name=store_name.strip(),
            owner_name=owner_name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            address=address.strip(),
            logo_url=st.session_state.get(_LOGO_KEY),
            theme_color=st.session_state.get(_THEME_KEY) or default_color,
            password=password,
            api_key=st.session_state.get(_API_KEY, "").strip(),
            terms_accepted=terms,
        )
        with st.spinner("שומר..."):
            ok = controller.save_profile(profile)
        if ok:
            for key in (_LOGO_KEY, _COLORS_KEY, _THEME_KEY):
                st.session_state.pop(key, None)
        st.rerun()

    if current and not current.is_legacy and controller.state.authenticated:
        if st.button("← חזרה ללוח הבקרה"):
            controller.cancel_edit()
            st.rerun()
