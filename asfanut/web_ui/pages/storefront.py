"""公開ストアページ。"""
from __future__ import annotations

import datetime

import streamlit as st

from asfanut.store.models import CollectibleItem, ItemType
from asfanut.ui.controller import Controller
from asfanut.ui.state import Screen
from asfanut.util.image import data_url_to_bytes
from asfanut.web_ui.data_queries import TYPE_FILTER_ALL, filter_storefront_items
from asfanut.web_ui.pages.constants import FOOTER_DISCLAIMER_MARKDOWN, STORE_TAGLINE

_TYPE_OPTIONS = {
    TYPE_FILTER_ALL: "הכל",
    ItemType.COIN.name: "מטבעות",
    ItemType.STAMP.name: "בולים",
}
_COLUMNS = 3


def _render_card(controller: Controller, item: CollectibleItem, currency: str) -> None:
    with st.container(border=True):
        if item.front_image:
            st.image(data_url_to_bytes(item.front_image), use_container_width=True)
        st.markdown(f"**{item.display_name()}**")
        if item.analysis:
            st.caption(f"{item.analysis.origin} • {item.analysis.year}")
        st.caption(item.type.value)
        if item.is_sold:
            st.markdown("~~" + f"{item.user_price} {currency}" + "~~ · **נמכר**")
            label = "צפה בפריט"
        else:
            st.markdown(f"### {item.user_price} {currency}")
            label = "לפרטים ורכישה ←"
        if st.button(label, key=f"view_{item.id}", use_container_width=True):
            controller.view_product(item.id)
            st.rerun()


def render_storefront(controller: Controller, currency: str = "₪") -> None:
    """storefront 画面を描画。管理者用の操作はログインボタンのみ表示。"""
    state = controller.state
    profile = state.profile
    if profile is None:
        st.info("החנות עדיין לא הוגדרה.")
        return

    col_logo, col_title, col_admin = st.columns([1, 4, 1])
    with col_logo:
        if profile.logo_url:
            st.image(data_url_to_bytes(profile.logo_url), width=120)
    with col_title:
        st.title(profile.store_name)
        st.markdown(STORE_TAGLINE)
    with col_admin:
        if st.button("🔒 כניסת מנהל", help="כניסת מנהל / העלאת פריטים"):
            controller.navigate(Screen.DASHBOARD)
            st.rerun()

    st.markdown("---")
    st.markdown("## פריטים למכירה")
    col_search, col_type = st.columns([3, 1])
    with col_search:
        search = st.text_input("חיפוש", placeholder="חיפוש...", label_visibility="collapsed")
    with col_type:
        type_filter = st.selectbox(
            "סוג",
            list(_TYPE_OPTIONS.keys()),
            format_func=lambda k: _TYPE_OPTIONS[k],
            label_visibility="collapsed",
        )

    items = filter_storefront_items(state.items, search=search, type_filter=type_filter)
    if not items:
        st.info("לא נמצאו פריטים. נסה לשנות את החיפוש או חזור מאוחר יותר")
    else:
        for start in range(0, len(items), _COLUMNS):
            cols = st.columns(_COLUMNS)
            for col, item in zip(cols, items[start:start + _COLUMNS]):
                with col:
                    _render_card(controller, item, currency)

    st.markdown("---")
    st.markdown(FOOTER_DISCLAIMER_MARKDOWN)
    if st.button("מדיניות פרטיות · תנאי שימוש · הצהרת נגישות"):
        controller.open_legal()
        st.rerun()
    st.caption(f"© {datetime.date.today().year} {profile.store_name}. כל הזכויות שמורות.")
