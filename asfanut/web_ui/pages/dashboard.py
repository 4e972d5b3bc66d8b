"""管理ダッシュボードページ。"""
from __future__ import annotations

import streamlit as st

from asfanut.store.models import CollectibleItem
from asfanut.ui.controller import Controller
from asfanut.ui.state import Screen
from asfanut.util.image import data_url_to_bytes
from asfanut.web_ui.data_queries import get_items_dataframe, summarize_items


def _render_delete_confirmation(controller: Controller, item: CollectibleItem) -> None:
    st.warning(f"האם אתה בטוח שברצונך למחוק את \"{item.display_name()}\"?")
    col_yes, col_no, _ = st.columns([1, 1, 3])
    with col_yes:
        if st.button("🗑️ מחק", type="primary", key="confirm_delete"):
            with st.spinner("מוחק..."):
                controller.confirm_delete()
            st.rerun()
    with col_no:
        if st.button("ביטול", key="cancel_delete"):
            controller.cancel_delete()
            st.rerun()


def _render_item_row(controller: Controller, item: CollectibleItem, currency: str) -> None:
    with st.container(border=True):
        col_img, col_info, col_actions = st.columns([1, 3, 2])
        with col_img:
            if item.front_image:
                st.image(data_url_to_bytes(item.front_image), width=90)
        with col_info:
            st.markdown(f"**{item.display_name()}** · {item.type.value}")
            if item.analysis:
                st.caption(f"שנה: {item.analysis.year} · מצב: {item.analysis.condition_grade}")
            else:
                st.caption("ללא ניתוח AI")
            status = "🔴 נמכר" if item.is_sold else "🟢 זמין"
            st.markdown(f"{item.user_price} {currency} · {status}")
        with col_actions:
            if st.button("✏️ ערוך", key=f"edit_{item.id}"):
                controller.edit_item(item.id)
                st.rerun()
            toggle_label = "סמן כזמין" if item.is_sold else "סמן כנמכר"
            if st.button(toggle_label, key=f"toggle_{item.id}"):
                controller.toggle_status(item.id)
                st.rerun()
            if st.button("🗑️ מחק", key=f"delete_{item.id}"):
                controller.request_delete(item.id)
                st.rerun()


def render_dashboard(controller: Controller, currency: str = "₪") -> None:
    """dashboard を描画。"""
    state = controller.state
    profile = state.profile
    st.title(f"🏠 {profile.store_name if profile else ''}")

    cols = st.columns(6)
    if cols[0].button("➕ פריט חדש", type="primary"):
        controller.start_new_item()
        st.rerun()
    if cols[1].button("🏪 תצוגה מקדימה לחנות"):
        controller.navigate(Screen.STOREFRONT)
        st.rerun()
    if cols[2].button("⚙️ הגדרות"):
        controller.navigate(Screen.SETUP)
        st.rerun()
    if cols[3].button("⚖️ משפטי"):
        controller.open_legal()
        st.rerun()
    if cols[4].button("🔄 רענן"):
        controller.refresh_items()
        st.rerun()
    if cols[5].button("🚪 התנתק"):
        controller.logout()
        st.rerun()

    summary = summarize_items(state.items)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("סה\"כ פריטים", summary["total"])
    m2.metric("זמינים", summary["available"])
    m3.metric("נמכרו", summary["sold"])
    m4.metric("ללא ניתוח", summary["unanalyzed"])

    candidate = state.delete_candidate
    if candidate is not None:
        _render_delete_confirmation(controller, candidate)

    st.markdown("---")
    if not state.items:
        st.info("עדיין אין פריטים במאגר.")
        if st.button("הוסף את הפריט הראשון"):
            controller.start_new_item()
            st.rerun()
        return

    with st.expander("📋 טבלת פריטים", expanded=False):
        st.dataframe(get_items_dataframe(state.items), use_container_width=True, hide_index=True)

    for item in state.items:
        _render_item_row(controller, item, currency)
