"""スキャン（撮影・アップロード）ページ。"""
from __future__ import annotations

from typing import Optional

import streamlit as st

from asfanut.store.models import ItemType
from asfanut.ui.controller import Controller
from asfanut.util.image import data_url_to_bytes, to_data_url

_SIDES = (("front", "צד קדמי"), ("back", "צד אחורי"))


def _upload_side(side: str, label: str) -> Optional[str]:
    """アップロードまたはカメラ撮影した画像を data URL で返す。"""
    st.markdown(f"**{label}**")
    source = st.radio(
        "מקור",
        ["העלאה", "מצלמה"],
        horizontal=True,
        key=f"scan_source_{side}",
        label_visibility="collapsed",
    )
    if source == "מצלמה":
        uploaded = st.camera_input(label, key=f"scan_camera_{side}", label_visibility="collapsed")
    else:
        uploaded = st.file_uploader(
            label, type=["png", "jpg", "jpeg", "webp"], key=f"scan_file_{side}", label_visibility="collapsed"
        )
    if uploaded is None:
        return None
    image = to_data_url(uploaded.getvalue())
    if image:
        st.image(data_url_to_bytes(image), use_container_width=True)
    return image


def render_scan(controller: Controller) -> None:
    """scan 画面を描画。解析中はボタンを無効化する。"""
    st.title("📷 סריקת פריט חדש")

    item_type = st.radio(
        "סוג הפריט",
        [ItemType.COIN, ItemType.STAMP],
        format_func=lambda t: t.value,
        horizontal=True,
    )

    images: dict[str, Optional[str]] = {}
    cols = st.columns(2)
    for col, (side, label) in zip(cols, _SIDES):
        with col:
            images[side] = _upload_side(side, label)

    ready = bool(images["front"] and images["back"])
    col_analyze, col_skip, col_cancel = st.columns([2, 1, 1])
    with col_analyze:
        if st.button("🔍 נתח באמצעות AI", type="primary", disabled=not ready):
            with st.spinner("מנתח..."):
                controller.analyze(images["front"], images["back"], item_type)
            st.rerun()
    with col_skip:
        if st.button("דלג על ניתוח", disabled=not ready):
            controller.skip_analysis(images["front"], images["back"], item_type)
            st.rerun()
    with col_cancel:
        if st.button("ביטול"):
            controller.cancel_edit()
            st.rerun()
