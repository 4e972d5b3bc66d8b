"""商品詳細ページ（問い合わせ・価格提案）。"""
from __future__ import annotations

import streamlit as st

from asfanut.msg.generator import build_mailto, generate_inquiry, generate_offer
from asfanut.ui.controller import Controller
from asfanut.util.image import data_url_to_bytes
from asfanut.web_ui.pages.constants import PRODUCT_WARNING


def render_product(controller: Controller, currency: str = "₪") -> None:
    """product 画面を描画。"""
    state = controller.state
    item = state.selected_item
    profile = state.profile
    if item is None or profile is None:
        st.warning("הפריט לא נמצא.")
        if st.button("→ חזרה"):
            controller.go_back()
            st.rerun()
        return

    if st.button("→ חזרה"):
        controller.go_back()
        st.rerun()

    col_images, col_details = st.columns([1, 1])
    with col_images:
        st.image(data_url_to_bytes(item.front_image), caption="צד קדמי", use_container_width=True)
        st.image(data_url_to_bytes(item.back_image), caption="צד אחורי", use_container_width=True)

    with col_details:
        st.title(item.display_name())
        st.caption(item.type.value)
        if item.analysis:
            st.markdown(f"**שנת הנפקה:** {item.analysis.year}")
            st.markdown(f"**ארץ מוצא:** {item.analysis.origin}")
            st.markdown(f"**מצב:** {item.analysis.condition_grade}")
            st.markdown("#### תיאור הפריט")
            st.markdown(item.analysis.description)
            if item.analysis.anomalies:
                with st.container(border=True):
                    st.markdown("**⚠️ הערות מיוחדות / חריגות**")
                    st.markdown("\n".join(f"- {note}" for note in item.analysis.anomalies))

        if item.is_sold:
            st.error("פריט זה נמכר")
        else:
            st.markdown(f"## {item.user_price} {currency}")
            subject, body = generate_inquiry(item, profile)
            st.link_button("📧 צור קשר לרכישה", build_mailto(profile.email, subject, body), type="primary")
            if profile.address:
                st.caption(f"ניתן לתאם בדיקה בכתובת: {profile.address}")

            with st.expander("💬 הצע מחיר"):
                with st.form(f"offer_{item.id}"):
                    offer = st.text_input("הצעת מחיר (₪)")
                    buyer_name = st.text_input("שם")
                    buyer_phone = st.text_input("טלפון")
                    submitted = st.form_submit_button("הכן הצעה")
                if submitted:
                    if not offer.strip():
                        st.warning("יש להזין סכום.")
                    else:
                        subject, body = generate_offer(item, profile, offer, buyer_name, buyer_phone)
                        st.link_button("📨 שלח הצעה במייל", build_mailto(profile.email, subject, body))

        st.info(PRODUCT_WARNING)
