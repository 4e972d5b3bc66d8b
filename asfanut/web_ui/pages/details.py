"""解析結果の確認・編集ページ。"""
from __future__ import annotations

import streamlit as st

from asfanut.store.models import ItemFields, ItemStatus
from asfanut.ui.controller import Controller
from asfanut.util.image import data_url_to_bytes
from asfanut.web_ui.pages.constants import ANALYSIS_DISCLAIMER

_STATUS_LABELS = {ItemStatus.AVAILABLE: "זמין למכירה", ItemStatus.SOLD: "נמכר"}


def render_details(controller: Controller, currency: str = "₪") -> None:
    """details 画面を描画。下書きが無い場合はプレースホルダのみ。"""
    pending = controller.state.pending
    if pending is None:
        st.warning("שגיאה: אין נתוני ניתוח")
        if st.button("→ חזרה ללוח הבקרה"):
            controller.cancel_edit()
            st.rerun()
        return

    st.title("📝 פרטי הפריט" if pending.is_new else "✏️ עריכת פריט")
    fields = pending.initial_fields()
    # 再解析で初期値が変わったらフォームを作り直す
    form_key = f"details_{abs(hash((pending.analysis, pending.original.id if pending.original else '')))}"

    col_images, col_form = st.columns([1, 2])
    with col_images:
        st.image(data_url_to_bytes(pending.front_image), caption="צד קדמי", use_container_width=True)
        st.image(data_url_to_bytes(pending.back_image), caption="צד אחורי", use_container_width=True)
        if pending.analysis:
            st.caption(f"רמת ביטחון בזיהוי: {pending.analysis.confidence_score:.0f}%")
        if st.button("🔄 בצע ניתוח חוזר ב-AI"):
            with st.spinner("מעבד..."):
                controller.reanalyze()
            st.rerun()
        st.caption("לחיצה על ניתוח חוזר תשלח את התמונות מחדש לבדיקה ותדרוס את השדות הקיימים.")

    with col_form:
        with st.form(form_key):
            status = st.selectbox(
                "סטטוס",
                list(_STATUS_LABELS.keys()),
                index=list(_STATUS_LABELS.keys()).index(fields.status),
                format_func=lambda s: _STATUS_LABELS[s],
            )
            item_name = st.text_input("שם הפריט", value=fields.item_name)
            col1, col2 = st.columns(2)
            with col1:
                origin = st.text_input("ארץ מוצא", value=fields.origin)
            with col2:
                year = st.text_input("שנה", value=fields.year)
            condition_grade = st.text_input("מצב", value=fields.condition_grade)
            description = st.text_area("תיאור", value=fields.description, height=120)
            anomalies = st.text_area(
                "חריגות / הערות (שורה לכל הערה)",
                value="\n".join(fields.anomalies),
                height=80,
            )
            estimated_value_range = st.text_input("הערכת שווי", value=fields.estimated_value_range)
            st.markdown("#### 💰 תמחור")
            user_price = st.text_input(f"מחיר מכירה ({currency})", value=fields.user_price, placeholder="לדוגמה: 150")
            st.caption("* המחיר שתקבע הוא המחיר שיוצג לקונה בחנות.")
            submitted = st.form_submit_button(
                "שמור למאגר" if pending.is_new else "עדכן פריט", type="primary"
            )

        if submitted:
            edited = ItemFields(
                item_name=item_name,
                year=year,
                origin=origin,
                condition_grade=condition_grade,
                description=description,
                estimated_value_range=estimated_value_range,
                anomalies=[line for line in anomalies.splitlines() if line.strip()],
                user_price=user_price,
                status=status,
            )
            with st.spinner("שומר..."):
                controller.save_pending(edited)
            st.rerun()

        if st.button("ביטול"):
            controller.cancel_edit()
            st.rerun()

    st.caption(ANALYSIS_DISCLAIMER)
