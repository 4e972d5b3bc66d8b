"""
Streamlit Web UI エントリーポイント。
ViewState の screen に応じてページを切り替える。
"""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

# プロジェクトルートをパスに追加
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from asfanut.ui.controller import Controller
from asfanut.ui.state import Screen
from asfanut.util.log import get_logger, setup_logging
from asfanut.web_ui.pages import (
    render_dashboard,
    render_details,
    render_legal,
    render_login,
    render_product,
    render_scan,
    render_setup,
    render_storefront,
)
from asfanut.web_ui.pages.constants import RTL_CSS
from asfanut.web_ui.services import get_controller, get_settings, reset_session

setup_logging()
logger = get_logger("asfanut-web")

# ページ設定
st.set_page_config(
    page_title="אספנות",
    page_icon="🪙",
    layout="wide",
    initial_sidebar_state="collapsed",
)
st.markdown(RTL_CSS, unsafe_allow_html=True)


def _theme_css(color: str) -> str:
    return (
        "<style>"
        f".stApp button[kind='primary'] {{ background-color: {color}; border-color: {color}; }}"
        f".stApp h1 {{ color: {color}; }}"
        "</style>"
    )


def _render_error(controller: Controller) -> None:
    """操作失敗のアラート。閉じるまで表示し続ける。"""
    message = controller.state.error
    if not message:
        return
    col_msg, col_close = st.columns([6, 1])
    with col_msg:
        st.error(message)
    with col_close:
        if st.button("✕", key="dismiss_error"):
            controller.dismiss_error()
            st.rerun()


def _route(controller: Controller) -> None:
    settings = get_settings()
    state = controller.state
    currency = settings.currency_symbol
    theme = state.profile.theme_color if state.profile and state.profile.theme_color else settings.default_theme_color
    st.markdown(_theme_css(theme), unsafe_allow_html=True)

    _render_error(controller)

    screen = state.screen
    if screen is Screen.SETUP:
        render_setup(controller, default_color=settings.default_theme_color)
    elif screen is Screen.LOGIN:
        render_login(controller)
    elif screen is Screen.DASHBOARD:
        render_dashboard(controller, currency)
    elif screen is Screen.SCAN:
        render_scan(controller)
    elif screen is Screen.DETAILS:
        render_details(controller, currency)
    elif screen is Screen.LEGAL:
        render_legal(controller)
    elif screen is Screen.PRODUCT:
        render_product(controller, currency)
    else:
        render_storefront(controller, currency)


# ページ描画中の想定外例外はここで受け止め、再読み込みパネルを出す
try:
    _route(get_controller())
except Exception as e:
    logger.exception("render failed: %s", e)
    st.error("משהו השתבש. אירעה שגיאה בלתי צפויה בטעינת הדף.")
    with st.expander("פרטי השגיאה", expanded=False):
        st.exception(e)
    if st.button("🔄 טען מחדש"):
        reset_session()
        st.rerun()
