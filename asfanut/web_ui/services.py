"""
Web UI 用サービス集約エントリポイント。
セッションごとの Controller の生成・取得を提供。
"""
from __future__ import annotations

from typing import Optional

import streamlit as st

from asfanut.settings import AppSettings, load_settings
from asfanut.ui.controller import Controller, create_controller

_CONTROLLER_KEY = "controller"
_SETTINGS_KEY = "app_settings"


def get_settings() -> AppSettings:
    if _SETTINGS_KEY not in st.session_state:
        st.session_state[_SETTINGS_KEY] = load_settings()
    return st.session_state[_SETTINGS_KEY]


def get_controller() -> Controller:
    """セッション初回のみプロフィール・アイテムを読み込む。?item=<id> でディープリンク。"""
    if _CONTROLLER_KEY not in st.session_state:
        controller = create_controller(get_settings())
        deep_link: Optional[str] = st.query_params.get("item")
        controller.load(deep_link_item_id=deep_link)
        st.session_state[_CONTROLLER_KEY] = controller
    return st.session_state[_CONTROLLER_KEY]


def reset_session() -> None:
    """エラーバウンダリの「再読み込み」。メモリ上の状態を捨ててバックエンドから読み直す。"""
    for key in list(st.session_state.keys()):
        del st.session_state[key]


__all__ = ["get_settings", "get_controller", "reset_session"]
