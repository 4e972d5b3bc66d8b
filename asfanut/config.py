"""設定の読み込み・保存。web / server / CLI で共有。"""
from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parent.parent


def default_config() -> dict[str, Any]:
    """デフォルト設定を返す。"""
    return {
        "storage": {
            "type": "local",  # local: 端末内 SQLite / remote: REST サーバー
            "api_base_url": "http://localhost:3000/api",
            "local_db_path": "data/asfanut_local.db",
        },
        "server": {
            "host": "0.0.0.0",
            "port": 3000,
            "db_path": "data/database.sqlite",
        },
        "ai": {
            "model": "gemini-2.5-flash",
            "endpoint": "https://generativelanguage.googleapis.com/v1beta/models",
        },
        "branding": {"default_theme_color": "#2563eb"},
        "display": {"timezone": "Asia/Jerusalem", "currency_symbol": "₪"},
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> dict[str, Any]:
    """config.yaml を読み込みデフォルトに上書きする。存在しない・読み込みエラー時はデフォルトを返す。"""
    path = config_path or os.getenv("CONFIG_PATH") or str(ROOT / "config.yaml")
    if not os.path.isfile(path):
        return default_config()
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except Exception:
        return default_config()
    if not isinstance(loaded, dict):
        return default_config()
    return _merge(default_config(), loaded)


def save_config(config: dict[str, Any], config_path: Optional[str] = None) -> None:
    """config.yaml に保存する。"""
    path = config_path or str(ROOT / "config.yaml")
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, allow_unicode=True, default_flow_style=False)


def resolve_path(path: str) -> str:
    """相対パスはプロジェクトルート基準で解決。"""
    p = Path(path)
    if not p.is_absolute():
        p = ROOT / p
    return str(p)
