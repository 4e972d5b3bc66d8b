"""起動時に一度だけ確定するアプリ設定。"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from asfanut.config import load_config, resolve_path

logger = logging.getLogger(__name__)

STORAGE_LOCAL = "local"
STORAGE_REMOTE = "remote"
# 旧フロントエンドの設定値（BROWSER / SERVER）も受け付ける
_STORAGE_ALIASES = {
    "local": STORAGE_LOCAL,
    "browser": STORAGE_LOCAL,
    "remote": STORAGE_REMOTE,
    "server": STORAGE_REMOTE,
}


@dataclass(frozen=True)
class AppSettings:
    """config.yaml と環境変数から解決した設定。"""

    storage_type: str  # "local" | "remote"
    api_base_url: str
    local_db_path: str
    server_host: str
    server_port: int
    server_db_path: str
    ai_model: str
    ai_endpoint: str
    default_theme_color: str
    timezone: str
    currency_symbol: str

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> AppSettings:
        storage_cfg = config.get("storage", {})
        server_cfg = config.get("server", {})
        ai_cfg = config.get("ai", {})
        branding_cfg = config.get("branding", {})
        display_cfg = config.get("display", {})

        raw_type = str(os.getenv("STORAGE_TYPE") or storage_cfg.get("type") or STORAGE_LOCAL)
        storage_type = _STORAGE_ALIASES.get(raw_type.strip().lower())
        if storage_type is None:
            logger.warning("storage.type=%s は不明です。local にフォールバックします。", raw_type)
            storage_type = STORAGE_LOCAL

        api_base_url = os.getenv("API_BASE_URL") or storage_cfg.get("api_base_url") or ""
        return cls(
            storage_type=storage_type,
            api_base_url=api_base_url.rstrip("/"),
            local_db_path=resolve_path(
                os.getenv("LOCAL_DB_PATH") or storage_cfg.get("local_db_path", "data/asfanut_local.db")
            ),
            server_host=str(server_cfg.get("host", "0.0.0.0")),
            server_port=int(os.getenv("PORT") or server_cfg.get("port", 3000)),
            server_db_path=resolve_path(
                os.getenv("SERVER_DB_PATH") or server_cfg.get("db_path", "data/database.sqlite")
            ),
            ai_model=os.getenv("GEMINI_MODEL") or ai_cfg.get("model") or "gemini-2.5-flash",
            ai_endpoint=str(
                ai_cfg.get("endpoint") or "https://generativelanguage.googleapis.com/v1beta/models"
            ).rstrip("/"),
            default_theme_color=branding_cfg.get("default_theme_color") or "#2563eb",
            timezone=display_cfg.get("timezone") or "Asia/Jerusalem",
            currency_symbol=display_cfg.get("currency_symbol") or "₪",
        )


def load_settings(config_path: Optional[str] = None) -> AppSettings:
    return AppSettings.from_config(load_config(config_path))
