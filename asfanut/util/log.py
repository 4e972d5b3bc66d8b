"""簡易ロギング。アイテムの保存・削除は必ずログに残す。"""
import logging
import sys
from typing import Any, Optional

def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

def log_item_event(
    logger: logging.Logger,
    event: str,
    item_id: str,
    status: Optional[str] = None,
    price: Optional[str] = None,
    **extra: Any,
) -> None:
    """save / delete / toggle などのアイテム操作を1行で出力。"""
    logger.info(
        "item_event event=%s item_id=%s status=%s price=%s",
        event,
        item_id,
        status or "-",
        price or "-",
        extra=extra,
    )
