"""画像処理ユーティリティ。画像はすべて data URL（base64 埋め込み）で扱う。"""
from __future__ import annotations

import base64
import io
from typing import Optional

DEFAULT_MIME = "image/jpeg"


def to_data_url(raw: bytes, max_side: int = 1600) -> Optional[str]:
    """
    アップロード画像を JPEG に変換して data URL 化。
    RGBA/PNG などは JPEG に変換し、長辺 max_side を超える場合は縮小する。
    変換失敗時は元のバイト列をそのまま埋め込む。
    """
    try:
        from PIL import Image

        img = Image.open(io.BytesIO(raw))
        if img.mode in ("RGBA", "P", "LA"):
            img = img.convert("RGB")
        if max(img.size) > max_side:
            img.thumbnail((max_side, max_side))
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=90)
        return f"data:{DEFAULT_MIME};base64," + base64.b64encode(buf.getvalue()).decode("ascii")
    except Exception:
        if not raw:
            return None
        return f"data:{DEFAULT_MIME};base64," + base64.b64encode(raw).decode("ascii")


def split_data_url(data: str, default_mime: str = DEFAULT_MIME) -> tuple[str, str]:
    """data URL を (mime, base64 本体) に分解。プレフィックスが無ければ全体を本体とみなす。"""
    if data.startswith("data:") and "," in data:
        header, payload = data.split(",", 1)
        mime = header[5:].split(";", 1)[0] or default_mime
        return mime, payload
    return default_mime, data


def data_url_to_bytes(data: str) -> bytes:
    """st.image 表示用に data URL をバイト列へ戻す。"""
    _, payload = split_data_url(data)
    return base64.b64decode(payload)
