"""HTTP クライアント：タイムアウト付きの JSON 送受信。リトライは行わない。"""
import os
from typing import Any, Optional

import requests

def get_timeout_sec() -> int:
    return int(os.getenv("HTTP_TIMEOUT_SEC", "30"))

def _decode(r: Any) -> Any:
    # 空ボディは None（プロフィール未登録の GET /profile など）
    return r.json() if r.content else None

def get_json(
    url: str,
    params: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
    timeout_sec: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> Any:
    """GET で JSON を取得。"""
    timeout_sec = timeout_sec or get_timeout_sec()
    use_session = session or requests
    if hasattr(use_session, "get"):
        r = use_session.get(url, params=params, headers=headers or {}, timeout=timeout_sec)
    else:
        r = use_session.request("GET", url, params=params, headers=headers or {}, timeout=timeout_sec)
    r.raise_for_status()
    return _decode(r)

def post_json(
    url: str,
    json_body: Any,
    headers: Optional[dict[str, str]] = None,
    timeout_sec: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> Any:
    """POST application/json。"""
    timeout_sec = timeout_sec or get_timeout_sec()
    use_session = session or requests
    h = dict(headers or {})
    if "Content-Type" not in h:
        h["Content-Type"] = "application/json"
    if hasattr(use_session, "post"):
        r = use_session.post(url, json=json_body, headers=h, timeout=timeout_sec)
    else:
        r = use_session.request("POST", url, json=json_body, headers=h, timeout=timeout_sec)
    r.raise_for_status()
    return _decode(r)

def delete(
    url: str,
    headers: Optional[dict[str, str]] = None,
    timeout_sec: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> Any:
    """DELETE を送信。レスポンスに JSON があれば返す。"""
    timeout_sec = timeout_sec or get_timeout_sec()
    use_session = session or requests
    if hasattr(use_session, "delete"):
        r = use_session.delete(url, headers=headers or {}, timeout=timeout_sec)
    else:
        r = use_session.request("DELETE", url, headers=headers or {}, timeout=timeout_sec)
    r.raise_for_status()
    return _decode(r)
