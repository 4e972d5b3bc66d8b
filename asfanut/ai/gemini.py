"""
Gemini（generateContent REST）による画像解析クライアント。
状態を持たない request/response のみ。リトライ・バックオフは行わない。
"""
from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional

import requests

from asfanut.ai import prompts
from asfanut.store.models import AIAnalysisResult, ItemType, StoreProfile
from asfanut.util import http
from asfanut.util.image import split_data_url

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
FALLBACK_COLORS = ["#2563eb", "#0f172a", "#475569"]
MAX_COLORS = 3
_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class AnalysisError(Exception):
    """AI サービス呼び出しの失敗。"""


class MissingApiKeyError(AnalysisError):
    """API キーが未設定。"""


def resolve_api_key(override: Optional[str] = None, profile: Optional[StoreProfile] = None) -> str:
    """指定キー → プロフィールの apiKey → 環境変数 GEMINI_API_KEY の順で解決。無ければ空文字。"""
    if override and override.strip():
        return override.strip()
    if profile and profile.api_key.strip():
        return profile.api_key.strip()
    return (os.getenv("GEMINI_API_KEY") or "").strip()


def _image_part(image: str, default_mime: str) -> dict[str, Any]:
    mime, payload = split_data_url(image, default_mime=default_mime)
    return {"inlineData": {"mimeType": mime, "data": payload}}


def _generate(
    api_key: str,
    parts: list[dict[str, Any]],
    schema: dict[str, Any],
    model: Optional[str] = None,
    endpoint: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> dict[str, Any]:
    """generateContent を呼び、JSON モードの応答テキストを dict にして返す。"""
    url = f"{(endpoint or DEFAULT_ENDPOINT).rstrip('/')}/{model or DEFAULT_MODEL}:generateContent"
    payload = {
        "contents": [{"parts": parts}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        },
    }
    try:
        data = http.post_json(url, payload, headers={"x-goog-api-key": api_key}, session=session)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        raise AnalysisError(f"Gemini API error: HTTP {status}") from e
    except (requests.RequestException, OSError, ValueError) as e:
        raise AnalysisError(f"Gemini API request failed: {e}") from e

    text = _candidate_text(data)
    if not text:
        raise AnalysisError("No data returned from AI")
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise AnalysisError(f"AI returned invalid JSON: {text[:100]}") from e
    if not isinstance(parsed, dict):
        raise AnalysisError("AI returned unexpected JSON shape")
    return parsed


def _candidate_text(data: Any) -> str:
    """candidates[0].content.parts のテキストを連結。形が崩れていれば AnalysisError。"""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise AnalysisError("No data returned from AI")
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise AnalysisError("AI returned unexpected response shape")
    return "".join(
        str(p.get("text") or "") for p in parts if isinstance(p, dict)
    ).strip()


def analyze_item(
    front_image: str,
    back_image: str,
    item_type: ItemType,
    api_key: str,
    model: Optional[str] = None,
    endpoint: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> AIAnalysisResult:
    """表・裏の2画像と種別を送り、識別・査定結果を返す。"""
    if not api_key:
        raise MissingApiKeyError("Missing Google API Key. Please configure it in Store Settings.")
    parts = [
        _image_part(front_image, "image/jpeg"),
        _image_part(back_image, "image/jpeg"),
        {"text": prompts.analysis_prompt(item_type)},
    ]
    data = _generate(api_key, parts, prompts.ANALYSIS_SCHEMA, model=model, endpoint=endpoint, session=session)
    try:
        result = AIAnalysisResult.from_dict(data)
    except (TypeError, ValueError) as e:
        raise AnalysisError(f"AI returned malformed analysis: {e}") from e
    if result is None:
        raise AnalysisError("No data returned from AI")
    logger.info(
        "analysis done type=%s item_name=%s confidence=%s",
        item_type.name,
        result.item_name,
        result.confidence_score,
    )
    return result


def analyze_logo_colors(
    logo_image: str,
    api_key: str,
    model: Optional[str] = None,
    endpoint: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> list[str]:
    """ロゴからアクセントカラー候補を最大3色返す。見た目だけの機能なので失敗時は既定パレットを返す。"""
    if not api_key:
        logger.warning("No API key provided for color analysis")
        return list(FALLBACK_COLORS)
    parts = [_image_part(logo_image, "image/png"), {"text": prompts.LOGO_COLORS_PROMPT}]
    try:
        data = _generate(api_key, parts, prompts.LOGO_COLORS_SCHEMA, model=model, endpoint=endpoint, session=session)
    except AnalysisError as e:
        logger.warning("Color analysis error: %s", e)
        return list(FALLBACK_COLORS)
    raw = data.get("colors")
    if not isinstance(raw, list):
        raw = []
    colors = [c.strip() for c in raw if isinstance(c, str) and _HEX_COLOR.match(c.strip())]
    return colors[:MAX_COLORS] or list(FALLBACK_COLORS)
