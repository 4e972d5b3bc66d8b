"""Gemini クライアントのユニットテスト（HTTP はモンキーパッチ）。"""
import json

import pytest
import requests

from asfanut.ai import gemini
from asfanut.ai.gemini import AnalysisError, MissingApiKeyError
from asfanut.store.models import ItemType
from asfanut.util import http
from tests.factories import BACK, FRONT, make_profile

LOGO = "data:image/png;base64,bG9nbw=="


def _response(payload):
    return {"candidates": [{"content": {"parts": [{"text": json.dumps(payload)}]}}]}


class FakePost:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, url, json_body, headers=None, timeout_sec=None, session=None):
        self.calls.append({"url": url, "body": json_body, "headers": headers})
        if self.error:
            raise self.error
        return self.result


def test_analyze_item_parses_json_response(monkeypatch):
    fake = FakePost(
        _response(
            {
                "itemName": "10 מיל",
                "year": "1927",
                "origin": "פלשתינה",
                "conditionGrade": "טוב מאוד",
                "description": "מטבע ברונזה",
                "estimatedValueRange": "$10 - $20",
                "anomalies": ["שריטה"],
                "confidenceScore": 91,
            }
        )
    )
    monkeypatch.setattr(http, "post_json", fake)
    result = gemini.analyze_item(FRONT, BACK, ItemType.COIN, "k", model="m1", endpoint="https://ai.test/models/")

    assert result.item_name == "10 מיל"
    assert result.anomalies == ("שריטה",)
    assert result.confidence_score == 91.0

    call = fake.calls[0]
    assert call["url"] == "https://ai.test/models/m1:generateContent"
    assert call["headers"] == {"x-goog-api-key": "k"}
    parts = call["body"]["contents"][0]["parts"]
    assert parts[0]["inlineData"] == {"mimeType": "image/jpeg", "data": "ZnJvbnQ="}
    assert parts[1]["inlineData"]["data"] == "YmFjaw=="
    assert "coin" in parts[2]["text"]
    assert call["body"]["generationConfig"]["responseMimeType"] == "application/json"


def test_analyze_item_without_key_does_not_call_api(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr(http, "post_json", fake)
    with pytest.raises(MissingApiKeyError):
        gemini.analyze_item(FRONT, BACK, ItemType.STAMP, "")
    assert fake.calls == []


@pytest.mark.parametrize(
    "result",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"content": {"parts": [{"text": "not json"}]}}]},
        {"candidates": [{"content": {"parts": [{"text": "[1, 2]"}]}}]},
        {"candidates": ["oops"]},
        {"candidates": [{"content": "oops"}]},
        {"candidates": [{"content": {"parts": "oops"}}]},
        ["not", "an", "object"],
        _response({"itemName": "x", "confidenceScore": "high"}),
        _response({"itemName": "x", "anomalies": 5}),
    ],
)
def test_analyze_item_bad_response_raises(monkeypatch, result):
    monkeypatch.setattr(http, "post_json", FakePost(result))
    with pytest.raises(AnalysisError):
        gemini.analyze_item(FRONT, BACK, ItemType.COIN, "k")


def test_analyze_item_transport_error_raises(monkeypatch):
    monkeypatch.setattr(http, "post_json", FakePost(error=requests.Timeout("slow")))
    with pytest.raises(AnalysisError):
        gemini.analyze_item(FRONT, BACK, ItemType.COIN, "k")


def test_logo_colors_filters_invalid_and_caps_at_three(monkeypatch):
    fake = FakePost(_response({"colors": ["#111111", "red", "#222", "#333333", "#444444"]}))
    monkeypatch.setattr(http, "post_json", fake)
    assert gemini.analyze_logo_colors(LOGO, "k") == ["#111111", "#222", "#333333"]
    assert fake.calls[0]["body"]["contents"][0]["parts"][0]["inlineData"]["mimeType"] == "image/png"


def test_logo_colors_fallback_on_error(monkeypatch):
    monkeypatch.setattr(http, "post_json", FakePost(error=requests.ConnectionError("down")))
    assert gemini.analyze_logo_colors(LOGO, "k") == gemini.FALLBACK_COLORS


def test_logo_colors_fallback_without_key(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr(http, "post_json", fake)
    assert gemini.analyze_logo_colors(LOGO, "") == ["#2563eb", "#0f172a", "#475569"]
    assert fake.calls == []


def test_logo_colors_fallback_when_none_valid(monkeypatch):
    monkeypatch.setattr(http, "post_json", FakePost(_response({"colors": ["blue"]})))
    assert gemini.analyze_logo_colors(LOGO, "k") == gemini.FALLBACK_COLORS


def test_resolve_api_key_order(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    assert gemini.resolve_api_key(" typed ", make_profile()) == "typed"
    assert gemini.resolve_api_key("", make_profile()) == "key-123"
    assert gemini.resolve_api_key(None, make_profile(api_key="")) == "env-key"
    monkeypatch.delenv("GEMINI_API_KEY")
    assert gemini.resolve_api_key(None, None) == ""


@pytest.mark.parametrize(
    "result",
    [
        {"candidates": ["oops"]},
        {"candidates": [{"content": None}]},
        "garbage",
        _response({"colors": "#111111"}),
        _response({"colors": 7}),
    ],
)
def test_logo_colors_malformed_response_falls_back(monkeypatch, result):
    monkeypatch.setattr(http, "post_json", FakePost(result))
    assert gemini.analyze_logo_colors(LOGO, "k") == gemini.FALLBACK_COLORS
