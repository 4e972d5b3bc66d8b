"""Gemini に送るプロンプトとレスポンススキーマ。"""
from __future__ import annotations

from asfanut.store.models import ItemType

ITEM_KIND_EN = {
    ItemType.COIN: "coin",
    ItemType.STAMP: "stamp",
}

ANALYSIS_PROMPT = """
You are an expert numismatist and philatelist.
Analyze these two images (front and back) of a {kind}.

1. Identify the item accurately (Country, Year, Denomination, Name).
2. Grade the condition carefully (e.g., Mint, Fine, Poor) based on visible wear, oxidation, or tears.
3. Detect any anomalies, mint errors, scratches, or unique features that affect value.
4. Provide a realistic market value estimate range in USD.
5. Provide a short professional description in Hebrew.
"""

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "itemName": {"type": "STRING", "description": "Full name of the item in Hebrew"},
        "year": {"type": "STRING", "description": "Year of issue"},
        "origin": {"type": "STRING", "description": "Country of origin in Hebrew"},
        "conditionGrade": {"type": "STRING", "description": "Condition grade in Hebrew"},
        "anomalies": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of anomalies or defects in Hebrew",
        },
        "estimatedValueRange": {"type": "STRING", "description": "Value range (e.g. $10 - $20)"},
        "description": {"type": "STRING", "description": "Professional description in Hebrew"},
        "confidenceScore": {"type": "NUMBER", "description": "Confidence in identification 0-100"},
    },
    "required": ["itemName", "year", "origin", "conditionGrade", "estimatedValueRange", "description"],
}

LOGO_COLORS_PROMPT = """
Analyze this logo image.
Identify the most dominant and aesthetically pleasing colors that would work well as a primary brand color for a website button or header.
Return a list of 3 distinct Hex color codes (e.g. #FF5733).
"""

LOGO_COLORS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "colors": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3 hex color codes",
        }
    },
}


def analysis_prompt(item_type: ItemType) -> str:
    return ANALYSIS_PROMPT.format(kind=ITEM_KIND_EN[item_type])
