"""問い合わせ・価格提案メッセージ生成のユニットテスト。"""
from urllib.parse import parse_qs, urlsplit

import pytest

from asfanut.msg.generator import build_mailto, generate_inquiry, generate_offer
from asfanut.store.models import ItemType
from tests.factories import make_analysis, make_item, make_profile


def test_inquiry_mentions_item_year_and_price():
    item = make_item(analysis=make_analysis(name="מטבע 10 מיל", year="1927"), price="150")
    subject, body = generate_inquiry(item, make_profile())
    assert "מטבע 10 מיל" in subject
    assert "Dana" in body
    assert "1927" in body
    assert "150" in body


def test_inquiry_for_unanalyzed_item_uses_type_label():
    item = make_item(item_type=ItemType.STAMP, analysis=None)
    subject, body = generate_inquiry(item, make_profile())
    assert ItemType.STAMP.value in subject
    assert "שנה: -" in body


def test_offer_includes_amount_and_contact():
    item = make_item(analysis=make_analysis())
    _, body = generate_offer(item, make_profile(), " 120 ", buyer_name="Avi", buyer_phone="052")
    assert "120" in body
    assert "Avi" in body
    assert "052" in body


def test_offer_without_contact_has_no_contact_line():
    _, body = generate_offer(make_item(analysis=make_analysis()), make_profile(), "90")
    assert "ניתן לחזור אליי" not in body


def test_offer_requires_amount():
    with pytest.raises(ValueError):
        generate_offer(make_item(), make_profile(), "   ")


def test_mailto_is_url_encoded():
    link = build_mailto("shop@example.com", "נושא & עוד", "שורה 1\nשורה 2")
    parts = urlsplit(link)
    assert parts.scheme == "mailto"
    assert parts.path == "shop@example.com"
    query = parse_qs(parts.query)
    assert query["subject"] == ["נושא & עוד"]
    assert query["body"] == ["שורה 1\nשורה 2"]
