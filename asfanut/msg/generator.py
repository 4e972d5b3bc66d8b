"""テンプレのプレースホルダを埋めて件名・本文・mailto リンクを生成。"""
from __future__ import annotations

from urllib.parse import quote

from asfanut.msg import templates
from asfanut.store.models import CollectibleItem, StoreProfile


def _placeholders(item: CollectibleItem, profile: StoreProfile) -> dict[str, str]:
    return {
        "owner_name": profile.owner_name,
        "item_name": item.display_name(),
        "year": item.analysis.year if item.analysis and item.analysis.year else "-",
        "price": item.user_price or "-",
    }


def generate_inquiry(item: CollectibleItem, profile: StoreProfile) -> tuple[str, str]:
    """購入問い合わせの (subject, body) を返す。"""
    values = _placeholders(item, profile)
    return templates.INQUIRY_SUBJECT.format(**values), templates.INQUIRY_BODY.format(**values)


def generate_offer(
    item: CollectibleItem,
    profile: StoreProfile,
    offer: str,
    buyer_name: str = "",
    buyer_phone: str = "",
) -> tuple[str, str]:
    """価格提案の (subject, body) を返す。連絡先が入力されていれば本文に追記。"""
    offer = offer.strip()
    if not offer:
        raise ValueError("offer amount is required")
    values = _placeholders(item, profile)
    subject = templates.OFFER_SUBJECT.format(**values)
    body = templates.OFFER_BODY.format(offer=offer, **values)
    if buyer_name.strip() or buyer_phone.strip():
        contact = templates.OFFER_CONTACT_LINE.format(
            buyer_name=buyer_name.strip(), buyer_phone=buyer_phone.strip()
        )
        body = body + "\n\n" + contact.strip()
    return subject, body + "\n\n" + templates.CLOSING


def build_mailto(email: str, subject: str, body: str) -> str:
    """件名・本文を URL エンコードした mailto リンク。"""
    return f"mailto:{email}?subject={quote(subject)}&body={quote(body)}"
