"""購入問い合わせ・価格提案メールのテンプレ（ヘブライ語）。"""

INQUIRY_SUBJECT = "התעניינות בפריט: {item_name}"

INQUIRY_BODY = """שלום {owner_name},

אני מעוניין בפריט "{item_name}" (שנה: {year}) שראיתי באתר שלך במחיר {price} ש"ח.

אשמח לתאם בדיקה ורכישה.

תודה."""

OFFER_SUBJECT = "הצעת מחיר לפריט: {item_name}"

OFFER_BODY = """שלום {owner_name},

ראיתי באתר שלך את הפריט "{item_name}" (שנה: {year}) המוצע במחיר {price} ש"ח.

ברצוני להציע עבורו {offer} ש"ח."""

OFFER_CONTACT_LINE = "ניתן לחזור אליי: {buyer_name} {buyer_phone}"

CLOSING = "תודה."
