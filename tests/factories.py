"""テスト用のデータ生成ヘルパー。"""
from asfanut.store.models import (
    AIAnalysisResult,
    CollectibleItem,
    ItemStatus,
    ItemType,
    StoreProfile,
)

FRONT = "data:image/jpeg;base64,ZnJvbnQ="
BACK = "data:image/jpeg;base64,YmFjaw=="


def make_analysis(name="Palestine Mandate 10 Mils", year="1927", origin="Palestine", **kw):
    values = dict(
        item_name=name,
        year=year,
        origin=origin,
        condition_grade="VF",
        description="Bronze coin with olive branch.",
        estimated_value_range="50-80 ILS",
        anomalies=(),
        confidence_score=87.0,
    )
    values.update(kw)
    return AIAnalysisResult(**values)


def make_item(item_id="a", created_at=1000, item_type=ItemType.COIN, analysis=None,
              price="150", status=ItemStatus.AVAILABLE):
    return CollectibleItem(
        id=item_id,
        created_at=created_at,
        type=item_type,
        front_image=FRONT,
        back_image=BACK,
        analysis=analysis,
        user_price=price,
        status=status,
    )


def make_profile(password="secret", **kw):
    values = dict(
        store_name="בית המטבע",
        owner_name="Dana",
        email="shop@example.com",
        phone="050-0000000",
        address="Tel Aviv",
        theme_color="#0f172a",
        password=password,
        api_key="key-123",
        terms_accepted=True,
    )
    values.update(kw)
    return StoreProfile(**values)
