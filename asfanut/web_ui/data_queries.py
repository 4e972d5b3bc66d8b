"""Web UI 用データ整形（ストアの絞り込み・管理一覧）。"""
from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from asfanut.store.models import CollectibleItem, ItemType
from asfanut.util.datetime_utils import format_created_at

TYPE_FILTER_ALL = "ALL"


def _matches_search(item: CollectibleItem, term: str) -> bool:
    if not term:
        return True
    a = item.analysis
    if a is None:
        return term.lower() in item.type.value.lower()
    return term.lower() in a.item_name.lower() or term in a.year or term in a.origin


def filter_storefront_items(
    items: Sequence[CollectibleItem],
    search: str = "",
    type_filter: str = TYPE_FILTER_ALL,
) -> list[CollectibleItem]:
    """
    公開ストア用の絞り込み。名前（大文字小文字無視）・年・発行国で検索し、種別で絞る。
    販売中を先、売約済みを後に並べる（それ以外はファサードの順序を保つ）。
    """
    term = search.strip()
    wanted: Optional[ItemType] = None
    if type_filter and type_filter != TYPE_FILTER_ALL:
        wanted = ItemType.parse(type_filter)
    filtered = [
        i for i in items
        if _matches_search(i, term) and (wanted is None or i.type is wanted)
    ]
    # sorted は安定ソートなので同じ status 内の順序は変わらない
    return sorted(filtered, key=lambda i: i.is_sold)


def get_items_dataframe(items: Sequence[CollectibleItem], tz: str = "Asia/Jerusalem") -> pd.DataFrame:
    """管理画面の一覧を DataFrame で返す。"""
    if not items:
        return pd.DataFrame()
    data = [
        {
            "id": i.id,
            "שם": i.display_name(),
            "סוג": i.type.value,
            "שנה": i.analysis.year if i.analysis else "",
            "מצב": i.analysis.condition_grade if i.analysis else "",
            "מחיר": i.user_price,
            "סטטוס": "נמכר" if i.is_sold else "זמין",
            "נוצר": format_created_at(i.created_at, tz),
        }
        for i in items
    ]
    return pd.DataFrame(data)


def summarize_items(items: Sequence[CollectibleItem]) -> dict[str, int]:
    """ダッシュボードの集計値。"""
    return {
        "total": len(items),
        "available": sum(1 for i in items if not i.is_sold),
        "sold": sum(1 for i in items if i.is_sold),
        "unanalyzed": sum(1 for i in items if not i.is_analyzed),
    }
