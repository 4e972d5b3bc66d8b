"""ストア絞り込み・管理一覧のユニットテスト。"""
from asfanut.store.models import ItemStatus, ItemType
from asfanut.web_ui.data_queries import (
    TYPE_FILTER_ALL,
    filter_storefront_items,
    get_items_dataframe,
    summarize_items,
)
from tests.factories import make_analysis, make_item


def _catalog():
    return [
        make_item("s1", 5, ItemType.STAMP, make_analysis("Penny Black", "1840", "England"), status=ItemStatus.SOLD),
        make_item("c1", 4, ItemType.COIN, make_analysis("Lira", "1948", "Israel")),
        make_item("c2", 3, ItemType.COIN, None),
        make_item("s2", 2, ItemType.STAMP, make_analysis("Doar Ivri", "1948", "Israel")),
    ]


def test_available_items_come_first_and_order_is_stable():
    ids = [i.id for i in filter_storefront_items(_catalog())]
    assert ids == ["c1", "c2", "s2", "s1"]


def test_search_name_is_case_insensitive():
    assert [i.id for i in filter_storefront_items(_catalog(), "penny")] == ["s1"]


def test_search_matches_year_and_origin():
    assert [i.id for i in filter_storefront_items(_catalog(), "1948")] == ["c1", "s2"]
    assert [i.id for i in filter_storefront_items(_catalog(), "Israel")] == ["c1", "s2"]


def test_type_filter():
    assert [i.id for i in filter_storefront_items(_catalog(), type_filter="STAMP")] == ["s2", "s1"]
    assert [i.id for i in filter_storefront_items(_catalog(), type_filter=TYPE_FILTER_ALL)] == [
        "c1", "c2", "s2", "s1"
    ]


def test_search_and_type_combined():
    assert [i.id for i in filter_storefront_items(_catalog(), "1948", "COIN")] == ["c1"]


def test_unanalyzed_item_matches_type_label():
    assert "c2" in [i.id for i in filter_storefront_items(_catalog(), ItemType.COIN.value)]


def test_summary_counts():
    assert summarize_items(_catalog()) == {"total": 4, "available": 3, "sold": 1, "unanalyzed": 1}


def test_dataframe_has_one_row_per_item():
    df = get_items_dataframe(_catalog(), tz="UTC")
    assert list(df["id"]) == ["s1", "c1", "c2", "s2"]
    assert df.loc[df["id"] == "c2", "שם"].iloc[0] == ItemType.COIN.value
    assert get_items_dataframe([]).empty
