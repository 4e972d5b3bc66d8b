"""Controller（UI 操作 → ファサード / AI → reducer）のシナリオテスト。"""
from asfanut.ai.gemini import AnalysisError, analyze_item
from asfanut.store.backends import LocalBackend, StorageError
from asfanut.store.facade import Storage
from asfanut.store.models import ItemFields, ItemStatus, ItemType
from asfanut.ui import controller as ctl
from asfanut.ui.controller import Controller
from asfanut.ui.state import Screen
from tests.factories import BACK, FRONT, make_analysis, make_item, make_profile


class StubAnalyzer:
    """呼び出しを記録し、result を返すか error を送出する。"""

    def __init__(self, result=None, error=None):
        self.result = result or make_analysis()
        self.error = error
        self.calls = []

    def __call__(self, front, back, item_type, api_key):
        self.calls.append((front, back, item_type, api_key))
        if self.error:
            raise self.error
        return self.result


class FailingSaveBackend(LocalBackend):
    def save_item(self, item):
        raise StorageError("disk full")


def _ids():
    counter = iter(range(1, 1000))
    return lambda: f"id-{next(counter)}"


def _controller(storage, analyzer=None, **kw):
    return Controller(
        storage,
        analyzer=analyzer or StubAnalyzer(),
        color_analyzer=kw.pop("color_analyzer", lambda logo, key: ["#111111"]),
        id_factory=kw.pop("id_factory", _ids()),
        clock=kw.pop("clock", lambda: 5000),
    )


def _logged_in(storage, analyzer=None, items=(), **kw):
    storage.save_profile(make_profile())
    for item in items:
        storage.save_item(item)
    c = _controller(storage, analyzer, **kw)
    c.load()
    c.navigate(Screen.DASHBOARD)
    assert c.login("secret") is True
    assert c.state.screen is Screen.DASHBOARD
    return c


def test_first_run_setup_flow(storage):
    c = _controller(storage)
    c.load()
    assert c.state.screen is Screen.SETUP

    assert c.save_profile(make_profile(terms_accepted=False)) is False
    assert c.state.error == ctl.MSG_PROFILE_INCOMPLETE
    assert storage.get_profile() is None

    assert c.save_profile(make_profile()) is True
    assert c.state.screen is Screen.DASHBOARD
    assert c.state.authenticated is True
    assert storage.get_profile() == make_profile()


def test_legacy_profile_forces_setup(storage):
    storage.save_profile(make_profile(password=""))
    c = _controller(storage)
    c.load()
    assert c.state.screen is Screen.SETUP
    assert c.login("") is False
    assert c.state.screen is Screen.SETUP


def test_login_wrong_then_right_password(storage):
    storage.save_profile(make_profile())
    c = _controller(storage)
    c.load()
    assert c.state.screen is Screen.STOREFRONT
    c.navigate(Screen.DASHBOARD)
    assert c.state.screen is Screen.LOGIN

    assert c.login("nope") is False
    assert c.state.screen is Screen.LOGIN
    assert c.state.error == ctl.MSG_WRONG_PASSWORD

    assert c.login("secret") is True
    assert c.state.screen is Screen.DASHBOARD
    assert c.state.error is None


def test_settings_change_requires_login(storage):
    storage.save_profile(make_profile())
    c = _controller(storage)
    c.load()
    assert c.save_profile(make_profile(store_name="hijack")) is False
    assert c.state.error == ctl.MSG_UNAUTHORIZED
    assert storage.get_profile().store_name == make_profile().store_name


def test_scan_analyze_and_save(storage):
    analyzer = StubAnalyzer()
    c = _logged_in(storage, analyzer)
    c.start_new_item()
    assert c.state.screen is Screen.SCAN

    assert c.analyze(FRONT, None, ItemType.COIN) is False
    assert c.state.error == ctl.MSG_BOTH_IMAGES
    assert analyzer.calls == []

    assert c.analyze(FRONT, BACK, ItemType.COIN) is True
    assert c.state.screen is Screen.DETAILS
    assert analyzer.calls == [(FRONT, BACK, ItemType.COIN, "key-123")]

    fields = c.state.pending.initial_fields()
    assert c.save_pending(fields) is False
    assert c.state.error == ctl.MSG_PRICE_REQUIRED
    assert c.state.screen is Screen.DETAILS
    assert c.state.pending is not None

    fields.user_price = "120"
    assert c.save_pending(fields) is True
    assert c.state.screen is Screen.DASHBOARD
    assert c.state.pending is None

    saved = storage.get_items()
    assert len(saved) == 1
    assert saved[0].id.startswith("id-")
    assert saved[0].created_at == 5000
    assert saved[0].user_price == "120"
    assert saved[0].analysis.item_name == analyzer.result.item_name
    assert [i.id for i in c.state.items] == [saved[0].id]


def test_analysis_failure_stays_on_scan(storage):
    c = _logged_in(storage, StubAnalyzer(error=AnalysisError("timeout")))
    c.start_new_item()
    assert c.analyze(FRONT, BACK, ItemType.STAMP) is False
    assert c.state.screen is Screen.SCAN
    assert c.state.error == ctl.MSG_ANALYSIS_FAILED
    assert c.state.pending is None
    assert storage.get_items() == []


def test_missing_api_key_is_reported(storage, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    storage.save_profile(make_profile(api_key=""))
    c = _controller(storage, analyzer=analyze_item)
    c.load()
    c.navigate(Screen.SCAN)
    c.login("secret")
    assert c.state.screen is Screen.SCAN
    assert c.analyze(FRONT, BACK, ItemType.COIN) is False
    assert c.state.error == ctl.MSG_MISSING_KEY
    assert c.state.screen is Screen.SCAN


def test_skip_analysis_saves_unanalyzed_item(storage):
    analyzer = StubAnalyzer()
    c = _logged_in(storage, analyzer)
    c.start_new_item()
    assert c.skip_analysis(FRONT, BACK, ItemType.STAMP) is True
    assert c.state.screen is Screen.DETAILS
    assert c.state.pending.analysis is None
    assert c.save_pending(ItemFields(user_price="15")) is True

    item = storage.get_items()[0]
    assert item.analysis is None
    assert item.type is ItemType.STAMP
    assert analyzer.calls == []


def test_reanalyze_overwrites_draft(storage):
    analyzer = StubAnalyzer()
    c = _logged_in(storage, analyzer)
    c.start_new_item()
    c.skip_analysis(FRONT, BACK, ItemType.COIN)

    assert c.reanalyze() is True
    assert c.state.screen is Screen.DETAILS
    assert c.state.pending.analysis == analyzer.result

    analyzer.error = AnalysisError("bad")
    assert c.reanalyze() is False
    assert c.state.error == ctl.MSG_REANALYSIS_FAILED
    assert c.state.pending.analysis == analyzer.result


def test_edit_keeps_identity(storage):
    original = make_item("keep", created_at=10, analysis=make_analysis(), price="50")
    c = _logged_in(storage, items=[original])
    assert c.edit_item("keep") is True
    fields = c.state.pending.initial_fields()
    fields.user_price = "65"
    fields.description = "Updated"
    assert c.save_pending(fields) is True

    items = storage.get_items()
    assert len(items) == 1
    assert items[0].id == "keep"
    assert items[0].created_at == 10
    assert items[0].user_price == "65"
    assert items[0].analysis.description == "Updated"


def test_edit_unknown_item(storage):
    c = _logged_in(storage)
    assert c.edit_item("ghost") is False
    assert c.state.error == ctl.MSG_ITEM_NOT_FOUND
    assert c.state.screen is Screen.DASHBOARD


def test_toggle_status_twice_restores(storage):
    c = _logged_in(storage, items=[make_item("t")])
    assert c.toggle_status("t") is True
    assert storage.get_items()[0].status is ItemStatus.SOLD
    assert c.state.items[0].status is ItemStatus.SOLD
    assert c.toggle_status("t") is True
    assert storage.get_items()[0].status is ItemStatus.AVAILABLE


def test_delete_requires_confirmation(storage):
    c = _logged_in(storage, items=[make_item("x"), make_item("y", created_at=2)])
    c.request_delete("x")
    assert c.state.delete_candidate.id == "x"
    c.cancel_delete()
    assert c.confirm_delete() is False
    assert len(storage.get_items()) == 2

    c.request_delete("x")
    assert c.confirm_delete() is True
    assert [i.id for i in storage.get_items()] == ["y"]
    assert c.state.delete_candidate_id is None
    assert [i.id for i in c.state.items] == ["y"]


def test_save_failure_keeps_draft(tmp_path):
    storage = Storage(FailingSaveBackend(str(tmp_path / "f.db")))
    c = _logged_in(storage)
    c.start_new_item()
    c.analyze(FRONT, BACK, ItemType.COIN)
    fields = c.state.pending.initial_fields()
    fields.user_price = "10"
    assert c.save_pending(fields) is False
    assert c.state.screen is Screen.DETAILS
    assert c.state.error == ctl.MSG_SAVE_FAILED
    assert c.state.pending is not None


def test_load_failure_reports_error(tmp_path):
    bad = tmp_path / "dir.db"
    bad.mkdir()
    c = _controller(Storage(LocalBackend(str(bad))))
    c.load()
    assert c.state.error == ctl.MSG_LOAD_FAILED
    assert c.state.items == ()


def test_admin_actions_need_login(storage):
    storage.save_profile(make_profile())
    storage.save_item(make_item("p"))
    c = _controller(storage)
    c.load()
    assert c.toggle_status("p") is False
    assert c.state.screen is Screen.LOGIN
    assert c.state.error == ctl.MSG_UNAUTHORIZED
    assert storage.get_items()[0].status is ItemStatus.AVAILABLE


def test_deep_link_and_back(storage):
    storage.save_profile(make_profile())
    storage.save_item(make_item("deep"))
    c = _controller(storage)
    c.load(deep_link_item_id="deep")
    assert c.state.screen is Screen.PRODUCT
    assert c.state.selected_item.id == "deep"
    c.go_back()
    assert c.state.screen is Screen.STOREFRONT


def test_suggest_colors_uses_profile_key(storage):
    seen = []

    def colors(logo, key):
        seen.append(key)
        return ["#abcdef"]

    c = _logged_in(storage, color_analyzer=colors)
    assert c.suggest_colors("data:image/png;base64,AA==") == ["#abcdef"]
    assert c.suggest_colors("data:image/png;base64,AA==", api_key="typed") == ["#abcdef"]
    assert seen == ["key-123", "typed"]


def test_logout_drops_admin_access(storage):
    c = _logged_in(storage)
    c.logout()
    assert c.state.screen is Screen.STOREFRONT
    c.start_new_item()
    assert c.state.screen is Screen.LOGIN


class FlakyProfileBackend(LocalBackend):
    """最初の get_profile だけ失敗する。"""

    def __init__(self, db_path):
        super().__init__(db_path)
        self.failures = 1

    def get_profile(self):
        if self.failures:
            self.failures -= 1
            raise StorageError("connection reset")
        return super().get_profile()


def test_failed_load_does_not_unlock_setup(tmp_path):
    backend = FlakyProfileBackend(str(tmp_path / "flaky.db"))
    backend.failures = 0
    backend.save_profile(make_profile(password="owner-secret"))
    backend.failures = 1

    c = _controller(Storage(backend))
    c.load()
    assert c.state.load_failed is True
    assert c.state.error == ctl.MSG_LOAD_FAILED

    assert c.save_profile(make_profile(password="intruder")) is False
    assert c.state.authenticated is False
    assert backend.get_profile().password == "owner-secret"


def test_setup_refused_when_store_appears_configured(storage):
    c = _controller(storage)
    c.load()
    assert c.state.screen is Screen.SETUP
    # 別セッションが先にセットアップを完了した
    storage.save_profile(make_profile(password="first-owner"))

    assert c.save_profile(make_profile(password="second")) is False
    assert c.state.error == ctl.MSG_UNAUTHORIZED
    assert c.state.authenticated is False
    assert c.state.screen is Screen.STOREFRONT
    assert storage.get_profile().password == "first-owner"


def test_successful_reload_clears_load_failure(tmp_path):
    backend = FlakyProfileBackend(str(tmp_path / "flaky.db"))
    c = _controller(Storage(backend))
    c.load()
    assert c.state.load_failed is True
    c.load()
    assert c.state.load_failed is False
    assert c.state.screen is Screen.SETUP
    assert c.save_profile(make_profile()) is True
    assert c.state.screen is Screen.DASHBOARD
