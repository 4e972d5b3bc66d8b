"""
UI アクションハンドラ。ファサード・AI 呼び出しを行い、結果を reducer に渡す。

ストレージ・解析の失敗は OperationFailed（閉じられるアラート）にして状態は変えない。
それ以外の例外は呼び出し元（web.py のエラーバウンダリ）まで伝播させる。
"""
from __future__ import annotations

import functools
import hmac
import logging
from typing import Callable, Optional

from asfanut.ai import gemini
from asfanut.ai.gemini import AnalysisError, MissingApiKeyError, resolve_api_key
from asfanut.settings import AppSettings
from asfanut.store.backends import StorageError
from asfanut.store.facade import Storage, create_storage
from asfanut.store.models import CollectibleItem, ItemFields, ItemType, StoreProfile
from asfanut.ui import state as st_
from asfanut.ui.state import PendingEdit, Screen, ViewState
from asfanut.util.datetime_utils import new_item_id, now_millis
from asfanut.util.log import log_item_event

logger = logging.getLogger(__name__)

# ユーザー向けメッセージ
MSG_LOAD_FAILED = "טעינת הנתונים נכשלה. נסה לרענן את העמוד."
MSG_WRONG_PASSWORD = "הסיסמה שגויה. נסה שוב."
MSG_PROFILE_INCOMPLETE = "יש למלא שם חנות, שם בעלים, סיסמת ניהול, מפתח API ולאשר את התנאים."
MSG_SAVE_FAILED = "השמירה נכשלה. הנתונים לא נשמרו, נסה שוב."
MSG_DELETE_FAILED = "המחיקה נכשלה. נסה שוב."
MSG_BOTH_IMAGES = "חובה להעלות תמונה של שני הצדדים"
MSG_MISSING_KEY = "חסר מפתח API של Google Gemini. יש להגדיר אותו בהגדרות החנות."
MSG_ANALYSIS_FAILED = "אירעה שגיאה בניתוח התמונה. אנא נסה שנית או וודא שהתמונה ברורה."
MSG_REANALYSIS_FAILED = "שגיאה בביצוע ניתוח חוזר. אנא נסה שוב."
MSG_PRICE_REQUIRED = "יש להזין מחיר לפני השמירה."
MSG_NO_DRAFT = "אין נתוני ניתוח לשמירה."
MSG_ITEM_NOT_FOUND = "הפריט לא נמצא."
MSG_UNAUTHORIZED = "יש להתחבר כמנהל."

Analyzer = Callable[[str, str, ItemType, str], object]
ColorAnalyzer = Callable[[str, str], list]


class Controller:
    """1セッション分の ViewState を保持し、UI 操作を処理する。"""

    def __init__(
        self,
        storage: Storage,
        analyzer: Optional[Analyzer] = None,
        color_analyzer: Optional[ColorAnalyzer] = None,
        id_factory: Callable[[], str] = new_item_id,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.storage = storage
        self.analyzer = analyzer or gemini.analyze_item
        self.color_analyzer = color_analyzer or gemini.analyze_logo_colors
        self.id_factory = id_factory
        self.clock = clock
        self.state = ViewState()

    def dispatch(self, action: st_.Action) -> ViewState:
        before = self.state.screen
        self.state = st_.reduce(self.state, action)
        if self.state.screen is not before:
            logger.debug("screen %s -> %s (%s)", before.value, self.state.screen.value, type(action).__name__)
        return self.state

    def _fail(self, message: str) -> bool:
        self.dispatch(st_.OperationFailed(message))
        return False

    def _require_admin(self) -> bool:
        if self.state.authenticated and not self.state.needs_setup:
            return True
        self.dispatch(st_.Navigate(Screen.DASHBOARD))
        return self._fail(MSG_UNAUTHORIZED)

    # --- 起動・認証 ---

    def load(self, deep_link_item_id: Optional[str] = None) -> ViewState:
        """プロフィールとアイテムを一度読み込み、初期画面を決める。"""
        try:
            profile = self.storage.get_profile()
            items = self.storage.get_items()
        except StorageError as e:
            logger.error("initial load failed: %s", e)
            return self.dispatch(st_.Loaded(profile=None, items=[], error=MSG_LOAD_FAILED))
        return self.dispatch(st_.Loaded(profile=profile, items=items, deep_link_item_id=deep_link_item_id))

    def refresh_items(self) -> bool:
        try:
            items = self.storage.get_items()
        except StorageError as e:
            logger.warning("refresh failed: %s", e)
            return self._fail(MSG_LOAD_FAILED)
        self.dispatch(st_.ItemsRefreshed(items))
        return True

    def login(self, password: str) -> bool:
        profile = self.state.profile
        if profile is None or profile.is_legacy:
            self.dispatch(st_.Navigate(Screen.SETUP))
            return False
        if not hmac.compare_digest(password.encode("utf-8"), profile.password.encode("utf-8")):
            return self._fail(MSG_WRONG_PASSWORD)
        self.dispatch(st_.LoginSucceeded())
        logger.info("admin login")
        return True

    def logout(self) -> None:
        self.dispatch(st_.Logout())

    # --- プロフィール ---

    def save_profile(self, profile: StoreProfile) -> bool:
        """setup フォームの保存。保存後に読み直してから dashboard へ。"""
        if not self.state.authenticated:
            if self.state.load_failed:
                return self._fail(MSG_LOAD_FAILED)
            if not self.state.needs_setup:
                return self._fail(MSG_UNAUTHORIZED)
            # 未ログインの初回セットアップは、保存直前に既存ストアが無いことを確かめる
            try:
                existing = self.storage.get_profile()
            except StorageError as e:
                logger.error("profile check failed: %s", e)
                return self._fail(MSG_LOAD_FAILED)
            if existing is not None and not existing.is_legacy:
                logger.warning("setup refused: store already configured")
                self.load()
                return self._fail(MSG_UNAUTHORIZED)
        if profile.missing_fields():
            return self._fail(MSG_PROFILE_INCOMPLETE)
        try:
            self.storage.save_profile(profile)
            saved = self.storage.get_profile()
        except StorageError as e:
            logger.error("profile save failed: %s", e)
            return self._fail(MSG_SAVE_FAILED)
        self.dispatch(st_.ProfileSaved(saved or profile))
        return True

    def suggest_colors(self, logo_image: str, api_key: str = "") -> list[str]:
        """ロゴからの配色候補。失敗しても既定パレットが返る。"""
        key = resolve_api_key(api_key, self.state.profile)
        return list(self.color_analyzer(logo_image, key))

    # --- 登録フロー ---

    def start_new_item(self) -> None:
        self.dispatch(st_.StartNewItem())

    def analyze(self, front_image: Optional[str], back_image: Optional[str], item_type: ItemType) -> bool:
        """2画像を解析して details へ。失敗時は scan のまま。"""
        if not self._require_admin():
            return False
        if not front_image or not back_image:
            return self._fail(MSG_BOTH_IMAGES)
        key = resolve_api_key(None, self.state.profile)
        try:
            result = self.analyzer(front_image, back_image, item_type, key)
        except MissingApiKeyError:
            return self._fail(MSG_MISSING_KEY)
        except AnalysisError as e:
            logger.warning("analysis failed: %s", e)
            return self._fail(MSG_ANALYSIS_FAILED)
        draft = PendingEdit(front_image, back_image, item_type, analysis=result)
        self.dispatch(st_.AnalysisCompleted(draft))
        return True

    def skip_analysis(self, front_image: Optional[str], back_image: Optional[str], item_type: ItemType) -> bool:
        """解析せずに空の下書きで details へ。"""
        if not self._require_admin():
            return False
        if not front_image or not back_image:
            return self._fail(MSG_BOTH_IMAGES)
        self.dispatch(st_.AnalysisCompleted(PendingEdit(front_image, back_image, item_type, analysis=None)))
        return True

    def reanalyze(self) -> bool:
        """編集中の画像を再解析し、フォームの初期値を上書きする。"""
        pending = self.state.pending
        if pending is None:
            return self._fail(MSG_NO_DRAFT)
        key = resolve_api_key(None, self.state.profile)
        try:
            result = self.analyzer(pending.front_image, pending.back_image, pending.item_type, key)
        except MissingApiKeyError:
            return self._fail(MSG_MISSING_KEY)
        except AnalysisError as e:
            logger.warning("re-analysis failed: %s", e)
            return self._fail(MSG_REANALYSIS_FAILED)
        self.dispatch(st_.DraftUpdated(pending.with_analysis(result)))
        return True

    def edit_item(self, item_id: str) -> bool:
        item = self.state.find_item(item_id)
        if item is None:
            return self._fail(MSG_ITEM_NOT_FOUND)
        self.dispatch(st_.EditItem(item))
        return True

    def save_pending(self, fields: ItemFields) -> bool:
        """下書きを保存し、一覧を読み直して dashboard へ。"""
        if not self._require_admin():
            return False
        pending = self.state.pending
        if pending is None:
            return self._fail(MSG_NO_DRAFT)
        try:
            item = pending.build_item(fields, new_id=self.id_factory(), now=self.clock())
        except ValueError:
            return self._fail(MSG_PRICE_REQUIRED)
        try:
            self.storage.save_item(item)
            items = self.storage.get_items()
        except StorageError as e:
            logger.error("item save failed id=%s: %s", item.id, e)
            return self._fail(MSG_SAVE_FAILED)
        self.dispatch(st_.ItemSaved(items))
        return True

    def cancel_edit(self) -> None:
        self.dispatch(st_.CancelEdit())

    # --- 一覧操作 ---

    def request_delete(self, item_id: str) -> None:
        """削除は確認を挟む。ここでは候補を立てるだけ。"""
        self.dispatch(st_.RequestDelete(item_id))

    def cancel_delete(self) -> None:
        self.dispatch(st_.CancelDelete())

    def confirm_delete(self) -> bool:
        if not self._require_admin():
            return False
        item_id = self.state.delete_candidate_id
        if not item_id:
            return False
        try:
            self.storage.delete_item(item_id)
            items = self.storage.get_items()
        except StorageError as e:
            logger.error("item delete failed id=%s: %s", item_id, e)
            return self._fail(MSG_DELETE_FAILED)
        self.dispatch(st_.ItemDeleted(items))
        return True

    def toggle_status(self, item_id: str) -> bool:
        """AVAILABLE ↔ SOLD を切り替えて保存。"""
        if not self._require_admin():
            return False
        item = self.state.find_item(item_id)
        if item is None:
            return self._fail(MSG_ITEM_NOT_FOUND)
        updated: CollectibleItem = item.with_toggled_status()
        try:
            self.storage.save_item(updated)
            items = self.storage.get_items()
        except StorageError as e:
            logger.error("status toggle failed id=%s: %s", item_id, e)
            return self._fail(MSG_SAVE_FAILED)
        log_item_event(logger, "toggle_status", item_id, status=updated.status.value)
        self.dispatch(st_.ItemsRefreshed(items))
        return True

    # --- 画面移動 ---

    def navigate(self, screen: Screen) -> None:
        self.dispatch(st_.Navigate(screen))

    def view_product(self, item_id: str) -> None:
        self.dispatch(st_.SelectProduct(item_id))

    def open_legal(self) -> None:
        self.dispatch(st_.OpenLegal())

    def go_back(self) -> None:
        self.dispatch(st_.GoBack())

    def dismiss_error(self) -> None:
        self.dispatch(st_.DismissError())


def create_controller(settings: AppSettings) -> Controller:
    """設定からファサードと AI クライアントを組み立てる。"""
    analyzer = functools.partial(gemini.analyze_item, model=settings.ai_model, endpoint=settings.ai_endpoint)
    color_analyzer = functools.partial(
        gemini.analyze_logo_colors, model=settings.ai_model, endpoint=settings.ai_endpoint
    )
    return Controller(create_storage(settings), analyzer=analyzer, color_analyzer=color_analyzer)
