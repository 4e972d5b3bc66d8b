"""
画面遷移の状態機械。

ViewState は不変で、reduce(state, action) だけが次の状態を作る。
- 現在の画面は常に1つ
- 編集中コンテキスト（pending）は最大1つ。details 以外へ移ると破棄する
- dashboard / scan / details は未ログインなら login へ、
  プロフィール未登録・パスワード未設定なら setup へ振り替える
- 登録済みストアの setup（設定変更）も未ログインなら login へ
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence, Union

from asfanut.store.models import (
    AIAnalysisResult,
    CollectibleItem,
    ItemFields,
    ItemType,
    StoreProfile,
)


class Screen(str, Enum):
    SETUP = "setup"
    LOGIN = "login"
    DASHBOARD = "dashboard"
    SCAN = "scan"
    DETAILS = "details"
    LEGAL = "legal"
    STOREFRONT = "storefront"
    PRODUCT = "product"


ADMIN_SCREENS = frozenset({Screen.DASHBOARD, Screen.SCAN, Screen.DETAILS})
LEAF_SCREENS = frozenset({Screen.LEGAL, Screen.PRODUCT})


@dataclass(frozen=True)
class PendingEdit:
    """保存前の下書き。original があれば既存アイテムの編集。"""

    front_image: str
    back_image: str
    item_type: ItemType
    analysis: Optional[AIAnalysisResult]
    original: Optional[CollectibleItem] = None

    @classmethod
    def from_item(cls, item: CollectibleItem) -> PendingEdit:
        return cls(
            front_image=item.front_image,
            back_image=item.back_image,
            item_type=item.type,
            analysis=item.analysis,
            original=item,
        )

    @property
    def is_new(self) -> bool:
        return self.original is None

    def initial_fields(self) -> ItemFields:
        if self.original is None:
            return ItemFields.from_analysis(self.analysis)
        return ItemFields.from_analysis(
            self.analysis, user_price=self.original.user_price, status=self.original.status
        )

    def with_analysis(self, analysis: AIAnalysisResult) -> PendingEdit:
        return replace(self, analysis=analysis)

    def build_item(self, fields: ItemFields, new_id: str, now: int) -> CollectibleItem:
        """フォーム値で解析結果を上書きしたアイテムを作る。価格は必須。"""
        price = fields.user_price.strip()
        if not price:
            raise ValueError("userPrice is required")
        confidence = self.analysis.confidence_score if self.analysis else 0.0
        if self.analysis is None and fields.is_blank():
            analysis: Optional[AIAnalysisResult] = None
        else:
            analysis = fields.to_analysis(confidence_score=confidence)
        return CollectibleItem(
            id=self.original.id if self.original else new_id,
            created_at=self.original.created_at if self.original else now,
            type=self.item_type,
            front_image=self.front_image,
            back_image=self.back_image,
            analysis=analysis,
            user_price=price,
            status=fields.status,
        )


@dataclass(frozen=True)
class ViewState:
    screen: Screen = Screen.SETUP
    authenticated: bool = False
    profile: Optional[StoreProfile] = None
    items: tuple[CollectibleItem, ...] = field(default_factory=tuple)
    pending: Optional[PendingEdit] = None
    selected_item_id: Optional[str] = None
    return_to: Screen = Screen.STOREFRONT
    login_target: Screen = Screen.DASHBOARD
    delete_candidate_id: Optional[str] = None
    error: Optional[str] = None
    # 起動時の読み込み失敗。プロフィール未登録とは区別する
    load_failed: bool = False

    def find_item(self, item_id: Optional[str]) -> Optional[CollectibleItem]:
        if not item_id:
            return None
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def selected_item(self) -> Optional[CollectibleItem]:
        return self.find_item(self.selected_item_id)

    @property
    def delete_candidate(self) -> Optional[CollectibleItem]:
        return self.find_item(self.delete_candidate_id)

    @property
    def needs_setup(self) -> bool:
        return self.profile is None or self.profile.is_legacy


# --- actions ---

@dataclass(frozen=True)
class Loaded:
    profile: Optional[StoreProfile]
    items: Sequence[CollectibleItem]
    deep_link_item_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class Navigate:
    screen: Screen


@dataclass(frozen=True)
class LoginSucceeded:
    pass


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class ProfileSaved:
    profile: StoreProfile


@dataclass(frozen=True)
class ItemsRefreshed:
    items: Sequence[CollectibleItem]


@dataclass(frozen=True)
class StartNewItem:
    pass


@dataclass(frozen=True)
class AnalysisCompleted:
    draft: PendingEdit


@dataclass(frozen=True)
class DraftUpdated:
    draft: PendingEdit


@dataclass(frozen=True)
class EditItem:
    item: CollectibleItem


@dataclass(frozen=True)
class ItemSaved:
    items: Sequence[CollectibleItem]


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class SelectProduct:
    item_id: str


@dataclass(frozen=True)
class OpenLegal:
    pass


@dataclass(frozen=True)
class GoBack:
    pass


@dataclass(frozen=True)
class RequestDelete:
    item_id: str


@dataclass(frozen=True)
class CancelDelete:
    pass


@dataclass(frozen=True)
class ItemDeleted:
    items: Sequence[CollectibleItem]


@dataclass(frozen=True)
class OperationFailed:
    message: str


@dataclass(frozen=True)
class DismissError:
    pass


Action = Union[
    Loaded,
    Navigate,
    LoginSucceeded,
    Logout,
    ProfileSaved,
    ItemsRefreshed,
    StartNewItem,
    AnalysisCompleted,
    DraftUpdated,
    EditItem,
    ItemSaved,
    CancelEdit,
    SelectProduct,
    OpenLegal,
    GoBack,
    RequestDelete,
    CancelDelete,
    ItemDeleted,
    OperationFailed,
    DismissError,
]


def guard(state: ViewState, target: Screen) -> Screen:
    """target に入れない場合の振り替え先を返す。"""
    if target in ADMIN_SCREENS or target is Screen.LOGIN:
        if state.needs_setup:
            return Screen.SETUP
        if target in ADMIN_SCREENS and not state.authenticated:
            return Screen.LOGIN
    # 登録済みストアの設定変更は管理者のみ
    if target is Screen.SETUP and not state.needs_setup and not state.authenticated:
        return Screen.LOGIN
    if target is Screen.STOREFRONT and state.profile is None:
        return Screen.SETUP
    if target is Screen.PRODUCT and (state.profile is None or state.selected_item is None):
        return Screen.STOREFRONT if state.profile is not None else Screen.SETUP
    return target


def _go(state: ViewState, target: Screen, **changes) -> ViewState:
    state = replace(state, **changes)
    screen = guard(state, target)
    updates: dict = {"screen": screen}
    if screen is Screen.LOGIN and target is not Screen.LOGIN:
        updates["login_target"] = target
    if screen is not Screen.DETAILS:
        updates["pending"] = None
    if screen is not Screen.DASHBOARD:
        updates["delete_candidate_id"] = None
    if "error" not in changes:
        updates["error"] = None
    return replace(state, **updates)


def _leaf_return(state: ViewState) -> Screen:
    # leaf から leaf へ移っても元の戻り先を保つ
    if state.screen in LEAF_SCREENS:
        return state.return_to
    return state.screen


def initial_state(
    profile: Optional[StoreProfile],
    items: Sequence[CollectibleItem],
    deep_link_item_id: Optional[str] = None,
) -> ViewState:
    return reduce(ViewState(), Loaded(profile=profile, items=items, deep_link_item_id=deep_link_item_id))


def reduce(state: ViewState, action: Action) -> ViewState:
    """action を適用した次の状態を返す。"""
    if isinstance(action, Loaded):
        fresh = ViewState(
            profile=action.profile,
            items=tuple(action.items),
            error=action.error,
            load_failed=action.error is not None,
        )
        if fresh.needs_setup:
            return replace(fresh, screen=Screen.SETUP)
        if action.deep_link_item_id and fresh.find_item(action.deep_link_item_id):
            return replace(
                fresh,
                screen=Screen.PRODUCT,
                selected_item_id=action.deep_link_item_id,
                return_to=Screen.STOREFRONT,
            )
        return replace(fresh, screen=Screen.STOREFRONT)

    if isinstance(action, Navigate):
        return _go(state, action.screen)

    if isinstance(action, LoginSucceeded):
        target = state.login_target or Screen.DASHBOARD
        return _go(state, target, authenticated=True, login_target=Screen.DASHBOARD)

    if isinstance(action, Logout):
        return _go(state, Screen.STOREFRONT, authenticated=False, login_target=Screen.DASHBOARD)

    if isinstance(action, ProfileSaved):
        return _go(state, Screen.DASHBOARD, profile=action.profile, authenticated=True)

    if isinstance(action, ItemsRefreshed):
        return replace(state, items=tuple(action.items))

    if isinstance(action, StartNewItem):
        return _go(state, Screen.SCAN)

    if isinstance(action, AnalysisCompleted):
        return _go(state, Screen.DETAILS, pending=action.draft)

    if isinstance(action, DraftUpdated):
        if state.screen is not Screen.DETAILS:
            return state
        return replace(state, pending=action.draft, error=None)

    if isinstance(action, EditItem):
        return _go(state, Screen.DETAILS, pending=PendingEdit.from_item(action.item))

    if isinstance(action, ItemSaved):
        return _go(state, Screen.DASHBOARD, items=tuple(action.items))

    if isinstance(action, CancelEdit):
        return _go(state, Screen.DASHBOARD)

    if isinstance(action, SelectProduct):
        return _go(
            state,
            Screen.PRODUCT,
            selected_item_id=action.item_id,
            return_to=_leaf_return(state),
        )

    if isinstance(action, OpenLegal):
        return _go(state, Screen.LEGAL, return_to=_leaf_return(state))

    if isinstance(action, GoBack):
        target = state.return_to
        if target in ADMIN_SCREENS and not state.authenticated:
            target = Screen.STOREFRONT
        return _go(state, target)

    if isinstance(action, RequestDelete):
        if state.screen is not Screen.DASHBOARD or state.find_item(action.item_id) is None:
            return state
        return replace(state, delete_candidate_id=action.item_id)

    if isinstance(action, CancelDelete):
        return replace(state, delete_candidate_id=None)

    if isinstance(action, ItemDeleted):
        return replace(state, items=tuple(action.items), delete_candidate_id=None, error=None)

    if isinstance(action, OperationFailed):
        return replace(state, error=action.message)

    if isinstance(action, DismissError):
        return replace(state, error=None)

    raise TypeError(f"unknown action: {action!r}")
