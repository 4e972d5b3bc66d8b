"""ストア用データモデル。JSON は旧フロントエンドと同じ camelCase キーで読み書きする。"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class ItemType(str, Enum):
    COIN = "מטבע"
    STAMP = "בול"

    @classmethod
    def parse(cls, value: Any) -> ItemType:
        """値（ヘブライ語ラベル）または名前（COIN / STAMP）から解決。"""
        if isinstance(value, ItemType):
            return value
        for member in cls:
            if value == member.value or str(value).upper() == member.name:
                return member
        raise ValueError(f"unknown item type: {value!r}")


class ItemStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    SOLD = "SOLD"

    @classmethod
    def parse(cls, value: Any) -> ItemStatus:
        """status 列が無い古いレコードは AVAILABLE とみなす。"""
        if not value:
            return cls.AVAILABLE
        return cls(str(value).upper())

    def toggled(self) -> ItemStatus:
        return ItemStatus.SOLD if self is ItemStatus.AVAILABLE else ItemStatus.AVAILABLE


@dataclass(frozen=True)
class AIAnalysisResult:
    item_name: str
    year: str
    origin: str
    condition_grade: str
    description: str
    estimated_value_range: str
    anomalies: tuple[str, ...] = ()
    confidence_score: float = 0.0

    @classmethod
    def from_dict(cls, d: Optional[dict[str, Any]]) -> Optional[AIAnalysisResult]:
        if not d:
            return None
        return cls(
            item_name=str(d.get("itemName") or ""),
            year=str(d.get("year") or ""),
            origin=str(d.get("origin") or ""),
            condition_grade=str(d.get("conditionGrade") or ""),
            description=str(d.get("description") or ""),
            estimated_value_range=str(d.get("estimatedValueRange") or ""),
            anomalies=tuple(str(a) for a in (d.get("anomalies") or []) if str(a).strip()),
            confidence_score=float(d.get("confidenceScore") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "itemName": self.item_name,
            "year": self.year,
            "origin": self.origin,
            "conditionGrade": self.condition_grade,
            "description": self.description,
            "estimatedValueRange": self.estimated_value_range,
            "anomalies": list(self.anomalies),
            "confidenceScore": self.confidence_score,
        }


@dataclass(frozen=True)
class StoreProfile:
    store_name: str
    owner_name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    logo_url: Optional[str] = None
    theme_color: str = "#2563eb"
    password: str = ""
    api_key: str = ""
    terms_accepted: bool = False

    @classmethod
    def from_dict(cls, d: Optional[dict[str, Any]]) -> Optional[StoreProfile]:
        if not d:
            return None
        return cls(
            store_name=str(d.get("storeName") or ""),
            owner_name=str(d.get("ownerName") or ""),
            email=str(d.get("email") or ""),
            phone=str(d.get("phone") or ""),
            address=str(d.get("address") or ""),
            logo_url=d.get("logoUrl") or None,
            theme_color=d.get("themeColor") or "#2563eb",
            password=str(d.get("password") or ""),
            api_key=str(d.get("apiKey") or ""),
            terms_accepted=bool(d.get("termsAccepted", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "storeName": self.store_name,
            "ownerName": self.owner_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "logoUrl": self.logo_url,
            "themeColor": self.theme_color,
            "password": self.password,
            "apiKey": self.api_key,
            "termsAccepted": self.terms_accepted,
        }

    @property
    def is_legacy(self) -> bool:
        """パスワード未設定のプロフィール。管理操作の前に setup をやり直す必要がある。"""
        return not self.password

    def missing_fields(self) -> list[str]:
        """setup フォームで保存できない理由（未入力項目）を返す。"""
        missing: list[str] = []
        if not self.store_name.strip():
            missing.append("storeName")
        if not self.owner_name.strip():
            missing.append("ownerName")
        if not self.password:
            missing.append("password")
        if not self.api_key.strip():
            missing.append("apiKey")
        if not self.terms_accepted:
            missing.append("termsAccepted")
        return missing


@dataclass(frozen=True)
class CollectibleItem:
    id: str
    created_at: int  # エポックミリ秒
    type: ItemType
    front_image: str
    back_image: str
    analysis: Optional[AIAnalysisResult]  # None = 未解析
    user_price: str
    status: ItemStatus = ItemStatus.AVAILABLE

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CollectibleItem:
        return cls(
            id=str(d["id"]),
            created_at=int(d.get("createdAt") or 0),
            type=ItemType.parse(d.get("type") or ItemType.COIN.value),
            front_image=str(d.get("frontImage") or ""),
            back_image=str(d.get("backImage") or ""),
            analysis=AIAnalysisResult.from_dict(d.get("analysis")),
            user_price=str(d.get("userPrice") or ""),
            status=ItemStatus.parse(d.get("status")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "createdAt": self.created_at,
            "type": self.type.value,
            "frontImage": self.front_image,
            "backImage": self.back_image,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "userPrice": self.user_price,
            "status": self.status.value,
        }

    @property
    def is_analyzed(self) -> bool:
        return self.analysis is not None

    @property
    def is_sold(self) -> bool:
        return self.status is ItemStatus.SOLD

    def display_name(self) -> str:
        """未解析アイテムは種別ラベルで表示する。"""
        if self.analysis and self.analysis.item_name:
            return self.analysis.item_name
        return self.type.value

    def with_status(self, status: ItemStatus) -> CollectibleItem:
        return replace(self, status=status)

    def with_toggled_status(self) -> CollectibleItem:
        return replace(self, status=self.status.toggled())


@dataclass
class ItemFields:
    """詳細（編集）フォームの入力値。保存時に AIAnalysisResult を上書きする。"""

    item_name: str = ""
    year: str = ""
    origin: str = ""
    condition_grade: str = ""
    description: str = ""
    estimated_value_range: str = ""
    anomalies: list[str] = field(default_factory=list)
    user_price: str = ""
    status: ItemStatus = ItemStatus.AVAILABLE

    @classmethod
    def from_analysis(
        cls,
        analysis: Optional[AIAnalysisResult],
        user_price: str = "",
        status: ItemStatus = ItemStatus.AVAILABLE,
    ) -> ItemFields:
        if analysis is None:
            return cls(user_price=user_price, status=status)
        return cls(
            item_name=analysis.item_name,
            year=analysis.year,
            origin=analysis.origin,
            condition_grade=analysis.condition_grade,
            description=analysis.description,
            estimated_value_range=analysis.estimated_value_range,
            anomalies=list(analysis.anomalies),
            user_price=user_price,
            status=status,
        )

    def is_blank(self) -> bool:
        return not any(
            [
                self.item_name.strip(),
                self.year.strip(),
                self.origin.strip(),
                self.condition_grade.strip(),
                self.description.strip(),
                self.estimated_value_range.strip(),
                any(a.strip() for a in self.anomalies),
            ]
        )

    def to_analysis(self, confidence_score: float = 0.0) -> AIAnalysisResult:
        return AIAnalysisResult(
            item_name=self.item_name.strip(),
            year=self.year.strip(),
            origin=self.origin.strip(),
            condition_grade=self.condition_grade.strip(),
            description=self.description.strip(),
            estimated_value_range=self.estimated_value_range.strip(),
            anomalies=tuple(a.strip() for a in self.anomalies if a.strip()),
            confidence_score=confidence_score,
        )
