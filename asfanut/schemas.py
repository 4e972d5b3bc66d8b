"""
REST API のリクエストスキーマ。

サーバーは本体を不透明な JSON として保存するため、検証するのは
行のキーになる項目（アイテムの id / createdAt）だけ。その他の項目はそのまま通す。
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfilePayload(BaseModel):
    """ストアプロフィール（単一行）"""
    model_config = ConfigDict(extra="allow")

    storeName: Optional[str] = Field(None, description="Store display name")
    ownerName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    logoUrl: Optional[str] = Field(None, description="Inline data URL")
    themeColor: Optional[str] = None
    password: Optional[str] = None
    apiKey: Optional[str] = None
    termsAccepted: bool = False


class ItemPayload(BaseModel):
    """コレクションアイテム。id で upsert される"""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Opaque unique id")
    createdAt: int = Field(..., ge=0, description="Epoch milliseconds")
    type: Optional[str] = None
    status: Optional[str] = Field(None, description="AVAILABLE | SOLD")
    frontImage: Optional[str] = None
    backImage: Optional[str] = None
    analysis: Optional[dict[str, Any]] = None
    userPrice: Optional[str] = None


class SaveResult(BaseModel):
    message: str
    id: Optional[str] = None


class HealthResult(BaseModel):
    status: str
    db_path: str
    tables: List[str] = Field(default_factory=list)
