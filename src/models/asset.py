import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal

from src.db.core import AssetCategory
from src.models.common import CamelModel

# ===== ASSET DETAIL MODELS =====

class AssetDetailCreate(BaseModel):
    asset_type: str = Field(..., min_length=1, max_length=100, description="Stable key, e.g. 'checking'")
    asset_name: str = Field(..., min_length=1, max_length=255, description="Display name")
    amount: Decimal = Field(..., ge=0)
    category: AssetCategory = Field(..., description="asset or liability")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class AssetDetailResponse(BaseModel):
    id: int
    asset_type: str
    asset_name: str
    amount: Decimal
    category: AssetCategory

    class Config:
        from_attributes = True

# ===== ASSET SNAPSHOT MODELS =====

class AssetSnapshotCreate(BaseModel):
    date: dt.date
    note: Optional[str] = None
    details: List[AssetDetailCreate] = Field(default_factory=list)

    @field_validator('details')
    @classmethod
    def validate_details(cls, v: List[AssetDetailCreate]) -> List[AssetDetailCreate]:
        asset_types = [detail.asset_type for detail in v]
        if len(asset_types) != len(set(asset_types)):
            raise ValueError('Duplicate asset_type values are not allowed in one snapshot')
        return v

class AssetSnapshotUpdate(BaseModel):
    date: Optional[dt.date] = None
    note: Optional[str] = None
    details: Optional[List[AssetDetailCreate]] = None

    @field_validator('details')
    @classmethod
    def validate_details(cls, v: Optional[List[AssetDetailCreate]]) -> Optional[List[AssetDetailCreate]]:
        if v is not None:
            asset_types = [detail.asset_type for detail in v]
            if len(asset_types) != len(set(asset_types)):
                raise ValueError('Duplicate asset_type values are not allowed in one snapshot')
        return v

class AssetSnapshotResponse(BaseModel):
    id: int
    date: dt.date
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    details: List[AssetDetailResponse] = []

    class Config:
        from_attributes = True

# ===== TREND MODELS =====

class AssetTrendPoint(CamelModel):
    date: dt.date
    total_assets: float
    total_liabilities: float
    net_worth: float
    growth_rate: float

class AssetTrendSummary(CamelModel):
    current_net_worth: float
    average_growth_rate: float

class AssetTrends(CamelModel):
    trends: List[AssetTrendPoint]
    summary: AssetTrendSummary
