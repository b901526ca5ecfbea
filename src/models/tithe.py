import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict
from decimal import Decimal

from src.models.common import CamelModel, GroupTotal

# ===== TITHE PYDANTIC MODELS =====

class TitheCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    date: dt.date
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class TitheUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0)
    date: Optional[dt.date] = None
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return round(v, 2) if v is not None else v

class TitheResponse(BaseModel):
    id: int
    description: str
    amount: Decimal
    date: dt.date
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True

class TitheSummary(CamelModel):
    """Tithes given compared against 10% of all recorded income"""
    total_tithe_given: float
    total_income: float
    tithe_count: int
    tithe_percentage: float
    expected_tithe: float
    tithe_balance: float
    average_tithe: float
    by_year: Dict[str, GroupTotal]
