import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict
from decimal import Decimal

from src.models.common import CamelModel, GroupTotal

# ===== INCOME PYDANTIC MODELS =====

class IncomeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Income name, e.g. 'Salary'")
    amount: Decimal = Field(..., gt=0, description="Income amount")
    source: Optional[str] = Field(None, max_length=255, description="Where the income came from")
    date: dt.date = Field(..., description="Date received")
    note: Optional[str] = None
    budget_year_id: Optional[int] = Field(None, description="Defaults to the budget year containing the date")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class IncomeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0)
    source: Optional[str] = Field(None, max_length=255)
    date: Optional[dt.date] = None
    note: Optional[str] = None
    budget_year_id: Optional[int] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return round(v, 2) if v is not None else v

class IncomeResponse(BaseModel):
    id: int
    budget_year_id: int
    name: str
    amount: Decimal
    source: Optional[str] = None
    date: dt.date
    month: int
    year: int
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True

class IncomeSummary(CamelModel):
    total_amount: float
    income_count: int
    average_amount: float
    by_source: Dict[str, GroupTotal]
    by_month: Dict[str, GroupTotal]
