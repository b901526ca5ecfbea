import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict
from decimal import Decimal

from src.models.category import CategorySummary
from src.models.common import CamelModel, GroupTotal
from src.models.fund import FundSummary

# ===== EXPENSE PYDANTIC MODELS =====

class ExpenseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="What the money was spent on")
    amount: Decimal = Field(..., gt=0, description="Expense amount")
    budget_year_id: int = Field(..., description="Budget year the expense counts against")
    category_id: int = Field(..., description="Expense category")
    fund_id: int = Field(..., description="Fund the expense is paid from")
    date: dt.date = Field(..., description="Date of the expense")
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class ExpenseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0)
    budget_year_id: Optional[int] = None
    category_id: Optional[int] = None
    fund_id: Optional[int] = None
    date: Optional[dt.date] = None
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return round(v, 2) if v is not None else v

class ExpenseFilter(BaseModel):
    budget_year_id: Optional[int] = None
    category_id: Optional[int] = None
    fund_id: Optional[int] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    search: Optional[str] = None

class ExpenseResponse(BaseModel):
    id: int
    budget_year_id: int
    category_id: int
    fund_id: int
    name: str
    amount: Decimal
    date: dt.date
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    category: Optional[CategorySummary] = None
    fund: Optional[FundSummary] = None

    class Config:
        from_attributes = True

class ExpenseSummary(CamelModel):
    total_amount: float
    expense_count: int
    average_amount: float
    by_category: Dict[str, GroupTotal]
    by_fund: Dict[str, GroupTotal]
    by_month: Dict[str, GroupTotal]
