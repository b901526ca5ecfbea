from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from src.db.core import FundType

# ===== FUND BUDGET MODELS =====

class FundBudgetUpsert(BaseModel):
    amount: Decimal = Field(..., ge=0, description="Budgeted amount (per month for monthly funds)")
    amount_given: Optional[Decimal] = Field(None, ge=0, description="Cash handed out to the envelope so far")
    spent: Optional[Decimal] = Field(None, ge=0, description="Amount spent from a ledger fund so far")

    @field_validator('amount', 'amount_given', 'spent')
    @classmethod
    def validate_amounts(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return round(v, 2) if v is not None else v

class FundBudgetResponse(BaseModel):
    id: int
    fund_id: int
    budget_year_id: int
    amount: Decimal
    amount_given: Decimal
    spent: Decimal

    class Config:
        from_attributes = True

# ===== FUND MODELS =====

class FundCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Fund name")
    type: FundType = Field(..., description="monthly, annual or savings")
    level: int = Field(default=1, ge=1, le=3, description="Priority level, 1 to 3")
    include_in_budget: bool = Field(default=True)
    display_order: int = Field(default=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return v.strip()

class FundUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[FundType] = None
    level: Optional[int] = Field(None, ge=1, le=3)
    include_in_budget: Optional[bool] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

class FundResponse(BaseModel):
    id: int
    name: str
    type: FundType
    level: int
    include_in_budget: bool
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    fund_budgets: List[FundBudgetResponse] = []

    class Config:
        from_attributes = True

class FundSummary(BaseModel):
    """Fund fields embedded in other responses"""
    id: int
    name: str
    type: FundType

    class Config:
        from_attributes = True

class FundSpent(BaseModel):
    fund_id: int
    budget_year_id: Optional[int] = None
    spent: float
