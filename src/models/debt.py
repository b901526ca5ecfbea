import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal

from src.db.core import DebtType
from src.models.common import CamelModel

# ===== DEBT PYDANTIC MODELS =====

class DebtCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255, description="Who owes what")
    amount: Decimal = Field(..., gt=0)
    type: DebtType = Field(..., description="owed_to_me or i_owe")
    is_paid: bool = Field(default=False)
    paid_date: Optional[dt.date] = None
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class DebtUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0)
    type: Optional[DebtType] = None
    is_paid: Optional[bool] = None
    paid_date: Optional[dt.date] = None
    note: Optional[str] = None

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return round(v, 2) if v is not None else v

class DebtResponse(BaseModel):
    id: int
    description: str
    amount: Decimal
    type: DebtType
    is_paid: bool
    paid_date: Optional[dt.date] = None
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True

class DebtSummary(CamelModel):
    total_debts: int
    paid_debts: int
    unpaid_debts: int
    owed_to_me: float
    i_owe: float
    unpaid_owed_to_me: float
    unpaid_i_owe: float
    net_balance: float
    unpaid_net_balance: float
