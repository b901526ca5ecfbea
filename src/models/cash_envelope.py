import datetime as dt
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal

from src.models.fund import FundSummary

# ===== CASH ENVELOPE TRANSACTION MODELS =====

class CashEnvelopeTransactionCreate(BaseModel):
    fund_id: int = Field(..., description="The monthly fund the cash came from")
    date: dt.date
    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = Field(None, max_length=255)
    budget_year_id: Optional[int] = Field(None, description="Defaults to the active budget year")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class CashEnvelopeTransactionResponse(BaseModel):
    id: int
    fund_id: int
    budget_year_id: int
    date: dt.date
    month: int
    year: int
    amount: Decimal
    description: Optional[str] = None
    created_at: dt.datetime
    fund: Optional[FundSummary] = None

    class Config:
        from_attributes = True
