from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime

# ===== BUDGET YEAR PYDANTIC MODELS =====

class BudgetYearCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Budget year name, e.g. '2025'")
    start_date: date = Field(..., description="First day of the budget year")
    end_date: date = Field(..., description="Last day of the budget year")
    is_active: bool = Field(default=False, description="Make this the active budget year")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return v.strip()

    @field_validator('end_date')
    @classmethod
    def validate_end_date(cls, v: date, info) -> date:
        if 'start_date' in info.data and v <= info.data['start_date']:
            raise ValueError('end_date must be after start_date')
        return v

class BudgetYearUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @model_validator(mode='after')
    def validate_dates(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError('end_date must be after start_date')
        return self

class BudgetYearResponse(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
