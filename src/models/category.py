from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from src.models.fund import FundSummary

# ===== CATEGORY PYDANTIC MODELS =====

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    fund_id: int = Field(..., description="The fund this category draws from")
    color_class: Optional[str] = Field(None, max_length=50, description="CSS class used by the UI")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return v.strip()

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    fund_id: Optional[int] = None
    color_class: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None

class CategoryResponse(BaseModel):
    id: int
    name: str
    fund_id: int
    color_class: Optional[str] = None
    is_active: bool
    created_at: datetime
    fund: Optional[FundSummary] = None

    class Config:
        from_attributes = True

class CategorySummary(BaseModel):
    name: str
    color_class: Optional[str] = None

    class Config:
        from_attributes = True
