from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional, List
from datetime import datetime

from src.db.core import SettingDataType
from src.models.common import CamelModel

# ===== SYSTEM SETTING PYDANTIC MODELS =====

class SettingCreate(BaseModel):
    setting_key: str = Field(..., min_length=1, max_length=100)
    setting_value: Any = Field(..., description="Stored as text; non-strings are JSON encoded")
    data_type: SettingDataType = Field(default=SettingDataType.STRING)
    description: Optional[str] = None

    @field_validator('setting_key')
    @classmethod
    def validate_setting_key(cls, v: str) -> str:
        return v.strip()

class SettingUpdate(BaseModel):
    setting_key: Optional[str] = Field(None, min_length=1, max_length=100)
    setting_value: Any = None
    data_type: Optional[SettingDataType] = None
    description: Optional[str] = None

class SettingValueUpdate(BaseModel):
    setting_value: Any = Field(...)
    data_type: Optional[SettingDataType] = None
    description: Optional[str] = None

class SettingResponse(BaseModel):
    id: int
    setting_key: str
    setting_value: Optional[str] = None
    data_type: SettingDataType
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class SettingPage(CamelModel):
    data: List[SettingResponse]
    total: int
    page: int
    limit: int
    has_more: bool
