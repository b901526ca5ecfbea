from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from src.models.common import CamelModel

# ===== TASK PYDANTIC MODELS =====

class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    important: bool = False
    completed: bool = False

class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    important: Optional[bool] = None
    completed: Optional[bool] = None

class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    important: bool
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TaskSummary(CamelModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    important_tasks: int
    completion_rate: float
