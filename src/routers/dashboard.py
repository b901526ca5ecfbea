from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from src.models.dashboard import DashboardSummary
from src.services.dashboard import get_dashboard_summary
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)

@router.get("/summary", response_model=DashboardSummary)
def read_dashboard_summary(
    budget_year_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Income, expenses, budget allocation, debts, tasks, tithe and net worth in one call.
    Uses the active budget year unless ``budget_year_id`` is given.
    """
    try:
        return get_dashboard_summary(db=db, user_id=user_id, budget_year_id=budget_year_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
