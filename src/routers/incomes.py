from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_income
from src.models import income as income_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/incomes",
    tags=["incomes"],
)

@router.get("/", response_model=List[income_models.IncomeResponse])
def read_incomes(
    budget_year_id: Optional[int] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve incomes, newest first. ``search`` matches name or note.
    """
    return crud_income.read_db_incomes(
        db=db, user_id=user_id, budget_year_id=budget_year_id, month=month, year=year,
        source=source, search=search, page=page, limit=limit
    )

@router.get("/summary", response_model=income_models.IncomeSummary)
def read_income_summary(
    budget_year_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Income totals grouped by source and month.
    """
    return crud_income.get_income_summary(db=db, user_id=user_id, budget_year_id=budget_year_id)

@router.get("/{income_id}", response_model=income_models.IncomeResponse)
def read_income(
    income_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_income = crud_income.read_db_income(db=db, income_id=income_id, user_id=user_id)
    if db_income is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Income not found")
    return db_income

@router.post("/", response_model=income_models.IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(
    income: income_models.IncomeCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Record an income. It is filed under the budget year containing its date.
    """
    try:
        return crud_income.create_db_income(db=db, user_id=user_id, income_data=income)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{income_id}", response_model=income_models.IncomeResponse)
def update_income(
    income_id: int,
    income: income_models.IncomeUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_income.update_db_income(db=db, income_id=income_id, user_id=user_id, income_updates=income)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_income(
    income_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_income.delete_db_income(db=db, income_id=income_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
