from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_budget_year
from src.models import budget_year as budget_year_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/budget-years",
    tags=["budget-years"],
)

@router.get("/", response_model=List[budget_year_models.BudgetYearResponse])
def read_budget_years(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve the current user's budget years, newest first.
    """
    return crud_budget_year.read_db_budget_years(db=db, user_id=user_id, page=page, limit=limit)

@router.get("/active", response_model=budget_year_models.BudgetYearResponse)
def read_active_budget_year(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve the active budget year.
    """
    db_budget_year = crud_budget_year.read_active_budget_year(db=db, user_id=user_id)
    if db_budget_year is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active budget year")
    return db_budget_year

@router.get("/{budget_year_id}", response_model=budget_year_models.BudgetYearResponse)
def read_budget_year(
    budget_year_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve a specific budget year by its ID.
    """
    db_budget_year = crud_budget_year.read_db_budget_year(db=db, budget_year_id=budget_year_id, user_id=user_id)
    if db_budget_year is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget year not found")
    return db_budget_year

@router.post("/", response_model=budget_year_models.BudgetYearResponse, status_code=status.HTTP_201_CREATED)
def create_budget_year(
    budget_year: budget_year_models.BudgetYearCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Create a new budget year. Creating it active deactivates the others.
    """
    try:
        return crud_budget_year.create_db_budget_year(db=db, user_id=user_id, budget_year_data=budget_year)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{budget_year_id}/activate", response_model=budget_year_models.BudgetYearResponse)
def activate_budget_year(
    budget_year_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Make this the only active budget year.
    """
    try:
        return crud_budget_year.activate_db_budget_year(db=db, budget_year_id=budget_year_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{budget_year_id}", response_model=budget_year_models.BudgetYearResponse)
def update_budget_year(
    budget_year_id: int,
    budget_year: budget_year_models.BudgetYearUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update a budget year's name, dates or active flag.
    """
    try:
        return crud_budget_year.update_db_budget_year(db=db, budget_year_id=budget_year_id, user_id=user_id, budget_year_updates=budget_year)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{budget_year_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget_year(
    budget_year_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Delete a budget year.
    """
    try:
        crud_budget_year.delete_db_budget_year(db=db, budget_year_id=budget_year_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
