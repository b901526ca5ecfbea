from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_fund, crud_expense
from src.models import fund as fund_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id
from src.services.metrics import to_float

router = APIRouter(
    prefix="/funds",
    tags=["funds"],
)

@router.get("/", response_model=List[fund_models.FundResponse])
def read_funds(
    budget_year_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve active funds in display order, optionally only those budgeted in a budget year.
    """
    return crud_fund.read_db_funds(db=db, user_id=user_id, budget_year_id=budget_year_id)

@router.get("/{fund_id}", response_model=fund_models.FundResponse)
def read_fund(
    fund_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve a fund with all of its budgets.
    """
    db_fund = crud_fund.read_db_fund(db=db, fund_id=fund_id, user_id=user_id)
    if db_fund is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fund not found")
    return db_fund

@router.get("/{fund_id}/spent", response_model=fund_models.FundSpent)
def read_fund_spent(
    fund_id: int,
    budget_year_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Total expenses paid from a fund within a budget year.
    """
    if crud_fund.read_db_fund(db=db, fund_id=fund_id, user_id=user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fund not found")
    spent = crud_expense.calculate_fund_spending(db=db, fund_id=fund_id, budget_year_id=budget_year_id, user_id=user_id)
    return fund_models.FundSpent(fund_id=fund_id, budget_year_id=budget_year_id, spent=to_float(spent))

@router.post("/", response_model=fund_models.FundResponse, status_code=status.HTTP_201_CREATED)
def create_fund(
    fund: fund_models.FundCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Create a new fund.
    """
    try:
        return crud_fund.create_db_fund(db=db, user_id=user_id, fund_data=fund)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{fund_id}/budget/{budget_year_id}", response_model=fund_models.FundBudgetResponse)
def upsert_fund_budget(
    fund_id: int,
    budget_year_id: int,
    budget: fund_models.FundBudgetUpsert,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Set a fund's budget amount for a budget year.
    """
    try:
        return crud_fund.upsert_fund_budget(db=db, fund_id=fund_id, budget_year_id=budget_year_id, user_id=user_id, budget_data=budget)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{fund_id}/activate", response_model=fund_models.FundResponse)
def activate_fund(
    fund_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_fund.set_fund_active(db=db, fund_id=fund_id, user_id=user_id, is_active=True)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{fund_id}/deactivate", response_model=fund_models.FundResponse)
def deactivate_fund(
    fund_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_fund.set_fund_active(db=db, fund_id=fund_id, user_id=user_id, is_active=False)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{fund_id}", response_model=fund_models.FundResponse)
def update_fund(
    fund_id: int,
    fund: fund_models.FundUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update a fund. Only supplied fields change.
    """
    try:
        return crud_fund.update_db_fund(db=db, fund_id=fund_id, user_id=user_id, fund_updates=fund)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{fund_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fund(
    fund_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Delete a fund with its categories and budgets.
    """
    try:
        crud_fund.delete_db_fund(db=db, fund_id=fund_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
