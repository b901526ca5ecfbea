from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from decimal import Decimal

from src.crud import crud_expense
from src.models import expense as expense_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
)

@router.get("/", response_model=List[expense_models.ExpenseResponse])
def read_expenses(
    budget_year_id: Optional[int] = None,
    category_id: Optional[int] = None,
    fund_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve expenses, newest first, with their category and fund.
    """
    filters = expense_models.ExpenseFilter(
        budget_year_id=budget_year_id, category_id=category_id, fund_id=fund_id,
        start_date=start_date, end_date=end_date,
        min_amount=min_amount, max_amount=max_amount, search=search
    )
    return crud_expense.read_db_expenses(db=db, user_id=user_id, filters=filters, page=page, limit=limit)

@router.get("/stats/summary", response_model=expense_models.ExpenseSummary)
def read_expense_summary(
    budget_year_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Expense totals grouped by category, fund and month.
    """
    return crud_expense.get_expense_summary(db=db, user_id=user_id, budget_year_id=budget_year_id)

@router.get("/{expense_id}", response_model=expense_models.ExpenseResponse)
def read_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_expense = crud_expense.read_db_expense(db=db, expense_id=expense_id, user_id=user_id)
    if db_expense is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return db_expense

@router.post("/", response_model=expense_models.ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense: expense_models.ExpenseCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_expense.create_db_expense(db=db, user_id=user_id, expense_data=expense)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{expense_id}", response_model=expense_models.ExpenseResponse)
def update_expense(
    expense_id: int,
    expense: expense_models.ExpenseUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_expense.update_db_expense(db=db, expense_id=expense_id, user_id=user_id, expense_updates=expense)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_expense.delete_db_expense(db=db, expense_id=expense_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
