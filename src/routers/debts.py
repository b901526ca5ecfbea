from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_debt
from src.models import debt as debt_models
from src.db.core import get_db, NotFoundError, DebtType
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/debts",
    tags=["debts"],
)

@router.get("/", response_model=List[debt_models.DebtResponse])
def read_debts(
    debt_type: Optional[DebtType] = Query(None, alias="type"),
    is_paid: Optional[bool] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve debts, most recent first. ``search`` matches description or note.
    """
    return crud_debt.read_db_debts(
        db=db, user_id=user_id, debt_type=debt_type, is_paid=is_paid,
        search=search, page=page, limit=limit
    )

@router.get("/summary", response_model=debt_models.DebtSummary)
def read_debt_summary(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Debt counts and totals in both directions.
    """
    return crud_debt.get_debt_summary(db=db, user_id=user_id)

@router.get("/{debt_id}", response_model=debt_models.DebtResponse)
def read_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_debt = crud_debt.read_db_debt(db=db, debt_id=debt_id, user_id=user_id)
    if db_debt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Debt not found")
    return db_debt

@router.post("/", response_model=debt_models.DebtResponse, status_code=status.HTTP_201_CREATED)
def create_debt(
    debt: debt_models.DebtCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_debt.create_db_debt(db=db, user_id=user_id, debt_data=debt)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{debt_id}/pay", response_model=debt_models.DebtResponse)
def pay_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Mark a debt as paid today.
    """
    try:
        return crud_debt.mark_debt_paid(db=db, debt_id=debt_id, user_id=user_id, is_paid=True)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{debt_id}/unpay", response_model=debt_models.DebtResponse)
def unpay_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Reopen a paid debt.
    """
    try:
        return crud_debt.mark_debt_paid(db=db, debt_id=debt_id, user_id=user_id, is_paid=False)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{debt_id}", response_model=debt_models.DebtResponse)
def update_debt(
    debt_id: int,
    debt: debt_models.DebtUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_debt.update_db_debt(db=db, debt_id=debt_id, user_id=user_id, debt_updates=debt)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{debt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_debt.delete_db_debt(db=db, debt_id=debt_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
