from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from src.crud import crud_cash_envelope
from src.models import cash_envelope as cash_envelope_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/cash-envelope-transactions",
    tags=["cash-envelope-transactions"],
)

@router.get("/", response_model=List[cash_envelope_models.CashEnvelopeTransactionResponse])
def read_cash_envelope_transactions(
    month: Optional[int] = None,
    budget_year_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve one month of envelope transactions (default: the current month)
    within the given budget year, else the active or current one.
    """
    today = date.today()
    month = month if month is not None else today.month
    try:
        budget_year = crud_cash_envelope.resolve_envelope_budget_year(db, user_id, budget_year_id, today)
        return crud_cash_envelope.read_db_cash_envelope_transactions(
            db=db, user_id=user_id, budget_year_id=budget_year.id, month=month
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.post("/", response_model=cash_envelope_models.CashEnvelopeTransactionResponse, status_code=status.HTTP_201_CREATED)
def create_cash_envelope_transaction(
    transaction: cash_envelope_models.CashEnvelopeTransactionCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Record cash taken from a fund's envelope.
    """
    try:
        return crud_cash_envelope.create_db_cash_envelope_transaction(db=db, user_id=user_id, transaction_data=transaction)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
