from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import asc
from typing import Optional, List
from datetime import date

from src.db.core import BudgetYearDB, CashEnvelopeTransactionDB, FundDB, NotFoundError
from src.models.cash_envelope import CashEnvelopeTransactionCreate
from src.crud.crud_budget_year import read_active_budget_year, read_budget_year_for_date, read_db_budget_year
from src.crud.filters import scoped_query
from src.logging_config import get_logger

logger = get_logger(__name__)


def resolve_envelope_budget_year(db: Session, user_id: str, budget_year_id: Optional[int],
                                 day: date) -> BudgetYearDB:
    """
    Pick the budget year for envelope activity: the explicit one, else the
    active one, else the one containing ``day``.
    """
    if budget_year_id is not None:
        budget_year = read_db_budget_year(db, budget_year_id, user_id)
        if not budget_year:
            raise NotFoundError(f"Budget year with id {budget_year_id} not found")
        return budget_year

    budget_year = read_active_budget_year(db, user_id) or read_budget_year_for_date(db, user_id, day)
    if not budget_year:
        raise ValueError("No active or current budget year found")
    return budget_year


# ===== DATABASE OPERATIONS =====

def create_db_cash_envelope_transaction(db: Session, user_id: str,
                                        transaction_data: CashEnvelopeTransactionCreate) -> CashEnvelopeTransactionDB:
    """Record cash taken from a fund's envelope"""
    fund = scoped_query(db, FundDB, user_id).filter(FundDB.id == transaction_data.fund_id).first()
    if not fund:
        raise NotFoundError(f"Fund with id {transaction_data.fund_id} not found")

    budget_year = resolve_envelope_budget_year(db, user_id, transaction_data.budget_year_id, transaction_data.date)

    db_transaction = CashEnvelopeTransactionDB(
        user_id=user_id,
        fund_id=fund.id,
        budget_year_id=budget_year.id,
        date=transaction_data.date,
        month=transaction_data.date.month,
        year=transaction_data.date.year,
        amount=transaction_data.amount,
        description=transaction_data.description,
    )

    try:
        db.add(db_transaction)
        db.commit()
        db.refresh(db_transaction)
    except IntegrityError:
        db.rollback()
        raise ValueError("Cash envelope transaction creation failed due to database constraint")

    logger.info(f"Created cash envelope transaction {db_transaction.id} for fund {fund.id}")
    return db_transaction


def read_db_cash_envelope_transactions(db: Session, user_id: str, budget_year_id: int,
                                       month: int) -> List[CashEnvelopeTransactionDB]:
    """Read one month of envelope transactions in date order, with their fund"""
    if month < 1 or month > 12:
        raise ValueError("Invalid month. Must be 1-12.")

    return scoped_query(db, CashEnvelopeTransactionDB, user_id).filter(
        CashEnvelopeTransactionDB.budget_year_id == budget_year_id,
        CashEnvelopeTransactionDB.month == month
    ).options(joinedload(CashEnvelopeTransactionDB.fund)).order_by(
        asc(CashEnvelopeTransactionDB.date), asc(CashEnvelopeTransactionDB.id)
    ).all()
