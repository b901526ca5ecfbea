from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any
from datetime import date

from src.db.core import DebtDB, DebtType, NotFoundError
from src.models.debt import DebtCreate, DebtUpdate, DebtSummary
from src.crud.filters import scoped_query, filter_equal, filter_search, resolve_page, paginate
from src.services import metrics
from src.logging_config import get_logger

logger = get_logger(__name__)


def _sync_paid_date(db_debt: DebtDB, paid_date: Optional[date] = None) -> None:
    """Keep paid_date set exactly when the debt is paid."""
    if db_debt.is_paid:
        db_debt.paid_date = paid_date or db_debt.paid_date or date.today()
    else:
        db_debt.paid_date = None


# ===== DATABASE OPERATIONS =====

def create_db_debt(db: Session, user_id: str, debt_data: DebtCreate) -> DebtDB:
    """Create a new debt"""
    db_debt = DebtDB(user_id=user_id, **debt_data.model_dump(exclude={'paid_date'}))
    _sync_paid_date(db_debt, debt_data.paid_date)

    try:
        db.add(db_debt)
        db.commit()
        db.refresh(db_debt)
    except IntegrityError:
        db.rollback()
        raise ValueError("Debt creation failed due to database constraint")

    logger.info(f"Created debt {db_debt.id} ({db_debt.type.value}) for user {user_id}")
    return db_debt


def read_db_debt(db: Session, debt_id: int, user_id: str) -> Optional[DebtDB]:
    """Read a debt by ID"""
    return scoped_query(db, DebtDB, user_id).filter(DebtDB.id == debt_id).first()


def read_db_debts(
    db: Session,
    user_id: str,
    debt_type: Optional[DebtType] = None,
    is_paid: Optional[bool] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> List[DebtDB]:
    """Read a page of debts, most recently created first"""
    query = scoped_query(db, DebtDB, user_id)
    query = filter_equal(query, DebtDB.type, debt_type)
    query = filter_equal(query, DebtDB.is_paid, is_paid)
    query = filter_search(query, [DebtDB.description, DebtDB.note], search)
    query = query.order_by(desc(DebtDB.created_at), desc(DebtDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def read_all_debts(db: Session, user_id: str) -> List[DebtDB]:
    return scoped_query(db, DebtDB, user_id).all()


def update_db_debt(db: Session, debt_id: int, user_id: str, debt_updates: DebtUpdate) -> DebtDB:
    """Update an existing debt"""
    db_debt = read_db_debt(db, debt_id, user_id)
    if not db_debt:
        raise NotFoundError(f"Debt with id {debt_id} not found")

    update_data = debt_updates.model_dump(exclude_unset=True)
    paid_date = update_data.pop('paid_date', None)

    for field, value in update_data.items():
        setattr(db_debt, field, value)
    _sync_paid_date(db_debt, paid_date)

    try:
        db.commit()
        db.refresh(db_debt)
    except IntegrityError:
        db.rollback()
        raise ValueError("Debt update failed due to database constraint")

    logger.info(f"Updated debt {debt_id} for user {user_id}")
    return db_debt


def mark_debt_paid(db: Session, debt_id: int, user_id: str, is_paid: bool) -> DebtDB:
    """Mark a debt paid as of today, or reopen it"""
    db_debt = read_db_debt(db, debt_id, user_id)
    if not db_debt:
        raise NotFoundError(f"Debt with id {debt_id} not found")

    db_debt.is_paid = is_paid
    db_debt.paid_date = date.today() if is_paid else None
    db.commit()
    db.refresh(db_debt)

    logger.info(f"Marked debt {debt_id} as {'paid' if is_paid else 'unpaid'} for user {user_id}")
    return db_debt


def delete_db_debt(db: Session, debt_id: int, user_id: str) -> bool:
    """Delete a debt"""
    db_debt = read_db_debt(db, debt_id, user_id)
    if not db_debt:
        raise NotFoundError(f"Debt with id {debt_id} not found")

    db.delete(db_debt)
    db.commit()
    logger.info(f"Deleted debt {debt_id} for user {user_id}")
    return True


# ===== SUMMARY =====

def unpaid_totals(debts: List[DebtDB]):
    """(owed to me, I owe) over unpaid debts only"""
    owed_to_me = metrics.total(d for d in debts if d.type == DebtType.OWED_TO_ME and not d.is_paid)
    i_owe = metrics.total(d for d in debts if d.type == DebtType.I_OWE and not d.is_paid)
    return owed_to_me, i_owe


def get_debt_summary(db: Session, user_id: str) -> DebtSummary:
    """Counts and totals of debts in both directions, overall and unpaid"""
    debts = read_all_debts(db, user_id)

    paid_count = sum(1 for debt in debts if debt.is_paid)
    owed_to_me = metrics.total(d for d in debts if d.type == DebtType.OWED_TO_ME)
    i_owe = metrics.total(d for d in debts if d.type == DebtType.I_OWE)
    unpaid_owed_to_me, unpaid_i_owe = unpaid_totals(debts)

    return DebtSummary(
        total_debts=len(debts),
        paid_debts=paid_count,
        unpaid_debts=len(debts) - paid_count,
        owed_to_me=metrics.to_float(owed_to_me),
        i_owe=metrics.to_float(i_owe),
        unpaid_owed_to_me=metrics.to_float(unpaid_owed_to_me),
        unpaid_i_owe=metrics.to_float(unpaid_i_owe),
        net_balance=metrics.to_float(owed_to_me - i_owe),
        unpaid_net_balance=metrics.to_float(unpaid_owed_to_me - unpaid_i_owe),
    )
