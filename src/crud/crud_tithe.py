from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any
from datetime import date
from decimal import Decimal

from src.db.core import TitheDB, IncomeDB, NotFoundError
from src.models.tithe import TitheCreate, TitheUpdate, TitheSummary
from src.crud.filters import scoped_query, filter_date_range, filter_search, resolve_page, paginate
from src.services import metrics
from src.logging_config import get_logger

logger = get_logger(__name__)

# Share of income expected to be given
TITHE_RATE = Decimal("0.10")


# ===== DATABASE OPERATIONS =====

def create_db_tithe(db: Session, user_id: str, tithe_data: TitheCreate) -> TitheDB:
    """Record a tithe"""
    db_tithe = TitheDB(user_id=user_id, **tithe_data.model_dump())

    try:
        db.add(db_tithe)
        db.commit()
        db.refresh(db_tithe)
    except IntegrityError:
        db.rollback()
        raise ValueError("Tithe creation failed due to database constraint")

    logger.info(f"Created tithe {db_tithe.id} for user {user_id}")
    return db_tithe


def read_db_tithe(db: Session, tithe_id: int, user_id: str) -> Optional[TitheDB]:
    """Read a tithe by ID"""
    return scoped_query(db, TitheDB, user_id).filter(TitheDB.id == tithe_id).first()


def read_db_tithes(
    db: Session,
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> List[TitheDB]:
    """Read a page of tithes, newest first"""
    query = scoped_query(db, TitheDB, user_id)
    query = filter_date_range(query, TitheDB.date, start_date, end_date)
    query = filter_search(query, [TitheDB.description, TitheDB.note], search)
    query = query.order_by(desc(TitheDB.date), desc(TitheDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def read_all_tithes(db: Session, user_id: str) -> List[TitheDB]:
    return scoped_query(db, TitheDB, user_id).all()


def update_db_tithe(db: Session, tithe_id: int, user_id: str, tithe_updates: TitheUpdate) -> TitheDB:
    """Update an existing tithe"""
    db_tithe = read_db_tithe(db, tithe_id, user_id)
    if not db_tithe:
        raise NotFoundError(f"Tithe with id {tithe_id} not found")

    for field, value in tithe_updates.model_dump(exclude_unset=True).items():
        setattr(db_tithe, field, value)

    try:
        db.commit()
        db.refresh(db_tithe)
    except IntegrityError:
        db.rollback()
        raise ValueError("Tithe update failed due to database constraint")

    logger.info(f"Updated tithe {tithe_id} for user {user_id}")
    return db_tithe


def delete_db_tithe(db: Session, tithe_id: int, user_id: str) -> bool:
    """Delete a tithe"""
    db_tithe = read_db_tithe(db, tithe_id, user_id)
    if not db_tithe:
        raise NotFoundError(f"Tithe with id {tithe_id} not found")

    db.delete(db_tithe)
    db.commit()
    logger.info(f"Deleted tithe {tithe_id} for user {user_id}")
    return True


# ===== SUMMARY =====

def expected_tithe(total_income: Decimal) -> Decimal:
    return metrics.to_decimal(total_income) * TITHE_RATE


def get_tithe_summary(db: Session, user_id: str) -> TitheSummary:
    """Tithes given against 10% of all of the user's income"""
    tithes = read_all_tithes(db, user_id)
    incomes = scoped_query(db, IncomeDB, user_id).all()

    total_given = metrics.total(tithes)
    total_income = metrics.total(incomes)
    expected = expected_tithe(total_income)

    return TitheSummary(
        total_tithe_given=metrics.to_float(total_given),
        total_income=metrics.to_float(total_income),
        tithe_count=len(tithes),
        tithe_percentage=metrics.to_float(metrics.percentage(total_given, total_income)),
        expected_tithe=metrics.to_float(expected),
        tithe_balance=metrics.to_float(total_given - expected),
        average_tithe=metrics.to_float(metrics.average(tithes)),
        by_year=metrics.groups_to_float(metrics.group_totals(tithes, metrics.year_key, "Unknown")),
    )
