from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import case, desc
from typing import Optional, List, Any
from datetime import date, datetime

from src.db.core import BudgetYearDB, NotFoundError
from src.models.budget_year import BudgetYearCreate, BudgetYearUpdate
from src.crud.filters import scoped_query, resolve_page, paginate
from src.logging_config import get_logger

logger = get_logger(__name__)


# ===== DATABASE OPERATIONS =====

def _set_exclusive_active(db: Session, user_id: str, budget_year_id: int) -> None:
    """Mark one budget year active and every other year of the user inactive, in one statement."""
    db.query(BudgetYearDB).filter(BudgetYearDB.user_id == user_id).update(
        {
            BudgetYearDB.is_active: case((BudgetYearDB.id == budget_year_id, True), else_=False),
            BudgetYearDB.updated_at: datetime.utcnow(),
        },
        synchronize_session=False,
    )


def create_db_budget_year(db: Session, user_id: str, budget_year_data: BudgetYearCreate) -> BudgetYearDB:
    """Create a new budget year"""
    db_budget_year = BudgetYearDB(
        user_id=user_id,
        name=budget_year_data.name,
        start_date=budget_year_data.start_date,
        end_date=budget_year_data.end_date,
        is_active=False,
    )

    try:
        db.add(db_budget_year)
        db.flush()
        if budget_year_data.is_active:
            _set_exclusive_active(db, user_id, db_budget_year.id)
        db.commit()
        db.refresh(db_budget_year)
    except IntegrityError:
        db.rollback()
        raise ValueError("Budget year creation failed due to database constraint")

    logger.info(f"Created budget year {db_budget_year.id} for user {user_id}")
    return db_budget_year


def read_db_budget_year(db: Session, budget_year_id: int, user_id: str) -> Optional[BudgetYearDB]:
    """Read a budget year by ID"""
    return scoped_query(db, BudgetYearDB, user_id).filter(BudgetYearDB.id == budget_year_id).first()


def read_db_budget_years(db: Session, user_id: str, page: Any = None, limit: Any = None) -> List[BudgetYearDB]:
    """Read all budget years for a user, newest first"""
    query = scoped_query(db, BudgetYearDB, user_id).order_by(desc(BudgetYearDB.start_date))
    return paginate(query, resolve_page(page, limit)).all()


def read_active_budget_year(db: Session, user_id: str) -> Optional[BudgetYearDB]:
    """Read the user's active budget year, if any"""
    return scoped_query(db, BudgetYearDB, user_id).filter(BudgetYearDB.is_active.is_(True)).first()


def read_budget_year_for_date(db: Session, user_id: str, day: date) -> Optional[BudgetYearDB]:
    """Find the budget year whose span contains ``day``"""
    return scoped_query(db, BudgetYearDB, user_id).filter(
        BudgetYearDB.start_date <= day,
        BudgetYearDB.end_date >= day,
    ).order_by(desc(BudgetYearDB.start_date)).first()


def resolve_budget_year(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> Optional[BudgetYearDB]:
    """
    Resolve the budget year a request targets: the explicit one when an id is
    given (NotFoundError if it is not the user's), otherwise the active one.
    """
    if budget_year_id is not None:
        budget_year = read_db_budget_year(db, budget_year_id, user_id)
        if not budget_year:
            raise NotFoundError(f"Budget year with id {budget_year_id} not found")
        return budget_year
    return read_active_budget_year(db, user_id)


def update_db_budget_year(db: Session, budget_year_id: int, user_id: str, budget_year_updates: BudgetYearUpdate) -> BudgetYearDB:
    """Update an existing budget year"""
    db_budget_year = read_db_budget_year(db, budget_year_id, user_id)
    if not db_budget_year:
        raise NotFoundError(f"Budget year with id {budget_year_id} not found")

    update_data = budget_year_updates.model_dump(exclude_unset=True)
    activate = update_data.pop('is_active', None)

    start_date = update_data.get('start_date', db_budget_year.start_date)
    end_date = update_data.get('end_date', db_budget_year.end_date)
    if end_date <= start_date:
        raise ValueError("end_date must be after start_date")

    for field, value in update_data.items():
        setattr(db_budget_year, field, value)

    try:
        if activate is True:
            db.flush()
            _set_exclusive_active(db, user_id, budget_year_id)
        elif activate is False:
            db_budget_year.is_active = False
        db.commit()
        db.refresh(db_budget_year)
    except IntegrityError:
        db.rollback()
        raise ValueError("Budget year update failed due to database constraint")

    logger.info(f"Updated budget year {budget_year_id} for user {user_id}")
    return db_budget_year


def activate_db_budget_year(db: Session, budget_year_id: int, user_id: str) -> BudgetYearDB:
    """Make a budget year the user's only active one"""
    db_budget_year = read_db_budget_year(db, budget_year_id, user_id)
    if not db_budget_year:
        raise NotFoundError(f"Budget year with id {budget_year_id} not found")

    _set_exclusive_active(db, user_id, budget_year_id)
    db.commit()
    db.refresh(db_budget_year)

    logger.info(f"Activated budget year {budget_year_id} for user {user_id}")
    return db_budget_year


def delete_db_budget_year(db: Session, budget_year_id: int, user_id: str) -> bool:
    """Delete a budget year and everything scoped to it"""
    db_budget_year = read_db_budget_year(db, budget_year_id, user_id)
    if not db_budget_year:
        raise NotFoundError(f"Budget year with id {budget_year_id} not found")

    db.delete(db_budget_year)
    db.commit()
    logger.info(f"Deleted budget year {budget_year_id} for user {user_id}")
    return True
