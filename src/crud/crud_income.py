from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any

from src.db.core import IncomeDB, NotFoundError
from src.models.income import IncomeCreate, IncomeUpdate, IncomeSummary
from src.crud.crud_budget_year import read_budget_year_for_date, read_db_budget_year
from src.crud.filters import scoped_query, filter_equal, filter_search, resolve_page, paginate
from src.services import metrics
from src.logging_config import get_logger

logger = get_logger(__name__)


# ===== DATABASE OPERATIONS =====

def create_db_income(db: Session, user_id: str, income_data: IncomeCreate) -> IncomeDB:
    """Create an income, filing it under the budget year that contains its date"""
    if income_data.budget_year_id is not None:
        budget_year = read_db_budget_year(db, income_data.budget_year_id, user_id)
        if not budget_year:
            raise NotFoundError(f"Budget year with id {income_data.budget_year_id} not found")
    else:
        budget_year = read_budget_year_for_date(db, user_id, income_data.date)
        if not budget_year:
            raise ValueError(f"No budget year found for date {income_data.date.isoformat()}")

    db_income = IncomeDB(
        user_id=user_id,
        budget_year_id=budget_year.id,
        name=income_data.name,
        amount=income_data.amount,
        source=income_data.source,
        date=income_data.date,
        month=income_data.date.month,
        year=income_data.date.year,
        note=income_data.note,
    )

    try:
        db.add(db_income)
        db.commit()
        db.refresh(db_income)
    except IntegrityError:
        db.rollback()
        raise ValueError("Income creation failed due to database constraint")

    logger.info(f"Created income {db_income.id} for user {user_id}")
    return db_income


def read_db_income(db: Session, income_id: int, user_id: str) -> Optional[IncomeDB]:
    """Read an income by ID"""
    return scoped_query(db, IncomeDB, user_id).filter(IncomeDB.id == income_id).first()


def read_db_incomes(
    db: Session,
    user_id: str,
    budget_year_id: Optional[int] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> List[IncomeDB]:
    """Read a page of incomes, newest first"""
    query = scoped_query(db, IncomeDB, user_id)
    query = filter_equal(query, IncomeDB.budget_year_id, budget_year_id)
    query = filter_equal(query, IncomeDB.month, month)
    query = filter_equal(query, IncomeDB.year, year)
    query = filter_search(query, [IncomeDB.source], source)
    query = filter_search(query, [IncomeDB.name, IncomeDB.note], search)
    query = query.order_by(desc(IncomeDB.date), desc(IncomeDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def update_db_income(db: Session, income_id: int, user_id: str, income_updates: IncomeUpdate) -> IncomeDB:
    """Update an income; month and year follow a changed date"""
    db_income = read_db_income(db, income_id, user_id)
    if not db_income:
        raise NotFoundError(f"Income with id {income_id} not found")

    update_data = income_updates.model_dump(exclude_unset=True)
    if update_data.get('budget_year_id') is not None:
        if not read_db_budget_year(db, update_data['budget_year_id'], user_id):
            raise NotFoundError(f"Budget year with id {update_data['budget_year_id']} not found")
    if update_data.get('date') is not None:
        update_data['month'] = update_data['date'].month
        update_data['year'] = update_data['date'].year

    for field, value in update_data.items():
        setattr(db_income, field, value)

    try:
        db.commit()
        db.refresh(db_income)
    except IntegrityError:
        db.rollback()
        raise ValueError("Income update failed due to database constraint")

    logger.info(f"Updated income {income_id} for user {user_id}")
    return db_income


def delete_db_income(db: Session, income_id: int, user_id: str) -> bool:
    """Delete an income"""
    db_income = read_db_income(db, income_id, user_id)
    if not db_income:
        raise NotFoundError(f"Income with id {income_id} not found")

    db.delete(db_income)
    db.commit()
    logger.info(f"Deleted income {income_id} for user {user_id}")
    return True


def read_all_incomes(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> List[IncomeDB]:
    """Every income of the user, optionally within one budget year, unpaginated"""
    query = scoped_query(db, IncomeDB, user_id)
    query = filter_equal(query, IncomeDB.budget_year_id, budget_year_id)
    return query.all()


# ===== SUMMARY =====

def get_income_summary(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> IncomeSummary:
    """Totals, average and groupings by source and month"""
    incomes = read_all_incomes(db, user_id, budget_year_id)

    return IncomeSummary(
        total_amount=metrics.to_float(metrics.total(incomes)),
        income_count=len(incomes),
        average_amount=metrics.to_float(metrics.average(incomes)),
        by_source=metrics.groups_to_float(metrics.group_totals(incomes, lambda income: income.source, "Other")),
        by_month=metrics.groups_to_float(metrics.group_totals(incomes, metrics.month_key, "Unknown")),
    )
