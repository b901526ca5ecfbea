from sqlalchemy.orm import Session, contains_eager, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import asc
from typing import Optional, List

from src.db.core import FundDB, FundBudgetDB, BudgetYearDB, NotFoundError
from src.models.fund import FundCreate, FundUpdate, FundBudgetUpsert
from src.services.budget_allocation import FundBudgetLine
from src.crud.filters import scoped_query
from src.logging_config import get_logger

logger = get_logger(__name__)


# ===== DATABASE OPERATIONS =====

def create_db_fund(db: Session, user_id: str, fund_data: FundCreate) -> FundDB:
    """Create a new fund"""
    existing_fund = scoped_query(db, FundDB, user_id).filter(FundDB.name == fund_data.name).first()
    if existing_fund:
        raise ValueError(f"Fund with name '{fund_data.name}' already exists")

    db_fund = FundDB(user_id=user_id, **fund_data.model_dump())

    try:
        db.add(db_fund)
        db.commit()
        db.refresh(db_fund)
    except IntegrityError:
        db.rollback()
        raise ValueError("Fund creation failed due to database constraint")

    logger.info(f"Created fund {db_fund.id} ({db_fund.type.value}) for user {user_id}")
    return db_fund


def read_db_fund(db: Session, fund_id: int, user_id: str) -> Optional[FundDB]:
    """Read a fund by ID with all of its budgets"""
    return scoped_query(db, FundDB, user_id).filter(FundDB.id == fund_id).options(
        selectinload(FundDB.fund_budgets)
    ).first()


def read_db_funds(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> List[FundDB]:
    """
    Read the user's active funds in display order.
    With a budget year, only funds budgeted in that year are returned and
    each fund carries just that year's budget row.
    """
    query = scoped_query(db, FundDB, user_id).filter(FundDB.is_active.is_(True))

    if budget_year_id is not None:
        query = query.join(FundDB.fund_budgets).filter(
            FundBudgetDB.budget_year_id == budget_year_id
        ).options(contains_eager(FundDB.fund_budgets)).populate_existing()
    else:
        query = query.options(selectinload(FundDB.fund_budgets))

    return query.order_by(asc(FundDB.display_order), asc(FundDB.id)).all()


def read_fund_budget_lines(db: Session, user_id: str, budget_year_id: int) -> List[FundBudgetLine]:
    """Fund budgets of a budget year joined with the owning fund's type and budget flag"""
    rows = db.query(
        FundBudgetDB.fund_id,
        FundDB.name,
        FundDB.type,
        FundDB.include_in_budget,
        FundBudgetDB.amount,
        FundBudgetDB.amount_given,
        FundBudgetDB.spent,
    ).join(FundDB, FundDB.id == FundBudgetDB.fund_id).filter(
        FundBudgetDB.budget_year_id == budget_year_id,
        FundDB.user_id == user_id,
    ).all()

    return [
        FundBudgetLine(
            fund_id=row.fund_id,
            fund_name=row.name,
            fund_type=row.type,
            include_in_budget=row.include_in_budget,
            amount=row.amount,
            amount_given=row.amount_given,
            spent=row.spent,
        )
        for row in rows
    ]


def update_db_fund(db: Session, fund_id: int, user_id: str, fund_updates: FundUpdate) -> FundDB:
    """Update an existing fund"""
    db_fund = read_db_fund(db, fund_id, user_id)
    if not db_fund:
        raise NotFoundError(f"Fund with id {fund_id} not found")

    update_data = fund_updates.model_dump(exclude_unset=True)
    if 'name' in update_data:
        existing_fund = scoped_query(db, FundDB, user_id).filter(
            FundDB.name == update_data['name'],
            FundDB.id != fund_id
        ).first()
        if existing_fund:
            raise ValueError(f"Fund with name '{update_data['name']}' already exists")

    for field, value in update_data.items():
        setattr(db_fund, field, value)

    try:
        db.commit()
        db.refresh(db_fund)
    except IntegrityError:
        db.rollback()
        raise ValueError("Fund update failed due to database constraint")

    logger.info(f"Updated fund {fund_id} for user {user_id}")
    return db_fund


def set_fund_active(db: Session, fund_id: int, user_id: str, is_active: bool) -> FundDB:
    """Activate or deactivate a fund"""
    db_fund = read_db_fund(db, fund_id, user_id)
    if not db_fund:
        raise NotFoundError(f"Fund with id {fund_id} not found")

    db_fund.is_active = is_active
    db.commit()
    db.refresh(db_fund)
    logger.info(f"{'Activated' if is_active else 'Deactivated'} fund {fund_id} for user {user_id}")
    return db_fund


def upsert_fund_budget(db: Session, fund_id: int, budget_year_id: int, user_id: str,
                       budget_data: FundBudgetUpsert) -> FundBudgetDB:
    """Set a fund's budget for one budget year, creating the row when missing"""
    db_fund = scoped_query(db, FundDB, user_id).filter(FundDB.id == fund_id).first()
    if not db_fund:
        raise NotFoundError(f"Fund with id {fund_id} not found")

    budget_year = scoped_query(db, BudgetYearDB, user_id).filter(BudgetYearDB.id == budget_year_id).first()
    if not budget_year:
        raise NotFoundError(f"Budget year with id {budget_year_id} not found")

    db_fund_budget = db.query(FundBudgetDB).filter(
        FundBudgetDB.fund_id == fund_id,
        FundBudgetDB.budget_year_id == budget_year_id
    ).first()

    if db_fund_budget is None:
        db_fund_budget = FundBudgetDB(user_id=user_id, fund_id=fund_id, budget_year_id=budget_year_id)
        db.add(db_fund_budget)

    for field, value in budget_data.model_dump(exclude_none=True).items():
        setattr(db_fund_budget, field, value)

    try:
        db.commit()
        db.refresh(db_fund_budget)
    except IntegrityError:
        db.rollback()
        raise ValueError("Fund budget update failed due to database constraint")

    logger.info(f"Set budget of fund {fund_id} for budget year {budget_year_id} to {db_fund_budget.amount}")
    return db_fund_budget


def delete_db_fund(db: Session, fund_id: int, user_id: str) -> bool:
    """Delete a fund with its categories and budgets"""
    db_fund = read_db_fund(db, fund_id, user_id)
    if not db_fund:
        raise NotFoundError(f"Fund with id {fund_id} not found")

    try:
        db.delete(db_fund)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Fund is still used by expenses and cannot be deleted")

    logger.info(f"Deleted fund {fund_id} for user {user_id}")
    return True
