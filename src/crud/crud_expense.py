from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any
from decimal import Decimal

from src.db.core import ExpenseDB, BudgetYearDB, CategoryDB, FundDB, NotFoundError
from src.models.expense import ExpenseCreate, ExpenseUpdate, ExpenseFilter, ExpenseSummary
from src.crud.filters import (
    scoped_query,
    filter_equal,
    filter_date_range,
    filter_amount_range,
    filter_search,
    resolve_page,
    paginate,
)
from src.services import metrics
from src.logging_config import get_logger

logger = get_logger(__name__)

# Foreign keys an expense may carry, and the user-owned table each points at
_OWNED_REFERENCES = {
    'budget_year_id': (BudgetYearDB, "Budget year"),
    'category_id': (CategoryDB, "Category"),
    'fund_id': (FundDB, "Fund"),
}


def _check_references(db: Session, user_id: str, data: dict) -> None:
    for field, (model, label) in _OWNED_REFERENCES.items():
        value = data.get(field)
        if value is None:
            continue
        if not scoped_query(db, model, user_id).filter(model.id == value).first():
            raise NotFoundError(f"{label} with id {value} not found")


# ===== DATABASE OPERATIONS =====

def create_db_expense(db: Session, user_id: str, expense_data: ExpenseCreate) -> ExpenseDB:
    """Create a new expense"""
    data = expense_data.model_dump()
    _check_references(db, user_id, data)

    db_expense = ExpenseDB(user_id=user_id, **data)

    try:
        db.add(db_expense)
        db.commit()
        db.refresh(db_expense)
    except IntegrityError:
        db.rollback()
        raise ValueError("Expense creation failed due to database constraint")

    logger.info(f"Created expense {db_expense.id} for user {user_id}")
    return db_expense


def read_db_expense(db: Session, expense_id: int, user_id: str) -> Optional[ExpenseDB]:
    """Read an expense by ID with its category and fund"""
    return scoped_query(db, ExpenseDB, user_id).filter(ExpenseDB.id == expense_id).options(
        joinedload(ExpenseDB.category),
        joinedload(ExpenseDB.fund)
    ).first()


def _filtered_expenses(db: Session, user_id: str, filters: ExpenseFilter):
    query = scoped_query(db, ExpenseDB, user_id)
    query = filter_equal(query, ExpenseDB.budget_year_id, filters.budget_year_id)
    query = filter_equal(query, ExpenseDB.category_id, filters.category_id)
    query = filter_equal(query, ExpenseDB.fund_id, filters.fund_id)
    query = filter_date_range(query, ExpenseDB.date, filters.start_date, filters.end_date)
    query = filter_amount_range(query, ExpenseDB.amount, filters.min_amount, filters.max_amount)
    query = filter_search(query, [ExpenseDB.name, ExpenseDB.note], filters.search)
    return query


def read_db_expenses(db: Session, user_id: str, filters: Optional[ExpenseFilter] = None,
                     page: Any = None, limit: Any = None) -> List[ExpenseDB]:
    """Read a page of expenses, newest first, with category and fund"""
    query = _filtered_expenses(db, user_id, filters or ExpenseFilter())
    query = query.options(joinedload(ExpenseDB.category), joinedload(ExpenseDB.fund))
    query = query.order_by(desc(ExpenseDB.date), desc(ExpenseDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def read_all_expenses(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> List[ExpenseDB]:
    """Every expense of the user, optionally within one budget year, newest first, unpaginated"""
    query = _filtered_expenses(db, user_id, ExpenseFilter(budget_year_id=budget_year_id))
    query = query.options(joinedload(ExpenseDB.category), joinedload(ExpenseDB.fund))
    return query.order_by(desc(ExpenseDB.date), desc(ExpenseDB.id)).all()


def update_db_expense(db: Session, expense_id: int, user_id: str, expense_updates: ExpenseUpdate) -> ExpenseDB:
    """Update an existing expense"""
    db_expense = read_db_expense(db, expense_id, user_id)
    if not db_expense:
        raise NotFoundError(f"Expense with id {expense_id} not found")

    update_data = expense_updates.model_dump(exclude_unset=True)
    _check_references(db, user_id, update_data)

    for field, value in update_data.items():
        setattr(db_expense, field, value)

    try:
        db.commit()
        db.refresh(db_expense)
    except IntegrityError:
        db.rollback()
        raise ValueError("Expense update failed due to database constraint")

    logger.info(f"Updated expense {expense_id} for user {user_id}")
    return db_expense


def delete_db_expense(db: Session, expense_id: int, user_id: str) -> bool:
    """Delete an expense"""
    db_expense = read_db_expense(db, expense_id, user_id)
    if not db_expense:
        raise NotFoundError(f"Expense with id {expense_id} not found")

    db.delete(db_expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id} for user {user_id}")
    return True


def calculate_fund_spending(db: Session, fund_id: int, budget_year_id: int, user_id: str) -> Decimal:
    """Total spent from one fund within one budget year"""
    expenses = scoped_query(db, ExpenseDB, user_id).filter(
        ExpenseDB.fund_id == fund_id,
        ExpenseDB.budget_year_id == budget_year_id
    ).all()
    return metrics.total(expenses)


# ===== SUMMARY =====

def get_expense_summary(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> ExpenseSummary:
    """Totals, average and groupings by category, fund and month"""
    expenses = read_all_expenses(db, user_id, budget_year_id)

    return ExpenseSummary(
        total_amount=metrics.to_float(metrics.total(expenses)),
        expense_count=len(expenses),
        average_amount=metrics.to_float(metrics.average(expenses)),
        by_category=metrics.groups_to_float(metrics.group_totals(
            expenses, lambda expense: expense.category.name if expense.category else None, "Uncategorized"
        )),
        by_fund=metrics.groups_to_float(metrics.group_totals(
            expenses, lambda expense: expense.fund.name if expense.fund else None, "Unknown"
        )),
        by_month=metrics.groups_to_float(metrics.group_totals(expenses, metrics.month_key, "Unknown")),
    )
