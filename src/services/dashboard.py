"""
Dashboard Composer

Builds the one-call overview for a user and a budget year: income, expenses,
fund budget allocation, debts, tasks, tithes and the latest net worth.

The budget year is the explicit one when an id is given (NotFoundError if it
is not the user's) and otherwise the active one. Having no active budget year
is not an error: budget-year metrics come back zeroed and ``budgetYear`` is
null, while debts, tasks, tithes and assets are still reported.
"""
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_asset, crud_debt, crud_expense, crud_fund, crud_income, crud_task, crud_tithe
from src.crud.crud_budget_year import resolve_budget_year
from src.db.core import ExpenseDB
from src.models.budget_year import BudgetYearResponse
from src.models.category import CategorySummary
from src.models.dashboard import (
    AssetMetrics,
    BudgetMetrics,
    DashboardSummary,
    DebtMetrics,
    ExpenseMetrics,
    IncomeMetrics,
    RecentExpense,
    TaskMetrics,
    TitheMetrics,
)
from src.services import metrics
from src.services.asset_trends import snapshot_net_worth
from src.services.budget_allocation import BudgetAllocation, allocate_budget
from src.logging_config import get_logger

logger = get_logger(__name__)

RECENT_EXPENSE_COUNT = 10


def _recent_expenses(expenses: List[ExpenseDB]) -> List[RecentExpense]:
    # expenses arrive newest first
    return [
        RecentExpense(
            id=expense.id,
            name=expense.name,
            amount=metrics.to_float(expense.amount),
            date=expense.date,
            category=CategorySummary.model_validate(expense.category) if expense.category else None,
        )
        for expense in expenses[:RECENT_EXPENSE_COUNT]
    ]


def get_dashboard_summary(db: Session, user_id: str, budget_year_id: Optional[int] = None) -> DashboardSummary:
    budget_year = resolve_budget_year(db, user_id, budget_year_id)

    # Independent reads; only the first three depend on a budget year
    if budget_year:
        incomes = crud_income.read_all_incomes(db, user_id, budget_year.id)
        expenses = crud_expense.read_all_expenses(db, user_id, budget_year.id)
        fund_lines = crud_fund.read_fund_budget_lines(db, user_id, budget_year.id)
    else:
        logger.info(f"No active budget year for user {user_id}; budget metrics will be empty")
        incomes, expenses, fund_lines = [], [], []
    debts = crud_debt.read_all_debts(db, user_id)
    tasks = crud_task.read_all_tasks(db, user_id)
    tithes = crud_tithe.read_all_tithes(db, user_id)
    latest_snapshot = crud_asset.read_latest_asset_snapshot(db, user_id)

    total_income = metrics.total(incomes)
    total_expenses = metrics.total(expenses)

    if budget_year:
        allocation = allocate_budget(budget_year.start_date, budget_year.end_date, fund_lines)
    else:
        allocation = BudgetAllocation()

    owed_to_me, i_owe = crud_debt.unpaid_totals(debts)
    task_total, task_completed, task_important = crud_task.count_tasks(tasks)

    tithe_given = metrics.total(tithes)
    tithe_expected = crud_tithe.expected_tithe(total_income)

    net_worth = snapshot_net_worth(latest_snapshot.details) if latest_snapshot else metrics.ZERO

    return DashboardSummary(
        budget_year=BudgetYearResponse.model_validate(budget_year) if budget_year else None,
        income=IncomeMetrics(total=metrics.to_float(total_income)),
        expenses=ExpenseMetrics(
            total=metrics.to_float(total_expenses),
            recent=_recent_expenses(expenses),
        ),
        budget=BudgetMetrics(
            total=metrics.to_float(allocation.total),
            allocated=metrics.to_float(allocation.allocated),
            spent=metrics.to_float(allocation.spent),
            remaining=metrics.to_float(allocation.remaining),
        ),
        balance=metrics.to_float(total_income - total_expenses),
        debts=DebtMetrics(
            owed_to_me=metrics.to_float(owed_to_me),
            i_owe=metrics.to_float(i_owe),
            net_debt=metrics.to_float(owed_to_me - i_owe),
        ),
        tasks=TaskMetrics(
            total=task_total,
            completed=task_completed,
            pending=task_total - task_completed,
            important=task_important,
        ),
        tithe=TitheMetrics(
            given=metrics.to_float(tithe_given),
            expected=metrics.to_float(tithe_expected),
            balance=metrics.to_float(tithe_given - tithe_expected),
            percentage=metrics.to_float(metrics.percentage(tithe_given, total_income)),
        ),
        assets=AssetMetrics(
            net_worth=metrics.to_float(net_worth),
            last_updated=latest_snapshot.date if latest_snapshot else None,
        ),
    )
