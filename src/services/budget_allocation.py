"""
Budget Allocation Calculator

Rolls a budget year's fund budgets up into total / allocated / spent /
remaining. Monthly funds are cash envelopes: their amount is per month and
is multiplied across the months the budget year spans, and what has been
handed out is tracked in ``amount_given``. Annual and savings funds are
ledger funds: their amount is taken as-is and consumption is tracked in
``spent``.
"""
from datetime import date
from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel

from src.db.core import FundType
from src.services.metrics import ZERO, to_decimal


class FundBudgetLine(BaseModel):
    """One fund_budgets row joined with the fields of its fund."""
    fund_id: int
    fund_name: str
    fund_type: FundType
    include_in_budget: bool
    amount: Decimal = ZERO
    amount_given: Decimal = ZERO
    spent: Decimal = ZERO


class BudgetAllocation(BaseModel):
    total: Decimal = ZERO
    allocated: Decimal = ZERO
    spent: Decimal = ZERO
    remaining: Decimal = ZERO


def budget_months(start_date: date, end_date: date) -> int:
    """Inclusive count of calendar months between two dates, never below 1."""
    months = (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month) + 1
    return max(1, months)


def allocate_budget(start_date: date, end_date: date, lines: Iterable[FundBudgetLine]) -> BudgetAllocation:
    months = budget_months(start_date, end_date)

    total_budget = ZERO
    total_allocated = ZERO
    total_spent = ZERO

    for line in lines:
        if not line.include_in_budget:
            continue
        if line.fund_type == FundType.MONTHLY:
            total_budget += to_decimal(line.amount) * months
            total_allocated += to_decimal(line.amount_given)
        else:
            total_budget += to_decimal(line.amount)
            total_spent += to_decimal(line.spent)

    return BudgetAllocation(
        total=total_budget,
        allocated=total_allocated,
        spent=total_spent,
        remaining=total_budget - total_allocated - total_spent,
    )
