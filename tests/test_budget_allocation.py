from datetime import date
from decimal import Decimal

from src.db.core import FundType
from src.services.budget_allocation import FundBudgetLine, allocate_budget, budget_months


def line(fund_type, amount, amount_given="0", spent="0", include_in_budget=True):
    return FundBudgetLine(
        fund_id=1,
        fund_name="Fund",
        fund_type=fund_type,
        include_in_budget=include_in_budget,
        amount=Decimal(amount),
        amount_given=Decimal(amount_given),
        spent=Decimal(spent),
    )


def test_budget_months_is_inclusive():
    assert budget_months(date(2024, 1, 1), date(2024, 12, 31)) == 12
    assert budget_months(date(2024, 1, 1), date(2024, 6, 30)) == 6
    assert budget_months(date(2024, 7, 1), date(2025, 6, 30)) == 12


def test_budget_months_never_below_one():
    assert budget_months(date(2024, 3, 10), date(2024, 3, 20)) == 1
    assert budget_months(date(2024, 5, 1), date(2024, 3, 1)) == 1


def test_monthly_fund_is_multiplied_across_months():
    allocation = allocate_budget(date(2024, 1, 1), date(2024, 6, 30), [line(FundType.MONTHLY, "100", amount_given="250")])

    assert allocation.total == Decimal("600")
    assert allocation.allocated == Decimal("250")
    assert allocation.spent == Decimal("0")
    assert allocation.remaining == Decimal("350")


def test_annual_and_savings_funds_count_once():
    lines = [
        line(FundType.ANNUAL, "1200", spent="300"),
        line(FundType.SAVINGS, "500", spent="100"),
    ]
    allocation = allocate_budget(date(2024, 1, 1), date(2024, 12, 31), lines)

    assert allocation.total == Decimal("1700")
    assert allocation.spent == Decimal("400")
    assert allocation.remaining == Decimal("1300")


def test_funds_excluded_from_budget_are_ignored():
    lines = [
        line(FundType.MONTHLY, "100", amount_given="100"),
        line(FundType.ANNUAL, "1200", spent="50", include_in_budget=False),
    ]
    allocation = allocate_budget(date(2024, 1, 1), date(2024, 12, 31), lines)

    assert allocation.total == Decimal("1200")
    assert allocation.spent == Decimal("0")
    assert allocation.remaining == allocation.total - allocation.allocated - allocation.spent


def test_no_lines_yield_zeroes():
    allocation = allocate_budget(date(2024, 1, 1), date(2024, 12, 31), [])
    assert allocation.total == allocation.allocated == allocation.spent == allocation.remaining == Decimal("0")
