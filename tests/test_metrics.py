from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from src.services import metrics


def row(amount, **fields):
    return SimpleNamespace(amount=Decimal(str(amount)), **fields)


def test_total_and_average_of_empty_input_are_zero():
    assert metrics.total([]) == Decimal("0")
    assert metrics.average([]) == Decimal("0")


def test_total_accepts_dicts_and_missing_amounts():
    rows = [{"amount": "10.50"}, {"amount": None}, row(4.5)]
    assert metrics.total(rows) == Decimal("15.00")


def test_percentage_of_zero_whole_is_zero():
    assert metrics.percentage(Decimal("50"), Decimal("0")) == 0
    assert metrics.percentage(25, 200) == Decimal("12.5")


def test_group_totals_sum_to_overall_total():
    rows = [
        row(100, source="Salary"),
        row(50, source="Salary"),
        row(25, source=None),
        row(10, source=""),
    ]
    groups = metrics.group_totals(rows, lambda r: r.source, "Other")

    assert set(groups) == {"Salary", "Other"}
    assert groups["Salary"] == {"count": 2, "total": Decimal("150")}
    assert groups["Other"]["count"] == 2
    assert sum(bucket["total"] for bucket in groups.values()) == metrics.total(rows)


def test_month_key_prefers_month_column_then_date():
    assert metrics.month_key(row(1, month=3, date=date(2024, 7, 1))) == 3
    assert metrics.month_key(row(1, date=date(2024, 7, 1))) == 7
    assert metrics.month_key(row(1)) is None


def test_groups_by_month_use_month_number_labels():
    rows = [row(10, date=date(2024, 1, 5)), row(5, date=date(2024, 1, 20)), row(1)]
    groups = metrics.groups_to_float(metrics.group_totals(rows, metrics.month_key, "Unknown"))

    assert groups == {"1": {"count": 2, "total": 15.0}, "Unknown": {"count": 1, "total": 1.0}}


def test_to_float_rounds_to_cents():
    assert metrics.to_float(Decimal("6.666666")) == 6.67
    assert metrics.to_float(None) == 0.0
