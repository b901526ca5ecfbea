"""
Metric Reducers

Pure folds over lists of already-scoped rows. Amounts stay Decimal the whole
way through; response models convert to JSON numbers at the edge. Empty
input always yields zeroed metrics, never an exception.
"""
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional

ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps float inputs at their printed precision
    return Decimal(str(value))


def amount_of(row: Any) -> Decimal:
    if isinstance(row, dict):
        return to_decimal(row.get("amount"))
    return to_decimal(getattr(row, "amount", None))


def total(rows: Iterable[Any], amount: Callable[[Any], Decimal] = amount_of) -> Decimal:
    return sum((amount(row) for row in rows), ZERO)


def average(rows: List[Any], amount: Callable[[Any], Decimal] = amount_of) -> Decimal:
    if not rows:
        return ZERO
    return total(rows, amount) / len(rows)


def percentage(part: Any, whole: Any) -> Decimal:
    """``part`` as a percentage of ``whole``; 0 when ``whole`` is 0."""
    whole = to_decimal(whole)
    if whole == 0:
        return ZERO
    return to_decimal(part) / whole * 100


def group_totals(
    rows: Iterable[Any],
    key: Callable[[Any], Optional[Any]],
    sentinel: str,
    amount: Callable[[Any], Decimal] = amount_of,
) -> Dict[str, Dict[str, Any]]:
    """
    Group rows by ``key`` into ``{label: {"count", "total"}}``.
    Rows whose key is missing are filed under ``sentinel``.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        label = key(row)
        label = sentinel if label is None or label == "" else str(label)
        bucket = groups.setdefault(label, {"count": 0, "total": ZERO})
        bucket["count"] += 1
        bucket["total"] += amount(row)
    return groups


def month_key(row: Any) -> Optional[int]:
    """Calendar month number (1-12), from the row's month column or its date."""
    month = getattr(row, "month", None)
    if month:
        return month
    row_date = getattr(row, "date", None)
    return row_date.month if row_date else None


def year_key(row: Any) -> Optional[int]:
    row_date = getattr(row, "date", None)
    return row_date.year if row_date else None


def to_float(value: Any, places: int = 2) -> float:
    return round(float(to_decimal(value)), places)


def groups_to_float(groups: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {
        label: {"count": bucket["count"], "total": to_float(bucket["total"])}
        for label, bucket in groups.items()
    }
