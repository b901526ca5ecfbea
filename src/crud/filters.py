"""
Shared query building for the list endpoints.

Every list function starts from ``scoped_query`` so the owner predicate is
always present, then layers equality, date range, amount range and free-text
filters before ordering and paginating. Page parameters arrive loosely typed
from the query string and degrade to defaults instead of failing.
"""
from datetime import date
from decimal import Decimal
from typing import Any, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


class Page(NamedTuple):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def range(self) -> Tuple[int, int]:
        """Inclusive row range covered by this page."""
        return self.offset, self.offset + self.limit - 1


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a page or limit value, falling back to ``default`` when malformed."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def resolve_page(page: Any = None, limit: Any = None, default_limit: int = DEFAULT_LIMIT) -> Page:
    return Page(
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, default_limit),
    )


def scoped_query(db: Session, model, user_id: str) -> Query:
    """Start a query on ``model`` restricted to rows owned by ``user_id``."""
    return db.query(model).filter(model.user_id == user_id)


def filter_equal(query: Query, column, value: Any) -> Query:
    if value is None:
        return query
    return query.filter(column == value)


def filter_date_range(query: Query, column, start_date: Optional[date] = None,
                      end_date: Optional[date] = None) -> Query:
    if start_date:
        query = query.filter(column >= start_date)
    if end_date:
        query = query.filter(column <= end_date)
    return query


def filter_amount_range(query: Query, column, min_amount: Optional[Decimal] = None,
                        max_amount: Optional[Decimal] = None) -> Query:
    if min_amount is not None:
        query = query.filter(column >= min_amount)
    if max_amount is not None:
        query = query.filter(column <= max_amount)
    return query


def filter_search(query: Query, columns: Sequence, term: Optional[str]) -> Query:
    """Case-insensitive substring match across any of ``columns``."""
    if not term or not term.strip():
        return query
    pattern = f"%{term.strip()}%"
    return query.filter(or_(*(column.ilike(pattern) for column in columns)))


def paginate(query: Query, page: Page) -> Query:
    return query.offset(page.offset).limit(page.limit)
