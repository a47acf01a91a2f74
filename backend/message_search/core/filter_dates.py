"""Date Filters: bound Message.inserted_at by absolute dates or date expressions.

Invariants:
    - (None, None) returns the query unchanged
    - A "to" bound is inclusive of its whole calendar day (end_of_day)
    - A "from" bound starts at the given instant; a bare date starts at midnight UTC
    - Unparsable dates and expressions become absent bounds, never exceptions

State machine (from, to):
    None,  None  -> identity
    None,  to    -> inserted_at <= end_of_day(to)
    from,  None  -> inserted_at >= start(from)
    from,  to    -> both, AND-ed
"""

import logging
from datetime import date, datetime, time, timezone

from sqlalchemy import and_

from message_search.core.message_query import MessageQuery
from message_search.core.repository_protocols import DateExpressionEvaluator

logger = logging.getLogger(__name__)

DateBound = date | datetime


def to_datetime(value: DateBound) -> datetime:
    """Start instant of a bound. Naive datetimes are read as UTC."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def end_of_day(value: DateBound) -> datetime:
    """Last representable instant of the bound's calendar day."""
    start = to_datetime(value)
    return start.replace(hour=23, minute=59, second=59, microsecond=999999)


def coerce_date(value: object) -> DateBound | None:
    """Accept date, datetime or an ISO-8601 string. Anything else is an absent bound."""
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Ignoring unparsable date bound {value!r}")
        return None


def run_date_range(
    query: MessageQuery, from_: DateBound | None, to: DateBound | None,
) -> MessageQuery:
    """Filter the query on a date range. If both bounds are None, returns the query as-is."""
    inserted_at = query.message.inserted_at
    if from_ is None and to is None:
        return query
    if from_ is None:
        return query.where(inserted_at <= end_of_day(to))
    if to is None:
        return query.where(inserted_at >= to_datetime(from_))
    return query.where(
        and_(
            inserted_at >= to_datetime(from_),
            inserted_at <= end_of_day(to),
        )
    )


def get_date(
    expression: str | None, evaluator: DateExpressionEvaluator,
) -> date | None:
    """Evaluate an expression and parse the result as an ISO calendar date."""
    if expression is None or expression == "":
        return None
    try:
        return date.fromisoformat(evaluator.evaluate(expression).strip())
    except (ValueError, TypeError, AttributeError):
        logger.warning(f"Date expression {expression!r} did not resolve to a date")
        return None


def run_date_expression(
    query: MessageQuery,
    from_expression: str | None,
    to_expression: str | None,
    evaluator: DateExpressionEvaluator,
) -> MessageQuery:
    from_ = get_date(from_expression, evaluator)
    to = get_date(to_expression, evaluator)
    return run_date_range(query, from_, to)
