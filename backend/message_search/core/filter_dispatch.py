"""Filter Dispatch: explicit routing from filter key to predicate builder.

Invariants:
    - Every key->builder mapping is visible in FILTER_BUILDERS, no getattr magic
    - Unknown keys are a no-op (never raise): newer clients may send filters
      this build does not know yet
    - Builders only AND constraints or add joins, so the order filters are
      applied in never changes the result; a new builder must keep that true

Design Decisions:
    - Explicit dict over if/elif chain: adding a filter is one function plus one entry
    - Builders share one signature (query, value, context) so collaborators
      reach the builders that need them without globals
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from message_search.core.date_expression import RelativeDateEvaluator
from message_search.core.domain_types import FilterKey
from message_search.core.filter_dates import (
    coerce_date, run_date_expression, run_date_range,
)
from message_search.core.filter_groups import add_group_filter
from message_search.core.filter_labels import PreloadedLabelStore, add_label_filter
from message_search.core.message_query import MessageQuery
from message_search.core.repository_protocols import (
    DateExpressionEvaluator, LabelStore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterContext:
    """Collaborators available to filter builders."""
    label_store: LabelStore = field(default_factory=PreloadedLabelStore)
    evaluator: DateExpressionEvaluator = field(default_factory=RelativeDateEvaluator)


FilterBuilder = Callable[[MessageQuery, Any, FilterContext], MessageQuery]


def _bounds(value: Any, lower: str, upper: str) -> tuple[Any, Any]:
    if not isinstance(value, Mapping):
        return None, None
    return value.get(lower), value.get(upper)


def _include_groups(query: MessageQuery, value: Any, context: FilterContext) -> MessageQuery:
    return add_group_filter(query, value)


def _include_labels(query: MessageQuery, value: Any, context: FilterContext) -> MessageQuery:
    return add_label_filter(query, value, context.label_store)


def _date_range(query: MessageQuery, value: Any, context: FilterContext) -> MessageQuery:
    from_, to = _bounds(value, "from", "to")
    return run_date_range(query, coerce_date(from_), coerce_date(to))


def _date_expression(query: MessageQuery, value: Any, context: FilterContext) -> MessageQuery:
    from_expression, to_expression = _bounds(value, "from_expression", "to_expression")
    return run_date_expression(
        query, from_expression, to_expression, context.evaluator,
    )


# ADR: every mapping explicit; adding a filter requires editing this dict
FILTER_BUILDERS: dict[str, FilterBuilder] = {
    FilterKey.INCLUDE_GROUPS: _include_groups,
    FilterKey.INCLUDE_LABELS: _include_labels,
    FilterKey.DATE_RANGE: _date_range,
    FilterKey.DATE_EXPRESSION: _date_expression,
}


def apply_filters(
    query: MessageQuery,
    filter_spec: Mapping[str, Any] | None,
    context: FilterContext | None = None,
) -> MessageQuery:
    """Apply every recognized filter in filter_spec. None means no filters."""
    if filter_spec is None:
        return query
    context = context or FilterContext()

    for key, value in filter_spec.items():
        builder = FILTER_BUILDERS.get(key)
        if builder is None:
            logger.debug(
                "Ignoring unknown filter key", extra={"filter_key": str(key)},
            )
            continue
        query = builder(query, value, context)
    return query
