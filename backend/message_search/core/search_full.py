"""Full Search: normalize the term, attach the text predicate, then apply filters.

Invariants:
    - search(q, "", {"filter": None}) returns q itself
    - Only InvalidIdentifierError (bad group id) escapes; every other imprecise
      input degrades to "no constraint added"
"""

from collections.abc import Mapping
from typing import Any

from message_search.core.date_expression import RelativeDateEvaluator
from message_search.core.filter_dispatch import FilterContext, apply_filters
from message_search.core.filter_labels import PreloadedLabelStore
from message_search.core.message_query import MessageQuery
from message_search.core.normalize_term import normalize
from message_search.core.repository_protocols import (
    DateExpressionEvaluator, LabelStore,
)
from message_search.core.text_predicate import add_text_predicate


def search(
    query: MessageQuery,
    term: str | None,
    args: Mapping[str, Any] | None = None,
    *,
    label_store: LabelStore | None = None,
    evaluator: DateExpressionEvaluator | None = None,
) -> MessageQuery:
    """Compose the full search query.

    Args:
        query: base query, usually from build_message_query()
        term: raw search-box text; normalized here
        args: mapping whose optional "filter" entry is the filter specification
        label_store: resolves include_labels ids to names
        evaluator: resolves date_expression templates

    Raises:
        InvalidIdentifierError: a group id in the filter is not an integer
    """
    context = FilterContext(
        label_store=label_store if label_store is not None else PreloadedLabelStore(),
        evaluator=evaluator if evaluator is not None else RelativeDateEvaluator(),
    )
    query = add_text_predicate(query, normalize(term))
    return apply_filters(query, (args or {}).get("filter"), context)
