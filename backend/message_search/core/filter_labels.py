"""Label Filter: require every selected flow label to appear on the message.

Invariants:
    - Label ids are resolved to names through the injected LabelStore;
      ids with no stored label are silently dropped
    - One predicate per resolved name, AND-ed: more labels narrow the result
      (unlike groups, which widen it)
    - Names match as case-insensitive substrings of Message.flow_label,
      which holds comma-joined (possibly hierarchical) label names
    - No resolved names leaves the query untouched and logs a warning
"""

import logging
from collections.abc import Mapping, Sequence

from message_search.core.domain_types import FilterKey, LabelId, parse_maybe_integer
from message_search.core.message_query import MessageQuery
from message_search.core.repository_protocols import LabelStore

logger = logging.getLogger(__name__)


def add_label_filter(
    query: MessageQuery, label_ids: object, label_store: LabelStore,
) -> MessageQuery:
    if not isinstance(label_ids, (list, tuple)) or not label_ids:
        return query

    names = label_store.lookup_label_names(label_ids)
    if not names:
        logger.warning(
            f"No flow label names resolved for ids {list(label_ids)!r}; label filter skipped",
            extra={"filter_key": FilterKey.INCLUDE_LABELS.value},
        )
        return query

    for name in names:
        query = query.where(
            query.message.flow_label.icontains(name, autoescape=True),
        )
    return query


def collect_label_ids(filter_spec: Mapping | None) -> list[LabelId]:
    """Integer label ids requested by a filter spec, for pre-loading label names.

    Ids that are not integers cannot match a stored label and are dropped.
    """
    if not filter_spec:
        return []
    label_ids = filter_spec.get(FilterKey.INCLUDE_LABELS.value)
    if not isinstance(label_ids, (list, tuple)):
        return []

    collected: list[LabelId] = []
    for label_id in label_ids:
        value = parse_maybe_integer(label_id)
        if value is None:
            logger.warning(
                f"Dropping non-integer label id {label_id!r}",
                extra={"filter_key": FilterKey.INCLUDE_LABELS.value},
            )
            continue
        if value not in collected:
            collected.append(LabelId(value))
    return collected


class PreloadedLabelStore:
    """LabelStore over names fetched ahead of time by the shell."""

    def __init__(self, names: Mapping[int, str] | None = None):
        self._names = dict(names or {})

    def lookup_label_names(self, label_ids: Sequence[object]) -> list[str]:
        names = []
        for label_id in label_ids:
            value = parse_maybe_integer(label_id)
            name = self._names.get(value) if value is not None else None
            if name:
                names.append(name)
        return names
