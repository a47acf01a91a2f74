"""Group Filter: restrict messages to contacts belonging to any of the given groups.

Invariants:
    - Every id is parsed before the query changes; one bad id raises
      InvalidIdentifierError and nothing is built
    - Membership is an inner join: contacts with no membership rows never match
    - Multiple ids widen (IN), they do not narrow
    - A contact in several listed groups yields one row per membership;
      execution de-duplicates
"""

from collections.abc import Iterable
from dataclasses import replace

from sqlalchemy.orm import aliased

from message_search.core.domain_types import FilterKey, GroupId, parse_maybe_integer
from message_search.core.errors import InvalidIdentifierError
from message_search.core.message_query import MessageQuery
from message_search.models.contact_group import ContactGroup


def parse_group_ids(group_ids: Iterable[object]) -> list[GroupId]:
    """Parse every id or raise InvalidIdentifierError on the first that is not an integer."""
    parsed = []
    for group_id in group_ids:
        value = parse_maybe_integer(group_id)
        if value is None:
            raise InvalidIdentifierError(group_id, FilterKey.INCLUDE_GROUPS.value)
        parsed.append(GroupId(value))
    return parsed


def add_group_filter(query: MessageQuery, group_ids: object) -> MessageQuery:
    if not isinstance(group_ids, (list, tuple, set, frozenset)) or not group_ids:
        return query

    ids = parse_group_ids(group_ids)

    membership = query.contact_group
    statement = query.statement
    if membership is None:
        membership = aliased(ContactGroup, name="cg")
        statement = statement.join(
            membership, membership.contact_id == query.message.contact_id,
        )

    return replace(
        query,
        statement=statement.where(membership.group_id.in_(ids)),
        contact_group=membership,
    )
