"""Text Predicate: free-text match on message body, contact name or contact phone.

Invariants:
    - Empty or None term leaves the query untouched
    - The three substring matches are OR-ed together, and the group is AND-ed
      onto whatever the query already requires
    - Matching is case-insensitive and literal: % and _ in the term are escaped
"""

from sqlalchemy import or_

from message_search.core.message_query import MessageQuery


def add_text_predicate(query: MessageQuery, term: str | None) -> MessageQuery:
    """Narrow the query to records whose body, contact name or phone contains term."""
    if not term:
        return query
    message, contact = query.message, query.contact
    return query.where(
        or_(
            message.body.icontains(term, autoescape=True),
            contact.name.icontains(term, autoescape=True),
            contact.phone.icontains(term, autoescape=True),
        )
    )
