"""Message Query: immutable composite carrying the statement and its joined relations.

Invariants:
    - MessageQuery is frozen; every stage returns a new instance via replace()
    - statement always selects the message alias and inner-joins the contact alias
    - contact_group is None until the group filter joins the membership table,
      then it references that join so later stages reuse it instead of joining twice

Design Decisions:
    - Explicit alias references over string-named bindings: a stage targets
      query.contact rather than guessing which FROM entry is the contact table
    - Select is generative in SQLAlchemy 2.0, so sharing the previous statement
      between two MessageQuery values is safe
"""

from dataclasses import dataclass, replace
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import aliased

from message_search.models.contact import Contact
from message_search.models.contact_group import ContactGroup
from message_search.models.message import Message


@dataclass(frozen=True, eq=False)
class MessageQuery:
    """A message search request under construction."""
    statement: Select
    message: type[Message]
    contact: type[Contact]
    contact_group: type[ContactGroup] | None = None

    def where(self, *criteria: Any) -> "MessageQuery":
        """AND criteria onto the statement."""
        return replace(self, statement=self.statement.where(*criteria))


def build_message_query(organization_id: int | None = None) -> MessageQuery:
    """Base query: messages joined to their contact, optionally scoped to one organization."""
    message = aliased(Message, name="m")
    contact = aliased(Contact, name="c")
    statement = select(message).join(contact, contact.id == message.contact_id)
    if organization_id is not None:
        statement = statement.where(message.organization_id == organization_id)
    return MessageQuery(statement=statement, message=message, contact=contact)
