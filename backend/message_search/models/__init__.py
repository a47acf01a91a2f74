"""ORM Models: SQLAlchemy declarative models for searchable entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Message is the searched record; Contact, Group and FlowLabel are related entities

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from message_search.models.contact import Contact  # noqa: F401
from message_search.models.group import Group  # noqa: F401
from message_search.models.contact_group import ContactGroup  # noqa: F401
from message_search.models.flow_label import FlowLabel  # noqa: F401
from message_search.models.message import Message  # noqa: F401
