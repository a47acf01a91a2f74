"""ContactGroup ORM: membership relation between contacts and groups.

Invariants:
    - (contact_id, group_id) is unique: a contact joins a group at most once
    - Group filtering inner-joins this table, so contacts without rows here
      never match a group filter
"""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from message_search.db.base import Base


class ContactGroup(Base):
    """Membership row."""
    __tablename__ = "contacts_groups"
    __table_args__ = (
        UniqueConstraint("contact_id", "group_id", name="contacts_groups_contact_id_group_id_index"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contact_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False,
    )
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False,
    )

    contact: Mapped["Contact"] = relationship(
        "Contact", back_populates="memberships",
    )
    group: Mapped["Group"] = relationship(
        "Group", back_populates="memberships",
    )
