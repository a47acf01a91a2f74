"""Contact ORM: the person a message was exchanged with.

Invariants:
    - phone is unique and non-nullable
    - name and phone are both searchable by the free-text term
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from message_search.db.base import Base


class Contact(Base):
    """Contact entity: subject of group memberships and owner of messages."""
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    messages: Mapped[list["Message"]] = relationship(
        "Message", back_populates="contact",
    )
    memberships: Mapped[list["ContactGroup"]] = relationship(
        "ContactGroup", back_populates="contact",
        cascade="all, delete-orphan",
    )
