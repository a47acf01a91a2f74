"""Message ORM: the record every search returns.

Invariants:
    - Always belongs to a Contact (contact_id FK)
    - inserted_at is timezone-aware UTC; date filters compare against it
    - flow_label holds comma-joined label names, NULL when no flow labelled it

Design Decisions:
    - organization_id denormalized onto the message: base search query scopes
      by organization without joining through the contact
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from message_search.db.base import Base


class Message(Base):
    """Message entity."""
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    flow_label: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    contact_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contacts.id"), nullable=False, index=True,
    )
    organization_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, index=True,
    )
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    contact: Mapped["Contact"] = relationship(
        "Contact", back_populates="messages",
    )
