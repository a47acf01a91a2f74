"""FlowLabel ORM: a label a flow can stamp onto messages.

Invariants:
    - Messages reference labels by name (Message.flow_label), not by id
    - Label filters resolve ids here first, then match names as substrings

Design Decisions:
    - Names matched as substrings: labels are stored comma-joined on the message
      and may be hierarchical ("Feedback:Positive")
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from message_search.db.base import Base


class FlowLabel(Base):
    """Flow label entity."""
    __tablename__ = "flow_labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, index=True,
    )
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
