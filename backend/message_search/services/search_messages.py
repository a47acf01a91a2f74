"""Message Search Service: load collaborators, compose the query, execute it.

Invariants:
    - Label names are fetched once, before composition, for exactly the ids the filter asks for
    - InvalidIdentifierError from the group filter propagates unchanged
    - Rows duplicated by the membership join are collapsed; order is
      newest first (inserted_at DESC, id DESC)

Design Decisions:
    - Impureim sandwich: await IO, run pure core, await IO
    - Evaluator clock follows settings.search_timezone so "today" matches the
      organization's calendar, not the server's
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from message_search.config import get_settings
from message_search.core.date_expression import RelativeDateEvaluator
from message_search.core.filter_labels import PreloadedLabelStore, collect_label_ids
from message_search.core.message_query import build_message_query
from message_search.core.repository_protocols import (
    DateExpressionEvaluator, FlowLabelRepository,
)
from message_search.core.search_full import search
from message_search.infrastructure.label_repository import SqlFlowLabelRepository
from message_search.models.message import Message

logger = logging.getLogger(__name__)


def build_evaluator(timezone_name: str | None = None) -> RelativeDateEvaluator:
    """Date expression evaluator whose "today" is taken in the configured timezone."""
    name = timezone_name or get_settings().search_timezone
    zone = timezone.utc if name == "UTC" else ZoneInfo(name)
    return RelativeDateEvaluator(today=lambda: datetime.now(zone).date())


async def search_messages(
    db: AsyncSession,
    term: str | None,
    filter_spec: Mapping[str, Any] | None = None,
    organization_id: int | None = None,
    evaluator: DateExpressionEvaluator | None = None,
    label_repository: FlowLabelRepository | None = None,
) -> list[Message]:
    """Run a full message search and return matching messages."""
    label_ids = collect_label_ids(filter_spec)
    names = {}
    if label_ids:
        repository = label_repository or SqlFlowLabelRepository(db)
        names = await repository.get_names_by_ids(label_ids, organization_id)

    query = search(
        build_message_query(organization_id),
        term,
        {"filter": filter_spec},
        label_store=PreloadedLabelStore(names),
        evaluator=evaluator or build_evaluator(),
    )
    statement = query.statement.order_by(
        query.message.inserted_at.desc(), query.message.id.desc(),
    )

    result = await db.execute(statement)
    messages = list(result.scalars().unique().all())
    logger.info(
        "Message search complete",
        extra={
            "organization_id": organization_id,
            "term_length": len(term or ""),
            "label_count": len(names),
            "result_count": len(messages),
        },
    )
    return messages
