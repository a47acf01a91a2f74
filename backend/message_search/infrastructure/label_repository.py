"""Flow Label Repository: SQLAlchemy implementation of core's FlowLabelRepository.

Invariants:
    - Returns only ids that exist (and belong to the organization, when given)
    - Empty id list short-circuits without a round trip
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from message_search.models.flow_label import FlowLabel


class SqlFlowLabelRepository:
    """Flow label lookups over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_names_by_ids(
        self, label_ids: Sequence[int], organization_id: int | None = None,
    ) -> dict[int, str]:
        if not label_ids:
            return {}
        query = select(FlowLabel.id, FlowLabel.name).where(
            FlowLabel.id.in_(list(label_ids)),
        )
        if organization_id is not None:
            query = query.where(FlowLabel.organization_id == organization_id)
        result = await self._db.execute(query)
        return {row.id: row.name for row in result}
