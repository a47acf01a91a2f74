"""Message Search Route: POST /api/v1/messages/search.

Invariants:
    - Body validated by SearchRequest before reaching the handler
    - InvalidIdentifierError bubbles to the global handler (400 INVALID_IDENTIFIER)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from message_search.infrastructure.database import get_db
from message_search.schemas.search import (
    MessageResponse, SearchRequest, SearchResponse,
)
from message_search.services.search_messages import search_messages

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post("/search", response_model=SearchResponse)
async def search_messages_route(
    body: SearchRequest, db: AsyncSession = Depends(get_db),
):
    """Search messages by term and filters."""
    messages = await search_messages(
        db,
        body.term,
        body.filter.to_filter_spec() if body.filter else None,
        organization_id=body.organization_id,
    )
    return SearchResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
        count=len(messages),
    )
