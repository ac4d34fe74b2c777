"""
Assistant endpoints.
Generated invoice notes and financial insights.
"""

from fastapi import APIRouter, status

from solobill.api.deps import Assistant, Feed, Store
from solobill.schemas.assistant import (
    InsightFeedStatus,
    InsightsRequest,
    InsightsResponse,
    NotesRequest,
    NotesResponse,
)
from solobill.schemas.base import MessageResponse


router = APIRouter()


def _select_invoices(store: Store, invoice_ids: list[str]):
    invoices = store.snapshot.invoices
    if not invoice_ids:
        return invoices
    wanted = set(invoice_ids)
    return tuple(i for i in invoices if i.id in wanted)


@router.post(
    "/notes",
    response_model=NotesResponse,
    summary="Draft notes",
    description="Draft invoice notes from a campaign context",
)
async def generate_notes(
    data: NotesRequest,
    assistant: Assistant,
) -> NotesResponse:
    """Draft invoice notes."""
    result = await assistant.generate_notes(data.context)
    return NotesResponse(notes=result.value, fallback=not result.ok)


@router.post(
    "/insights",
    response_model=InsightsResponse,
    summary="Financial insights",
    description="Analyze invoices and wait for the insights",
)
async def get_insights(
    data: InsightsRequest,
    store: Store,
    assistant: Assistant,
) -> InsightsResponse:
    """Analyze invoices."""
    result = await assistant.analyze(_select_invoices(store, data.invoice_ids))
    return InsightsResponse(insights=result.value, fallback=not result.ok)


@router.post(
    "/insights/refresh",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Refresh insights",
    description="Start a background analysis; read it from /insights/latest",
)
async def refresh_insights(
    data: InsightsRequest,
    store: Store,
    assistant: Assistant,
    feed: Feed,
) -> MessageResponse:
    """Start a background analysis."""
    started = feed.refresh(assistant, _select_invoices(store, data.invoice_ids))
    if not started:
        return MessageResponse(message="Analysis already running", success=False)
    return MessageResponse(message="Analysis started")


@router.get(
    "/insights/latest",
    response_model=InsightFeedStatus,
    summary="Latest insights",
    description="Latest delivered insights and whether a refresh is running",
)
async def get_latest_insights(feed: Feed) -> InsightFeedStatus:
    """Get the latest insights."""
    latest = feed.latest
    if latest is None:
        return InsightFeedStatus(insights=[], pending=feed.pending)
    return InsightFeedStatus(
        insights=latest.value,
        fallback=not latest.ok,
        pending=feed.pending,
        delivered=True,
    )
