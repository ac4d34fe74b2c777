"""
Pydantic schemas for request/response validation.
"""

from solobill.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
    BulkDeleteRequest,
)
from solobill.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceResponse,
    InvoiceListResponse,
    LineItemCreate,
    LineItemResponse,
    RecurringConfigSchema,
    BreakdownResponse,
    TotalsPreviewRequest,
)
from solobill.schemas.assistant import (
    Insight,
    NotesRequest,
    NotesResponse,
    InsightsRequest,
    InsightsResponse,
    InsightFeedStatus,
)

__all__ = [
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientListResponse",
    "BulkDeleteRequest",
    # Invoice
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceResponse",
    "InvoiceListResponse",
    "LineItemCreate",
    "LineItemResponse",
    "RecurringConfigSchema",
    "BreakdownResponse",
    "TotalsPreviewRequest",
    # Assistant
    "Insight",
    "NotesRequest",
    "NotesResponse",
    "InsightsRequest",
    "InsightsResponse",
    "InsightFeedStatus",
]
