"""
Invoice management endpoints.
CRUD operations for invoices and line items, totals and export.
"""

from datetime import date
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import FileResponse

from solobill.api.deps import Assistant, Store
from solobill.models.currency import Currency
from solobill.models.invoice import InvoiceStatus
from solobill.schemas.assistant import NotesResponse
from solobill.schemas.base import MessageResponse, PaginatedResponse
from solobill.schemas.invoice import (
    BreakdownResponse,
    EmailLinkResponse,
    ExportOptions,
    InvoiceCreate,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdate,
    LineItemCreate,
    NextNumberResponse,
    TotalsPreviewRequest,
)
from solobill.services.assistant import notes_context
from solobill.services.email import EmailService
from solobill.services.invoice import InvoiceService
from solobill.services.pdf import PDFService


router = APIRouter()


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
    description="Create a new invoice with its line items; the number is assigned automatically",
)
async def create_invoice(
    data: InvoiceCreate,
    store: Store,
) -> InvoiceResponse:
    """Create a new invoice."""
    service = InvoiceService(store)
    invoice = service.create(data)
    return InvoiceResponse.model_validate(invoice)


@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List invoices",
    description="Get the paginated invoice list",
)
async def list_invoices(
    store: Store,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    status: InvoiceStatus | None = Query(None, description="Filter by status"),
    client_id: str | None = Query(None, description="Filter by client"),
    from_date: date | None = Query(None, description="Start date"),
    to_date: date | None = Query(None, description="End date"),
) -> InvoiceListResponse:
    """List all invoices with pagination and filters."""
    service = InvoiceService(store)
    skip = (page - 1) * per_page

    invoices, total = service.list(
        skip=skip,
        limit=per_page,
        status=status,
        client_id=client_id,
        from_date=from_date,
        to_date=to_date,
    )

    return InvoiceListResponse(
        items=[InvoiceResponse.model_validate(i) for i in invoices],
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginatedResponse.count_pages(total, per_page),
    )


@router.get(
    "/next-number",
    response_model=NextNumberResponse,
    summary="Next invoice number",
    description="Number the next invoice created this year would get",
)
async def get_next_invoice_number(store: Store) -> NextNumberResponse:
    """Get the next invoice number."""
    service = InvoiceService(store)
    return NextNumberResponse(invoice_number=service.generate_invoice_number())


@router.post(
    "/preview-totals",
    response_model=BreakdownResponse,
    summary="Preview totals",
    description="Compute the breakdown of an unsaved draft",
)
async def preview_totals(
    data: TotalsPreviewRequest,
    store: Store,
) -> BreakdownResponse:
    """Compute totals for a draft."""
    service = InvoiceService(store)
    result = service.preview_totals(
        items=data.items,
        tax_rate=data.tax_rate,
        client_id=data.client_id,
        currency=data.currency,
        include_margin=data.include_margin,
        include_tax=data.include_tax,
    )
    return BreakdownResponse.model_validate(result)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Invoice details",
    description="Get the details of an invoice",
)
async def get_invoice(
    invoice_id: str,
    store: Store,
) -> InvoiceResponse:
    """Get invoice by ID."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    return InvoiceResponse.model_validate(invoice)


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Update an invoice",
    description="Update an invoice's details, items, status or recurring settings",
)
async def update_invoice(
    invoice_id: str,
    data: InvoiceUpdate,
    store: Store,
) -> InvoiceResponse:
    """Update an invoice."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    invoice = service.update(invoice, data)
    return InvoiceResponse.model_validate(invoice)


@router.delete(
    "/{invoice_id}",
    response_model=MessageResponse,
    summary="Delete an invoice",
    description="Delete an invoice",
)
async def delete_invoice(
    invoice_id: str,
    store: Store,
) -> MessageResponse:
    """Delete an invoice."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    service.delete(invoice)
    return MessageResponse(message="Invoice deleted")


@router.post(
    "/{invoice_id}/items",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a line item",
    description="Add a line item to an invoice",
)
async def add_invoice_item(
    invoice_id: str,
    data: LineItemCreate,
    store: Store,
) -> InvoiceResponse:
    """Add an item to an invoice."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    invoice = service.add_item(invoice, data)
    return InvoiceResponse.model_validate(invoice)


@router.delete(
    "/{invoice_id}/items/{item_id}",
    response_model=InvoiceResponse,
    summary="Remove a line item",
    description="Remove a line item from an invoice (at least one must remain)",
)
async def remove_invoice_item(
    invoice_id: str,
    item_id: str,
    store: Store,
) -> InvoiceResponse:
    """Remove an item from an invoice."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    invoice = service.remove_item(invoice, item_id)
    return InvoiceResponse.model_validate(invoice)


@router.get(
    "/{invoice_id}/breakdown",
    response_model=BreakdownResponse,
    summary="Invoice breakdown",
    description="Ad spend, fees, margin, tax and total, converted to a display currency",
)
async def get_invoice_breakdown(
    invoice_id: str,
    store: Store,
    currency: Currency | None = Query(None, description="Display currency (client's by default)"),
    include_margin: bool = Query(True, description="Add the ad-spend margin"),
    include_tax: bool = Query(True, description="Apply the tax rate"),
) -> BreakdownResponse:
    """Get the monetary breakdown of an invoice."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)
    result = service.breakdown(
        invoice,
        currency=currency,
        include_margin=include_margin,
        include_tax=include_tax,
    )
    return BreakdownResponse.model_validate(result)


@router.get(
    "/{invoice_id}/pdf",
    summary="Download the PDF",
    description="Generate and download the invoice as PDF",
    response_class=FileResponse,
)
async def download_invoice_pdf(
    invoice_id: str,
    store: Store,
    currency: Currency | None = Query(None, description="Display currency (client's by default)"),
    options: ExportOptions = Depends(),
):
    """Generate and download invoice PDF."""
    invoice = InvoiceService(store).get_or_404(invoice_id)

    pdf_service = PDFService()
    pdf_path = await pdf_service.generate_invoice_pdf(invoice, currency, options)

    return FileResponse(
        path=pdf_path,
        filename=f"invoice_{invoice.invoice_number}.pdf",
        media_type="application/pdf",
    )


@router.get(
    "/{invoice_id}/email-link",
    response_model=EmailLinkResponse,
    summary="Prepare the email",
    description="Build a mailto link sending the invoice to the client",
)
async def get_invoice_email_link(
    invoice_id: str,
    store: Store,
    currency: Currency | None = Query(None, description="Currency of the amount due"),
    include_margin: bool = Query(True, description="Add the ad-spend margin"),
    include_tax: bool = Query(True, description="Apply the tax rate"),
) -> EmailLinkResponse:
    """Prepare the invoice email."""
    invoice = InvoiceService(store).get_or_404(invoice_id)
    email = EmailService().compose_invoice_email(
        invoice,
        currency=currency,
        include_margin=include_margin,
        include_tax=include_tax,
    )
    return EmailLinkResponse(**email)


@router.post(
    "/{invoice_id}/generate-notes",
    response_model=NotesResponse,
    summary="Draft notes",
    description="Draft the invoice notes from its line items and save them",
)
async def generate_invoice_notes(
    invoice_id: str,
    store: Store,
    assistant: Assistant,
) -> NotesResponse:
    """Draft and save invoice notes."""
    service = InvoiceService(store)
    invoice = service.get_or_404(invoice_id)

    result = await assistant.generate_notes(notes_context(invoice))

    # Re-read: the store may have changed while the call was running
    invoice = service.get_or_404(invoice_id)
    service.apply_notes(invoice, result.value)

    return NotesResponse(notes=result.value, fallback=not result.ok)
