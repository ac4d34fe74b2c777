"""
Invoice schemas for request/response validation.
"""

from datetime import date
from decimal import Decimal
from pydantic import Field

from solobill.models.currency import Currency
from solobill.models.invoice import InvoiceStatus, RecurringFrequency
from solobill.schemas.base import BaseSchema, Number, PaginatedResponse
from solobill.schemas.client import ClientResponse


class LineItemBase(BaseSchema):
    """Base line item schema."""

    description: str = ""
    quantity: Number = Decimal("1")
    price: Number = Decimal("0")
    is_ad_spend: bool = False


class LineItemCreate(LineItemBase):
    """Schema for creating a line item."""
    pass


class LineItemResponse(LineItemBase):
    """Line item response schema."""

    id: str
    line_total: Decimal


class RecurringConfigSchema(BaseSchema):
    """Recurring billing settings."""

    frequency: RecurringFrequency = RecurringFrequency.NONE
    is_active: bool = False
    end_date: date | None = None


class InvoiceBase(BaseSchema):
    """Base invoice schema."""

    notes: str = ""
    recurring: RecurringConfigSchema | None = None


class InvoiceCreate(InvoiceBase):
    """
    Schema for creating an invoice.
    Dates and tax rate default to today, today + payment terms and the
    configured default tax rate.
    """

    client_id: str
    issue_date: date | None = None
    due_date: date | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    tax_rate: Number | None = None
    items: list[LineItemCreate] = Field(..., min_length=1)


class InvoiceUpdate(BaseSchema):
    """Schema for updating an invoice."""

    client_id: str | None = None
    issue_date: date | None = None
    due_date: date | None = None
    status: InvoiceStatus | None = None
    tax_rate: Number | None = None
    notes: str | None = None
    recurring: RecurringConfigSchema | None = None
    items: list[LineItemCreate] | None = Field(None, min_length=1)


class InvoiceResponse(InvoiceBase):
    """Invoice response schema."""

    id: str
    invoice_number: str
    issue_date: date
    due_date: date
    status: InvoiceStatus
    tax_rate: Decimal
    client: ClientResponse
    items: list[LineItemResponse]
    items_total: Decimal


class InvoiceListResponse(PaginatedResponse):
    """Paginated invoice list response."""

    items: list[InvoiceResponse]


class BreakdownSchema(BaseSchema):
    """Monetary breakdown, in USD."""

    ad_spend_base: Decimal
    service_fees: Decimal
    margin_earned: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal


class FormattedBreakdown(BaseSchema):
    """Breakdown converted and formatted for display."""

    ad_spend_base: str
    service_fees: str
    margin_earned: str
    subtotal: str
    tax: str
    total: str


class BreakdownResponse(BaseSchema):
    """Breakdown with its display-currency rendering."""

    usd: BreakdownSchema
    currency: Currency
    rate: Decimal
    converted: BreakdownSchema
    formatted: FormattedBreakdown


class TotalsPreviewRequest(BaseSchema):
    """Unsaved draft whose totals should be previewed."""

    items: list[LineItemCreate] = Field(default_factory=list)
    tax_rate: Number = Decimal("0")
    client_id: str | None = None
    currency: Currency | None = None
    include_margin: bool = True
    include_tax: bool = True


class NextNumberResponse(BaseSchema):
    """Next invoice number for the current year."""

    invoice_number: str


class EmailLinkResponse(BaseSchema):
    """Prepared email for an invoice."""

    to: str
    subject: str
    body: str
    mailto: str


class ExportOptions(BaseSchema):
    """Sections shown when an invoice is exported."""

    show_notes: bool = True
    show_summary: bool = True
    show_margin: bool = True
    show_tax: bool = True
