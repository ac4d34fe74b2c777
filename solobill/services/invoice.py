"""
Invoice service.
Handles invoice CRUD, line items, numbering, and totals.
"""

import logging
from dataclasses import asdict
from datetime import date, timedelta
from decimal import Decimal
from typing import List
from fastapi import HTTPException, status

from solobill.core.config import settings
from solobill.core.store import InMemoryStore
from solobill.models.client import Client
from solobill.models.currency import Currency
from solobill.models.invoice import (
    Invoice,
    InvoiceStatus,
    LineItem,
    RecurringConfig,
)
from solobill.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    LineItemCreate,
    RecurringConfigSchema,
)
from solobill.services.calculator import Breakdown, compute_breakdown, next_invoice_number
from solobill.services.client import ClientService
from solobill.services.currency import format_amount, resolve_rate


logger = logging.getLogger(__name__)


def _build_items(items: list[LineItemCreate]) -> tuple[LineItem, ...]:
    return tuple(LineItem(**item.model_dump()) for item in items)


def _build_recurring(data: RecurringConfigSchema | None) -> RecurringConfig:
    if data is None:
        return RecurringConfig()
    return RecurringConfig(**data.model_dump())


def convert_breakdown(breakdown: Breakdown, rate: Decimal) -> Breakdown:
    """Multiply every field of a USD breakdown by a rate."""
    return Breakdown(
        ad_spend_base=breakdown.ad_spend_base * rate,
        service_fees=breakdown.service_fees * rate,
        margin_earned=breakdown.margin_earned * rate,
        subtotal=breakdown.subtotal * rate,
        tax=breakdown.tax * rate,
        total=breakdown.total * rate,
    )


def format_breakdown(breakdown: Breakdown, currency: Currency) -> dict[str, str]:
    """Format every field of an already converted breakdown."""
    return {
        "ad_spend_base": format_amount(breakdown.ad_spend_base, currency),
        "service_fees": format_amount(breakdown.service_fees, currency),
        "margin_earned": format_amount(breakdown.margin_earned, currency),
        "subtotal": format_amount(breakdown.subtotal, currency),
        "tax": format_amount(breakdown.tax, currency),
        "total": format_amount(breakdown.total, currency),
    }


def display_breakdown(
    breakdown: Breakdown,
    currency: Currency,
    client: Client,
) -> dict:
    """Breakdown in USD plus its conversion and formatting for a client."""
    rate = resolve_rate(currency, client)
    converted = convert_breakdown(breakdown, rate)
    return {
        "usd": asdict(breakdown),
        "currency": currency,
        "rate": rate,
        "converted": asdict(converted),
        "formatted": format_breakdown(converted, currency),
    }


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def generate_invoice_number(self, year: int | None = None) -> str:
        """
        Generate the next invoice number.
        Format: ADV-{year}-{sequence}
        """
        if year is None:
            year = date.today().year
        numbers = [i.invoice_number for i in self.store.snapshot.invoices]
        return next_invoice_number(numbers, year)

    def create(self, data: InvoiceCreate) -> Invoice:
        """
        Create a new invoice with items.

        The selected client is copied into the invoice; later changes to the
        client record do not alter existing invoices.

        Returns:
            Created invoice
        """
        client = ClientService(self.store).get_or_404(data.client_id)

        issue_date = data.issue_date or date.today()
        due_date = data.due_date or issue_date + timedelta(days=settings.PAYMENT_TERMS_DAYS)
        tax_rate = settings.DEFAULT_TAX_RATE if data.tax_rate is None else data.tax_rate

        invoice = Invoice(
            invoice_number=self.generate_invoice_number(),
            issue_date=issue_date,
            due_date=due_date,
            client=client,
            items=_build_items(data.items),
            status=data.status,
            tax_rate=tax_rate,
            notes=data.notes,
            recurring=_build_recurring(data.recurring),
        )
        self.store.save_invoice(invoice)
        logger.info(f"Invoice created: {invoice.invoice_number} for {client.name}")

        return invoice

    def get_by_id(self, invoice_id: str) -> Invoice | None:
        """Get invoice by ID."""
        return self.store.snapshot.get_invoice(invoice_id)

    def get_or_404(self, invoice_id: str) -> Invoice:
        """Get invoice by ID or raise 404."""
        invoice = self.get_by_id(invoice_id)
        if not invoice:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invoice not found",
            )
        return invoice

    def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status: InvoiceStatus | None = None,
        client_id: str | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> tuple[list[Invoice], int]:
        """
        List invoices with pagination and filters, newest first.
        """
        invoices = list(self.store.snapshot.invoices)

        if status:
            invoices = [i for i in invoices if i.status == status]

        if client_id:
            invoices = [i for i in invoices if i.client.id == client_id]

        if from_date:
            invoices = [i for i in invoices if i.issue_date >= from_date]

        if to_date:
            invoices = [i for i in invoices if i.issue_date <= to_date]

        invoices.sort(key=lambda i: i.issue_date, reverse=True)
        return invoices[skip:skip + limit], len(invoices)

    def update(self, invoice: Invoice, data: InvoiceUpdate) -> Invoice:
        """
        Update invoice.

        Passing ``items`` replaces every line item. Passing ``client_id``
        embeds a fresh copy of that client.
        """
        update_data = data.model_dump(
            exclude_unset=True,
            exclude_none=True,
            exclude={"client_id", "items", "recurring", "status"},
        )

        if data.client_id is not None:
            update_data["client"] = ClientService(self.store).get_or_404(data.client_id)

        if data.items is not None:
            update_data["items"] = _build_items(data.items)

        if data.recurring is not None:
            update_data["recurring"] = _build_recurring(data.recurring)

        updated = invoice.model_copy(update=update_data)
        self.store.save_invoice(updated)

        if data.status is not None and data.status != invoice.status:
            updated = self.set_status(updated, data.status)

        return updated

    def set_status(self, invoice: Invoice, new_status: InvoiceStatus) -> Invoice:
        """Change the status of an invoice."""
        updated = invoice.model_copy(update={"status": new_status})
        self.store.save_invoice(updated)
        logger.info(f"Invoice {invoice.invoice_number}: {invoice.status.value} -> {new_status.value}")
        return updated

    def add_item(self, invoice: Invoice, data: LineItemCreate) -> Invoice:
        """Add an item to an invoice."""
        item = LineItem(**data.model_dump())
        updated = invoice.model_copy(update={"items": invoice.items + (item,)})
        self.store.save_invoice(updated)
        return updated

    def remove_item(self, invoice: Invoice, item_id: str) -> Invoice:
        """
        Remove an item from an invoice.
        The last remaining item cannot be removed.
        """
        if not any(i.id == item_id for i in invoice.items):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Line item not found",
            )

        if len(invoice.items) == 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An invoice needs at least one line item",
            )

        items = tuple(i for i in invoice.items if i.id != item_id)
        updated = invoice.model_copy(update={"items": items})
        self.store.save_invoice(updated)
        return updated

    def apply_notes(self, invoice: Invoice, notes: str) -> Invoice:
        """Replace the notes of an invoice."""
        updated = invoice.model_copy(update={"notes": notes})
        self.store.save_invoice(updated)
        return updated

    def delete(self, invoice: Invoice) -> None:
        """Delete an invoice."""
        self.store.delete_invoice(invoice.id)
        logger.info(f"Invoice deleted: {invoice.invoice_number}")

    def breakdown(
        self,
        invoice: Invoice,
        currency: Currency | None = None,
        include_margin: bool = True,
        include_tax: bool = True,
    ) -> dict:
        """
        Compute the breakdown of an invoice and render it in a currency.

        Args:
            invoice: Invoice to compute
            currency: Display currency (defaults to the client's preferred one)
            include_margin: Add the ad-spend margin
            include_tax: Apply the tax rate

        Returns:
            USD breakdown, rate, converted breakdown and formatted strings
        """
        result = compute_breakdown(
            invoice.items,
            invoice.tax_rate,
            include_margin=include_margin,
            include_tax=include_tax,
        )
        return display_breakdown(
            result,
            currency or invoice.client.preferred_currency,
            invoice.client,
        )

    def preview_totals(
        self,
        items: List[LineItemCreate],
        tax_rate: Decimal,
        client_id: str | None = None,
        currency: Currency | None = None,
        include_margin: bool = True,
        include_tax: bool = True,
    ) -> dict:
        """
        Breakdown of an unsaved draft.
        Without a client, amounts are shown in USD at a rate of 1.
        """
        result = compute_breakdown(
            _build_items(items),
            tax_rate,
            include_margin=include_margin,
            include_tax=include_tax,
        )

        if client_id:
            client = ClientService(self.store).get_or_404(client_id)
        else:
            client = Client(name="", preferred_currency=Currency.USD)

        return display_breakdown(result, currency or client.preferred_currency, client)
