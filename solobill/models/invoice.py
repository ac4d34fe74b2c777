"""
Invoice and LineItem models for advertising billing.
Supports draft, pending, paid, and overdue statuses.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from solobill.models.base import BaseModel, ValueObject
from solobill.models.client import Client


class InvoiceStatus(str, Enum):
    """Invoice status enumeration."""
    DRAFT = "Draft"
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


class RecurringFrequency(str, Enum):
    """Recurring billing frequency."""
    NONE = "None"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"


class LineItem(BaseModel):
    """
    Invoice line item.

    Attributes:
        description: Item description
        quantity: Number of units
        price: Unit price, always in USD
        is_ad_spend: True for ad-platform pass-through costs, False for
            the agency's own service fees
    """

    description: str = ""
    quantity: Decimal = Decimal("1")
    price: Decimal = Decimal("0")
    is_ad_spend: bool = False

    @property
    def line_total(self) -> Decimal:
        """Quantity times unit price, in USD."""
        return self.quantity * self.price


class RecurringConfig(ValueObject):
    """Recurring billing settings attached to an invoice."""

    frequency: RecurringFrequency = RecurringFrequency.NONE
    is_active: bool = False
    end_date: Optional[date] = None


class Invoice(BaseModel):
    """
    Invoice model.

    Attributes:
        invoice_number: Derived number, ``ADV-<year>-<seq>``
        issue_date: Date the invoice was issued
        due_date: Payment due date
        client: Copy of the client record taken when the invoice was saved
        items: Line items (unit prices in USD)
        status: Current invoice status
        tax_rate: Tax rate in percent
        notes: Free-text notes shown on the invoice
        recurring: Optional recurring billing settings
    """

    invoice_number: str
    issue_date: date
    due_date: date
    client: Client
    items: tuple[LineItem, ...] = ()
    status: InvoiceStatus = InvoiceStatus.DRAFT
    tax_rate: Decimal = Decimal("0")
    notes: str = ""
    recurring: Optional[RecurringConfig] = None

    @property
    def items_total(self) -> Decimal:
        """Plain sum of line totals, without margin or tax."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def is_recurring(self) -> bool:
        """Check if the invoice is an active recurring invoice."""
        return (
            self.recurring is not None
            and self.recurring.is_active
            and self.recurring.frequency != RecurringFrequency.NONE
        )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id!r}, number={self.invoice_number!r}, status={self.status.value})>"
