"""
Domain models module.
All records are exported from here for easy imports.
"""

from solobill.models.currency import Currency
from solobill.models.client import Client
from solobill.models.invoice import (
    Invoice,
    InvoiceStatus,
    LineItem,
    RecurringConfig,
    RecurringFrequency,
)
from solobill.models.state import AppState


__all__ = [
    "Currency",
    "Client",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "RecurringConfig",
    "RecurringFrequency",
    "AppState",
]
