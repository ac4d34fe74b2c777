"""
Dashboard Service.
Provides statistics and analytics for the business.
"""

from decimal import Decimal
from typing import List, Dict, Any

from solobill.core.store import InMemoryStore
from solobill.models.invoice import Invoice, InvoiceStatus
from solobill.services.calculator import (
    estimated_monthly_recurring_revenue,
    line_items_total,
)


def _sum_by_status(invoices: tuple[Invoice, ...], invoice_status: InvoiceStatus) -> Decimal:
    return sum(
        (line_items_total(i.items) for i in invoices if i.status == invoice_status),
        Decimal("0"),
    )


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_overview(self) -> Dict[str, Any]:
        """
        Get business overview statistics.

        Amounts are plain line-item totals in USD (no margin, no tax).

        Returns:
            Overview with paid and pending amounts, overdue count and MRR
        """
        invoices = self.store.snapshot.invoices

        overdue_count = sum(1 for i in invoices if i.status == InvoiceStatus.OVERDUE)

        return {
            "total_revenue": float(_sum_by_status(invoices, InvoiceStatus.PAID)),
            "pending_amount": float(_sum_by_status(invoices, InvoiceStatus.PENDING)),
            "overdue_count": overdue_count,
            "mrr": float(estimated_monthly_recurring_revenue(invoices)),
            "invoice_count": len(invoices),
            "client_count": len(self.store.snapshot.clients),
        }

    def get_status_distribution(self) -> Dict[str, int]:
        """
        Get invoice count by status.

        Returns:
            Mapping of status to count
        """
        invoices = self.store.snapshot.invoices
        return {
            s.value: sum(1 for i in invoices if i.status == s)
            for s in (
                InvoiceStatus.PAID,
                InvoiceStatus.PENDING,
                InvoiceStatus.OVERDUE,
                InvoiceStatus.DRAFT,
            )
        }

    def get_revenue_by_client(self) -> List[Dict[str, Any]]:
        """
        Get billed amount per client name, in first-seen order.
        """
        totals: Dict[str, Decimal] = {}
        for invoice in self.store.snapshot.invoices:
            name = invoice.client.name
            totals[name] = totals.get(name, Decimal("0")) + line_items_total(invoice.items)

        return [{"name": name, "value": float(value)} for name, value in totals.items()]

    def get_full_dashboard(self) -> Dict[str, Any]:
        """Get all dashboard statistics."""
        return {
            "overview": self.get_overview(),
            "status_distribution": self.get_status_distribution(),
            "revenue_by_client": self.get_revenue_by_client(),
        }
