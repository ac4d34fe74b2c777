"""
Invoice Total Calculator.
Pure functions computing invoice breakdowns, invoice numbers and MRR.

All amounts are USD ``Decimal`` values. Nothing is rounded here; rounding
happens only when an amount is formatted for display.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from solobill.models.invoice import Invoice, LineItem, RecurringFrequency


# Agency markup charged on top of ad-spend pass-through costs
AD_MARGIN = Decimal("0.15")

INVOICE_PREFIX = "ADV"

_LEADING_DIGITS = re.compile(r"\s*(\d+)")

ZERO = Decimal("0")

# Billing periods per year; weekly counts as four per month
PERIODS_PER_YEAR: dict[RecurringFrequency, int] = {
    RecurringFrequency.WEEKLY: 48,
    RecurringFrequency.MONTHLY: 12,
    RecurringFrequency.QUARTERLY: 4,
    RecurringFrequency.YEARLY: 1,
}


@dataclass(frozen=True)
class Breakdown:
    """Monetary breakdown of an invoice, in USD."""

    ad_spend_base: Decimal = ZERO
    service_fees: Decimal = ZERO
    margin_earned: Decimal = ZERO
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO


def line_items_total(items: Iterable[LineItem]) -> Decimal:
    """Sum of quantity * price over all items, without margin or tax."""
    return sum((item.line_total for item in items), ZERO)


def compute_breakdown(
    items: Iterable[LineItem],
    tax_rate_percent: Decimal,
    include_margin: bool = True,
    include_tax: bool = True,
) -> Breakdown:
    """
    Compute the monetary breakdown of a set of line items.

    Args:
        items: Line items, unit prices in USD (may be empty)
        tax_rate_percent: Tax rate in percent (7 means 7%)
        include_margin: Add the ad-spend margin to the subtotal
        include_tax: Apply the tax rate to the subtotal

    Returns:
        Breakdown with ad spend, service fees, margin, subtotal, tax and total
    """
    ad_spend_base = ZERO
    service_fees = ZERO

    for item in items:
        if item.is_ad_spend:
            ad_spend_base += item.line_total
        else:
            service_fees += item.line_total

    # Margin is additive revenue: ad spend stays in the subtotal either way
    margin_earned = ad_spend_base * AD_MARGIN if include_margin else ZERO
    subtotal = ad_spend_base + service_fees + margin_earned
    tax = subtotal * (Decimal(tax_rate_percent) / 100) if include_tax else ZERO

    return Breakdown(
        ad_spend_base=ad_spend_base,
        service_fees=service_fees,
        margin_earned=margin_earned,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


def _sequence_of(invoice_number: str) -> int:
    """
    Leading digits of the last segment of an invoice number.
    "005a" reads as 5; a segment without leading digits reads as 0.
    """
    last_part = invoice_number.rsplit("-", 1)[-1]
    match = _LEADING_DIGITS.match(last_part)
    return int(match.group(1)) if match else 0


def next_invoice_number(existing_numbers: Iterable[str], year: int) -> str:
    """
    Derive the next invoice number for a year.
    Format: ADV-{year}-{sequence}, sequence zero-padded to 3 digits.

    The number is recomputed from the existing invoices each time;
    there is no stored counter.
    """
    prefix = f"{INVOICE_PREFIX}-{year}-"
    sequences = [_sequence_of(n) for n in existing_numbers if n.startswith(prefix)]
    next_sequence = max(sequences) + 1 if sequences else 1
    return f"{prefix}{str(next_sequence).zfill(3)}"


def estimated_monthly_recurring_revenue(invoices: Iterable[Invoice]) -> Decimal:
    """
    Normalized monthly value of all active recurring invoices.

    Weekly invoices count four times, quarterly a third and yearly a twelfth
    of their plain line-item total. Other invoices contribute nothing.
    """
    mrr = ZERO
    for invoice in invoices:
        if not invoice.is_recurring:
            continue
        periods = PERIODS_PER_YEAR.get(invoice.recurring.frequency)
        if periods is None:
            continue
        mrr += line_items_total(invoice.items) * periods / 12
    return mrr
