"""
Invoice total calculator tests.
"""

from datetime import date
from decimal import Decimal

import pytest

from solobill.models.client import Client
from solobill.models.invoice import (
    Invoice,
    LineItem,
    RecurringConfig,
    RecurringFrequency,
)
from solobill.services.calculator import (
    AD_MARGIN,
    Breakdown,
    compute_breakdown,
    estimated_monthly_recurring_revenue,
    line_items_total,
    next_invoice_number,
)


def _items() -> list[LineItem]:
    return [
        LineItem(description="Meta Ad Spend", quantity=1, price=2000, is_ad_spend=True),
        LineItem(description="Social Media Management", quantity=1, price=800),
    ]


def _invoice(number: str = "ADV-2024-001", items=(), recurring=None) -> Invoice:
    return Invoice(
        invoice_number=number,
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 15),
        client=Client(name="Test Client"),
        items=tuple(items),
        recurring=recurring,
    )


def test_ad_margin_is_fifteen_percent():
    assert AD_MARGIN == Decimal("0.15")


def test_breakdown_scenario():
    """Ad spend 2000, fee 800, tax 7%."""
    result = compute_breakdown(_items(), Decimal("7"))

    assert result.ad_spend_base == Decimal("2000")
    assert result.service_fees == Decimal("800")
    assert result.margin_earned == Decimal("300")
    assert result.subtotal == Decimal("3100")
    assert result.tax == Decimal("217")
    assert result.total == Decimal("3317")


def test_breakdown_empty_items():
    result = compute_breakdown([], Decimal("7"))

    assert result == Breakdown()
    assert result.total == 0


def test_breakdown_zero_tax_rate():
    result = compute_breakdown(_items(), Decimal("0"))

    assert result.tax == 0
    assert result.total == result.subtotal


def test_breakdown_without_margin_keeps_ad_spend():
    result = compute_breakdown(_items(), Decimal("7"), include_margin=False)

    assert result.margin_earned == 0
    assert result.ad_spend_base == Decimal("2000")
    assert result.subtotal == result.ad_spend_base + result.service_fees


def test_breakdown_without_tax():
    result = compute_breakdown(_items(), Decimal("7"), include_tax=False)

    assert result.tax == 0
    assert result.total == result.subtotal == Decimal("3100")


@pytest.mark.parametrize("include_margin", [True, False])
@pytest.mark.parametrize("include_tax", [True, False])
def test_buckets_sum_to_line_totals(include_margin, include_tax):
    items = _items() + [
        LineItem(quantity="2.5", price="19.99", is_ad_spend=True),
        LineItem(quantity=3, price="0.1"),
    ]
    result = compute_breakdown(
        items,
        Decimal("10"),
        include_margin=include_margin,
        include_tax=include_tax,
    )

    assert result.ad_spend_base + result.service_fees == line_items_total(items)


def test_breakdown_ignores_item_order():
    items = _items() + [LineItem(quantity="0.5", price="33.33", is_ad_spend=True)]

    assert compute_breakdown(items, Decimal("7")) == compute_breakdown(items[::-1], Decimal("7"))


def test_breakdown_is_repeatable():
    items = _items()

    assert compute_breakdown(items, Decimal("7")) == compute_breakdown(items, Decimal("7"))


def test_fractional_amounts_are_not_rounded():
    items = [LineItem(quantity=3, price="0.333")]
    result = compute_breakdown(items, Decimal("7"))

    assert result.service_fees == Decimal("0.999")
    assert result.tax == Decimal("0.06993")


def test_negative_amounts_pass_through():
    """Credits and refunds are accepted as negative lines."""
    items = [
        LineItem(quantity=1, price=1000, is_ad_spend=True),
        LineItem(description="Refund", quantity=-1, price=200),
        LineItem(description="Unused ad credit", quantity=1, price=-100, is_ad_spend=True),
    ]
    result = compute_breakdown(items, Decimal("10"))

    assert result.ad_spend_base == Decimal("900")
    assert result.service_fees == Decimal("-200")
    assert result.margin_earned == Decimal("135")
    assert result.subtotal == Decimal("835")
    assert result.total == Decimal("918.5")


def test_next_invoice_number_increments():
    numbers = ["ADV-2024-001", "ADV-2024-002"]

    assert next_invoice_number(numbers, 2024) == "ADV-2024-003"


def test_next_invoice_number_new_year():
    numbers = ["ADV-2024-001", "ADV-2024-002"]

    assert next_invoice_number(numbers, 2025) == "ADV-2025-001"


def test_next_invoice_number_uses_max_not_count():
    numbers = ["ADV-2024-001", "ADV-2024-007", "AD-2024-050"]

    assert next_invoice_number(numbers, 2024) == "ADV-2024-008"


def test_next_invoice_number_unparseable_suffix_counts_as_zero():
    assert next_invoice_number(["ADV-2024-draft"], 2024) == "ADV-2024-001"


def test_next_invoice_number_reads_leading_digits():
    assert next_invoice_number(["ADV-2024-005a", "ADV-2024-003"], 2024) == "ADV-2024-006"


def test_next_invoice_number_past_three_digits():
    assert next_invoice_number(["ADV-2024-999"], 2024) == "ADV-2024-1000"


def test_mrr_scenario():
    weekly = _invoice(
        items=[LineItem(quantity=1, price=100)],
        recurring=RecurringConfig(frequency=RecurringFrequency.WEEKLY, is_active=True),
    )
    quarterly = _invoice(
        items=[LineItem(quantity=3, price=100, is_ad_spend=True)],
        recurring=RecurringConfig(frequency=RecurringFrequency.QUARTERLY, is_active=True),
    )

    assert estimated_monthly_recurring_revenue([weekly, quarterly]) == Decimal("500")


def test_mrr_monthly_and_yearly():
    monthly = _invoice(
        items=[LineItem(quantity=1, price=250)],
        recurring=RecurringConfig(frequency=RecurringFrequency.MONTHLY, is_active=True),
    )
    yearly = _invoice(
        items=[LineItem(quantity=1, price=1200)],
        recurring=RecurringConfig(frequency=RecurringFrequency.YEARLY, is_active=True),
    )

    assert estimated_monthly_recurring_revenue([monthly, yearly]) == Decimal("350")


def test_mrr_ignores_inactive_and_non_recurring():
    items = [LineItem(quantity=1, price=100)]
    invoices = [
        _invoice(items=items),
        _invoice(items=items, recurring=RecurringConfig()),
        _invoice(
            items=items,
            recurring=RecurringConfig(frequency=RecurringFrequency.MONTHLY, is_active=False),
        ),
        _invoice(
            items=items,
            recurring=RecurringConfig(frequency=RecurringFrequency.NONE, is_active=True),
        ),
    ]

    assert estimated_monthly_recurring_revenue(invoices) == 0


def test_mrr_excludes_margin_and_tax():
    invoice = _invoice(
        items=_items(),
        recurring=RecurringConfig(frequency=RecurringFrequency.MONTHLY, is_active=True),
    )

    assert estimated_monthly_recurring_revenue([invoice]) == Decimal("2800")
