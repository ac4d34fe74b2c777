"""
Demo data loaded at startup when SEED_DEMO_DATA is enabled.
"""

from datetime import date
from decimal import Decimal

from solobill.models.client import Client
from solobill.models.currency import Currency
from solobill.models.invoice import Invoice, InvoiceStatus, LineItem
from solobill.models.state import AppState


DEMO_CLIENTS = (
    Client(
        id="c1",
        name="Luxury Spa Resort",
        email="marketing@luxespa.th",
        address="88 Sukhumvit Rd, Bangkok, Thailand",
        preferred_currency=Currency.THB,
        exchange_rate=Decimal("35.13"),
    ),
    Client(
        id="c2",
        name="TechGear Solutions",
        email="ads@techgear.io",
        address="Silicon Valley South, Austin, TX",
        preferred_currency=Currency.USD,
        exchange_rate=Decimal("1"),
    ),
    Client(
        id="c3",
        name="Organic Bites",
        email="hello@organicbites.co",
        address="789 Green St, Chiang Mai",
        preferred_currency=Currency.THB,
        exchange_rate=Decimal("35.50"),
    ),
)

DEMO_INVOICES = (
    Invoice(
        id="1",
        invoice_number="AD-2024-001",
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 15),
        client=DEMO_CLIENTS[0],
        status=InvoiceStatus.PAID,
        tax_rate=Decimal("7"),
        notes="Meta Ads campaign focused on Songkran festival bookings.",
        items=(
            LineItem(id="li1", description="Meta Ad Spend (Facebook/IG)", price=Decimal("2000"), is_ad_spend=True),
            LineItem(id="li2", description="Social Media Management - March", price=Decimal("800")),
        ),
    ),
    Invoice(
        id="2",
        invoice_number="AD-2024-002",
        issue_date=date(2024, 3, 10),
        due_date=date(2024, 3, 24),
        client=DEMO_CLIENTS[1],
        status=InvoiceStatus.PENDING,
        tax_rate=Decimal("0"),
        notes="Google Search Ads for Q1 Product Launch.",
        items=(
            LineItem(id="li3", description="Google Ads Search Network", price=Decimal("5000"), is_ad_spend=True),
            LineItem(id="li4", description="Campaign Setup & Optimization", price=Decimal("1200")),
        ),
    ),
)


def demo_state() -> AppState:
    """Build the demo snapshot."""
    return AppState(clients=DEMO_CLIENTS, invoices=DEMO_INVOICES)
