"""
Invoice endpoint tests.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from httpx import AsyncClient

from solobill.core.seed import DEMO_INVOICES
from solobill.models.currency import Currency
from solobill.models.invoice import InvoiceStatus
from solobill.services.invoice import InvoiceService
from solobill.services.pdf import PDFService


def _new_invoice(**overrides) -> dict:
    payload = {
        "client_id": "c1",
        "items": [
            {"description": "TikTok Ads", "quantity": 1, "price": 2000, "is_ad_spend": True},
            {"description": "Creative production", "quantity": 1, "price": 800},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_invoice_defaults(client: AsyncClient):
    response = await client.post("/api/v1/invoices", json=_new_invoice())

    assert response.status_code == 201
    data = response.json()
    today = date.today()
    assert data["invoice_number"] == f"ADV-{today.year}-001"
    assert data["status"] == "Draft"
    assert data["issue_date"] == today.isoformat()
    assert data["due_date"] == (today + timedelta(days=14)).isoformat()
    assert Decimal(data["tax_rate"]) == Decimal("7")
    assert data["client"]["name"] == "Luxury Spa Resort"
    assert data["recurring"] == {"frequency": "None", "is_active": False, "end_date": None}
    assert Decimal(data["items_total"]) == Decimal("2800")


@pytest.mark.asyncio
async def test_invoice_numbers_follow_existing(client: AsyncClient):
    first = (await client.post("/api/v1/invoices", json=_new_invoice())).json()
    second = (await client.post("/api/v1/invoices", json=_new_invoice())).json()

    year = date.today().year
    assert first["invoice_number"] == f"ADV-{year}-001"
    assert second["invoice_number"] == f"ADV-{year}-002"

    response = await client.get("/api/v1/invoices/next-number")
    assert response.json()["invoice_number"] == f"ADV-{year}-003"


@pytest.mark.asyncio
async def test_create_invoice_requires_items(client: AsyncClient):
    response = await client.post("/api/v1/invoices", json=_new_invoice(items=[]))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_invoice_unknown_client(client: AsyncClient):
    response = await client.post("/api/v1/invoices", json=_new_invoice(client_id="nope"))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_invoice_malformed_numbers_become_zero(client: AsyncClient):
    response = await client.post(
        "/api/v1/invoices",
        json=_new_invoice(items=[{"description": "Typo", "quantity": "", "price": "12abc"}]),
    )

    assert response.status_code == 201
    item = response.json()["items"][0]
    assert Decimal(item["quantity"]) == 0
    assert Decimal(item["price"]) == 0


@pytest.mark.asyncio
async def test_list_invoices_filters(client: AsyncClient):
    response = await client.get("/api/v1/invoices", params={"status": "Paid"})
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["invoice_number"] == "AD-2024-001"

    response = await client.get("/api/v1/invoices", params={"client_id": "c2"})
    assert [i["id"] for i in response.json()["items"]] == ["2"]

    response = await client.get("/api/v1/invoices", params={"from_date": "2024-03-05"})
    assert [i["id"] for i in response.json()["items"]] == ["2"]


@pytest.mark.asyncio
async def test_list_invoices_newest_first(client: AsyncClient):
    response = await client.get("/api/v1/invoices")

    assert [i["id"] for i in response.json()["items"]] == ["2", "1"]


@pytest.mark.asyncio
async def test_update_invoice_status_and_recurring(client: AsyncClient):
    response = await client.patch(
        "/api/v1/invoices/2",
        json={
            "status": "Paid",
            "recurring": {"frequency": "Monthly", "is_active": True, "end_date": "2025-12-31"},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Paid"
    assert data["recurring"]["frequency"] == "Monthly"
    assert data["recurring"]["end_date"] == "2025-12-31"
    assert data["notes"] == "Google Search Ads for Q1 Product Launch."


@pytest.mark.asyncio
async def test_update_invoice_replaces_items(client: AsyncClient):
    response = await client.patch(
        "/api/v1/invoices/1",
        json={"items": [{"description": "Retainer", "quantity": 2, "price": 500}]},
    )

    data = response.json()
    assert len(data["items"]) == 1
    assert Decimal(data["items_total"]) == Decimal("1000")


@pytest.mark.asyncio
async def test_update_invoice_change_client(client: AsyncClient):
    response = await client.patch("/api/v1/invoices/1", json={"client_id": "c3"})

    assert response.json()["client"]["name"] == "Organic Bites"


@pytest.mark.asyncio
async def test_add_and_remove_items(client: AsyncClient):
    response = await client.post(
        "/api/v1/invoices/1/items",
        json={"description": "LINE Ads", "quantity": 1, "price": 300, "is_ad_spend": True},
    )
    assert response.status_code == 201
    items = response.json()["items"]
    assert len(items) == 3

    new_id = items[-1]["id"]
    response = await client.delete(f"/api/v1/invoices/1/items/{new_id}")
    assert [i["id"] for i in response.json()["items"]] == ["li1", "li2"]


@pytest.mark.asyncio
async def test_cannot_remove_last_item(client: AsyncClient):
    await client.delete("/api/v1/invoices/1/items/li2")
    response = await client.delete("/api/v1/invoices/1/items/li1")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_remove_missing_item(client: AsyncClient):
    response = await client.delete("/api/v1/invoices/1/items/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_invoice(client: AsyncClient):
    response = await client.delete("/api/v1/invoices/1")

    assert response.status_code == 200
    assert (await client.get("/api/v1/invoices/1")).status_code == 404


@pytest.mark.asyncio
async def test_breakdown_in_client_currency(client: AsyncClient):
    response = await client.get("/api/v1/invoices/1/breakdown")

    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "THB"
    assert Decimal(data["rate"]) == Decimal("35.13")
    assert Decimal(data["usd"]["total"]) == Decimal("3317")
    assert Decimal(data["converted"]["total"]) == Decimal("3317") * Decimal("35.13")
    assert data["formatted"]["total"] == "THB 116,526.21"
    assert data["formatted"]["margin_earned"] == "THB 10,539.00"


@pytest.mark.asyncio
async def test_breakdown_export_options_and_currency(client: AsyncClient):
    response = await client.get(
        "/api/v1/invoices/1/breakdown",
        params={"currency": "MMK", "include_margin": False, "include_tax": False},
    )

    data = response.json()
    assert Decimal(data["usd"]["margin_earned"]) == 0
    assert Decimal(data["usd"]["tax"]) == 0
    assert Decimal(data["usd"]["total"]) == Decimal("2800")
    assert data["formatted"]["total"] == "K 8,960,000"


@pytest.mark.asyncio
async def test_breakdown_unknown_currency(client: AsyncClient):
    response = await client.get("/api/v1/invoices/1/breakdown", params={"currency": "EUR"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_totals_draft(client: AsyncClient):
    response = await client.post(
        "/api/v1/invoices/preview-totals",
        json={
            "items": [
                {"quantity": 1, "price": 2000, "is_ad_spend": True},
                {"quantity": 1, "price": 800},
            ],
            "tax_rate": 7,
        },
    )

    data = response.json()
    assert data["currency"] == "USD"
    assert data["formatted"] == {
        "ad_spend_base": "$2,000.00",
        "service_fees": "$800.00",
        "margin_earned": "$300.00",
        "subtotal": "$3,100.00",
        "tax": "$217.00",
        "total": "$3,317.00",
    }


@pytest.mark.asyncio
async def test_preview_totals_empty_draft(client: AsyncClient):
    response = await client.post(
        "/api/v1/invoices/preview-totals",
        json={"items": [], "tax_rate": 7, "client_id": "c3"},
    )

    data = response.json()
    assert data["currency"] == "THB"
    assert all(Decimal(v) == 0 for v in data["usd"].values())
    assert data["formatted"]["total"] == "THB 0.00"


@pytest.mark.asyncio
async def test_email_link(client: AsyncClient):
    response = await client.get("/api/v1/invoices/2/email-link")

    assert response.status_code == 200
    data = response.json()
    assert data["to"] == "ads@techgear.io"
    assert data["subject"] == "Invoice AD-2024-002 from SOLOBILL ADS"
    assert "Total Amount Due: $6,950.00" in data["body"]
    assert "Due Date: 2024-03-24" in data["body"]
    assert data["mailto"].startswith("mailto:ads@techgear.io?subject=Invoice%20AD-2024-002")


@pytest.mark.asyncio
async def test_download_pdf(client: AsyncClient, tmp_path, monkeypatch):
    from solobill.core.config import settings

    monkeypatch.setattr(settings, "PDF_STORAGE_PATH", str(tmp_path))
    response = await client.get(
        "/api/v1/invoices/1/pdf",
        params={"currency": "USD", "show_notes": False},
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_generate_notes_falls_back_and_saves(client: AsyncClient):
    response = await client.post("/api/v1/invoices/1/generate-notes")

    assert response.status_code == 200
    data = response.json()
    assert data["fallback"] is True
    assert data["notes"] == "Thank you for choosing our advertising services."

    invoice = (await client.get("/api/v1/invoices/1")).json()
    assert invoice["notes"] == data["notes"]


@pytest.mark.asyncio
async def test_pdf_exports_use_distinct_files(tmp_path):
    service = PDFService(storage_path=tmp_path)

    first = await service.generate_invoice_pdf(DEMO_INVOICES[0], Currency.THB)
    second = await service.generate_invoice_pdf(DEMO_INVOICES[0], Currency.THB)

    assert first != second
    assert len(list(tmp_path.glob("invoice_AD-2024-001_THB_*.pdf"))) == 2


def test_set_status_saves_and_logs_transition(store, caplog):
    service = InvoiceService(store)
    invoice = service.get_or_404("2")

    with caplog.at_level("INFO", logger="solobill.services.invoice"):
        updated = service.set_status(invoice, InvoiceStatus.OVERDUE)

    assert updated.status == InvoiceStatus.OVERDUE
    assert store.snapshot.get_invoice("2").status == InvoiceStatus.OVERDUE
    assert "AD-2024-002: Pending -> Overdue" in caplog.text


@pytest.mark.asyncio
async def test_patch_status_logs_transition(client: AsyncClient, caplog):
    with caplog.at_level("INFO", logger="solobill.services.invoice"):
        response = await client.patch("/api/v1/invoices/2", json={"status": "Paid", "tax_rate": 10})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Paid"
    assert Decimal(data["tax_rate"]) == Decimal("10")
    assert "AD-2024-002: Pending -> Paid" in caplog.text
