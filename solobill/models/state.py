"""
Application state snapshot.
Holds every client and invoice; each mutation returns a new snapshot.
"""

from collections.abc import Iterable
from typing import TypeVar


from solobill.models.base import ValueObject
from solobill.models.client import Client
from solobill.models.invoice import Invoice


RecordT = TypeVar("RecordT", Client, Invoice)


def _upsert(records: tuple[RecordT, ...], record: RecordT) -> tuple[RecordT, ...]:
    """Replace the record with the same id, or append it when new."""
    if any(r.id == record.id for r in records):
        return tuple(record if r.id == record.id else r for r in records)
    return records + (record,)


class AppState(ValueObject):
    """Immutable snapshot of all clients and invoices."""

    clients: tuple[Client, ...] = ()
    invoices: tuple[Invoice, ...] = ()

    def get_client(self, client_id: str) -> Client | None:
        return next((c for c in self.clients if c.id == client_id), None)

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    def with_client(self, client: Client) -> "AppState":
        return self.model_copy(update={"clients": _upsert(self.clients, client)})

    def with_invoice(self, invoice: Invoice) -> "AppState":
        return self.model_copy(update={"invoices": _upsert(self.invoices, invoice)})

    def without_clients(self, client_ids: Iterable[str]) -> "AppState":
        ids = set(client_ids)
        return self.model_copy(
            update={"clients": tuple(c for c in self.clients if c.id not in ids)}
        )

    def without_invoice(self, invoice_id: str) -> "AppState":
        return self.model_copy(
            update={"invoices": tuple(i for i in self.invoices if i.id != invoice_id)}
        )
