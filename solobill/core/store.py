"""
In-memory application store.
Owns the current AppState snapshot; nothing is persisted across restarts.
"""

import logging
from collections.abc import Iterable

from solobill.models.client import Client
from solobill.models.invoice import Invoice
from solobill.models.state import AppState


logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Holder of the current application snapshot.

    Every write replaces the whole snapshot and returns it, so readers
    holding an older snapshot keep a consistent view.
    """

    def __init__(self, state: AppState | None = None):
        self._state = state or AppState()

    @property
    def snapshot(self) -> AppState:
        return self._state

    def save_client(self, client: Client) -> AppState:
        self._state = self._state.with_client(client)
        logger.debug(f"Client saved: {client.id}")
        return self._state

    def save_invoice(self, invoice: Invoice) -> AppState:
        self._state = self._state.with_invoice(invoice)
        logger.debug(f"Invoice saved: {invoice.invoice_number}")
        return self._state

    def delete_clients(self, client_ids: Iterable[str]) -> AppState:
        self._state = self._state.without_clients(client_ids)
        return self._state

    def delete_invoice(self, invoice_id: str) -> AppState:
        self._state = self._state.without_invoice(invoice_id)
        return self._state

    def reset(self, state: AppState | None = None) -> AppState:
        self._state = state or AppState()
        return self._state


# Process-wide store used by the API
store = InMemoryStore()


def get_store() -> InMemoryStore:
    """Dependency returning the process-wide store."""
    return store
