"""
Client service.
Handles client CRUD operations.
"""

import logging
from decimal import Decimal
from typing import List
from fastapi import HTTPException, status

from solobill.core.store import InMemoryStore
from solobill.models.client import Client
from solobill.models.currency import Currency
from solobill.schemas.client import ClientCreate, ClientUpdate
from solobill.services.currency import get_spec


logger = logging.getLogger(__name__)


def default_rate(currency: Currency) -> Decimal:
    """Rate offered for a currency before any negotiation."""
    return get_spec(currency).market_rate


class ClientService:
    """Service for client operations."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, data: ClientCreate) -> Client:
        """
        Create a new client.

        Args:
            data: Client data

        Returns:
            Created client
        """
        exchange_rate = data.exchange_rate
        if exchange_rate is None:
            exchange_rate = default_rate(data.preferred_currency)

        client = Client(
            name=data.name,
            email=data.email,
            address=data.address,
            preferred_currency=data.preferred_currency,
            exchange_rate=exchange_rate,
        )
        self.store.save_client(client)
        logger.info(f"Client created: {client.name} ({client.id})")

        return client

    def get_by_id(self, client_id: str) -> Client | None:
        """Get client by ID."""
        return self.store.snapshot.get_client(client_id)

    def get_or_404(self, client_id: str) -> Client:
        """
        Get client by ID or raise 404.

        Raises:
            HTTPException: If client not found
        """
        client = self.get_by_id(client_id)
        if not client:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Client not found",
            )
        return client

    def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
    ) -> tuple[list[Client], int]:
        """
        List clients with pagination and search.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Case-insensitive term matched against name, email and address

        Returns:
            Tuple of (clients list, total count)
        """
        clients = list(self.store.snapshot.clients)

        query = (search or "").strip().lower()
        if query:
            clients = [
                c for c in clients
                if query in c.name.lower()
                or query in c.email.lower()
                or query in c.address.lower()
            ]

        clients.sort(key=lambda c: c.name.lower())
        return clients[skip:skip + limit], len(clients)

    def update(self, client: Client, data: ClientUpdate) -> Client:
        """
        Update client.

        Changing the currency without giving a rate resets the rate to the
        published one. USD clients always have a rate of 1.
        """
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        currency = update_data.get("preferred_currency", client.preferred_currency)
        if currency != client.preferred_currency and "exchange_rate" not in update_data:
            update_data["exchange_rate"] = default_rate(currency)
        if currency == Currency.USD:
            update_data["exchange_rate"] = Decimal("1")

        updated = client.model_copy(update=update_data)
        self.store.save_client(updated)

        return updated

    def delete(self, client: Client) -> None:
        """
        Delete client.

        Invoices keep their own copy of the client, so they are not affected.
        """
        self.store.delete_clients([client.id])
        logger.info(f"Client deleted: {client.id}")

    def delete_many(self, client_ids: List[str]) -> int:
        """
        Delete several clients at once.

        Returns:
            Number of clients actually removed
        """
        before = len(self.store.snapshot.clients)
        after = len(self.store.delete_clients(client_ids).clients)
        return before - after
