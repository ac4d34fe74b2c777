"""
Client management endpoints.
CRUD operations for clients.
"""

from fastapi import APIRouter, Query, status

from solobill.api.deps import Store
from solobill.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
    BulkDeleteRequest,
)
from solobill.schemas.base import MessageResponse, PaginatedResponse
from solobill.services.client import ClientService


router = APIRouter()


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
    description="Create a new client with a preferred currency and exchange rate",
)
async def create_client(
    data: ClientCreate,
    store: Store,
) -> ClientResponse:
    """Create a new client."""
    service = ClientService(store)
    client = service.create(data)
    return ClientResponse.model_validate(client)


@router.get(
    "",
    response_model=ClientListResponse,
    summary="List clients",
    description="Get the paginated client list",
)
async def list_clients(
    store: Store,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    search: str | None = Query(None, description="Search by name, email or address"),
) -> ClientListResponse:
    """List all clients with pagination."""
    service = ClientService(store)
    skip = (page - 1) * per_page

    clients, total = service.list(skip=skip, limit=per_page, search=search)

    return ClientListResponse(
        items=[ClientResponse.model_validate(c) for c in clients],
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginatedResponse.count_pages(total, per_page),
    )


@router.post(
    "/bulk-delete",
    response_model=MessageResponse,
    summary="Delete several clients",
    description="Delete every client whose id is listed",
)
async def bulk_delete_clients(
    data: BulkDeleteRequest,
    store: Store,
) -> MessageResponse:
    """Delete clients in bulk."""
    service = ClientService(store)
    deleted = service.delete_many(data.ids)
    return MessageResponse(message=f"{deleted} client(s) deleted")


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Client details",
    description="Get the details of a client",
)
async def get_client(
    client_id: str,
    store: Store,
) -> ClientResponse:
    """Get client by ID."""
    service = ClientService(store)
    client = service.get_or_404(client_id)
    return ClientResponse.model_validate(client)


@router.patch(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
    description="Update a client's details, currency or exchange rate",
)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    store: Store,
) -> ClientResponse:
    """Update a client."""
    service = ClientService(store)
    client = service.get_or_404(client_id)
    client = service.update(client, data)
    return ClientResponse.model_validate(client)


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Delete a client",
    description="Delete a client (existing invoices keep their copy)",
)
async def delete_client(
    client_id: str,
    store: Store,
) -> MessageResponse:
    """Delete a client."""
    service = ClientService(store)
    client = service.get_or_404(client_id)
    service.delete(client)
    return MessageResponse(message="Client deleted")
