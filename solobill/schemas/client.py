"""
Client schemas for request/response validation.
"""

from decimal import Decimal
from pydantic import EmailStr, Field, model_validator

from solobill.models.currency import Currency
from solobill.schemas.base import BaseSchema, Number, PaginatedResponse


class ClientBase(BaseSchema):
    """Base client schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    address: str = ""
    preferred_currency: Currency = Currency.USD


class ClientCreate(ClientBase):
    """
    Schema for creating a new client.
    Without an exchange rate, the published rate of the currency is used.
    """

    exchange_rate: Number | None = None

    @model_validator(mode="after")
    def usd_rate_is_one(self) -> "ClientCreate":
        if self.preferred_currency == Currency.USD:
            self.exchange_rate = Decimal("1")
        return self


class ClientUpdate(BaseSchema):
    """Schema for updating a client."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    address: str | None = None
    preferred_currency: Currency | None = None
    exchange_rate: Number | None = None


class ClientResponse(ClientBase):
    """Client response schema."""

    id: str
    email: str
    exchange_rate: Decimal


class ClientListResponse(PaginatedResponse):
    """Paginated client list response."""

    items: list[ClientResponse]


class BulkDeleteRequest(BaseSchema):
    """Ids of the clients to delete."""

    ids: list[str] = Field(..., min_length=1)
