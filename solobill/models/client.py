"""
Client model for managing customers.
Each client is billed in a preferred currency at its own negotiated rate.
"""

from decimal import Decimal

from solobill.models.base import BaseModel
from solobill.models.currency import Currency


class Client(BaseModel):
    """
    Client model representing a customer.

    Attributes:
        name: Client's company name
        email: Client's billing email address
        address: Client's postal address
        preferred_currency: Currency the client is billed and reports in
        exchange_rate: Units of preferred_currency per 1 USD (1 for USD)
    """

    name: str
    email: str = ""
    address: str = ""
    preferred_currency: Currency = Currency.USD
    exchange_rate: Decimal = Decimal("1")

    def __repr__(self) -> str:
        return f"<Client(id={self.id!r}, name={self.name!r}, currency={self.preferred_currency.value})>"
