"""
Supported billing currencies and their published rates.
Adding a currency means adding one enum member and one CURRENCY_SPECS entry.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Currency(str, Enum):
    """Currency enumeration."""
    USD = "USD"
    THB = "THB"
    MMK = "MMK"


@dataclass(frozen=True)
class CurrencySpec:
    """
    Display and conversion data for a currency.

    Attributes:
        market_rate: Published units per 1 USD, used when the client has no
            negotiated rate for this currency
        prefix: Text placed before the amount
        decimals: Number of decimal places shown
        sign_after_prefix: Place a minus sign after the prefix ("K -5")
            instead of before it ("-$5.00")
    """

    market_rate: Decimal
    prefix: str
    decimals: int
    sign_after_prefix: bool = False


THB_RATE = Decimal("35.13")
MMK_RATE = Decimal("3200")

CURRENCY_SPECS: dict[Currency, CurrencySpec] = {
    Currency.USD: CurrencySpec(market_rate=Decimal("1"), prefix="$", decimals=2),
    Currency.THB: CurrencySpec(market_rate=THB_RATE, prefix="THB ", decimals=2),
    Currency.MMK: CurrencySpec(market_rate=MMK_RATE, prefix="K ", decimals=0, sign_after_prefix=True),
}
