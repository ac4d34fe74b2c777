"""
Currency conversion and display formatting.
Amounts are stored in USD and converted only for display or export.
"""

from decimal import Decimal, ROUND_HALF_UP

from solobill.models.client import Client
from solobill.models.currency import Currency, CurrencySpec, CURRENCY_SPECS


class UnsupportedCurrencyError(ValueError):
    """Raised when a currency code has no rate or display entry."""

    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Unsupported currency: {code}")


def get_currency(code: Currency | str) -> Currency:
    """Coerce a currency code to the enumeration."""
    try:
        return Currency(code)
    except ValueError:
        raise UnsupportedCurrencyError(code) from None


def get_spec(currency: Currency | str) -> CurrencySpec:
    """Display and rate data for a currency."""
    currency = get_currency(currency)
    spec = CURRENCY_SPECS.get(currency)
    if spec is None:
        raise UnsupportedCurrencyError(currency.value)
    return spec


def resolve_rate(target: Currency | str, client: Client) -> Decimal:
    """
    Rate (units of target per 1 USD) used to display amounts for a client.

    The client's negotiated rate wins over the published rate when the
    target is the client's own preferred currency.
    """
    target = get_currency(target)
    if target == Currency.USD:
        return Decimal("1")
    if target == client.preferred_currency:
        return client.exchange_rate
    return get_spec(target).market_rate


def convert(amount_usd: Decimal | float | int, target: Currency | str, client: Client) -> Decimal:
    """
    Convert a USD amount to the target currency for a client.
    Floats are read through their shortest repr, so 100.0 converts as 100.0.
    """
    return Decimal(str(amount_usd)) * resolve_rate(target, client)


def format_amount(amount: Decimal, currency: Currency | str) -> str:
    """
    Format an already-converted amount for display.

    USD and THB show two decimals ("$1,234.56", "THB 1,234.56");
    MMK shows whole units ("K 1,235").
    """
    spec = get_spec(currency)
    quantum = Decimal(1).scaleb(-spec.decimals)
    rounded = Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    digits = f"{abs(rounded):,.{spec.decimals}f}"
    sign = "-" if rounded < 0 else ""

    if spec.sign_after_prefix:
        return f"{spec.prefix}{sign}{digits}"
    return f"{sign}{spec.prefix}{digits}"


def convert_and_format(amount_usd: Decimal, target: Currency | str, client: Client) -> str:
    """Convert a USD amount for a client and format it."""
    return format_amount(convert(amount_usd, target, client), target)
