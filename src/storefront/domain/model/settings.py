"""Store settings: display currency and exchange rates.

All prices are kept and computed in USD.  The selected display currency
only changes how amounts are shown to the customer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import CENT, Money

DEFAULT_STORE_NAME = "My Ecommerce Store"

DEFAULT_EXCHANGE_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("0.85"),
    "GBP": Decimal("0.73"),
    "JPY": Decimal("110.0"),
    "CAD": Decimal("1.25"),
    "AUD": Decimal("1.35"),
    "CHF": Decimal("0.92"),
    "CNY": Decimal("6.45"),
    "INR": Decimal("74.5"),
    "PKR": Decimal("278.0"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF ",
    "CNY": "¥",
    "INR": "₹",
    "PKR": "Rs ",
}


@dataclass
class StoreSettings:

    store_name: str = DEFAULT_STORE_NAME
    currency_code: str = "USD"
    exchange_rates: dict[str, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES)
    )

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency_code, "$")

    @property
    def rate(self) -> Decimal:
        return self.exchange_rates.get(self.currency_code, Decimal("1.0"))

    def set_currency(self, code: str) -> None:
        code = code.strip().upper()
        if code not in self.exchange_rates:
            raise ValidationError(f"Unsupported currency '{code}'")
        self.currency_code = code

    def set_rate(self, code: str, rate: Decimal) -> None:
        if rate <= 0:
            raise ValidationError("Exchange rate must be greater than zero")
        self.exchange_rates[code.strip().upper()] = rate

    def convert_price(self, usd: Money) -> Decimal:
        return (usd.amount * self.rate).quantize(CENT, rounding=ROUND_HALF_UP)

    def format(self, usd: Money) -> str:
        return f"{self.currency_symbol}{self.convert_price(usd):.2f}"
