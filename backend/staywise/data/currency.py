"""Currency symbols and display formatting for nightly rates."""

from decimal import Decimal

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "CAD": "CA$", "GBP": "£", "EUR": "€",
    "JPY": "¥", "AUD": "A$", "CHF": "CHF ", "NZD": "NZ$",
    "MXN": "MX$", "BRL": "R$", "INR": "₹", "AED": "AED ",
    "THB": "฿", "ZAR": "R", "SEK": "kr ", "NOK": "kr ",
    "DKK": "kr ", "PLN": "zł ", "CZK": "Kč ", "TRY": "₺",
}

DEFAULT_CURRENCY = "USD"


def normalize_currency(currency: str | None) -> str:
    """Upper-case a currency code, defaulting to USD when blank."""
    if not currency or not currency.strip():
        return DEFAULT_CURRENCY
    return currency.strip().upper()


def currency_symbol(currency: str | None) -> str:
    code = normalize_currency(currency)
    return CURRENCY_SYMBOLS.get(code, code + " ")


def format_price(amount: float | Decimal, currency: str | None = DEFAULT_CURRENCY) -> str:
    """Format a price with currency symbol for display, e.g. $1,250."""
    return f"{currency_symbol(currency)}{round(float(amount)):,}"
