"""Display helpers for money and percentages."""

from typing import Any, Optional

CURRENCY_FORMATS = {
    # currency: (symbol, decimal separator, thousands separator)
    "BRL": ("R$ ", ",", "."),
    "USD": ("$", ".", ","),
    "EUR": ("€", ",", "."),
    "GBP": ("£", ".", ","),
}


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def format_currency(amount: Any, currency: Optional[str] = "BRL") -> str:
    """Format ``amount`` with two decimals using the currency's conventions."""
    symbol, decimal_sep, thousands_sep = CURRENCY_FORMATS.get((currency or "").upper(), ("", ".", ","))
    formatted = f"{to_float(amount):,.2f}"
    # Swap separators through a placeholder
    formatted = formatted.replace(",", "\0").replace(".", decimal_sep).replace("\0", thousands_sep)
    return f"{symbol}{formatted}"


def percentage(part: Any, whole: Any, digits: int = 2) -> float:
    whole_value = to_float(whole)
    if whole_value <= 0:
        return 0.0
    return round(to_float(part) / whole_value * 100, digits)
