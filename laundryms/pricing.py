from __future__ import annotations

from typing import Dict, Union

Number = Union[int, float]

# Per-unit rates in PHP.
SERVICE_PRICES: Dict[str, int] = {
    "Wash & Fold": 50,
    "Ironing & Pressing": 30,
    "Dry Cleaning": 150,
}

SERVICE_UNITS: Dict[str, str] = {
    "Wash & Fold": "kg",
    "Ironing & Pressing": "piece",
    "Dry Cleaning": "piece",
}

SERVICES = list(SERVICE_PRICES)


def price_of(service_type: str) -> int:
    return SERVICE_PRICES.get(service_type, 0)


def calculate_total(service_type: str, quantity: Number) -> Number:
    """Order total for ``quantity`` units of ``service_type``.

    Returns 0 when either value is still empty (the form is half filled) or
    when the service is not one we offer.
    """
    if not service_type or not quantity:
        return 0
    if quantity < 0:
        raise ValueError(f"quantity must be non-negative, got {quantity}")
    return quantity * price_of(service_type)


def format_money(amount: Number, currency: str = "₱") -> str:
    if float(amount).is_integer():
        return f"{currency}{int(amount):,}"
    return f"{currency}{amount:,.2f}"
