# src/models/price_history.py

"""Daily minimum-price history model."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PriceHistoryEntry:
    """The cheapest observed price for a product on one day."""

    product_name: str
    date: date
    min_price: float
    store: str = ""
