# src/pricing/comparator.py

"""Cross-store price comparison for a single product."""

from collections.abc import Mapping
from dataclasses import dataclass

from src.models.product import Product
from src.models.retailer import RETAILER_ORDER, Retailer


@dataclass(frozen=True)
class PriceComparison:
    """Cheapest price, the store offering it, and the mean price."""

    min_price: float = 0.0
    min_store: str = ""
    avg_price: float = 0.0


@dataclass(frozen=True)
class StoreQuote:
    """One store's current price for a product."""

    retailer: Retailer
    price: float
    url: str = ""
    is_best: bool = False


def compare_prices(
    prices: Mapping[Retailer, float | None],
) -> PriceComparison:
    """Compare store prices; only strictly positive ones count.

    Ties for the minimum go to the first store in ``RETAILER_ORDER``.
    """
    available: list[tuple[Retailer, float]] = []
    for retailer in RETAILER_ORDER:
        price = prices.get(retailer)
        if price is not None and price > 0:
            available.append((retailer, float(price)))
    if not available:
        return PriceComparison()

    min_price = min(p for _, p in available)
    winner = next(r for r, p in available if p == min_price)
    avg_price = sum(p for _, p in available) / len(available)
    return PriceComparison(
        min_price=min_price,
        min_store=winner.label,
        avg_price=avg_price,
    )


def compare_product(product: Product) -> PriceComparison:
    """Compare the current prices of *product* across stores."""
    return compare_prices(
        {r: product.price_at(r).price for r in RETAILER_ORDER}
    )


def store_quotes(product: Product) -> list[StoreQuote]:
    """List the stores selling *product*, flagging the cheapest."""
    best = compare_product(product).min_price
    quotes: list[StoreQuote] = []
    for retailer in RETAILER_ORDER:
        store_price = product.price_at(retailer)
        if not store_price.is_available:
            continue
        price = float(store_price.price or 0.0)
        quotes.append(StoreQuote(
            retailer=retailer,
            price=price,
            url=store_price.url,
            is_best=price == best,
        ))
    return quotes
