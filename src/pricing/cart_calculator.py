# src/pricing/cart_calculator.py

"""Whole-cart totals per store and store ranking."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from src.models.product import CartItem
from src.models.retailer import RETAILER_ORDER, Retailer
from src.pricing.line_pricer import price_line
from src.pricing.promotion_parser import parse_promotion

logger = logging.getLogger("chango.pricing")


@dataclass(frozen=True)
class RetailerTotal:
    """What a cart costs at one store."""

    retailer: Retailer
    total: float
    priced_items: int = 0
    unavailable: tuple[str, ...] = field(
        default_factory=lambda: tuple[str, ...]()
    )

    @property
    def is_complete(self) -> bool:
        """True when every cart item is sold at this store."""
        return not self.unavailable


def calculate_store_total(
    items: Iterable[CartItem],
    retailer: Retailer,
) -> RetailerTotal:
    """Sum the promotion-aware cost of every cart item at *retailer*.

    Items without a positive regular price at the store add nothing
    and are listed in ``unavailable``.  Zero-quantity items are
    ignored.
    """
    total = 0.0
    priced = 0
    unavailable: list[str] = []

    for item in items:
        if item.quantity <= 0:
            continue
        store_price = item.product.price_at(retailer)
        if not store_price.has_regular_price:
            unavailable.append(item.product.name)
            continue
        rule = parse_promotion(item.product.promotion_label(retailer))
        total += price_line(
            item.quantity,
            store_price.regular_price,
            store_price.price,
            rule,
        )
        priced += 1

    return RetailerTotal(
        retailer=retailer,
        total=total,
        priced_items=priced,
        unavailable=tuple(unavailable),
    )


def rank_stores(
    items: Iterable[CartItem],
    retailers: Sequence[Retailer] = RETAILER_ORDER,
) -> list[RetailerTotal]:
    """Evaluate the cart at every store, cheapest first.

    Stores that sell none of the items go last.  Equal totals keep
    the order of *retailers*.
    """
    cart = list(items)
    totals = [calculate_store_total(cart, r) for r in retailers]
    ranked = sorted(
        totals, key=lambda t: (t.priced_items == 0, t.total),
    )
    if ranked:
        logger.debug(
            "Ranked %d stores for %d cart items, cheapest %s",
            len(ranked),
            len(cart),
            ranked[0].retailer.label,
        )
    return ranked


def cheapest_store(
    items: Iterable[CartItem],
    retailers: Sequence[Retailer] = RETAILER_ORDER,
) -> RetailerTotal | None:
    """Return the cheapest store, preferring ones that sell every item.

    A store missing some items only wins when no store carries the
    whole cart; stores selling none of the items never win.
    """
    ranked = [r for r in rank_stores(items, retailers) if r.priced_items > 0]
    for result in ranked:
        if result.is_complete:
            return result
    return ranked[0] if ranked else None
