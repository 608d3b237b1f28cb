# src/services/cart_service.py

"""Cart assembly and quantity editing."""

import logging
from collections.abc import Mapping, Sequence

from src.models.product import CartItem, Product

logger = logging.getLogger("chango.cart")


def build_cart(
    products: Sequence[Product],
    quantities: Mapping[int, int],
) -> list[CartItem]:
    """Pair products with their quantities, dropping zero rows.

    Unknown product ids are logged and skipped.
    """
    by_id = {p.id: p for p in products}
    items: list[CartItem] = []
    for product_id, quantity in quantities.items():
        product = by_id.get(product_id)
        if product is None:
            logger.warning("Cart references unknown product %d", product_id)
            continue
        if quantity > 0:
            items.append(CartItem(product=product, quantity=quantity))
    return items


def update_quantity(
    quantities: Mapping[int, int],
    product_id: int,
    delta: int,
) -> dict[int, int]:
    """Return a copy of *quantities* with *delta* applied to one item.

    A product not yet in the cart counts as quantity 1.  Reaching
    zero or below removes the product.
    """
    updated = dict(quantities)
    new_qty = (updated.get(product_id) or 1) + delta
    if new_qty <= 0:
        updated.pop(product_id, None)
    else:
        updated[product_id] = new_qty
    return updated
