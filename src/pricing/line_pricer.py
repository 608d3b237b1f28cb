# src/pricing/line_pricer.py

"""Cost of a single cart line at one store."""

from src.pricing.promotion_parser import PromotionRule


def _positive(value: float | None) -> float:
    """Clamp a missing or non-positive price to 0.0."""
    if value is None or value <= 0:
        return 0.0
    return float(value)


def price_line(
    quantity: int,
    regular_price: float | None,
    promo_price: float | None,
    rule: PromotionRule,
) -> float:
    """Return what *quantity* units cost under *rule*.

    Units are grouped by the rule threshold: every complete group is
    charged at *promo_price*, the leftover units at *regular_price*.
    The kind of promotion does not matter here because *promo_price*
    is already the effective per-unit rate.

    A missing price contributes 0; the caller decides whether that
    means "not sold here".  The result is never negative.
    """
    qty = max(int(quantity), 0)
    regular = _positive(regular_price)

    if promo_price is None or promo_price <= 0:
        return qty * regular

    threshold = rule.threshold
    if not rule.is_active or qty < threshold:
        return qty * regular

    units_in_promo = (qty // threshold) * threshold
    remainder = qty % threshold
    return units_in_promo * float(promo_price) + remainder * regular
