# src/models/product.py

"""Product, per-store price and cart data models."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from src.models.retailer import RETAILER_ORDER, Retailer

logger = logging.getLogger("chango.models")


@dataclass(frozen=True)
class StorePrice:
    """Prices for one product at one retailer.

    ``price`` is the current shelf price (promotional when a promotion
    is running); ``regular_price`` is the non-promotional unit price.
    ``None`` or a value <= 0 means "not sold here".
    """

    price: float | None = None
    regular_price: float | None = None
    url: str = ""

    @property
    def is_available(self) -> bool:
        """True when the store currently lists a positive price."""
        return self.price is not None and self.price > 0

    @property
    def has_regular_price(self) -> bool:
        """True when the store has a positive regular price."""
        return self.regular_price is not None and self.regular_price > 0


@dataclass(frozen=True)
class PromotionBadge:
    """A shelf promotion label such as ``"2x1"`` or ``"2do al 70%"``."""

    label: str
    badge_text: str | None = None


@dataclass(frozen=True)
class Product:
    """A grocery product with its prices across every tracked store."""

    id: int
    name: str
    ticker: str = ""
    category: str = ""
    prices: dict[Retailer, StorePrice] = field(
        default_factory=lambda: dict[Retailer, StorePrice]()
    )
    promotions: dict[Retailer, PromotionBadge] | None = None

    @property
    def display_ticker(self) -> str:
        """The ticker, or the first five letters of the name."""
        return self.ticker or self.name[:5].upper()

    def price_at(self, retailer: Retailer) -> StorePrice:
        """Return the price pair for *retailer* (empty when unlisted)."""
        return self.prices.get(retailer, StorePrice())

    def promotion_label(self, retailer: Retailer) -> str:
        """Return the promotion label at *retailer*, or ``""``."""
        if not self.promotions:
            return ""
        badge = self.promotions.get(retailer)
        return badge.label if badge else ""

    def current_prices(self) -> list[float]:
        """Current prices in retailer order, 0.0 where not sold."""
        return [
            self.price_at(r).price or 0.0 for r in RETAILER_ORDER
        ]


@dataclass(frozen=True)
class CartItem:
    """A product selected for purchase with its quantity."""

    product: Product
    quantity: int


def _badge_from_value(value: Any) -> PromotionBadge | None:
    """Build a badge from one blob entry (plain label or mapping)."""
    if isinstance(value, str):
        label = value.strip()
        return PromotionBadge(label=label) if label else None
    if isinstance(value, dict):
        label = str(value.get("label") or "").strip()
        if not label:
            return None
        badge = value.get("badge_text") or value.get("badge")
        return PromotionBadge(
            label=label,
            badge_text=str(badge) if badge else None,
        )
    return None


def parse_promotion_blob(
    raw: object,
) -> dict[Retailer, PromotionBadge] | None:
    """Parse a per-store promotion blob into typed badges.

    *raw* is either a mapping keyed by store id or its JSON encoding.
    Returns ``None`` when the blob is absent or cannot be decoded;
    entries for unknown stores or with empty labels are dropped.
    """
    if raw is None or raw == "":
        return None

    data: object = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Undecodable promotion blob: %.60s", raw)
            return None

    if not isinstance(data, dict):
        logger.warning(
            "Promotion blob is %s, expected an object",
            type(data).__name__,
        )
        return None

    badges: dict[Retailer, PromotionBadge] = {}
    for key, value in data.items():
        retailer = Retailer.from_id(str(key))
        if retailer is None:
            logger.debug("Ignoring promotion for unknown store %r", key)
            continue
        badge = _badge_from_value(value)
        if badge is not None:
            badges[retailer] = badge
    return badges
