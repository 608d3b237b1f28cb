# src/services/catalog_service.py

"""Annotates and filters the product catalogue for display."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from src.config.settings import Settings
from src.models.price_history import PriceHistoryEntry
from src.models.product import Product
from src.pricing.comparator import PriceComparison, compare_product
from src.pricing.trend_scorer import (
    TrendDirection,
    TrendStats,
    entries_since,
    score_trend,
)

logger = logging.getLogger("chango.catalog")


@dataclass(frozen=True)
class ProductStats:
    """A product with its cross-store comparison and trend."""

    product: Product
    comparison: PriceComparison
    trend: TrendStats
    reference_price: float = 0.0


def _matches_any(category: str, keywords: list[str]) -> bool:
    lowered = category.lower()
    return any(kw in lowered for kw in keywords)


class CatalogService:
    """Joins products with their price history and filters the result."""

    def __init__(
        self,
        products: Sequence[Product],
        history: Sequence[PriceHistoryEntry] = (),
        reference_days: int | None = None,
        today: date | None = None,
    ) -> None:
        """Index reference prices from *history*.

        Only entries from the last *reference_days* days (default
        ``Settings.REFERENCE_HISTORY_DAYS``) count; within that window
        the earliest entry per product name is the reference.
        """
        self._products = list(products)
        days = reference_days or Settings.REFERENCE_HISTORY_DAYS
        self._references: dict[str, float] = {}
        for entry in entries_since(history, days, today):
            self._references.setdefault(entry.product_name, entry.min_price)
        logger.debug(
            "CatalogService: %d products, %d reference prices",
            len(self._products),
            len(self._references),
        )

    def reference_price(self, product_name: str) -> float:
        """Reference minimum price for *product_name*, 0 without history."""
        return self._references.get(product_name, 0.0)

    def annotate(self, product: Product) -> ProductStats:
        """Compute the comparison and trend for a single product."""
        reference = self.reference_price(product.name)
        return ProductStats(
            product=product,
            comparison=compare_product(product),
            trend=score_trend(product.current_prices(), reference),
            reference_price=reference,
        )

    def annotate_all(self) -> list[ProductStats]:
        """Annotate every product, keeping catalogue order."""
        return [self.annotate(p) for p in self._products]

    def filter(
        self,
        tab: str = "home",
        search: str = "",
        trend: TrendDirection | None = None,
        favorites: Mapping[int, int] | None = None,
    ) -> list[ProductStats]:
        """Annotate and filter the catalogue like the browse screen.

        ``tab`` narrows by category (``carnes``, ``verdu``, ``varios``)
        or to the cart (``favs``).  ``search`` matches the name or the
        ticker.  ``trend`` keeps only rising or falling products and is
        ignored on the ``favs`` tab.
        """
        result = self.annotate_all()

        if tab == "carnes":
            result = [
                s for s in result
                if _matches_any(s.product.category, Settings.MEAT_KEYWORDS)
            ]
        elif tab == "verdu":
            result = [
                s for s in result
                if _matches_any(
                    s.product.category, Settings.PRODUCE_KEYWORDS,
                )
            ]
        elif tab == "varios":
            result = [
                s for s in result
                if not _matches_any(
                    s.product.category, Settings.MISC_EXCLUDE_KEYWORDS,
                )
            ]
        elif tab == "favs":
            chosen = favorites or {}
            result = [s for s in result if chosen.get(s.product.id)]

        if search:
            term = search.lower()
            result = [
                s for s in result
                if term in s.product.name.lower()
                or (s.product.ticker and term in s.product.ticker.lower())
            ]

        if trend is not None and tab != "favs":
            if trend is TrendDirection.UP:
                result = [s for s in result if s.trend.is_up]
            elif trend is TrendDirection.DOWN:
                result = [s for s in result if s.trend.is_down]

        logger.debug(
            "Filter tab=%s search=%r trend=%s -> %d products",
            tab,
            search,
            trend.value if trend else None,
            len(result),
        )
        return result
