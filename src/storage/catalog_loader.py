# src/storage/catalog_loader.py

"""Load product, history and cart records from JSON exports.

Product rows use the column layout of the ``productos`` table:
``p_<store>`` (current price), ``pr_<store>`` (regular price),
``url_<store>``, plus ``oferta_gondola`` holding the per-store
promotion labels.  History rows come from ``historial_precios``.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, cast

from src.models.price_history import PriceHistoryEntry
from src.models.product import (
    Product,
    StorePrice,
    parse_promotion_blob,
)
from src.models.retailer import RETAILER_ORDER, Retailer

logger = logging.getLogger("chango.storage")


def _to_price(value: object) -> float | None:
    """Coerce a raw price cell to a float, ``None`` when unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(cast(Any, value))
    except (TypeError, ValueError):
        logger.debug("Unparseable price cell %r", value)
        return None


def product_from_row(row: dict[str, Any]) -> Product:
    """Build a :class:`Product` from one ``productos`` row.

    Raises ``KeyError``/``ValueError`` when ``id`` or ``nombre`` is
    missing or malformed.
    """
    prices: dict[Retailer, StorePrice] = {}
    for retailer in RETAILER_ORDER:
        key = retailer.value
        store_price = StorePrice(
            price=_to_price(row.get(f"p_{key}")),
            regular_price=_to_price(row.get(f"pr_{key}")),
            url=str(row.get(f"url_{key}") or ""),
        )
        if store_price != StorePrice():
            prices[retailer] = store_price

    return Product(
        id=int(row["id"]),
        name=str(row["nombre"]),
        ticker=str(row.get("ticker") or ""),
        category=str(row.get("categoria") or ""),
        prices=prices,
        promotions=parse_promotion_blob(row.get("oferta_gondola")),
    )


def history_entry_from_row(row: dict[str, Any]) -> PriceHistoryEntry:
    """Build a :class:`PriceHistoryEntry` from one history row."""
    return PriceHistoryEntry(
        product_name=str(row["nombre_producto"]),
        date=date.fromisoformat(str(row["fecha"])[:10]),
        min_price=float(row["precio_minimo"]),
        store=str(row.get("supermercado") or ""),
    )


def _read_json(filepath: Path) -> object:
    """Read a JSON file, returning ``None`` on IO or decode errors."""
    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s: %s", filepath, exc)
        return None


def _read_rows(filepath: Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects, skipping non-object entries."""
    data = _read_json(filepath)
    if not isinstance(data, list):
        if data is not None:
            logger.warning("%s does not hold a JSON array", filepath)
        return []
    items = cast(list[object], data)
    return [cast(dict[str, Any], e) for e in items if isinstance(e, dict)]


def load_products(filepath: Path) -> list[Product]:
    """Load every well-formed product row from *filepath*."""
    products: list[Product] = []
    for row in _read_rows(filepath):
        try:
            products.append(product_from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed product row: %s", exc)
    logger.info("Loaded %d products from %s", len(products), filepath)
    return products


def load_history(filepath: Path) -> list[PriceHistoryEntry]:
    """Load every well-formed history row, ordered by date."""
    entries: list[PriceHistoryEntry] = []
    for row in _read_rows(filepath):
        try:
            entries.append(history_entry_from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed history row: %s", exc)
    entries.sort(key=lambda e: e.date)
    logger.info(
        "Loaded %d history entries from %s", len(entries), filepath,
    )
    return entries


def load_quantities(filepath: Path) -> dict[int, int]:
    """Load a ``{product_id: quantity}`` cart mapping."""
    data = _read_json(filepath)
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("%s does not hold a JSON object", filepath)
        return {}

    quantities: dict[int, int] = {}
    for key, value in cast(dict[str, Any], data).items():
        try:
            quantities[int(key)] = int(value)
        except (TypeError, ValueError):
            logger.warning(
                "Skipping cart entry %r=%r in %s", key, value, filepath,
            )
    return quantities
