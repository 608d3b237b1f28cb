# src/cli/runner.py

"""Headless CLI commands over the pricing engine."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.price_history import PriceHistoryEntry
from src.models.retailer import RETAILER_ORDER, Retailer
from src.pricing.cart_calculator import RetailerTotal, rank_stores
from src.pricing.trend_scorer import TrendDirection, history_window
from src.services.cart_service import build_cart
from src.services.catalog_service import CatalogService, ProductStats
from src.storage.catalog_loader import (
    load_history,
    load_products,
    load_quantities,
)
from src.storage.price_history_db import PriceHistoryDB

logger = logging.getLogger("chango.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_TREND_MARKERS: dict[TrendDirection, str] = {
    TrendDirection.UP: "[red]▲[/red]",
    TrendDirection.DOWN: "[green]▼[/green]",
    TrendDirection.FLAT: "[dim]-[/dim]",
}


def resolve_stores(store_csv: str | None) -> list[Retailer]:
    """Map a comma-separated list of store ids to retailers.

    Returns every store when *store_csv* is ``None``.
    Raises ``SystemExit`` on unknown ids.
    """
    if store_csv is None:
        return list(RETAILER_ORDER)

    requested = [s.strip() for s in store_csv.split(",") if s.strip()]
    unknown = [r for r in requested if Retailer.from_id(r) is None]
    if unknown:
        valid = ", ".join(s["id"] for s in Settings.AVAILABLE_STORES)
        _err.print(f"[red]Unknown store(s): {', '.join(unknown)}[/red]")
        _err.print(f"[dim]Available: {valid}[/dim]")
        raise SystemExit(1)

    resolved = [Retailer.from_id(r) for r in requested]
    return [r for r in RETAILER_ORDER if r in resolved]


def _format_money(value: float) -> str:
    return f"$ {value:,.2f}"


def _stats_to_dicts(stats: list[ProductStats]) -> list[dict[str, object]]:
    """Serialise annotated products to plain dicts for JSON output."""
    return [
        {
            "id": s.product.id,
            "name": s.product.name,
            "ticker": s.product.display_ticker,
            "minPrice": s.comparison.min_price,
            "minStore": s.comparison.min_store,
            "avgPrice": round(s.comparison.avg_price, 2),
            "trendDirection": s.trend.direction.value,
            "spreadPercent": s.trend.spread_percent,
        }
        for s in stats
    ]


def _totals_to_dicts(totals: list[RetailerTotal]) -> list[dict[str, object]]:
    return [
        {
            "store": t.retailer.label,
            "total": round(t.total, 2),
            "pricedItems": t.priced_items,
            "unavailable": list(t.unavailable),
        }
        for t in totals
    ]


def _emit_json(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _print_stats_table(stats: list[ProductStats]) -> None:
    """Render a Rich table of annotated products to stdout."""
    table = Table(
        title="Precios de hoy", show_lines=True, title_style="bold cyan",
    )
    table.add_column("Ticker", style="bold")
    table.add_column("Producto", max_width=40)
    table.add_column("Mejor precio", justify="right", style="green")
    table.add_column("Super", style="magenta")
    table.add_column("Promedio", justify="right")
    table.add_column("Tendencia", justify="right")

    for s in stats:
        best = (
            _format_money(s.comparison.min_price)
            if s.comparison.min_price > 0
            else "N/A"
        )
        table.add_row(
            s.product.display_ticker,
            s.product.name,
            best,
            s.comparison.min_store or "—",
            _format_money(round(s.comparison.avg_price)),
            f"{_TREND_MARKERS[s.trend.direction]} {s.trend.spread_percent}%",
        )
    Console().print(table)


def _print_totals_table(totals: list[RetailerTotal], item_count: int) -> None:
    table = Table(
        title="Total del chango por super",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Super", style="magenta")
    table.add_column("Total", justify="right", style="green")
    table.add_column("Items", justify="center")
    table.add_column("Sin stock", style="dim")

    for idx, t in enumerate(totals, 1):
        table.add_row(
            str(idx),
            t.retailer.label,
            _format_money(t.total) if t.priced_items else "N/A",
            f"{t.priced_items}/{item_count}",
            ", ".join(t.unavailable) or "—",
        )
    Console().print(table)


def _reference_history(
    history_file: str | None,
) -> list[PriceHistoryEntry]:
    """History used for reference prices: a JSON export or the DB."""
    if history_file is not None:
        return load_history(Path(history_file))
    db = PriceHistoryDB()
    try:
        return db.get_entries_since(Settings.REFERENCE_HISTORY_DAYS)
    finally:
        db.close()


def run_compare(
    products_file: str,
    history_file: str | None = None,
    tab: str = "home",
    search: str = "",
    trend: str | None = None,
    output_format: str = "json",
) -> int:
    """Print today's comparison and trend for the catalogue."""
    products = load_products(Path(products_file))
    if not products:
        _err.print("[yellow]No products loaded.[/yellow]")
        return 1

    service = CatalogService(products, _reference_history(history_file))
    stats = service.filter(
        tab=tab,
        search=search,
        trend=TrendDirection(trend) if trend else None,
    )
    _err.print(f"[green]✓ {len(stats)} of {len(products)} products[/green]")

    if output_format == "table":
        _print_stats_table(stats)
    else:
        _emit_json(_stats_to_dicts(stats))
    return 0


def run_cart(
    products_file: str,
    cart_file: str,
    store_csv: str | None = None,
    output_format: str = "json",
) -> int:
    """Print the cart total at each store, cheapest first."""
    stores = resolve_stores(store_csv)
    products = load_products(Path(products_file))
    items = build_cart(products, load_quantities(Path(cart_file)))
    if not items:
        _err.print("[yellow]The cart is empty.[/yellow]")
        return 1

    totals = rank_stores(items, stores)
    logger.info(
        "Cart of %d items evaluated at %d stores", len(items), len(totals),
    )

    if output_format == "table":
        _print_totals_table(totals, len(items))
    else:
        _emit_json(_totals_to_dicts(totals))
    return 0


def run_import_history(history_file: str) -> int:
    """Import a price history JSON export into the SQLite store."""
    path = Path(history_file)
    if not path.exists():
        _err.print(f"[red]File not found: {path}[/red]")
        return 1

    db = PriceHistoryDB()
    try:
        count = db.import_json(path)
    finally:
        db.close()
    _err.print(f"[green]✓ Imported {count:,} history entries[/green]")
    return 0


def run_history(product_name: str, days: int = 30) -> int:
    """Show a product's minimum-price history and its net change."""
    db = PriceHistoryDB()
    try:
        entries = db.get_product_history(
            product_name, days=Settings.DETAIL_HISTORY_DAYS,
        )
    finally:
        db.close()

    window = history_window(entries, days)
    if not window.points:
        _err.print("[yellow]Sin datos suficientes.[/yellow]")
        return 1

    table = Table(
        title=f"{product_name} — últimos {days} días",
        title_style="bold cyan",
    )
    table.add_column("Fecha")
    table.add_column("Mínimo", justify="right", style="green")
    table.add_column("Super", style="magenta")
    for entry in window.points:
        table.add_row(
            entry.date.isoformat(),
            _format_money(entry.min_price),
            entry.store or "—",
        )
    Console().print(table)

    colour = "red" if window.is_rising else "green"
    _err.print(
        f"[{colour}]Variación: {window.change_percent:+.1f}%[/{colour}]"
    )
    return 0
