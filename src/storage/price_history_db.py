# src/storage/price_history_db.py

"""SQLite-backed store of daily minimum prices per product."""

import logging
import sqlite3
from datetime import date, timedelta
from pathlib import Path

from src.config.settings import Settings
from src.models.price_history import PriceHistoryEntry
from src.storage.catalog_loader import load_history

logger = logging.getLogger("chango.price_history")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS price_history (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    product_name TEXT    NOT NULL,
    day          TEXT    NOT NULL,
    min_price    REAL    NOT NULL,
    store        TEXT    NOT NULL DEFAULT '',
    UNIQUE (product_name, day)
);

CREATE INDEX IF NOT EXISTS idx_history_day
    ON price_history(day);
"""

_SELECT = (
    "SELECT product_name, day, min_price, store FROM price_history "
)


def _row_to_entry(row: tuple[str, str, float, str]) -> PriceHistoryEntry:
    return PriceHistoryEntry(
        product_name=row[0],
        date=date.fromisoformat(row[1]),
        min_price=row[2],
        store=row[3],
    )


class PriceHistoryDB:
    """Daily minimum-price history keyed by product name and day."""

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.PRICE_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.debug("PriceHistoryDB opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Recording ────────────────────────────────────────

    def record_entries(
        self, entries: list[PriceHistoryEntry],
    ) -> int:
        """Upsert entries; one row per product and day.

        Entries with a non-positive price are skipped.  Returns the
        number of rows written.
        """
        count = 0
        cur = self._conn.cursor()
        for e in entries:
            if e.min_price <= 0 or not e.product_name:
                continue
            cur.execute(
                "INSERT INTO price_history "
                "(product_name, day, min_price, store) "
                "VALUES (?, ?, ?, ?) "
                "ON CONFLICT(product_name, day) DO UPDATE SET "
                "min_price=excluded.min_price, store=excluded.store",
                (e.product_name, e.date.isoformat(), e.min_price, e.store),
            )
            count += 1
        self._conn.commit()
        if count:
            logger.info("Recorded %d history entries", count)
        return count

    def import_json(self, filepath: Path) -> int:
        """Import a ``historial_precios`` JSON export."""
        return self.record_entries(load_history(filepath))

    # ── Querying ─────────────────────────────────────────

    def get_entries_since(
        self, days: int, today: date | None = None,
    ) -> list[PriceHistoryEntry]:
        """Return every entry from the last *days* days, oldest first."""
        since = (today or date.today()) - timedelta(days=days)
        rows = self._conn.execute(
            _SELECT + "WHERE day >= ? ORDER BY day ASC, id ASC",
            (since.isoformat(),),
        ).fetchall()
        return [_row_to_entry(r) for r in rows]

    def get_product_history(
        self,
        product_name: str,
        days: int | None = None,
        today: date | None = None,
    ) -> list[PriceHistoryEntry]:
        """Return a product's history, oldest first.

        When *days* is given only the last *days* days are returned.
        """
        if days is None:
            rows = self._conn.execute(
                _SELECT + "WHERE product_name = ? ORDER BY day ASC",
                (product_name,),
            ).fetchall()
        else:
            since = (today or date.today()) - timedelta(days=days)
            rows = self._conn.execute(
                _SELECT + "WHERE product_name = ? AND day >= ? "
                "ORDER BY day ASC",
                (product_name, since.isoformat()),
            ).fetchall()
        return [_row_to_entry(r) for r in rows]

    def count(self) -> int:
        """Total number of stored entries."""
        row = self._conn.execute(
            "SELECT COUNT(*) FROM price_history",
        ).fetchone()
        return int(row[0]) if row else 0
