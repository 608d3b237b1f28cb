# src/config/settings.py

"""Central configuration for the chango pricing engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_path(name: str, default: Path) -> Path:
    """Return a path from the environment, or *default* when unset."""
    raw = os.getenv(name)
    return Path(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    """Return a positive int from the environment, or *default*."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class Settings:
    """Central configuration for the chango pricing engine."""

    # --- Trend scoring ---
    TREND_DEAD_ZONE_PERCENT: float = 0.1    # |diff| at or below is flat
    REFERENCE_HISTORY_DAYS: int = _env_int("CHANGO_REFERENCE_DAYS", 7)
    DETAIL_HISTORY_DAYS: int = 365          # Window loaded for detail view
    CHART_WINDOWS: list[int] = [7, 30, 90, 365]

    # --- Catalogue tabs ---
    MEAT_KEYWORDS: list[str] = ["carne"]
    PRODUCE_KEYWORDS: list[str] = ["verdu", "fruta"]
    # "varios" leaves fruit in; only meat and vegetables are excluded
    MISC_EXCLUDE_KEYWORDS: list[str] = ["carne", "verdu"]
    CATALOG_TABS: list[str] = ["home", "carnes", "verdu", "varios", "favs"]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = _env_path("CHANGO_DATA_DIR", BASE_DIR / "data")
    LOGS_DIR: Path = BASE_DIR / "logs"
    PRICE_DB_PATH: Path = DATA_DIR / "price_history.db"

    # --- Stores (fixed order doubles as the cheapest-store tie-break) ---
    AVAILABLE_STORES: list[dict[str, str]] = [
        {"id": "coto", "label": "COTO"},
        {"id": "carrefour", "label": "CARREFOUR"},
        {"id": "dia", "label": "DIA"},
        {"id": "jumbo", "label": "JUMBO"},
        {"id": "masonline", "label": "MAS ONLINE"},
    ]
