# src/models/retailer.py

"""The fixed set of supermarkets whose prices are tracked."""

from enum import Enum

from src.config.settings import Settings


class Retailer(Enum):
    """A tracked supermarket, valued by its record key."""

    COTO = "coto"
    CARREFOUR = "carrefour"
    DIA = "dia"
    JUMBO = "jumbo"
    MASONLINE = "masonline"

    @property
    def label(self) -> str:
        """Display name, e.g. ``"MAS ONLINE"``."""
        return _LABELS[self.value]

    @classmethod
    def from_id(cls, store_id: str) -> "Retailer | None":
        """Look up a retailer by its record key, case-insensitively."""
        try:
            return cls(store_id.strip().lower())
        except ValueError:
            return None


_LABELS: dict[str, str] = {
    s["id"]: s["label"] for s in Settings.AVAILABLE_STORES
}

# Enumeration order used for every per-store iteration.  The first
# retailer in this list wins ties for "cheapest".
RETAILER_ORDER: tuple[Retailer, ...] = (
    Retailer.COTO,
    Retailer.CARREFOUR,
    Retailer.DIA,
    Retailer.JUMBO,
    Retailer.MASONLINE,
)
