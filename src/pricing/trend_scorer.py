# src/pricing/trend_scorer.py

"""Price movement against a historical reference.

The colour convention is inverted from a stock ticker: a rising
price is bad news for the shopper, a falling one is good news.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from src.config.settings import Settings
from src.models.price_history import PriceHistoryEntry


class TrendDirection(Enum):
    """Direction of today's minimum price versus the reference."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class TrendStats:
    """Today's minimum and how far it moved from the reference."""

    min_price: float = 0.0
    spread_percent: str = "0.0"
    direction: TrendDirection = TrendDirection.FLAT

    @property
    def is_up(self) -> bool:
        return self.direction is TrendDirection.UP

    @property
    def is_down(self) -> bool:
        return self.direction is TrendDirection.DOWN


@dataclass(frozen=True)
class HistoryWindow:
    """History points inside a look-back window and their net change."""

    points: list[PriceHistoryEntry] = field(
        default_factory=lambda: list[PriceHistoryEntry]()
    )
    change_percent: float = 0.0

    @property
    def is_rising(self) -> bool:
        return self.change_percent > 0


def score_trend(
    todays_prices: Iterable[float | None],
    reference_price: float,
    dead_zone: float = Settings.TREND_DEAD_ZONE_PERCENT,
) -> TrendStats:
    """Classify today's minimum price against *reference_price*.

    A reference of 0 means there is no history; the trend is then
    flat with a ``"0.0"`` spread.  Moves within ``dead_zone`` percent
    either way are flat as well.
    """
    available = [float(p) for p in todays_prices if p is not None and p > 0]
    if not available:
        return TrendStats()

    min_price = min(available)
    if reference_price <= 0:
        return TrendStats(min_price=min_price)

    diff = (min_price - reference_price) / reference_price * 100
    if diff > dead_zone:
        direction = TrendDirection.UP
    elif diff < -dead_zone:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.FLAT

    return TrendStats(
        min_price=min_price,
        spread_percent=f"{abs(diff):.1f}",
        direction=direction,
    )


def entries_since(
    history: Iterable[PriceHistoryEntry],
    days: int,
    today: date | None = None,
) -> list[PriceHistoryEntry]:
    """Entries dated within the last *days* days, oldest first."""
    limit = (today or date.today()) - timedelta(days=days)
    return sorted(
        (h for h in history if h.date >= limit),
        key=lambda h: h.date,
    )


def history_window(
    history: Sequence[PriceHistoryEntry],
    days: int,
    today: date | None = None,
) -> HistoryWindow:
    """Net change between the first and last point of the last *days*.

    Fewer than two points, or a zero starting price, give no change.
    """
    points = entries_since(history, days, today)
    if len(points) < 2 or points[0].min_price <= 0:
        return HistoryWindow(points=points)

    first = points[0].min_price
    last = points[-1].min_price
    return HistoryWindow(
        points=points,
        change_percent=(last - first) / first * 100,
    )
