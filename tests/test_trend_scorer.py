# tests/test_trend_scorer.py

"""Tests for trend scoring and history windows."""

import unittest
from datetime import date, timedelta

from src.models.price_history import PriceHistoryEntry
from src.pricing.trend_scorer import (
    TrendDirection,
    TrendStats,
    entries_since,
    history_window,
    score_trend,
)

_TODAY = date(2026, 3, 15)


def _entry(days_ago: int, price: float) -> PriceHistoryEntry:
    return PriceHistoryEntry(
        product_name="Asado",
        date=_TODAY - timedelta(days=days_ago),
        min_price=price,
        store="DIA",
    )


class TestScoreTrend(unittest.TestCase):
    """score_trend behaviour."""

    def test_price_fell(self) -> None:
        """230 against a 250 reference is 8% down."""
        stats = score_trend([0, 250, 230, 0, 260], 250)
        self.assertEqual(stats.min_price, 230)
        self.assertEqual(stats.spread_percent, "8.0")
        self.assertEqual(stats.direction, TrendDirection.DOWN)
        self.assertTrue(stats.is_down)
        self.assertFalse(stats.is_up)

    def test_price_rose(self) -> None:
        """275 against 250 is 10% up."""
        stats = score_trend([275.0], 250.0)
        self.assertEqual(stats.spread_percent, "10.0")
        self.assertTrue(stats.is_up)

    def test_no_history_is_flat(self) -> None:
        """A zero reference reports flat with no spread."""
        stats = score_trend([300.0, 230.0], 0)
        self.assertEqual(stats.min_price, 230.0)
        self.assertEqual(stats.spread_percent, "0.0")
        self.assertEqual(stats.direction, TrendDirection.FLAT)

    def test_small_moves_are_flat(self) -> None:
        """A move inside the dead zone is flat."""
        stats = score_trend([250.2], 250.0)
        self.assertEqual(stats.direction, TrendDirection.FLAT)
        self.assertEqual(stats.spread_percent, "0.1")

    def test_unchanged_price(self) -> None:
        """Same price as the reference is flat with zero spread."""
        stats = score_trend([250.0], 250.0)
        self.assertEqual(stats.direction, TrendDirection.FLAT)
        self.assertEqual(stats.spread_percent, "0.0")

    def test_no_prices_today(self) -> None:
        """Nothing available today gives the empty stats."""
        self.assertEqual(score_trend([0, None, 0], 250.0), TrendStats())

    def test_custom_dead_zone(self) -> None:
        """A wider dead zone absorbs larger moves."""
        stats = score_trend([255.0], 250.0, dead_zone=5.0)
        self.assertEqual(stats.direction, TrendDirection.FLAT)


class TestHistoryWindow(unittest.TestCase):
    """history_window behaviour."""

    def test_window_limits_points(self) -> None:
        """Only entries within the window are considered."""
        history = [_entry(10, 100.0), _entry(5, 110.0), _entry(1, 121.0)]
        window = history_window(history, 7, today=_TODAY)
        self.assertEqual(len(window.points), 2)
        self.assertAlmostEqual(window.change_percent, 10.0)
        self.assertTrue(window.is_rising)

    def test_wider_window(self) -> None:
        """A 30-day window spans all three entries."""
        history = [_entry(10, 100.0), _entry(5, 110.0), _entry(1, 120.0)]
        window = history_window(history, 30, today=_TODAY)
        self.assertAlmostEqual(window.change_percent, 20.0)

    def test_falling_price(self) -> None:
        """A falling series is not rising."""
        history = [_entry(3, 200.0), _entry(0, 150.0)]
        window = history_window(history, 7, today=_TODAY)
        self.assertAlmostEqual(window.change_percent, -25.0)
        self.assertFalse(window.is_rising)

    def test_single_point(self) -> None:
        """One point is not enough for a change."""
        window = history_window([_entry(2, 100.0)], 7, today=_TODAY)
        self.assertEqual(len(window.points), 1)
        self.assertEqual(window.change_percent, 0.0)
        self.assertFalse(window.is_rising)

    def test_unsorted_input(self) -> None:
        """Points are ordered by date before comparing."""
        history = [_entry(1, 120.0), _entry(6, 100.0)]
        window = history_window(history, 7, today=_TODAY)
        self.assertEqual(window.points[0].min_price, 100.0)
        self.assertAlmostEqual(window.change_percent, 20.0)

    def test_zero_starting_price(self) -> None:
        """A zero first price does not divide by zero."""
        history = [_entry(4, 0.0), _entry(1, 100.0)]
        window = history_window(history, 7, today=_TODAY)
        self.assertEqual(window.change_percent, 0.0)


class TestEntriesSince(unittest.TestCase):
    """entries_since behaviour."""

    def test_drops_entries_before_window(self) -> None:
        """Entries older than the window are left out."""
        history = [_entry(100, 500.0), _entry(7, 250.0), _entry(2, 240.0)]
        points = entries_since(history, 7, today=_TODAY)
        self.assertEqual([p.min_price for p in points], [250.0, 240.0])

    def test_oldest_first(self) -> None:
        history = [_entry(0, 90.0), _entry(3, 80.0)]
        points = entries_since(history, 7, today=_TODAY)
        self.assertEqual(points[0].min_price, 80.0)

    def test_empty_history(self) -> None:
        self.assertEqual(entries_since([], 7, today=_TODAY), [])


if __name__ == "__main__":
    unittest.main()
