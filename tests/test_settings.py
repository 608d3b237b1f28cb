# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.settings import Settings, _env_int


class TestSettings(unittest.TestCase):
    """Verify Settings constants and the store registry."""

    def test_dead_zone_positive(self) -> None:
        """The trend dead zone is a small positive percentage."""
        self.assertIsInstance(Settings.TREND_DEAD_ZONE_PERCENT, float)
        self.assertGreater(Settings.TREND_DEAD_ZONE_PERCENT, 0)

    def test_reference_days_positive(self) -> None:
        """REFERENCE_HISTORY_DAYS must be >= 1."""
        self.assertGreaterEqual(Settings.REFERENCE_HISTORY_DAYS, 1)

    def test_chart_windows_within_detail_range(self) -> None:
        """Every chart window fits in the loaded detail history."""
        for days in Settings.CHART_WINDOWS:
            self.assertLessEqual(days, Settings.DETAIL_HISTORY_DAYS)

    def test_available_stores_has_five(self) -> None:
        """Registry contains exactly 5 stores."""
        self.assertEqual(len(Settings.AVAILABLE_STORES), 5)

    def test_each_store_has_required_keys(self) -> None:
        """Every store must have id and label keys."""
        for store in Settings.AVAILABLE_STORES:
            with self.subTest(store=store.get("id", "?")):
                self.assertIn("id", store)
                self.assertIn("label", store)

    def test_store_ids_are_unique(self) -> None:
        """No duplicate store ids."""
        ids = [s["id"] for s in Settings.AVAILABLE_STORES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_catalog_tabs(self) -> None:
        """The browse tabs include home and the cart."""
        self.assertIn("home", Settings.CATALOG_TABS)
        self.assertIn("favs", Settings.CATALOG_TABS)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)
        self.assertIsInstance(Settings.PRICE_DB_PATH, Path)

    def test_misc_tab_excludes_meat_and_vegetables(self) -> None:
        """The varios exclusions cover meat and vegetables, not fruit."""
        self.assertIn("carne", Settings.MISC_EXCLUDE_KEYWORDS)
        self.assertIn("verdu", Settings.MISC_EXCLUDE_KEYWORDS)
        self.assertNotIn("fruta", Settings.MISC_EXCLUDE_KEYWORDS)


class TestEnvInt(unittest.TestCase):
    """_env_int parsing of integer environment overrides."""

    def test_unset_uses_default(self) -> None:
        """A missing variable gives the default."""
        with patch.dict("os.environ", {}, clear=True):
            self.assertEqual(_env_int("CHANGO_REFERENCE_DAYS", 7), 7)

    def test_valid_value(self) -> None:
        """A positive integer overrides the default."""
        with patch.dict("os.environ", {"CHANGO_REFERENCE_DAYS": "14"}):
            self.assertEqual(_env_int("CHANGO_REFERENCE_DAYS", 7), 14)

    def test_invalid_values_fall_back(self) -> None:
        """Non-numeric or non-positive values give the default."""
        for raw in ("seven", "3.5", "0", "-2"):
            with self.subTest(raw=raw):
                with patch.dict("os.environ", {"CHANGO_REFERENCE_DAYS": raw}):
                    self.assertEqual(
                        _env_int("CHANGO_REFERENCE_DAYS", 7), 7,
                    )


if __name__ == "__main__":
    unittest.main()
