import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from swapdesk.config.settings import Settings


class SettingsTest(unittest.TestCase):
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.PRICE_FEED_URL, "https://interview.switcheo.com/prices.json")
        self.assertEqual(settings.AMOUNT_DEBOUNCE_MS, 150)
        self.assertEqual(settings.SEARCH_DEBOUNCE_MS, 80)
        self.assertEqual(settings.DEFAULT_SLIPPAGE_BPS, 50)
        self.assertEqual(settings.SUBMIT_DELAY_SEC, 1.2)

    def test_env_overrides(self):
        env = {
            "SWAP_PRICE_FEED_URL": "https://feed.example.test/prices.json",
            "SWAP_DEFAULT_SLIPPAGE_BPS": "120",
            "SWAP_SEARCH_DEBOUNCE_MS": "40",
            "SWAP_SUBMIT_DELAY_SEC": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.PRICE_FEED_URL, "https://feed.example.test/prices.json")
        self.assertEqual(settings.DEFAULT_SLIPPAGE_BPS, 120)
        self.assertEqual(settings.SEARCH_DEBOUNCE_MS, 40)
        self.assertEqual(settings.SUBMIT_DELAY_SEC, 0.0)

    def test_empty_env_value_falls_back_to_default(self):
        with patch.dict(os.environ, {"SWAP_AMOUNT_DEBOUNCE_MS": ""}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.AMOUNT_DEBOUNCE_MS, 150)

    def test_slippage_out_of_range_fails_validation(self):
        for raw in ["-1", "201", "abc"]:
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"SWAP_DEFAULT_SLIPPAGE_BPS": raw}, clear=True):
                    with self.assertRaises(ValidationError):
                        Settings.from_env()


if __name__ == "__main__":
    unittest.main()
