import unittest

from swapdesk.services.price_normalizer import icon_url, normalize


class PriceNormalizerTest(unittest.TestCase):
    def test_symbol_to_number_mapping_is_sorted(self):
        tokens = normalize({"ETH": 3000, "BTC": 50000})

        self.assertEqual([(t.symbol, t.price) for t in tokens], [("BTC", 50000.0), ("ETH", 3000.0)])

    def test_records_prefer_currency_and_fall_back_to_symbol(self):
        tokens = normalize([
            {"currency": "atom", "symbol": "ignored", "price": 7.5},
            {"symbol": "osmo", "price": "0.42"},
            {"currency": None, "symbol": "zil", "price": 0.02},
        ])

        self.assertEqual([(t.symbol, t.price) for t in tokens], [("ATOM", 7.5), ("OSMO", 0.42), ("ZIL", 0.02)])

    def test_mapping_of_price_objects(self):
        tokens = normalize({
            "BLUR": {"price": 0.2, "date": "2023-08-29T07:10:40.000Z"},
            "bNEO": {"price": "7.1", "currency": "bNEO"},
            "NOPRICE": {"value": 3},
        })

        self.assertEqual([(t.symbol, t.price) for t in tokens], [("BLUR", 0.2), ("BNEO", 7.1)])

    def test_invalid_entries_are_dropped_for_every_shape(self):
        bad_prices = [0, -1, "abc", None, True, "", "inf", float("nan"), [], {}]
        for bad in bad_prices:
            with self.subTest(price=bad):
                self.assertEqual(normalize([{"currency": "AAA", "price": bad}]), [])
                self.assertEqual(normalize({"AAA": bad}), [])
                self.assertEqual(normalize({"AAA": {"price": bad}}), [])

        for bad_symbol in ["", "   ", None]:
            with self.subTest(symbol=bad_symbol):
                self.assertEqual(normalize([{"currency": bad_symbol, "price": 1}]), [])

        self.assertEqual(normalize({"   ": 1}), [])

    def test_non_record_rows_and_non_container_input_yield_nothing(self):
        self.assertEqual(normalize([1, "BTC", None, ["ETH", 3]]), [])
        self.assertEqual(normalize("BTC"), [])
        self.assertEqual(normalize(None), [])
        self.assertEqual(normalize(42), [])

    def test_duplicate_symbols_keep_last_occurrence_case_insensitively(self):
        tokens = normalize([
            {"currency": "usdt", "price": "1.00"},
            {"currency": "USDT", "price": 2},
        ])

        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].symbol, "USDT")
        self.assertEqual(tokens[0].price, 2.0)

    def test_last_wins_even_when_later_price_is_lower(self):
        tokens = normalize([
            {"currency": "ETH", "price": 3100},
            {"currency": "eth", "price": 2900},
            {"currency": "ETH", "price": -5},
        ])

        self.assertEqual([(t.symbol, t.price) for t in tokens], [("ETH", 2900.0)])

    def test_output_is_strictly_sorted_without_duplicates(self):
        tokens = normalize([
            {"currency": s, "price": i + 1}
            for i, s in enumerate(["zil", "ATOM", "bnb", "Atom", "USDC", "evmos", "ZIL", "ampLUNA"])
        ])
        symbols = [t.symbol for t in tokens]

        self.assertEqual(symbols, sorted(set(symbols)))
        for a, b in zip(symbols, symbols[1:]):
            self.assertLess(a, b)

    def test_punctuation_sorts_before_digits_and_letters(self):
        tokens = normalize({"USDT": 1, "USD_T": 1, "USDC": 1, "USD1": 1, "2Z": 1})

        self.assertEqual([t.symbol for t in tokens], ["2Z", "USD_T", "USD1", "USDC", "USDT"])

    def test_normalizing_normalized_output_is_a_no_op(self):
        first = normalize({"eth": 3000, "BTC": "50000", "SOL": {"price": 20.5}, "bad": 0})
        second = normalize([t.model_dump() for t in first])

        self.assertEqual(second, first)

    def test_symbols_are_trimmed(self):
        tokens = normalize([{"currency": "  swth ", "price": 0.004}])

        self.assertEqual(tokens[0].symbol, "SWTH")

    def test_icon_ref_is_derived_from_uppercase_symbol(self):
        tokens = normalize({"eth": 3000})

        self.assertEqual(
            tokens[0].icon_ref,
            "https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens/ETH.svg",
        )
        self.assertEqual(tokens[0].fallback_glyph, "ET")

    def test_icon_url_is_url_safe(self):
        self.assertEqual(icon_url("USD+", "https://icons.test/"), "https://icons.test/USD%2B.svg")
        self.assertEqual(icon_url("A B/C", "https://icons.test"), "https://icons.test/A%20B%2FC.svg")
        self.assertEqual(icon_url("STETH", "https://icons.test"), icon_url("STETH", "https://icons.test"))

    def test_custom_icon_base_url(self):
        tokens = normalize({"BTC": 1}, icon_base_url="https://cdn.example.test/icons")

        self.assertEqual(tokens[0].icon_ref, "https://cdn.example.test/icons/BTC.svg")


if __name__ == "__main__":
    unittest.main()
