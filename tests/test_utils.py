"""Size parsing and formatting helper tests."""

from __future__ import annotations

import unittest

from sizr.errors import InvalidSizeSpec
from sizr.utils import format_bytes, parse_size, shorten_path


class ParseSizeTests(unittest.TestCase):
    def test_known_values(self) -> None:
        cases = {
            "0": 0,
            "10": 10,
            "10B": 10,
            "500KB": 512000,
            "3MB": 3 * 1024 ** 2,
            "2GB": 2147483648,
            "1TB": 1024 ** 4,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(parse_size(text), expected)

    def test_units_are_case_insensitive_and_may_be_spaced(self) -> None:
        self.assertEqual(parse_size("500kb"), 512000)
        self.assertEqual(parse_size("2 Gb"), 2147483648)
        self.assertEqual(parse_size("  7 b "), 7)

    def test_fractional_magnitudes_round_down_to_bytes(self) -> None:
        self.assertEqual(parse_size("1.5KB"), 1536)
        self.assertEqual(parse_size("0.5B"), 0)

    def test_large_plain_numbers_keep_precision(self) -> None:
        self.assertEqual(parse_size("123456789012345678"), 123456789012345678)

    def test_unknown_unit_is_rejected(self) -> None:
        with self.assertRaises(InvalidSizeSpec) as ctx:
            parse_size("5XB")
        self.assertIn("XB", str(ctx.exception))

    def test_malformed_values_are_rejected(self) -> None:
        for text in ("", "KB", "-1", "1e3", "1,5MB", "ten"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidSizeSpec):
                    parse_size(text)

    def test_invalid_size_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_size("5XB")


class FormatBytesTests(unittest.TestCase):
    def test_bytes_are_integers(self) -> None:
        self.assertEqual(format_bytes(0), "0 B")
        self.assertEqual(format_bytes(300), "300 B")

    def test_larger_units_use_two_decimals(self) -> None:
        self.assertEqual(format_bytes(1536), "1.50 KB")
        self.assertEqual(format_bytes(2147483648), "2.00 GB")


class ShortenPathTests(unittest.TestCase):
    def test_short_paths_are_untouched(self) -> None:
        self.assertEqual(shorten_path("a/b.txt", 20), "a/b.txt")

    def test_long_paths_keep_their_tail(self) -> None:
        shortened = shorten_path("/very/long/directory/name/file.txt", 15)

        self.assertEqual(len(shortened), 15)
        self.assertTrue(shortened.startswith("..."))
        self.assertTrue(shortened.endswith("file.txt"))


if __name__ == "__main__":
    unittest.main()
