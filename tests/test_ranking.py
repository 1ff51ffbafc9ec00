"""Ordering, top-N and total accounting tests."""

from __future__ import annotations

import unittest

from sizr.models import Entry, EntryKind
from sizr.ranking import TotalPolicy, sort_entries, take_top, total_size


def _file(path: str, size: int) -> Entry:
    return Entry(path=path, size=size, kind=EntryKind.FILE)


def _dir(path: str, size: int) -> Entry:
    return Entry(path=path, size=size, kind=EntryKind.DIRECTORY)


SCENARIO = [_file("a.txt", 100), _file("sub/b.txt", 200), _dir("sub", 200)]


class SortEntriesTests(unittest.TestCase):
    def test_sorted_by_size_descending(self) -> None:
        entries = [_file("s", 1), _dir("l", 900), _file("m", 50), _file("z", 0)]

        ordered = sort_entries(entries)

        sizes = [e.size for e in ordered]
        self.assertEqual(sizes, [900, 50, 1, 0])
        for a, b in zip(ordered, ordered[1:]):
            self.assertGreaterEqual(a.size, b.size)

    def test_equal_sizes_fall_back_to_path_order(self) -> None:
        ordered = sort_entries([_file("sub/b.txt", 200), _dir("sub", 200), _file("a", 200)])

        self.assertEqual([e.path for e in ordered], ["a", "sub", "sub/b.txt"])

    def test_input_is_not_mutated(self) -> None:
        entries = [_file("a", 1), _file("b", 2)]

        sort_entries(entries)

        self.assertEqual([e.path for e in entries], ["a", "b"])


class TakeTopTests(unittest.TestCase):
    def test_limit_smaller_than_result_reports_remainder(self) -> None:
        entries = sort_entries(_file(f"f{i}", i) for i in range(7))

        shown, remaining = take_top(entries, 3)

        self.assertEqual(len(shown), 3)
        self.assertEqual(remaining, 4)
        self.assertEqual([e.size for e in shown], [6, 5, 4])

    def test_limit_larger_than_result_shows_everything(self) -> None:
        shown, remaining = take_top(SCENARIO, 10)

        self.assertEqual(shown, SCENARIO)
        self.assertEqual(remaining, 0)

    def test_limit_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            take_top(SCENARIO, 0)


class TotalSizeTests(unittest.TestCase):
    def test_default_counts_files_only(self) -> None:
        self.assertEqual(total_size(SCENARIO), 300)
        self.assertEqual(total_size(SCENARIO, TotalPolicy.FILES), 300)

    def test_listed_policy_double_counts_directories(self) -> None:
        self.assertEqual(total_size(SCENARIO, TotalPolicy.LISTED), 500)

    def test_files_only_listing_totals_match_either_policy(self) -> None:
        files = [e for e in SCENARIO if not e.is_dir]

        self.assertEqual(total_size(files, TotalPolicy.FILES), 300)
        self.assertEqual(total_size(files, TotalPolicy.LISTED), 300)

    def test_scanned_file_bytes_win_over_listed_rows(self) -> None:
        dirs_only = [_dir("sub", 200)]

        self.assertEqual(total_size(dirs_only, TotalPolicy.FILES, file_bytes=300), 300)
        self.assertEqual(total_size(dirs_only, TotalPolicy.LISTED, file_bytes=300), 200)

    def test_policy_accepts_cli_spelling(self) -> None:
        self.assertIs(TotalPolicy("listed"), TotalPolicy.LISTED)
        self.assertIs(TotalPolicy("files"), TotalPolicy.FILES)


if __name__ == "__main__":
    unittest.main()
