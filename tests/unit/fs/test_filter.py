"""Tests for entry filtering, sort fields, reverse, and directories-first.

Covers ignore-pattern parsing, dot filtering of hidden and ``.``/``..``
entries, stability of every sort field, and the regrouping invariants.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from lazyls.fs.filter import DotFilter, FileFilter, IgnorePatterns, SortCase, SortField, SortKind
from lazyls.fs.types import Entry, FileType


def make_entry(name: str, file_type: FileType = FileType.FILE, **fields) -> Entry:
    return Entry(name=name, path=Path(name), file_type=file_type, **fields)


def names(entries: list[Entry]) -> list[str]:
    return [entry.name for entry in entries]


ALL_SORT_FIELDS = (
    SortField.unsorted(),
    SortField.name(SortCase.SENSITIVE),
    SortField.name(SortCase.INSENSITIVE),
    SortField.extension(SortCase.SENSITIVE),
    SortField.extension(SortCase.INSENSITIVE),
    SortField.of(SortKind.SIZE),
    SortField.of(SortKind.INODE),
    SortField.of(SortKind.MODIFIED_DATE),
    SortField.of(SortKind.ACCESSED_DATE),
    SortField.of(SortKind.CREATED_DATE),
    SortField.of(SortKind.FILE_TYPE),
)


class IgnorePatternsTests(unittest.TestCase):
    def test_parse_keeps_valid_patterns_in_order_and_collects_errors(self) -> None:
        patterns, errors = IgnorePatterns.parse(["*.tmp", "[oops", "*.bak"])

        self.assertEqual([pattern.source for pattern in patterns.patterns], ["*.tmp", "*.bak"])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].pattern, "[oops")

    def test_empty_set_matches_nothing(self) -> None:
        patterns = IgnorePatterns.empty()
        self.assertFalse(patterns.is_ignored(""))
        self.assertFalse(patterns.is_ignored("anything"))
        self.assertEqual(len(patterns), 0)

    def test_any_matching_pattern_ignores_the_name(self) -> None:
        patterns, _errors = IgnorePatterns.parse(["*.o", "core"])
        self.assertTrue(patterns.is_ignored("main.o"))
        self.assertTrue(patterns.is_ignored("core"))
        self.assertFalse(patterns.is_ignored("main.c"))


class DotFilteringTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [
            make_entry(".", FileType.DIRECTORY),
            make_entry("..", FileType.DIRECTORY),
            make_entry(".bashrc"),
            make_entry("visible"),
        ]

    def test_just_files_hides_every_dot_name(self) -> None:
        file_filter = FileFilter(dot_filter=DotFilter.JUST_FILES, sort_field=SortField.unsorted())
        self.assertEqual(names(file_filter.apply(self.entries)), ["visible"])

    def test_dotfiles_shows_hidden_files_but_not_dot_entries(self) -> None:
        file_filter = FileFilter(dot_filter=DotFilter.DOTFILES, sort_field=SortField.unsorted())
        self.assertEqual(names(file_filter.apply(self.entries)), [".bashrc", "visible"])

    def test_most_permissive_setting_shows_dot_and_dotdot(self) -> None:
        file_filter = FileFilter(dot_filter=DotFilter.DOTFILES_AND_DOTS, sort_field=SortField.unsorted())
        self.assertEqual(names(file_filter.apply(self.entries)), [".", "..", ".bashrc", "visible"])

    def test_dot_and_ignore_filtering_apply_conjunctively(self) -> None:
        patterns, _errors = IgnorePatterns.parse(["visible"])
        file_filter = FileFilter(
            dot_filter=DotFilter.DOTFILES,
            ignore_patterns=patterns,
            sort_field=SortField.unsorted(),
        )
        self.assertEqual(names(file_filter.apply(self.entries)), [".bashrc"])

    def test_filtering_is_idempotent(self) -> None:
        patterns, _errors = IgnorePatterns.parse(["*.log"])
        file_filter = FileFilter(dot_filter=DotFilter.DOTFILES, ignore_patterns=patterns)
        entries = self.entries + [make_entry("debug.log"), make_entry("a.txt")]

        once = file_filter.apply(entries)
        twice = file_filter.apply(once)
        self.assertEqual(once, twice)


class NamedAndDiscoveredFilteringTests(unittest.TestCase):
    def test_both_entry_points_use_the_ignore_predicate(self) -> None:
        patterns, _errors = IgnorePatterns.parse(["*.tmp"])
        file_filter = FileFilter(ignore_patterns=patterns)
        entries = [make_entry("a.tmp"), make_entry("b.txt")]

        self.assertEqual(names(file_filter.filter_discovered(entries)), ["b.txt"])
        self.assertEqual(names(file_filter.filter_named(entries)), ["b.txt"])

    def test_named_filtering_does_not_apply_dot_rules(self) -> None:
        file_filter = FileFilter(dot_filter=DotFilter.JUST_FILES)
        self.assertEqual(names(file_filter.filter_named([make_entry(".vimrc")])), [".vimrc"])


class SortFieldTests(unittest.TestCase):
    def test_name_sort_uses_natural_order(self) -> None:
        entries = [make_entry("file10"), make_entry("file2"), make_entry("file1")]
        file_filter = FileFilter(sort_field=SortField.name())
        self.assertEqual(names(file_filter.sort(entries)), ["file1", "file2", "file10"])

    def test_case_sensitive_name_sort_puts_uppercase_first(self) -> None:
        entries = [make_entry("apple"), make_entry("Banana"), make_entry("cherry")]
        file_filter = FileFilter(sort_field=SortField.name(SortCase.SENSITIVE))
        self.assertEqual(names(file_filter.sort(entries)), ["Banana", "apple", "cherry"])

    def test_case_insensitive_name_sort_ignores_case(self) -> None:
        entries = [make_entry("apple"), make_entry("Banana"), make_entry("cherry")]
        file_filter = FileFilter(sort_field=SortField.name(SortCase.INSENSITIVE))
        self.assertEqual(names(file_filter.sort(entries)), ["apple", "Banana", "cherry"])

    def test_case_insensitive_equal_names_keep_input_order(self) -> None:
        file_filter = FileFilter(sort_field=SortField.name(SortCase.INSENSITIVE))
        forward = [make_entry("file"), make_entry("File")]
        backward = [make_entry("File"), make_entry("file")]
        self.assertEqual(names(file_filter.sort(forward)), ["file", "File"])
        self.assertEqual(names(file_filter.sort(backward)), ["File", "file"])

    def test_numeric_fields_sort_ascending(self) -> None:
        entries = [
            make_entry("big", size=300, inode=1, modified_time=30, accessed_time=10, created_time=20),
            make_entry("small", size=100, inode=3, modified_time=10, accessed_time=30, created_time=30),
            make_entry("medium", size=200, inode=2, modified_time=20, accessed_time=20, created_time=10),
        ]
        expectations = {
            SortKind.SIZE: ["small", "medium", "big"],
            SortKind.INODE: ["big", "medium", "small"],
            SortKind.MODIFIED_DATE: ["small", "medium", "big"],
            SortKind.ACCESSED_DATE: ["big", "medium", "small"],
            SortKind.CREATED_DATE: ["medium", "big", "small"],
        }
        for kind, expected in expectations.items():
            with self.subTest(kind=kind):
                file_filter = FileFilter(sort_field=SortField.of(kind))
                self.assertEqual(names(file_filter.sort(entries)), expected)

    def test_extension_sort_breaks_ties_by_name_and_lists_extensionless_first(self) -> None:
        entries = [
            make_entry("b.txt"),
            make_entry("a.rs"),
            make_entry("Makefile"),
            make_entry("a.txt"),
        ]
        file_filter = FileFilter(sort_field=SortField.extension())
        self.assertEqual(names(file_filter.sort(entries)), ["Makefile", "a.rs", "a.txt", "b.txt"])

    def test_case_insensitive_extension_sort_folds_extension_case(self) -> None:
        entries = [make_entry("b.TXT"), make_entry("a.rs"), make_entry("a.txt")]
        file_filter = FileFilter(sort_field=SortField.extension(SortCase.INSENSITIVE))
        self.assertEqual(names(file_filter.sort(entries)), ["a.rs", "a.txt", "b.TXT"])

    def test_file_type_sort_orders_categories_then_names(self) -> None:
        entries = [
            make_entry("zlink", FileType.SYMLINK),
            make_entry("file10"),
            make_entry("dir", FileType.DIRECTORY),
            make_entry("file2"),
            make_entry("fifo", FileType.PIPE),
        ]
        file_filter = FileFilter(sort_field=SortField.of(SortKind.FILE_TYPE))
        self.assertEqual(names(file_filter.sort(entries)), ["dir", "file2", "file10", "zlink", "fifo"])

    def test_unsorted_leaves_insertion_order(self) -> None:
        entries = [make_entry("c"), make_entry("a", FileType.DIRECTORY), make_entry("b")]
        file_filter = FileFilter(sort_field=SortField.unsorted())
        self.assertEqual(names(file_filter.sort(entries)), ["c", "a", "b"])

    def test_every_sort_field_is_stable_for_equal_keys(self) -> None:
        entries = [
            make_entry("same.txt", size=5, inode=7, modified_time=1, accessed_time=1, created_time=1),
            make_entry("same.txt", size=5, inode=7, modified_time=1, accessed_time=1, created_time=1, links=2),
            make_entry("same.txt", size=5, inode=7, modified_time=1, accessed_time=1, created_time=1, links=3),
        ]
        for sort_field in ALL_SORT_FIELDS:
            with self.subTest(sort_field=sort_field):
                ordered = FileFilter(sort_field=sort_field).sort(entries)
                self.assertEqual([entry.links for entry in ordered], [1, 2, 3])

    def test_empty_input_gives_empty_output(self) -> None:
        for sort_field in ALL_SORT_FIELDS:
            with self.subTest(sort_field=sort_field):
                self.assertEqual(FileFilter(sort_field=sort_field, list_dirs_first=True, reverse=True).apply([]), [])

    def test_compare_reports_sign(self) -> None:
        file_filter = FileFilter(sort_field=SortField.of(SortKind.SIZE))
        small = make_entry("a", size=1)
        large = make_entry("b", size=2)
        self.assertEqual(file_filter.compare(small, large), -1)
        self.assertEqual(file_filter.compare(large, small), 1)
        self.assertEqual(file_filter.compare(small, small), 0)


class ReverseAndDirectoriesFirstTests(unittest.TestCase):
    def test_reverse_flips_the_sorted_sequence(self) -> None:
        entries = [make_entry("b"), make_entry("c"), make_entry("a")]
        file_filter = FileFilter(sort_field=SortField.name(), reverse=True)
        self.assertEqual(names(file_filter.sort(entries)), ["c", "b", "a"])

    def test_size_sort_with_directories_first(self) -> None:
        entries = [
            make_entry("b.txt", size=100),
            make_entry("a.txt", size=5000),
            make_entry("Dir", FileType.DIRECTORY, size=0),
        ]
        file_filter = FileFilter(sort_field=SortField.of(SortKind.SIZE), list_dirs_first=True)
        self.assertEqual(names(file_filter.apply(entries)), ["Dir", "b.txt", "a.txt"])

    def test_directories_first_keeps_requested_order_within_groups(self) -> None:
        entries = [
            make_entry("small_dir", FileType.DIRECTORY, size=10),
            make_entry("big.txt", size=900),
            make_entry("big_dir", FileType.DIRECTORY, size=800),
            make_entry("tiny.txt", size=1),
        ]
        plain = FileFilter(sort_field=SortField.of(SortKind.SIZE), reverse=True)
        grouped = FileFilter(sort_field=SortField.of(SortKind.SIZE), reverse=True, list_dirs_first=True)

        plain_order = plain.apply(entries)
        grouped_order = grouped.apply(entries)

        self.assertEqual(names(grouped_order), ["big_dir", "small_dir", "big.txt", "tiny.txt"])
        for is_dir in (True, False):
            self.assertEqual(
                [entry for entry in grouped_order if entry.is_directory == is_dir],
                [entry for entry in plain_order if entry.is_directory == is_dir],
            )
        for first, second in zip(grouped_order, grouped_order[1:]):
            self.assertFalse(not first.is_directory and second.is_directory)

    def test_unsorted_with_directories_first_keeps_insertion_order_per_group(self) -> None:
        entries = [
            make_entry("z"),
            make_entry("y", FileType.DIRECTORY),
            make_entry("x"),
            make_entry("w", FileType.DIRECTORY),
        ]
        file_filter = FileFilter(sort_field=SortField.unsorted(), list_dirs_first=True)
        self.assertEqual(names(file_filter.sort(entries)), ["y", "w", "z", "x"])

    def test_symlinks_are_not_grouped_with_directories(self) -> None:
        entries = [make_entry("link", FileType.SYMLINK), make_entry("dir", FileType.DIRECTORY)]
        file_filter = FileFilter(sort_field=SortField.name(), list_dirs_first=True)
        self.assertEqual(names(file_filter.sort(entries)), ["dir", "link"])

    def test_duplicate_names_both_appear(self) -> None:
        entries = [make_entry("dup", size=2), make_entry("dup", size=1)]
        ordered = FileFilter(sort_field=SortField.name()).apply(entries)
        self.assertEqual([entry.size for entry in ordered], [2, 1])


if __name__ == "__main__":
    unittest.main()
