"""Tests for turning parsed arguments into validated options."""

from __future__ import annotations

import unittest

from lazyls.cli import build_parser
from lazyls.fs.filter import DotFilter, SortCase, SortField, SortKind
from lazyls.options import (
    OptionsError,
    deduce_options,
    deduce_sort_field,
    deduce_terminal_width,
    split_ignore_globs,
)
from lazyls.output.fields import SizeFormat, TimeFormat, TimeType
from lazyls.output.view import Mode


def options_for(argv: list[str], settings: dict[str, object] | None = None, **kwargs):
    args = build_parser().parse_args(argv)
    kwargs.setdefault("environ", {})
    kwargs.setdefault("detected_width", 80)
    return deduce_options(args, settings=settings or {}, **kwargs)


class ModeTests(unittest.TestCase):
    def test_grid_is_the_default_on_a_terminal(self) -> None:
        options = options_for([])
        self.assertIs(options.view.mode, Mode.GRID)
        assert options.view.grid is not None
        self.assertEqual(options.view.grid.console_width, 80)
        self.assertFalse(options.view.grid.across)

    def test_lines_when_width_unknown(self) -> None:
        self.assertIs(options_for([], detected_width=None).view.mode, Mode.LINES)

    def test_columns_environment_overrides_detection(self) -> None:
        options = options_for(["-x"], environ={"COLUMNS": "50"}, detected_width=None)
        assert options.view.grid is not None
        self.assertEqual(options.view.grid.console_width, 50)
        self.assertTrue(options.view.grid.across)

    def test_oneline_and_long(self) -> None:
        self.assertIs(options_for(["-1"]).view.mode, Mode.LINES)
        self.assertIs(options_for(["-l"]).view.mode, Mode.DETAILS)

    def test_long_grid_packs_details(self) -> None:
        options = options_for(["-lG"])
        self.assertIs(options.view.mode, Mode.GRID_DETAILS)
        assert options.view.grid is not None
        self.assertEqual(options.view.grid.console_width, 80)
        self.assertIsNotNone(options.view.table)

        across = options_for(["-l", "-G", "-x"])
        assert across.view.grid is not None
        self.assertTrue(across.view.grid.across)

    def test_long_grid_without_width_is_details(self) -> None:
        options = options_for(["-lG"], detected_width=None)
        self.assertIs(options.view.mode, Mode.DETAILS)
        self.assertIsNone(options.view.grid)

    def test_tree_mode(self) -> None:
        options = options_for(["-T", "-L", "2"])
        self.assertIs(options.view.mode, Mode.TREE)
        self.assertTrue(options.tree)
        self.assertEqual(options.level, 2)
        self.assertIsNone(options.view.table)
        self.assertIsNone(options.view.grid)

    def test_long_tree_carries_a_table(self) -> None:
        options = options_for(["--long", "--tree", "--git"])
        self.assertIs(options.view.mode, Mode.TREE)
        assert options.view.table is not None
        self.assertTrue(options.view.shows_git)

    def test_conflicting_and_useless_flags(self) -> None:
        for argv in (
            ["-l", "-1"],
            ["-l", "-x"],
            ["-lT", "-G"],
            ["-1", "-x"],
            ["-T", "-1"],
            ["-T", "-x"],
            ["-T", "-aa"],
            ["-T", "-d"],
            ["-l", "-L", "1"],
            ["--binary"],
            ["-h"],
            ["--git"],
            ["-t", "mod"],
            ["--time-style", "iso"],
            ["-L", "2"],
            ["-l", "-b", "-B"],
            ["-l", "-t", "mod", "-u"],
            ["-l", "-t", "yesterday"],
            ["-l", "--time-style", "fancy"],
            ["-s", "bogus"],
            ["--colour", "sometimes"],
        ):
            with self.subTest(argv=argv):
                with self.assertRaises(OptionsError):
                    options_for(argv)


class TableOptionTests(unittest.TestCase):
    def test_long_view_flags(self) -> None:
        options = options_for(["-l", "-b", "-i", "-H", "-S", "-g", "--git", "--time-style", "long-iso", "-h"])
        table = options.view.table
        assert table is not None
        self.assertIs(table.size_format, SizeFormat.BINARY)
        self.assertIs(table.time_format, TimeFormat.LONG_ISO)
        self.assertTrue(table.inode and table.links and table.blocks and table.group and table.git)
        self.assertTrue(options.view.header)
        self.assertTrue(options.view.shows_git)

    def test_time_selection(self) -> None:
        self.assertEqual(options_for(["-l"]).view.table.time_types, (TimeType.MODIFIED,))
        self.assertEqual(options_for(["-l", "-t", "acc"]).view.table.time_types, (TimeType.ACCESSED,))
        self.assertEqual(
            options_for(["-l", "-m", "-U"]).view.table.time_types,
            (TimeType.MODIFIED, TimeType.CREATED),
        )


class FilterOptionTests(unittest.TestCase):
    def test_sort_words(self) -> None:
        self.assertEqual(deduce_sort_field(None), SortField.name(SortCase.SENSITIVE))
        self.assertEqual(deduce_sort_field("Name"), SortField.name(SortCase.INSENSITIVE))
        self.assertEqual(deduce_sort_field("size"), SortField.of(SortKind.SIZE))
        self.assertEqual(deduce_sort_field("none"), SortField.unsorted())

    def test_dot_filter_levels(self) -> None:
        self.assertIs(options_for([]).file_filter.dot_filter, DotFilter.JUST_FILES)
        self.assertIs(options_for(["-a"]).file_filter.dot_filter, DotFilter.DOTFILES)
        self.assertIs(options_for(["-aa"]).file_filter.dot_filter, DotFilter.DOTFILES_AND_DOTS)

    def test_ignore_globs_are_split_and_combined_with_config(self) -> None:
        self.assertEqual(split_ignore_globs(["*.tmp|*.bak", "core"]), ["*.tmp", "*.bak", "core"])
        options = options_for(["-I", "*.tmp|*.bak"], settings={"ignore_globs": ["*.o"]})
        patterns = options.file_filter.ignore_patterns
        self.assertEqual(len(patterns), 3)
        self.assertTrue(patterns.is_ignored("main.o"))
        self.assertTrue(patterns.is_ignored("x.bak"))

    def test_bad_globs_are_logged_and_skipped(self) -> None:
        with self.assertLogs("lazyls.options", level="WARNING") as logs:
            options = options_for(["-I", "[oops|*.tmp"])
        self.assertEqual(len(options.file_filter.ignore_patterns), 1)
        self.assertIn("[oops", logs.output[0])

    def test_config_supplies_defaults_and_flags_win(self) -> None:
        settings = {"sort": "size", "group_directories_first": True}
        from_config = options_for([], settings=settings)
        self.assertEqual(from_config.file_filter.sort_field, SortField.of(SortKind.SIZE))
        self.assertTrue(from_config.file_filter.list_dirs_first)

        overridden = options_for(["-s", "ext"], settings=settings)
        self.assertEqual(overridden.file_filter.sort_field, SortField.extension())

    def test_recursion_options(self) -> None:
        options = options_for(["-R", "-L", "2", "-d"])
        self.assertTrue(options.recurse)
        self.assertEqual(options.level, 2)
        self.assertTrue(options.list_dirs)


class ColourOptionTests(unittest.TestCase):
    def test_plain_when_not_a_terminal(self) -> None:
        self.assertTrue(options_for([]).view.colours.is_plain)

    def test_colourful_on_a_terminal(self) -> None:
        options = options_for([], is_tty=True)
        self.assertFalse(options.view.colours.is_plain)
        self.assertEqual(options.view.colours.theme.name, "default")

    def test_always_and_never(self) -> None:
        self.assertFalse(options_for(["--colour", "always"]).view.colours.is_plain)
        self.assertTrue(options_for(["--color", "never"], is_tty=True).view.colours.is_plain)
        self.assertTrue(options_for(["--colour", "always", "--no-color"]).view.colours.is_plain)

    def test_theme_and_scale_from_config(self) -> None:
        colours = options_for([], settings={"theme": "ocean", "colour_scale": True}, is_tty=True).view.colours
        self.assertEqual(colours.theme.name, "ocean")
        self.assertTrue(colours.scale)


class TerminalWidthTests(unittest.TestCase):
    def test_invalid_columns(self) -> None:
        for value in ("abc", "0", "-4"):
            with self.subTest(value=value):
                with self.assertRaises(OptionsError):
                    deduce_terminal_width({"COLUMNS": value}, 80)

    def test_blank_columns_falls_back_to_detection(self) -> None:
        self.assertEqual(deduce_terminal_width({"COLUMNS": ""}, 120), 120)
        self.assertIsNone(deduce_terminal_width({}, None))


if __name__ == "__main__":
    unittest.main()
