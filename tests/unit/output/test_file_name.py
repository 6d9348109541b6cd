"""Tests for file name colouring, classify indicators, and link targets."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazyls.fs.types import Entry, FileType
from lazyls.output.cell import WidthMeasurer
from lazyls.output.colours import DEFAULT_THEME, RESET, Colours, Style
from lazyls.output.file_name import (
    LinkStyle,
    classify_char,
    escape_control_char,
    file_name_cell,
    file_name_text,
    file_style,
)


def make_entry(name: str, file_type: FileType = FileType.FILE, **fields) -> Entry:
    return Entry(name=name, path=Path(name), file_type=file_type, **fields)


class FileStyleTests(unittest.TestCase):
    def test_type_categories_take_priority(self) -> None:
        self.assertIs(file_style(make_entry("photos.png", FileType.DIRECTORY)), Style.DIRECTORY)
        self.assertIs(file_style(make_entry("tool.png", is_executable=True)), Style.EXECUTABLE)
        self.assertIs(file_style(make_entry("link", FileType.SYMLINK, is_executable=True)), Style.SYMLINK)
        self.assertIs(file_style(make_entry("fifo", FileType.PIPE)), Style.PIPE)
        self.assertIs(file_style(make_entry("tty", FileType.CHAR_DEVICE)), Style.DEVICE)
        self.assertIs(file_style(make_entry("sock", FileType.SOCKET)), Style.SOCKET)

    def test_kinds_by_name_and_extension(self) -> None:
        self.assertIs(file_style(make_entry("Makefile")), Style.IMMEDIATE)
        self.assertIs(file_style(make_entry("README.md")), Style.IMMEDIATE)
        self.assertIs(file_style(make_entry("photo.PNG")), Style.IMAGE)
        self.assertIs(file_style(make_entry("song.flac")), Style.LOSSLESS)
        self.assertIs(file_style(make_entry("archive.tar")), Style.COMPRESSED)
        self.assertIs(file_style(make_entry("notes.txt~")), Style.TEMP)
        self.assertIs(file_style(make_entry("#draft#")), Style.TEMP)
        self.assertIs(file_style(make_entry("main.o")), Style.COMPILED)
        self.assertIs(file_style(make_entry("notes.txt")), Style.NORMAL)


class ClassifyTests(unittest.TestCase):
    def test_indicator_characters(self) -> None:
        self.assertEqual(classify_char(make_entry("run", is_executable=True)), "*")
        self.assertEqual(classify_char(make_entry("dir", FileType.DIRECTORY)), "/")
        self.assertEqual(classify_char(make_entry("fifo", FileType.PIPE)), "|")
        self.assertEqual(classify_char(make_entry("link", FileType.SYMLINK)), "@")
        self.assertEqual(classify_char(make_entry("sock", FileType.SOCKET)), "=")
        self.assertIsNone(classify_char(make_entry("plain.txt")))

    def test_classify_appends_indicator(self) -> None:
        text = file_name_text(make_entry("dir", FileType.DIRECTORY), Colours.plain(), classify=True)
        self.assertEqual(text, "dir/")


class FileNameTextTests(unittest.TestCase):
    def test_plain_name(self) -> None:
        self.assertEqual(file_name_text(make_entry("a.txt"), Colours.plain()), "a.txt")

    def test_coloured_name_measures_visible_width(self) -> None:
        colours = Colours(DEFAULT_THEME)
        cell = file_name_cell(make_entry("src", FileType.DIRECTORY), colours, WidthMeasurer())
        self.assertEqual(cell.text, DEFAULT_THEME.sequence(Style.DIRECTORY) + "src" + RESET)
        self.assertEqual(cell.width, 3)

    def test_path_prefix_is_shown(self) -> None:
        entry = make_entry("file.txt", path_prefix="some/dir/")
        self.assertEqual(file_name_text(entry, Colours.plain()), "some/dir/file.txt")

    def test_control_characters_are_escaped(self) -> None:
        self.assertEqual(file_name_text(make_entry("bad\nname"), Colours.plain()), "bad\\nname")
        self.assertEqual(escape_control_char("\x01"), "\\x01")
        self.assertEqual(escape_control_char("\x7f"), "\\x7f")

    def test_link_targets_shown_with_full_link_paths(self) -> None:
        link = make_entry("latest", FileType.SYMLINK, link_target="releases/v2")
        target = make_entry("v2", FileType.DIRECTORY)
        text = file_name_text(
            link,
            Colours.plain(),
            link_style=LinkStyle.FULL_LINK_PATHS,
            target_lookup=lambda entry: target,
        )
        self.assertEqual(text, "latest -> releases/v2")

    def test_link_target_takes_target_colour(self) -> None:
        link = make_entry("latest", FileType.SYMLINK, link_target="v2")
        target = make_entry("v2", FileType.DIRECTORY)
        colours = Colours(DEFAULT_THEME)
        text = file_name_text(link, colours, link_style=LinkStyle.FULL_LINK_PATHS, target_lookup=lambda entry: target)
        self.assertTrue(text.endswith(DEFAULT_THEME.sequence(Style.DIRECTORY) + "v2" + RESET))

    def test_broken_links_use_broken_styles(self) -> None:
        link = make_entry("dangling", FileType.SYMLINK, link_target="nowhere", link_broken=True)
        colours = Colours(DEFAULT_THEME)
        text = file_name_text(link, colours, link_style=LinkStyle.FULL_LINK_PATHS)
        self.assertIn(DEFAULT_THEME.sequence(Style.BROKEN_ARROW) + "->" + RESET, text)
        self.assertIn(DEFAULT_THEME.sequence(Style.BROKEN_FILENAME) + "nowhere" + RESET, text)

    def test_grid_names_omit_link_targets(self) -> None:
        link = make_entry("latest", FileType.SYMLINK, link_target="v2")
        self.assertEqual(file_name_text(link, Colours.plain(), classify=True), "latest@")


if __name__ == "__main__":
    unittest.main()
