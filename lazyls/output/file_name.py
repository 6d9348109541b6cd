"""File name painting: colour by type, classify indicators, link targets.

When an entry matches several categories (an executable that is also a
symlink, say) the first match in ``STYLE_PRIORITY`` decides its colour, and
the first match in ``CLASSIFY_PRIORITY`` decides its indicator character.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ..fs.filetype import FileKind, file_kind
from ..fs.types import Entry, FileType
from .cell import Cell, WidthMeasurer
from .colours import Colours, Style


class LinkStyle(Enum):
    """Whether symlink targets are shown after the name."""

    JUST_FILENAMES = "just-filenames"
    FULL_LINK_PATHS = "full-link-paths"


STYLE_PRIORITY: tuple[tuple[Callable[[Entry], bool], Style], ...] = (
    (lambda entry: entry.is_directory, Style.DIRECTORY),
    (lambda entry: entry.is_executable_file, Style.EXECUTABLE),
    (lambda entry: entry.is_symlink, Style.SYMLINK),
    (lambda entry: entry.file_type is FileType.PIPE, Style.PIPE),
    (lambda entry: entry.file_type in {FileType.CHAR_DEVICE, FileType.BLOCK_DEVICE}, Style.DEVICE),
    (lambda entry: entry.file_type is FileType.SOCKET, Style.SOCKET),
    (lambda entry: not entry.is_file, Style.SPECIAL),
)

KIND_STYLES: dict[FileKind, Style] = {
    FileKind.IMMEDIATE: Style.IMMEDIATE,
    FileKind.IMAGE: Style.IMAGE,
    FileKind.VIDEO: Style.VIDEO,
    FileKind.MUSIC: Style.MUSIC,
    FileKind.LOSSLESS: Style.LOSSLESS,
    FileKind.CRYPTO: Style.CRYPTO,
    FileKind.DOCUMENT: Style.DOCUMENT,
    FileKind.COMPRESSED: Style.COMPRESSED,
    FileKind.TEMP: Style.TEMP,
    FileKind.COMPILED: Style.COMPILED,
}

CLASSIFY_PRIORITY: tuple[tuple[Callable[[Entry], bool], str], ...] = (
    (lambda entry: entry.is_executable_file, "*"),
    (lambda entry: entry.is_directory, "/"),
    (lambda entry: entry.file_type is FileType.PIPE, "|"),
    (lambda entry: entry.is_symlink, "@"),
    (lambda entry: entry.file_type is FileType.SOCKET, "="),
)

_NAMED_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
}


def file_style(entry: Entry) -> Style:
    """Return the colour category for ``entry``; first match wins."""
    for predicate, style in STYLE_PRIORITY:
        if predicate(entry):
            return style
    kind = file_kind(entry)
    if kind is not None:
        return KIND_STYLES[kind]
    return Style.NORMAL


def classify_char(entry: Entry) -> str | None:
    """Return the ``-F`` indicator for ``entry``, if it has one."""
    for predicate, char in CLASSIFY_PRIORITY:
        if predicate(entry):
            return char
    return None


def is_control_char(ch: str) -> bool:
    return ch < " " or ch == "\x7f"


def escape_control_char(ch: str) -> str:
    named = _NAMED_ESCAPES.get(ch)
    if named is not None:
        return named
    return f"\\x{ord(ch):02x}"


def paint_name(name: str, style: Style, colours: Colours) -> str:
    """Paint ``name``, escaping control characters in their own style."""
    if not any(is_control_char(ch) for ch in name):
        return colours.paint(style, name)

    out: list[str] = []
    run: list[str] = []
    for ch in name:
        if is_control_char(ch):
            if run:
                out.append(colours.paint(style, "".join(run)))
                run = []
            out.append(colours.paint(Style.CONTROL_CHAR, escape_control_char(ch)))
        else:
            run.append(ch)
    if run:
        out.append(colours.paint(style, "".join(run)))
    return "".join(out)


def _split_target(target: str) -> tuple[str, str]:
    slash = target.rfind("/")
    if slash < 0:
        return "", target
    return target[: slash + 1], target[slash + 1 :]


def file_name_text(
    entry: Entry,
    colours: Colours,
    link_style: LinkStyle = LinkStyle.JUST_FILENAMES,
    classify: bool = False,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> str:
    """Render an entry's display name.

    ``target_lookup`` resolves a symlink to the entry it points at so the
    target can be coloured like a file name; without it the target is shown
    in the plain style.
    """
    parts: list[str] = []
    if entry.path_prefix:
        parts.append(colours.paint(Style.SYMLINK_PATH, entry.path_prefix))

    if entry.name:
        parts.append(paint_name(entry.name, file_style(entry), colours))

    if link_style is LinkStyle.FULL_LINK_PATHS and entry.is_symlink and entry.link_target is not None:
        if entry.link_broken:
            parts.append(" ")
            parts.append(colours.paint(Style.BROKEN_ARROW, "->"))
            parts.append(" ")
            parts.append(colours.paint(Style.BROKEN_FILENAME, entry.link_target))
        else:
            parts.append(" ")
            parts.append(colours.paint(Style.PUNCTUATION, "->"))
            parts.append(" ")
            parent, target_name = _split_target(entry.link_target)
            if parent:
                parts.append(colours.paint(Style.SYMLINK_PATH, parent))
            target = target_lookup(entry) if target_lookup is not None else None
            target_style = file_style(target) if target is not None else Style.NORMAL
            if target_name:
                parts.append(paint_name(target_name, target_style, colours))
    elif classify:
        indicator = classify_char(entry)
        if indicator is not None:
            parts.append(indicator)

    return "".join(parts)


def file_name_cell(
    entry: Entry,
    colours: Colours,
    measurer: WidthMeasurer,
    link_style: LinkStyle = LinkStyle.JUST_FILENAMES,
    classify: bool = False,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> Cell:
    text = file_name_text(entry, colours, link_style, classify, target_lookup)
    return Cell.measured(text, measurer)


__all__ = [
    "CLASSIFY_PRIORITY",
    "KIND_STYLES",
    "LinkStyle",
    "STYLE_PRIORITY",
    "classify_char",
    "escape_control_char",
    "file_name_cell",
    "file_name_text",
    "file_style",
    "paint_name",
]
