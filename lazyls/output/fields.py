"""Formatting of individual detail-view fields into cells.

Covers permissions, sizes, owners, link counts, inodes, blocks, timestamps,
and git status codes. Numbers are formatted here; alignment is applied later
by the table aggregator.
"""

from __future__ import annotations

import logging
import stat
from datetime import datetime, tzinfo
from enum import Enum

from ..fs.types import Entry, FileType
from ..users import UserCache
from .cell import Cell, WidthMeasurer
from .colours import SIZE_BUCKETS, Colours, Style

logger = logging.getLogger(__name__)

DECIMAL_PREFIXES: tuple[str, ...] = ("k", "M", "G", "T", "P", "E", "Z", "Y")
BINARY_PREFIXES: tuple[str, ...] = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")


class SizeFormat(Enum):
    DECIMAL = "decimal"
    BINARY = "binary"
    BYTES = "bytes"


class TimeFormat(Enum):
    DEFAULT = "default"
    ISO = "iso"
    LONG_ISO = "long-iso"
    FULL_ISO = "full-iso"


class TimeType(Enum):
    MODIFIED = "modified"
    ACCESSED = "accessed"
    CREATED = "created"

    @property
    def header(self) -> str:
        return f"Date {self.value.capitalize()}"

    def timestamp(self, entry: Entry) -> int:
        if self is TimeType.MODIFIED:
            return entry.modified_time
        if self is TimeType.ACCESSED:
            return entry.accessed_time
        return entry.created_time


def format_size(size: int, size_format: SizeFormat) -> tuple[str, str]:
    """Return ``(number, unit)`` text for a byte count.

    Values below one unit print as whole numbers with no unit; values below
    ten units keep one decimal place.
    """
    if size_format is SizeFormat.BYTES:
        return f"{size:,}", ""

    if size_format is SizeFormat.BINARY:
        base = 1024
        prefixes = BINARY_PREFIXES
    else:
        base = 1000
        prefixes = DECIMAL_PREFIXES

    if size < base:
        return str(size), ""

    value = float(size)
    prefix_index = -1
    while value >= base and prefix_index < len(prefixes) - 1:
        value /= base
        prefix_index += 1

    if value < 10:
        number = f"{value:.1f}"
    else:
        number = f"{value:.0f}"
    return number, prefixes[prefix_index]


def size_bucket(size: int) -> Style:
    """Pick the colour-scale bucket for ``size`` bytes."""
    bucket = 0
    threshold = 1000
    while size >= threshold and bucket < len(SIZE_BUCKETS) - 1:
        bucket += 1
        threshold *= 1000
    return SIZE_BUCKETS[bucket]


def size_cell(entry: Entry, size_format: SizeFormat, colours: Colours, measurer: WidthMeasurer) -> Cell:
    if entry.is_directory:
        return Cell.measured(colours.paint(Style.PUNCTUATION, "-"), measurer)

    number, unit = format_size(entry.size, size_format)
    if colours.scale:
        number_style = unit_style = size_bucket(entry.size)
    else:
        number_style = Style.SIZE_NUMBER
        unit_style = Style.SIZE_UNIT
    text = colours.paint(number_style, number) + colours.paint(unit_style, unit)
    return Cell.measured(text, measurer)


def _local_datetime(timestamp_ns: int, tz: tzinfo | None) -> datetime:
    seconds = timestamp_ns // 1_000_000_000
    if tz is None:
        return datetime.fromtimestamp(seconds).astimezone()
    return datetime.fromtimestamp(seconds, tz)


def format_time(
    timestamp_ns: int,
    time_format: TimeFormat,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> str:
    """Format a nanosecond timestamp.

    ``default`` and ``iso`` show the time of day for dates in the current
    year (taken from ``now``) and the year otherwise.
    """
    moment = _local_datetime(timestamp_ns, tz)
    if now is None:
        now = datetime.now(moment.tzinfo)
    recent = moment.year == now.year

    if time_format is TimeFormat.DEFAULT:
        if recent:
            return f"{moment.day:>2} {moment:%b %H:%M}"
        return f"{moment.day:>2} {moment:%b}  {moment.year}"
    if time_format is TimeFormat.ISO:
        if recent:
            return f"{moment:%m-%d %H:%M}"
        return f"{moment:%Y-%m-%d}"
    if time_format is TimeFormat.LONG_ISO:
        return f"{moment:%Y-%m-%d %H:%M}"
    nanos = timestamp_ns % 1_000_000_000
    return f"{moment:%Y-%m-%d %H:%M:%S}.{nanos:09d} {moment:%z}"


def time_cell(
    entry: Entry,
    time_type: TimeType,
    time_format: TimeFormat,
    colours: Colours,
    measurer: WidthMeasurer,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> Cell:
    timestamp = time_type.timestamp(entry)
    try:
        text = format_time(timestamp, time_format, now=now, tz=tz)
    except (ValueError, OverflowError, OSError) as exc:
        logger.debug("Unrepresentable %s time %d for %s: %s", time_type.value, timestamp, entry.path, exc)
        return Cell.measured(colours.paint(Style.PUNCTUATION, "-"), measurer)
    return Cell.measured(colours.paint(Style.DATE, text), measurer)


_TYPE_CHAR_STYLES: dict[FileType, Style] = {
    FileType.DIRECTORY: Style.DIRECTORY,
    FileType.SYMLINK: Style.SYMLINK,
    FileType.PIPE: Style.PIPE,
    FileType.SOCKET: Style.SOCKET,
    FileType.CHAR_DEVICE: Style.DEVICE,
    FileType.BLOCK_DEVICE: Style.DEVICE,
    FileType.SPECIAL: Style.SPECIAL,
}


def _bit(colours: Colours, mode: int, mask: int, char: str, style: Style) -> str:
    if mode & mask:
        return colours.paint(style, char)
    return colours.paint(Style.PUNCTUATION, "-")


def _execute_bit(
    colours: Colours,
    mode: int,
    execute_mask: int,
    special_mask: int,
    special_char: str,
    style: Style,
) -> str:
    executable = bool(mode & execute_mask)
    if mode & special_mask:
        char = special_char if executable else special_char.upper()
        return colours.paint(Style.PERM_SPECIAL, char)
    if executable:
        return colours.paint(style, "x")
    return colours.paint(Style.PUNCTUATION, "-")


def permissions_text(entry: Entry, colours: Colours) -> str:
    """Render the type character followed by nine permission bits."""
    type_style = _TYPE_CHAR_STYLES.get(entry.file_type)
    type_char = entry.file_type.type_char
    if type_style is None:
        type_part = colours.paint(Style.PUNCTUATION, type_char)
    else:
        type_part = colours.paint(type_style, type_char)

    mode = entry.mode
    user_execute_style = Style.PERM_USER_EXECUTE_FILE if entry.is_file else Style.PERM_USER_EXECUTE_OTHER
    return "".join(
        (
            type_part,
            _bit(colours, mode, stat.S_IRUSR, "r", Style.PERM_USER_READ),
            _bit(colours, mode, stat.S_IWUSR, "w", Style.PERM_USER_WRITE),
            _execute_bit(colours, mode, stat.S_IXUSR, stat.S_ISUID, "s", user_execute_style),
            _bit(colours, mode, stat.S_IRGRP, "r", Style.PERM_GROUP_READ),
            _bit(colours, mode, stat.S_IWGRP, "w", Style.PERM_GROUP_WRITE),
            _execute_bit(colours, mode, stat.S_IXGRP, stat.S_ISGID, "s", Style.PERM_GROUP_EXECUTE),
            _bit(colours, mode, stat.S_IROTH, "r", Style.PERM_OTHER_READ),
            _bit(colours, mode, stat.S_IWOTH, "w", Style.PERM_OTHER_WRITE),
            _execute_bit(colours, mode, stat.S_IXOTH, stat.S_ISVTX, "t", Style.PERM_OTHER_EXECUTE),
        )
    )


def permissions_cell(entry: Entry, colours: Colours, measurer: WidthMeasurer) -> Cell:
    return Cell.measured(permissions_text(entry, colours), measurer)


def links_cell(entry: Entry, colours: Colours, measurer: WidthMeasurer) -> Cell:
    style = Style.LINKS_MULTI if entry.is_file and entry.links > 1 else Style.LINKS
    return Cell.measured(colours.paint(style, f"{entry.links:,}"), measurer)


def inode_cell(entry: Entry, colours: Colours, measurer: WidthMeasurer) -> Cell:
    return Cell.measured(colours.paint(Style.INODE, str(entry.inode)), measurer)


def blocks_cell(entry: Entry, colours: Colours, measurer: WidthMeasurer) -> Cell:
    if not entry.is_file:
        return Cell.measured(colours.paint(Style.PUNCTUATION, "-"), measurer)
    return Cell.measured(colours.paint(Style.BLOCKS, str(entry.blocks)), measurer)


def user_cell(entry: Entry, users: UserCache, colours: Colours, measurer: WidthMeasurer) -> Cell:
    style = Style.USER_YOU if users.is_current_user(entry.uid) else Style.USER_SOMEONE_ELSE
    return Cell.measured(colours.paint(style, users.user_name(entry.uid)), measurer)


def group_cell(entry: Entry, users: UserCache, colours: Colours, measurer: WidthMeasurer) -> Cell:
    style = Style.GROUP_YOURS if users.is_current_group(entry.gid) else Style.GROUP_NOT_YOURS
    return Cell.measured(colours.paint(style, users.group_name(entry.gid)), measurer)


GIT_CODE_STYLES: dict[str, Style] = {
    "A": Style.GIT_NEW,
    "M": Style.GIT_MODIFIED,
    "D": Style.GIT_DELETED,
    "R": Style.GIT_RENAMED,
    "T": Style.GIT_TYPECHANGE,
}


def git_cell(status: str, colours: Colours, measurer: WidthMeasurer) -> Cell:
    """Paint a two-character git status code one character at a time."""
    text = "".join(
        colours.paint(GIT_CODE_STYLES.get(code, Style.PUNCTUATION), code)
        for code in status
    )
    return Cell.measured(text, measurer)


__all__ = [
    "BINARY_PREFIXES",
    "DECIMAL_PREFIXES",
    "GIT_CODE_STYLES",
    "SizeFormat",
    "TimeFormat",
    "TimeType",
    "blocks_cell",
    "format_size",
    "format_time",
    "git_cell",
    "group_cell",
    "inode_cell",
    "links_cell",
    "permissions_cell",
    "permissions_text",
    "size_bucket",
    "size_cell",
    "time_cell",
    "user_cell",
]
