"""Semantic styles and the ANSI palettes that paint them.

Renderers only ever name a ``Style``; the escape sequences live in the
themes below. The plain theme paints nothing, so the same rendering code
serves coloured and uncoloured output.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

RESET = "\033[0m"


class Style(Enum):
    """Closed set of semantic categories a fragment of output can carry."""

    NORMAL = "normal"
    DIRECTORY = "directory"
    EXECUTABLE = "executable"
    SYMLINK = "symlink"
    PIPE = "pipe"
    DEVICE = "device"
    SOCKET = "socket"
    SPECIAL = "special"
    IMMEDIATE = "immediate"
    IMAGE = "image"
    VIDEO = "video"
    MUSIC = "music"
    LOSSLESS = "lossless"
    CRYPTO = "crypto"
    DOCUMENT = "document"
    COMPRESSED = "compressed"
    TEMP = "temp"
    COMPILED = "compiled"

    PUNCTUATION = "punctuation"
    CONTROL_CHAR = "control-char"
    SYMLINK_PATH = "symlink-path"
    BROKEN_ARROW = "broken-arrow"
    BROKEN_FILENAME = "broken-filename"

    PERM_USER_READ = "perm-user-read"
    PERM_USER_WRITE = "perm-user-write"
    PERM_USER_EXECUTE_FILE = "perm-user-execute-file"
    PERM_USER_EXECUTE_OTHER = "perm-user-execute-other"
    PERM_GROUP_READ = "perm-group-read"
    PERM_GROUP_WRITE = "perm-group-write"
    PERM_GROUP_EXECUTE = "perm-group-execute"
    PERM_OTHER_READ = "perm-other-read"
    PERM_OTHER_WRITE = "perm-other-write"
    PERM_OTHER_EXECUTE = "perm-other-execute"
    PERM_SPECIAL = "perm-special"
    PERM_ATTRIBUTE = "perm-attribute"

    SIZE_NUMBER = "size-number"
    SIZE_UNIT = "size-unit"
    SIZE_BUCKET_0 = "size-bucket-0"
    SIZE_BUCKET_1 = "size-bucket-1"
    SIZE_BUCKET_2 = "size-bucket-2"
    SIZE_BUCKET_3 = "size-bucket-3"
    SIZE_BUCKET_4 = "size-bucket-4"

    USER_YOU = "user-you"
    USER_SOMEONE_ELSE = "user-someone-else"
    GROUP_YOURS = "group-yours"
    GROUP_NOT_YOURS = "group-not-yours"

    LINKS = "links"
    LINKS_MULTI = "links-multi"
    INODE = "inode"
    BLOCKS = "blocks"
    DATE = "date"
    HEADER = "header"

    GIT_NEW = "git-new"
    GIT_MODIFIED = "git-modified"
    GIT_DELETED = "git-deleted"
    GIT_RENAMED = "git-renamed"
    GIT_TYPECHANGE = "git-typechange"


SIZE_BUCKETS: tuple[Style, ...] = (
    Style.SIZE_BUCKET_0,
    Style.SIZE_BUCKET_1,
    Style.SIZE_BUCKET_2,
    Style.SIZE_BUCKET_3,
    Style.SIZE_BUCKET_4,
)


@dataclass(frozen=True)
class Theme:
    """Named palette mapping styles to full SGR escape sequences."""

    name: str
    styles: Mapping[Style, str] = field(default_factory=dict)

    def sequence(self, style: Style) -> str:
        return self.styles.get(style, "")


def _freeze(styles: dict[Style, str]) -> Mapping[Style, str]:
    return MappingProxyType(dict(styles))


DEFAULT_THEME = Theme(
    name="default",
    styles=_freeze(
        {
            Style.DIRECTORY: "\033[1;34m",
            Style.EXECUTABLE: "\033[1;32m",
            Style.SYMLINK: "\033[36m",
            Style.PIPE: "\033[33m",
            Style.DEVICE: "\033[1;33m",
            Style.SOCKET: "\033[1;31m",
            Style.SPECIAL: "\033[33m",
            Style.IMMEDIATE: "\033[1;4;33m",
            Style.IMAGE: "\033[38;5;133m",
            Style.VIDEO: "\033[1;38;5;135m",
            Style.MUSIC: "\033[38;5;92m",
            Style.LOSSLESS: "\033[1;38;5;93m",
            Style.CRYPTO: "\033[1;38;5;109m",
            Style.DOCUMENT: "\033[38;5;105m",
            Style.COMPRESSED: "\033[31m",
            Style.TEMP: "\033[38;5;244m",
            Style.COMPILED: "\033[38;5;137m",
            Style.PUNCTUATION: "\033[38;5;244m",
            Style.CONTROL_CHAR: "\033[31m",
            Style.SYMLINK_PATH: "\033[36m",
            Style.BROKEN_ARROW: "\033[31m",
            Style.BROKEN_FILENAME: "\033[4;31m",
            Style.PERM_USER_READ: "\033[1;33m",
            Style.PERM_USER_WRITE: "\033[1;31m",
            Style.PERM_USER_EXECUTE_FILE: "\033[1;4;32m",
            Style.PERM_USER_EXECUTE_OTHER: "\033[1;32m",
            Style.PERM_GROUP_READ: "\033[33m",
            Style.PERM_GROUP_WRITE: "\033[31m",
            Style.PERM_GROUP_EXECUTE: "\033[32m",
            Style.PERM_OTHER_READ: "\033[33m",
            Style.PERM_OTHER_WRITE: "\033[31m",
            Style.PERM_OTHER_EXECUTE: "\033[32m",
            Style.PERM_SPECIAL: "\033[35m",
            Style.PERM_ATTRIBUTE: "\033[38;5;244m",
            Style.SIZE_NUMBER: "\033[1;32m",
            Style.SIZE_UNIT: "\033[32m",
            Style.SIZE_BUCKET_0: "\033[38;5;118m",
            Style.SIZE_BUCKET_1: "\033[38;5;190m",
            Style.SIZE_BUCKET_2: "\033[38;5;226m",
            Style.SIZE_BUCKET_3: "\033[38;5;220m",
            Style.SIZE_BUCKET_4: "\033[38;5;214m",
            Style.USER_YOU: "\033[1;33m",
            Style.USER_SOMEONE_ELSE: "",
            Style.GROUP_YOURS: "\033[1;33m",
            Style.GROUP_NOT_YOURS: "",
            Style.LINKS: "\033[1;31m",
            Style.LINKS_MULTI: "\033[41;1;31m",
            Style.INODE: "\033[35m",
            Style.BLOCKS: "\033[36m",
            Style.DATE: "\033[34m",
            Style.HEADER: "\033[4m",
            Style.GIT_NEW: "\033[32m",
            Style.GIT_MODIFIED: "\033[34m",
            Style.GIT_DELETED: "\033[31m",
            Style.GIT_RENAMED: "\033[33m",
            Style.GIT_TYPECHANGE: "\033[35m",
        }
    ),
)

OCEAN_THEME = Theme(
    name="ocean",
    styles=_freeze(
        {
            **DEFAULT_THEME.styles,
            Style.DIRECTORY: "\033[1;38;5;45m",
            Style.EXECUTABLE: "\033[1;38;5;84m",
            Style.SYMLINK: "\033[38;5;117m",
            Style.SYMLINK_PATH: "\033[38;5;117m",
            Style.PUNCTUATION: "\033[38;5;31m",
            Style.SIZE_NUMBER: "\033[1;38;5;73m",
            Style.SIZE_UNIT: "\033[38;5;73m",
            Style.DATE: "\033[38;5;110m",
            Style.INODE: "\033[38;5;153m",
            Style.GIT_MODIFIED: "\033[38;5;215m",
            Style.GIT_NEW: "\033[38;5;84m",
        }
    ),
)

PLAIN_THEME = Theme(name="plain")

_THEMES: dict[str, Theme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


@dataclass(frozen=True)
class Colours:
    """Paints text fragments for one listing."""

    theme: Theme = PLAIN_THEME
    scale: bool = False

    @classmethod
    def plain(cls) -> Colours:
        return cls(PLAIN_THEME)

    @classmethod
    def colourful(cls, theme_name: str | None = None, scale: bool = False) -> Colours:
        return cls(_THEMES[normalize_theme_name(theme_name)], scale=scale)

    @property
    def is_plain(self) -> bool:
        return not self.theme.styles

    def paint(self, style: Style, text: str) -> str:
        sequence = self.theme.sequence(style)
        if not sequence or not text:
            return text
        return f"{sequence}{text}{RESET}"


__all__ = [
    "Colours",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "RESET",
    "SIZE_BUCKETS",
    "Style",
    "Theme",
    "available_theme_names",
    "normalize_theme_name",
]
