"""Extension-based file kinds used to pick a file name's colour."""

from __future__ import annotations

from enum import Enum

from .types import Entry


class FileKind(Enum):
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


IMMEDIATE_NAMES = frozenset(
    {
        "Makefile",
        "Cargo.toml",
        "SConstruct",
        "CMakeLists.txt",
        "build.gradle",
        "pom.xml",
        "Rakefile",
        "package.json",
        "Gruntfile.js",
        "Gruntfile.coffee",
        "BUILD",
        "BUILD.bazel",
        "WORKSPACE",
        "build.xml",
        "makefile",
        "pyproject.toml",
        "setup.py",
        "Dockerfile",
        "Vagrantfile",
        "justfile",
    }
)

_EXTENSIONS: dict[FileKind, frozenset[str]] = {
    FileKind.IMAGE: frozenset(
        {
            "png", "jpeg", "jpg", "gif", "bmp", "tiff", "tif", "ppm", "pgm", "pbm",
            "pnm", "webp", "raw", "arw", "svg", "stl", "eps", "dvi", "ps", "cbr",
            "jpf", "cbz", "xpm", "ico", "cr2", "orf", "nef", "heic",
        }
    ),
    FileKind.VIDEO: frozenset(
        {
            "avi", "flv", "m2v", "m4v", "mkv", "mov", "mp4", "mpeg", "mpg", "ogm",
            "ogv", "vob", "wmv", "webm", "m2ts",
        }
    ),
    FileKind.MUSIC: frozenset({"aac", "m4a", "mp3", "ogg", "wma", "mka", "opus"}),
    FileKind.LOSSLESS: frozenset({"alac", "ape", "flac", "wav"}),
    FileKind.CRYPTO: frozenset(
        {"asc", "enc", "gpg", "pgp", "sig", "signature", "pfx", "p12", "pem", "crt", "key"}
    ),
    FileKind.DOCUMENT: frozenset(
        {
            "djvu", "doc", "docx", "dvi", "eml", "eps", "fotd", "key", "keynote",
            "numbers", "odp", "odt", "pages", "pdf", "ppt", "pptx", "rtf", "xls",
            "xlsx",
        }
    ),
    FileKind.COMPRESSED: frozenset(
        {
            "zip", "tar", "Z", "z", "gz", "bz2", "a", "ar", "7z", "iso", "dmg",
            "tc", "rar", "par", "tgz", "xz", "txz", "lz", "tlz", "lzma", "deb",
            "rpm", "zst", "whl",
        }
    ),
    FileKind.TEMP: frozenset({"tmp", "swp", "swo", "swn", "bak", "bkp", "bk"}),
    FileKind.COMPILED: frozenset({"class", "elc", "hi", "o", "pyc", "pyo", "zwc", "ko"}),
}

# The order extension kinds are tried in; the first match wins.
KIND_PRIORITY: tuple[FileKind, ...] = (
    FileKind.IMMEDIATE,
    FileKind.IMAGE,
    FileKind.VIDEO,
    FileKind.MUSIC,
    FileKind.LOSSLESS,
    FileKind.CRYPTO,
    FileKind.DOCUMENT,
    FileKind.COMPRESSED,
    FileKind.TEMP,
    FileKind.COMPILED,
)


def _matches_kind(entry: Entry, kind: FileKind) -> bool:
    if kind is FileKind.IMMEDIATE:
        return entry.name.startswith("README") or entry.name in IMMEDIATE_NAMES
    if kind is FileKind.TEMP and (entry.name.endswith("~") or (entry.name.startswith("#") and entry.name.endswith("#"))):
        return True
    if not entry.extension:
        return False
    extensions = _EXTENSIONS[kind]
    return entry.extension in extensions or entry.extension.lower() in extensions


def file_kind(entry: Entry) -> FileKind | None:
    """Return the first matching kind in ``KIND_PRIORITY``, if any."""
    for kind in KIND_PRIORITY:
        if _matches_kind(entry, kind):
            return kind
    return None


__all__ = [
    "FileKind",
    "IMMEDIATE_NAMES",
    "KIND_PRIORITY",
    "file_kind",
]
