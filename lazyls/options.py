"""Turn parsed command-line arguments into filter and view configuration.

Each ``deduce_*`` function validates one concern and raises
``OptionsError`` for bad words or conflicting flags. Config-file values
fill in whatever the command line leaves unset.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from . import config
from .fs.filter import DotFilter, FileFilter, IgnorePatterns, SortCase, SortField, SortKind
from .output.colours import Colours
from .output.details import TableOptions
from .output.fields import SizeFormat, TimeFormat, TimeType
from .output.grid import GridOptions
from .output.view import Mode, View

logger = logging.getLogger(__name__)


class OptionsError(ValueError):
    """A command-line value was invalid or conflicted with another."""


SORT_WORDS: dict[str, SortField] = {
    "name": SortField.name(SortCase.SENSITIVE),
    "filename": SortField.name(SortCase.SENSITIVE),
    "Name": SortField.name(SortCase.INSENSITIVE),
    "Filename": SortField.name(SortCase.INSENSITIVE),
    "ext": SortField.extension(SortCase.SENSITIVE),
    "extension": SortField.extension(SortCase.SENSITIVE),
    "Ext": SortField.extension(SortCase.INSENSITIVE),
    "Extension": SortField.extension(SortCase.INSENSITIVE),
    "size": SortField.of(SortKind.SIZE),
    "filesize": SortField.of(SortKind.SIZE),
    "mod": SortField.of(SortKind.MODIFIED_DATE),
    "modified": SortField.of(SortKind.MODIFIED_DATE),
    "acc": SortField.of(SortKind.ACCESSED_DATE),
    "accessed": SortField.of(SortKind.ACCESSED_DATE),
    "cr": SortField.of(SortKind.CREATED_DATE),
    "created": SortField.of(SortKind.CREATED_DATE),
    "inode": SortField.of(SortKind.INODE),
    "type": SortField.of(SortKind.FILE_TYPE),
    "none": SortField.unsorted(),
}

TIME_STYLES: dict[str, TimeFormat] = {
    "default": TimeFormat.DEFAULT,
    "iso": TimeFormat.ISO,
    "long-iso": TimeFormat.LONG_ISO,
    "full-iso": TimeFormat.FULL_ISO,
}

TIME_WORDS: dict[str, TimeType] = {
    "mod": TimeType.MODIFIED,
    "modified": TimeType.MODIFIED,
    "acc": TimeType.ACCESSED,
    "accessed": TimeType.ACCESSED,
    "cr": TimeType.CREATED,
    "created": TimeType.CREATED,
}

COLOUR_WORDS: dict[str, str] = {
    "always": "always",
    "auto": "auto",
    "automatic": "auto",
    "never": "never",
}


def _bad_argument(flag: str, word: str, choices: list[str]) -> OptionsError:
    return OptionsError(f"option {flag} has no {word!r} setting (choices: {', '.join(choices)})")


def deduce_sort_field(word: str | None) -> SortField:
    if word is None:
        return SortField.name(SortCase.SENSITIVE)
    field = SORT_WORDS.get(word)
    if field is None:
        raise _bad_argument("--sort", word, list(SORT_WORDS))
    return field


def deduce_dot_filter(all_count: int) -> DotFilter:
    """``-a`` shows dotfiles; ``-aa`` also shows ``.`` and ``..``."""
    if all_count <= 0:
        return DotFilter.JUST_FILES
    if all_count == 1:
        return DotFilter.DOTFILES
    return DotFilter.DOTFILES_AND_DOTS


def split_ignore_globs(values: list[str] | None) -> list[str]:
    """Split each ``-I`` value on ``|`` into individual globs."""
    globs: list[str] = []
    for value in values or []:
        globs.extend(part for part in value.split("|") if part)
    return globs


def deduce_ignore_patterns(globs: list[str]) -> IgnorePatterns:
    """Compile globs, logging the ones that fail and keeping the rest."""
    patterns, errors = IgnorePatterns.parse(globs)
    for error in errors:
        logger.warning("%s", error)
    return patterns


def deduce_file_filter(args: argparse.Namespace, settings: Mapping[str, object]) -> FileFilter:
    sort_word = args.sort if args.sort is not None else config.load_sort_word(dict(settings))
    globs = config.load_ignore_globs(dict(settings)) + split_ignore_globs(args.ignore_glob)
    return FileFilter(
        list_dirs_first=args.group_directories_first or config.load_group_directories_first(dict(settings)),
        sort_field=deduce_sort_field(sort_word),
        reverse=args.reverse,
        dot_filter=deduce_dot_filter(args.all),
        ignore_patterns=deduce_ignore_patterns(globs),
    )


def deduce_size_format(args: argparse.Namespace) -> SizeFormat:
    if args.binary and args.bytes:
        raise OptionsError("options --binary and --bytes conflict")
    if args.binary:
        return SizeFormat.BINARY
    if args.bytes:
        return SizeFormat.BYTES
    return SizeFormat.DECIMAL


def deduce_time_format(word: str | None) -> TimeFormat:
    if word is None:
        return TimeFormat.DEFAULT
    time_format = TIME_STYLES.get(word)
    if time_format is None:
        raise _bad_argument("--time-style", word, list(TIME_STYLES))
    return time_format


def deduce_time_types(args: argparse.Namespace) -> tuple[TimeType, ...]:
    """Pick timestamp columns from ``--time WORD`` or the individual flags.

    Combining ``--time`` with ``--modified``/``--accessed``/``--created`` is
    an error; no selection at all means just the modified time.
    """
    flagged = [
        time_type
        for time_type, present in (
            (TimeType.MODIFIED, args.modified),
            (TimeType.ACCESSED, args.accessed),
            (TimeType.CREATED, args.created),
        )
        if present
    ]
    if args.time is not None:
        if flagged:
            raise OptionsError(f"option --{flagged[0].value} is useless given --time")
        time_type = TIME_WORDS.get(args.time)
        if time_type is None:
            raise _bad_argument("--time", args.time, list(TIME_WORDS))
        return (time_type,)
    if flagged:
        return tuple(flagged)
    return (TimeType.MODIFIED,)


def deduce_table_options(args: argparse.Namespace, settings: Mapping[str, object]) -> TableOptions:
    time_style = args.time_style if args.time_style is not None else config.load_time_style(dict(settings))
    return TableOptions(
        size_format=deduce_size_format(args),
        time_format=deduce_time_format(time_style),
        time_types=deduce_time_types(args),
        inode=args.inode,
        links=args.links,
        blocks=args.blocks,
        group=args.group,
        git=args.git,
    )


def deduce_terminal_width(environ: Mapping[str, str], detected: int | None) -> int | None:
    """Return ``$COLUMNS`` when set, else the detected terminal width."""
    columns = environ.get("COLUMNS")
    if columns is not None and columns.strip():
        try:
            width = int(columns)
        except ValueError as exc:
            raise OptionsError(f"COLUMNS is not a number: {columns!r}") from exc
        if width <= 0:
            raise OptionsError(f"COLUMNS must be positive: {columns!r}")
        return width
    return detected


def deduce_colours(args: argparse.Namespace, settings: Mapping[str, object], is_tty: bool) -> Colours:
    word = args.colour
    if args.no_color:
        word = "never"
    when = "auto"
    if word is not None:
        when = COLOUR_WORDS.get(word, "")
        if not when:
            raise _bad_argument("--colour", word, ["always", "auto", "never"])

    if when == "never" or (when == "auto" and not is_tty):
        return Colours.plain()
    theme = args.theme if args.theme is not None else config.load_theme_name(dict(settings))
    scale = args.colour_scale or config.load_colour_scale(dict(settings))
    return Colours.colourful(theme, scale=scale)


def deduce_mode(args: argparse.Namespace, console_width: int | None) -> tuple[Mode, GridOptions | None]:
    """Pick the view mode, rejecting flags that mean nothing in it.

    ``--long`` gives the details table, laid out as a grid with ``--grid``
    when the terminal width is known, or as a tree with ``--tree``.
    """
    if args.tree:
        if args.all >= 2:
            raise OptionsError("option --tree cannot be combined with --all --all")
        if args.list_dirs:
            raise OptionsError("option --list-dirs is useless given --tree")
    if args.level is not None and not (args.recurse or args.tree):
        raise OptionsError("option --level is useless without --recurse or --tree")

    if args.long:
        if args.oneline:
            raise OptionsError("option --oneline is useless given --long")
        if args.across and not args.grid:
            raise OptionsError("option --across is useless given --long without --grid")
        if args.tree:
            if args.grid:
                raise OptionsError("option --grid is useless given --tree")
            return Mode.TREE, None
        if args.grid and console_width is not None:
            return Mode.GRID_DETAILS, GridOptions(across=args.across, console_width=console_width)
        return Mode.DETAILS, None

    for flag in ("binary", "bytes", "inode", "links", "header", "blocks", "group", "git"):
        if getattr(args, flag):
            raise OptionsError(f"option --{flag} is useless without --long")
    if args.time is not None or args.modified or args.accessed or args.created or args.time_style is not None:
        raise OptionsError("timestamp options are useless without --long")

    if args.tree:
        if args.oneline:
            raise OptionsError("option --oneline is useless given --tree")
        if args.across:
            raise OptionsError("option --across is useless given --tree")
        return Mode.TREE, None
    if args.oneline:
        if args.across:
            raise OptionsError("option --across is useless given --oneline")
        return Mode.LINES, None
    if console_width is None:
        return Mode.LINES, None
    return Mode.GRID, GridOptions(across=args.across, console_width=console_width)


def deduce_view(
    args: argparse.Namespace,
    settings: Mapping[str, object],
    console_width: int | None,
    is_tty: bool,
) -> View:
    mode, grid = deduce_mode(args, console_width)
    table = deduce_table_options(args, settings) if args.long else None
    return View(
        mode=mode,
        colours=deduce_colours(args, settings, is_tty),
        classify=args.classify,
        grid=grid,
        table=table,
        header=args.header,
    )


@dataclass(frozen=True)
class Options:
    """Fully validated options for one invocation."""

    file_filter: FileFilter
    view: View
    recurse: bool = False
    tree: bool = False
    level: int | None = None
    list_dirs: bool = False


def deduce_options(
    args: argparse.Namespace,
    settings: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
    detected_width: int | None = None,
    is_tty: bool = False,
) -> Options:
    """Validate ``args`` against config ``settings`` and the environment."""
    settings = {} if settings is None else settings
    environ = os.environ if environ is None else environ
    console_width = deduce_terminal_width(environ, detected_width)
    return Options(
        file_filter=deduce_file_filter(args, settings),
        view=deduce_view(args, settings, console_width, is_tty),
        recurse=args.recurse,
        tree=args.tree,
        level=args.level,
        list_dirs=args.list_dirs,
    )


__all__ = [
    "Options",
    "OptionsError",
    "SORT_WORDS",
    "deduce_dot_filter",
    "deduce_options",
    "deduce_sort_field",
    "deduce_terminal_width",
    "split_ignore_globs",
]
