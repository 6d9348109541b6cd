"""Command-line front door for lazyls.

Parses CLI options, merges them with the persisted config, and measures the
terminal once. Then dispatches into the listing driver.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from . import __version__, config
from .listing import run_listing
from .options import OptionsError, deduce_options
from .output.colours import available_theme_names

LOG_FORMAT = "lazyls: %(levelname)s: %(message)s"


def _non_negative_int(value: str) -> int:
    """argparse type for recursion depth values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyls",
        description="List directory contents as a grid, lines, or a detail table.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to list (default: .).")
    parser.add_argument("-?", "--help", action="help", help="Show this help message and exit.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Log debugging details to stderr.")

    display = parser.add_argument_group("display options")
    display.add_argument("-1", "--oneline", action="store_true", help="Display one entry per line.")
    display.add_argument("-l", "--long", action="store_true", help="Display extended metadata as a table.")
    display.add_argument("-G", "--grid", action="store_true", help="Display entries as a grid (default).")
    display.add_argument("-x", "--across", action="store_true", help="Sort the grid across, rather than downwards.")
    display.add_argument("-R", "--recurse", action="store_true", help="Recurse into directories.")
    display.add_argument("-T", "--tree", action="store_true", help="Recurse into directories as a tree.")
    display.add_argument("-L", "--level", type=_non_negative_int, default=None, metavar="DEPTH", help="Limit the depth of recursion.")
    display.add_argument("-F", "--classify", action="store_true", help="Display type indicator by file names.")
    display.add_argument("--colour", "--color", dest="colour", default=None, metavar="WHEN", help="When to use terminal colours (always, auto, never).")
    display.add_argument("--colour-scale", "--color-scale", dest="colour_scale", action="store_true", help="Highlight levels of file sizes distinctly.")
    display.add_argument("--no-color", action="store_true", help="Disable colour output even on a terminal.")
    display.add_argument("--theme", default=None, help=f"Colour theme name ({', '.join(available_theme_names())}).")

    filtering = parser.add_argument_group("filtering and sorting options")
    filtering.add_argument("-a", "--all", action="count", default=0, help="Show hidden files; twice to also show '.' and '..'.")
    filtering.add_argument("-d", "--list-dirs", action="store_true", help="List directories like regular files.")
    filtering.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    filtering.add_argument("-s", "--sort", default=None, metavar="WORD", help="Which field to sort by.")
    filtering.add_argument("-I", "--ignore-glob", action="append", default=None, metavar="GLOBS", help="Ignore files matching these glob patterns, separated by '|'.")
    filtering.add_argument("--group-directories-first", action="store_true", help="List directories before other files.")

    long_view = parser.add_argument_group("long view options")
    long_view.add_argument("-b", "--binary", action="store_true", help="List file sizes with binary prefixes.")
    long_view.add_argument("-B", "--bytes", action="store_true", help="List file sizes in bytes, without prefixes.")
    long_view.add_argument("-g", "--group", action="store_true", help="List each file's group.")
    long_view.add_argument("-h", "--header", action="store_true", help="Add a header row to each column.")
    long_view.add_argument("-H", "--links", action="store_true", help="List each file's number of hard links.")
    long_view.add_argument("-i", "--inode", action="store_true", help="List each file's inode number.")
    long_view.add_argument("-S", "--blocks", action="store_true", help="List each file's number of file system blocks.")
    long_view.add_argument("-t", "--time", default=None, metavar="WORD", help="Which timestamp field to show.")
    long_view.add_argument("-m", "--modified", action="store_true", help="Use the modified timestamp field.")
    long_view.add_argument("-u", "--accessed", action="store_true", help="Use the accessed timestamp field.")
    long_view.add_argument("-U", "--created", action="store_true", help="Use the created timestamp field.")
    long_view.add_argument("--time-style", default=None, metavar="STYLE", help="How to format timestamps (default, iso, long-iso, full-iso).")
    long_view.add_argument("--git", action="store_true", help="List each file's git status.")
    return parser


def configure_logging(debug: bool, stream: TextIO | None = None) -> None:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("lazyls")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.propagate = False


def _detect_terminal_width(stream: TextIO) -> int | None:
    """Return the width of the terminal behind ``stream``, if it is one."""
    try:
        if not stream.isatty():
            return None
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, list the requested paths, and return an exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    stdout = sys.stdout
    detected_width = _detect_terminal_width(stdout)
    try:
        options = deduce_options(
            args,
            settings=config.load_config(),
            environ=os.environ,
            detected_width=detected_width,
            is_tty=detected_width is not None,
        )
    except OptionsError as exc:
        parser.error(str(exc))

    return run_listing(args.paths, options, stdout, sys.stderr)


def run() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
