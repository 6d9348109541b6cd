"""lazyls: exa-style directory listings.

``main`` runs the command line in-process and returns its exit status; the
listing, filtering, and rendering layers live in ``lazyls.fs``,
``lazyls.output``, and ``lazyls.listing``.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(argv=None) -> int:
    """Run the CLI with ``argv`` (``sys.argv[1:]`` when ``None``)."""
    from .cli import main as _main

    return _main(argv)


__all__ = ["__version__", "main"]
