"""Allow ``python -m lazyls PATH...``; exits with the listing's status."""

from .cli import run


if __name__ == "__main__":
    run()
