"""Module entry point for running with python -m flashmap."""

from flashmap.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
