"""Module entrypoint for running novelprint as ``python -m novelprint``."""

from __future__ import annotations

from novelprint.cli import main


if __name__ == "__main__":
    main()
