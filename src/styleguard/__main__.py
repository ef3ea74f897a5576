"""Run the linter with ``python -m styleguard``."""

from styleguard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
