"""Entry point for ``python -m asciiforge``."""

from __future__ import annotations


def main() -> None:
    """Run the asciiforge CLI."""
    from asciiforge.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
