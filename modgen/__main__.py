# File: modgen/__main__.py
"""
modgen - Module entry point.

Allows running the scaffolder directly via::

    python -m modgen resource blog
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from modgen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
