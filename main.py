#!/usr/bin/env python3

from currency_hub.cli.interface import run_cli


def main() -> None:
    """Точка входа Currency Hub CLI."""
    try:
        run_cli()
    except KeyboardInterrupt:
        print("\nВыход из Currency Hub.")


if __name__ == "__main__":
    main()
