"""Entry point for ``python -m twmarket``."""

from twmarket.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
