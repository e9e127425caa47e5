"""Command-line entry point: ``python -m tickstore`` or ``tickstore``."""

from __future__ import annotations

import argparse
import logging

from textual.logging import TextualHandler

from tickstore.app import TickApp
from tickstore.store import CHEAP_INTERVAL, EXPENSIVE_INTERVAL


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tickstore",
        description="Observable store demo: two entities ticking at different rates.",
    )
    parser.add_argument(
        "--cheap-interval", type=_positive_float, default=CHEAP_INTERVAL,
        help="seconds between cheap entity refreshes (default: %(default)s)",
    )
    parser.add_argument(
        "--expensive-interval", type=_positive_float, default=EXPENSIVE_INTERVAL,
        help="seconds between expensive entity refreshes (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for the textual devtools console (default: %(default)s)",
    )
    parser.add_argument(
        "--autostart", action="store_true",
        help="start the timers as soon as the app is mounted",
    )
    return parser


def build_app(args: argparse.Namespace) -> TickApp:
    return TickApp(
        autostart=args.autostart,
        cheap_interval=args.cheap_interval,
        expensive_interval=args.expensive_interval,
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    # stderr belongs to the TUI; records go to `textual console`.
    logging.basicConfig(level=args.log_level, handlers=[TextualHandler()])
    build_app(args).run()


if __name__ == "__main__":
    main()
