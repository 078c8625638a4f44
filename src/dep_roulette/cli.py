"""Command line entry point: pick a random dependency and describe it.

Usage:
  dep-roulette [--root PATH] [--timeout SECONDS] [--seed N] [--verbose]
"""

from __future__ import annotations

import argparse
import logging
import random
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .core import EmptyPackageSetError, pick_package
from .discovery import LockfileNotFoundError
from .log import setup_logging
from .models import PackageDetails
from .registry import PackageNotFoundError, describe_package
from .settings import ConfigError, load_settings
from .summary import format_age, format_authors, format_license, underline
from .usage import why_is_package_used

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_LOCKFILE = 1
EXIT_NO_PACKAGES = 2
EXIT_BAD_CONFIG = 3

INTRO = "How much do you know about your dependencies? Let's pick one at random."
USAGE_HEADING = "Here's how this package is used in your project:"
FAREWELL = "Have a nice day! Run this again to learn about another package!"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dep-roulette",
        description="Pick a random package from your lockfile and learn about it.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project directory holding package-lock.json or yarn.lock (default: cwd)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each npm/yarn command (default: 10)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a repeatable pick")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser.parse_args(argv)


def print_details(console: Console, details: PackageDetails, now: datetime | None = None) -> None:
    console.print(escape(underline(details.name)), style="bold")
    console.print(escape(details.description))
    console.print()
    if details.homepage:
        console.print(escape(details.homepage), style="underline")
        console.print()
    console.print(f"Authors: {escape(format_authors(details))}")
    console.print(f"License: {escape(format_license(details))}")
    if details.created:
        console.print(f"Package age: {escape(format_age(details.created, now))}")
    if details.modified:
        console.print(f"Version age: {escape(format_age(details.modified, now))}")
    console.print()
    console.print(USAGE_HEADING, style="bold")
    console.print()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    console = Console(highlight=False, emoji=False, soft_wrap=True)
    errors = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

    try:
        settings = load_settings(args.root, timeout=args.timeout, seed=args.seed)
    except ConfigError as exc:
        errors.print(f"ERROR: {escape(str(exc))}", style="bold red")
        return EXIT_BAD_CONFIG

    try:
        lockfile, packages, winner = pick_package(settings.root, random.Random(settings.seed))
    except LockfileNotFoundError as exc:
        errors.print(escape(str(exc)), style="bold red")
        return EXIT_NO_LOCKFILE
    except EmptyPackageSetError as exc:
        errors.print(escape(str(exc)), style="bold red")
        return EXIT_NO_PACKAGES

    console.print()
    console.print(INTRO, style="bold")
    console.print()
    console.print(
        f"OK. I chose [bold green]{escape(str(winner))}[/] "
        f"from [bold yellow]{len(packages)}[/] deduped packages!"
    )
    console.print("Let me tell you a little bit about this package...")
    console.print()

    try:
        details = describe_package(winner, settings)
    except PackageNotFoundError as exc:
        log.debug("Metadata lookup for %s failed: %s", winner, exc)
        errors.print(
            f"I'm sorry, I couldn't find any information about {escape(str(winner))}.",
            style="bold red",
        )
        errors.print()
    else:
        print_details(console, details)

    usage = why_is_package_used(winner, lockfile.manager, settings)
    console.print(escape(usage))
    console.print()
    console.print(FAREWELL)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
