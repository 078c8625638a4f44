"""Human-readable rendering of package metadata."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from .models import PackageDetails

UNKNOWN_AUTHOR = "Who even wrote this???"
NO_LICENSE = "None!?"

FAMOUS_AUTHOR = "Sindre Sorhus"
FAMOUS_AUTHOR_NOTE = "<== It's you-know-who again!"
REBEL_LICENSE_NOTE = "<== Oooh, rebel!"
OLD_PACKAGE_NOTE = "<== Pretty darn old in JS years!"

COMMON_LICENSES = {"MIT", "ISC"}

DAYS_PER_YEAR = 365
OLD_PACKAGE_YEARS = 3.5

_URL_SUFFIX = re.compile(r" *\([^)]+\)")


def annotate(text: str, note: str) -> str:
    return f"{text}  {note}"


def underline(text: str) -> str:
    return f"{text}\n{'=' * len(text)}"


def format_authors(details: PackageDetails) -> str:
    """Return the author, else contributors, else maintainers, else a sentinel."""
    if details.author and details.author.strip():
        output = _URL_SUFFIX.sub("", details.author, count=1)
        if FAMOUS_AUTHOR in output:
            return annotate(output, FAMOUS_AUTHOR_NOTE)
        return output

    if details.contributors:
        return ", ".join(details.contributors)

    if details.maintainers:
        return ", ".join(details.maintainers)

    return UNKNOWN_AUTHOR


def format_license(details: PackageDetails) -> str:
    if details.licenses:
        return ", ".join(details.licenses)

    if not details.license:
        return NO_LICENSE

    if details.license not in COMMON_LICENSES:
        return annotate(details.license, REBEL_LICENSE_NOTE)

    return details.license


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    stamp = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def age_in_days(value: str, now: datetime | None = None) -> int:
    """Return the whole days elapsed since ``value``, rounded up."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed = now - parse_timestamp(value)
    return math.ceil(elapsed.total_seconds() / 86400)


def format_age(value: str, now: datetime | None = None) -> str:
    """Render the age of a timestamp as ``N days`` or ``Y years, D days``.

    Ages past three and a half years get a note attached.
    """
    days = age_in_days(value, now)

    if days < DAYS_PER_YEAR:
        return f"{days} days"

    years, remainder = divmod(days, DAYS_PER_YEAR)
    output = f"{years} years, {remainder} days"

    if days / DAYS_PER_YEAR > OLD_PACKAGE_YEARS:
        return annotate(output, OLD_PACKAGE_NOTE)

    return output
