"""Explain where a package sits in the project's dependency tree."""

from __future__ import annotations

import json
import logging

from .models import PackageIdentity
from .process import CommandError, run, which
from .settings import Settings

log = logging.getLogger(__name__)


def _failure(manager: str) -> str:
    return f"Could not get usage information from {manager}."


def format_yarn_why(output: str, name: str) -> str:
    """Render ``yarn why --json`` output (one JSON document per line).

    Raises:
        ValueError: If a line is not valid JSON.
    """
    records = [json.loads(line) for line in output.strip().splitlines() if line.strip()]
    for record in records:
        if isinstance(record, dict) and record.get("type") == "list":
            data = record.get("data")
            items = data.get("items") if isinstance(data, dict) else None
            if not isinstance(items, list):
                raise ValueError("yarn why list record has no items")
            return "\n".join(
                item.replace('"', "").replace("#", " => ") for item in items if isinstance(item, str)
            )
    return f"{name} is a direct dependency of the project."


def why_is_package_used(identity: PackageIdentity, manager: str, settings: Settings) -> str:
    """Return a human-readable explanation of why ``identity`` is installed.

    Never raises: failures come back as a diagnostic line instead.
    """
    name = identity.name
    try:
        if manager == "npm":
            npm = which(settings.npm_binary) or settings.npm_binary
            output = run(npm, "ls", name, cwd=settings.root, timeout=settings.timeout)
            return output.strip()

        yarn = which(settings.yarn_binary) or settings.yarn_binary
        output = run(yarn, "why", name, "--json", cwd=settings.root, timeout=settings.timeout)
        return format_yarn_why(output, name)
    except (CommandError, ValueError) as exc:
        log.debug("Usage lookup for %s failed: %s", identity, exc)
        return _failure(manager)
