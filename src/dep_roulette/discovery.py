"""Lockfile discovery in a project root."""

from __future__ import annotations

from pathlib import Path

from .models import Lockfile

# Checked in order; the first one present wins.
LOCKFILES = (
    ("package-lock.json", "npm"),
    ("yarn.lock", "yarn"),
)


class LockfileNotFoundError(RuntimeError):
    """Raised when no usable lockfile exists in the project root."""


def find_lockfile(root: Path) -> Lockfile:
    """Return the project's lockfile, preferring package-lock.json over yarn.lock."""
    root = root.resolve()
    for filename, manager in LOCKFILES:
        path = root / filename
        if path.is_file():
            return Lockfile(path=path, manager=manager)

    names = " or ".join(filename for filename, _ in LOCKFILES)
    raise LockfileNotFoundError(f"Could not find {names} in {root}.")
