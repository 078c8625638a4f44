"""Core entrypoints: read the lockfile and pick a package.

Nothing here talks to the package manager, so these functions can be used
without npm or yarn installed.
"""

from __future__ import annotations

import json
import logging
import random
from collections.abc import Callable
from pathlib import Path

import yaml

from .discovery import LockfileNotFoundError, find_lockfile
from .models import Lockfile, PackageIdentity
from .parsers.package_lock import parse as parse_package_lock
from .parsers.yarn_lock import parse as parse_yarn_lock

log = logging.getLogger(__name__)

PARSERS: dict[str, Callable[[Path], frozenset[PackageIdentity]]] = {
    "npm": parse_package_lock,
    "yarn": parse_yarn_lock,
}


class EmptyPackageSetError(RuntimeError):
    """Raised when a lockfile was read but lists no packages."""


def load_packages(lockfile: Lockfile) -> frozenset[PackageIdentity]:
    """Return the deduplicated packages recorded in ``lockfile``.

    Raises:
        LockfileNotFoundError: If the file cannot be read or parsed.
    """
    parser = PARSERS[lockfile.manager]
    try:
        packages = parser(lockfile.path)
    except OSError as exc:
        raise LockfileNotFoundError(f"Could not read {lockfile.path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise LockfileNotFoundError(f"Could not parse {lockfile.path}: {exc}") from exc

    log.debug("Found %d packages in %s", len(packages), lockfile.path)
    return packages


def choose_package(
    packages: frozenset[PackageIdentity] | set[PackageIdentity],
    rng: random.Random | None = None,
) -> PackageIdentity:
    """Pick one package uniformly at random.

    Candidates are sorted first so a seeded ``rng`` always picks the same one.

    Raises:
        EmptyPackageSetError: If ``packages`` is empty.
    """
    if not packages:
        raise EmptyPackageSetError("The lockfile does not list any packages.")
    rng = rng or random.Random()
    return rng.choice(sorted(packages, key=str))


def pick_package(
    root: Path, rng: random.Random | None = None
) -> tuple[Lockfile, frozenset[PackageIdentity], PackageIdentity]:
    """Find the lockfile under ``root``, read it and choose a package."""
    lockfile = find_lockfile(root)
    packages = load_packages(lockfile)
    return lockfile, packages, choose_package(packages, rng)
