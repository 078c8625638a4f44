"""Parse npm package-lock.json into the set of installed package identities."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..models import PackageIdentity

log = logging.getLogger(__name__)

_NODE_MODULES = "node_modules/"


def _visit(dependencies: Any, found: set[PackageIdentity]) -> None:
    if not isinstance(dependencies, Mapping):
        return
    for name, node in dependencies.items():
        if not isinstance(node, Mapping):
            continue
        version = node.get("version")
        if not name:
            log.debug("Skipping unnamed node")
        elif isinstance(version, str) and version:
            found.add(PackageIdentity(name=str(name), version=version))
        else:
            log.debug("Skipping %s: no resolved version", name)
        _visit(node.get("dependencies"), found)


def extract_nested(root: Mapping[str, Any]) -> frozenset[PackageIdentity]:
    """Return every named node reachable through ``dependencies``.

    The root node itself is never included. A ``dependencies`` value that is
    not a mapping turns its node into a leaf.
    """
    found: set[PackageIdentity] = set()
    _visit(root.get("dependencies"), found)
    return frozenset(found)


def extract_packages_map(packages: Mapping[str, Any]) -> frozenset[PackageIdentity]:
    """Return identities from the lockfile v2+ ``packages`` map.

    Keys look like ``node_modules/a/node_modules/@scope/b``; the root entry
    (``""``), workspace folders and symlinked entries are skipped.
    """
    found: set[PackageIdentity] = set()
    for key, meta in packages.items():
        if not isinstance(meta, Mapping) or meta.get("link"):
            continue
        if not isinstance(key, str) or _NODE_MODULES not in key:
            continue
        name = key.rsplit(_NODE_MODULES, 1)[1]
        version = meta.get("version")
        if name and isinstance(version, str) and version:
            found.add(PackageIdentity(name=name, version=version))
    return frozenset(found)


def parse(path: Path) -> frozenset[PackageIdentity]:
    """Return the identities recorded in a package-lock.json file.

    Lockfile v1 and v2 carry the nested ``dependencies`` tree; v3 only has the
    flat ``packages`` map, which is used when the tree is absent.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        return frozenset()

    if "dependencies" in data:
        return extract_nested(data)

    packages = data.get("packages")
    if isinstance(packages, Mapping):
        return extract_packages_map(packages)

    return frozenset()
