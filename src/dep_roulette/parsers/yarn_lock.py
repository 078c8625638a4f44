"""Parse yarn.lock to capture resolved dependencies.

A yarn lockfile is a flat map from dependency patterns to resolution records::

    "@babel/code-frame@^7.0.0", "@babel/code-frame@^7.10.4":
      version "7.12.13"
      resolved "https://registry.yarnpkg.com/@babel/code-frame/-/code-frame-7.12.13.tgz"

Pattern grammar::

    key   := entry ("," entry)*
    entry := name "@" range
    name  := "@" scope "/" ident | ident
    range := everything after the "@" that ends the name

The name ends at the first ``@`` past the optional scope prefix, so scoped
names and alias ranges such as ``npm:@scope/pkg@^1`` split correctly. The
range is discarded: identities always carry the record's resolved version.

Yarn 1 writes its own indentation-based syntax; Yarn 2+ ("berry") writes YAML
with a ``__metadata`` block. Both produce the same flat map.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ..models import PackageIdentity

log = logging.getLogger(__name__)

_BERRY_MARKER = "__metadata:"
_WORKSPACE_PROTOCOL = "workspace:"


def _unquote(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        try:
            return json.loads(token)
        except json.JSONDecodeError:
            return token[1:-1]
    return token


def _split_key_value(body: str) -> tuple[str, str]:
    if body.startswith('"'):
        idx = 1
        while idx < len(body):
            if body[idx] == "\\":
                idx += 2
                continue
            if body[idx] == '"':
                break
            idx += 1
        key, rest = body[: idx + 1], body[idx + 1 :]
    else:
        key, _, rest = body.partition(" ")
    return _unquote(key), _unquote(rest)


def parse_lockfile_text(text: str) -> dict[str, Any]:
    """Tokenize Yarn 1 lockfile syntax into nested dicts.

    Comma-joined headers produce one top-level key per pattern, all sharing
    the same record.
    """
    entries: dict[str, Any] = {}
    stack: list[tuple[int, dict[str, Any]]] = [(-1, entries)]

    for raw in text.splitlines():
        line = raw.rstrip()
        stripped = line.lstrip(" ")
        if not stripped or stripped.startswith("#"):
            continue

        indent = len(line) - len(stripped)
        while indent <= stack[-1][0]:
            stack.pop()
        current = stack[-1][1]

        if stripped.endswith(":"):
            block: dict[str, Any] = {}
            header = stripped[:-1]
            keys = header.split(",") if current is entries else [header]
            for key in keys:
                current[_unquote(key)] = block
            stack.append((indent, block))
            continue

        key, value = _split_key_value(stripped)
        current[key] = value

    return entries


def split_key(entry: str) -> tuple[str, str] | None:
    """Return ``(name, range)`` for one lockfile pattern, or None if malformed."""
    entry = _unquote(entry)
    scoped = entry.startswith("@")
    at = entry.find("@", 1 if scoped else 0)
    if at < 1:
        return None

    name, spec = entry[:at], entry[at + 1 :]
    if not spec:
        return None
    if scoped:
        scope, _, ident = name[1:].partition("/")
        if not scope or not ident:
            return None
    return name, spec


def extract_flat(entries: Mapping[str, Any]) -> frozenset[PackageIdentity]:
    """Return one identity per well-formed pattern, using the resolved version."""
    found: set[PackageIdentity] = set()

    for key, record in entries.items():
        if not isinstance(key, str) or not isinstance(record, Mapping):
            continue
        version = record.get("version")
        if not isinstance(version, str) or not version:
            log.debug("Skipping %r: no resolved version", key)
            continue

        for entry in key.split(","):
            parsed = split_key(entry)
            if parsed is None:
                log.debug("Skipping malformed lockfile key %r", entry.strip())
                continue
            name, spec = parsed
            if spec.startswith(_WORKSPACE_PROTOCOL):
                continue
            found.add(PackageIdentity(name=name, version=version))

    return frozenset(found)


def load_entries(text: str) -> Mapping[str, Any]:
    """Return the flat pattern map of a Yarn 1 or Yarn 2+ lockfile."""
    if any(line.startswith(_BERRY_MARKER) for line in text.splitlines()):
        data = yaml.safe_load(text) or {}
        return data if isinstance(data, Mapping) else {}
    return parse_lockfile_text(text)


def parse(path: Path) -> frozenset[PackageIdentity]:
    """Return the identities recorded in a yarn.lock file."""
    return extract_flat(load_entries(path.read_text(encoding="utf-8")))
