"""Package metadata lookup.

Metadata comes from ``npm view <name>@<version> --json``. When npm is not
installed the packument is fetched from the registry over HTTP instead and
reshaped into the same record ``npm view`` would print.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

import requests
from jsonschema import Draft202012Validator
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .models import PackageDetails, PackageIdentity
from .process import CommandError, run, which
from .settings import Settings
from .summary import parse_timestamp

log = logging.getLogger(__name__)

USER_AGENT = "dep-roulette"

_PERSON = {"type": ["string", "object"]}

VIEW_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name", "time"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string"},
        "description": {"type": "string"},
        "homepage": {"type": "string"},
        "time": {
            "type": "object",
            "required": ["created", "modified"],
            "properties": {
                "created": {"type": "string"},
                "modified": {"type": "string"},
            },
        },
        "author": _PERSON,
        "contributors": {"type": "array", "items": _PERSON},
        "maintainers": {"type": "array", "items": _PERSON},
        "license": {"type": ["string", "object"]},
        "licenses": {"type": "array"},
    },
}

_VALIDATOR = Draft202012Validator(VIEW_SCHEMA)


class PackageNotFoundError(RuntimeError):
    """Raised when no usable metadata can be found for a package version."""


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_record(record: Any) -> None:
    """Raise PackageNotFoundError unless ``record`` looks like an ``npm view`` result."""
    errors = sorted(_VALIDATOR.iter_errors(record), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise PackageNotFoundError("Unexpected package metadata:\n" + _format_errors(errors))

    for field in ("created", "modified"):
        value = record["time"][field]
        try:
            parse_timestamp(value)
        except ValueError as exc:
            raise PackageNotFoundError(f"Unreadable time.{field} timestamp: {value!r}") from exc


def packument_url(registry_url: str, name: str) -> str:
    """Return the registry URL of a package document; scoped names keep their ``@``."""
    return f"{registry_url.rstrip('/')}/{quote(name, safe='@')}"


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(1))
def _http_get(url: str, timeout: float) -> Response:
    return requests.get(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=timeout,
    )


def _fetch_from_registry(identity: PackageIdentity, settings: Settings) -> Any:
    url = packument_url(settings.registry_url, identity.name)
    try:
        response = _http_get(url, settings.timeout)
    except requests.RequestException as exc:
        raise PackageNotFoundError(f"Failed to fetch {url}: {exc}") from exc

    if response.status_code != 200:
        raise PackageNotFoundError(f"Unexpected status code {response.status_code} fetching {url}")

    try:
        packument = response.json()
    except ValueError as exc:
        raise PackageNotFoundError(f"Invalid JSON from {url}") from exc

    versions = packument.get("versions") if isinstance(packument, dict) else None
    manifest = versions.get(identity.version) if isinstance(versions, dict) else None
    if not isinstance(manifest, dict):
        raise PackageNotFoundError(f"{identity} is not published on {settings.registry_url}")

    record = dict(manifest)
    record["time"] = packument.get("time")
    if "maintainers" not in record and "maintainers" in packument:
        record["maintainers"] = packument["maintainers"]
    return record


def _view_with_npm(npm: str, identity: PackageIdentity, settings: Settings) -> Any:
    try:
        output = run(npm, "view", str(identity), "--json", cwd=settings.root, timeout=settings.timeout)
    except CommandError as exc:
        raise PackageNotFoundError(str(exc)) from exc

    try:
        record = json.loads(output)
    except json.JSONDecodeError as exc:
        raise PackageNotFoundError(f"npm view returned no usable JSON for {identity}") from exc

    # Several matching versions come back as a list, oldest first.
    if isinstance(record, list):
        return record[-1] if record else None
    return record


def describe_package(identity: PackageIdentity, settings: Settings) -> PackageDetails:
    """Return registry metadata for ``identity``.

    Raises:
        PackageNotFoundError: If the lookup fails or returns an unexpected shape.
    """
    npm = which(settings.npm_binary)
    if npm is None:
        log.debug("%s not found on PATH, querying %s", settings.npm_binary, settings.registry_url)
        record = _fetch_from_registry(identity, settings)
    else:
        record = _view_with_npm(npm, identity, settings)

    validate_record(record)
    return PackageDetails.from_record(record)
