"""Registry metadata for a single package version."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any


def _person_to_str(person: Any) -> str | None:
    """Render an npm person field (string or ``{name, email, url}`` object)."""
    if isinstance(person, str):
        return person.strip() or None
    if isinstance(person, Mapping):
        name = str(person.get("name") or "").strip()
        email = str(person.get("email") or "").strip()
        if name and email:
            return f"{name} <{email}>"
        return name or email or None
    return None


def _people(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    rendered = (_person_to_str(value) for value in values)
    return tuple(person for person in rendered if person)


def _license_to_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, Mapping):
        kind = value.get("type")
        if isinstance(kind, str) and kind.strip():
            return kind.strip()
    return None


def _license_types(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    rendered = (_license_to_str(value) for value in values)
    return tuple(kind for kind in rendered if kind)


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass(frozen=True, slots=True)
class PackageDetails:
    """Fields of an ``npm view`` record consumed by the summary renderer."""

    name: str
    version: str | None = None
    description: str = ""
    homepage: str | None = None
    created: str | None = None
    modified: str | None = None
    author: str | None = None
    contributors: tuple[str, ...] = ()
    maintainers: tuple[str, ...] = ()
    license: str | None = None
    licenses: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> PackageDetails:
        """Build details from an ``npm view --json`` record or merged packument."""
        time = record.get("time")
        if not isinstance(time, Mapping):
            time = {}
        description = record.get("description")
        return cls(
            name=str(record["name"]),
            version=_optional_str(record.get("version")),
            description=description if isinstance(description, str) else "",
            homepage=_optional_str(record.get("homepage")),
            created=_optional_str(time.get("created")),
            modified=_optional_str(time.get("modified")),
            author=_person_to_str(record.get("author")),
            contributors=_people(record.get("contributors")),
            maintainers=_people(record.get("maintainers")),
            license=_license_to_str(record.get("license")),
            licenses=_license_types(record.get("licenses")),
        )
