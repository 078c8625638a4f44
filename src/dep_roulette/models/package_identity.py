"""Package identity model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PackageIdentity:
    """A resolved dependency, rendered as ``name@version``."""

    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")
        if not self.version:
            raise ValueError("Package version must be non-empty")

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
