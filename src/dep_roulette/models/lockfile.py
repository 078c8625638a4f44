"""Lockfile location model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_VALID_MANAGERS = {"npm", "yarn"}


@dataclass(frozen=True)
class Lockfile:
    """A lockfile found on disk and the package manager that owns it."""

    path: Path
    manager: str

    def __post_init__(self) -> None:
        if self.manager not in _VALID_MANAGERS:
            raise ValueError(f"Invalid package manager: {self.manager}")
