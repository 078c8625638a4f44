"""Data models shared by the lockfile readers and the registry client."""

from __future__ import annotations

from .lockfile import Lockfile
from .package_details import PackageDetails
from .package_identity import PackageIdentity

__all__ = [
    "Lockfile",
    "PackageDetails",
    "PackageIdentity",
]
