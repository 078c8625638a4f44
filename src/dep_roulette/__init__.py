"""dep-roulette core package.

Reads a project's lockfile, picks one installed package at random and
describes it using the package manager.
"""

__version__ = "0.1.0"

__all__ = [
    "core",
    "cli",
]
