"""Lockfile parsers: one module per lockfile format."""
