"""pkgscout exception hierarchy.

All exceptions inherit from ScoutError so callers can catch the base
class when they want to handle any pkgscout failure uniformly.
"""

from __future__ import annotations


class ScoutError(Exception):
    """Base exception for all pkgscout errors."""


class ConfigError(ScoutError):
    """Configuration-related errors (malformed values, bad env overrides, etc.)."""


class IndexerError(ScoutError):
    """Errors during source collection or export parsing."""


class PackageError(ScoutError):
    """Errors reading an installed package (manifest, modules map, assets)."""


class PackageNotFoundError(PackageError):
    """The requested package is not installed under the node_modules root."""

    def __init__(self, package_name: str, reason: str = "") -> None:
        message = f'Package "{package_name}" not found locally.'
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.package_name = package_name
