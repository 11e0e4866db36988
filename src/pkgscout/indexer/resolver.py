"""Export source resolution backed by a TTL-cached export index.

Module-level helpers share one default resolver; construct an
ExportSourceResolver directly for an isolated cache.
"""

from __future__ import annotations

import os
from pathlib import Path

from pkgscout.cache import TTL_SECONDS, TTLCache
from pkgscout.indexer.index import ExportIndex, ExportIndexBuilder
from pkgscout.indexer.parser import ExportRecord


class ExportSourceResolver:
    """Answers "which file defines export X in package R"."""

    def __init__(
        self,
        cache: TTLCache[ExportIndex] | None = None,
        builder: ExportIndexBuilder | None = None,
        ttl_seconds: float = TTL_SECONDS,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Index cache keyed by package root. Created if omitted.
            builder: Index builder. Created lazily on the first cache miss.
            ttl_seconds: TTL for a newly created cache.
        """
        self.cache: TTLCache[ExportIndex] = cache if cache is not None else TTLCache(ttl_seconds)
        self._builder = builder

    @property
    def builder(self) -> ExportIndexBuilder:
        if self._builder is None:
            self._builder = ExportIndexBuilder()
        return self._builder

    def scan_package_exports(self, package_root: Path | str) -> ExportIndex:
        """Return the export index for package_root, rebuilding on a cache miss.

        The index is built from ``<package_root>/src``. The returned index is
        shared with the cache and must not be mutated.
        """
        key = self._cache_key(package_root)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        index = self.builder.build(Path(key) / "src")
        self.cache.put(key, index)
        return index

    def find_export_source(self, package_root: Path | str, export_name: str) -> ExportRecord | None:
        """Return the authoritative record for export_name, or None."""
        return self.scan_package_exports(package_root).get(export_name)

    def clear_cache(self) -> None:
        """Drop every cached index so the next query rescans."""
        self.cache.clear()

    @staticmethod
    def _cache_key(package_root: Path | str) -> str:
        return os.path.abspath(os.fspath(package_root))


_default_resolver = ExportSourceResolver()


def get_default_resolver() -> ExportSourceResolver:
    """Return the process-wide resolver used by the module-level helpers."""
    return _default_resolver


def scan_package_exports(package_root: Path | str) -> ExportIndex:
    """Scan a package with the default resolver."""
    return _default_resolver.scan_package_exports(package_root)


def find_export_source(package_root: Path | str, export_name: str) -> ExportRecord | None:
    """Find an export's defining record with the default resolver."""
    return _default_resolver.find_export_source(package_root, export_name)


def clear_export_cache() -> None:
    """Clear the default resolver's cache."""
    _default_resolver.clear_cache()
