"""Package export indexer: source collection, export parsing, index building, resolution."""

from __future__ import annotations

from pkgscout.indexer.collector import SourceFileCollector
from pkgscout.indexer.index import ExportIndex, ExportIndexBuilder
from pkgscout.indexer.parser import ExportKind, ExportParser, ExportRecord
from pkgscout.indexer.resolver import (
    ExportSourceResolver,
    clear_export_cache,
    find_export_source,
    scan_package_exports,
)

__all__ = [
    "ExportIndex",
    "ExportIndexBuilder",
    "ExportKind",
    "ExportParser",
    "ExportRecord",
    "ExportSourceResolver",
    "SourceFileCollector",
    "clear_export_cache",
    "find_export_source",
    "scan_package_exports",
]
