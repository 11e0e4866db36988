"""Source file discovery for an installed package's src/ tree."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import ClassVar

from rich.console import Console

from pkgscout.exceptions import IndexerError

console = Console(stderr=True)

_SOURCE_EXTENSIONS: frozenset[str] = frozenset({".ts", ".tsx"})

_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        "examples",
        "__tests__",
        "__mocks__",
        "__snapshots__",
        "test",
        "tests",
        "node_modules",
        "dist",
    }
)

_EXCLUDED_FILE_PATTERNS: tuple[str, ...] = (
    "*.test.ts",
    "*.test.tsx",
    "*.spec.ts",
    "*.spec.tsx",
    "*.d.ts",
)


class SourceFileCollector:
    """Finds TypeScript sources under a package source root.

    Test, mock, snapshot, example and build directories are pruned, as are
    declaration files and ``*.test``/``*.spec`` files.

    Usage::

        collector = SourceFileCollector()
        files = collector.collect(Path("/app/node_modules/@patternfly/react-core/src"))
    """

    EXCLUDED_DIRS: ClassVar[frozenset[str]] = _EXCLUDED_DIRS
    EXCLUDED_FILE_PATTERNS: ClassVar[tuple[str, ...]] = _EXCLUDED_FILE_PATTERNS

    def collect(self, source_root: Path) -> list[Path]:
        """Return source files under source_root, or [] if it cannot be read.

        Args:
            source_root: Absolute path to the package's source directory.

        Returns:
            Absolute file paths sorted by path.
        """
        try:
            return self.scan(source_root)
        except IndexerError as exc:
            console.print(f"[yellow]Warning[/yellow]: {exc}")
            return []

    def scan(self, source_root: Path) -> list[Path]:
        """Walk source_root and return matching source files.

        Args:
            source_root: Absolute path to the package's source directory.

        Returns:
            Absolute file paths sorted by path.

        Raises:
            IndexerError: If source_root is missing or cannot be listed.
        """
        root = Path(source_root).absolute()
        if not root.is_dir():
            raise IndexerError(f"Source directory does not exist: {root}")

        def _on_error(exc: OSError) -> None:
            if exc.filename is not None and Path(exc.filename) == root:
                raise IndexerError(f"Cannot read source directory {root}: {exc}") from exc
            console.print(f"[yellow]Warning[/yellow]: Skipping {exc.filename}: {exc.strerror}")

        results: list[Path] = []
        for dirpath_str, dirnames, filenames in os.walk(root, topdown=True, onerror=_on_error):
            dirnames[:] = [d for d in dirnames if d not in self.EXCLUDED_DIRS]
            dirpath = Path(dirpath_str)
            for fname in filenames:
                if self._is_source_file(fname):
                    results.append(dirpath / fname)

        results.sort()
        console.print(f"[green]Collector[/green] found [bold]{len(results)}[/bold] source files")
        return results

    def _is_source_file(self, filename: str) -> bool:
        """Return True for .ts/.tsx files not matching an exclusion pattern."""
        if Path(filename).suffix not in _SOURCE_EXTENSIONS:
            return False
        return not any(fnmatch.fnmatch(filename, pat) for pat in self.EXCLUDED_FILE_PATTERNS)
