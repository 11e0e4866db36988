"""Export index builder: one authoritative record per export name."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from rich.console import Console

from pkgscout.exceptions import IndexerError
from pkgscout.indexer.collector import SourceFileCollector
from pkgscout.indexer.parser import ExportParser, ExportRecord

console = Console(stderr=True)


def read_source(path: Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        IndexerError: If the file is missing, unreadable, or not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IndexerError(f"Cannot read {path}: {exc}") from exc


@dataclass(frozen=True)
class ExportIndex:
    """Read-only result of scanning one package.

    Attributes:
        exports: Export name to its authoritative record.
        errors: Per-file or scan-level failures, in the order they happened.
    """

    exports: Mapping[str, ExportRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    errors: tuple[str, ...] = ()

    def get(self, name: str) -> ExportRecord | None:
        """Return the record for name, or None."""
        return self.exports.get(name)


class ExportIndexBuilder:
    """Builds an ExportIndex from a package source tree.

    A true declaration always beats a re-export of the same name; between
    records of equal standing the later file wins.
    """

    def __init__(
        self,
        collector: SourceFileCollector | None = None,
        parser: ExportParser | None = None,
        reader: Callable[[Path], str] = read_source,
        verbose: bool = False,
    ) -> None:
        """Initialize the builder.

        Args:
            collector: Source file collector. A default one is created if omitted.
            parser: Export parser. A default one is created if omitted.
            reader: Reads a file as text, raising IndexerError on failure.
            verbose: Print each per-file failure as it happens.
        """
        self._collector = collector or SourceFileCollector()
        self._parser = parser or ExportParser()
        self._reader = reader
        self._verbose = verbose

    def build(self, source_root: Path) -> ExportIndex:
        """Collect, parse and merge every source file under source_root.

        Never raises for a missing tree or broken files; those end up in
        ``errors``.
        """
        try:
            files = self._collector.scan(source_root)
        except IndexerError as exc:
            console.print(f"[yellow]Warning[/yellow]: Failed to scan {source_root}: {exc}")
            return ExportIndex(errors=(f"Failed to scan src directory: {exc}",))
        return self.build_from_files(files)

    def build_from_files(self, files: Iterable[Path]) -> ExportIndex:
        """Parse files in the given order and merge their exports.

        Args:
            files: Source files, typically the collector's output.

        Returns:
            The merged index with per-file failures in ``errors``.
        """
        exports: dict[str, ExportRecord] = {}
        errors: list[str] = []
        file_count = 0

        for path in files:
            file_count += 1
            try:
                records = self._parser.parse_exports(path, self._reader(path))
            except IndexerError as exc:
                errors.append(f"Failed to parse {path}: {exc}")
                if self._verbose:
                    console.print(f"[yellow]Warning[/yellow]: Skipping {path}: {exc}")
                continue

            for record in records:
                existing = exports.get(record.name)
                if (
                    existing is not None
                    and existing.kind != "reexport"
                    and record.kind == "reexport"
                ):
                    continue
                exports[record.name] = record

        console.print(
            f"[green]Indexer[/green] indexed [bold]{len(exports)}[/bold] "
            f"exports across [bold]{file_count}[/bold] files"
            + (f", [yellow]{len(errors)} failed[/yellow]" if errors else "")
        )
        return ExportIndex(exports=MappingProxyType(exports), errors=tuple(errors))
