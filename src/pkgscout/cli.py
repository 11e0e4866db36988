"""Typer CLI entry point for pkgscout.

Bridges the synchronous Typer world to the async tool functions via asyncio.run().
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from pkgscout import __version__
from pkgscout.config import ScoutConfig, load_config
from pkgscout.exceptions import ScoutError
from pkgscout.indexer.index import ExportIndexBuilder
from pkgscout.indexer.resolver import ExportSourceResolver
from pkgscout.tools import ToolResult
from pkgscout.tools.components import (
    UTILITY_CLASSES,
    get_available_modules,
    get_component_source_code,
    get_utility_classes,
)

app = typer.Typer(
    name="pkgscout",
    help="pkgscout: find where a UI package defines its exports.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

NodeModulesOption = Annotated[
    Optional[Path],
    typer.Option("--node-modules", help="node_modules directory (default: ./node_modules)"),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Print every file that fails to parse")
]


def _error_exit(message: str, hint: str | None = None) -> NoReturn:
    """Print a styled error and exit."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
    raise typer.Exit(code=1)


def _load(verbose: bool = False) -> ScoutConfig:
    try:
        config = load_config(Path.cwd())
    except ScoutError as exc:
        _error_exit(str(exc))
    if verbose:
        config.log_level = "DEBUG"
    return config


def _resolver(config: ScoutConfig) -> ExportSourceResolver:
    return ExportSourceResolver(
        builder=ExportIndexBuilder(verbose=config.verbose),
        ttl_seconds=config.cache_ttl,
    )


def _tool_output(result: ToolResult) -> str:
    if not result.success:
        _error_exit(result.error or "Unknown error")
    return result.output


@app.command()
def exports(
    package_root: Annotated[Path, typer.Argument(help="Package directory (holds package.json and src/)")],
    kind: Annotated[
        Optional[str], typer.Option("--kind", "-k", help="Only show exports of this kind")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """List every export found in a package's src/ tree."""
    config = _load(verbose)
    index = _resolver(config).scan_package_exports(package_root)

    if not index.exports and index.errors:
        for error in index.errors:
            console.print(f"[yellow]{error}[/yellow]")
        _error_exit(f"No exports found in {package_root}")

    table = Table(title=f"Exports of {package_root}", border_style="cyan", header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Default")
    table.add_column("File", style="dim")

    shown = 0
    for name in sorted(index.exports):
        record = index.exports[name]
        if kind and record.kind != kind:
            continue
        table.add_row(name, record.kind, "yes" if record.is_default else "", record.file_path)
        shown += 1

    console.print(table)
    console.print(f"[green]{shown}[/green] exports shown")
    if index.errors:
        console.print(f"[yellow]{len(index.errors)} file(s) could not be parsed.[/yellow]")
        if config.verbose:
            for error in index.errors:
                console.print(f"  [dim]{error}[/dim]")


@app.command()
def find(
    package_root: Annotated[Path, typer.Argument(help="Package directory (holds package.json and src/)")],
    name: Annotated[str, typer.Argument(help="Export name, e.g. Button")],
) -> None:
    """Show the file that defines an export."""
    config = _load()
    record = _resolver(config).find_export_source(package_root, name)
    if record is None:
        _error_exit(f'Export "{name}" not found in {package_root}')

    console.print(f"[bold]{record.name}[/bold] ({record.kind}{', default' if record.is_default else ''})")
    console.print(record.file_path, soft_wrap=True)


@app.command()
def source(
    component: Annotated[str, typer.Argument(help="Component name, e.g. Button")],
    package: Annotated[Optional[str], typer.Option("--package", "-p", help="npm package name")] = None,
    node_modules: NodeModulesOption = None,
) -> None:
    """Print the source file that defines a component."""
    config = _load()
    result = asyncio.run(
        get_component_source_code(
            component,
            package_name=package or config.default_package,
            node_modules_root=node_modules or config.node_modules_root,
            resolver=_resolver(config),
        )
    )
    console.print(Syntax(_tool_output(result), "tsx", line_numbers=True))


@app.command()
def modules(
    package: Annotated[Optional[str], typer.Argument(help="npm package name")] = None,
    node_modules: NodeModulesOption = None,
) -> None:
    """List the modules a package exposes."""
    config = _load()
    result = asyncio.run(
        get_available_modules(
            package or config.default_package,
            node_modules_root=node_modules or config.node_modules_root,
        )
    )
    output = _tool_output(result)
    for module_name in filter(None, output.split(";")):
        console.print(module_name)


@app.command()
def utilities(
    name: Annotated[
        str, typer.Argument(help=f"Utility set: {', '.join(UTILITY_CLASSES)}")
    ],
    node_modules: NodeModulesOption = None,
) -> None:
    """Print the CSS utility classes of one utility set."""
    config = _load()
    result = asyncio.run(
        get_utility_classes(name, node_modules_root=node_modules or config.node_modules_root)
    )
    console.print(Syntax(_tool_output(result), "css"))


@app.command()
def version() -> None:
    """Show the pkgscout version."""
    console.print(f"pkgscout {__version__}")
