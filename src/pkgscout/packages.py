"""Locating installed packages under a node_modules root."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pkgscout.cache import TTLCache
from pkgscout.exceptions import PackageError, PackageNotFoundError

MODULES_MAP_PATH = Path("dist") / "dynamic-modules.json"

_modules_cache: TTLCache[Mapping[str, str]] = TTLCache()


@dataclass(frozen=True)
class PackageStatus:
    """Result of looking up a package.

    Attributes:
        exists: Whether the package manifest was found and parsed.
        version: The manifest's ``version`` field ("" if absent).
        package_root: Directory holding package.json ("" if not found).
        error: Why the lookup failed, when it did.
    """

    exists: bool
    version: str = ""
    package_root: str = ""
    error: str | None = None


def node_modules_dir(node_modules_root: Path | str | None = None) -> Path:
    """Return the node_modules directory to search.

    An explicit root is used as-is; otherwise ``<cwd>/node_modules``.
    """
    if node_modules_root:
        return Path(node_modules_root)
    return Path.cwd() / "node_modules"


def verify_local_package(
    package_name: str, node_modules_root: Path | str | None = None
) -> PackageStatus:
    """Check that a package is installed and read its version.

    Args:
        package_name: npm package name, e.g. "@patternfly/react-core".
        node_modules_root: node_modules directory. Defaults to ./node_modules.

    Returns:
        A PackageStatus; failures are reported in ``error``, never raised.
    """
    if not package_name or not isinstance(package_name, str):
        return PackageStatus(exists=False, error=f"Invalid package name: {package_name!r}")

    manifest = node_modules_dir(node_modules_root) / package_name / "package.json"
    try:
        data = _read_json(manifest)
    except PackageError as exc:
        return PackageStatus(
            exists=False, error=f'Error resolving package "{package_name}": {exc}'
        )

    version = data.get("version", "") if isinstance(data, dict) else ""
    return PackageStatus(
        exists=True,
        version=str(version or ""),
        package_root=str(manifest.parent.absolute()),
    )


def require_local_package(
    package_name: str, node_modules_root: Path | str | None = None
) -> PackageStatus:
    """Like verify_local_package, but raise when the package is missing.

    Raises:
        PackageNotFoundError: If the package is not installed.
    """
    status = verify_local_package(package_name, node_modules_root)
    if not status.exists:
        raise PackageNotFoundError(package_name, status.error or "")
    return status


def get_local_modules_map(
    package_name: str, node_modules_root: Path | str | None = None
) -> Mapping[str, str]:
    """Return the package's read-only module name to module path map.

    The map is read from ``<package_root>/dist/dynamic-modules.json`` and
    cached for five minutes per package root.

    Raises:
        PackageNotFoundError: If the package is not installed.
        PackageError: If the modules map is missing or malformed.
    """
    status = require_local_package(package_name, node_modules_root)
    cache_key = f"{package_name}::{status.package_root}"

    cached = _modules_cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        data = _read_json(Path(status.package_root) / MODULES_MAP_PATH)
    except PackageError as exc:
        raise PackageError(
            f'Failed to import modules map from package "{package_name}": {exc}. '
            "Does the modules map exist?"
        ) from exc
    if not isinstance(data, dict):
        raise PackageError(f'Modules map of "{package_name}" is not a JSON object')

    modules = MappingProxyType({str(name): str(path) for name, path in data.items()})
    _modules_cache.put(cache_key, modules)
    return modules


def clear_modules_cache() -> None:
    """Drop every cached modules map."""
    _modules_cache.clear()


def _read_json(path: Path) -> Any:
    """Read and decode a JSON file, wrapping failures in PackageError."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PackageError(f"Cannot read {path}: {exc}") from exc
