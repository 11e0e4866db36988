"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from pkgscout.indexer.resolver import clear_export_cache
from pkgscout.packages import clear_modules_cache


@pytest.fixture(autouse=True)
def _isolated_caches() -> Iterator[None]:
    """Keep the process-wide caches from leaking between tests."""
    clear_export_cache()
    clear_modules_cache()
    yield
    clear_export_cache()
    clear_modules_cache()


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a factory writing ``{relative_path: text}`` under <tmp>/pkg/src."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "pkg"
        for rel, text in files.items():
            path = root / "src" / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def node_modules(tmp_path: Path) -> Path:
    """A node_modules tree with @patternfly/react-core and @patternfly/react-styles."""
    root = tmp_path / "node_modules"

    core = root / "@patternfly" / "react-core"
    (core / "src" / "components" / "Button").mkdir(parents=True)
    (core / "dist").mkdir()
    (core / "package.json").write_text(
        json.dumps({"name": "@patternfly/react-core", "version": "6.1.0"}), encoding="utf-8"
    )
    (core / "dist" / "dynamic-modules.json").write_text(
        json.dumps(
            {
                "Button": "dist/dynamic/components/Button",
                "Orphan": "dist/dynamic/components/Orphan",
            }
        ),
        encoding="utf-8",
    )
    (core / "src" / "components" / "Button" / "Button.tsx").write_text(
        "export const Button = () => null;\n", encoding="utf-8"
    )
    (core / "src" / "components" / "Button" / "index.ts").write_text(
        "export { Button } from './Button';\n", encoding="utf-8"
    )

    styles = root / "@patternfly" / "react-styles"
    (styles / "css" / "utilities" / "Flex").mkdir(parents=True)
    (styles / "package.json").write_text(json.dumps({"version": "6.1.0"}), encoding="utf-8")
    (styles / "css" / "utilities" / "Flex" / "flex.css").write_text(
        ".pf-v6-u-display-flex { display: flex; }\n", encoding="utf-8"
    )
    return root
