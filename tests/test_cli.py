"""Tests for the CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pkgscout.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PKGSCOUT_CACHE_TTL", raising=False)
    monkeypatch.delenv("PKGSCOUT_NODE_MODULES", raising=False)


class TestExports:
    def test_lists_exports(self, make_package: Callable[..., Path]) -> None:
        root = make_package(
            {"Button.tsx": "export const Button = () => null;\nexport type Size = 'sm';\n"}
        )

        result = runner.invoke(app, ["exports", str(root)])

        assert result.exit_code == 0
        assert "Button" in result.output
        assert "Size" in result.output

    def test_kind_filter(self, make_package: Callable[..., Path]) -> None:
        root = make_package(
            {
                "Button.tsx": "export const Button = () => null;\n",
                "sizes.ts": "export type Size = 'sm';\n",
            }
        )

        result = runner.invoke(app, ["exports", str(root), "--kind", "type"])

        assert result.exit_code == 0
        assert "Size" in result.output
        assert "Button" not in result.output

    def test_missing_src(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["exports", str(tmp_path / "nothing")])

        assert result.exit_code == 1
        assert "No exports found" in result.output


class TestFind:
    def test_found(self, make_package: Callable[..., Path]) -> None:
        root = make_package(
            {
                "Button.tsx": "export const Button = () => null;\n",
                "index.ts": "export { Button } from './Button';\n",
            }
        )

        result = runner.invoke(app, ["find", str(root), "Button"])

        assert result.exit_code == 0
        assert "variable" in result.output
        assert "Button.tsx" in result.output

    def test_not_found(self, make_package: Callable[..., Path]) -> None:
        root = make_package({"Button.tsx": "export const Button = () => null;\n"})

        result = runner.invoke(app, ["find", str(root), "Missing"])

        assert result.exit_code == 1
        assert "not found" in result.output.lower()


class TestComponentCommands:
    def test_source(self, node_modules: Path) -> None:
        result = runner.invoke(app, ["source", "Button", "--node-modules", str(node_modules)])

        assert result.exit_code == 0
        assert "Button" in result.output

    def test_source_unknown_component(self, node_modules: Path) -> None:
        result = runner.invoke(app, ["source", "Nope", "--node-modules", str(node_modules)])

        assert result.exit_code == 1

    def test_modules(self, node_modules: Path) -> None:
        result = runner.invoke(app, ["modules", "--node-modules", str(node_modules)])

        assert result.exit_code == 0
        assert "Button" in result.output
        assert "Orphan" in result.output

    def test_utilities(self, node_modules: Path) -> None:
        result = runner.invoke(app, ["utilities", "Flex", "--node-modules", str(node_modules)])

        assert result.exit_code == 0
        assert "flex" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "pkgscout" in result.output
