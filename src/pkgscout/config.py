"""Configuration management for pkgscout.

Settings are loaded from three sources in order of priority:
1. Environment variables (highest priority)
2. Project-level config: .pkgscout/config.toml
3. Global config: ~/.config/pkgscout/config.toml (lowest priority)
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console

from pkgscout.cache import TTL_SECONDS
from pkgscout.exceptions import ConfigError

console = Console(stderr=True)

_GLOBAL_CONFIG_PATH = Path.home() / ".config" / "pkgscout" / "config.toml"

DEFAULT_PACKAGE = "@patternfly/react-core"


@dataclass
class ScoutConfig:
    """pkgscout configuration.

    Attributes:
        node_modules_root: node_modules directory to search. None means
            ``<cwd>/node_modules``.
        default_package: Package used when a command omits one.
        cache_ttl: Lifetime of cached export indexes, in seconds.
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR).
    """

    node_modules_root: Path | None = None
    default_package: str = DEFAULT_PACKAGE
    cache_ttl: float = TTL_SECONDS
    log_level: str = "INFO"

    @property
    def verbose(self) -> bool:
        return self.log_level == "DEBUG"


def load_config(project_dir: Path) -> ScoutConfig:
    """Load configuration from env vars, project config, and global config.

    Priority: env vars > .pkgscout/config.toml > ~/.config/pkgscout/config.toml

    Args:
        project_dir: Directory holding the optional .pkgscout/ folder.

    Returns:
        A fully resolved ScoutConfig instance.

    Raises:
        ConfigError: If a numeric setting cannot be parsed.
    """
    config = ScoutConfig()

    _apply_toml(config, _load_toml(_GLOBAL_CONFIG_PATH))
    _apply_toml(config, _load_toml(project_dir / ".pkgscout" / "config.toml"))
    _apply_env(config)

    return config


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file, returning an empty dict if missing or invalid."""
    if not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not parse {path}: {exc}")
        return {}


def _apply_toml(config: ScoutConfig, settings: dict[str, Any]) -> None:
    """Merge TOML settings into a ScoutConfig."""
    if "node_modules_root" in settings:
        config.node_modules_root = Path(str(settings["node_modules_root"])).expanduser()
    if "default_package" in settings:
        config.default_package = str(settings["default_package"])
    if "cache_ttl" in settings:
        config.cache_ttl = _parse_ttl(settings["cache_ttl"], "cache_ttl")
    if "log_level" in settings:
        config.log_level = str(settings["log_level"]).upper()


def _apply_env(config: ScoutConfig) -> None:
    """Override config with environment variables where set."""
    if node_modules := os.environ.get("PKGSCOUT_NODE_MODULES"):
        config.node_modules_root = Path(node_modules).expanduser()
    if package := os.environ.get("PKGSCOUT_DEFAULT_PACKAGE"):
        config.default_package = package
    if ttl := os.environ.get("PKGSCOUT_CACHE_TTL"):
        config.cache_ttl = _parse_ttl(ttl, "PKGSCOUT_CACHE_TTL")
    if log_level := os.environ.get("PKGSCOUT_LOG_LEVEL"):
        config.log_level = log_level.upper()


def _parse_ttl(value: Any, source: str) -> float:
    try:
        ttl = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source} must be a number of seconds, got {value!r}") from exc
    if ttl < 0:
        raise ConfigError(f"{source} must not be negative, got {value!r}")
    return ttl
