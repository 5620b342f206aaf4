"""Project settings from .modfather.toml or composer.json."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "php_dependencies"


@dataclass
class Settings:
    exclude: list[str] = field(default_factory=list)
    include_external: bool | None = None


def _settings_from_table(table: dict) -> Settings:
    exclude = table.get("exclude") or []
    if isinstance(exclude, str):
        exclude = [exclude]
    include_external = table.get("include_external")
    return Settings(
        exclude=[str(e) for e in exclude],
        include_external=include_external if isinstance(include_external, bool) else None,
    )


def _read_composer(project_dir: Path) -> dict | None:
    composer = project_dir / "composer.json"
    if not composer.exists():
        return None
    try:
        with open(composer, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Could not parse composer.json: %s", e)
        return None
    return data if isinstance(data, dict) else None


def load_settings(project_dir: Path) -> Settings:
    """Read ``[modfather]`` from .modfather.toml, else composer ``extra.modfather``."""
    config_toml = project_dir / ".modfather.toml"
    if config_toml.exists():
        try:
            with open(config_toml, "rb") as f:
                data = tomllib.load(f)
            return _settings_from_table(data.get("modfather", {}))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Could not parse %s: %s", config_toml, e)

    composer = _read_composer(project_dir)
    if composer is not None:
        extra = composer.get("extra") or {}
        if isinstance(extra, dict) and isinstance(extra.get("modfather"), dict):
            return _settings_from_table(extra["modfather"])

    return Settings()


def guess_graph_name(project_dir: Path) -> str:
    """Derive a DOT graph name from composer.json ``name``, e.g. ``acme/shop``."""
    composer = _read_composer(project_dir)
    if composer is not None:
        name = composer.get("name")
        if isinstance(name, str) and name:
            return name.replace("/", "_").replace("-", "_")
    return DEFAULT_GRAPH_NAME
