"""YAML loader for the config subsystem.

``load_settings`` consumes one YAML file, validates it via models.py and
returns a typed :class:`BuilderSettings`. Nothing here is process-wide state:
callers hand the loaded values to the builder explicitly, e.g.
``now(zone=settings.default_timezone)``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from datebuilder.core.errors import ConfigurationError

from .models import BuilderSettings

_DEFAULT_CONFIG_PATH = Path("config") / "datebuilder.yml"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"YAML root must be a mapping in {path}")
    return data


def load_settings(path: Path | str = _DEFAULT_CONFIG_PATH) -> BuilderSettings:
    """Load datebuilder.yml (default_timezone, logging)."""

    data = _read_yaml(Path(path))
    try:
        return BuilderSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc
