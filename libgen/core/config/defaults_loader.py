"""
Generator defaults — optional libgen.yml at the workspace root.

    generators:
      library:
        unitTestRunner: none
        linter: eslint

Values are defaults only: anything given explicitly on the command
line wins. Keys use the same camelCase spelling as the CLI flags.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from libgen.core.models.options import LibraryOptions

logger = logging.getLogger(__name__)

DEFAULTS_FILE = "libgen.yml"


class ConfigError(Exception):
    """Raised when libgen.yml is unreadable or invalid."""


class GeneratorDefaults(BaseModel):
    """Parsed libgen.yml."""

    generators: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def for_generator(self, name: str) -> dict[str, Any]:
        return dict(self.generators.get(name) or {})


def load_generator_defaults(workspace_root: Path) -> GeneratorDefaults:
    """Load libgen.yml from the workspace root.

    Returns:
        GeneratorDefaults (empty when the file doesn't exist).

    Raises:
        ConfigError: If the file exists but is not a valid mapping.
    """
    path = workspace_root / DEFAULTS_FILE
    if not path.is_file():
        return GeneratorDefaults()

    logger.debug("Loading generator defaults from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return GeneratorDefaults()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return GeneratorDefaults.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator defaults in {path}: {e}") from e


def merge_options(defaults: dict[str, Any], explicit: dict[str, Any]) -> LibraryOptions:
    """Build LibraryOptions from libgen.yml defaults and explicit values.

    ``None`` in ``explicit`` means "not given" and falls back to the default.

    Raises:
        ConfigError: If the merged values are not valid library options.
    """
    merged = dict(defaults)
    merged.update({k: v for k, v in explicit.items() if v is not None})
    try:
        return LibraryOptions.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid library options: {e}") from e
