"""
Loading mapping, payload and engine options from disk.

YAML files (``.yml``/``.yaml``) are read with PyYAML, everything else as
JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .models import EngineOptions

logger = logging.getLogger("formfill.config")

DEFAULT_MAPPING_PROPERTY = "fieldMappings"
YAML_SUFFIXES = (".yml", ".yaml")


def load_document_file(path: Union[str, Path]) -> Any:
    """Parse a JSON or YAML file.

    Args:
        path: File to read.

    Returns:
        The parsed content.

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"File not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse {path.name}: {e}") from e


def load_mapping(
    path: Union[str, Path],
    mapping_property: Optional[str] = None,
) -> list:
    """Load a field mapping file.

    The file holds either the list of entries itself, or an object carrying
    the list under ``mapping_property`` (``fieldMappings`` by default).

    Args:
        path: Mapping file.
        mapping_property: Property holding the list inside an object.

    Returns:
        list: Raw mapping entries, validated later by the engine.
    """
    content = load_document_file(path)
    if isinstance(content, dict):
        prop = mapping_property or DEFAULT_MAPPING_PROPERTY
        if prop not in content:
            raise ConfigurationError(
                f"Mapping property '{prop}' not found in {Path(path).name}"
            )
        content = content[prop]
    logger.debug("Loaded mapping from %s", path)
    return content


def load_payload(path: Union[str, Path]) -> Any:
    """Load the JSON (or YAML) data payload."""
    return load_document_file(path)


def load_options(
    path: Union[str, Path, None] = None,
    **overrides: Any,
) -> EngineOptions:
    """Build engine options from an optional file plus explicit overrides.

    Args:
        path: YAML/JSON file with ``warn_on_missing_values`` and/or
            ``default_date_format`` (camelCase keys are accepted too).
        **overrides: Values that win over the file; None values are ignored.

    Returns:
        EngineOptions: The merged options.

    Raises:
        ConfigurationError: If the file content is not a valid options object.
    """
    values: dict[str, Any] = {}
    if path is not None:
        content = load_document_file(path) or {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"Options file {Path(path).name} must hold an object")
        values.update(content)

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return EngineOptions.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid engine options: {e}") from e
