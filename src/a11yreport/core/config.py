"""3-layer configuration for report generation.

Loads and merges configuration from:
1. Default settings (built-in)
2. Settings file (YAML, ``report:`` and ``white_label:`` sections)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..models.branding import StoredWhiteLabelSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "report": {
        "engine_name": "axe-core",
        "engine_version": "4.10",
        "pages_analyzed": 1,
    },
    "white_label": {},
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_settings_file(path: Optional[Path]) -> dict:
    """Load a YAML settings file. Missing, empty or unreadable files give ``{}``."""
    if path is None or not path.is_file():
        return {}
    try:
        content = path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        data = yaml.safe_load(content)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, type(e).__name__)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def load_stored_settings(config: dict) -> Optional[StoredWhiteLabelSettings]:
    """Build the stored white-label layer from a config's ``white_label`` section."""
    section = config.get("white_label")
    if not section or not isinstance(section, dict):
        return None
    try:
        return StoredWhiteLabelSettings.model_validate(section)
    except ValidationError as e:
        logger.warning("Ignoring invalid white_label settings (%d errors)", e.error_count())
        return None


def get_effective_config(
    settings_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for a report run."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    file_config = {}
    for section, value in load_settings_file(settings_path).items():
        if isinstance(value, dict):
            file_config[section] = value
        else:
            logger.warning("Ignoring settings section %r: expected a mapping", section)
    if file_config:
        config = deep_merge(config, file_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config
