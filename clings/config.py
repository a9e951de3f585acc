"""Configuration loading from clings.yml."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import yaml  # type: ignore[import-untyped]

from .models import DEFAULT_STATUS_SYNONYMS, Status

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("rich", "plain", "json")
_DEFAULT_FORMAT = "rich"
_DEFAULT_TASKS_FILE = "~/.clings/tasks.json"


@dataclass
class ClingsConfig:
    """Settings read from clings.yml.

    Attributes:
        tasks_file: Default JSON task export read by `clings filter`.
        output_format: Default output format (rich, plain or json).
        status_synonyms: Alternate status spellings mapped to canonical values.
    """

    tasks_file: str = _DEFAULT_TASKS_FILE
    output_format: str = _DEFAULT_FORMAT
    status_synonyms: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_STATUS_SYNONYMS)
    )


def _get_config_path() -> str:
    """Get the path to the clings config file."""
    return os.path.expanduser("~/.config/clings/clings.yml")


def _load_status_synonyms(section: Any) -> dict[str, str]:
    """Merge the configured status synonyms over the defaults."""
    synonyms = dict(DEFAULT_STATUS_SYNONYMS)
    if section is None:
        return synonyms
    if not isinstance(section, dict):
        logger.warning("Ignoring filter.status_synonyms: expected a mapping")
        return synonyms

    valid_values = {s.value for s in Status}
    for alias, target in section.items():
        target_text = str(target).strip().lower()
        if target_text not in valid_values:
            logger.warning(f"Ignoring status synonym {alias!r}: unknown status {target!r}")
            continue
        synonyms[str(alias).strip().lower()] = target_text
    return synonyms


def load_config(config_path: str | None = None) -> ClingsConfig:
    """Load config from clings.yml.

    Args:
        config_path: Explicit path to the config file. Defaults to
            ~/.config/clings/clings.yml.

    Returns:
        ClingsConfig with values from config or defaults.
    """
    if config_path is None:
        config_path = _get_config_path()

    if not os.path.exists(config_path):
        return ClingsConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Ignoring {config_path}: expected a mapping at top level")
        return ClingsConfig()

    config = ClingsConfig()

    tasks_file = data.get("tasks_file")
    if isinstance(tasks_file, str) and tasks_file:
        config.tasks_file = tasks_file

    output = data.get("output")
    if isinstance(output, dict):
        output_format = output.get("format", _DEFAULT_FORMAT)
        if output_format in OUTPUT_FORMATS:
            config.output_format = output_format
        else:
            logger.warning(
                f"Unknown output format {output_format!r}, using {_DEFAULT_FORMAT!r}"
            )

    filter_section = data.get("filter")
    if isinstance(filter_section, dict):
        config.status_synonyms = _load_status_synonyms(
            filter_section.get("status_synonyms")
        )
    elif filter_section is not None:
        logger.warning("Ignoring filter section: expected a mapping")

    return config
