"""Utilities for loading partner default configuration from YAML."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

import pydantic
import yaml

from app.domain.schemas import PartnerConfig
from app.exceptions import ConfigurationError
from app.utils.validation import format_validation_errors

logger = logging.getLogger(__name__)

DEFAULTS_FILENAME = "partner_defaults.yaml"
SECTIONS = ("regulatory", "financial", "validation", "features")


def _flatten_sections(data: Mapping[str, Any]) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        if key in SECTIONS:
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"Partner config section '{key}' must be a mapping",
                    details={"section": key},
                )
            flat.update(value)
        else:
            flat[key] = value
    return flat


def parse_partner_config(data: Any) -> PartnerConfig:
    """Validate raw (sectioned or flat) settings into a ``PartnerConfig``."""

    if data is None:
        return PartnerConfig()
    if not isinstance(data, Mapping):
        raise ConfigurationError("Partner config must be a mapping")

    try:
        return PartnerConfig.model_validate(_flatten_sections(data))
    except pydantic.ValidationError as exc:
        errors = format_validation_errors(exc)
        raise ConfigurationError(
            "Partner config failed validation", details={"errors": errors}
        ) from exc


@lru_cache(maxsize=8)
def load_partner_config(base_path: Path | None = None) -> PartnerConfig:
    """Return partner defaults from YAML, falling back to built-in values."""

    location = base_path or Path(__file__).resolve().parent / DEFAULTS_FILENAME
    try:
        data = yaml.safe_load(location.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Partner defaults file not found: %s", location)
        return PartnerConfig()
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Partner defaults file is not valid YAML: {location}",
            details={"path": str(location)},
        ) from exc

    config = parse_partner_config(data)
    logger.debug("Loaded partner defaults from %s", location)
    return config


__all__ = ["load_partner_config", "parse_partner_config"]
