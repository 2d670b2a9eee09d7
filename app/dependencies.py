"""Dependency helpers for FastAPI routes."""

from .config import get_settings
from .configuration.partner_loader import load_partner_config
from .domain.schemas import PartnerConfig


def get_partner_config() -> PartnerConfig:
    """Return the active partner defaults (cached per path by the loader)."""
    return load_partner_config(get_settings().partner_config_path)


__all__ = ["get_partner_config"]
