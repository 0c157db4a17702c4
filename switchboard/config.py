from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """config.json is missing, unreadable or invalid."""


class ServiceConfigEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1, description="Logical service name (matches the resolved container key)")
    display_name: str = Field(..., alias="displayName")


class AppConfig(BaseModel):
    """Immutable snapshot of config.json, shared read-only by all handlers."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    services: tuple[ServiceConfigEntry, ...]
    docker_status_url: str = Field(..., min_length=1, alias="dockerStatusUrl")
    toggle_service_url: str = Field(..., min_length=1, alias="toggleServiceUrl")
    poll_interval_seconds: int = Field(5, ge=1, alias="pollIntervalSeconds")


def parse_config(raw: str | bytes) -> AppConfig:
    try:
        return AppConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e


def load_config(path: str | Path) -> AppConfig:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {p}: {e}") from e

    cfg = parse_config(raw)
    logger.info("Loaded %d service(s) from %s", len(cfg.services), p)
    return cfg

