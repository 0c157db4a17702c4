from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Process-level settings, read from the environment at construction."""

    # Dashboard
    host: str = field(default_factory=lambda: _env_str("SWITCHBOARD_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 8080))
    config_path: str = field(default_factory=lambda: _env_str("SWITCHBOARD_CONFIG", "config.json"))
    static_dir: str = field(default_factory=lambda: _env_str("SWITCHBOARD_STATIC_DIR", "static"))

    # Outbound calls to the status source and the toggle controller
    http_timeout_s: float = field(default_factory=lambda: _env_float("SWITCHBOARD_HTTP_TIMEOUT_S", 10.0))

    log_level: str = field(default_factory=lambda: _env_str("SWITCHBOARD_LOG_LEVEL", "INFO").upper())

    # Docker-backed agent
    agent_port: int = field(default_factory=lambda: _env_int("SWITCHBOARD_AGENT_PORT", 8090))
