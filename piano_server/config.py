"""Runtime configuration read from the environment.

All knobs are optional; with nothing set the server listens on port 8080 and
serves files from the current working directory.
"""
from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ConfigError",
    "Settings",
    "get_settings",
]

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


class Settings(BaseModel):
    """Validated server settings."""

    host: str = DEFAULT_HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    serve_root: Path = Field(default_factory=Path.cwd)
    allow_outside_root: bool = False  # restores unrestricted file access
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    @field_validator("serve_root")
    @classmethod
    def root_must_be_dir(cls, v: Path) -> Path:
        if not v.is_dir():
            raise ValueError(f"serve root is not a directory: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


def _env_flag(name: str) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def get_settings() -> Settings:
    """Build Settings from HOST, PORT, SERVE_ROOT, ALLOW_OUTSIDE_ROOT, LOG_LEVEL."""
    raw_port = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError as e:
        raise ConfigError("PORT must be an integer") from e

    values: dict[str, object] = {
        "host": os.getenv("HOST", DEFAULT_HOST),
        "port": port,
        "allow_outside_root": _env_flag("ALLOW_OUTSIDE_ROOT"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    root = os.getenv("SERVE_ROOT")
    if root:
        values["serve_root"] = Path(root)

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
