from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

PRODUCTION = "production"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SessionConfig(_Frozen):
    expires_in: str | None = Field(
        default="1d",
        description="Session lifetime as <integer><s|m|h|d>, e.g. '12h'.",
    )
    jwt_secret: str | None = Field(default=None)
    cookie_name: str = Field(default="token")


class NetworkConfig(_Frozen):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: tuple[str, ...] = Field(default=("http://localhost:5173",))


class LoggingConfig(_Frozen):
    level: Literal["critical", "error", "warning", "info", "debug"] = Field(default="info")
    log_dir: Path = Field(default=Path("logs"))
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=3, ge=1, description="Number of log archives to keep.")


class ClusterConfig(_Frozen):
    workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker count; if omitted, one worker per available processing unit.",
    )


class Settings(_Frozen):
    environment: str = Field(default="development")
    session: SessionConfig = Field(default_factory=SessionConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _get(env: Mapping[str, str], key: str) -> str | None:
    raw = (env.get(key) or "").strip()
    return raw or None


def _get_verbatim(env: Mapping[str, str], key: str) -> str | None:
    # Only "" counts as unset; padded values reach the cookie policy untouched.
    return env.get(key) or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build the immutable runtime settings from environment variables.

    - Unset or blank variables fall back to model defaults.
    - NODE_ENV and JWT_EXPIRES_IN are kept verbatim unless empty.
    - Validation is performed by Pydantic; bad values fail startup.
    """

    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {"session": {}, "network": {}, "logging": {}, "cluster": {}}

    if (value := _get_verbatim(env, "NODE_ENV")) is not None:
        raw["environment"] = value

    # An empty JWT_EXPIRES_IN means "unset"; the cookie policy applies its default.
    if (value := _get_verbatim(env, "JWT_EXPIRES_IN")) is not None:
        raw["session"]["expires_in"] = value
    if (value := _get(env, "JWT_SECRET")) is not None:
        raw["session"]["jwt_secret"] = value

    if (value := _get(env, "HOST")) is not None:
        raw["network"]["host"] = value
    if (value := _get(env, "PORT")) is not None:
        raw["network"]["port"] = value
    if (value := _get(env, "CORS_ORIGINS")) is not None:
        raw["network"]["cors_origins"] = _split_csv(value)

    if (value := _get(env, "LOG_LEVEL")) is not None:
        raw["logging"]["level"] = value.lower()
    if (value := _get(env, "LOG_DIR")) is not None:
        raw["logging"]["log_dir"] = value

    if (value := _get(env, "WEB_CONCURRENCY")) is not None:
        raw["cluster"]["workers"] = value

    return Settings.model_validate(raw)


def load_dotenv_file(path: Path | str = ".env") -> bool:
    """Seed os.environ from a dotenv file; existing variables win."""
    return load_dotenv(dotenv_path=Path(path), override=False)
