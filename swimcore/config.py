"""Service configuration with environment-specific profiles.

Supports dev, staging, production and test environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Settings:
    """Immutable service settings resolved from environment."""

    app_env: str = "dev"
    log_level: str = "INFO"
    default_unit: str = "yards"

    # Rate limiting (slowapi)
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    generate_rate_limit: str = "60/minute"

    # HTTP
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    request_id_header_name: str = "X-Request-ID"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "generate_rate_limit": "600/minute",
    },
    "staging": {
        "log_level": "INFO",
        "generate_rate_limit": "120/minute",
    },
    "production": {
        "log_level": "WARNING",
        "generate_rate_limit": "60/minute",
    },
    "test": {
        "log_level": "WARNING",
        "rate_limit_enabled": False,
    },
}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        default_unit=os.getenv("DEFAULT_UNIT", "yards"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", profile.get("rate_limit_enabled", True)),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
        generate_rate_limit=os.getenv("GENERATE_RATE_LIMIT", profile.get("generate_rate_limit", "60/minute")),
        cors_origins=_env_list("CORS_ORIGINS", ["http://localhost:3000"]),
        request_id_header_name=os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID"),
    )
