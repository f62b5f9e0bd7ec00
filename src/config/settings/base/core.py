"""Base settings shared by every part of the service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]


@dataclass(frozen=True)
class BaseSettings:
    """Base configuration.

    Attributes:
        environment: Runtime environment (development|staging|production)
        service_name: Service name for logs
        debug: Debug mode
        redis_url: Redis connection URL (only needed by the redis rate-limit backend)
    """

    environment: Environment = "development"
    service_name: str = "doctor-visit-leads"
    debug: bool = False
    redis_url: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_staging(self) -> bool:
        return self.environment == "staging"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Validates base settings.

        Returns:
            List of errors (empty = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"Invalid ENVIRONMENT: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME must not be empty")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Maps an environment string to Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    """Loads BaseSettings from environment variables."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "doctor-visit-leads"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Returns the cached BaseSettings instance."""
    return _load_base_from_env()
