"""
Aggregator settings and configuration constants.

This module centralizes all configurable parameters for the building lookup,
making it easy to adjust timeouts and endpoints without modifying core logic.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from building_health.errors import ConfigError


@dataclass(frozen=True)
class AggregatorSettings:
    """Configuration settings for the building aggregator and its HTTP server."""

    # Open data host (Socrata)
    api_base: str = "https://data.cityofnewyork.us"
    app_token: Optional[str] = None
    user_agent: str = "BuildingHealthX/1.0 (+https://buildinghealthx.com)"

    # Timeouts in seconds
    default_timeout: float = 3.5
    core_timeout: float = 6.5
    portfolio_timeout: float = 8.0

    # Connection pool size for the shared session
    max_connections: int = 100

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000

    # Edge cache for 5 minutes; serve stale while revalidating up to 1 day
    cache_control: str = "public, s-maxage=300, stale-while-revalidate=86400"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None, dotenv_path: Optional[str] = None) -> "AggregatorSettings":
        """
        Build settings from BHX_* environment variables.

        When reading the process environment, a .env file (dotenv_path, or the
        nearest one above the working directory) is loaded first. Variables
        already set in the environment win over the file.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            dotenv_path: Explicit .env file to load

        Returns:
            Settings with any overrides applied
        """
        if environ is None:
            load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ
        overrides = {}

        if env.get("BHX_API_BASE"):
            overrides["api_base"] = env["BHX_API_BASE"].rstrip("/")
        if env.get("BHX_APP_TOKEN"):
            overrides["app_token"] = env["BHX_APP_TOKEN"]
        if env.get("BHX_HOST"):
            overrides["host"] = env["BHX_HOST"]

        for var, name, cast in (
            ("BHX_DEFAULT_TIMEOUT", "default_timeout", float),
            ("BHX_CORE_TIMEOUT", "core_timeout", float),
            ("BHX_PORTFOLIO_TIMEOUT", "portfolio_timeout", float),
            ("BHX_PORT", "port", int),
        ):
            raw = env.get(var)
            if not raw:
                continue
            try:
                overrides[name] = cast(raw)
            except ValueError as e:
                raise ConfigError(f"{var} must be a number, got {raw!r}") from e

        return replace(cls(), **overrides)


# Default settings instance
DEFAULT_SETTINGS = AggregatorSettings()
