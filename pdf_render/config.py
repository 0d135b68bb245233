"""
PDF Render Service Configuration Module

Centralized configuration management with Pydantic validation.
Browser settings are resolved once and passed explicitly into the
render session rather than read from the environment at launch time.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Flags required to run Chromium inside a restricted serverless sandbox
CONSTRAINED_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-zygote",
    "--single-process",
]

WAIT_CONDITIONS = {"load", "domcontentloaded", "networkidle", "commit"}


class RenderSettings(BaseSettings):
    """
    Render service configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    # === Browser ===
    browser_executable_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "BROWSER_EXECUTABLE_PATH",
            "PUPPETEER_EXECUTABLE_PATH",
            "browser_executable_path",
        ),
        description="Path to the Chromium executable (None = Playwright's bundled build)"
    )
    headless: bool = Field(
        default=True,
        description="Run Chromium headless"
    )
    browser_args: List[str] = Field(
        default_factory=lambda: list(CONSTRAINED_BROWSER_ARGS),
        description="Command-line flags passed to Chromium on launch"
    )

    # === Rendering ===
    wait_until: str = Field(
        default="networkidle",
        description="Stability condition awaited after URL navigation"
    )
    navigation_timeout_ms: Optional[int] = Field(
        default=None,
        ge=1000,
        le=900000,
        description="Navigation timeout override in ms (None = Playwright default)"
    )

    # === HTTP adapter ===
    max_concurrent_renders: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum concurrent renders accepted by the HTTP adapter (1-20)"
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR"
    )
    log_format: str = Field(
        default="simple",
        description="Log format: simple or json"
    )

    @field_validator("wait_until")
    @classmethod
    def validate_wait_until(cls, v: str) -> str:
        """Validate the wait condition is one Playwright understands."""
        v_lower = v.lower()
        if v_lower not in WAIT_CONDITIONS:
            raise ValueError(f"wait_until must be one of: {', '.join(sorted(WAIT_CONDITIONS))}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix, use exact env var names
        case_sensitive=False,  # HEADLESS = headless
    )


@lru_cache()
def get_settings() -> RenderSettings:
    """
    Get cached settings instance.

    Settings are loaded once per process (one Lambda container or one
    uvicorn worker) and reused across invocations.
    """
    return RenderSettings()
