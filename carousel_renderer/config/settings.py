"""
Application Settings
===================

Application settings and environment configuration using Pydantic Settings.
Every field can be overridden with a ``CAROUSEL_``-prefixed environment variable;
the listen port additionally honours the bare ``PORT`` variable.
"""

from typing import Optional, List, Union
import json

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Carousel Renderer", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "CAROUSEL_PORT"),
        description="Server port",
    )
    max_body_size: int = Field(
        default=10 * 1024 * 1024, gt=0, description="Maximum request body size in bytes"
    )

    # Rendering Configuration
    viewport_width: int = Field(default=1080, gt=0, description="Slide width in CSS pixels")
    viewport_height: int = Field(default=1350, gt=0, description="Slide height in CSS pixels")
    device_scale_factor: float = Field(default=2.0, gt=0, description="Device pixel ratio")
    render_timeout: int = Field(
        default=30000, gt=0, description="Content load timeout in milliseconds"
    )
    max_concurrent_renders: Optional[int] = Field(
        default=None, gt=0, description="Cap on in-flight renders, unlimited when unset"
    )

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BROWSER_ARGS),
        description="Extra Chromium launch arguments",
    )

    # Security Configuration
    allowed_hosts: List[str] = Field(default=["*"], description="Allowed origins for CORS")

    # Monitoring Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("allowed_hosts", "browser_args", mode="before")
    @classmethod
    def parse_string_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse a list from a JSON array or a comma-separated string."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CAROUSEL_",
        populate_by_name=True,
        extra="ignore",
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
