"""Application settings loaded from the environment."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from ``CHAIN_*`` variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="CHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Resources API")
    log_level: str = Field(default="INFO")

    # Record a DispatchTrace in ctx.state["trace"] for every request
    debug_trace: bool = Field(default=False)

    # Raise ChainExhausted instead of answering 404 when nothing responded
    strict: bool = Field(default=False)

    # Gating middleware; gate_divisor=0 disables the time gate
    maintenance_mode: bool = Field(default=False)
    gate_divisor: int = Field(default=0, ge=0, le=60)

    resources_prefix: str = Field(default="/resources")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("resources_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("resources_prefix must start with '/'")
        return v
