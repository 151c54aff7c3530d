"""Configuration settings for the task orchestration core.

This module provides hierarchical configuration management using
pydantic-settings with validation and multiple sources:

- Environment variables with the ORCHESTRATION_ prefix (``__`` for nesting)
- A ``.env`` file in the working directory
- Optional YAML overrides loaded through :func:`load_settings`

Generation profiles hold the sampling options each pipeline step sends to
the oracle; memory settings hold the retention policy.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, HttpUrl, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schemas.models import GenerationOptions


logger = logging.getLogger(__name__)


class OpenAISettings(BaseSettings):
    """OpenAI/OpenAI-compatible oracle configuration."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_", extra="ignore")

    api_key: str | None = Field(None, description="OpenAI API key")
    base_url: HttpUrl = Field(
        "https://api.openai.com/v1", description="OpenAI API base URL"
    )
    model: str = Field("gpt-4", description="Chat model used for every request")
    timeout_seconds: int = Field(
        60, ge=1, le=600, description="Request timeout in seconds"
    )


class GenerationSettings(BaseModel):
    """Sampling options per pipeline step.

    Training and classification favor determinism, execution favors
    creative completion, decomposition and synthesis sit in between.
    """

    training: GenerationOptions = Field(
        default_factory=lambda: GenerationOptions(
            temperature=0.3, max_output_tokens=500
        )
    )
    classification: GenerationOptions = Field(
        default_factory=lambda: GenerationOptions(temperature=0.3, max_output_tokens=10)
    )
    decomposition: GenerationOptions = Field(
        default_factory=lambda: GenerationOptions(
            temperature=0.4, max_output_tokens=2000
        )
    )
    execution: GenerationOptions = Field(
        default_factory=lambda: GenerationOptions(
            temperature=0.7, max_output_tokens=1500
        )
    )
    synthesis: GenerationOptions = Field(
        default_factory=lambda: GenerationOptions(
            temperature=0.5, max_output_tokens=2000
        )
    )

    def options_for(self, step: str) -> GenerationOptions:
        """Get the generation options for a pipeline step.

        Args:
            step: One of training, classification, decomposition, execution,
                synthesis.

        Returns:
            The configured options for that step.

        Raises:
            ValueError: If the step is unknown.

        """
        if step not in type(self).model_fields:
            raise ValueError(f"Unknown generation step: {step}")
        return getattr(self, step)


class MemorySettings(BaseModel):
    """Agent memory retention policy."""

    max_entries: int = Field(
        100, ge=1, description="Trim threshold checked after each execution event"
    )
    retain_entries: int = Field(
        50, ge=1, description="Entries kept when the threshold is exceeded"
    )
    context_window: int = Field(
        10, ge=0, description="Most recent entries included in execution prompts"
    )

    @model_validator(mode="after")
    def validate_retention(self) -> "MemorySettings":
        """Retained entries cannot exceed the trim threshold."""
        if self.retain_entries > self.max_entries:
            raise ValueError("retain_entries must be <= max_entries")
        return self


class MetricsSettings(BaseModel):
    """Performance metrics configuration."""

    recent_activity_limit: int = Field(
        10, ge=0, description="Memory entries reported as recent activity"
    )


class OrchestrationSettings(BaseSettings):
    """Root configuration for the orchestration core."""

    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    memory: MemorySettings = Field(default_factory=MemorySettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)

    respect_dependencies: bool = Field(
        True, description="Order subtasks so declared dependencies run first"
    )

    # Development and debugging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="ORCHESTRATION_",
        extra="ignore",
        validate_default=True,
        case_sensitive=False,
        secrets_dir=os.getenv("ORCHESTRATION_SECRETS_DIR"),
    )

    @model_validator(mode="after")
    def validate_log_level(self) -> "OrchestrationSettings":
        """Normalize the log level name."""
        level = self.log_level.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.log_level = level
        return self


@lru_cache(maxsize=1)
def get_settings() -> OrchestrationSettings:
    """Get cached settings loaded from the environment.

    Returns:
        Process-wide OrchestrationSettings instance

    """
    return OrchestrationSettings()


def load_settings(config_path: str | Path | None = None) -> OrchestrationSettings:
    """Load settings with overrides from a YAML file.

    Values in the file take precedence over environment variables. A
    missing file is not an error; environment and defaults apply.

    Args:
        config_path: Path to a YAML mapping of settings sections.

    Returns:
        Validated settings instance

    Raises:
        ValueError: If the file does not contain a mapping.

    """
    if config_path is None:
        return OrchestrationSettings()

    try:
        with Path(config_path).open(encoding="utf-8") as f:
            overrides: Any = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Configuration file not found at {config_path}, using defaults")
        return OrchestrationSettings()

    if not isinstance(overrides, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    return OrchestrationSettings(**overrides)


def configure_logging(settings: OrchestrationSettings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug_mode else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "GenerationSettings",
    "MemorySettings",
    "MetricsSettings",
    "OpenAISettings",
    "OrchestrationSettings",
    "configure_logging",
    "get_settings",
    "load_settings",
]
