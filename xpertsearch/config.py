"""
Configuration Layer
===================

Centralized, type-safe configuration management for all environment variables.
This replaces scattered os.getenv() calls throughout the codebase.

Usage:
    from xpertsearch.config import config

    # Augmentation service settings
    if config.augmentation.is_configured:
        timeout = config.augmentation.timeout

    # Pipeline tuning
    budget = config.pipeline.fuzzy_max_distance

A ``.env`` file in the working directory is loaded on import.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass(frozen=True)
class AugmentationConfig:
    """Optional external augmentation (LLM) service settings."""
    enabled: bool = field(default_factory=lambda: _env_bool("XPERTSEARCH_AUGMENTATION_ENABLED", "true"))
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    model: str = field(default_factory=lambda: os.getenv("XPERTSEARCH_AUGMENTATION_MODEL", "gpt-4o-mini"))
    timeout: float = field(default_factory=lambda: float(os.getenv("XPERTSEARCH_AUGMENTATION_TIMEOUT", "2.0")))

    @property
    def is_configured(self) -> bool:
        """True when augmentation is switched on and has credentials."""
        return self.enabled and bool(self.openai_api_key)


@dataclass(frozen=True)
class PipelineConfig:
    """Query-understanding pipeline tuning."""
    fuzzy_max_distance: int = field(default_factory=lambda: int(os.getenv("XPERTSEARCH_FUZZY_MAX_DISTANCE", "2")))
    # 0 means every token is eligible for fuzzy correction
    spell_min_token_length: int = field(default_factory=lambda: int(os.getenv("XPERTSEARCH_SPELL_MIN_TOKEN_LENGTH", "0")))
    expansion_min_terms: int = field(default_factory=lambda: int(os.getenv("XPERTSEARCH_EXPANSION_MIN_TERMS", "5")))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration - aggregates all config sections."""

    # Environment
    environment: str = field(default_factory=lambda: os.getenv("XPERTSEARCH_ENV", "development"))
    debug: bool = field(default_factory=lambda: _env_bool("XPERTSEARCH_DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("XPERTSEARCH_LOG_LEVEL", "INFO").upper())

    # Sub-configurations
    augmentation: AugmentationConfig = field(default_factory=AugmentationConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of warnings/errors.
        Call this on startup to catch misconfigurations early.
        """
        issues = []

        if self.augmentation.timeout <= 0:
            issues.append("CRITICAL: XPERTSEARCH_AUGMENTATION_TIMEOUT must be positive")
        if self.pipeline.fuzzy_max_distance < 0:
            issues.append("CRITICAL: XPERTSEARCH_FUZZY_MAX_DISTANCE must not be negative")
        if self.pipeline.spell_min_token_length < 0:
            issues.append("WARNING: XPERTSEARCH_SPELL_MIN_TOKEN_LENGTH is negative, treated as 0")

        if not self.augmentation.enabled:
            issues.append("INFO: Augmentation disabled (rule-based intent and static expansion only)")
        elif not self.augmentation.openai_api_key:
            issues.append("WARNING: Augmentation enabled but OPENAI_API_KEY not set")

        if self.is_production and self.debug:
            issues.append("WARNING: XPERTSEARCH_DEBUG=true in production!")

        return issues

    def log_status(self) -> None:
        """Log configuration status on startup."""
        logger.info(f"Environment: {self.environment}")
        logger.info(f"Debug: {self.debug}")
        logger.info(f"Augmentation: {'on' if self.augmentation.is_configured else 'off'}")

        for issue in self.validate():
            if issue.startswith("CRITICAL"):
                logger.critical(issue)
            elif issue.startswith("WARNING"):
                logger.warning(issue)
            else:
                logger.info(issue)


# =============================================================================
# Singleton Instance
# =============================================================================

@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Get the singleton configuration instance.
    Uses lru_cache to ensure single instance across the application.
    """
    return AppConfig()


# Convenience alias
config = get_config()
