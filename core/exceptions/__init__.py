"""
core.exceptions — Re-exports for convenient imports.

Usage::

    from core.exceptions import AugmentationError, ConfigurationError
"""

from .base import (
    XpertSearchError,
    AugmentationError,
    AugmentationUnavailable,
    AugmentationFailure,
    AugmentationTimeout,
    UnknownEntityTypeError,
    ConfigurationError,
)

__all__ = [
    # Base
    "XpertSearchError",
    # Augmentation
    "AugmentationError",
    "AugmentationUnavailable",
    "AugmentationFailure",
    "AugmentationTimeout",
    # Contract
    "UnknownEntityTypeError",
    # Config
    "ConfigurationError",
]
