"""
XpertSearch Exception Hierarchy
===============================

Domain-specific exceptions for the query-understanding pipeline.
Augmentation errors are raised by the augmentation layer and caught at the
call site; they never leave a pipeline run.

Usage::

    from core.exceptions import AugmentationFailure, AugmentationTimeout

    # In the augmentation layer:
    raise AugmentationTimeout("classify timed out", operation="classify")

    # At the call site:
    try:
        label = call_with_timeout(service.classify, query, timeout)
    except AugmentationError as e:
        logger.warning("Augmentation failed: %s", e)
"""


# =============================================================================
# Base Exception
# =============================================================================

class XpertSearchError(Exception):
    """Base exception for all XpertSearch errors."""

    error_code = "server_error"

    def __init__(self, message="An unexpected error occurred", **kwargs):
        self.message = message
        self.details = kwargs
        super().__init__(message)

    def to_dict(self):
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["detail"] = self.details
        return result


# =============================================================================
# Augmentation Errors (optional external service)
# =============================================================================

class AugmentationError(XpertSearchError):
    """Augmentation service could not contribute to this request."""

    error_code = "augmentation_error"

    def __init__(self, message="Augmentation service error", operation=None, **kwargs):
        if operation:
            kwargs["operation"] = operation
        super().__init__(message, **kwargs)


class AugmentationUnavailable(AugmentationError):
    """No augmentation service is configured."""

    error_code = "augmentation_unavailable"

    def __init__(self, message="Augmentation service not configured", **kwargs):
        super().__init__(message, **kwargs)


class AugmentationFailure(AugmentationError):
    """Augmentation call failed (transport error, empty or unusable response)."""

    error_code = "augmentation_failure"


class AugmentationTimeout(AugmentationFailure):
    """Augmentation call did not finish within its timeout."""

    error_code = "augmentation_timeout"

    def __init__(self, message, timeout=None, **kwargs):
        if timeout is not None:
            kwargs["timeout"] = timeout
        super().__init__(message, **kwargs)


# =============================================================================
# Contract Errors
# =============================================================================

class UnknownEntityTypeError(XpertSearchError):
    """An entity type reached filter synthesis without a mapping."""

    error_code = "unknown_entity_type"

    def __init__(self, message="Unknown entity type", entity_type=None, **kwargs):
        if entity_type is not None:
            kwargs["entity_type"] = entity_type
        super().__init__(message, **kwargs)


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(XpertSearchError):
    """Missing or invalid configuration (env vars, settings)."""

    error_code = "configuration_error"

    def __init__(self, message="Configuration error", setting=None, **kwargs):
        if setting:
            kwargs["setting"] = setting
        super().__init__(message, **kwargs)
