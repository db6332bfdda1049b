"""
Configuration Validators
========================

Startup validation for the XpertSearch configuration layer.
Raises ConfigurationError for critical issues in production,
logs warnings in development.

Called by ``queries.services.query_pipeline.get_query_pipeline()`` the first
time the process-wide pipeline is built.
"""

import logging

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def validate_config_on_startup(config=None):
    """
    Validate all configuration on application startup.

    Production:
        CRITICAL issues raise ConfigurationError (hard failure).
        WARNING issues are logged but don't block startup.

    Development:
        All issues are logged as warnings/info.

    Returns the list of issues found.
    """
    if config is None:
        from xpertsearch.config import config

    issues = config.validate()

    if not issues:
        logger.info("Configuration validated: no issues found")
        config.log_status()
        return issues

    critical_issues = [i for i in issues if i.startswith("CRITICAL")]
    warning_issues = [i for i in issues if i.startswith("WARNING")]
    info_issues = [i for i in issues if i.startswith("INFO")]

    # Log everything regardless of environment
    for issue in info_issues:
        logger.info(issue)
    for issue in warning_issues:
        logger.warning(issue)
    for issue in critical_issues:
        logger.critical(issue)

    # In production, critical issues are fatal
    if config.is_production and critical_issues:
        raise ConfigurationError(
            "Configuration validation failed in production:\n"
            + "\n".join(f"  • {i}" for i in critical_issues),
        )

    return issues
