"""
Logging configuration for XpertSearch processes.

Console logging via ``logging.config.dictConfig``; call
``configure_logging()`` once at process start (the CLI does).
"""

import copy
import logging.config

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "queries": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "xpertsearch.config": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}


def build_logging_config(level="INFO", debug=False) -> dict:
    """Return a copy of ``LOGGING`` adjusted to the requested level."""
    logging_config = copy.deepcopy(LOGGING)
    logging_config["root"]["level"] = level
    logging_config["loggers"]["queries"]["level"] = "DEBUG" if debug else level
    return logging_config


def configure_logging(app_config=None) -> dict:
    """Apply the logging configuration derived from ``app_config``."""
    if app_config is None:
        from xpertsearch.config import config as app_config

    logging_config = build_logging_config(app_config.log_level, app_config.debug)
    logging.config.dictConfig(logging_config)
    return logging_config
