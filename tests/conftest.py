"""
Shared fixtures for the project-level tests (configuration, exceptions, logging).
"""

import logging

import pytest


CONFIG_ENV_VARS = (
    "XPERTSEARCH_ENV",
    "XPERTSEARCH_DEBUG",
    "XPERTSEARCH_LOG_LEVEL",
    "XPERTSEARCH_AUGMENTATION_ENABLED",
    "OPENAI_API_KEY",
    "XPERTSEARCH_AUGMENTATION_MODEL",
    "XPERTSEARCH_AUGMENTATION_TIMEOUT",
    "XPERTSEARCH_FUZZY_MAX_DISTANCE",
    "XPERTSEARCH_SPELL_MIN_TOKEN_LENGTH",
    "XPERTSEARCH_EXPANSION_MIN_TERMS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable so dataclass defaults apply."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo ``dictConfig`` changes made by the code under test."""
    loggers = [logging.getLogger(name) for name in ("", "queries", "xpertsearch.config")]
    saved = [(lg, list(lg.handlers), lg.level, lg.propagate, lg.disabled) for lg in loggers]
    yield
    for lg, handlers, level, propagate, disabled in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate
        lg.disabled = disabled
