"""
Shared fixtures for the query-understanding tests.

StubAugmentation stands in for the LLM service: canned answers, an error to
raise, or a delay to exceed the timeout. It counts calls so tests can check
that a stage did or did not consult it.
"""

import logging
import time

import pytest

from queries.services.augmentation import AugmentationService
from queries.services.term_dictionary import DEFAULT_DICTIONARY


class StubAugmentation(AugmentationService):
    """Configurable augmentation service for tests."""

    def __init__(self, classify_response="", expand_response="", error=None, delay=0.0):
        self.classify_response = classify_response
        self.expand_response = expand_response
        self.error = error
        self.delay = delay
        self.classify_calls = []
        self.expand_calls = []

    def classify(self, query):
        self.classify_calls.append(query)
        return self._respond(self.classify_response)

    def expand(self, query):
        self.expand_calls.append(query)
        return self._respond(self.expand_response)

    def _respond(self, response):
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return response


@pytest.fixture
def dictionary():
    return DEFAULT_DICTIONARY


@pytest.fixture
def failing_augmentation():
    return StubAugmentation(error=ConnectionError("augmentation service unreachable"))


@pytest.fixture
def slow_augmentation():
    return StubAugmentation(classify_response="transactional", expand_response="a, b, c", delay=0.5)


@pytest.fixture
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
