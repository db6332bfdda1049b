"""
Base Service
=============

Foundation for the pipeline service classes. Provides a standardised
per-subclass logger and request-ID generation for tracing.
"""

import logging
import uuid


class BaseService:
    """
    All pipeline service classes inherit from this.

    Subclass example::

        class QueryExpander(BaseService):
            def expand(self, query, entities):
                self.logger.debug("Expanding %r", query)

    Features:
        - ``cls.logger`` — pre-configured logger using the subclass module name
        - ``cls.generate_request_id()`` — opaque ID for request tracing
    """

    logger: logging.Logger = logging.getLogger(__name__)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Each subclass gets its own logger named after its module
        cls.logger = logging.getLogger(cls.__module__)

    @staticmethod
    def generate_request_id() -> str:
        """Generate a short opaque request ID for tracing."""
        return uuid.uuid4().hex[:12]
