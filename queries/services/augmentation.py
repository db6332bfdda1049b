"""
Augmentation Service

Optional LLM-backed capability used by intent classification and query
expansion. The pipeline works without it; when present, every call is a single
best-effort attempt bounded by a timeout, and any failure is reported as an
``AugmentationError`` for the call site to log and fall back from.

Two operations:
- classify(query) → free-text label ("navigational", "informational", "transactional")
- expand(query)   → comma-separated related search terms
"""

import logging
import concurrent.futures
from abc import ABC, abstractmethod
from typing import Callable, Optional

from openai import OpenAI

from core.exceptions import (
    AugmentationFailure,
    AugmentationTimeout,
    AugmentationUnavailable,
)

logger = logging.getLogger(__name__)


CLASSIFY_PROMPT = """Classify this e-commerce search query intent:
- navigational: looking for specific product/brand
- informational: researching/comparing products
- transactional: ready to buy

Query: "{query}"
Intent:"""

EXPAND_PROMPT = """Generate 3-5 related search terms for this e-commerce query:
"{query}"

Include synonyms, related products, and alternative phrasings.
Return only the terms, comma-separated."""


class AugmentationService(ABC):
    """
    Interface for the optional augmentation capability.

    Implementations may block on the network; callers wrap every call in
    ``call_with_timeout``.
    """

    @abstractmethod
    def classify(self, query: str) -> str:
        """Return a free-text intent label for ``query``."""

    @abstractmethod
    def expand(self, query: str) -> str:
        """Return comma-separated related terms for ``query``."""


class OpenAIAugmentationService(AugmentationService):
    """
    Augmentation backed by OpenAI chat completions.

    Uses GPT-4o-mini by default: short prompts, low temperature, small
    ``max_tokens``. The request timeout mirrors the pipeline timeout so a slow
    call is also cut off on the client side.
    """

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 2.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = None

    @property
    def client(self) -> OpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def classify(self, query: str) -> str:
        return self._complete(CLASSIFY_PROMPT.format(query=query), temperature=0.1, max_tokens=50)

    def expand(self, query: str) -> str:
        return self._complete(EXPAND_PROMPT.format(query=query), temperature=0.3, max_tokens=100)

    def _complete(self, prompt: str, temperature: float, max_tokens: int) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=self.timeout,
        )
        return response.choices[0].message.content or ""


def call_with_timeout(operation: Callable[[str], str], query: str, timeout: float) -> str:
    """
    Run one augmentation call, waiting at most ``timeout`` seconds.

    On timeout the worker thread is abandoned and whatever it eventually
    returns is discarded.

    Raises:
        AugmentationTimeout: the call did not finish in time
        AugmentationFailure: the call raised, or returned an empty response
    """
    name = getattr(operation, "__name__", "augmentation")
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="augmentation")
    try:
        future = executor.submit(operation, query)
        try:
            response = future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            future.cancel()
            raise AugmentationTimeout(f"{name} timed out after {timeout}s", operation=name, timeout=timeout)
        except Exception as e:
            raise AugmentationFailure(f"{name} failed: {e}", operation=name) from e
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    if not isinstance(response, str) or not response.strip():
        raise AugmentationFailure(f"{name} returned an empty response", operation=name)

    return response


def build_augmentation_service(augmentation_config) -> AugmentationService:
    """
    Build the configured augmentation service.

    Raises:
        AugmentationUnavailable: augmentation is disabled or has no API key
    """
    if not augmentation_config.enabled:
        raise AugmentationUnavailable("Augmentation disabled by configuration")
    if not augmentation_config.openai_api_key:
        raise AugmentationUnavailable("OPENAI_API_KEY not set")

    return OpenAIAugmentationService(
        api_key=augmentation_config.openai_api_key,
        model=augmentation_config.model,
        timeout=augmentation_config.timeout,
    )


def get_augmentation_service(augmentation_config) -> Optional[AugmentationService]:
    """Like ``build_augmentation_service`` but returns None when unavailable."""
    try:
        return build_augmentation_service(augmentation_config)
    except AugmentationUnavailable as e:
        logger.debug(f"Augmentation unavailable ({e.message}), using rule-based fallbacks")
        return None
