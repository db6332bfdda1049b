"""
Intent Classifier

Assigns one of four coarse intents to a (corrected) search query:

- navigational   — looking for a specific brand
- informational  — researching / comparing products
- transactional  — ready to buy
- product_search — everything else (default)

The augmentation service is consulted first when one is injected. Any
failure there (timeout, error, empty or ambiguous answer) falls through to the
ordered rule list, where the first matching rule wins.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Sequence

from core.exceptions import AugmentationError
from core.services.base import BaseService
from .augmentation import AugmentationService, call_with_timeout
from .term_dictionary import TermDictionary


class SearchIntent(str, Enum):
    """Coarse search intents."""
    NAVIGATIONAL = "navigational"
    INFORMATIONAL = "informational"
    TRANSACTIONAL = "transactional"
    PRODUCT_SEARCH = "product_search"


# Labels the augmentation service may answer with
AUGMENTATION_LABELS = (
    SearchIntent.NAVIGATIONAL,
    SearchIntent.INFORMATIONAL,
    SearchIntent.TRANSACTIONAL,
)


@dataclass(frozen=True)
class IntentRule:
    """Label ``intent`` applies when ``pattern`` matches the lowercased query."""
    name: str
    pattern: Pattern
    intent: SearchIntent

    def matches(self, query_lower: str) -> bool:
        return self.pattern.search(query_lower) is not None


def _word_pattern(words: Sequence[str]) -> Pattern:
    return re.compile(r'\b(?:' + '|'.join(re.escape(w) for w in words) + r')\b')


INFORMATIONAL_WORDS = ("compare", "vs", "versus", "difference", "best", "review", "which")
TRANSACTIONAL_WORDS = ("buy", "purchase", "cheap", "discount", "sale", "deal", "offer")


def build_intent_rules(dictionary: TermDictionary) -> List[IntentRule]:
    """
    Rules in evaluation order; the order is the precedence.

    "buy nike shoes" is navigational because the brand rule runs first.
    """
    return [
        IntentRule("brand", _word_pattern(dictionary.brands), SearchIntent.NAVIGATIONAL),
        IntentRule("research", _word_pattern(INFORMATIONAL_WORDS), SearchIntent.INFORMATIONAL),
        IntentRule("purchase", _word_pattern(TRANSACTIONAL_WORDS), SearchIntent.TRANSACTIONAL),
    ]


def parse_intent_label(response: str) -> Optional[SearchIntent]:
    """
    Map a free-text augmentation answer onto an intent.

    Returns None unless exactly one of the three labels appears.
    """
    text = response.lower().strip()
    found = [intent for intent in AUGMENTATION_LABELS if intent.value in text]
    return found[0] if len(found) == 1 else None


class IntentClassifier(BaseService):
    """
    Augmentation-first, rule-based-fallback intent classifier.

    Example:
        >>> classifier = IntentClassifier(DEFAULT_DICTIONARY)
        >>> classifier.classify("compare two dresses")
        <SearchIntent.INFORMATIONAL: 'informational'>
    """

    def __init__(
        self,
        dictionary: TermDictionary,
        augmentation: Optional[AugmentationService] = None,
        timeout: float = 2.0,
    ):
        self.rules = build_intent_rules(dictionary)
        self.augmentation = augmentation
        self.timeout = timeout

    def classify(self, query: str) -> SearchIntent:
        if self.augmentation is not None:
            intent = self._classify_with_augmentation(query)
            if intent is not None:
                return intent
        else:
            self.logger.debug("No augmentation service, rule-based intent only")

        return self.classify_with_rules(query)

    def classify_with_rules(self, query: str) -> SearchIntent:
        query_lower = query.lower()
        for rule in self.rules:
            if rule.matches(query_lower):
                return rule.intent
        return SearchIntent.PRODUCT_SEARCH

    def _classify_with_augmentation(self, query: str) -> Optional[SearchIntent]:
        try:
            response = call_with_timeout(self.augmentation.classify, query, self.timeout)
        except AugmentationError as e:
            self.logger.warning(f"Intent augmentation failed for '{query}': {e}, falling back to rules")
            return None

        intent = parse_intent_label(response)
        if intent is None:
            self.logger.warning(f"Intent augmentation answer ambiguous for '{query}': {response!r}, falling back to rules")
        return intent
