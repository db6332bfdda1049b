"""
Query Pipeline

Sequences the query-understanding stages for one search request:

    spell correction → intent → entities → expansion → filters

Every invocation is independent. The only shared state is the read-only
``TermDictionary`` and the (stateless) augmentation client. Intent
classification and expansion may each make one bounded augmentation call;
their failures degrade to the rule-based/static path and never abort the run.
The result is built only after every stage has finished.
"""

import asyncio
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from core.config.validators import validate_config_on_startup
from core.services.base import BaseService
from .augmentation import AugmentationService, get_augmentation_service
from .entity_extractor import Entity, EntityExtractor
from .filter_synthesizer import SearchFilters, entities_to_filters
from .intent_classifier import IntentClassifier, SearchIntent
from .query_expander import QueryExpander
from .spell_corrector import SpellCorrector
from .term_dictionary import DEFAULT_DICTIONARY, TermDictionary


@dataclass(frozen=True)
class ProcessedQuery:
    """
    Structured interpretation of one search query.

    Example:
        Input: "casual blu jeans under $30"
        Output:
            original: "casual blu jeans under $30"
            corrected: "casual blue jeans under $30"
            intent: product_search
            entities: (price {max: 30}, color blue, category jeans, occasion casual)
            expanded_terms: ("casual blue jeans under $30", "navy", "azure", ...)
            filters: {price_range: {max: 30}, colors: [blue], product_type: jeans, tags: [casual]}
    """
    original: str
    corrected: str
    intent: SearchIntent
    entities: Tuple[Entity, ...]
    expanded_terms: Tuple[str, ...]
    filters: SearchFilters

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the retrieval layer / JSON output."""
        return {
            "original": self.original,
            "corrected": self.corrected,
            "intent": self.intent.value,
            "entities": [e.to_dict() for e in self.entities],
            "expanded_terms": list(self.expanded_terms),
            "filters": self.filters.to_dict(),
        }


class QueryPipeline(BaseService):
    """
    Orchestrates the query-understanding stages.

    Example:
        >>> pipeline = QueryPipeline()
        >>> result = pipeline.process("casual blu jeans under $30")
        >>> result.corrected
        'casual blue jeans under $30'
        >>> result.filters.to_dict()
        {'price_range': {'max': 30}, 'colors': ['blue'], 'product_type': 'jeans', 'tags': ['casual']}
    """

    def __init__(
        self,
        dictionary: TermDictionary = DEFAULT_DICTIONARY,
        augmentation: Optional[AugmentationService] = None,
        augmentation_timeout: float = 2.0,
        fuzzy_max_distance: int = 2,
        spell_min_token_length: int = 0,
        expansion_min_terms: int = 5,
    ):
        self.dictionary = dictionary
        self.augmentation = augmentation
        self.spell_corrector = SpellCorrector(
            dictionary,
            max_distance=fuzzy_max_distance,
            min_token_length=spell_min_token_length,
        )
        self.intent_classifier = IntentClassifier(dictionary, augmentation, timeout=augmentation_timeout)
        self.entity_extractor = EntityExtractor(dictionary)
        self.query_expander = QueryExpander(
            dictionary,
            augmentation,
            timeout=augmentation_timeout,
            min_terms=expansion_min_terms,
        )

    @classmethod
    def from_config(
        cls,
        app_config,
        dictionary: TermDictionary = DEFAULT_DICTIONARY,
        augmentation: Optional[AugmentationService] = None,
    ) -> "QueryPipeline":
        """Build a pipeline tuned by ``app_config`` (augmentation injected separately)."""
        return cls(
            dictionary=dictionary,
            augmentation=augmentation,
            augmentation_timeout=app_config.augmentation.timeout,
            fuzzy_max_distance=app_config.pipeline.fuzzy_max_distance,
            spell_min_token_length=app_config.pipeline.spell_min_token_length,
            expansion_min_terms=app_config.pipeline.expansion_min_terms,
        )

    # ─── Public API ──────────────────────────────────────────────

    def process(self, query: str) -> ProcessedQuery:
        """
        Run every stage for ``query``.

        Never raises for text input; an empty or whitespace-only query yields
        an empty corrected string, the default intent, no entities and an
        expansion set holding just the empty string.
        """
        request_id = self.generate_request_id()
        original = "" if query is None else query

        corrected = self.spell_corrector.correct(original)
        intent = self.intent_classifier.classify(corrected)
        entities = self.entity_extractor.extract(corrected)
        expanded_terms = self.query_expander.expand(corrected, entities)
        filters = entities_to_filters(entities)

        self.logger.info(
            f"[{request_id}] '{original}' → '{corrected}' "
            f"intent={intent.value} entities={len(entities)} expanded={len(expanded_terms)}"
        )

        return ProcessedQuery(
            original=original,
            corrected=corrected,
            intent=intent,
            entities=tuple(entities),
            expanded_terms=tuple(expanded_terms),
            filters=filters,
        )

    async def aprocess(self, query: str) -> ProcessedQuery:
        """
        ``process`` off the event loop.

        Cancelling the awaiting task discards the whole result, including the
        outcome of any augmentation call still in flight.
        """
        return await asyncio.to_thread(self.process, query)


@lru_cache(maxsize=1)
def get_query_pipeline() -> QueryPipeline:
    """
    Process-wide pipeline built from configuration.

    Validates configuration on first use (fatal in production for CRITICAL
    issues) and wires in the augmentation service when one is configured.
    """
    from xpertsearch.config import config

    validate_config_on_startup(config)
    augmentation = get_augmentation_service(config.augmentation)
    return QueryPipeline.from_config(config, augmentation=augmentation)
