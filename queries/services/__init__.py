# Services package
from .term_dictionary import DEFAULT_DICTIONARY, TermDictionary
from .fuzzy_matcher import levenshtein_distance, fuzzy_match, FuzzyMatcher
from .spell_corrector import SpellCorrector, SpellCorrection
from .augmentation import (
    AugmentationService,
    OpenAIAugmentationService,
    call_with_timeout,
    build_augmentation_service,
    get_augmentation_service,
)
from .intent_classifier import IntentClassifier, IntentRule, SearchIntent
from .entity_extractor import EntityExtractor, Entity, EntityType, PriceRange
from .query_expander import QueryExpander
from .filter_synthesizer import SearchFilters, entities_to_filters
from .query_pipeline import QueryPipeline, ProcessedQuery, get_query_pipeline

__all__ = [
    # Dictionary
    "DEFAULT_DICTIONARY",
    "TermDictionary",
    # Fuzzy matching
    "levenshtein_distance",
    "fuzzy_match",
    "FuzzyMatcher",
    # Spell correction
    "SpellCorrector",
    "SpellCorrection",
    # Augmentation
    "AugmentationService",
    "OpenAIAugmentationService",
    "call_with_timeout",
    "build_augmentation_service",
    "get_augmentation_service",
    # Intent
    "IntentClassifier",
    "IntentRule",
    "SearchIntent",
    # Entities
    "EntityExtractor",
    "Entity",
    "EntityType",
    "PriceRange",
    # Expansion
    "QueryExpander",
    # Filters
    "SearchFilters",
    "entities_to_filters",
    # Pipeline
    "QueryPipeline",
    "ProcessedQuery",
    "get_query_pipeline",
]
