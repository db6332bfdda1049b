"""
Query Expander

Builds the recall-oriented term set for a corrected query:

1. The corrected query itself
2. Static synonyms for every category entity
3. Static variations for every color entity
4. If fewer than ``min_terms`` terms so far and augmentation is available,
   comma-separated related terms from one bounded augmentation call
5. Exact-match (case-sensitive) deduplication
"""

from typing import List, Optional, Sequence

from core.exceptions import AugmentationError
from core.services.base import BaseService
from .augmentation import AugmentationService, call_with_timeout
from .entity_extractor import Entity, EntityType
from .term_dictionary import TermDictionary


def parse_related_terms(response: str) -> List[str]:
    """Split a comma-separated answer, trimming and dropping empty pieces."""
    return [term.strip() for term in response.split(",") if term.strip()]


class QueryExpander(BaseService):
    """
    Static-first query expansion with an optional augmentation top-up.

    Example:
        >>> expander = QueryExpander(DEFAULT_DICTIONARY)
        >>> expander.expand("red dress", extractor.extract("red dress"))
        ['red dress', 'crimson', 'ruby', 'scarlet', 'burgundy', 'dresses', 'gown', 'frock']
    """

    def __init__(
        self,
        dictionary: TermDictionary,
        augmentation: Optional[AugmentationService] = None,
        timeout: float = 2.0,
        min_terms: int = 5,
    ):
        self.dictionary = dictionary
        self.augmentation = augmentation
        self.timeout = timeout
        self.min_terms = min_terms

    def expand(self, query: str, entities: Sequence[Entity]) -> List[str]:
        terms = [query]

        for entity in entities:
            if entity.type == EntityType.CATEGORY:
                terms.extend(self.dictionary.synonyms_for(entity.value))
            elif entity.type == EntityType.COLOR:
                terms.extend(self.dictionary.variations_for(entity.value))

        if len(terms) < self.min_terms:
            terms.extend(self._related_terms(query))

        # Deduplicate while preserving order
        return list(dict.fromkeys(terms))

    def _related_terms(self, query: str) -> List[str]:
        if self.augmentation is None:
            self.logger.debug("No augmentation service, static expansion only")
            return []

        try:
            response = call_with_timeout(self.augmentation.expand, query, self.timeout)
        except AugmentationError as e:
            self.logger.warning(f"Expansion augmentation failed for '{query}': {e}, skipping")
            return []

        related = parse_related_terms(response)
        self.logger.debug(f"Augmentation added {len(related)} related terms for '{query}'")
        return related
