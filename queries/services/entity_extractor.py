"""
Entity Extractor

Pattern- and membership-based extraction of typed, confidence-scored entities
from a corrected query. Pure string matching: it cannot fail for any input.

Axes are evaluated in a fixed order and entities are emitted in that order:

    price → color → category → material → size → occasion

- price:     one alternation regex, first match only (confidence 0.9)
- color:     substring containment of each dictionary color (0.8)
- category:  substring containment of each dictionary category (0.8)
- material:  substring containment of each dictionary material (0.7)
- size:      whole-word match of each size token (0.7)
- occasion:  substring containment of each dictionary occasion (0.7)

Within an axis, terms are tested in sorted order. ``brand`` exists as an
entity type but nothing here produces it.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from core.services.base import BaseService
from .term_dictionary import TermDictionary


class EntityType(str, Enum):
    """Kinds of entity a query can carry."""
    PRICE = "price"
    COLOR = "color"
    BRAND = "brand"
    CATEGORY = "category"
    MATERIAL = "material"
    SIZE = "size"
    OCCASION = "occasion"


# Fixed confidences per axis
CONFIDENCE = {
    EntityType.PRICE: 0.9,
    EntityType.COLOR: 0.8,
    EntityType.CATEGORY: 0.8,
    EntityType.MATERIAL: 0.7,
    EntityType.SIZE: 0.7,
    EntityType.OCCASION: 0.7,
}


@dataclass(frozen=True)
class PriceRange:
    """Price bounds in whole currency units; either side may be open."""
    min: Optional[int] = None
    max: Optional[int] = None

    def to_dict(self) -> Dict[str, int]:
        result = {}
        if self.min is not None:
            result["min"] = self.min
        if self.max is not None:
            result["max"] = self.max
        return result


@dataclass(frozen=True)
class Entity:
    """
    A typed fragment of structured meaning.

    ``value`` is a PriceRange for price entities and a string otherwise.
    """
    type: EntityType
    value: Union[PriceRange, str]
    confidence: float

    def __post_init__(self):
        # Accept plain strings; unknown type names raise ValueError here
        object.__setattr__(self, "type", EntityType(self.type))
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        value = self.value.to_dict() if isinstance(self.value, PriceRange) else self.value
        return {
            "type": self.type.value,
            "value": value,
            "confidence": self.confidence,
        }


class EntityExtractor(BaseService):
    """
    Extracts entities from a corrected, lowercased query.

    Example:
        >>> extractor = EntityExtractor(DEFAULT_DICTIONARY)
        >>> [e.to_dict() for e in extractor.extract("red dress under $50")]
        [{'type': 'price', 'value': {'max': 50}, 'confidence': 0.9},
         {'type': 'color', 'value': 'red', 'confidence': 0.8},
         {'type': 'category', 'value': 'dress', 'confidence': 0.8}]
    """

    # ─── Compiled regex patterns ──────────────────────────────────

    # Alternatives 1-3: upper bound only. Alternative 4: "$N to $M".
    _PRICE_PATTERN = re.compile(
        r'under\s+\$?(\d+)'
        r'|below\s+\$?(\d+)'
        r'|less\s+than\s+\$?(\d+)'
        r'|\$(\d+)\s+to\s+\$(\d+)'
    )

    def __init__(self, dictionary: TermDictionary):
        self.dictionary = dictionary
        self._colors = sorted(dictionary.colors)
        self._categories = sorted(dictionary.categories)
        self._materials = sorted(dictionary.materials)
        self._occasions = sorted(dictionary.occasions)
        # Word boundaries keep "xs" from matching inside unrelated words
        self._size_patterns = [
            (size, re.compile(r'\b' + re.escape(size) + r'\b'))
            for size in sorted(dictionary.sizes)
        ]

    # ─── Public API ──────────────────────────────────────────────

    def extract(self, query: str) -> List[Entity]:
        query_lower = (query or "").lower()
        entities: List[Entity] = []

        price = self.extract_price(query_lower)
        if price is not None:
            entities.append(Entity(EntityType.PRICE, price, CONFIDENCE[EntityType.PRICE]))

        entities.extend(self._contained(query_lower, self._colors, EntityType.COLOR))
        entities.extend(self._contained(query_lower, self._categories, EntityType.CATEGORY))
        entities.extend(self._contained(query_lower, self._materials, EntityType.MATERIAL))
        entities.extend(
            Entity(EntityType.SIZE, size, CONFIDENCE[EntityType.SIZE])
            for size, pattern in self._size_patterns
            if pattern.search(query_lower)
        )
        entities.extend(self._contained(query_lower, self._occasions, EntityType.OCCASION))

        return entities

    def extract_price(self, query_lower: str) -> Optional[PriceRange]:
        """First price expression in the query, or None."""
        match = self._PRICE_PATTERN.search(query_lower)
        if not match:
            return None

        under, below, less_than, low, high = match.groups()
        if low is not None and high is not None:
            return PriceRange(min=int(low), max=int(high))

        return PriceRange(max=int(under or below or less_than))

    # ─── Helpers ─────────────────────────────────────────────────

    @staticmethod
    def _contained(query_lower: str, terms: List[str], entity_type: EntityType) -> List[Entity]:
        return [
            Entity(entity_type, term, CONFIDENCE[entity_type])
            for term in terms
            if term in query_lower
        ]
