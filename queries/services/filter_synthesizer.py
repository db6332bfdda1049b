"""
Filter Synthesizer

Folds extracted entities into the structured filter object handed to
retrieval. A pure function of the entity list:

- price    → price_range (last one wins)
- color    → colors (appended, duplicates kept)
- brand    → vendor (last one wins)
- category → product_type (last one wins)
- material → materials (appended)
- size     → sizes (appended)
- occasion → tags (appended)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from core.exceptions import UnknownEntityTypeError
from .entity_extractor import Entity, EntityType, PriceRange


@dataclass
class SearchFilters:
    """Structured retrieval filters; unset fields are omitted from ``to_dict``."""
    price_range: Optional[PriceRange] = None
    colors: Optional[List[str]] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    materials: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        if self.price_range is not None:
            result["price_range"] = self.price_range.to_dict()
        for name in ("colors", "vendor", "product_type", "materials", "sizes", "tags"):
            value = getattr(self, name)
            if value is not None:
                result[name] = list(value) if isinstance(value, list) else value
        return result

    def is_empty(self) -> bool:
        return not self.to_dict()


# List-valued fields per entity type
_APPEND_FIELDS = {
    EntityType.COLOR: "colors",
    EntityType.MATERIAL: "materials",
    EntityType.SIZE: "sizes",
    EntityType.OCCASION: "tags",
}


def entities_to_filters(entities: Sequence[Entity]) -> SearchFilters:
    """
    Convert entities to search filters.

    Raises:
        UnknownEntityTypeError: an entity type with no filter mapping
    """
    filters = SearchFilters()

    for entity in entities:
        if entity.type == EntityType.PRICE:
            filters.price_range = entity.value
        elif entity.type == EntityType.BRAND:
            filters.vendor = entity.value
        elif entity.type == EntityType.CATEGORY:
            filters.product_type = entity.value
        elif entity.type in _APPEND_FIELDS:
            name = _APPEND_FIELDS[entity.type]
            if getattr(filters, name) is None:
                setattr(filters, name, [])
            getattr(filters, name).append(entity.value)
        else:
            raise UnknownEntityTypeError(
                f"No filter mapping for entity type {entity.type!r}",
                entity_type=str(entity.type),
            )

    return filters
