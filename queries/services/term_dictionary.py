"""
Term Dictionary

Static vocabulary and correction tables shared by spell correction,
entity extraction and query expansion.

The module-level gazetteers below are the default contents. They are frozen
into one immutable ``TermDictionary`` at import time (``DEFAULT_DICTIONARY``)
and passed explicitly into every pipeline component. Nothing mutates it, so
any number of concurrent requests may read it without locking.

Axes:
- category, color, material, size, occasion: terms the entity extractor looks for
- vocabulary: every term the spell corrector treats as correctly spelled
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

# =============================================================================
# EXTRACTION AXES
# =============================================================================
CATEGORIES = (
    "dress", "shirt", "shoes", "pants", "jacket", "sweater",
    "jeans", "coat", "bag", "watch", "jewelry", "accessories",
)

COLORS = (
    "red", "blue", "green", "yellow", "black", "white", "gray", "grey",
    "pink", "purple", "orange", "brown", "beige", "navy", "gold", "silver",
)

MATERIALS = (
    "cotton", "silk", "wool", "leather", "denim", "polyester",
    "nylon", "linen", "cashmere", "velvet", "suede",
)

SIZES = (
    "small", "medium", "large", "xs", "sm", "md", "lg", "xl", "xxl",
)

OCCASIONS = (
    "casual", "formal", "business", "party", "wedding",
    "evening", "cocktail", "work", "office", "gym", "sports",
)

# Brand names that mark a navigational query
BRANDS = (
    "nike", "adidas", "puma", "reebok", "levis", "gap", "zara", "uniqlo",
)

# =============================================================================
# SPELLING VOCABULARY: tokens accepted as already correct
# =============================================================================
VOCABULARY = frozenset({
    # Product categories
    "dress", "dresses", "shirt", "shirts", "shoes", "pants", "jacket", "jackets",
    "sweater", "sweaters", "jeans", "coat", "coats", "bag", "bags", "watch", "watches",
    "jewelry", "accessories", "hat", "hats", "scarf", "scarves", "gloves", "socks",
    "underwear", "swimsuit", "swimwear", "bikini", "shorts", "skirt", "skirts",
    "blouse", "blazer", "suit", "suits", "tie", "ties", "belt", "belts",

    # Colors
    "red", "blue", "green", "yellow", "black", "white", "gray", "grey", "pink",
    "purple", "orange", "brown", "beige", "navy", "gold", "silver", "rose",

    # Materials
    "cotton", "silk", "wool", "leather", "denim", "polyester", "nylon", "linen",
    "cashmere", "velvet", "suede", "satin", "chiffon", "lace", "mesh",

    # Sizes and fits
    "small", "medium", "large", "extra", "plus", "petite", "tall", "regular",
    "slim", "fit", "loose", "tight", "oversized",

    # Occasions and seasons
    "casual", "formal", "business", "party", "wedding", "evening", "cocktail",
    "work", "office", "gym", "sports", "athletic", "outdoor", "beach", "summer",
    "winter", "spring", "fall", "autumn",

    # Brands
    "nike", "adidas", "puma", "reebok", "levis", "gap", "zara", "uniqlo",

    # Audience
    "womens", "women", "mens", "men", "kids", "children", "baby", "babies",
})

# =============================================================================
# LITERAL CORRECTIONS: typo / abbreviation → canonical text
# =============================================================================
CORRECTIONS = {
    # Dropped vowels
    "drss": "dress",
    "shrt": "shirt",
    "pnts": "pants",
    "jckt": "jacket",
    "swetr": "sweater",
    "jwlry": "jewelry",
    "accsories": "accessories",

    # Phonetic mistakes
    "blak": "black",
    "blu": "blue",
    "grn": "green",
    "gry": "gray",
    "wht": "white",

    # Size abbreviations
    "sm": "small",
    "md": "medium",
    "lg": "large",
    "xl": "extra large",
    "xxl": "extra extra large",
}

# =============================================================================
# EXPANSION TABLES
# =============================================================================
CATEGORY_SYNONYMS = {
    "dress": ["dresses", "gown", "frock"],
    "shirt": ["shirts", "top", "blouse", "tee"],
    "pants": ["trousers", "slacks", "bottoms"],
    "jacket": ["jackets", "coat", "blazer", "outerwear"],
    "shoes": ["footwear", "sneakers", "boots", "sandals"],
    "bag": ["bags", "purse", "handbag", "backpack", "tote"],
    "jewelry": ["jewellery", "accessories", "necklace", "ring", "bracelet"],
}

COLOR_VARIATIONS = {
    "red": ["crimson", "ruby", "scarlet", "burgundy"],
    "blue": ["navy", "azure", "cobalt", "sapphire"],
    "green": ["emerald", "olive", "forest", "mint"],
    "gray": ["grey", "charcoal", "slate", "ash"],
    "black": ["ebony", "onyx", "jet", "dark"],
    "white": ["ivory", "cream", "pearl", "snow"],
}

AXES = ("category", "color", "material", "size", "occasion")


def _freeze_lists(mapping) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({k.lower(): tuple(v) for k, v in mapping.items()})


# =============================================================================
# TERM DICTIONARY
# =============================================================================

@dataclass(frozen=True)
class TermDictionary:
    """
    Immutable, read-only term tables.

    Build with ``TermDictionary.build(...)`` (or use ``DEFAULT_DICTIONARY``);
    there is no mutation API. Reloading means building a new instance.
    """
    categories: FrozenSet[str]
    colors: FrozenSet[str]
    materials: FrozenSet[str]
    sizes: FrozenSet[str]
    occasions: FrozenSet[str]
    brands: Tuple[str, ...]
    vocabulary: FrozenSet[str]
    corrections: Mapping[str, str]
    category_synonyms: Mapping[str, Tuple[str, ...]]
    color_variations: Mapping[str, Tuple[str, ...]]
    # Vocabulary in lexicographic order: the fuzzy matcher's tie-break order
    sorted_vocabulary: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "sorted_vocabulary", tuple(sorted(self.vocabulary)))

    @classmethod
    def build(
        cls,
        categories=CATEGORIES,
        colors=COLORS,
        materials=MATERIALS,
        sizes=SIZES,
        occasions=OCCASIONS,
        brands=BRANDS,
        vocabulary=VOCABULARY,
        corrections=None,
        category_synonyms=None,
        color_variations=None,
    ) -> "TermDictionary":
        """Build a dictionary, lowercasing every term."""
        return cls(
            categories=frozenset(t.lower() for t in categories),
            colors=frozenset(t.lower() for t in colors),
            materials=frozenset(t.lower() for t in materials),
            sizes=frozenset(t.lower() for t in sizes),
            occasions=frozenset(t.lower() for t in occasions),
            brands=tuple(sorted({b.lower() for b in brands})),
            vocabulary=frozenset(t.lower() for t in vocabulary),
            corrections=MappingProxyType({
                k.lower(): v.lower()
                for k, v in (CORRECTIONS if corrections is None else corrections).items()
            }),
            category_synonyms=_freeze_lists(CATEGORY_SYNONYMS if category_synonyms is None else category_synonyms),
            color_variations=_freeze_lists(COLOR_VARIATIONS if color_variations is None else color_variations),
        )

    # ─── Lookups ─────────────────────────────────────────────────

    def terms(self, axis: str) -> FrozenSet[str]:
        """All terms on one extraction axis."""
        if axis not in AXES:
            raise KeyError(f"Unknown dictionary axis: {axis!r}")
        return getattr(self, {
            "category": "categories",
            "color": "colors",
            "material": "materials",
            "size": "sizes",
            "occasion": "occasions",
        }[axis])

    def contains(self, axis: str, term: str) -> bool:
        """Membership test on one extraction axis."""
        return term.lower() in self.terms(axis)

    def is_known(self, token: str) -> bool:
        """Whether the spell corrector accepts ``token`` as correctly spelled."""
        return token in self.vocabulary

    def correction_for(self, token: str):
        """Literal correction for ``token``, or None."""
        return self.corrections.get(token)

    def synonyms_for(self, category: str) -> Tuple[str, ...]:
        return self.category_synonyms.get(category.lower(), ())

    def variations_for(self, color: str) -> Tuple[str, ...]:
        return self.color_variations.get(color.lower(), ())


# Build once at module load
DEFAULT_DICTIONARY = TermDictionary.build()
