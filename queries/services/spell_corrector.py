"""
Spell Correction Service — dictionary-based typo correction for search queries.

Each whitespace-delimited token of the lowercased query is resolved by:
1. Literal correction table ("blu" → "blue", "xl" → "extra large")
2. Dictionary membership (already correct, kept as-is)
3. Fuzzy match against the vocabulary (Levenshtein, budget 2)
4. Otherwise left untouched

The corrector applies no minimum token length by default, so short tokens can
be fuzz-matched. The ``needs_correction`` / ``suggestions`` diagnostics skip
tokens of 3 characters or fewer.

Cache: LRU per corrector instance (4096 tokens) to avoid repeated fuzzy scans.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List

from core.services.base import BaseService
from .fuzzy_matcher import FuzzyMatcher
from .term_dictionary import TermDictionary

# Diagnostics ignore tokens this short
DIAGNOSTIC_MIN_LENGTH = 4


@dataclass(frozen=True)
class SpellCorrection:
    """Result of spell correction."""
    original: str
    corrected: str
    was_corrected: bool


class SpellCorrector(BaseService):
    """
    Deterministic spell corrector over a ``TermDictionary``.

    Example:
        >>> corrector = SpellCorrector(DEFAULT_DICTIONARY)
        >>> corrector.correct("Casual BLU jeens")
        'casual blue jeans'
    """

    def __init__(self, dictionary: TermDictionary, max_distance: int = 2, min_token_length: int = 0):
        """
        Args:
            dictionary: Term tables to correct against
            max_distance: Fuzzy edit-distance budget (default: 2)
            min_token_length: Tokens shorter than this skip fuzzy matching (default: 0, none skip)
        """
        self.dictionary = dictionary
        self.max_distance = max_distance
        self.min_token_length = max(0, min_token_length)
        self._matcher = FuzzyMatcher(dictionary.sorted_vocabulary, max_distance=max_distance)
        self._resolve = lru_cache(maxsize=4096)(self._resolve_token)

    # ─── Public API ──────────────────────────────────────────────

    def correct(self, query: str) -> str:
        """Return the corrected, lowercased, single-space-joined query."""
        return " ".join(self._resolve(token) for token in self.tokenize(query))

    def check(self, query: str) -> SpellCorrection:
        """Correct ``query`` and report whether anything changed."""
        corrected = self.correct(query)
        return SpellCorrection(
            original=query,
            corrected=corrected,
            was_corrected=corrected != " ".join(self.tokenize(query)),
        )

    def needs_correction(self, query: str) -> bool:
        """True when some token longer than 3 characters is unknown."""
        return any(
            len(token) >= DIAGNOSTIC_MIN_LENGTH
            and not self.dictionary.is_known(token)
            and self.dictionary.correction_for(token) is None
            for token in self.tokenize(query)
        )

    def suggestions(self, query: str) -> List[str]:
        """
        One suggested query per correctable token, each with only that token fixed.

        Example:
            >>> corrector.suggestions("blakk jakcet")
            ['black jakcet', 'blakk jacket']
        """
        words = self.tokenize(query)
        suggestions = []

        for index, word in enumerate(words):
            if len(word) < DIAGNOSTIC_MIN_LENGTH or self.dictionary.is_known(word):
                continue
            correction = self._matcher.closest(word)
            if correction and correction != word:
                suggestion = words[:index] + [correction] + words[index + 1:]
                suggestions.append(" ".join(suggestion))

        return list(dict.fromkeys(suggestions))

    @staticmethod
    def tokenize(query: str) -> List[str]:
        return (query or "").lower().split()

    # ─── Token resolution ────────────────────────────────────────

    def _resolve_token(self, token: str) -> str:
        literal = self.dictionary.correction_for(token)
        if literal is not None:
            return literal

        if self.dictionary.is_known(token):
            return token

        if len(token) < self.min_token_length:
            return token

        match = self._matcher.match(token)
        if match:
            self.logger.debug(f"Spell correction: '{token}' ~→ '{match[0]}' (distance {match[1]})")
            return match[0]

        return token
