"""
Fuzzy Matching Utility

Provides typo-tolerant matching of query tokens against dictionary terms.
Uses Levenshtein edit distance for similarity calculation.

Candidates are always scanned in lexicographic order and the first candidate
at the minimum distance wins, so the same token resolves to the same term on
every run.
"""

from typing import Iterable, Optional, Tuple
from functools import lru_cache


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein edit distance between two strings.

    The edit distance is the minimum number of single-character edits
    (insertions, deletions, substitutions) needed to transform s1 into s2.

    Examples:
        >>> levenshtein_distance("blu", "blue")
        1
        >>> levenshtein_distance("jakcet", "jacket")
        2
        >>> levenshtein_distance("dress", "dress")
        0
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


@lru_cache(maxsize=50000)
def cached_levenshtein(s1: str, s2: str) -> int:
    """Cached version of levenshtein_distance for repeated lookups."""
    return levenshtein_distance(s1, s2)


def _best_match(token: str, ordered: Iterable[str], max_distance: int) -> Optional[Tuple[str, int]]:
    best_match = None
    best_distance = max_distance + 1

    for candidate in ordered:
        # Exact match - return immediately
        if token == candidate:
            return (candidate, 0)

        # Skip if length difference alone exceeds the budget
        if abs(len(token) - len(candidate)) > max_distance:
            continue

        distance = cached_levenshtein(token, candidate)

        # Strict comparison keeps the lexicographically first candidate on ties
        if distance < best_distance:
            best_distance = distance
            best_match = candidate

    return (best_match, best_distance) if best_match is not None else None


def fuzzy_match(
    token: str,
    candidates: Iterable[str],
    max_distance: int = 2,
) -> Optional[Tuple[str, int]]:
    """
    Find the closest candidate to ``token`` within ``max_distance`` edits.

    Args:
        token: Lowercase token to match
        candidates: Candidate terms (any iterable; scanned in sorted order)
        max_distance: Maximum allowed edit distance (default: 2)

    Returns:
        Tuple of (matched_term, edit_distance) or None if nothing is close enough

    Examples:
        >>> fuzzy_match("drees", {"dress", "dresses", "tie"})
        ("dress", 1)
        >>> fuzzy_match("xyzzy", {"dress"})
        None
    """
    return _best_match(token, sorted(candidates), max_distance)


class FuzzyMatcher:
    """
    Fuzzy matcher bound to one candidate set.

    Sorts the candidates once so repeated lookups skip the sort.

    Usage:
        matcher = FuzzyMatcher(dictionary.sorted_vocabulary)
        matcher.match("swimsut")    # ("swimsuit", 1)
    """

    def __init__(self, candidates: Iterable[str], max_distance: int = 2):
        self.candidates = tuple(sorted(candidates))
        self.max_distance = max_distance

    def match(self, token: str) -> Optional[Tuple[str, int]]:
        return _best_match(token, self.candidates, self.max_distance)

    def closest(self, token: str) -> Optional[str]:
        """Matched term only, or None."""
        result = self.match(token)
        return result[0] if result else None
