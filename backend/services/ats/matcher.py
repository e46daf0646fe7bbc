"""Semantic keyword matching.

Decides whether two keywords denote the same concept using, in order:
exact equality, substring containment, a shared significant word, and a
small table of cross-domain synonym pairs. Every rule is symmetric, so
``is_match(a, b) == is_match(b, a)``.
"""

from services.ats.vocabulary import Vocabulary, get_vocabulary

# Shorter side of a substring match must be at least this long ("it" vs "fit")
MIN_SUBSTRING_LENGTH = 4
# Words shorter than this are not "significant" for shared-word matching
MIN_SIGNIFICANT_WORD_LENGTH = 4


def significant_words(phrase: str) -> set[str]:
    return {w for w in phrase.lower().split() if len(w) >= MIN_SIGNIFICANT_WORD_LENGTH}


class SemanticMatcher:
    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self.vocabulary = vocabulary or get_vocabulary()

    def match_type(self, a: str, b: str) -> str | None:
        """Name of the first rule that matches ``a`` and ``b``, or None."""
        k1 = a.lower().strip()
        k2 = b.lower().strip()
        if not k1 or not k2:
            return None

        if k1 == k2:
            return "exact"

        shorter = k1 if len(k1) <= len(k2) else k2
        if len(shorter) >= MIN_SUBSTRING_LENGTH and (k1 in k2 or k2 in k1):
            return "substring"

        if significant_words(k1) & significant_words(k2):
            return "shared_word"

        for x, y in self.vocabulary.synonym_pairs:
            if (x in k1 and y in k2) or (y in k1 and x in k2):
                return "synonym"

        return None

    def is_match(self, a: str, b: str) -> bool:
        return self.match_type(a, b) is not None

    def find_match(self, keyword: str, candidates: list[str]) -> str | None:
        """First candidate matching ``keyword`` (deterministic by list order)."""
        for candidate in candidates:
            if self.is_match(candidate, keyword):
                return candidate
        return None


_default_matcher: SemanticMatcher | None = None


def get_matcher() -> SemanticMatcher:
    global _default_matcher
    vocabulary = get_vocabulary()
    if _default_matcher is None or _default_matcher.vocabulary is not vocabulary:
        _default_matcher = SemanticMatcher(vocabulary)
    return _default_matcher


def is_match(a: str, b: str) -> bool:
    """Whether two keywords denote the same concept."""
    return get_matcher().is_match(a, b)
