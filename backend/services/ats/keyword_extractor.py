"""High-impact keyword extraction for resumes and job descriptions.

Pulls acronyms, Title-Case phrases, capitalized words and known technical
terms out of free text while rejecting job-board boilerplate, dates,
locations, visa/compensation language and filler-dominated phrases.

Extraction is deterministic: the same text always yields the same
keywords in the same order, which the regeneration verifier relies on.
"""

import logging
import re

from services.ats.vocabulary import Vocabulary, get_vocabulary

logger = logging.getLogger(__name__)

# A KeywordSet is an ordered, case-insensitively unique list of keywords.
KeywordSet = list[str]

DEFAULT_KEYWORD_LIMIT = 50

# CI/CD, AWS, SQL - 2+ uppercase letters, optionally slash-chained
_ACRONYM_RE = re.compile(r"\b[A-Z]{2,}(?:/[A-Z]{2,})*\b")
# Machine Learning, Docker - runs of Title-Case words on one line
_CAPITALIZED_RE = re.compile(r"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*\b")

_TIME_REFERENCE_RE = re.compile(
    r"\b\d{1,3}\+?\s*(?:day|week|month|hour|year)s?\s*(?:ago|old)\b", re.IGNORECASE
)
_AMOUNT = r"[$€£]\s?\d[\d,]*(?:\.\d+)?(?:\s?[kK])?"
_COMPENSATION_RE = re.compile(
    rf"{_AMOUNT}(?:\s*(?:-|to)\s*{_AMOUNT})?"
    r"(?:\s*(?:/\s*(?:hr|hour|yr|year)|per\s+(?:hour|year)|an\s+hour|a\s+year))?",
    re.IGNORECASE,
)


def _location_span_re(qualifiers: tuple[str, ...]) -> re.Pattern:
    """'Mount Laurel, NJ' / 'Austin, United States' spans."""
    alternatives = "|".join(
        re.escape(q).replace(r"\ ", r"[ \t]+")
        for q in sorted(qualifiers, key=len, reverse=True)
    )
    return re.compile(
        rf"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,[ \t]*(?:{alternatives})\b"
    )


def _lexicon_re(terms: frozenset[str]) -> re.Pattern:
    alternatives = "|".join(
        re.escape(t).replace(r"\ ", r"\s+")
        for t in sorted(terms, key=len, reverse=True)
    )
    return re.compile(rf"(?<![\w.#+/-])(?:{alternatives})(?![\w#+/-])")


class KeywordExtractor:
    """Stateless keyword extractor configured with a ``Vocabulary``."""

    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self.vocabulary = vocabulary or get_vocabulary()
        self._location_re = _location_span_re(self.vocabulary.location_qualifiers)
        self._lexicon_re = _lexicon_re(self.vocabulary.technical_terms)

    # ------------------------------------------------------------------
    # Noise classification
    # ------------------------------------------------------------------

    def noise_reason(self, candidate: str) -> str | None:
        """Return why ``candidate`` is noise, or None if it may be a keyword."""
        vocab = self.vocabulary
        lower = candidate.lower().strip()
        words = lower.split()
        if not words:
            return "empty"

        for name, pattern in vocab.noise_patterns:
            if pattern.search(lower):
                return name

        if len(words) == 1:
            word = words[0]
            if word in vocab.stopwords:
                return "stopword"
            if word in vocab.meta_nouns:
                return "meta_noun"
            if word in vocab.generic_words:
                return "generic"
        elif all(w in vocab.stopwords or w in vocab.meta_nouns for w in words):
            return "stopword_phrase"

        if any(w in vocab.company_markers for w in words):
            return "company"

        if len(words) > 1:
            filler_count = sum(1 for w in words if w in vocab.filler_words)
            if filler_count / len(words) > 0.5:
                return "filler_phrase"
            if (words[0] in vocab.filler_words or words[-1] in vocab.filler_words) and \
                    not vocab.is_known_technical_phrase(lower):
                return "filler_edge"

        return None

    def is_noise(self, candidate: str) -> bool:
        return self.noise_reason(candidate) is not None

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def _strip_noise_spans(self, text: str) -> str:
        """Blank out spans that must never contribute keywords."""
        for pattern in (_TIME_REFERENCE_RE, _COMPENSATION_RE, self._location_re):
            text = pattern.sub("\n", text)
        return text

    def extract(self, text: str, limit: int | None = DEFAULT_KEYWORD_LIMIT) -> KeywordSet:
        """Extract high-impact keywords from ``text``.

        Acronyms keep their original case; everything else is lower-cased.
        Returns at most ``limit`` keywords (None for no cap).
        """
        if not text or not text.strip():
            return []

        cleaned = self._strip_noise_spans(text)
        keywords: KeywordSet = []
        seen: set[str] = set()

        def add(keyword: str, min_length: int) -> None:
            key = keyword.lower()
            if key in seen or len(keyword) < min_length or self.is_noise(keyword):
                return
            seen.add(key)
            keywords.append(keyword)

        # 1. Acronyms, original case
        for match in _ACRONYM_RE.finditer(cleaned):
            add(match.group(0), 2)

        # 2-3. Title-Case phrases and single capitalized words
        for match in _CAPITALIZED_RE.finditer(cleaned):
            add(" ".join(match.group(0).split()).lower(), 3)

        # 4-5. Lower-cased text scanned for known technical terms
        normalized = cleaned.lower()
        for match in self._lexicon_re.finditer(normalized):
            add(" ".join(match.group(0).split()), 3)

        if limit is not None and len(keywords) > limit:
            keywords = keywords[:limit]
        return keywords


_default_extractor: KeywordExtractor | None = None


def get_extractor() -> KeywordExtractor:
    global _default_extractor
    vocabulary = get_vocabulary()
    if _default_extractor is None or _default_extractor.vocabulary is not vocabulary:
        _default_extractor = KeywordExtractor(vocabulary)
    return _default_extractor


def extract_keywords(text: str, limit: int | None = DEFAULT_KEYWORD_LIMIT) -> KeywordSet:
    """Extract keywords with the configured vocabulary."""
    return get_extractor().extract(text, limit=limit)


def is_noise(candidate: str) -> bool:
    return get_extractor().is_noise(candidate)
