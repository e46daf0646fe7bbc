"""Static word lists and noise patterns for the ATS keyword engine.

All tables are bundled into one immutable ``Vocabulary`` value which is
handed to the extractor, matcher and quality validator. Deployments can
extend the built-in tables with a YAML file (``ATS_VOCABULARY_PATH``);
extensions are merged into a new ``Vocabulary``, never patched in place.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path

import yaml

from config import settings

logger = logging.getLogger(__name__)

VOCABULARY_VERSION = "2026.10"

# ---------------------------------------------------------------------------
# Noise patterns: a candidate keyword matching any of these is discarded.
# Patterns run against the lower-cased candidate.
# ---------------------------------------------------------------------------
NOISE_PATTERNS: dict[str, str] = {
    "time_reference": r"\d+\s*(?:day|week|month|hour|year)s?\s*(?:ago|old)",
    "job_board": r"\b(?:posted|apply|applying|save|saved|share|glance|easy apply|apply by|reposted)\b",
    "location": (
        r"\b(?:remote|onsite|on-site|hybrid|us|usa|united states|based in|location|"
        r"locations|work from home|wfh|relocation)\b"
    ),
    "authorization": (
        r"\b(?:sponsorship|sponsor|visa|opt|cpt|h-?1b|green card|citizenship|"
        r"authorization required|work authorization|authorized to work)\b"
    ),
    "compensation": r"[$€£]\s*\d|\b\d+(?:\.\d+)?\s*k\b|/\s*hr\b|\bper hour\b|\ban hour\b",
    "calendar": (
        r"^(?:january|february|march|april|may|june|july|august|september|october|"
        r"november|december|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec|"
        r"monday|tuesday|wednesday|thursday|friday|saturday|sunday|today|yesterday)$"
    ),
    "numeric": r"^[\d\s.,/+-]+$",
}

# Closed-class English function words
STOPWORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
    "have", "has", "had", "do", "does", "did", "will", "would", "should",
    "could", "may", "might", "must", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "me", "my", "our", "ours",
    "your", "yours", "his", "her", "its", "their", "them", "us",
    "what", "which", "who", "whom", "whose", "where", "when", "why", "how",
    "all", "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "just", "now", "also", "into", "about", "over", "under", "if",
    "then", "there", "here", "any", "while", "per", "via", "etc",
})

# Job-posting meta nouns and other words that never denote a skill
META_NOUNS: frozenset[str] = frozenset({
    "looking", "seeking", "candidate", "candidates", "position", "positions",
    "role", "roles", "opportunity", "opportunities", "company", "team", "teams",
    "work", "environment", "culture", "benefits", "compensation", "salary",
    "hour", "week", "year", "years", "experience", "required", "preferred",
    "qualifications", "qualification", "responsibilities", "responsibility",
    "requirements", "requirement", "duties", "tasks", "job", "jobs", "app",
    "application", "applications", "applicant", "applicants", "employer",
    "employment", "description", "overview", "summary", "about", "join",
    "open", "close", "new", "old", "first", "last", "next", "previous",
    "intern", "internship", "full-time", "part-time", "contract", "now",
    "skills", "skill", "education", "achievements", "projects", "certifications",
    "profile", "contact", "references", "highlights", "pay",
})

# Words that make a phrase filler-dominated ("the role", "what you")
FILLER_WORDS: frozenset[str] = frozenset({
    "the", "this", "that", "what", "which", "who", "you", "your", "our",
    "role", "app", "application", "job", "position",
})

# Technical collocations allowed to begin or end with a filler word
KNOWN_TECHNICAL_PHRASES: tuple[str, ...] = (
    "machine learning", "deep learning", "natural language",
    "artificial intelligence", "cloud computing", "data science",
    "web development", "mobile development", "software engineering",
    "system design", "api design", "user experience",
)

# Lower-case terms promoted to keywords even when not capitalized in the text
TECHNICAL_TERMS: frozenset[str] = frozenset({
    # Languages
    "python", "java", "javascript", "typescript", "kotlin", "scala", "golang",
    "ruby", "php", "c++", "sql", "matlab", "bash",
    # Frameworks
    "react", "vue", "angular", "node.js", "django", "flask", "fastapi",
    "laravel", "spring", "next.js", "nuxt", "express.js", "graphql",
    # Cloud & DevOps
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
    "jenkins", "gitlab", "github", "github actions", "ci/cd", "linux", "nginx",
    # Data
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "dynamodb",
    "kafka", "spark", "hadoop", "snowflake", "bigquery", "pandas", "numpy",
    "tensorflow", "pytorch", "scikit-learn",
    # Methodologies
    "agile", "scrum", "kanban", "devops", "tdd", "bdd", "microservices",
    # Tools
    "git", "jira", "confluence", "figma", "tableau", "power bi",
    "salesforce",
})

# Cross-domain concept pairs; matched bidirectionally by substring
SYNONYM_PAIRS: tuple[tuple[str, str], ...] = (
    ("hardware", "electronic"),
    ("software", "application"),
    ("cloud", "aws"),
    ("cloud", "azure"),
    ("cloud", "gcp"),
    ("database", "mysql"),
    ("database", "postgresql"),
    ("database", "mongodb"),
    ("team", "leadership"),
    ("manage", "lead"),
    ("develop", "build"),
    ("create", "build"),
    ("programming", "coding"),
    ("programming", "development"),
)

# Tools/technologies that look like company names after "at/with/from"
KNOWN_TOOLS: frozenset[str] = frozenset({
    "github actions", "github", "docker", "kubernetes", "terraform", "jenkins",
    "aws", "azure", "gcp", "react", "vue", "angular", "node", "python", "java",
    "javascript", "typescript", "django", "flask", "laravel", "spring", "express",
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "dynamodb",
    "git", "jira", "confluence", "slack", "figma", "sketch", "tableau", "power bi",
    "ci/cd", "devops", "agile", "scrum", "kanban", "tdd", "bdd",
})

COMPANY_MARKERS: frozenset[str] = frozenset({"inc", "llc", "corp", "ltd", "company", "gmbh"})

SCHOOL_MARKERS: frozenset[str] = frozenset({"school", "university", "college", "institute", "academy"})

# Industry and everyday words that are too generic to be keywords
GENERIC_WORDS: frozenset[str] = frozenset({
    "healthcare", "health", "care", "business", "industry", "sector", "field",
    "email", "phone", "zoom", "slack", "teams", "founder", "home",
})

COMMON_FIRST_NAMES: frozenset[str] = frozenset({
    "jakob", "john", "jane", "mike", "sarah", "david", "emily", "chris",
    "lisa", "michael",
})

# Trailing qualifiers that mark "City, XX" as a place rather than a skill list
LOCATION_QUALIFIERS: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA", "HI",
    "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN",
    "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "OH",
    "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA",
    "WV", "WI", "WY",
    "United States", "USA", "Canada", "United Kingdom", "UK", "India",
    "Germany", "Australia", "Ireland",
)


class VocabularyError(ValueError):
    """Raised when a vocabulary extension file cannot be used."""


@dataclass(frozen=True)
class Vocabulary:
    version: str = VOCABULARY_VERSION
    noise_patterns: tuple[tuple[str, re.Pattern], ...] = ()
    stopwords: frozenset[str] = STOPWORDS
    meta_nouns: frozenset[str] = META_NOUNS
    filler_words: frozenset[str] = FILLER_WORDS
    known_technical_phrases: tuple[str, ...] = KNOWN_TECHNICAL_PHRASES
    technical_terms: frozenset[str] = TECHNICAL_TERMS
    synonym_pairs: tuple[tuple[str, str], ...] = SYNONYM_PAIRS
    known_tools: frozenset[str] = KNOWN_TOOLS
    company_markers: frozenset[str] = COMPANY_MARKERS
    school_markers: frozenset[str] = SCHOOL_MARKERS
    generic_words: frozenset[str] = GENERIC_WORDS
    common_first_names: frozenset[str] = COMMON_FIRST_NAMES
    location_qualifiers: tuple[str, ...] = LOCATION_QUALIFIERS
    sources: tuple[str, ...] = field(default=("builtin",), compare=False)

    def is_known_technical_phrase(self, phrase: str) -> bool:
        lower = phrase.lower()
        return any(p in lower for p in self.known_technical_phrases)


def _compile_patterns(patterns: dict[str, str]) -> tuple[tuple[str, re.Pattern], ...]:
    compiled = []
    for name, pattern in patterns.items():
        try:
            compiled.append((name, re.compile(pattern, re.IGNORECASE)))
        except re.error as e:
            raise VocabularyError(f"Invalid noise pattern '{name}': {e}") from e
    return tuple(compiled)


DEFAULT_VOCABULARY = Vocabulary(noise_patterns=_compile_patterns(NOISE_PATTERNS))

# YAML key -> (Vocabulary attribute, container type)
_SET_KEYS = {
    "stopwords": "stopwords",
    "meta_nouns": "meta_nouns",
    "filler_words": "filler_words",
    "technical_terms": "technical_terms",
    "known_tools": "known_tools",
    "company_markers": "company_markers",
    "school_markers": "school_markers",
    "generic_words": "generic_words",
    "common_first_names": "common_first_names",
}
_TUPLE_KEYS = {
    "known_technical_phrases": "known_technical_phrases",
    "location_qualifiers": "location_qualifiers",
}


def _as_strings(key: str, value: object) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise VocabularyError(f"'{key}' must be a list of strings")
    return [v.strip() for v in value if v.strip()]


def extend_vocabulary(base: Vocabulary, extra: dict, source: str = "extension") -> Vocabulary:
    """Return a new Vocabulary with ``extra`` merged on top of ``base``."""
    unknown = set(extra) - set(_SET_KEYS) - set(_TUPLE_KEYS) - {"synonym_pairs", "noise_patterns"}
    if unknown:
        raise VocabularyError(f"Unknown vocabulary keys: {', '.join(sorted(unknown))}")

    changes: dict = {}
    for key, attr in _SET_KEYS.items():
        if key in extra:
            words = {w.lower() for w in _as_strings(key, extra[key])}
            changes[attr] = getattr(base, attr) | frozenset(words)
    for key, attr in _TUPLE_KEYS.items():
        if key in extra:
            current = getattr(base, attr)
            added = [w for w in _as_strings(key, extra[key]) if w not in current]
            if key == "known_technical_phrases":
                added = [w.lower() for w in added]
            changes[attr] = current + tuple(added)

    if "synonym_pairs" in extra:
        pairs = extra["synonym_pairs"]
        if not isinstance(pairs, list):
            raise VocabularyError("'synonym_pairs' must be a list of [a, b] pairs")
        new_pairs = []
        for pair in pairs:
            if not (isinstance(pair, list) and len(pair) == 2 and all(isinstance(p, str) for p in pair)):
                raise VocabularyError(f"Invalid synonym pair: {pair!r}")
            new_pairs.append((pair[0].lower().strip(), pair[1].lower().strip()))
        changes["synonym_pairs"] = base.synonym_pairs + tuple(
            p for p in new_pairs if p not in base.synonym_pairs
        )

    if "noise_patterns" in extra:
        patterns = extra["noise_patterns"]
        if not isinstance(patterns, dict):
            raise VocabularyError("'noise_patterns' must be a mapping of name -> regex")
        changes["noise_patterns"] = base.noise_patterns + _compile_patterns(
            {str(k): str(v) for k, v in patterns.items()}
        )

    version = f"{base.version}+{Path(source).stem}"
    return replace(base, version=version, sources=base.sources + (source,), **changes)


def load_vocabulary(path: str | Path) -> Vocabulary:
    """Load a YAML extension file on top of the built-in vocabulary."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise VocabularyError(f"Failed to read vocabulary file '{path}': {e}") from e

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise VocabularyError(f"Invalid YAML in vocabulary file '{path}': {e}") from e

    if parsed is None:
        return DEFAULT_VOCABULARY
    if not isinstance(parsed, dict):
        raise VocabularyError(f"Vocabulary file '{path}' must contain a top-level mapping")

    vocabulary = extend_vocabulary(DEFAULT_VOCABULARY, parsed, source=str(path))
    logger.info("Loaded ATS vocabulary %s from %s", vocabulary.version, path)
    return vocabulary


@lru_cache(maxsize=4)
def _cached_vocabulary(path: str) -> Vocabulary:
    if not path:
        return DEFAULT_VOCABULARY
    return load_vocabulary(path)


def get_vocabulary() -> Vocabulary:
    """Vocabulary selected by settings (built-in tables unless a file is configured)."""
    return _cached_vocabulary(settings.ats_vocabulary_path)
