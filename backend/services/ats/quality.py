"""Quality validation of tailored resume content.

Scores tailored text on three axes and folds them into one number:
- truthfulness: lexical grounding in the original resume (strict mode only)
- completeness: required sections present, content not too short
- keyword match: job keyword coverage, aligned with SimilarityMetrics
  when the caller already has them

Strict mode additionally checks for invented companies and job titles and
warns about missing critical keywords.
"""

import logging
import re

from models.schemas.mode import TailoringMode
from models.schemas.quality import QualityFlags, QualityScore
from models.schemas.resume_content import ParsedResumeContent
from models.schemas.similarity import SimilarityMetrics
from services.ats.keyword_extractor import KeywordExtractor, get_extractor
from services.ats.matcher import SemanticMatcher, get_matcher, significant_words
from services.ats.scorer import keyword_coverage, match_keywords

logger = logging.getLogger(__name__)

W_TRUTHFULNESS = 0.4
W_COMPLETENESS = 0.3
W_KEYWORD_MATCH = 0.3

# Flexible mode permits inference, so grounding is not measured
FLEXIBLE_TRUTHFULNESS = 85

REQUIRED_SECTIONS: tuple[str, ...] = ("experience", "skills", "education")
MISSING_SECTION_PENALTY = 20
MIN_CONTENT_LENGTH = 500
SHORT_CONTENT_PENALTY = 10

# Missing-keyword warning: coverage below this AND more than N critical misses
MISSING_WARNING_COVERAGE = 80
MISSING_WARNING_MIN_COUNT = 2
MAX_LISTED_MISSING = 5

MIN_TRUTH_WORD_LENGTH = 4
MIN_SHARED_ENTITY_WORDS = 2

# New titles are reported only when there are many of them
MIN_SUSPICIOUS_TITLES = 3
SUSPICIOUS_TITLE_RATIO = 1.5

_COMPANY_RE = re.compile(r"\b(?:at|with|from)[ \t]+([A-Z][A-Za-z&]*(?:[ \t]+&?[ \t]*[A-Z][A-Za-z&]*)*)")
_TITLE_RE = re.compile(
    r"(?:\b(?<![Ss]uch )as|\b(?i:position|role|title))\b[: \t]+"
    r"([A-Z][A-Za-z]*(?:[ \t]+[A-Z][A-Za-z]*)*)")
_TOOL_FRAGMENTS: tuple[str, ...] = ("actions", "docker", "kubernetes", "github")
_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$")
_PREPOSITION_LED_RE = re.compile(r"^(?:from|to|at|in|on|with|by|for|of)\s+")


class QualityValidator:
    def __init__(
        self,
        extractor: KeywordExtractor | None = None,
        matcher: SemanticMatcher | None = None,
    ) -> None:
        self.extractor = extractor or get_extractor()
        self.matcher = matcher or get_matcher()
        self.vocabulary = self.extractor.vocabulary

    # ------------------------------------------------------------------
    # Hallucination
    # ------------------------------------------------------------------

    def extract_companies(self, text: str) -> list[str]:
        """Company-like entities ("at Acme Health Systems"), excluding known tools."""
        companies: list[str] = []
        for match in _COMPANY_RE.finditer(text):
            company = " ".join(match.group(1).split())
            lower = company.lower()
            if lower in self.vocabulary.known_tools:
                continue
            if any(fragment in lower for fragment in _TOOL_FRAGMENTS):
                continue
            words = lower.split()
            if len(words) > 1 or any(w in self.vocabulary.company_markers for w in words):
                if company not in companies:
                    companies.append(company)
        return companies

    def extract_job_titles(self, text: str) -> list[str]:
        """Titles after "as", "role:", "position:" on one line, excluding tools."""
        titles: list[str] = []
        for match in _TITLE_RE.finditer(text):
            title = " ".join(match.group(1).split())
            lower = title.lower()
            if lower in self.vocabulary.known_tools or lower in self.vocabulary.technical_terms:
                continue
            if title not in titles:
                titles.append(title)
        return titles

    @staticmethod
    def _entity_is_known(entity: str, known: list[str], original_lower: str) -> bool:
        lower = entity.lower()
        if lower in original_lower:
            return True
        entity_words = significant_words(lower)
        for candidate in known:
            candidate_lower = candidate.lower()
            if lower in candidate_lower or candidate_lower in lower:
                return True
            if len(entity_words & significant_words(candidate_lower)) >= MIN_SHARED_ENTITY_WORDS:
                return True
        return False

    def check_hallucination(
        self, original: ParsedResumeContent, tailored_text: str
    ) -> list[str]:
        """Warnings for companies/titles absent from the original resume."""
        original_lower = original.to_text().lower()
        warnings: list[str] = []

        known_companies = original.companies()
        new_companies = [
            c for c in self.extract_companies(tailored_text)
            if not self._entity_is_known(c, known_companies, original_lower)
        ]
        if new_companies:
            warnings.append(
                "New companies detected that weren't in original resume: "
                + ", ".join(new_companies)
            )

        known_titles = original.job_titles()
        new_titles = [
            t for t in self.extract_job_titles(tailored_text)
            if not self._entity_is_known(t, known_titles, original_lower)
        ]
        if new_titles and (
            len(new_titles) >= MIN_SUSPICIOUS_TITLES
            or len(new_titles) > len(known_titles) * SUSPICIOUS_TITLE_RATIO
        ):
            warnings.append(
                "New job titles detected that may not match original experience: "
                + ", ".join(new_titles)
            )
        return warnings

    # ------------------------------------------------------------------
    # Completeness / truthfulness
    # ------------------------------------------------------------------

    @staticmethod
    def check_completeness(tailored_text: str) -> tuple[int, list[str]]:
        warnings: list[str] = []
        score = 100
        lower = tailored_text.lower()
        for section in REQUIRED_SECTIONS:
            if section not in lower:
                warnings.append(f"Missing {section} section")
                score -= MISSING_SECTION_PENALTY
        if len(tailored_text) < MIN_CONTENT_LENGTH:
            warnings.append("Tailored content seems too short")
            score -= SHORT_CONTENT_PENALTY
        return max(0, score), warnings

    @staticmethod
    def calculate_truthfulness(
        original: ParsedResumeContent, tailored_text: str, mode: TailoringMode
    ) -> int:
        if mode.is_flexible:
            return FLEXIBLE_TRUTHFULNESS

        original_words = {
            w for w in original.to_text().lower().split() if len(w) >= MIN_TRUTH_WORD_LENGTH
        }
        tailored_words = {
            w for w in tailored_text.lower().split() if len(w) >= MIN_TRUTH_WORD_LENGTH
        }
        if not tailored_words:
            return 0
        overlap = len(tailored_words & original_words)
        return min(100, round(100 * overlap / len(tailored_words)))

    # ------------------------------------------------------------------
    # Keywords
    # ------------------------------------------------------------------

    def is_critical_keyword(self, keyword: str) -> bool:
        """False for missing keywords that are likely noise rather than skills."""
        vocab = self.vocabulary
        lower = keyword.lower().strip()
        words = lower.split()
        if len(lower) < 3 or not words:
            return False
        if any(w in vocab.company_markers or w in vocab.school_markers for w in words):
            return False
        if lower in vocab.generic_words or lower in vocab.common_first_names:
            return False
        if _DATE_RE.match(lower) or _PREPOSITION_LED_RE.match(lower):
            return False
        return not self.extractor.is_noise(keyword)

    def critical_missing(self, missing_keywords: list[str]) -> list[str]:
        return [kw for kw in missing_keywords if self.is_critical_keyword(kw)]

    @staticmethod
    def _missing_keywords_warning(critical: list[str]) -> str:
        top = critical[:MAX_LISTED_MISSING]
        if len(top) <= 3:
            return f"Missing {len(top)} critical keywords: {', '.join(top)}"
        return f"Missing {len(top)} critical keywords: {', '.join(top[:3])}, and {len(top) - 3} more"

    # ------------------------------------------------------------------

    def validate(
        self,
        original_resume: ParsedResumeContent,
        tailored_text: str,
        job_description: str,
        mode: TailoringMode = TailoringMode.STRICT,
        similarity_metrics: SimilarityMetrics | None = None,
    ) -> QualityScore:
        """Score tailored content.

        When ``similarity_metrics`` is given, its keyword coverage and missing
        keywords are authoritative so the two reported scores never disagree.
        """
        tailored_text = tailored_text or ""
        warnings: list[str] = []
        flags = QualityFlags()

        if not mode.is_flexible:
            hallucinations = self.check_hallucination(original_resume, tailored_text)
            if hallucinations:
                flags.has_hallucination = True
                warnings.extend(hallucinations)

        if similarity_metrics is not None:
            keyword_match = float(similarity_metrics.keyword_coverage)
            missing = similarity_metrics.missing_keywords
        else:
            job_keywords = self.extractor.extract(job_description or "")
            tailored_keywords = self.extractor.extract(tailored_text)
            matched, missing = match_keywords(job_keywords, tailored_keywords, self.matcher)
            keyword_match = keyword_coverage(len(matched), len(job_keywords))

        critical = self.critical_missing(missing)
        if (
            not mode.is_flexible
            and keyword_match < MISSING_WARNING_COVERAGE
            and len(critical) > MISSING_WARNING_MIN_COUNT
        ):
            flags.has_missing_keywords = True
            warnings.append(self._missing_keywords_warning(critical))

        completeness, completeness_warnings = self.check_completeness(tailored_text)
        if completeness_warnings:
            flags.has_incomplete_sections = True
            warnings.extend(completeness_warnings)

        truthfulness = self.calculate_truthfulness(original_resume, tailored_text, mode)

        overall = (
            truthfulness * W_TRUTHFULNESS
            + completeness * W_COMPLETENESS
            + keyword_match * W_KEYWORD_MATCH
        )
        return QualityScore(
            overall=round(overall),
            truthfulness=round(truthfulness),
            completeness=round(completeness),
            keyword_match=round(keyword_match),
            warnings=warnings,
            flags=flags,
        )


def validate(
    original_resume: ParsedResumeContent,
    tailored_text: str,
    job_description: str,
    mode: TailoringMode = TailoringMode.STRICT,
    similarity_metrics: SimilarityMetrics | None = None,
) -> QualityScore:
    return QualityValidator().validate(
        original_resume, tailored_text, job_description, mode, similarity_metrics
    )
