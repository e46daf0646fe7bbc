"""Deterministic keyword coverage and similarity scoring.

Pipeline:
1. Extract keywords from the resume and the job description
2. Pair every job keyword with a semantically matching resume keyword
3. Coverage = matched / job keywords (computed before any list truncation)
4. Coarse section sub-scores (skills / experience / education)
5. Weighted similarity score
"""

import logging
import re

from config import settings
from models.schemas.similarity import SectionMatches, SimilarityMetrics
from services.ats.keyword_extractor import KeywordExtractor, KeywordSet, get_extractor
from services.ats.matcher import SemanticMatcher, get_matcher

logger = logging.getLogger(__name__)

# Weights for the overall similarity score
W_COVERAGE = 0.70
W_SKILLS = 0.15
W_EXPERIENCE = 0.10
W_EDUCATION = 0.05

# Coverage reported when the job description yields no keywords.
# Some callers treat "nothing to match" as a perfect score; this scorer does not.
EMPTY_JOB_COVERAGE = 0.0

SKILL_INDICATORS: tuple[str, ...] = (
    "skill", "proficient", "experience with", "knowledge of", "familiar with", "expertise in",
)
EXPERIENCE_TERMS: tuple[str, ...] = ("experience", "worked", "developed", "managed", "led")
EDUCATION_TERMS: tuple[str, ...] = ("degree", "education", "bachelor", "master", "phd")

# Sub-score when both texts reference a concept, and when they do not
SECTION_BOTH = 100
SECTION_PARTIAL = 50

_SKILL_PHRASE_RE = re.compile(
    r"(?:{})s?[\s:]+([^.;\n]+)".format("|".join(re.escape(i) for i in SKILL_INDICATORS)),
    re.IGNORECASE,
)
_SKILL_SPLIT_RE = re.compile(r",|;|\band\b|\bor\b")


def _has_any_term(text_lower: str, terms: tuple[str, ...]) -> bool:
    return any(re.search(rf"\b{re.escape(t)}\b", text_lower) for t in terms)


def extract_skill_phrases(text: str) -> list[str]:
    """Phrases introduced by skill indicators ("proficient in X, Y")."""
    phrases: list[str] = []
    for match in _SKILL_PHRASE_RE.finditer(text):
        for part in _SKILL_SPLIT_RE.split(match.group(1)):
            phrase = " ".join(part.split()).lower()
            if phrase.startswith("in "):
                phrase = phrase[3:]
            if len(phrase) > 2 and phrase not in phrases:
                phrases.append(phrase)
    return phrases


def match_keywords(
    job_keywords: KeywordSet,
    resume_keywords: KeywordSet,
    matcher: SemanticMatcher,
) -> tuple[list[str], list[str]]:
    """Split job keywords into (matched, missing) against the resume keywords."""
    matched: list[str] = []
    missing: list[str] = []
    for keyword in job_keywords:
        if matcher.find_match(keyword, resume_keywords) is not None:
            matched.append(keyword)
        else:
            missing.append(keyword)
    return matched, missing


def keyword_coverage(matched_count: int, job_keyword_count: int) -> float:
    """Percentage 0-100 of job keywords matched."""
    if job_keyword_count == 0:
        logger.debug("No job keywords extracted; coverage defined as %s", EMPTY_JOB_COVERAGE)
        return EMPTY_JOB_COVERAGE
    return 100.0 * matched_count / job_keyword_count


def compute_section_matches(
    resume_text: str,
    job_description: str,
    matcher: SemanticMatcher | None = None,
) -> SectionMatches:
    """Coarse per-section sub-scores from indicator terms in both texts."""
    matcher = matcher or get_matcher()
    resume_lower = resume_text.lower()
    job_lower = job_description.lower()

    job_skills = extract_skill_phrases(job_description)
    if job_skills:
        resume_skills = extract_skill_phrases(resume_text)
        found = sum(
            1 for skill in job_skills
            if skill in resume_lower or matcher.find_match(skill, resume_skills) is not None
        )
        skills = round(100 * found / len(job_skills))
    else:
        skills = SECTION_BOTH

    experience = (
        SECTION_BOTH
        if _has_any_term(job_lower, EXPERIENCE_TERMS) and _has_any_term(resume_lower, EXPERIENCE_TERMS)
        else SECTION_PARTIAL
    )
    education = (
        SECTION_BOTH
        if _has_any_term(job_lower, EDUCATION_TERMS) and _has_any_term(resume_lower, EDUCATION_TERMS)
        else SECTION_PARTIAL
    )
    return SectionMatches(skills=skills, experience=experience, education=education)


def weighted_similarity(coverage: float, sections: SectionMatches) -> int:
    raw = (
        coverage * W_COVERAGE
        + sections.skills * W_SKILLS
        + sections.experience * W_EXPERIENCE
        + sections.education * W_EDUCATION
    )
    return round(min(100.0, max(0.0, raw)))


def recommendations_for(missing_keywords: list[str], limit: int = 5) -> list[str]:
    return [
        f'Consider adding "{kw}" if relevant to your experience'
        for kw in missing_keywords[:limit]
    ]


class SimilarityScorer:
    """Keyword-driven resume/JD similarity (no external calls)."""

    def __init__(
        self,
        extractor: KeywordExtractor | None = None,
        matcher: SemanticMatcher | None = None,
        keyword_limit: int | None = None,
        matched_limit: int | None = None,
        missing_limit: int | None = None,
    ) -> None:
        self.extractor = extractor or get_extractor()
        self.matcher = matcher or get_matcher()
        self.keyword_limit = keyword_limit if keyword_limit is not None else settings.keyword_limit
        self.matched_limit = matched_limit if matched_limit is not None else settings.matched_keywords_limit
        self.missing_limit = missing_limit if missing_limit is not None else settings.missing_keywords_limit

    def full_match(self, resume_text: str, job_description: str) -> tuple[list[str], list[str]]:
        """Untruncated (matched, missing) job keywords."""
        resume_keywords = self.extractor.extract(resume_text, limit=self.keyword_limit)
        job_keywords = self.extractor.extract(job_description, limit=self.keyword_limit)
        return match_keywords(job_keywords, resume_keywords, self.matcher)

    def compute(self, resume_text: str, job_description: str) -> SimilarityMetrics:
        matched, missing = self.full_match(resume_text or "", job_description or "")
        coverage = keyword_coverage(len(matched), len(matched) + len(missing))
        sections = compute_section_matches(resume_text or "", job_description or "", self.matcher)

        return SimilarityMetrics(
            similarity_score=weighted_similarity(coverage, sections),
            matched_keywords=matched[: self.matched_limit],
            missing_keywords=missing[: self.missing_limit],
            keyword_coverage=round(coverage),
            section_matches=sections,
        )


def compute_similarity(resume_text: str, job_description: str) -> SimilarityMetrics:
    """Deterministic similarity metrics with the configured vocabulary and limits."""
    return SimilarityScorer().compute(resume_text, job_description)
