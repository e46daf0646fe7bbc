"""LLM-backed ATS similarity with a deterministic fallback.

The model extracts, matches and scores keywords in one JSON call. Its reply
must validate against ``SemanticATSResult``; every "matched" keyword must
literally occur in the resume text, otherwise it is counted as missing. Any failure
(no API key, timeout, API error, bad JSON, schema mismatch) falls back to
``SimilarityScorer`` so callers always receive ``SimilarityMetrics``.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from config import settings
from models.schemas.semantic_ats import SemanticATSResult
from models.schemas.similarity import SectionMatches, SimilarityMetrics
from services import gemini_client, prompt_builder
from services.ats.scorer import W_COVERAGE, SimilarityScorer, keyword_coverage, recommendations_for

logger = logging.getLogger(__name__)

SCORING_SEMANTIC = "semantic"
SCORING_LOCAL = "local"


@dataclass
class SimilarityOutcome:
    metrics: SimilarityMetrics
    recommendations: list[str] = field(default_factory=list)
    scoring_method: str = SCORING_LOCAL
    degraded: bool = False  # semantic call attempted but fell back


def _normalize_keywords(keywords: list[str]) -> list[str]:
    """Trim, drop blanks, de-duplicate case-insensitively and sort for stable output."""
    unique: dict[str, str] = {}
    for kw in keywords:
        clean = kw.strip()
        if clean and clean.lower() not in unique:
            unique[clean.lower()] = clean
    return sorted(unique.values(), key=str.lower)


def _present_in(keywords: list[str], text_lower: str) -> tuple[list[str], list[str]]:
    present = [kw for kw in keywords if kw.lower() in text_lower]
    absent = [kw for kw in keywords if kw.lower() not in text_lower]
    return present, absent


def normalize_semantic_result(result: SemanticATSResult, resume_text: str) -> SemanticATSResult:
    """Drop hallucinated matches and enforce matched/missing disjointness.

    Rejected matches become missing keywords, and coverage is recomputed from
    the high-impact lists. The similarity score moves with the coverage
    change at the coverage weight of the deterministic scorer.
    """
    resume_lower = resume_text.lower()

    matched, rejected = _present_in(_normalize_keywords(result.matched_keywords), resume_lower)
    hi_matched, hi_rejected = _present_in(
        _normalize_keywords(result.high_impact_keywords.matched), resume_lower
    )
    filtered = _normalize_keywords(rejected + hi_rejected)
    if filtered:
        logger.warning("Filtered out keywords not found in resume: %s", filtered)

    matched_keys = {kw.lower() for kw in matched + hi_matched}
    missing = [
        kw for kw in _normalize_keywords(result.missing_keywords + rejected)
        if kw.lower() not in matched_keys
    ]
    hi_missing = [
        kw for kw in _normalize_keywords(result.high_impact_keywords.missing + hi_rejected)
        if kw.lower() not in matched_keys
    ]

    coverage = keyword_coverage(len(hi_matched), len(hi_matched) + len(hi_missing))
    similarity = result.similarity_score + W_COVERAGE * (coverage - result.keyword_coverage)

    return result.model_copy(update={
        "similarity_score": min(100.0, max(0.0, similarity)),
        "keyword_coverage": coverage,
        "matched_keywords": matched,
        "missing_keywords": missing,
        "high_impact_keywords": result.high_impact_keywords.model_copy(
            update={"matched": hi_matched, "missing": hi_missing}
        ),
    })


def to_similarity_metrics(
    result: SemanticATSResult,
    matched_limit: int | None = None,
    missing_limit: int | None = None,
) -> SimilarityMetrics:
    matched_limit = matched_limit if matched_limit is not None else settings.matched_keywords_limit
    missing_limit = missing_limit if missing_limit is not None else settings.missing_keywords_limit
    return SimilarityMetrics(
        similarity_score=round(result.similarity_score),
        matched_keywords=result.high_impact_keywords.matched[:matched_limit],
        missing_keywords=result.high_impact_keywords.missing[:missing_limit],
        keyword_coverage=round(result.keyword_coverage),
        section_matches=SectionMatches(
            skills=round(result.semantic_matches.skills),
            experience=round(result.semantic_matches.experience),
            education=round(result.semantic_matches.education),
        ),
    )


class SemanticATSScorer:
    def __init__(
        self,
        fallback: SimilarityScorer | None = None,
        timeout_seconds: float | None = None,
        max_chars: int | None = None,
    ) -> None:
        self.fallback = fallback or SimilarityScorer()
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.semantic_ats_timeout_seconds
        )
        self.max_chars = max_chars if max_chars is not None else settings.semantic_ats_max_chars

    async def analyze(self, resume_text: str, job_description: str) -> SemanticATSResult | None:
        """Run the semantic analysis; None on any failure."""
        prompt = prompt_builder.build_semantic_ats_prompt(
            resume_text, job_description, max_chars=self.max_chars
        )
        try:
            data = await asyncio.wait_for(
                gemini_client.generate_json(
                    prompt,
                    system_instruction=prompt_builder.SEMANTIC_ATS_SYSTEM_INSTRUCTION,
                    temperature=0.0,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Semantic ATS analysis timed out after %.1fs", self.timeout_seconds)
            return None

        if data is None:
            return None

        try:
            result = SemanticATSResult.model_validate(data)
        except ValidationError as e:
            logger.warning("Semantic ATS response failed schema validation: %s", e)
            return None

        return normalize_semantic_result(result, resume_text)

    async def score(
        self,
        resume_text: str,
        job_description: str,
        use_semantic: bool = True,
    ) -> SimilarityOutcome:
        """SimilarityMetrics from the model when possible, else deterministic."""
        attempted = (
            use_semantic
            and settings.semantic_ats_enabled
            and bool(settings.gemini_api_key)
            and bool(resume_text.strip())
            and bool(job_description.strip())
        )
        if attempted:
            result = await self.analyze(resume_text, job_description)
            if result is not None:
                return SimilarityOutcome(
                    metrics=to_similarity_metrics(
                        result, self.fallback.matched_limit, self.fallback.missing_limit
                    ),
                    recommendations=list(result.recommendations),
                    scoring_method=SCORING_SEMANTIC,
                )
            logger.warning("Semantic ATS analysis unavailable, using keyword fallback")

        metrics = self.fallback.compute(resume_text, job_description)
        return SimilarityOutcome(
            metrics=metrics,
            recommendations=recommendations_for(metrics.missing_keywords),
            scoring_method=SCORING_LOCAL,
            degraded=attempted,
        )


async def compute_similarity(
    resume_text: str,
    job_description: str,
    use_semantic: bool = True,
) -> SimilarityMetrics:
    """Same contract as ``scorer.compute_similarity`` with the LLM tried first."""
    outcome = await SemanticATSScorer().score(resume_text, job_description, use_semantic)
    return outcome.metrics
