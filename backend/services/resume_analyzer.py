"""Orchestrator: scoring for the tailor and regenerate paths.

Tailor path:
1. Similarity metrics for the tailored text vs the JD (LLM first, keyword fallback)
2. Quality validation, with keyword match aligned to the similarity coverage

Regenerate path:
1. Similarity metrics for the regenerated text vs the JD
2. Verification that requested keywords were added and matched ones kept
3. Quality validation aligned to the (possibly boosted) metrics
"""

import logging

from models.responses import RegenerationAnalysis, TailoringAnalysis
from models.schemas.mode import TailoringMode
from models.schemas.resume_content import ParsedResumeContent
from services.ats.quality import QualityValidator
from services.ats.regeneration import verify_regeneration
from services.ats.semantic_ats import SemanticATSScorer

logger = logging.getLogger(__name__)


async def analyze_tailoring(
    original_resume: ParsedResumeContent,
    tailored_text: str,
    job_description: str,
    mode: TailoringMode = TailoringMode.STRICT,
    use_semantic: bool = True,
) -> TailoringAnalysis:
    """Score a freshly tailored resume."""
    outcome = await SemanticATSScorer().score(tailored_text, job_description, use_semantic)

    quality = QualityValidator().validate(
        original_resume,
        tailored_text,
        job_description,
        mode,
        similarity_metrics=outcome.metrics,
    )

    logger.info(
        "Tailoring scored: similarity=%d coverage=%d quality=%d method=%s mode=%s",
        outcome.metrics.similarity_score,
        outcome.metrics.keyword_coverage,
        quality.overall,
        outcome.scoring_method,
        mode.value,
    )

    return TailoringAnalysis(
        similarity_metrics=outcome.metrics,
        quality_score=quality,
        recommendations=outcome.recommendations,
        scoring_method=outcome.scoring_method,
        degraded=outcome.degraded,
    )


async def analyze_regeneration(
    original_resume: ParsedResumeContent,
    regenerated_text: str,
    job_description: str,
    requested_missing: list[str],
    previously_matched: list[str],
    mode: TailoringMode = TailoringMode.STRICT,
    use_semantic: bool = True,
) -> RegenerationAnalysis:
    """Score a regenerated resume and apply the verified boost if earned."""
    outcome = await SemanticATSScorer().score(regenerated_text, job_description, use_semantic)

    verification = verify_regeneration(
        regenerated_text,
        requested_missing,
        previously_matched,
        outcome.metrics,
        mode=mode,
        original_text=original_resume.to_text(),
    )

    quality = QualityValidator().validate(
        original_resume,
        regenerated_text,
        job_description,
        mode,
        similarity_metrics=verification.similarity_metrics,
    )
    if verification.warnings:
        quality = quality.model_copy(update={"warnings": quality.warnings + verification.warnings})

    return RegenerationAnalysis(
        verification=verification,
        quality_score=quality,
        scoring_method=outcome.scoring_method,
        degraded=outcome.degraded,
    )
