"""Post-hoc verification of regenerated resumes.

A regeneration is asked to add the previously missing keywords and keep the
previously matched ones. Only when every requested keyword is present in the
regenerated text (case-insensitive substring) may the reported scores be
promoted to 100; otherwise the computed scores are kept unchanged.
"""

import logging

from config import settings
from models.schemas.mode import TailoringMode
from models.schemas.regeneration import RegenerationVerification
from models.schemas.similarity import SimilarityMetrics

logger = logging.getLogger(__name__)

BOOSTED_SCORE = 100


def _dedupe(keywords: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for kw in keywords:
        clean = kw.strip()
        if clean and clean.lower() not in seen:
            seen.add(clean.lower())
            unique.append(clean)
    return unique


def _split_by_presence(keywords: list[str], text_lower: str) -> tuple[list[str], list[str]]:
    present = [kw for kw in keywords if kw.lower() in text_lower]
    absent = [kw for kw in keywords if kw.lower() not in text_lower]
    return present, absent


def verify_regeneration(
    regenerated_text: str,
    requested_missing: list[str],
    previously_matched: list[str],
    computed_metrics: SimilarityMetrics,
    mode: TailoringMode = TailoringMode.STRICT,
    original_text: str = "",
    matched_limit: int | None = None,
) -> RegenerationVerification:
    """Check which requested keywords landed and decide whether to boost.

    The boost requires at least one requested missing keyword; with nothing
    requested there is nothing to verify and the computed scores stand.
    """
    text_lower = (regenerated_text or "").lower()
    requested_missing = _dedupe(requested_missing)
    previously_matched = _dedupe(previously_matched)

    added, not_added = _split_by_presence(requested_missing, text_lower)
    retained, lost = _split_by_presence(previously_matched, text_lower)

    warnings: list[str] = []
    ungrounded: list[str] = []
    if mode is TailoringMode.STRICT and original_text:
        original_lower = original_text.lower()
        ungrounded = [kw for kw in added if kw.lower() not in original_lower]
        if ungrounded:
            warnings.append(
                "Strict mode: added keywords not found in the original resume: "
                + ", ".join(ungrounded)
            )

    boost = bool(requested_missing) and not not_added and not lost

    if boost:
        limit = matched_limit if matched_limit is not None else settings.matched_keywords_limit
        matched = _dedupe(retained + added + computed_metrics.matched_keywords)[:limit]
        metrics = computed_metrics.model_copy(update={
            "similarity_score": BOOSTED_SCORE,
            "keyword_coverage": BOOSTED_SCORE,
            "matched_keywords": matched,
            "missing_keywords": [],
        })
        logger.info(
            "Regeneration verified: %d keywords added, %d retained; scores boosted",
            len(added), len(retained),
        )
    else:
        metrics = computed_metrics
        if (not_added or lost) and metrics.similarity_score >= BOOSTED_SCORE:
            # a perfect score is reserved for fully verified regenerations
            metrics = metrics.model_copy(update={"similarity_score": BOOSTED_SCORE - 1})
        if not_added:
            warnings.append("Requested keywords not added: " + ", ".join(not_added))
        if lost:
            warnings.append("Previously matched keywords lost: " + ", ".join(lost))
        if not_added or lost:
            logger.warning(
                "Regeneration not boosted: not added=%s, lost=%s", not_added, lost
            )

    return RegenerationVerification(
        added_keywords=added,
        not_added_keywords=not_added,
        retained_keywords=retained,
        lost_keywords=lost,
        ungrounded_keywords=ungrounded,
        boosted=boost,
        similarity_metrics=metrics,
        warnings=warnings,
    )
