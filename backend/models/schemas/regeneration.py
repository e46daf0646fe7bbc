"""Post-hoc verification of a regenerated resume."""

from models.schemas.base import CamelModel
from models.schemas.similarity import SimilarityMetrics


class RegenerationVerification(CamelModel):
    added_keywords: list[str] = []
    not_added_keywords: list[str] = []
    retained_keywords: list[str] = []
    lost_keywords: list[str] = []
    # strict mode only: added keywords absent from the original resume
    ungrounded_keywords: list[str] = []
    boosted: bool = False
    similarity_metrics: SimilarityMetrics = SimilarityMetrics()
    warnings: list[str] = []
