from models.schemas.base import CamelModel
from models.schemas.quality import QualityScore
from models.schemas.regeneration import RegenerationVerification
from models.schemas.similarity import SimilarityMetrics


class TailoringAnalysis(CamelModel):
    similarity_metrics: SimilarityMetrics = SimilarityMetrics()
    quality_score: QualityScore = QualityScore()
    recommendations: list[str] = []
    scoring_method: str = "local"  # "semantic" | "local"
    degraded: bool = False


class RegenerationAnalysis(CamelModel):
    verification: RegenerationVerification = RegenerationVerification()
    quality_score: QualityScore = QualityScore()
    scoring_method: str = "local"
    degraded: bool = False
