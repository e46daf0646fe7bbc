"""Value objects exchanged by the ATS scoring engine."""

from models.schemas.mode import TailoringMode
from models.schemas.quality import QualityFlags, QualityScore
from models.schemas.regeneration import RegenerationVerification
from models.schemas.resume_content import (
    EducationEntry,
    ExperienceEntry,
    ParsedResumeContent,
    ResumeHeader,
)
from models.schemas.semantic_ats import HighImpactKeywords, SemanticATSResult, SemanticMatches
from models.schemas.similarity import SectionMatches, SimilarityMetrics

__all__ = [
    "TailoringMode",
    "QualityFlags",
    "QualityScore",
    "RegenerationVerification",
    "EducationEntry",
    "ExperienceEntry",
    "ParsedResumeContent",
    "ResumeHeader",
    "HighImpactKeywords",
    "SemanticATSResult",
    "SemanticMatches",
    "SectionMatches",
    "SimilarityMetrics",
]
