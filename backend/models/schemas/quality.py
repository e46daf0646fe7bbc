"""Quality assessment of tailored resume content."""

from models.schemas.base import CamelModel


class QualityFlags(CamelModel):
    has_hallucination: bool = False
    has_missing_keywords: bool = False
    has_incomplete_sections: bool = False


class QualityScore(CamelModel):
    """overall = round(truthfulness*0.4 + completeness*0.3 + keyword_match*0.3)"""
    overall: int = 0
    truthfulness: int = 0
    completeness: int = 0
    keyword_match: int = 0
    warnings: list[str] = []
    flags: QualityFlags = QualityFlags()
