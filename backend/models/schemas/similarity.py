"""Keyword coverage and similarity metrics between a resume and a JD."""

from models.schemas.base import CamelModel


class SectionMatches(CamelModel):
    skills: int = 0  # 0-100
    experience: int = 0
    education: int = 0


class SimilarityMetrics(CamelModel):
    """Produced once per tailoring/regeneration request.

    ``matched_keywords`` and ``missing_keywords`` never share an entry.
    """
    similarity_score: int = 0  # 0-100
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    keyword_coverage: int = 0  # 0-100
    section_matches: SectionMatches = SectionMatches()
