"""Strict schema for the LLM-backed ATS analysis reply.

Every field is required: a reply that omits one is rejected and the
deterministic scorer is used instead.
"""

from pydantic import field_validator

from models.schemas.base import CamelModel


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, float(value)))


class SemanticMatches(CamelModel):
    skills: float
    experience: float
    education: float
    tools: float

    @field_validator("skills", "experience", "education", "tools")
    @classmethod
    def _bound(cls, v: float) -> float:
        return _clamp(v)


class HighImpactKeywords(CamelModel):
    matched: list[str]
    missing: list[str]


class SemanticATSResult(CamelModel):
    similarity_score: float
    matched_keywords: list[str]
    missing_keywords: list[str]
    keyword_coverage: float
    semantic_matches: SemanticMatches
    recommendations: list[str]
    high_impact_keywords: HighImpactKeywords

    @field_validator("similarity_score", "keyword_coverage")
    @classmethod
    def _bound(cls, v: float) -> float:
        return _clamp(v)
