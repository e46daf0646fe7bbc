"""Keyword-driven ATS matching and quality-scoring engine."""

from services.ats.keyword_extractor import KeywordExtractor, extract_keywords, is_noise
from services.ats.matcher import SemanticMatcher, is_match
from services.ats.quality import QualityValidator
from services.ats.regeneration import verify_regeneration
from services.ats.scorer import SimilarityScorer, compute_similarity
from services.ats.semantic_ats import SemanticATSScorer, SimilarityOutcome
from services.ats.vocabulary import Vocabulary, VocabularyError, get_vocabulary, load_vocabulary

__all__ = [
    "KeywordExtractor",
    "extract_keywords",
    "is_noise",
    "SemanticMatcher",
    "is_match",
    "QualityValidator",
    "verify_regeneration",
    "SimilarityScorer",
    "compute_similarity",
    "SemanticATSScorer",
    "SimilarityOutcome",
    "Vocabulary",
    "VocabularyError",
    "get_vocabulary",
    "load_vocabulary",
]
