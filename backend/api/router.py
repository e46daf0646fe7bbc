from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import RegenerationVerifyRequest, SimilarityRequest, TailoringScoreRequest
from models.responses import RegenerationAnalysis, TailoringAnalysis
from models.schemas.similarity import SimilarityMetrics
from services import resume_analyzer
from services.ats.semantic_ats import SemanticATSScorer

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "semantic_ats_configured": bool(settings.gemini_api_key) and settings.semantic_ats_enabled,
    }


@router.post("/ats/similarity", response_model=SimilarityMetrics)
@limiter.limit(settings.rate_limit)
async def similarity(request: Request, body: SimilarityRequest):
    outcome = await SemanticATSScorer().score(
        body.resume_text, body.job_description, body.use_semantic
    )
    return outcome.metrics


@router.post("/ats/tailoring/score", response_model=TailoringAnalysis)
@limiter.limit(settings.rate_limit)
async def score_tailoring(request: Request, body: TailoringScoreRequest):
    return await resume_analyzer.analyze_tailoring(
        body.original_resume,
        body.tailored_text,
        body.job_description,
        mode=body.mode,
        use_semantic=body.use_semantic,
    )


@router.post("/ats/regeneration/verify", response_model=RegenerationAnalysis)
@limiter.limit(settings.rate_limit)
async def verify_regeneration(request: Request, body: RegenerationVerifyRequest):
    return await resume_analyzer.analyze_regeneration(
        body.original_resume,
        body.tailored_text,
        body.job_description,
        requested_missing=body.missing_keywords,
        previously_matched=body.matched_keywords,
        mode=body.mode,
        use_semantic=body.use_semantic,
    )
