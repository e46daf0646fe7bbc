import pytest

from config import settings
from models.schemas.mode import TailoringMode
from services import gemini_client
from services.resume_analyzer import analyze_regeneration, analyze_tailoring


@pytest.mark.asyncio
async def test_tailoring_quality_aligned_with_similarity(parsed_resume, resume_text, job_description):
    analysis = await analyze_tailoring(parsed_resume, resume_text, job_description)

    assert analysis.scoring_method == "local"
    assert not analysis.degraded
    assert analysis.quality_score.keyword_match == analysis.similarity_metrics.keyword_coverage
    assert any("Kubernetes" in r or "kubernetes" in r for r in analysis.recommendations)


@pytest.mark.asyncio
async def test_flexible_tailoring(parsed_resume, resume_text, job_description):
    tailored = resume_text + "\nServed as Principal Architect at Globex Corporation\n"
    analysis = await analyze_tailoring(
        parsed_resume, tailored, job_description, mode=TailoringMode.FLEXIBLE
    )
    assert not analysis.quality_score.flags.has_hallucination
    assert analysis.quality_score.truthfulness == 85


@pytest.mark.asyncio
async def test_regeneration_without_requested_keyword_not_boosted(parsed_resume, resume_text, job_description):
    analysis = await analyze_regeneration(
        parsed_resume,
        resume_text,
        job_description,
        requested_missing=["Kubernetes"],
        previously_matched=["Python"],
    )

    assert not analysis.verification.boosted
    assert analysis.verification.similarity_metrics.similarity_score < 100
    assert "Requested keywords not added: Kubernetes" in analysis.quality_score.warnings


@pytest.mark.asyncio
async def test_regeneration_boost_flows_into_quality(parsed_resume, resume_text, job_description):
    regenerated = resume_text + "\nOrchestration: Kubernetes\n"
    analysis = await analyze_regeneration(
        parsed_resume,
        regenerated,
        job_description,
        requested_missing=["Kubernetes"],
        previously_matched=["Python", "Docker"],
    )

    verification = analysis.verification
    assert verification.boosted
    assert verification.similarity_metrics.similarity_score == 100
    assert analysis.quality_score.keyword_match == 100
    # strict mode: Kubernetes is not in the original resume
    assert verification.ungrounded_keywords == ["Kubernetes"]
    assert any("Strict mode" in w for w in analysis.quality_score.warnings)


@pytest.mark.asyncio
@pytest.mark.semantic
async def test_semantic_scores_align_with_quality(monkeypatch, parsed_resume, resume_text, job_description):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")

    async def fake_generate_json(prompt, system_instruction=None, temperature=0.0, max_output_tokens=1500):
        return {
            "similarityScore": 78,
            "matchedKeywords": ["Python", "Django"],
            "missingKeywords": ["Kubernetes"],
            "keywordCoverage": 67,
            "semanticMatches": {"skills": 75, "experience": 90, "education": 100, "tools": 60},
            "recommendations": ["Mention Kubernetes experience if you have it"],
            "highImpactKeywords": {"matched": ["Python", "Django"], "missing": ["Kubernetes"]},
        }

    monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)

    analysis = await analyze_tailoring(parsed_resume, resume_text, job_description)

    assert analysis.scoring_method == "semantic"
    assert analysis.similarity_metrics.keyword_coverage == 67
    assert analysis.quality_score.keyword_match == 67
    assert analysis.recommendations == ["Mention Kubernetes experience if you have it"]
