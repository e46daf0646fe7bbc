import asyncio

import pytest

from config import settings
from models.schemas.semantic_ats import SemanticATSResult
from services import gemini_client, prompt_builder
from services.ats import semantic_ats
from services.ats.semantic_ats import (
    SCORING_LOCAL,
    SCORING_SEMANTIC,
    SemanticATSScorer,
    normalize_semantic_result,
    to_similarity_metrics,
)

pytestmark = pytest.mark.semantic


def _reply(**overrides) -> dict:
    reply = {
        "similarityScore": 82,
        "matchedKeywords": ["Python", "Django", "Kubernetes"],
        "missingKeywords": ["Kubernetes", "Terraform"],
        "keywordCoverage": 67,
        "semanticMatches": {"skills": 80, "experience": 90, "education": 100, "tools": 70},
        "recommendations": ["Add Terraform if you have used it"],
        "highImpactKeywords": {"matched": ["Python", "Django"], "missing": ["Terraform"]},
    }
    reply.update(overrides)
    return reply


@pytest.fixture
def gemini(monkeypatch):
    """Configure a key and stub the Gemini call; returns the list of prompts sent."""
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    calls: list[str] = []
    state = {"reply": _reply()}

    async def fake_generate_json(prompt, system_instruction=None, temperature=0.0, max_output_tokens=1500):
        calls.append(prompt)
        return state["reply"]

    monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)

    def set_reply(reply):
        state["reply"] = reply

    fake_generate_json.calls = calls
    fake_generate_json.set_reply = set_reply
    return fake_generate_json


@pytest.mark.asyncio
async def test_semantic_scoring_used_when_configured(gemini, resume_text, job_description):
    outcome = await SemanticATSScorer().score(resume_text, job_description)

    assert outcome.scoring_method == SCORING_SEMANTIC
    assert not outcome.degraded
    assert outcome.metrics.similarity_score == 82
    assert outcome.metrics.keyword_coverage == 67
    assert outcome.metrics.matched_keywords == ["Django", "Python"]
    assert outcome.metrics.section_matches.experience == 90
    assert outcome.recommendations == ["Add Terraform if you have used it"]
    assert len(gemini.calls) == 1


@pytest.mark.asyncio
async def test_hallucinated_matches_count_as_missing(gemini):
    gemini.set_reply(_reply(
        similarityScore=100,
        matchedKeywords=["Python", "Kubernetes", "Terraform"],
        missingKeywords=[],
        keywordCoverage=100,
        highImpactKeywords={"matched": ["Python", "Kubernetes", "Terraform"], "missing": []},
    ))

    outcome = await SemanticATSScorer().score("Python developer", "Python, Kubernetes and Terraform")

    metrics = outcome.metrics
    assert outcome.scoring_method == SCORING_SEMANTIC
    assert metrics.matched_keywords == ["Python"]
    assert metrics.missing_keywords == ["Kubernetes", "Terraform"]
    assert metrics.keyword_coverage == 33
    # 100 - 0.7 * (100 - 33.3)
    assert metrics.similarity_score == 53


@pytest.mark.asyncio
async def test_schema_mismatch_falls_back(gemini, resume_text, job_description):
    reply = _reply()
    del reply["recommendations"]
    gemini.set_reply(reply)

    outcome = await SemanticATSScorer().score(resume_text, job_description)

    assert outcome.scoring_method == SCORING_LOCAL
    assert outcome.degraded
    assert "kubernetes" in [kw.lower() for kw in outcome.metrics.missing_keywords]


@pytest.mark.asyncio
async def test_failed_call_falls_back(gemini, resume_text, job_description):
    gemini.set_reply(None)
    outcome = await SemanticATSScorer().score(resume_text, job_description)
    assert outcome.scoring_method == SCORING_LOCAL
    assert outcome.degraded
    assert outcome.recommendations


@pytest.mark.asyncio
async def test_timeout_falls_back(monkeypatch, resume_text, job_description):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")

    async def slow_generate_json(prompt, system_instruction=None, temperature=0.0, max_output_tokens=1500):
        await asyncio.sleep(1)
        return _reply()

    monkeypatch.setattr(gemini_client, "generate_json", slow_generate_json)

    outcome = await SemanticATSScorer(timeout_seconds=0.01).score(resume_text, job_description)
    assert outcome.scoring_method == SCORING_LOCAL
    assert outcome.degraded


@pytest.mark.asyncio
async def test_no_api_key_skips_semantic(monkeypatch, resume_text, job_description):
    async def unexpected(*args, **kwargs):
        raise AssertionError("Gemini should not be called")

    monkeypatch.setattr(gemini_client, "generate_json", unexpected)

    outcome = await SemanticATSScorer().score(resume_text, job_description)
    assert outcome.scoring_method == SCORING_LOCAL
    assert not outcome.degraded


@pytest.mark.asyncio
async def test_semantic_opt_out(gemini, resume_text, job_description):
    outcome = await SemanticATSScorer().score(resume_text, job_description, use_semantic=False)
    assert outcome.scoring_method == SCORING_LOCAL
    assert not outcome.degraded
    assert gemini.calls == []


@pytest.mark.asyncio
async def test_disabled_in_settings(gemini, monkeypatch, resume_text, job_description):
    monkeypatch.setattr(settings, "semantic_ats_enabled", False)
    outcome = await SemanticATSScorer().score(resume_text, job_description)
    assert outcome.scoring_method == SCORING_LOCAL
    assert gemini.calls == []


@pytest.mark.asyncio
async def test_blank_input_skips_semantic(gemini):
    outcome = await SemanticATSScorer().score("   ", "Python developer")
    assert outcome.scoring_method == SCORING_LOCAL
    assert gemini.calls == []


@pytest.mark.asyncio
async def test_module_level_compute_similarity(gemini, resume_text, job_description):
    metrics = await semantic_ats.compute_similarity(resume_text, job_description)
    assert metrics.similarity_score == 82


def test_scores_are_clamped():
    result = SemanticATSResult.model_validate(
        _reply(similarityScore=140, keywordCoverage=-5)
    )
    assert result.similarity_score == 100
    assert result.keyword_coverage == 0


def test_normalize_enforces_disjoint_sets():
    result = SemanticATSResult.model_validate(_reply(
        matchedKeywords=["python", "Python ", ""],
        missingKeywords=["PYTHON", "Terraform"],
        highImpactKeywords={"matched": ["Python"], "missing": ["python", "Terraform"]},
    ))
    normalized = normalize_semantic_result(result, "Python developer")
    assert normalized.matched_keywords == ["python"]
    assert normalized.missing_keywords == ["Terraform"]
    assert normalized.high_impact_keywords.missing == ["Terraform"]


def test_to_similarity_metrics_applies_limits():
    result = SemanticATSResult.model_validate(_reply(
        highImpactKeywords={"matched": ["a", "b", "c"], "missing": ["d", "e"]},
    ))
    metrics = to_similarity_metrics(result, matched_limit=2, missing_limit=1)
    assert metrics.matched_keywords == ["a", "b"]
    assert metrics.missing_keywords == ["d"]
    assert metrics.section_matches.skills == 80


def test_prompt_truncates_long_input():
    prompt = prompt_builder.build_semantic_ats_prompt("x" * 50, "Python developer", max_chars=10)
    assert "x" * 10 + "..." in prompt
    assert "x" * 11 not in prompt
    assert "Python developer" in prompt
