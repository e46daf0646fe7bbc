"""Prompt templates for Gemini API calls."""

SEMANTIC_ATS_SYSTEM_INSTRUCTION = (
    "You are an expert ATS (Applicant Tracking System) analyst. Modern ATS "
    "systems use semantic matching, understand synonyms, and focus on "
    "high-impact keywords (skills, tools, technologies) rather than counting "
    "every word. If the same resume and job description are provided again, "
    "return the same keyword sets and scores. Scores must reflect the actual "
    "match quality, not inflated numbers. This works for ALL job types: ignore "
    "dates, locations, company names and posting metadata, and only consider "
    "skills, tools, technologies and qualifications."
)


def _truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def build_semantic_ats_prompt(
    resume_text: str,
    job_description: str,
    max_chars: int = 4000,
) -> str:
    """Semantic ATS match: keyword extraction, matching and scoring in one call."""
    return f"""Analyze how well this resume matches the job description using modern ATS principles (semantic understanding, not keyword counting).

This works for ALL job types (software, healthcare, finance, marketing, etc.). Ignore dates, locations, company names, application instructions and posting metadata.

RESUME:
---
{_truncate(resume_text, max_chars)}
---

JOB DESCRIPTION:
---
{_truncate(job_description, max_chars)}
---

Your task:
1. Extract HIGH-IMPACT keywords from the job description:
   - Skills, tools and technologies, certifications, methodologies
   - Include acronyms EXACTLY as written (preserve capitalization and format)
   - Include multi-word technical terms exactly as they appear
   - IGNORE filler words, dates, locations and job board boilerplate ("posted", "apply", "weeks ago")
2. Check for SEMANTIC matches (synonyms and related concepts):
   - "hardware engineering" matches "electronic design"
   - "cloud computing" matches "AWS", "Azure" or "GCP"
   - "team leadership" matches "managed team" or "led team"
   - Prefer exact matches for acronyms and specific technical terms
3. Calculate realistic scores (0-100): similarityScore, keywordCoverage (share of high-impact keywords found) and per-section semanticMatches.
4. Recommend only truly missing high-impact keywords.

Respond with ONLY valid JSON in this exact structure:
{{
  "similarityScore": <integer 0-100>,
  "matchedKeywords": [<high-impact keywords present in the resume>],
  "missingKeywords": [<high-impact keywords absent from the resume>],
  "keywordCoverage": <integer 0-100>,
  "semanticMatches": {{
    "skills": <integer 0-100>,
    "experience": <integer 0-100>,
    "education": <integer 0-100>,
    "tools": <integer 0-100>
  }},
  "recommendations": [<actionable suggestions>],
  "highImpactKeywords": {{
    "matched": [<subset of matchedKeywords>],
    "missing": [<subset of missingKeywords>]
  }}
}}"""
