import pytest

from services.ats.keyword_extractor import KeywordExtractor, extract_keywords
from services.ats.vocabulary import DEFAULT_VOCABULARY


@pytest.fixture
def extractor() -> KeywordExtractor:
    return KeywordExtractor(DEFAULT_VOCABULARY)


def _lower(keywords: list[str]) -> set[str]:
    return {kw.lower() for kw in keywords}


def test_extract_keywords_job_description(extractor):
    keywords = extractor.extract("Looking for a developer with Python, AWS, and Docker experience")
    assert _lower(keywords) == {"python", "aws", "docker"}


def test_extract_keywords_empty(extractor):
    assert extractor.extract("") == []
    assert extractor.extract("   \n\t ") == []


def test_extract_keywords_deterministic(extractor, job_description):
    first = extractor.extract(job_description)
    for _ in range(5):
        assert extractor.extract(job_description) == first
    assert KeywordExtractor(DEFAULT_VOCABULARY).extract(job_description) == first


def test_acronyms_keep_case(extractor):
    keywords = extractor.extract("Build CI/CD pipelines and SQL reports for the QA group")
    assert "CI/CD" in keywords
    assert "SQL" in keywords
    assert "QA" in keywords


def test_title_case_phrases_kept_as_units(extractor):
    keywords = extractor.extract("Hands-on work in Machine Learning and Natural Language Processing")
    assert "machine learning" in keywords
    assert "natural language processing" in keywords


def test_lowercase_prose_is_not_a_keyword(extractor):
    keywords = _lower(extractor.extract("we need a developer who writes python and likes docker"))
    assert keywords == {"python", "docker"}


def test_deduplicates_case_insensitively(extractor):
    keywords = extractor.extract("AWS and aws and Aws; Python python PYTHON")
    lowered = [kw.lower() for kw in keywords]
    assert len(lowered) == len(set(lowered))
    assert "aws" in lowered and "python" in lowered


def test_limit_caps_result(extractor):
    text = ". ".join(f"Alpha{chr(97 + i)}" for i in range(26))
    assert len(extractor.extract(text, limit=10)) == 10
    assert len(extractor.extract(text, limit=None)) == 26


# --- Noise rejection ---

def test_job_board_boilerplate_rejected(extractor):
    text = "Posted 3 days ago in Mount Laurel, United States. Apply now."
    assert extractor.extract(text) == []


def test_location_city_state_rejected(extractor):
    keywords = _lower(extractor.extract("Onsite in Mount Laurel, NJ. Must know Terraform."))
    assert "mount laurel" not in keywords
    assert "terraform" in keywords


@pytest.mark.parametrize(
    "candidate",
    [
        "3 weeks ago",
        "Posted",
        "Save",
        "Remote",
        "Hybrid",
        "United States",
        "Work From Home",
        "Sponsorship",
        "OPT",
        "CPT",
        "$45/hr",
        "March",
        "2024",
        "Responsibilities",
        "Qualifications",
        "Candidate",
        "the",
    ],
)
def test_noise_candidates(extractor, candidate):
    assert extractor.is_noise(candidate)


@pytest.mark.parametrize("candidate", ["Kubernetes", "CI/CD", "Machine Learning", "Patient Care Coordination"])
def test_real_skills_are_not_noise(extractor, candidate):
    assert not extractor.is_noise(candidate)


def test_filler_dominated_phrases_rejected(extractor):
    assert extractor.noise_reason("What You Build") == "filler_phrase"
    assert extractor.is_noise("The Role This")
    assert extractor.noise_reason("Your Impact") == "filler_edge"


def test_filler_edge_allowed_for_known_technical_phrase(extractor):
    assert not extractor.is_noise("The Machine Learning")


def test_company_names_rejected(extractor):
    assert extractor.noise_reason("Acme Corp") == "company"
    assert extractor.noise_reason("Widgets Inc") == "company"


def test_compensation_and_visa_text_stripped(extractor):
    text = "Pay: $120,000 - $150,000 a year. No Sponsorship available. Skills: Tableau and Salesforce."
    keywords = _lower(extractor.extract(text))
    assert keywords == {"tableau", "salesforce"}


def test_domain_agnostic_healthcare(extractor):
    text = "Registered Nurse with BLS and ACLS certification. Epic charting experience. Remote friendly."
    keywords = extractor.extract(text)
    assert "BLS" in keywords
    assert "ACLS" in keywords
    assert "registered nurse" in keywords
    assert "remote" not in _lower(keywords)


def test_keywords_meet_length_invariant(extractor, resume_text, job_description):
    for text in (resume_text, job_description):
        for kw in extractor.extract(text):
            min_len = 2 if kw.isupper() or "/" in kw else 3
            assert len(kw) >= min_len
            assert not kw.isdigit()


def test_module_level_extract_keywords():
    assert "docker" in _lower(extract_keywords("Experience with Docker"))


def test_package_exports_noise_check():
    from services import ats

    assert ats.is_noise("Posted 3 days ago")
    assert not ats.is_noise("Kubernetes")
    assert ats.extract_keywords("Experience with Kubernetes") == ["kubernetes"]
