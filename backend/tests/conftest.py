"""Shared test configuration, fixtures and pytest markers."""

import pytest

from config import settings
from models.schemas.resume_content import EducationEntry, ExperienceEntry, ParsedResumeContent


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "semantic: exercises the LLM-backed scorer with a stubbed Gemini client"
    )


@pytest.fixture(autouse=True)
def _no_gemini(monkeypatch):
    """Never reach the real Gemini API from tests."""
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(settings, "semantic_ats_enabled", True)


SAMPLE_RESUME_TEXT = """Jane Smith
jane.smith@email.com | (555) 123-4567

Summary
Backend engineer with 6 years of experience building cloud services.

Experience
Senior Software Engineer, Acme Health Systems, 2021 - Present
- Developed REST APIs in Python and Django serving 2M requests/day
- Managed PostgreSQL databases and Redis caches on AWS
- Led migration of CI/CD pipelines to GitHub Actions

Software Engineer, Blue Harbor Analytics, 2018 - 2021
- Built data pipelines with Kafka and Docker
- Worked in an Agile Scrum team of 8 engineers

Education
Bachelor of Science in Computer Science, State University, 2018

Skills
Python, Django, PostgreSQL, Redis, AWS, Docker, Kafka, Git
"""

SAMPLE_JD = """Senior Backend Engineer

Requirements:
- 5+ years of experience with Python and Django
- Strong knowledge of PostgreSQL and Redis
- Experience with Docker and Kubernetes
- Familiarity with AWS and CI/CD

Education:
- Bachelor's degree in Computer Science or related field
"""


@pytest.fixture
def resume_text() -> str:
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def job_description() -> str:
    return SAMPLE_JD


@pytest.fixture
def parsed_resume() -> ParsedResumeContent:
    return ParsedResumeContent(
        summary="Backend engineer with 6 years of experience building cloud services.",
        experience=[
            ExperienceEntry(
                role="Senior Software Engineer",
                company="Acme Health Systems",
                period="2021 - Present",
                bullets=["Developed REST APIs in Python and Django serving 2M requests/day"],
            ),
            ExperienceEntry(
                title="Software Engineer",
                company="Blue Harbor Analytics",
                period="2018 - 2021",
                bullets=["Built data pipelines with Kafka and Docker"],
            ),
        ],
        skills=["Python", "Django", "PostgreSQL", "Redis", "AWS", "Docker", "Kafka", "Git"],
        education=[EducationEntry(degree="Bachelor of Science in Computer Science", school="State University", year="2018")],
        raw_text=SAMPLE_RESUME_TEXT,
    )
