from pydantic import Field

from models.schemas.base import CamelModel
from models.schemas.mode import TailoringMode
from models.schemas.resume_content import ParsedResumeContent


class SimilarityRequest(CamelModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    job_description: str = Field(..., max_length=10000, description="Job description text")
    use_semantic: bool = True


class TailoringScoreRequest(CamelModel):
    original_resume: ParsedResumeContent
    tailored_text: str = Field(..., max_length=50000, description="Tailored resume text")
    job_description: str = Field(..., min_length=50, max_length=10000)
    generate_freely: bool = False
    use_semantic: bool = True

    @property
    def mode(self) -> TailoringMode:
        return TailoringMode.from_flag(self.generate_freely)


class RegenerationVerifyRequest(TailoringScoreRequest):
    missing_keywords: list[str] = Field(default_factory=list, description="Keywords the regeneration was asked to add")
    matched_keywords: list[str] = Field(default_factory=list, description="Keywords the regeneration was asked to keep")
