"""Parsed resume as produced by the document-parsing collaborator."""

from pydantic import BaseModel


class ExperienceEntry(BaseModel):
    title: str | None = None
    role: str | None = None
    company: str | None = None
    location: str | None = None
    period: str | None = None
    bullets: list[str] = []


class EducationEntry(BaseModel):
    degree: str | None = None
    school: str | None = None
    location: str | None = None
    year: str | None = None


class ResumeHeader(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ParsedResumeContent(BaseModel):
    """Structured resume content.

    The scoring engine prefers ``raw_text`` and only rebuilds text from the
    structured fields when the parser produced none.
    """
    summary: str | None = None
    experience: list[ExperienceEntry] = []
    skills: list[str] = []
    education: list[EducationEntry] = []
    achievements: list[str] = []
    raw_text: str | None = None
    header: ResumeHeader | None = None

    def to_text(self) -> str:
        if self.raw_text and self.raw_text.strip():
            return self.raw_text

        lines: list[str] = []
        if self.header and self.header.name:
            lines.append(self.header.name)
        if self.summary:
            lines += ["Summary", self.summary]
        if self.experience:
            lines.append("Experience")
            for exp in self.experience:
                heading = ", ".join(
                    part for part in (exp.role or exp.title, exp.company, exp.location, exp.period) if part
                )
                if heading:
                    lines.append(heading)
                lines += [f"- {b}" for b in exp.bullets]
        if self.skills:
            lines += ["Skills", ", ".join(self.skills)]
        if self.education:
            lines.append("Education")
            for edu in self.education:
                entry = ", ".join(part for part in (edu.degree, edu.school, edu.location, edu.year) if part)
                if entry:
                    lines.append(entry)
        if self.achievements:
            lines.append("Achievements")
            lines += [f"- {a}" for a in self.achievements]
        return "\n".join(lines)

    def companies(self) -> list[str]:
        return [exp.company for exp in self.experience if exp.company]

    def job_titles(self) -> list[str]:
        return [exp.role or exp.title for exp in self.experience if exp.role or exp.title]
