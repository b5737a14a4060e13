"""Pydantic models for the base résumé and its tailored variant."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Header(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    location: str | None = None
    phone: str | None = None
    email: str | None = None
    github: str | None = None
    linkedin: str | None = None


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str = ""
    title: str = ""
    location: str = ""
    dates: str = ""
    bullets: list[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    location: str = ""
    dates: str = ""
    bullets: list[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    school: str = ""
    degree: str = ""
    location: str = ""
    dates: str = ""


class Resume(BaseModel):
    """The trusted base record. Never mutated; tailoring builds a new value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    header: Header = Field(default_factory=Header)
    summary: str = ""
    technical_skills: dict[str, list[str]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("technical_skills", "technicalSkills"),
    )
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)

    def tailorable_fields(self) -> dict[str, Any]:
        """The parts of the record a model is allowed to rewrite."""
        return {
            "summary": self.summary,
            "experience": [{"bullets": list(e.bullets)} for e in self.experience],
            "projects": [{"bullets": list(p.bullets)} for p in self.projects],
        }


class TailoredResume(Resume):
    metadata: dict[str, Any] = Field(default_factory=dict)

    def as_resume(self) -> Resume:
        """Drop metadata, leaving a plain record comparable to the original."""
        return Resume.model_validate(self.model_dump(exclude={"metadata"}))
