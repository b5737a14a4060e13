"""Data models for the tailoring pipeline."""

from tailorkit.models.cover_letter import CoverLetter
from tailorkit.models.payload import ExtractedPayload, ParsedPayload, ParseFailure
from tailorkit.models.resume import (
    EducationEntry,
    ExperienceEntry,
    Header,
    ProjectEntry,
    Resume,
    TailoredResume,
)

__all__ = [
    "CoverLetter",
    "EducationEntry",
    "ExperienceEntry",
    "ExtractedPayload",
    "Header",
    "ParseFailure",
    "ParsedPayload",
    "ProjectEntry",
    "Resume",
    "TailoredResume",
]
