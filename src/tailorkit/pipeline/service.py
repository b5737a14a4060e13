"""Request handling for tailoring and cover letter generation.

Validates the inbound request before any model call, loads the base résumé,
and runs the matching pipeline. Only ``InputError`` and ``ModelServerError``
reach the caller.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.config import AppConfig
from tailorkit.errors import InputError
from tailorkit.models.cover_letter import CoverLetter
from tailorkit.models.resume import Resume, TailoredResume
from tailorkit.parsers.resume_loader import load_base_resume
from tailorkit.pipeline.cover_letter_writer import CoverLetterWriter
from tailorkit.pipeline.filler import FillerPolicy, default_filler
from tailorkit.pipeline.resume_tailor import ResumeTailor

logger = logging.getLogger(__name__)


class TailorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_description: str = Field(alias="jobDescription")
    company_name: str | None = Field(default=None, alias="companyName")

    @field_validator("job_description")
    @classmethod
    def _require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("jobDescription must not be blank")
        return v.strip()

    @field_validator("company_name")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


def parse_request(data: dict | TailorRequest) -> TailorRequest:
    """Validate raw request data, raising ``InputError`` on missing fields."""
    if isinstance(data, TailorRequest):
        return data
    if not isinstance(data, dict):
        raise InputError("Request body must be a JSON object")
    try:
        return TailorRequest.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][-1]) for err in e.errors()) or "request"
        raise InputError(f"Missing or invalid field: {fields}") from e


class TailorService:
    def __init__(
        self,
        llm: OllamaClient,
        config: AppConfig,
        *,
        resume_loader: Callable[[], Resume] | None = None,
        filler: FillerPolicy = default_filler,
    ):
        self.llm = llm
        self.config = config
        self._load_resume = resume_loader or (lambda: load_base_resume(config.resume.resolved_path))
        self.tailor_agent = ResumeTailor(
            llm,
            temperature=config.pipeline.resume_temperature,
            mode=config.pipeline.mode,
            filler=filler,
        )
        self.cover_letter_agent = CoverLetterWriter(
            llm,
            temperature=config.pipeline.cover_letter_temperature,
            signature_name=config.pipeline.signature_name,
        )

    async def tailor(self, data: dict | TailorRequest) -> TailoredResume:
        request = parse_request(data)
        resume = self._load_resume()
        result = await self.tailor_agent.tailor(resume, request.job_description, request.company_name)
        logger.info(
            "Resume tailored for %s (%s)",
            request.company_name or "unnamed company",
            result.metadata.get("sources", {}).get("summary"),
        )
        return result

    async def cover_letter(self, data: dict | TailorRequest) -> CoverLetter:
        request = parse_request(data)
        resume = self._load_resume()
        letter = await self.cover_letter_agent.write(resume, request.job_description, request.company_name)
        logger.info("Cover letter for %s generated", request.company_name or "unnamed company")
        return letter
