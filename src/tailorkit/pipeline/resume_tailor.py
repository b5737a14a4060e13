"""Resume Tailor - rewrites the summary and bullets of the base résumé."""

from __future__ import annotations

import asyncio
import logging
import time

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.models.payload import ExtractedPayload, ParseFailure
from tailorkit.models.resume import Resume, TailoredResume
from tailorkit.pipeline.filler import FillerPolicy, default_filler
from tailorkit.pipeline.merge import merge_payloads
from tailorkit.pipeline.prompts import (
    build_experience_prompt,
    build_resume_prompt,
    build_summary_prompt,
)
from tailorkit.utils.json_parser import extract_payload

logger = logging.getLogger(__name__)


class ResumeTailor:
    """Tailors a base résumé to a job description.

    In ``split`` mode the summary and the experience/project bullets are
    requested concurrently as two independent prompts. In ``whole`` mode a
    single prompt asks for the entire document. Either way the model output is
    merged field by field, so a malformed answer degrades the result instead
    of failing the request. A failed model call (``ModelServerError``) is
    propagated.
    """

    def __init__(
        self,
        llm: OllamaClient,
        *,
        temperature: float = 0.3,
        mode: str = "split",
        filler: FillerPolicy = default_filler,
    ):
        if mode not in ("split", "whole"):
            raise ValueError(f"Unknown tailoring mode: {mode!r}")
        self.llm = llm
        self.temperature = temperature
        self.mode = mode
        self.filler = filler

    async def tailor(
        self,
        resume: Resume,
        job_description: str,
        company_name: str | None = None,
    ) -> TailoredResume:
        start = time.monotonic()
        if self.mode == "split":
            prompts = [
                build_summary_prompt(resume, job_description, company_name),
                build_experience_prompt(resume, job_description, company_name),
            ]
        else:
            prompts = [build_resume_prompt(resume, job_description, company_name)]

        responses = await asyncio.gather(
            *(self.llm.generate(p, temperature=self.temperature) for p in prompts)
        )
        payloads: list[ExtractedPayload] = [extract_payload(r.text) for r in responses]
        for payload in payloads:
            if isinstance(payload, ParseFailure):
                logger.warning("Could not parse model output (%s); keeping original content", payload.reason)

        tailored = merge_payloads(resume, *payloads, filler=self.filler)
        metadata = {
            **tailored.metadata,
            "mode": self.mode,
            "model": self.llm.model,
            "input_tokens": sum(r.input_tokens for r in responses),
            "output_tokens": sum(r.output_tokens for r in responses),
            "elapsed_seconds": round(time.monotonic() - start, 3),
        }
        return tailored.model_copy(update={"metadata": metadata})
