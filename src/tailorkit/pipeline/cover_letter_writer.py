"""Cover Letter Writer - drafts a cover letter from the base résumé."""

from __future__ import annotations

import logging

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.models.cover_letter import CoverLetter
from tailorkit.models.resume import Resume
from tailorkit.pipeline.prompts import build_cover_letter_prompt
from tailorkit.utils.json_parser import extract_payload

logger = logging.getLogger(__name__)

COVER_LETTER_FIELD = "coverLetter"


class CoverLetterWriter:
    def __init__(
        self,
        llm: OllamaClient,
        *,
        temperature: float = 0.7,
        signature_name: str | None = None,
    ):
        self.llm = llm
        self.temperature = temperature
        self.signature_name = signature_name

    async def write(
        self,
        resume: Resume,
        job_description: str,
        company_name: str | None = None,
    ) -> CoverLetter:
        """Generate a cover letter. Unparseable output is used verbatim."""
        prompt = build_cover_letter_prompt(
            resume,
            job_description,
            company_name,
            signature_name=self.signature_name,
        )
        response = await self.llm.generate(prompt, temperature=self.temperature)
        payload = extract_payload(response.text, fallback_field=COVER_LETTER_FIELD)

        body = payload.get(COVER_LETTER_FIELD)
        if isinstance(body, str) and body.strip():
            body = body.strip()
        else:
            logger.warning("Model output had no usable %r field; returning raw text", COVER_LETTER_FIELD)
            body = response.text

        return CoverLetter(
            body=body,
            company=company_name,
            metadata={
                "model": self.llm.model,
                "input_tokens": response.input_tokens,
                "output_tokens": response.output_tokens,
            },
        )
