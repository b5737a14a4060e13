"""Tests for request validation and the tailoring service."""

import pytest

from tailorkit.clients.ollama_client import LLMResponse
from tailorkit.config import AppConfig, PipelineConfig
from tailorkit.errors import InputError
from tailorkit.pipeline.service import TailorRequest, TailorService, parse_request


class TestParseRequest:
    def test_camel_case_fields(self):
        request = parse_request({"jobDescription": "  Build APIs  ", "companyName": " Initech "})
        assert request.job_description == "Build APIs"
        assert request.company_name == "Initech"

    def test_snake_case_fields(self):
        request = parse_request({"job_description": "Build APIs"})
        assert request.company_name is None

    def test_blank_company_becomes_none(self):
        assert parse_request({"jobDescription": "x", "companyName": "  "}).company_name is None

    @pytest.mark.parametrize(
        "data",
        [{}, {"companyName": "Initech"}, {"jobDescription": ""}, {"jobDescription": "   "}, {"jobDescription": 5}],
    )
    def test_missing_job_description(self, data):
        with pytest.raises(InputError, match="jobDescription|job_description"):
            parse_request(data)

    def test_non_object_body(self):
        with pytest.raises(InputError, match="JSON object"):
            parse_request(None)

    def test_passthrough_request(self):
        request = TailorRequest(job_description="x")
        assert parse_request(request) is request


class TestTailorService:
    def _service(self, llm, resume, **pipeline):
        config = AppConfig(pipeline=PipelineConfig(**pipeline))
        return TailorService(llm, config, resume_loader=lambda: resume)

    @pytest.mark.asyncio
    async def test_invalid_request_never_calls_model(self, mock_llm_client, sample_resume):
        service = self._service(mock_llm_client, sample_resume)
        with pytest.raises(InputError):
            await service.tailor({"companyName": "Initech"})
        with pytest.raises(InputError):
            await service.cover_letter({"jobDescription": " "})
        mock_llm_client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_tailor(self, mock_llm_client, sample_resume):
        mock_llm_client.generate.return_value = LLMResponse(
            text='{"summary": "Tailored summary."}', input_tokens=1, output_tokens=1
        )
        service = self._service(mock_llm_client, sample_resume, mode="whole", resume_temperature=0.2)
        result = await service.tailor({"jobDescription": "Build APIs", "companyName": "Initech"})

        assert result.summary == "Tailored summary."
        assert mock_llm_client.generate.await_args.kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_cover_letter(self, mock_llm_client, sample_resume):
        mock_llm_client.generate.return_value = LLMResponse(
            text='{"coverLetter": "Dear team"}', input_tokens=1, output_tokens=1
        )
        service = self._service(mock_llm_client, sample_resume, cover_letter_temperature=0.5)
        letter = await service.cover_letter({"jobDescription": "Build APIs", "companyName": "Initech"})

        assert letter.body == "Dear team"
        assert letter.company == "Initech"
        assert mock_llm_client.generate.await_args.kwargs["temperature"] == 0.5

    @pytest.mark.asyncio
    async def test_default_loader_reads_configured_path(self, mock_llm_client, tmp_path):
        from dataclasses import replace

        from tailorkit.parsers.resume_loader import clear_resume_cache

        path = tmp_path / "resume.json"
        path.write_text('{"summary": "From disk", "experience": [{"company": "Acme", "bullets": ["A"]}]}')
        config = AppConfig()
        config = replace(config, resume=replace(config.resume, path=str(path)))
        clear_resume_cache()

        service = TailorService(mock_llm_client, config)
        result = await service.tailor({"jobDescription": "Build APIs"})
        assert result.summary == "From disk"
        assert result.experience[0].company == "Acme"
