"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from tailorkit.api import app, get_service
from tailorkit.clients.ollama_client import LLMResponse
from tailorkit.config import AppConfig
from tailorkit.errors import ModelServerError
from tailorkit.pipeline.service import TailorService


@pytest.fixture
def client(mock_llm_client, sample_resume):
    service = TailorService(mock_llm_client, AppConfig(), resume_loader=lambda: sample_resume)
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestTailorEndpoint:
    def test_success(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = LLMResponse(
            text='{"summary": "Python engineer for Initech."}', input_tokens=1, output_tokens=1
        )
        response = client.post("/api/tailor", json={"jobDescription": "Build APIs", "companyName": "Initech"})

        assert response.status_code == 200
        resume = response.json()["tailoredResume"]
        assert resume["summary"] == "Python engineer for Initech."
        assert resume["experience"][0]["company"] == "Acme"
        assert "metadata" not in resume

    def test_unparseable_output_keeps_original(self, client, mock_llm_client, sample_resume):
        mock_llm_client.generate.return_value = LLMResponse(text="I can't do that.", input_tokens=1, output_tokens=1)
        response = client.post("/api/tailor", json={"jobDescription": "Build APIs"})

        assert response.status_code == 200
        assert response.json()["tailoredResume"]["summary"] == sample_resume.summary

    def test_missing_job_description(self, client, mock_llm_client):
        response = client.post("/api/tailor", json={"companyName": "Initech"})
        assert response.status_code == 400
        assert "jobDescription" in response.json()["error"]
        mock_llm_client.generate.assert_not_awaited()

    def test_invalid_json_body(self, client):
        response = client.post("/api/tailor", content=b"not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_model_server_down(self, client, mock_llm_client):
        mock_llm_client.generate.side_effect = ModelServerError("Ollama request failed: connection refused")
        response = client.post("/api/tailor", json={"jobDescription": "Build APIs"})
        assert response.status_code == 502
        assert response.json() == {"error": "Ollama request failed: connection refused"}

    def test_unexpected_error(self, client, mock_llm_client):
        mock_llm_client.generate.side_effect = RuntimeError("boom")
        response = client.post("/api/tailor", json={"jobDescription": "Build APIs"})
        assert response.status_code == 500
        assert "error" in response.json()


class TestCoverLetterEndpoint:
    def test_success(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = LLMResponse(
            text='```json\n{"coverLetter": "Dear Initech team"}\n```', input_tokens=1, output_tokens=1
        )
        response = client.post("/api/coverletter", json={"jobDescription": "Build APIs", "companyName": "Initech"})

        assert response.status_code == 200
        assert response.json() == {"coverLetter": "Dear Initech team", "company": "Initech"}

    def test_plain_text_output(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = LLMResponse(text="Dear hiring team", input_tokens=1, output_tokens=1)
        response = client.post("/api/coverletter", json={"jobDescription": "Build APIs"})
        assert response.json() == {"coverLetter": "Dear hiring team", "company": None}

    def test_missing_job_description(self, client):
        response = client.post("/api/coverletter", json={})
        assert response.status_code == 400


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}
