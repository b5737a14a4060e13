"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from tailorkit.clients.ollama_client import LLMResponse, OllamaClient
from tailorkit.models.resume import (
    EducationEntry,
    ExperienceEntry,
    Header,
    ProjectEntry,
    Resume,
)


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer - Platform Team

Responsibilities:
- Design and operate Python services handling millions of requests per day
- Automate deployment and monitoring workflows
- Partner with product teams on API design

Requirements:
- 3+ years of Python experience
- Experience with PostgreSQL and Docker
- Strong communication skills
"""


@pytest.fixture
def sample_resume() -> Resume:
    return Resume(
        header=Header(
            name="Jordan Lee",
            location="Vancouver, BC",
            phone="555-0100",
            email="jordan@example.com",
            github="github.com/jlee",
        ),
        summary="Backend developer focused on automation and reliable APIs.",
        technical_skills={
            "Languages": ["Python", "SQL"],
            "Tools": ["Docker", "PostgreSQL"],
        },
        experience=[
            ExperienceEntry(
                company="Acme",
                title="Engineer",
                location="Vancouver, BC",
                dates="2021 - Present",
                bullets=["Did X"],
            ),
            ExperienceEntry(
                company="Globex",
                title="Junior Developer",
                location="Remote",
                dates="2019 - 2021",
                bullets=["Maintained billing scripts", "Wrote SQL reports"],
            ),
        ],
        projects=[
            ProjectEntry(title="Ticket Summarizer", dates="2023", bullets=["Summarized tickets with a local LLM"]),
        ],
        education=[
            EducationEntry(school="UBC", degree="B.Sc. Computer Science", dates="2015 - 2019"),
        ],
    )


@pytest.fixture
def mock_llm_client() -> OllamaClient:
    """Create a mock Ollama client."""
    client = AsyncMock(spec=OllamaClient)
    client.model = "llama3"
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return client
