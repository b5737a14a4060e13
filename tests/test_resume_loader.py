"""Tests for loading the base résumé."""

import json

import pytest

from tailorkit.config import DEFAULT_RESUME_PATH
from tailorkit.models.resume import Resume
from tailorkit.parsers.resume_loader import clear_resume_cache, load_base_resume


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_resume_cache()
    yield
    clear_resume_cache()


def test_bundled_resume_loads():
    resume = load_base_resume()
    assert isinstance(resume, Resume)
    assert resume.header.name
    assert resume.experience
    assert all(e.bullets for e in resume.experience)
    assert load_base_resume(DEFAULT_RESUME_PATH) is resume


def test_loads_camel_case_skills(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps({"technicalSkills": {"Languages": ["Go"]}}))
    assert load_base_resume(path).technical_skills == {"Languages": ["Go"]}


def test_cached_until_cleared(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps({"summary": "First"}))
    first = load_base_resume(path)

    path.write_text(json.dumps({"summary": "Second"}))
    assert load_base_resume(str(path)) is first

    clear_resume_cache()
    assert load_base_resume(path).summary == "Second"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Base resume not found"):
        load_base_resume(tmp_path / "missing.json")
