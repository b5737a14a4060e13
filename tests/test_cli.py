"""Tests for the typer CLI."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tailorkit.cli import app
from tailorkit.errors import ModelServerError
from tailorkit.models import CoverLetter, TailoredResume

runner = CliRunner()


@pytest.fixture
def jd_file(tmp_path, sample_jd_text):
    path = tmp_path / "jd.txt"
    path.write_text(sample_jd_text)
    return path


@pytest.fixture
def tailored(sample_resume):
    return TailoredResume(
        **sample_resume.model_dump(),
        metadata={
            "sources": {"summary": "model", "experience": ["model", "original"], "projects": ["original"]},
            "parse_failures": [],
            "input_tokens": 200,
            "output_tokens": 100,
            "elapsed_seconds": 1.5,
        },
    )


def test_tailor_writes_json(tmp_path, jd_file, tailored):
    output = tmp_path / "out" / "resume.json"
    with patch("tailorkit.cli._run", return_value=tailored) as run:
        result = runner.invoke(app, ["tailor", "--jd", str(jd_file), "-c", "Initech", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text())["header"]["name"] == "Jordan Lee"
    _, method, request = run.call_args.args
    assert method == "tailor"
    assert request["companyName"] == "Initech"
    assert "Field sources" in result.output


def test_tailor_writes_pdf(tmp_path, jd_file, tailored):
    output = tmp_path / "resume.pdf"
    with patch("tailorkit.cli._run", return_value=tailored):
        result = runner.invoke(app, ["tailor", "--jd", str(jd_file), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"%PDF")


def test_tailor_missing_jd(tmp_path):
    result = runner.invoke(app, ["tailor", "--jd", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_tailor_model_error(jd_file):
    with patch("tailorkit.cli._run", side_effect=ModelServerError("Ollama request failed: refused")):
        result = runner.invoke(app, ["tailor", "--jd", str(jd_file)])
    assert result.exit_code == 1
    assert "refused" in result.output


def test_cover_letter_writes_txt(tmp_path, jd_file):
    output = tmp_path / "letter.txt"
    letter = CoverLetter(body="Dear Initech team", company="Initech")
    with patch("tailorkit.cli._run", return_value=letter):
        result = runner.invoke(app, ["cover-letter", "--jd", str(jd_file), "-c", "Initech", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_text() == "Dear Initech team"


def test_show_resume():
    result = runner.invoke(app, ["show-resume"])
    assert result.exit_code == 0, result.output
    assert "experience" in result.output


def test_show_resume_missing(tmp_path):
    result = runner.invoke(app, ["show-resume", "--resume", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
