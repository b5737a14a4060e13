"""Tests for PDF rendering."""

from tailorkit.export import render_cover_letter_pdf, render_resume_pdf, safe_filename
from tailorkit.models.resume import Resume


class TestRenderResume:
    def test_produces_pdf(self, sample_resume):
        data = render_resume_pdf(sample_resume)
        assert isinstance(data, bytes)
        assert data.startswith(b"%PDF")

    def test_empty_resume(self):
        assert render_resume_pdf(Resume()).startswith(b"%PDF")

    def test_non_latin_text(self, sample_resume):
        resume = sample_resume.model_copy(update={"summary": "Built “fast” APIs — 10× faster, 東京 team…"})
        assert render_resume_pdf(resume).startswith(b"%PDF")


class TestRenderCoverLetter:
    def test_produces_pdf(self):
        body = "Dear Initech team,\n\nI am applying.\n\nBest regards,\nJordan Lee"
        assert render_cover_letter_pdf(body, "Initech").startswith(b"%PDF")

    def test_without_company(self):
        assert render_cover_letter_pdf("Hello").startswith(b"%PDF")


class TestSafeFilename:
    def test_company_slug(self):
        assert safe_filename("Resume_for", "Acme Inc.") == "Resume_for_acme_inc_.pdf"

    def test_missing_company(self):
        assert safe_filename("cover_letter_for", None) == "cover_letter_for_company.pdf"

    def test_suffix(self):
        assert safe_filename("Resume_for", "Initech", ".json") == "Resume_for_initech.json"
