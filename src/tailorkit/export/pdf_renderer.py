"""PDF rendering for tailored résumés and cover letters using fpdf2 (pure Python)."""

from __future__ import annotations

import logging
import re

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from tailorkit.models.resume import Resume

logger = logging.getLogger(__name__)

# Typographic characters models like to emit, mapped to what core fonts can draw.
_ASCII_MAP = str.maketrans({
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-", "•": "-", "…": "...",
})


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    text = text.translate(_ASCII_MAP)
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


class _Document:
    def __init__(self, margin: float = 12, font: str = "Helvetica"):
        self.pdf = FPDF(format="A4")
        self.pdf.set_margins(margin, margin, margin)
        self.pdf.set_auto_page_break(auto=True, margin=margin)
        self.pdf.add_page()
        self.font = font

    def line(self, text: str, size: float = 10, bold: bool = False, indent: float = 0, align: str = "L") -> None:
        if not text:
            return
        pdf = self.pdf
        pdf.set_font(self.font, "B" if bold else "", size)
        pdf.set_x(pdf.l_margin + indent)
        pdf.multi_cell(
            pdf.epw - indent, size * 0.5, _safe_text(text, pdf),
            align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

    def dual_line(self, left: str, right: str, size: float = 10) -> None:
        """Left text in regular weight, right text bold and right-aligned."""
        pdf = self.pdf
        pdf.set_font(self.font, "", size)
        pdf.cell(pdf.epw * 0.7, size * 0.5, _safe_text(left, pdf))
        pdf.set_font(self.font, "B", size)
        pdf.cell(0, size * 0.5, _safe_text(right, pdf), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def space(self, lines: float = 1) -> None:
        self.pdf.ln(5 * lines)

    def to_bytes(self) -> bytes:
        return bytes(self.pdf.output())


def render_resume_pdf(resume: Resume) -> bytes:
    """Render a résumé to PDF bytes."""
    doc = _Document()

    header = resume.header
    doc.line(header.name or "Your Name", 20, bold=True, align="C")
    doc.space(0.3)
    contact = " | ".join(
        v for v in (header.location, header.phone, header.email, header.github, header.linkedin) if v
    )
    doc.line(contact, 9, align="C")
    doc.space()

    if resume.summary:
        doc.line("SUMMARY OF QUALIFICATIONS", 11, bold=True)
        doc.line(resume.summary, 9.5)
        doc.space(1.2)

    if resume.technical_skills:
        doc.line("TECHNICAL SKILLS", 11, bold=True)
        for category, skills in resume.technical_skills.items():
            doc.line(f"{category}: {' - '.join(skills)}", 9.5)
        doc.space(1.2)

    if resume.experience:
        doc.line("PROFESSIONAL EXPERIENCE", 11, bold=True)
        doc.space(0.3)
        for exp in resume.experience:
            doc.line(", ".join(v for v in (exp.company, exp.location) if v), 10, bold=True)
            doc.dual_line(exp.title, exp.dates, 9.5)
            for bullet in exp.bullets:
                doc.line(f"- {bullet}", 9.5, indent=4)
            doc.space(0.5)
        doc.space()

    if resume.projects:
        doc.line("PROJECTS", 11, bold=True)
        doc.space(0.3)
        for proj in resume.projects:
            doc.dual_line(proj.title, proj.dates, 10)
            for bullet in proj.bullets:
                doc.line(f"- {bullet}", 9.5, indent=4)
            doc.space(0.5)
        doc.space(0.5)

    if resume.education:
        doc.line("EDUCATION & CERTIFICATES", 11, bold=True)
        doc.space(0.3)
        for i, edu in enumerate(resume.education):
            doc.dual_line(edu.school, edu.dates, 9.5)
            doc.line(edu.degree, 9.5, indent=4)
            if i < len(resume.education) - 1:
                doc.space(0.4)

    logger.debug("Rendered resume PDF for %s", header.name)
    return doc.to_bytes()


def render_cover_letter_pdf(body: str, company: str | None = None) -> bytes:
    """Render a cover letter to PDF bytes with a 'Cover Letter for ...' heading."""
    doc = _Document(margin=15)
    doc.line(f"Cover Letter for {company}" if company else "Cover Letter", 16, bold=True)
    doc.space(1)
    doc.line(body, 12)
    return doc.to_bytes()


def safe_filename(prefix: str, company: str | None, suffix: str = ".pdf") -> str:
    """``safe_filename("Resume_for", "Acme Inc.")`` -> ``Resume_for_acme_inc_.pdf``."""
    slug = re.sub(r"[^a-z0-9]", "_", (company or "company"), flags=re.IGNORECASE).lower()
    return f"{prefix}_{slug}{suffix}"
