"""PDF export module for tailorkit."""
from tailorkit.export.pdf_renderer import (
    render_cover_letter_pdf,
    render_resume_pdf,
    safe_filename,
)

__all__ = ["render_resume_pdf", "render_cover_letter_pdf", "safe_filename"]
