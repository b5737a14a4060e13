"""Streamlit Web UI for tailorkit.

Two tabs:
  Resume: job description + company → tailored resume → PDF download
  Cover Letter: job description + company → cover letter → PDF download
"""

from __future__ import annotations

import asyncio
import json
import logging

logger = logging.getLogger(__name__)

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.config import load_config
from tailorkit.errors import InputError, ModelServerError
from tailorkit.export.pdf_renderer import (
    render_cover_letter_pdf,
    render_resume_pdf,
    safe_filename,
)
from tailorkit.pipeline.service import TailorService

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume & Cover Letter Tailor",
    page_icon=":dart:",
    layout="wide",
)

st.title("AI Resume & Cover Letter Tailor (Local Ollama)")

config = load_config()

with st.sidebar:
    st.caption(f"Model: `{config.ollama.model}` @ {config.ollama.base_url}")
    st.caption(f"Mode: {config.pipeline.mode}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _call(method: str, request: dict):
    async with OllamaClient(
        base_url=config.ollama.base_url,
        model=config.ollama.model,
        timeout=config.ollama.timeout,
    ) as llm:
        service = TailorService(llm, config)
        return await getattr(service, method)(request)


def _run(method: str, company_name: str, jd_text: str):
    """Run a service call, showing errors in the page. Returns None on failure."""
    request = {"jobDescription": jd_text, "companyName": company_name}
    try:
        return asyncio.run(_call(method, request))
    except InputError as e:
        st.warning(e.detail)
    except ModelServerError as e:
        logger.exception("Model server call failed")
        st.error(f"Could not reach the model server: {e.detail}")
    except Exception:
        logger.exception("%s failed", method)
        st.error("Something went wrong. Please try again.")
    return None


# ---------------------------------------------------------------------------
# Inputs (shared by both tabs)
# ---------------------------------------------------------------------------

company_name = st.text_input("Company name", placeholder="Enter the company name...", max_chars=100)
jd_text = st.text_area(
    "Job description",
    height=260,
    placeholder="Paste the job description here...",
    max_chars=20000,
)

tab_resume, tab_cover = st.tabs(["Resume", "Cover Letter"])

# ---------------------------------------------------------------------------
# Resume tab
# ---------------------------------------------------------------------------

with tab_resume:
    if st.button("Tailor Resume", type="primary", disabled=not jd_text.strip()):
        with st.spinner("Generating..."):
            result = _run("tailor", company_name, jd_text)
        if result is not None:
            st.session_state["tailored_resume"] = result
            st.session_state["resume_company"] = company_name

    if "tailored_resume" in st.session_state:
        result = st.session_state["tailored_resume"]
        company = st.session_state.get("resume_company") or None
        st.subheader(f"Tailored Resume for {company}" if company else "Tailored Resume")

        if result.metadata.get("parse_failures"):
            st.info("Part of the model output could not be parsed; the original content was kept there.")

        st.code(
            json.dumps(result.model_dump(exclude={"metadata"}), indent=2, ensure_ascii=False),
            language="json",
        )
        st.download_button(
            "Download Resume PDF",
            data=render_resume_pdf(result),
            file_name=safe_filename("Resume_for", company),
            mime="application/pdf",
        )

# ---------------------------------------------------------------------------
# Cover letter tab
# ---------------------------------------------------------------------------

with tab_cover:
    if st.button("Generate Cover Letter", type="primary", disabled=not jd_text.strip()):
        with st.spinner("Generating..."):
            letter = _run("cover_letter", company_name, jd_text)
        if letter is not None:
            st.session_state["cover_letter"] = letter

    if "cover_letter" in st.session_state:
        letter = st.session_state["cover_letter"]
        st.subheader(f"Cover Letter for {letter.company}" if letter.company else "Cover Letter")
        st.markdown(letter.body.replace("\n", "  \n"))
        st.download_button(
            "Download Cover Letter PDF",
            data=render_cover_letter_pdf(letter.body, letter.company),
            file_name=safe_filename("cover_letter_for", letter.company),
            mime="application/pdf",
        )
