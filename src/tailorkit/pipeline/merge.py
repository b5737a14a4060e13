"""Field-by-field merge of model output into the trusted base résumé.

The model may only replace the summary and each entry's bullets. Everything
else (header, skills, education, and every entry's company, title, location
and dates) is copied from the original regardless of what the payload holds.
Merging never fails: missing or malformed contributions fall back to the
original content, then to filler bullets.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from tailorkit.models.payload import ExtractedPayload, ParseFailure
from tailorkit.models.resume import ExperienceEntry, ProjectEntry, Resume, TailoredResume
from tailorkit.pipeline.filler import FillerPolicy, default_filler

logger = logging.getLogger(__name__)

_DOUBLE_BRACE_TOKEN_RE = re.compile(r"\{\{[^{}]*\}\}")
_BRACKET_TOKEN_RE = re.compile(r"\[[^\[\]]*\]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(text: str) -> str:
    """Strip ``[placeholder]`` / ``{{token}}`` markup and collapse whitespace."""
    text = _DOUBLE_BRACE_TOKEN_RE.sub("", text)
    text = _BRACKET_TOKEN_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_valid_bullets(value: Any) -> bool:
    """A non-empty list whose items are all non-blank strings."""
    if not isinstance(value, (list, tuple)) or not value:
        return False
    return all(isinstance(b, str) and b.strip() for b in value)


def _has_content(bullets: Sequence[str]) -> bool:
    return any(isinstance(b, str) and b.strip() for b in bullets)


def _proposed_bullets(payload: ExtractedPayload, section: str, index: int) -> Any:
    entries = payload.get(section)
    if not isinstance(entries, list) or index >= len(entries):
        return None
    entry = entries[index]
    if isinstance(entry, dict):
        return entry.get("bullets")
    # some models answer with a bare list of bullets per entry
    if isinstance(entry, list):
        return entry
    return None


def _clean_bullets(proposed: Any, original: Sequence[str]) -> list[str] | None:
    if not is_valid_bullets(proposed):
        return None
    # an unchanged list is adopted as-is
    if list(proposed) == list(original):
        return list(original)
    cleaned = [b for b in (sanitize_text(x) for x in proposed) if b]
    return cleaned or None


def _filler_bullets(filler: FillerPolicy, section: str, title: str) -> list[str]:
    bullets = filler(section, title)
    if not is_valid_bullets(bullets):
        logger.warning("Filler policy returned no usable bullets for %r; using default", title)
        bullets = default_filler(section, title)
    return list(bullets)


def _merge_section(
    section: str,
    entries: Sequence[ExperienceEntry | ProjectEntry],
    payloads: Sequence[ExtractedPayload],
    filler: FillerPolicy,
) -> tuple[list, list[str]]:
    merged = []
    sources: list[str] = []
    for i, entry in enumerate(entries):
        bullets = None
        for payload in payloads:
            cleaned = _clean_bullets(_proposed_bullets(payload, section, i), entry.bullets)
            if cleaned is not None:
                bullets = cleaned
        if bullets is not None:
            source = "model"
        elif _has_content(entry.bullets):
            bullets, source = list(entry.bullets), "original"
        else:
            bullets, source = _filler_bullets(filler, section, entry.title), "filler"
        merged.append(entry.model_copy(update={"bullets": bullets}))
        sources.append(source)
    return merged, sources


def merge_payloads(
    original: Resume,
    *payloads: ExtractedPayload,
    filler: FillerPolicy = default_filler,
) -> TailoredResume:
    """Merge one or more payloads into ``original``; later payloads win per field."""
    summary, summary_source = original.summary, "original"
    for payload in payloads:
        candidate = payload.get("summary")
        if isinstance(candidate, str) and candidate.strip():
            adopted = candidate if candidate == original.summary else candidate.strip()
            summary, summary_source = adopted, "model"

    experience, experience_sources = _merge_section("experience", original.experience, payloads, filler)
    projects, project_sources = _merge_section("projects", original.projects, payloads, filler)

    failures = [p.reason for p in payloads if isinstance(p, ParseFailure)]
    logger.debug(
        "Merged payloads: summary=%s, experience=%s, projects=%s, parse failures=%d",
        summary_source, experience_sources, project_sources, len(failures),
    )

    return TailoredResume(
        header=original.header,
        summary=summary,
        technical_skills=original.technical_skills,
        experience=experience,
        projects=projects,
        education=original.education,
        metadata={
            "sources": {
                "summary": summary_source,
                "experience": experience_sources,
                "projects": project_sources,
            },
            "parse_failures": failures,
        },
    )


def merge_payload(
    original: Resume,
    payload: ExtractedPayload,
    *,
    filler: FillerPolicy = default_filler,
) -> TailoredResume:
    """Merge a single payload into ``original``."""
    return merge_payloads(original, payload, filler=filler)
