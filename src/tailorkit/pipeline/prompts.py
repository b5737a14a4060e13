"""Prompt templates for résumé tailoring and cover letter generation.

Every builder is a pure function of its arguments. The rules written into
the prompts are requests to the model only; identity fields are enforced by
``tailorkit.pipeline.merge``.
"""

from __future__ import annotations

import json

from tailorkit.models.resume import Resume

ROLE_RESUME = "You are a professional resume writer."
ROLE_COVER_LETTER = "You are a professional resume and cover letter writer."

JSON_ONLY_RULE = """\
STRICT OUTPUT RULE:
Return ONLY a valid JSON object - no explanations, no markdown, and no commentary.
If anything other than JSON is included, the response is invalid."""

IDENTITY_RULES = [
    "Keep all personal information (name, contact, education, job titles, company names, locations, and dates) exactly the same.",
    "Do not invent employers, job titles, projects, or degrees that are not in the resume.",
    "Do not mention frameworks, tools, or technologies that are not already present in the resume.",
]

STYLE_RULES = [
    "Use the job description to decide what to emphasize.",
    "Focus on results, impact, metrics, and action-oriented phrasing (e.g., improved, delivered, implemented).",
    "Do not use placeholders such as [Company] or {{metric}}; write final text only.",
    "Keep tone professional, concise, and accomplishment-based.",
]


def _bullet_list(rules: list[str]) -> str:
    return "\n".join(f"- {r}" for r in rules)


def _company_rules(company_name: str | None) -> list[str]:
    if not company_name:
        return []
    return [f'Mention "{company_name}" at most once.']


def _sections(job_description: str, source_label: str, source: str) -> str:
    return (
        f"=== JOB DESCRIPTION ===\n{job_description.strip()}\n\n"
        f"=== {source_label} ===\n{source}"
    )


def serialize_resume(resume: Resume) -> str:
    """Serialize a résumé for inclusion in a prompt (JSON, indent 2)."""
    return resume.model_dump_json(indent=2)


def _serialize_entries(resume: Resume) -> str:
    data = {
        "experience": [
            {"index": i, **e.model_dump()} for i, e in enumerate(resume.experience)
        ],
        "projects": [
            {"index": i, **p.model_dump()} for i, p in enumerate(resume.projects)
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def build_summary_prompt(
    resume: Resume,
    job_description: str,
    company_name: str | None = None,
) -> str:
    """Prompt that rewrites only the professional summary."""
    target = f' for a role at "{company_name}"' if company_name else ""
    rules = IDENTITY_RULES + STYLE_RULES + _company_rules(company_name) + [
        "Write 2-4 sentences.",
    ]
    return f"""{ROLE_RESUME}

{JSON_ONLY_RULE}

Task:
Rewrite the summary of the resume below{target}.

Rules:
{_bullet_list(rules)}

{_sections(job_description, "CURRENT RESUME", serialize_resume(resume))}

=== OUTPUT FORMAT ===
{{"summary": "..."}}
"""


def build_experience_prompt(
    resume: Resume,
    job_description: str,
    company_name: str | None = None,
) -> str:
    """Prompt that rewrites only the bullets of experience and project entries."""
    target = f' for a role at "{company_name}"' if company_name else ""
    rules = IDENTITY_RULES + STYLE_RULES + _company_rules(company_name) + [
        "Return exactly one object per entry, in the same order as the input.",
        "Each entry must have 2-5 non-empty bullets.",
        "Do not return company, title, location, or dates; they are kept as-is.",
    ]
    n_exp = len(resume.experience)
    n_proj = len(resume.projects)
    return f"""{ROLE_RESUME}

{JSON_ONLY_RULE}

Task:
Rewrite the bullets of each experience and project entry below{target}.

Rules:
{_bullet_list(rules)}

{_sections(job_description, "CURRENT ENTRIES", _serialize_entries(resume))}

=== OUTPUT FORMAT ===
{{"experience": [{{"bullets": ["...", "..."]}}, ...], "projects": [{{"bullets": ["..."]}}, ...]}}
The "experience" array must have {n_exp} items and the "projects" array {n_proj} items.
"""


def build_resume_prompt(
    resume: Resume,
    job_description: str,
    company_name: str | None = None,
) -> str:
    """Whole-document prompt: the summary and every bullets field in one call."""
    target = f' for a role at "{company_name}"' if company_name else ""
    rules = IDENTITY_RULES + STYLE_RULES + _company_rules(company_name) + [
        'Only rewrite or tailor the "summary" and "bullets" fields.',
        "Preserve the structure of the resume exactly.",
    ]
    return f"""{ROLE_RESUME}

{JSON_ONLY_RULE}

Task:
Tailor the resume below{target}.

Rules:
{_bullet_list(rules)}

{_sections(job_description, "CURRENT RESUME", serialize_resume(resume))}

=== OUTPUT FORMAT ===
Return a JSON object with the same structure as the current resume, replacing only:
- "summary"
- every "bullets" list, keeping the same number and order of entries.
"""


def build_cover_letter_prompt(
    resume: Resume,
    job_description: str,
    company_name: str | None = None,
    *,
    signature_name: str | None = None,
    word_range: tuple[int, int] = (150, 200),
) -> str:
    """Prompt for a cover letter returned as ``{"coverLetter": "..."}``."""
    company = f'"{company_name}"' if company_name else "the hiring company"
    signature = signature_name or resume.header.name or ""
    closing = "Thank you for your time and consideration.\nBest regards,"
    if signature:
        closing += f"\n{signature}"
    low, high = word_range
    rules = [
        "Connect the applicant's experience and skills to the company's goals and responsibilities.",
        "Highlight transferable strengths that the resume supports.",
        "DO NOT invent or imply any job titles not present in the resume.",
        "If the job description contains a section title (e.g., \"Project Management\"), discuss it as a functional area the applicant contributes to, not a formal title.",
        "DO NOT mention specific platforms or tools unless they are listed in the resume.",
        "Tone: confident, factual, and conversational.",
        f"Mention {company} exactly once." if company_name else "Do not guess the company's name.",
        f"Length: {low}-{high} words.",
        f'End with this closing:\n  "{closing}"',
    ]
    return f"""{ROLE_COVER_LETTER}

{JSON_ONLY_RULE}
Output format:
{{"coverLetter": "..."}}

Task:
Write a professional, tailored cover letter for {company} using the provided job description and resume.

Objectives:
{_bullet_list(rules)}

{_sections(job_description, "USER RESUME", serialize_resume(resume))}
"""
