"""Filler bullets used when neither the model nor the base résumé has any."""

from __future__ import annotations

from typing import Callable

# (section, title) -> bullets. section is "experience" or "projects".
FillerPolicy = Callable[[str, str], list[str]]


def default_filler(section: str, title: str) -> list[str]:
    """Deterministic, deliberately generic bullets derived from the entry title."""
    title = title.strip()
    if section == "projects":
        name = f"the {title} project" if title else "the project"
        return [
            f"Designed and delivered {name} end to end.",
            f"Documented {name} and shared results with stakeholders.",
        ]
    role = f"as {title}" if title else "in this role"
    return [
        f"Delivered core responsibilities {role}.",
        f"Collaborated with cross-functional teams to improve outcomes {role}.",
    ]
