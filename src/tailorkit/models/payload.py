"""Result of pulling a JSON object out of raw model text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class ParsedPayload:
    """A JSON object recovered from model output. Its contents are unvalidated."""

    data: dict[str, Any]
    raw: str = ""
    repaired: bool = False

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True)
class ParseFailure:
    """No JSON object could be recovered; ``raw`` is kept for logging."""

    raw: str
    reason: str = field(default="no JSON object found")

    def get(self, key: str, default: Any = None) -> Any:
        return default


ExtractedPayload = Union[ParsedPayload, ParseFailure]
