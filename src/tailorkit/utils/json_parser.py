"""Utility to extract a JSON object from free-form LLM responses.

Extraction runs a fixed sequence of small stages, each usable on its own:

1. ``strip_code_fences``   - drop ```json / ``` markers
2. ``trim_to_object_span`` - first '{' to last '}'
3. ``repair_json``         - quote, comma and truncation repairs
   (``normalize_quotes``, ``close_truncated``, ``quote_unquoted_keys``,
   ``insert_missing_commas``, ``remove_stray_commas``, ``quote_barewords``)

``extract_payload`` never raises; it returns a ``ParseFailure`` instead.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Callable

from tailorkit.models.payload import ExtractedPayload, ParsedPayload, ParseFailure

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```[ \t]*(?:json)?[ \t]*\n?", re.IGNORECASE)

# A well-formed double-quoted JSON string, used to split text into string and
# non-string segments once normalize_quotes has run.
_STRING_RE = re.compile(r'("(?:[^"\\]|\\.)*")', re.DOTALL)

_UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_$][\w$\-]*)(\s*:)")
_MISSING_COMMA_RE = re.compile(r'(["}\]]|\d|\btrue|\bfalse|\bnull)([ \t]*\n\s*)(?=["{\[])')
_TRAILING_COMMA_RE = re.compile(r",(\s*)(?=[}\]])")
_LEADING_COMMA_RE = re.compile(r"([{\[]\s*),+")
_DOUBLE_COMMA_RE = re.compile(r",(?:\s*,)+")
_BAREWORD_RE = re.compile(r"(?<=[:\[,])(\s*)([^\s,:\[\]{}\"][^,\[\]{}\"\n]*?)(\s*)(?=[,\]}\n]|$)")
_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")

_JSON_LITERALS = {"true", "false", "null"}
_PYTHON_LITERALS = {"True": "true", "False": "false", "None": "null"}

_OPEN_QUOTES = {
    '"': ('"', "”"),
    "'": ("'", "’"),
    "“": ("”", '"'),
    "‘": ("’", "'"),
}
_CLOSING_FOLLOWERS = set(",:}]")
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "\f": "\\f"}


# ---------------------------------------------------------------------------
# Stage 1-2: locate the object
# ---------------------------------------------------------------------------


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers (```json, ```) from text."""
    return _FENCE_RE.sub("", text).strip()


def trim_to_object_span(text: str) -> str | None:
    """Return the span from the leftmost '{' to the rightmost '}'.

    No brace counting: trailing prose that itself contains braces widens the
    span. A '{' with no later '}' keeps the tail so a truncated object can
    still be closed by ``close_truncated``.
    """
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return text[start:].rstrip()
    return text[start : end + 1]


# ---------------------------------------------------------------------------
# Stage 3: repairs
# ---------------------------------------------------------------------------


def _read_string(text: str, start: int, closers: tuple[str, ...]) -> tuple[str, int, bool]:
    """Read a quoted string whose opening quote is at ``start - 1``.

    A quote character only closes the string when the next non-blank
    character is structural (``, : } ]``), a newline, or end of text;
    otherwise it is taken as a literal quote. Returns the JSON-escaped body,
    the index just past the closing quote, and whether the string was closed.
    """
    body: list[str] = []
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n:
            nxt = text[i + 1]
            # \' is not a JSON escape
            body.append("'" if nxt == "'" else ch + nxt)
            i += 2
            continue
        if ch in closers:
            j = i + 1
            while j < n and text[j] in " \t\r":
                j += 1
            if j >= n or text[j] in _CLOSING_FOLLOWERS or text[j] == "\n":
                return "".join(body), i + 1, True
            body.append('\\"' if ch == '"' else ch)
            i += 1
            continue
        if ch == '"':
            body.append('\\"')
        elif ch in _CONTROL_ESCAPES:
            body.append(_CONTROL_ESCAPES[ch])
        else:
            body.append(ch)
        i += 1
    return "".join(body), n, False


def _after_structural(out: list[str]) -> bool:
    for chunk in reversed(out):
        stripped = chunk.rstrip()
        if stripped:
            return stripped[-1] in "{[,:"
    return True


def normalize_quotes(text: str) -> str:
    """Rewrite every string literal as a valid double-quoted JSON string.

    Handles single quotes, typographic quotes, unescaped inner quotes, raw
    newlines inside strings, and a string left open at end of text.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        # An apostrophe inside a bareword value does not open a string.
        if ch in _OPEN_QUOTES and (ch == '"' or _after_structural(out)):
            body, i, _closed = _read_string(text, i + 1, _OPEN_QUOTES[ch])
            out.append(f'"{body}"')
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _map_outside_strings(text: str, fn: Callable[[str], str]) -> str:
    """Apply ``fn`` to every segment of ``text`` that is not a string literal."""
    parts = _STRING_RE.split(text)
    return "".join(fn(part) if idx % 2 == 0 else part for idx, part in enumerate(parts))


def close_truncated(text: str) -> str:
    """Close brackets and braces left open by a truncated response."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack and stack[-1] == ch:
            stack.pop()

    if not stack and not in_string:
        return text

    repaired = text + ('"' if in_string else "")
    repaired = repaired.rstrip()
    while repaired.endswith(","):
        repaired = repaired[:-1].rstrip()
    if repaired.endswith(":"):
        repaired += " null"
    return repaired + "".join(reversed(stack))


def quote_unquoted_keys(text: str) -> str:
    """``{name: 1}`` -> ``{"name": 1}``."""
    return _map_outside_strings(text, lambda seg: _UNQUOTED_KEY_RE.sub(r'\1"\2"\3', seg))


def insert_missing_commas(text: str) -> str:
    """Add the comma an LLM forgot between members written on separate lines.

    Runs on the whole text: after ``normalize_quotes`` no string literal holds
    a raw newline, so a match can only sit between two values.
    """
    return _MISSING_COMMA_RE.sub(r"\1,\2", text)


def remove_stray_commas(text: str) -> str:
    """Drop trailing, leading and doubled commas."""

    def _fix(seg: str) -> str:
        seg = _DOUBLE_COMMA_RE.sub(",", seg)
        seg = _LEADING_COMMA_RE.sub(r"\1", seg)
        return _TRAILING_COMMA_RE.sub(r"\1", seg)

    return _map_outside_strings(text, _fix)


def _quote_bareword(match: re.Match) -> str:
    lead, token, trail = match.groups()
    if token in _JSON_LITERALS or _NUMBER_RE.fullmatch(token):
        return match.group(0)
    if token in _PYTHON_LITERALS:
        return f"{lead}{_PYTHON_LITERALS[token]}{trail}"
    return f"{lead}{json.dumps(token, ensure_ascii=False)}{trail}"


def quote_barewords(text: str) -> str:
    """Quote unquoted values: ``{"role": Engineer}`` -> ``{"role": "Engineer"}``."""
    return _map_outside_strings(text, lambda seg: _BAREWORD_RE.sub(_quote_bareword, seg))


REPAIR_STAGES: tuple[Callable[[str], str], ...] = (
    normalize_quotes,
    close_truncated,
    quote_unquoted_keys,
    insert_missing_commas,
    remove_stray_commas,
    quote_barewords,
)


def repair_json(text: str) -> str:
    """Run every repair stage, in order, over a candidate JSON object."""
    for stage in REPAIR_STAGES:
        text = stage(text)
    return text


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _failure(raw: str, reason: str, fallback_field: str | None) -> ExtractedPayload:
    if fallback_field is not None and raw.strip():
        logger.debug("JSON extraction failed (%s); using raw text as %r", reason, fallback_field)
        return ParsedPayload(data={fallback_field: raw.strip()}, raw=raw, repaired=True)
    logger.debug("JSON extraction failed: %s", reason)
    return ParseFailure(raw=raw, reason=reason)


def extract_payload(raw: str | None, *, fallback_field: str | None = None) -> ExtractedPayload:
    """Recover a JSON object from model output without raising.

    Args:
        raw: Text returned by the model.
        fallback_field: When set and no object can be recovered, wrap the whole
            raw text as ``{fallback_field: raw}``. Only meaningful when the caller
            expects a single free-text field (cover letters).
    """
    if not isinstance(raw, str):
        return _failure("", "response is not text", None)
    if not raw.strip():
        return _failure(raw, "empty response", fallback_field)

    span = trim_to_object_span(strip_code_fences(raw))
    if span is None:
        return _failure(raw, "no JSON object found", fallback_field)

    repaired = False
    try:
        value = json.loads(span)
    except json.JSONDecodeError:
        repaired = True
        try:
            value = json.loads(repair_json(span))
        except (json.JSONDecodeError, RecursionError) as e:
            return _failure(raw, f"unrepairable JSON: {e}", fallback_field)

    if not isinstance(value, dict):
        return _failure(raw, f"expected a JSON object, got {type(value).__name__}", fallback_field)
    if repaired and not value:
        # a lone or reversed brace repairs to {}
        return _failure(raw, "no JSON content after repair", fallback_field)

    return ParsedPayload(data=value, raw=raw, repaired=repaired)
