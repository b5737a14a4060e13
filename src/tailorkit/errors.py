"""Errors that reach the caller of a tailoring request.

Content problems in model output never surface here; they are absorbed by
the JSON extractor and the merge policy.
"""

from __future__ import annotations


class TailorError(Exception):
    def __init__(self, detail: str, status_code: int = 500) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class InputError(TailorError):
    """A required request field is missing or blank."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=400)


class ModelServerError(TailorError):
    """The model server was unreachable or answered with a non-success status."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=502)
