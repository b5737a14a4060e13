"""Load the base résumé from a JSON file."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from tailorkit.config import DEFAULT_RESUME_PATH
from tailorkit.models.resume import Resume

logger = logging.getLogger(__name__)


def load_base_resume(path: str | Path | None = None) -> Resume:
    """Load and validate the base résumé. Results are cached per resolved path."""
    resolved = Path(path).expanduser().resolve() if path is not None else DEFAULT_RESUME_PATH.resolve()
    return _load_cached(resolved)


@lru_cache(maxsize=8)
def _load_cached(path: Path) -> Resume:
    if not path.exists():
        raise FileNotFoundError(f"Base resume not found: {path}")
    logger.debug("Loading base resume from %s", path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return Resume.model_validate(data)


def clear_resume_cache() -> None:
    """Forget cached résumés so the next load re-reads the file."""
    _load_cached.cache_clear()
