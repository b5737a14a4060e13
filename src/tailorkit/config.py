"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

PIPELINE_MODES = ("split", "whole")

DEFAULT_RESUME_PATH = Path(__file__).parent / "data" / "base_resume.json"


@dataclass(frozen=True)
class OllamaConfig:
    base_url: str = "http://localhost:11434"
    model: str = "llama3"
    timeout: int = 120

    def __post_init__(self):
        if self.timeout < 1:
            raise ValueError(f"ollama.timeout must be >= 1, got {self.timeout}")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"ollama.base_url must be an http(s) URL, got {self.base_url!r}")


@dataclass(frozen=True)
class PipelineConfig:
    mode: str = "split"
    resume_temperature: float = 0.3
    cover_letter_temperature: float = 0.7
    signature_name: str | None = None

    def __post_init__(self):
        if self.mode not in PIPELINE_MODES:
            raise ValueError(f"pipeline.mode must be one of {PIPELINE_MODES}, got {self.mode!r}")
        for name in ("resume_temperature", "cover_letter_temperature"):
            value = getattr(self, name)
            if not 0.0 <= value <= 2.0:
                raise ValueError(f"pipeline.{name} must be between 0 and 2, got {value}")


@dataclass(frozen=True)
class ResumeConfig:
    path: str | None = None

    @property
    def resolved_path(self) -> Path:
        if self.path is None:
            return DEFAULT_RESUME_PATH
        return Path(self.path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    resume: ResumeConfig = field(default_factory=ResumeConfig)


def _apply_env(raw: dict) -> dict:
    """Overlay OLLAMA_URL / OLLAMA_MODEL / TAILORKIT_BASE_RESUME onto raw config."""
    ollama = dict(raw.get("ollama") or {})
    resume = dict(raw.get("resume") or {})
    if os.environ.get("OLLAMA_URL"):
        ollama["base_url"] = os.environ["OLLAMA_URL"]
    if os.environ.get("OLLAMA_MODEL"):
        ollama["model"] = os.environ["OLLAMA_MODEL"]
    if os.environ.get("TAILORKIT_BASE_RESUME"):
        resume["path"] = os.environ["TAILORKIT_BASE_RESUME"]
    return {**raw, "ollama": ollama, "resume": resume}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    raw = _apply_env(raw)

    return AppConfig(
        ollama=OllamaConfig(**raw.get("ollama", {})),
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
        resume=ResumeConfig(**raw.get("resume", {})),
    )
