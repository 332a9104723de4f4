"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from portfolio_ai.errors import ConfigurationError

API_KEY_ENV = "ANTHROPIC_API_KEY"

RESUME_SIZES = ("small", "medium", "large")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_tokens: int = 4096
    temperature: float = 0.3
    timeout: int = 120
    max_attempts: int = 1

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ConfigurationError(f"llm.timeout must be >= 1, got {self.timeout}")
        if not 1 <= self.max_attempts <= 10:
            raise ConfigurationError(
                f"llm.max_attempts must be between 1 and 10, got {self.max_attempts}"
            )
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigurationError(
                f"llm.temperature must be between 0 and 1, got {self.temperature}"
            )
        if self.max_tokens < 1:
            raise ConfigurationError(f"llm.max_tokens must be >= 1, got {self.max_tokens}")


@dataclass(frozen=True)
class GenerationConfig:
    default_size: str = "medium"
    link_excerpt_chars: int = 200

    def __post_init__(self) -> None:
        if self.default_size not in RESUME_SIZES:
            raise ConfigurationError(
                f"generation.default_size must be one of {', '.join(RESUME_SIZES)}, "
                f"got {self.default_size!r}"
            )
        if self.link_excerpt_chars < 1:
            raise ConfigurationError(
                f"generation.link_excerpt_chars must be >= 1, got {self.link_excerpt_chars}"
            )


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)


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

    try:
        return AppConfig(
            llm=LLMConfig(**raw.get("llm", {})),
            generation=GenerationConfig(**raw.get("generation", {})),
        )
    except TypeError as exc:
        # Unknown keys in the YAML file
        raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc


def resolve_api_key(api_key: str | None = None) -> str:
    """Return the provider credential, failing fast when it is absent."""
    key = api_key or os.environ.get(API_KEY_ENV)
    if not key:
        raise ConfigurationError(f"{API_KEY_ENV} not found in environment variables")
    return key
