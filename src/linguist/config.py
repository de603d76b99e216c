"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from linguist.models.suggestion import ToneTarget


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    rewrite_model: str = "claude-sonnet-4-5-20250929"
    timeout: int = 60

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)


@dataclass(frozen=True)
class SearchConfig:
    max_results: int = 3
    search_depth: str = "basic"
    max_chars: int = 1500  # Only the head of the document is checked
    max_queries: int = 3

    def __post_init__(self) -> None:
        _check_range("max_results", self.max_results, 1, 20)
        _check_range("max_queries", self.max_queries, 1, 10)
        if self.search_depth not in ("basic", "advanced"):
            raise ValueError(f"search_depth must be 'basic' or 'advanced', got {self.search_depth!r}")


@dataclass(frozen=True)
class EditorConfig:
    default_tone: str = ToneTarget.PROFESSIONAL.value

    def __post_init__(self) -> None:
        valid = {t.value for t in ToneTarget}
        if self.default_tone not in valid:
            raise ValueError(f"default_tone must be one of {sorted(valid)}, got {self.default_tone!r}")

    @property
    def tone(self) -> ToneTarget:
        return ToneTarget(self.default_tone)


@dataclass(frozen=True)
class UsageConfig:
    db_path: str = "~/.linguist/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)


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
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        search=SearchConfig(**raw.get("search", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        usage=UsageConfig(**raw.get("usage", {})),
    )
