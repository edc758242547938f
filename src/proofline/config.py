"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 2
    timeout: int = 30
    short_text_timeout: float = 15.0
    long_text_timeout: float = 20.0
    long_text_threshold: int = 2000

    def deadline_for(self, text: str) -> float:
        """Longer texts get a longer deadline for a single analysis pass."""
        if len(text) > self.long_text_threshold:
            return self.long_text_timeout
        return self.short_text_timeout


@dataclass(frozen=True)
class EditorConfig:
    poll_interval: float = 30.0
    idle_delay: float = 2.0
    readability_delay: float = 2.0
    history_limit: int = 10


@dataclass(frozen=True)
class ReadabilityConfig:
    min_ai_chars: int = 200
    min_summary_words: int = 50
    min_rewrite_chars: int = 10


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = "~/.proofline/proofline.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    readability: ReadabilityConfig = field(default_factory=ReadabilityConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


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

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        readability=ReadabilityConfig(**raw.get("readability", {})),
        store=StoreConfig(**raw.get("store", {})),
    )
