"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    plan_model: str = "claude-sonnet-4-5-20250929"
    fit_model: str = "claude-haiku-4-5-20251001"
    chat_model: str = "claude-haiku-4-5-20251001"
    plan_max_tokens: int = 4096
    fit_max_tokens: int = 1024
    chat_max_tokens: int = 1024
    temperature: float = 0.4
    # The user is waiting on these calls, so the SDK does not retry them.
    max_retries: int = 0
    timeout: int = 60

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError(f"llm.timeout must be >= 1, got {self.timeout}")
        if self.max_retries < 0:
            raise ValueError(f"llm.max_retries must be >= 0, got {self.max_retries}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"llm.temperature must be between 0 and 1, got {self.temperature}")


@dataclass(frozen=True)
class ScrapeConfig:
    min_text_length: int = 50
    timeout_ms: int = 30000
    settle_ms: int = 2000

    def __post_init__(self) -> None:
        if self.min_text_length < 1:
            raise ValueError(
                f"scrape.min_text_length must be >= 1, got {self.min_text_length}"
            )
        if self.timeout_ms < 1:
            raise ValueError(f"scrape.timeout_ms must be >= 1, got {self.timeout_ms}")
        if self.settle_ms < 0:
            raise ValueError(f"scrape.settle_ms must be >= 0, got {self.settle_ms}")


@dataclass(frozen=True)
class StoreConfig:
    database_url: str | None = None
    write_attempts: int = 3
    default_limit: int = 1000

    def __post_init__(self) -> None:
        if not 1 <= self.write_attempts <= 10:
            raise ValueError(
                f"store.write_attempts must be between 1 and 10, got {self.write_attempts}"
            )
        if self.default_limit < 1:
            raise ValueError(f"store.default_limit must be >= 1, got {self.default_limit}")


@dataclass(frozen=True)
class AdminConfig:
    key: str | None = None


@dataclass(frozen=True)
class PersonaConfig:
    name: str = "Rushil"
    profile_path: str | None = None
    max_history_turns: int = 20

    def __post_init__(self) -> None:
        if self.max_history_turns < 0:
            raise ValueError(
                f"persona.max_history_turns must be >= 0, got {self.max_history_turns}"
            )

    def load_profile(self) -> str:
        """Return the persona profile text, or an empty string if none is configured."""
        if not self.profile_path:
            return ""
        p = Path(self.profile_path).expanduser()
        if not p.exists():
            return ""
        return p.read_text(encoding="utf-8").strip()


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    scrape: ScrapeConfig = field(default_factory=ScrapeConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    persona: PersonaConfig = field(default_factory=PersonaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    ``DATABASE_URL`` and ``ADMIN_LOG_KEY`` from the environment take
    precedence over the file.
    """
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

    store = dict(raw.get("store", {}))
    if os.environ.get("DATABASE_URL"):
        store["database_url"] = os.environ["DATABASE_URL"]

    admin = dict(raw.get("admin", {}))
    if os.environ.get("ADMIN_LOG_KEY"):
        admin["key"] = os.environ["ADMIN_LOG_KEY"]

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        scrape=ScrapeConfig(**raw.get("scrape", {})),
        store=StoreConfig(**store),
        admin=AdminConfig(**admin),
        persona=PersonaConfig(**raw.get("persona", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
