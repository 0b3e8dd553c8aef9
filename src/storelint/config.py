"""Environment-based configuration and typed rule options."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, NoDecode

from storelint.constants import MODULE_PATH_SEPARATOR, FailurePolicy, RuleId

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _split_csv(v: Any) -> Any:
    """Accept comma-separated string or JSON array."""
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class Settings(BaseSettings):
    """Reads from .env file and STORELINT_* environment variables."""

    # Store-definition file the resolver parses
    store_file_path: Path | None = None

    # Deny-list (empty = derive from the store file)
    forbidden_modules: Annotated[list[str], NoDecode] = []

    failure_policy: FailurePolicy = FailurePolicy.OPEN

    enabled_rules: Annotated[list[str], NoDecode] = [
        RuleId.DISALLOW_EMPTY_CATCH,
        RuleId.DISALLOW_SOME_MODULE,
    ]

    # Logging
    log_level: LogLevel = "WARNING"

    # Discovery
    skip_directories: list[str] = [
        "node_modules",
        "dist",
        "build",
        "coverage",
        ".git",
        ".nuxt",
        ".next",
    ]

    @field_validator("forbidden_modules", "enabled_rules", mode="before")
    @classmethod
    def _parse_lists(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("enabled_rules")
    @classmethod
    def _validate_rules(cls, v: list[str]) -> list[str]:
        known = {r.value for r in RuleId}
        unknown = [r for r in v if r not in known]
        if unknown:
            raise ValueError(
                f"Unknown rule id(s): {', '.join(unknown)}"
            )
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "STORELINT_",
        "extra": "ignore",
    }


class DisallowModuleOptions(BaseModel):
    """Options for ``disallow-some-module``, validated at construction.

    ``forbidden_modules`` keeps the configured order so that messages
    stay deterministic; duplicates are dropped (first one wins).
    """

    model_config = ConfigDict(frozen=True)

    store_file_path: Path | None = None
    forbidden_modules: tuple[str, ...] = ()

    @field_validator("forbidden_modules", mode="before")
    @classmethod
    def _parse_modules(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("forbidden_modules")
    @classmethod
    def _validate_modules(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        cleaned: list[str] = []
        dupes: list[str] = []
        for raw in v:
            name = raw.strip()
            if not name:
                raise ValueError("forbidden module names must be non-empty")
            if MODULE_PATH_SEPARATOR in name:
                raise ValueError(
                    f"forbidden module name {name!r} must not contain "
                    f"{MODULE_PATH_SEPARATOR!r}"
                )
            if name in cleaned:
                dupes.append(name)
                continue
            cleaned.append(name)
        if dupes:
            logger.warning(
                "Duplicate forbidden modules ignored: %s",
                ", ".join(dupes),
            )
        return tuple(cleaned)

    @property
    def derives_from_store(self) -> bool:
        """True when the deny-list comes from the store file."""
        return not self.forbidden_modules and self.store_file_path is not None

    @classmethod
    def from_settings(cls, settings: Settings) -> DisallowModuleOptions:
        return cls(
            store_file_path=settings.store_file_path,
            forbidden_modules=tuple(settings.forbidden_modules),
        )


# Grammar module name → import path for tree-sitter grammars
GRAMMAR_MODULES: dict[str, str] = {
    "javascript": "tree_sitter_javascript",
}
