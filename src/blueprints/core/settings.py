"""
Centralized settings for the blueprint store.

Manifesto:
    One validated, cached settings object. The CLI, the MCP server and
    tests all resolve the store root, the category order and the draft
    separator from the same place, so a document looks the same no matter
    which transport served it.

All fields can be set via ``BLUEPRINTS_*`` environment variables (e.g.
``BLUEPRINTS_ROOT=/srv/blueprints``) or a ``.env`` file in the working
directory.

Tags:
    blueprints, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blueprints.core.models import DraftPolicy

#: Directory holding the Markdown library shipped with the package.
BUNDLED_LIBRARY = Path(__file__).resolve().parent.parent / "library"

DEFAULT_CATEGORIES = ["stack", "standards", "security"]
DEFAULT_DRAFT_SEPARATOR = "<!-- draft -->"


class BlueprintSettings(BaseSettings):
    """Blueprint store configuration.

    Fields
    ──────
    root             : Store root; ``None`` means the bundled library
    categories       : Category directories searched first, in order
    draft_separator  : Marker line delimiting drafts inside one file
    default_policy   : Draft policy used when a caller does not pick one
    log_level        : Structlog log level
    log_format       : ``json`` or ``console``
    mcp_host/mcp_port: Bind address for the streamable-http MCP transport
    """

    model_config = SettingsConfigDict(
        env_prefix="BLUEPRINTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    root: Path | None = Field(default=None, description="Store root directory")
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    draft_separator: str = Field(default=DEFAULT_DRAFT_SEPARATOR)
    default_policy: DraftPolicy = Field(default=DraftPolicy.ALL)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    # ── MCP ──────────────────────────────────────────────────────
    mcp_host: str = Field(default="127.0.0.1")
    mcp_port: int = Field(default=8110)

    @field_validator("draft_separator")
    @classmethod
    def _separator_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("draft_separator must not be blank")
        return value.strip()

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {value!r}")
        return value

    def resolved_root(self) -> Path:
        """Return the effective store root (bundled library by default)."""
        if self.root is None:
            return BUNDLED_LIBRARY
        return self.root.expanduser().resolve()


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, BlueprintSettings] = {}


def get_settings(*, _force_reload: bool = False) -> BlueprintSettings:
    """Load, validate, and cache a :class:`BlueprintSettings` instance.

    Raises:
        pydantic.ValidationError: when an environment value is invalid.
    """
    if _force_reload or "default" not in _settings_cache:
        _settings_cache["default"] = BlueprintSettings()
    return _settings_cache["default"]


def clear_settings_cache() -> None:
    """Drop the cached settings (tests and ``--root`` overrides)."""
    _settings_cache.clear()


__all__ = [
    "BUNDLED_LIBRARY",
    "BlueprintSettings",
    "DEFAULT_CATEGORIES",
    "DEFAULT_DRAFT_SEPARATOR",
    "clear_settings_cache",
    "get_settings",
]
