"""Tests for blueprints.core.settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from blueprints.core.models import DraftPolicy
from blueprints.core.settings import (
    BUNDLED_LIBRARY,
    DEFAULT_CATEGORIES,
    BlueprintSettings,
    clear_settings_cache,
    get_settings,
)


class TestDefaults:
    def test_defaults(self):
        settings = BlueprintSettings()
        assert settings.root is None
        assert settings.categories == DEFAULT_CATEGORIES
        assert settings.draft_separator == "<!-- draft -->"
        assert settings.default_policy is DraftPolicy.ALL
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.mcp_port == 8110

    def test_resolved_root_defaults_to_bundled_library(self):
        assert BlueprintSettings().resolved_root() == BUNDLED_LIBRARY
        assert (BUNDLED_LIBRARY / "stack").is_dir()

    def test_resolved_root_expands(self, tmp_path: Path):
        settings = BlueprintSettings(root=tmp_path / "a" / ".." / "b")
        assert settings.resolved_root() == (tmp_path / "b").resolve()


class TestEnvironment:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("BLUEPRINTS_ROOT", str(tmp_path))
        monkeypatch.setenv("BLUEPRINTS_DEFAULT_POLICY", "latest")
        monkeypatch.setenv("BLUEPRINTS_CATEGORIES", '["stack", "testing"]')
        settings = BlueprintSettings()
        assert settings.root == tmp_path
        assert settings.default_policy is DraftPolicy.LATEST
        assert settings.categories == ["stack", "testing"]

    def test_log_values_normalised(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BLUEPRINTS_LOG_LEVEL", "debug")
        monkeypatch.setenv("BLUEPRINTS_LOG_FORMAT", "JSON")
        settings = BlueprintSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"


class TestValidation:
    def test_blank_separator(self):
        with pytest.raises(ValidationError):
            BlueprintSettings(draft_separator="   ")

    def test_separator_stripped(self):
        assert BlueprintSettings(draft_separator="  --- ").draft_separator == "---"

    def test_bad_log_format(self):
        with pytest.raises(ValidationError):
            BlueprintSettings(log_format="xml")

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            BlueprintSettings(log_level="LOUD")

    def test_bad_policy(self):
        with pytest.raises(ValidationError):
            BlueprintSettings(default_policy="newest")


class TestCache:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch: pytest.MonkeyPatch):
        first = get_settings()
        monkeypatch.setenv("BLUEPRINTS_MCP_PORT", "9000")
        assert get_settings() is first
        assert get_settings(_force_reload=True).mcp_port == 9000

    def test_clear(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
