"""Tests for blueprints.cli.config — config show/validate commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from blueprints.cli.app import app

runner = CliRunner()


class TestShowConfig:
    def test_show_json_format(self):
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["draft_separator"] == "<!-- draft -->"
        assert payload["categories"] == ["stack", "standards", "security"]
        assert payload["root"] is None

    def test_show_env_format(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("BLUEPRINTS_ROOT", str(tmp_path))
        result = runner.invoke(app, ["config", "show", "--format", "env"])
        assert result.exit_code == 0
        assert f"BLUEPRINTS_ROOT={tmp_path}" in result.stdout
        assert "BLUEPRINTS_DEFAULT_POLICY=all" in result.stdout

    def test_env_format_lists_read_back(self, monkeypatch: pytest.MonkeyPatch):
        from blueprints.core.settings import BlueprintSettings

        monkeypatch.setenv("BLUEPRINTS_CATEGORIES", '["stack", "testing"]')
        result = runner.invoke(app, ["config", "show", "--format", "env"])
        assert result.exit_code == 0
        line = next(ln for ln in result.stdout.splitlines() if ln.startswith("BLUEPRINTS_CATEGORIES="))
        assert line == 'BLUEPRINTS_CATEGORIES=["stack", "testing"]'

        monkeypatch.setenv("BLUEPRINTS_CATEGORIES", line.split("=", 1)[1])
        assert BlueprintSettings().categories == ["stack", "testing"]

    def test_show_table_format(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Store Root" in result.output
        assert "draft_separator" in result.output

    def test_invalid_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BLUEPRINTS_LOG_FORMAT", "xml")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestValidateConfig:
    def test_valid(self):
        result = runner.invoke(app, ["config", "validate"])
        assert result.exit_code == 0
        assert "Configuration valid" in result.output

    def test_missing_root(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("BLUEPRINTS_ROOT", str(tmp_path / "missing"))
        result = runner.invoke(app, ["config", "validate"])
        assert result.exit_code == 1
        assert "Store root not found" in result.output

    def test_invalid_env_reported_by_commands(self, monkeypatch: pytest.MonkeyPatch, store_root: Path):
        monkeypatch.setenv("BLUEPRINTS_DRAFT_SEPARATOR", "   ")
        result = runner.invoke(app, ["topics", "show", "react", "--root", str(store_root)])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output
