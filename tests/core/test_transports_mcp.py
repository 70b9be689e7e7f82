"""Tests for ``blueprints.core.transports.mcp`` — shared MCP server scaffold."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch


class TestCreateBlueprintMcp:
    @patch("blueprints.core.transports.mcp.FastMCP")
    def test_create_blueprint_mcp(self, mock_fastmcp_cls):
        from blueprints.core.transports.mcp import create_blueprint_mcp

        mock_server = MagicMock()
        mock_fastmcp_cls.return_value = mock_server

        async def fake_lifespan(server):
            yield {}

        result = create_blueprint_mcp(
            name="test-blueprints",
            instructions="Test MCP server",
            lifespan=fake_lifespan,
        )
        assert result is mock_server
        mock_fastmcp_cls.assert_called_once_with(
            "test-blueprints",
            instructions="Test MCP server",
            lifespan=fake_lifespan,
        )


class TestRunBlueprintMcp:
    @patch("blueprints.core.transports.mcp.configure_logging")
    def test_run_stdio_default(self, mock_configure):
        from blueprints.core.transports.mcp import run_blueprint_mcp

        mcp = MagicMock()
        mcp.name = "test"

        with patch.object(sys, "argv", ["test"]):
            run_blueprint_mcp(mcp)

        mcp.run.assert_called_once_with(transport="stdio")
        mock_configure.assert_called_once_with(level="INFO", json_format=True, service="test-mcp")

    @patch("blueprints.core.transports.mcp.configure_logging")
    def test_run_http_transport(self, mock_configure):
        from blueprints.core.transports.mcp import run_blueprint_mcp

        mcp = MagicMock()
        mcp.name = "test"
        mcp.settings = MagicMock()

        run_blueprint_mcp(mcp, default_port=8110, default_host="0.0.0.0", argv=["--transport", "http"])

        mcp.run.assert_called_once_with(transport="streamable-http")
        assert mcp.settings.port == 8110
        assert mcp.settings.host == "0.0.0.0"

    @patch("blueprints.core.transports.mcp.configure_logging")
    def test_run_custom_port(self, mock_configure):
        from blueprints.core.transports.mcp import run_blueprint_mcp

        mcp = MagicMock()
        mcp.name = "test"
        mcp.settings = MagicMock()

        run_blueprint_mcp(mcp, argv=["-t", "streamable-http", "--port", "9999"])

        mcp.run.assert_called_once_with(transport="streamable-http")
        assert mcp.settings.port == 9999

    @patch("blueprints.core.transports.mcp.configure_logging")
    def test_log_level_passed_through(self, mock_configure):
        from blueprints.core.transports.mcp import run_blueprint_mcp

        mcp = MagicMock()
        mcp.name = "test"

        run_blueprint_mcp(mcp, log_level="DEBUG", argv=[])

        assert mock_configure.call_args.kwargs["level"] == "DEBUG"
