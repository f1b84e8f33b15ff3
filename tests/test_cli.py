"""Tests for CLI module."""

import httpx
import pytest
from fake_ledger import create_fake_ledger

from invierte_ya_web import cli
from invierte_ya_web.api_client import InvierteYaAPIClient
from invierte_ya_web.cli import cmd_version, main
from invierte_ya_web.session.store import MemoryTokenStore


@pytest.fixture
def fake_client_factory(monkeypatch):
    """Point the CLI at an in-process fake ledger."""
    app = create_fake_ledger()

    def factory(api_url=None):
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )
        return InvierteYaAPIClient("http://test", token_store=MemoryTokenStore(), client=client)

    monkeypatch.setattr(cli, "create_client", factory)
    return app


@pytest.fixture
def unreachable_client_factory(monkeypatch):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def factory(api_url=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://test")
        return InvierteYaAPIClient("http://test", token_store=MemoryTokenStore(), client=client)

    monkeypatch.setattr(cli, "create_client", factory)


class TestCmdVersion:
    def test_prints_version(self, capsys):
        result = cmd_version(None)

        assert result == 0
        assert "Invierte Ya Web v0.1.0" in capsys.readouterr().out


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_version_command(self, capsys):
        assert main(["version"]) == 0

    def test_health_ok(self, fake_client_factory, capsys):
        result = main(["health", "--api-url", "http://test"])

        assert result == 0
        assert "Status: healthy" in capsys.readouterr().out

    def test_health_unreachable(self, unreachable_client_factory, capsys):
        result = main(["health", "--api-url", "http://test"])

        assert result == 1
        assert "API unreachable" in capsys.readouterr().out

    def test_funds_lists_catalogue(self, fake_client_factory, capsys):
        result = main(["funds"])

        out = capsys.readouterr().out
        assert result == 0
        assert "DEUDAPRIVADA" in out
        assert "$250.000 COP" in out

    def test_funds_empty(self, fake_client_factory, capsys):
        fake_client_factory.state.ledger.funds = []

        assert main(["funds"]) == 0
        assert "No funds available." in capsys.readouterr().out

    def test_serve_parses_flags(self, monkeypatch):
        calls = {}

        def fake_run(**kwargs):
            calls.update(kwargs)

        import invierte_ya_web.ui.main as ui_main

        monkeypatch.setattr(ui_main, "run", fake_run)

        assert main(["serve", "--port", "8080", "--api-url", "http://x", "--no-reload"]) == 0
        assert calls == {"port": 8080, "api_url": "http://x", "reload": False}
