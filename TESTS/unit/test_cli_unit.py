# Руководство к файлу (TESTS/unit/test_cli_unit.py)
# Назначение:
# - Unit-тесты для cli/main.py: значения по умолчанию, переменные окружения, ошибки конфигурации.

from __future__ import annotations

import io

import pytest

from httpsyet.cli.main import build_parser, main, main_async
from httpsyet.core.settings import Settings


def test_defaults_match_tool_behaviour():
    ns = build_parser(Settings()).parse_args(["https://site.test/"])

    assert ns.urls == ["https://site.test/"]
    assert ns.depth == 0
    assert ns.parallel == 10
    assert ns.delay == 1.0
    assert ns.slack is None
    assert ns.verbose is False


def test_slack_settings_come_from_environment(monkeypatch):
    monkeypatch.setenv("HTTPSYET_SLACK_WEBHOOK", "https://hooks.example.test/x")
    monkeypatch.setenv("HTTPSYET_SLACK_CHANNEL", "#web")

    ns = build_parser(Settings()).parse_args(["https://site.test/"])

    assert ns.slack == "https://hooks.example.test/x"
    assert ns.slack_channel == "#web"


@pytest.mark.asyncio
async def test_config_error_is_printed_and_returns_one():
    ns = build_parser(Settings()).parse_args(["--depth", "-1", "https://site.test/"])
    stdout, stderr = io.StringIO(), io.StringIO()

    code = await main_async(ns, stdout=stdout, stderr=stderr)

    assert code == 1
    assert stderr.getvalue() == "failed to crawl: depth cannot be negative\n"
    assert stdout.getvalue() == ""


def test_no_urls_prints_usage_and_exits_one(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 1
    assert "usage: httpsyet" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert capsys.readouterr().out.startswith("httpsyet 0.1.0 ")
