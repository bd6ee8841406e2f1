"""Tests for the command line surface that does not need a browser."""
from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import veriform.cli.main as cli_main


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    return CliRunner()


def test_mappings_lists_fields_from_custom_file(runner, tmp_path):
    mapping_file = tmp_path / "fields.json"
    mapping_file.write_text(json.dumps({"firstName": ["Vorname", "Rufname"]}), encoding="utf-8")

    result = runner.invoke(cli_main.cli, ["--log-level", "WARNING", "mappings", "--mapping", str(mapping_file)])

    assert result.exit_code == 0
    assert "firstName" in result.output
    assert "vorname, rufname" in result.output


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_fill_rejects_unusable_payload_before_launching_browser(runner, tmp_path, content):
    data_file = tmp_path / "scan.json"
    data_file.write_text(content, encoding="utf-8")

    result = runner.invoke(
        cli_main.cli,
        ["--log-level", "WARNING", "fill", "https://example.com", "--data", str(data_file)],
    )

    assert result.exit_code == 2
    assert "--data" in result.output


def test_match_requires_at_least_one_field(runner):
    result = runner.invoke(cli_main.cli, ["--log-level", "WARNING", "match", "https://example.com"])

    assert result.exit_code == 2
