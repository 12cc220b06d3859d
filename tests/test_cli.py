"""Tests for rulekit CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from rulekit.cli.main import cli

RULES = """\
rules:
  title: not:empty
  emails.*: email
  status:
    inList:
      list: [draft, published]
      on: update
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(RULES)
    return path


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestCheck:
    def test_valid_data(self, runner, rules_file, tmp_path):
        data = _write_json(tmp_path / "data.json", {"title": "Hi", "emails": ["a@b.io"], "status": "draft"})

        result = runner.invoke(cli, ["check", str(rules_file), str(data)])
        assert result.exit_code == 0
        assert "Data is valid." in result.output

    def test_invalid_data(self, runner, rules_file, tmp_path):
        data = _write_json(tmp_path / "data.json", {"emails": ["a@b.io", "bad"], "status": "draft"})

        result = runner.invoke(cli, ["check", str(rules_file), str(data)])
        assert result.exit_code == 1
        assert "title: is required" in result.output
        assert "emails.1: is not a valid email address" in result.output
        assert "2 error(s) in 2 field(s)" in result.output

    def test_json_output(self, runner, rules_file, tmp_path):
        data = _write_json(tmp_path / "data.json", {"emails": ["a@b.io"], "status": "draft"})

        result = runner.invoke(cli, ["check", str(rules_file), str(data), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output) == {"title": ["is required"]}

    def test_yaml_data(self, runner, rules_file, tmp_path):
        data = tmp_path / "data.yaml"
        data.write_text("title: Hi\nemails: [a@b.io]\nstatus: draft\n")

        result = runner.invoke(cli, ["check", str(rules_file), str(data)])
        assert result.exit_code == 0

    def test_events_option(self, runner, rules_file, tmp_path):
        data = _write_json(tmp_path / "data.json", {"title": "Hi", "emails": ["a@b.io"], "status": "gone"})

        assert runner.invoke(cli, ["check", str(rules_file), str(data), "-e", "create"]).exit_code == 0
        assert runner.invoke(cli, ["check", str(rules_file), str(data), "-e", "update"]).exit_code == 1

    def test_events_from_environment(self, runner, rules_file, tmp_path, monkeypatch):
        data = _write_json(tmp_path / "data.json", {"title": "Hi", "emails": ["a@b.io"], "status": "gone"})
        monkeypatch.setenv("RULEKIT_EVENTS", "create")

        result = runner.invoke(cli, ["check", str(rules_file), str(data)])
        assert result.exit_code == 0

    def test_invalid_rule_set(self, runner, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  title: 42\n")
        data = _write_json(tmp_path / "data.json", {})

        result = runner.invoke(cli, ["check", str(rules), str(data)])
        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_unknown_handler(self, runner, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  title: frobnicate\n")
        data = _write_json(tmp_path / "data.json", {"title": "x"})

        result = runner.invoke(cli, ["check", str(rules), str(data)])
        assert result.exit_code == 2
        assert "'frobnicate' is not registered" in result.output

    def test_unreadable_data(self, runner, rules_file, tmp_path):
        data = tmp_path / "data.json"
        data.write_text("{not json")

        result = runner.invoke(cli, ["check", str(rules_file), str(data)])
        assert result.exit_code == 2
        assert "Cannot read" in result.output


class TestLint:
    def test_valid_rule_set(self, runner, rules_file):
        result = runner.invoke(cli, ["lint", str(rules_file)])
        assert result.exit_code == 0
        assert "Rule set is valid." in result.output

    def test_schema_issues(self, runner, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  title: 42\n")

        result = runner.invoke(cli, ["lint", str(rules)])
        assert result.exit_code == 1
        assert "rules/title" in result.output
        assert "1 issue(s) found" in result.output

    def test_unknown_handler(self, runner, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  title:\n    - not:frobnicate\n    - email\n")

        result = runner.invoke(cli, ["lint", str(rules)])
        assert result.exit_code == 1
        assert "unknown handler 'frobnicate'" in result.output


class TestHandlers:
    def test_lists_builtins(self, runner):
        result = runner.invoke(cli, ["handlers"])
        assert result.exit_code == 0
        assert "email: is not a valid email address" in result.output
        assert "money [right, left]: must be a valid monetary amount" in result.output


class TestVerbose:
    def test_verbose_flag(self, runner):
        result = runner.invoke(cli, ["-v", "handlers"])
        assert result.exit_code == 0
