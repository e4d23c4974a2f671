"""Tests for the ux-smells click commands."""

import json
import logging
import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ux_smells.cli.main import cli


@pytest.fixture()
def runner(tmp_path):
    """CliRunner isolated from project config files and UX_SMELLS_* variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("UX_SMELLS_")}
    with patch.dict(os.environ, env, clear=True):
        original = os.getcwd()
        os.chdir(tmp_path)
        try:
            yield CliRunner()
        finally:
            os.chdir(original)
            logging.getLogger("ux_smells").handlers.clear()


class TestAnalyzeCommand:
    """Tests for `ux-smells analyze`."""

    def test_analyze_text(self, runner, sample_document_file):
        result = runner.invoke(cli, ["--no-color", "analyze", str(sample_document_file)])
        assert result.exit_code == 0, result.output
        assert "UX smells in design.json" in result.output
        assert "Submit button (1:3)" in result.output
        assert "accessibility-touch-target-small" in result.output
        assert "3 elements" in result.output

    def test_analyze_json(self, runner, sample_document_file):
        result = runner.invoke(cli, ["analyze", str(sample_document_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["total_elements"] == 3
        assert data["total_issues"] == len(data["issues"])
        assert sum(data["issues_by_severity"].values()) == data["total_issues"]

    def test_analyze_rule_subset(self, runner, sample_document_file):
        result = runner.invoke(
            cli,
            [
                "analyze",
                str(sample_document_file),
                "--rule",
                "accessibility-touch-target-small",
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert {i["rule_id"] for i in data["issues"]} == {"accessibility-touch-target-small"}
        assert [i["element_id"] for i in data["issues"]] == ["1:3"]

    def test_no_issues_is_success(self, runner, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        result = runner.invoke(cli, ["--no-color", "analyze", str(path)])
        assert result.exit_code == 0
        assert "[OK] 0 elements | 0 issues" in result.output

    def test_unknown_rule(self, runner, sample_document_file):
        result = runner.invoke(
            cli, ["--no-color", "analyze", str(sample_document_file), "--rule", "no-such-rule"]
        )
        assert result.exit_code == 2
        assert "Unknown rule(s): no-such-rule" in result.output

    def test_missing_document(self, runner, tmp_path):
        result = runner.invoke(cli, ["--no-color", "analyze", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Document not found" in result.output

    def test_malformed_document(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"foo": "bar"}))
        result = runner.invoke(cli, ["--no-color", "analyze", str(path)])
        assert result.exit_code == 1
        assert "Suggestion:" in result.output

    def test_quiet_keeps_summary(self, runner, sample_document_file):
        result = runner.invoke(cli, ["--no-color", "-q", "analyze", str(sample_document_file)])
        assert result.exit_code == 0
        assert "UX smells in" not in result.output
        assert "3 elements" in result.output


class TestRulesCommand:
    def test_rules_text(self, runner):
        result = runner.invoke(cli, ["--no-color", "rules"])
        assert result.exit_code == 0
        assert "Rules (21)" in result.output
        assert "[x] layout-elements-overlapping" in result.output

    def test_rules_json(self, runner):
        result = runner.invoke(cli, ["rules", "--json"])
        rules = json.loads(result.stdout)
        assert len(rules) == 21
        assert rules[0]["id"] == "accessibility-contrast-insufficient"

    def test_disabled_rule_from_config(self, runner, tmp_path):
        (tmp_path / "ux-smells.config.json").write_text(
            json.dumps({"disabled_rules": ["layout-elements-overlapping"]})
        )
        result = runner.invoke(cli, ["--no-color", "rules"])
        assert "[ ] layout-elements-overlapping" in result.output


class TestConfigCommands:
    """Tests for export-config and import-config."""

    def test_export(self, runner):
        result = runner.invoke(cli, ["export-config"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["version"] == "1.0.0"
        assert len(data["rules"]) == 21

    def test_import(self, runner, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(
            json.dumps(
                {
                    "version": "1.0.0",
                    "rules": [{"id": "layout-elements-overlapping", "enabled": False}],
                }
            )
        )
        result = runner.invoke(cli, ["--no-color", "import-config", str(path)])
        assert result.exit_code == 0, result.output
        assert "20 rules enabled" in result.output
        assert "layout-elements-overlapping" not in result.output

    def test_import_invalid_json(self, runner, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("{oops")
        result = runner.invoke(cli, ["--no-color", "import-config", str(path)])
        assert result.exit_code == 2
        assert "Invalid JSON" in result.output

    def test_import_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--no-color", "import-config", str(tmp_path / "x.json")])
        assert result.exit_code == 1


class TestGlobalOptions:
    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        result = runner.invoke(cli, ["--no-color", "--config", str(path), "rules"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output
