"""Tests for CLI output module."""

from __future__ import annotations

import os
from io import StringIO
from unittest.mock import patch

from ux_smells.cli.output import (
    OutputConfig,
    OutputManager,
    should_use_color,
)
from ux_smells.models import Evidence, EvidenceKind, SeverityLevel
from ux_smells.rules.base import DetectionResult
from ux_smells.rules.issues import create_issue

from conftest import make_element, make_rule


def plain_manager(**kwargs) -> tuple[OutputManager, StringIO]:
    stream = StringIO()
    return OutputManager(OutputConfig(use_color=False, stream=stream, **kwargs)), stream


def sample_issue():
    result = DetectionResult(
        detected=True,
        confidence=0.8,
        evidence=[Evidence(kind=EvidenceKind.MEASUREMENT, description="Font size: 10px")],
        suggestions=["Increase the font size", "Check mobile"],
    )
    rule = make_rule("accessibility-font-size-small", severity=SeverityLevel.MEDIUM)
    return create_issue(rule, make_element("t1", "Caption", "TEXT"), result)


class TestShouldUseColor:
    """Tests for should_use_color function."""

    def test_explicit_flag_true(self):
        """Explicit flag True should force colors."""
        assert should_use_color(explicit_flag=True) is True

    def test_explicit_flag_false(self):
        """Explicit flag False should disable colors."""
        assert should_use_color(explicit_flag=False) is False

    def test_no_color_env_var(self):
        """NO_COLOR env var should disable colors."""
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            assert should_use_color() is False

    def test_force_color_env(self):
        """FORCE_COLOR env var should enable colors."""
        with patch.dict(os.environ, {"FORCE_COLOR": "1"}, clear=True):
            assert should_use_color() is True

    def test_non_tty_stream(self):
        """Non-TTY stream should disable colors."""
        with patch.dict(os.environ, {}, clear=True):
            assert should_use_color(stream=StringIO()) is False


class TestOutputConfig:
    """Tests for OutputConfig dataclass."""

    def test_from_flags(self):
        config = OutputConfig.from_flags(verbose=True, quiet=False, no_color=True)
        assert config.verbose is True
        assert config.quiet is False
        assert config.use_color is False


class TestOutputManager:
    """Tests for OutputManager class."""

    def test_symbols_without_color(self):
        manager, _ = plain_manager()
        assert manager._get_symbol("success") == "[OK]"
        assert manager._get_symbol("error") == "[FAIL]"
        assert manager._get_symbol("warning") == "[WARN]"

    def test_success_output(self):
        manager, stream = plain_manager()
        manager.success("Analysis complete")
        assert "[OK] Analysis complete" in stream.getvalue()

    def test_error_goes_to_err_stream(self):
        err_stream = StringIO()
        manager = OutputManager(
            OutputConfig(use_color=False, quiet=True, err_stream=err_stream)
        )
        manager.error("Something failed")
        assert "[FAIL] Something failed" in err_stream.getvalue()

    def test_quiet_mode_suppresses_info(self):
        manager, stream = plain_manager(quiet=True)
        manager.info("Should not appear")
        manager.header("Title")
        assert stream.getvalue() == ""

    def test_debug_only_in_verbose(self):
        manager, stream = plain_manager()
        manager.debug("Debug info")
        assert stream.getvalue() == ""
        manager, stream = plain_manager(verbose=True)
        manager.debug("Debug info")
        assert "DEBUG: Debug info" in stream.getvalue()

    def test_forced_color_kept_on_non_tty_stream(self):
        stream = StringIO()
        with patch.dict(os.environ, {"FORCE_COLOR": "1"}, clear=True):
            manager = OutputManager(
                OutputConfig(use_color=should_use_color(stream=stream), stream=stream)
            )
        manager.success("Analysis complete")
        assert stream.getvalue() == "\033[92m✓\033[0m Analysis complete\n"

    def test_header(self):
        manager, stream = plain_manager()
        manager.header("Rules")
        assert stream.getvalue() == "Rules\n=====\n"


class TestIssueOutput:
    """Tests for issue and summary rendering."""

    def test_issue_line(self):
        manager, stream = plain_manager()
        manager.issue(sample_issue())
        output = stream.getvalue()
        assert "[MEDIUM] accessibility-font-size-small (80%)" in output
        assert "-> Increase the font size" in output
        assert "Check mobile" not in output
        assert "Font size: 10px" not in output

    def test_issue_evidence_when_verbose(self):
        manager, stream = plain_manager(verbose=True)
        manager.issue(sample_issue())
        assert "- Font size: 10px" in stream.getvalue()

    def test_issue_colored_by_severity(self):
        stream = StringIO()
        manager = OutputManager(OutputConfig(use_color=True, stream=stream))
        manager.issue(sample_issue())
        assert "\033[93m[MEDIUM]" in stream.getvalue()

    def test_summary_with_issues(self):
        manager, stream = plain_manager(quiet=True)
        manager.summary(12, {"high": 2, "low": 1}, duration_ms=15.2)
        assert stream.getvalue().strip() == (
            "[WARN] 12 elements | 3 issues | 2 high | 1 low | 15ms"
        )

    def test_summary_clean(self):
        manager, stream = plain_manager()
        manager.summary(4, {})
        assert stream.getvalue().strip() == "[OK] 4 elements | 0 issues"

    def test_summary_with_errors(self):
        manager, stream = plain_manager()
        manager.summary(4, {"medium": 1}, errors=2, duration_ms=2500)
        assert stream.getvalue().strip() == (
            "[FAIL] 4 elements | 1 issues | 1 medium | 2 rule errors | 2.5s"
        )
