"""Output manager for the CLI with color and quiet mode support.

Supports the NO_COLOR environment variable, the --no-color flag, quiet
mode, and plain-text symbol fallbacks.

Following the NO_COLOR standard: https://no-color.org/
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

import click

from ..models import Issue, SeverityLevel


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit --no-color flag (if passed)
    2. NO_COLOR environment variable
    3. FORCE_COLOR environment variable
    4. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: True forces colors, False disables them, None
            auto-detects.
        stream: Output stream to check for TTY. Defaults to stdout.

    Returns:
        True if colors should be used.
    """
    if explicit_flag is not None:
        return explicit_flag

    # Any value, including empty, means "no color"
    if "NO_COLOR" in os.environ:
        return False

    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


@dataclass
class OutputConfig:
    """Configuration for CLI output behavior.

    Attributes:
        use_color: Whether to use ANSI color codes in output.
        quiet: Suppress all output except errors and summaries.
        verbose: Enable debug output.
        stream: Output stream (default: stdout).
        err_stream: Error stream (default: stderr).
    """

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> OutputConfig:
        """Create OutputConfig from CLI flags."""
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet, verbose=verbose)


class OutputManager:
    """Output handler for CLI commands.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.success("Analysis complete")
        [OK] Analysis complete
    """

    COLORS = {
        "green": "\033[92m",
        "red": "\033[91m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "reset": "\033[0m",
    }

    SYMBOLS = {
        "success": {"color": "\033[92m✓\033[0m", "plain": "[OK]"},
        "error": {"color": "\033[91m✗\033[0m", "plain": "[FAIL]"},
        "warning": {"color": "\033[93m⚠\033[0m", "plain": "[WARN]"},
        "info": {"color": "\033[94mℹ\033[0m", "plain": "[INFO]"},
    }

    SEVERITY_COLORS = {
        SeverityLevel.HIGH: "red",
        SeverityLevel.MEDIUM: "yellow",
        SeverityLevel.LOW: "blue",
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, symbol_type: str) -> str:
        symbol_data = self.SYMBOLS.get(symbol_type, self.SYMBOLS["info"])
        return symbol_data["color"] if self.config.use_color else symbol_data["plain"]

    def _colorize(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def _output(
        self,
        message: str,
        symbol_type: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        """Write one line, honoring quiet mode unless forced or on stderr."""
        if self.config.quiet and not err and not force:
            return

        stream = self.config.err_stream if err else self.config.stream
        line = f"{self._get_symbol(symbol_type)} {message}" if symbol_type else message
        click.echo(line, file=stream, color=self.config.use_color)

    def success(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="success", force=force)

    def error(self, message: str) -> None:
        """Output an error message (always shown, even in quiet mode)."""
        self._output(message, symbol_type="error", err=True, force=True)

    def warning(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="warning", force=force)

    def info(self, message: str) -> None:
        self._output(message, symbol_type="info")

    def debug(self, message: str) -> None:
        """Output a debug message (only in verbose mode)."""
        if not self.config.verbose:
            return
        self._output(f"DEBUG: {self._colorize(message, 'dim')}")

    def header(self, title: str) -> None:
        if self.config.quiet:
            return
        self._output(self._colorize(title, "bold"))
        self._output("=" * len(title))

    def newline(self) -> None:
        if not self.config.quiet:
            click.echo("", file=self.config.stream)

    def plain(self, message: str, force: bool = False) -> None:
        self._output(message, force=force)

    def issue(self, issue: Issue) -> None:
        """Output one issue with its severity tag, confidence and suggestions."""
        severity = issue.severity.value.upper()
        tag = self._colorize(f"[{severity}]", self.SEVERITY_COLORS[issue.severity])
        self._output(
            f"  {tag} {issue.rule_id} ({issue.confidence:.0%}): {issue.description}"
        )
        if self.config.verbose:
            for evidence in issue.evidence:
                self._output(self._colorize(f"      - {evidence.description}", "dim"))
        for suggestion in issue.suggestions[:1]:
            self._output(f"      -> {suggestion}")

    def summary(
        self,
        total_elements: int,
        issues_by_severity: dict[str, int],
        errors: int = 0,
        duration_ms: float | None = None,
    ) -> None:
        """Output a summary line; always shown, even in quiet mode.

        Args:
            total_elements: Elements analyzed.
            issues_by_severity: Issue counts keyed by severity value.
            errors: Number of rule errors during the run.
            duration_ms: Analysis duration in milliseconds.
        """
        total_issues = sum(issues_by_severity.values())
        parts = [f"{total_elements} elements", f"{total_issues} issues"]
        for level in (SeverityLevel.HIGH, SeverityLevel.MEDIUM, SeverityLevel.LOW):
            count = issues_by_severity.get(level.value, 0)
            if count > 0:
                parts.append(f"{count} {level.value}")
        if errors > 0:
            parts.append(f"{errors} rule errors")
        if duration_ms is not None:
            if duration_ms < 1000:
                parts.append(f"{duration_ms:.0f}ms")
            else:
                parts.append(f"{duration_ms / 1000:.1f}s")

        summary_text = " | ".join(parts)

        if errors > 0:
            self._output(summary_text, symbol_type="error", force=True)
        elif total_issues > 0:
            self._output(summary_text, symbol_type="warning", force=True)
        else:
            self._output(summary_text, symbol_type="success", force=True)
