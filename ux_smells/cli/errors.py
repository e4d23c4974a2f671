"""CLI error types carrying a category, a recovery hint and an exit code.

Commands raise these instead of printing ad hoc messages, so every failure
is rendered the same way by ``handle_exception``.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

RED = "\033[91m"
CYAN = "\033[96m"
DIM = "\033[2m"
RESET = "\033[0m"


class ErrorCategory(Enum):
    """What kind of input a CLI error is about."""

    CONFIGURATION = "configuration"  # settings file or environment
    FILE_SYSTEM = "file_system"  # missing paths
    DOCUMENT = "document"  # design document that can't be flattened
    VALIDATION = "validation"  # command line arguments


@dataclass
class CLIError(Exception):
    """A failure reported to the user with an optional suggestion.

    Attributes:
        category: What the error is about.
        message: Human-readable error message.
        suggestion: Optional next step for the user.
        details: Extra key/value lines shown under the message.
        exit_code: Process exit code for this error.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = None
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Render the message, suggestion and details as display lines."""

        def paint(code: str, text: str) -> str:
            return f"{code}{text}{RESET}" if use_color else text

        lines = [f"{paint(RED, 'Error:')} {self.message}"]
        if self.suggestion:
            lines.append(f"{paint(CYAN, 'Suggestion:')} {self.suggestion}")
        for key, value in (self.details or {}).items():
            lines.append(paint(DIM, f"  {key}: {value}"))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class ConfigurationError(CLIError):
    """Error in a configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your ux-smells.config.json syntax and values"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class DocumentNotFoundError(CLIError):
    """Error when the design document to analyze doesn't exist."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Document not found: {path}",
            suggestion="Verify the path exists and you have read permissions",
            details={"path": path},
            exit_code=1,
        )


class DocumentLoadError(CLIError):
    """Error when a design document can't be turned into elements."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = (
            "Export the document as JSON: a list of nodes, or an object with "
            "'document', 'elements' or 'children'"
        )
        super().__init__(
            category=ErrorCategory.DOCUMENT,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"file": file_path} if file_path else None,
            exit_code=1,
        )


class RuleNotFoundError(CLIError):
    """Error when a rule id passed on the command line is not registered."""

    def __init__(self, rule_ids: list[str]):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=f"Unknown rule(s): {', '.join(rule_ids)}",
            suggestion="Run 'ux-smells rules' to see available rules",
            details={"rules": ", ".join(rule_ids)},
            exit_code=2,
        )


class ValidationError(CLIError):
    """Error for invalid CLI arguments or input."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=2,
        )


def handle_exception(
    error: CLIError,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Format a CLI error for stderr.

    Args:
        error: The error being reported.
        use_color: Whether to include ANSI color codes.
        verbose: Append the traceback of the exception being handled.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    message = error.format(use_color=use_color)
    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()
    return message, error.exit_code
