"""CLI package for the UX smell detector.

Modules:
    output: OutputManager for consistent CLI output with color/quiet support
    errors: Structured error types with recovery suggestions
    main: The ``ux-smells`` click command group
"""

from .errors import (
    CLIError,
    ConfigurationError,
    DocumentLoadError,
    DocumentNotFoundError,
    ErrorCategory,
    RuleNotFoundError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "CLIError",
    "ConfigurationError",
    "DocumentLoadError",
    "DocumentNotFoundError",
    "ErrorCategory",
    "RuleNotFoundError",
    "ValidationError",
    "handle_exception",
]
