"""Click-based CLI interface for the UX smell detector."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from ..config import SmellsConfigLoader
from ..document import DocumentFormatError, load_elements_file
from ..service import SmellsService
from ..smells_logging import setup_logging
from .errors import (
    CLIError,
    DocumentLoadError,
    DocumentNotFoundError,
    RuleNotFoundError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager


class CLIState:
    """Objects shared by all commands through the click context."""

    def __init__(self, output: OutputManager, verbose: bool = False):
        self.output = output
        self.verbose = verbose
        self.service: SmellsService | None = None


def _fail(state: CLIState, error: CLIError) -> None:
    message, exit_code = handle_exception(
        error, use_color=state.output.config.use_color, verbose=state.verbose
    )
    click.echo(message, err=True, color=state.output.config.use_color)
    sys.exit(exit_code)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config_file: Path | None,
) -> None:
    """UX Smells - detect usability problems in design documents."""
    output = OutputManager(
        OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color)
    )
    state = CLIState(output, verbose=verbose)
    ctx.obj = state

    try:
        config = SmellsConfigLoader().load(config_file=config_file)
    except CLIError as e:
        _fail(state, e)
        return

    setup_logging(
        level=config.log_level,
        quiet=quiet,
        verbose=verbose,
        enable_file_logging=config.enable_file_logging,
        log_format=config.log_format,
    )
    state.service = SmellsService(config=config)


@cli.command()
@click.argument("file_path", type=click.Path(path_type=Path))
@click.option(
    "--rule",
    "rule_ids",
    multiple=True,
    help="Run only this rule (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.pass_obj
def analyze(
    state: CLIState, file_path: Path, rule_ids: tuple[str, ...], as_json: bool
) -> None:
    """Analyze the elements of a design document."""
    output = state.output
    service = state.service

    try:
        if rule_ids:
            unknown = [r for r in rule_ids if service.registry.get_rule(r) is None]
            if unknown:
                raise RuleNotFoundError(unknown)

        try:
            elements = load_elements_file(file_path)
        except FileNotFoundError as e:
            raise DocumentNotFoundError(str(file_path)) from e
        except DocumentFormatError as e:
            raise DocumentLoadError(str(e), file_path=str(file_path)) from e

        output.debug(f"Loaded {len(elements)} elements from {file_path}")
        result = service.analyze(
            elements, enabled_rule_ids=list(rule_ids) if rule_ids else None
        )
    except CLIError as e:
        _fail(state, e)
        return

    if as_json:
        data = result.to_dict()
        data["issues"] = [issue.to_dict() for issue in result.issues]
        _echo_json(data)
        return

    output.header(f"UX smells in {file_path.name}")
    for element_result in result.results:
        if not element_result.has_issues:
            continue
        first = element_result.issues[0]
        output.newline()
        output.plain(f"{first.element_info.name} ({element_result.element_id})")
        for issue in element_result.issues:
            output.issue(issue)

    for error in result.errors:
        output.warning(
            f"Rule {error.rule_id} failed on {error.element_id}: {error.error_message}"
        )

    output.newline()
    output.summary(
        total_elements=result.total_elements,
        issues_by_severity=result.issues_by_severity,
        errors=len(result.errors),
        duration_ms=result.execution_time_ms,
    )


@cli.command("rules")
@click.option("--json", "as_json", is_flag=True, help="Output rules as JSON")
@click.pass_obj
def list_rules(state: CLIState, as_json: bool) -> None:
    """List the registered rules."""
    rules = state.service.list_rules()
    if as_json:
        _echo_json(rules)
        return

    output = state.output
    enabled = set(state.service.enabled_rule_ids())
    output.header(f"Rules ({len(rules)})")
    for rule in rules:
        marker = "x" if rule["id"] in enabled else " "
        output.plain(
            f"  [{marker}] {rule['id']:<40} {rule['category']:<14} {rule['severity']}"
        )
        output.debug(rule["description"])


@cli.command("export-config")
@click.pass_obj
def export_config(state: CLIState) -> None:
    """Print the rule configuration as JSON."""
    _echo_json(state.service.export_configuration())


@cli.command("import-config")
@click.argument("file_path", type=click.Path(path_type=Path))
@click.pass_obj
def import_config(state: CLIState, file_path: Path) -> None:
    """Apply a rule configuration file and show the enabled rules."""
    try:
        if not file_path.exists():
            raise DocumentNotFoundError(str(file_path))
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {file_path}: {e}",
                suggestion="Use a file written by 'ux-smells export-config'",
            ) from e
        if not isinstance(data, dict):
            raise ValidationError(
                "Rule configuration must be a JSON object",
                suggestion="Use a file written by 'ux-smells export-config'",
            )
    except CLIError as e:
        _fail(state, e)
        return

    state.service.import_configuration(data)
    enabled = state.service.enabled_rule_ids()
    state.output.success(f"Configuration applied, {len(enabled)} rules enabled")
    for rule_id in enabled:
        state.output.plain(f"  {rule_id}")


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
