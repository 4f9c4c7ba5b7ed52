#!/usr/bin/env python3
"""
Command-line interface for agents-lint.

Checks agent transcripts against the policy checkers and validates AGENTS.md
policy documents.

Exit codes:
    0  All checks passed
    1  Violations found at or above the --fail-on severity (or invalid AGENTS.md)
    2  Error: invalid arguments, unreadable file, malformed transcript
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal, TypeGuard

import typer

from agents_lint.checkers import default_registry
from agents_lint.checkers.base import Severity
from agents_lint.cli.logger import CLILogger
from agents_lint.config import check_settings, settings
from agents_lint.exceptions import AgentsLintError
from agents_lint.rules import RulesValidator
from agents_lint.services.parser import TranscriptParserService
from agents_lint.services.report import (
    render_json,
    render_text,
    render_validation_json,
    render_validation_text,
)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2

app = typer.Typer(
    name='agents-lint',
    help='Validate agent transcripts against AGENTS.md rules',
    add_completion=False,
)

# Type aliases and validators
OutputFormat = Literal['text', 'json']
FailOn = Literal['error', 'warning', 'info']


def _is_output_format(value: str) -> TypeGuard[OutputFormat]:
    """Type guard for valid output formats."""
    return value in ('text', 'json')


def _is_fail_on(value: str) -> TypeGuard[FailOn]:
    """Type guard for valid --fail-on severities."""
    return value in ('error', 'warning', 'info')


def _validate_output_format(value: str | None) -> OutputFormat | None:
    """Validate and narrow output format for typer callback."""
    if value is None:
        return None
    if _is_output_format(value):
        return value
    raise typer.BadParameter("Must be 'text' or 'json'")


def _validate_fail_on(value: str | None) -> FailOn | None:
    """Validate and narrow fail-on severity for typer callback."""
    if value is None:
        return None
    if _is_fail_on(value):
        return value
    raise typer.BadParameter("Must be 'error', 'warning' or 'info'")


def _split_ids(value: str) -> list[str]:
    return [checker_id.strip() for checker_id in value.split(',') if checker_id.strip()]


@app.callback()
def _configure(
    debug: bool = typer.Option(False, '--debug', help='Enable debug logging to stderr'),
) -> None:
    """Validate agent transcripts against AGENTS.md rules."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    # Every command reads settings, directly or through the default registry
    try:
        check_settings()
    except AgentsLintError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(EXIT_ERROR)


@app.command()
def check(
    transcript: Path = typer.Argument(..., help='Transcript file (stream-json NDJSON)'),
    checker: str | None = typer.Option(
        None, '--checker', '-c', help='Run only specific checker(s), comma-separated'
    ),
    format: str | None = typer.Option(
        None, '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
    fail_on: str | None = typer.Option(
        None, '--fail-on', help='Fail on: error (default), warning, or info', callback=_validate_fail_on
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Show detailed output (text format only)'),
) -> None:
    """Run checkers on a transcript file.

    Examples:
        agents-lint check session.ndjson
        agents-lint check session.ndjson --checker no-todowrite,git-branch
        agents-lint check session.ndjson --format json --fail-on warning
    """
    logger = CLILogger(verbose=verbose)
    output_format = format or settings.OUTPUT_FORMAT
    threshold = Severity.parse(fail_on or settings.FAIL_ON)

    try:
        parsed = TranscriptParserService().load_transcript(transcript, logger)
    except AgentsLintError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(EXIT_ERROR)

    if checker:
        ids = _split_ids(checker)
        unknown = [checker_id for checker_id in ids if checker_id not in default_registry]
        if unknown:
            logger.warning(f'Unknown checker(s) ignored: {", ".join(unknown)}')
        result = default_registry.run_by_ids(parsed, ids)
    else:
        result = default_registry.run_all(parsed)
    result = result.with_path(str(transcript))

    if output_format == 'json':
        typer.echo(render_json(result))
    else:
        typer.echo(render_text(result, verbose=verbose), nl=False)

    if result.exceeds(threshold):
        raise typer.Exit(EXIT_VIOLATIONS)


@app.command('list')
def list_checkers(
    format: str | None = typer.Option(
        None, '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
) -> None:
    """List all available checkers."""
    checkers = default_registry.get_all()

    if (format or settings.OUTPUT_FORMAT) == 'json':
        typer.echo(json.dumps([{'id': c.id, 'description': c.description} for c in checkers], indent=2))
        return

    if not checkers:
        typer.echo('No checkers registered')
        return

    typer.echo('Available checkers:')
    for c in checkers:
        typer.echo(f'  {c.id:<20} {c.description}')


@app.command()
def validate(
    agents_md: Path = typer.Argument(..., help='AGENTS.md policy document'),
    format: str | None = typer.Option(
        None, '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
) -> None:
    """Validate AGENTS.md file structure.

    Reports missing required rules and sections, unknown code block languages,
    potentially conflicting rules, and inconsistent command examples.
    """
    result = RulesValidator().validate_file(agents_md)

    if (format or settings.OUTPUT_FORMAT) == 'json':
        typer.echo(render_validation_json(result, str(agents_md)))
    else:
        typer.echo(render_validation_text(result, str(agents_md)), nl=False)

    if not result.valid:
        raise typer.Exit(EXIT_VIOLATIONS)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
