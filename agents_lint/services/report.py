"""
Report rendering - text and JSON views of check and validation results.

JSON reports are built from pydantic models so the wire shape is declared in
one place; optional fields that are empty are omitted.
"""

from __future__ import annotations

from agents_lint.checkers.base import CheckResult, Violation
from agents_lint.rules.models import ValidationResult
from agents_lint.schemas.types import BaseStrictModel

# ==============================================================================
# JSON Report Models
# ==============================================================================


class ViolationReport(BaseStrictModel):
    checker_id: str
    rule: str
    severity: str  # Lowercase severity name
    message: str
    event_uuid: str | None = None
    tool_call_id: str | None = None
    context: dict[str, str] | None = None

    @classmethod
    def from_violation(cls, violation: Violation) -> ViolationReport:
        return cls(
            checker_id=violation.checker_id,
            rule=violation.rule,
            severity=str(violation.severity),
            message=violation.message,
            event_uuid=violation.event_uuid or None,
            tool_call_id=violation.tool_call_id or None,
            context=dict(violation.context) or None,
        )


class SummaryReport(BaseStrictModel):
    errors: int
    warnings: int
    infos: int


class CheckReport(BaseStrictModel):
    """Machine-readable report for one transcript."""

    file: str
    checkers_run: list[str]
    violations: list[ViolationReport]
    summary: SummaryReport

    @classmethod
    def from_result(cls, result: CheckResult) -> CheckReport:
        errors, warnings, infos = result.summary()
        return cls(
            file=result.transcript_path,
            checkers_run=list(result.checkers_run),
            violations=[ViolationReport.from_violation(v) for v in result.violations],
            summary=SummaryReport(errors=errors, warnings=warnings, infos=infos),
        )


# ==============================================================================
# Renderers
# ==============================================================================


def render_json(result: CheckResult) -> str:
    """Render a result as indented JSON."""
    return CheckReport.from_result(result).model_dump_json(indent=2, exclude_none=True)


def render_text(result: CheckResult, verbose: bool = False) -> str:
    """
    Render a result for humans.

    One `[SEVERITY] rule: message` line per violation, then a summary line.
    Verbose output adds tool call ids, context pairs and the checkers run.
    """
    lines: list[str] = []

    for violation in result.violations:
        lines.append(f'[{str(violation.severity).upper()}] {violation.rule}: {violation.message}')
        if verbose:
            if violation.tool_call_id:
                lines.append(f'  Tool call: {violation.tool_call_id}')
            for key, value in violation.context.items():
                lines.append(f'  {key}: {value}')

    if verbose:
        lines.append('')
        lines.append(f'Checkers run: {", ".join(result.checkers_run)}')

    errors, warnings, infos = result.summary()
    lines.append('')
    lines.append(f'{result.transcript_path}: {errors} errors, {warnings} warnings, {infos} info')

    return '\n'.join(lines) + '\n'


# ==============================================================================
# Policy Document Validation
# ==============================================================================


class IssueReport(BaseStrictModel):
    severity: str
    rule: str | None = None
    message: str


class ValidationReport(BaseStrictModel):
    """Machine-readable report for one AGENTS.md validation."""

    valid: bool
    file: str
    errors: list[IssueReport]  # Every issue, whatever its severity
    summary: SummaryReport

    @classmethod
    def from_result(cls, result: ValidationResult, path: str) -> ValidationReport:
        errors, warnings, infos = result.summary()
        return cls(
            valid=result.valid,
            file=path,
            errors=[
                IssueReport(severity=issue.severity, rule=issue.rule or None, message=issue.message)
                for issue in result.issues
            ],
            summary=SummaryReport(errors=errors, warnings=warnings, infos=infos),
        )


def render_validation_json(result: ValidationResult, path: str) -> str:
    """Render a validation result as indented JSON."""
    return ValidationReport.from_result(result, path).model_dump_json(indent=2, exclude_none=True)


def render_validation_text(result: ValidationResult, path: str) -> str:
    """Render a validation result for humans, ending with a pass/fail verdict."""
    lines: list[str] = []

    for issue in result.issues:
        severity = issue.severity.upper()
        if issue.rule:
            lines.append(f'[{severity}] {issue.rule}: {issue.message}')
        else:
            lines.append(f'[{severity}] {issue.message}')

    errors, warnings, infos = result.summary()
    lines.append('')
    lines.append(f'{path}: {errors} errors, {warnings} warnings, {infos} info')
    lines.append('Validation passed' if result.valid else 'Validation failed')

    return '\n'.join(lines) + '\n'
