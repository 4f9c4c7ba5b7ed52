"""
Tests for text and JSON rendering of check and validation results.
"""

from __future__ import annotations

import json

import pytest

from agents_lint.checkers.base import CheckResult, Severity, Violation
from agents_lint.rules.models import ValidationIssue, ValidationResult
from agents_lint.services.report import render_json, render_text, render_validation_json, render_validation_text


@pytest.fixture
def result() -> CheckResult:
    return CheckResult(
        transcript_path='runs/session.ndjson',
        checkers_run=['git-branch', 'no-todowrite'],
        violations=[
            Violation(
                checker_id='git-branch',
                rule='Rule 3',
                severity=Severity.ERROR,
                message='Direct push to main/master branch; use feature branch + PR instead',
                event_uuid='evt-7',
                tool_call_id='toolu_7',
                context={'command': 'git push origin main'},
            ),
            Violation(
                checker_id='no-todowrite',
                rule='Rule 2',
                severity=Severity.WARNING,
                message='Something to address',
            ),
        ],
    )


# ==============================================================================
# JSON
# ==============================================================================


def test_json_report_shape(result: CheckResult) -> None:
    report = json.loads(render_json(result))

    assert report == {
        'file': 'runs/session.ndjson',
        'checkers_run': ['git-branch', 'no-todowrite'],
        'violations': [
            {
                'checker_id': 'git-branch',
                'rule': 'Rule 3',
                'severity': 'error',
                'message': 'Direct push to main/master branch; use feature branch + PR instead',
                'event_uuid': 'evt-7',
                'tool_call_id': 'toolu_7',
                'context': {'command': 'git push origin main'},
            },
            {
                'checker_id': 'no-todowrite',
                'rule': 'Rule 2',
                'severity': 'warning',
                'message': 'Something to address',
            },
        ],
        'summary': {'errors': 1, 'warnings': 1, 'infos': 0},
    }


def test_json_report_is_indented(result: CheckResult) -> None:
    assert render_json(result).startswith('{\n  "file": "runs/session.ndjson"')


def test_json_report_without_violations_keeps_empty_list() -> None:
    report = json.loads(render_json(CheckResult(transcript_path='a.ndjson', checkers_run=['git-branch'])))

    assert report['violations'] == []
    assert report['summary'] == {'errors': 0, 'warnings': 0, 'infos': 0}


# ==============================================================================
# Text
# ==============================================================================


def test_text_report(result: CheckResult) -> None:
    assert render_text(result) == (
        '[ERROR] Rule 3: Direct push to main/master branch; use feature branch + PR instead\n'
        '[WARNING] Rule 2: Something to address\n'
        '\n'
        'runs/session.ndjson: 1 errors, 1 warnings, 0 info\n'
    )


def test_verbose_text_report(result: CheckResult) -> None:
    assert render_text(result, verbose=True) == (
        '[ERROR] Rule 3: Direct push to main/master branch; use feature branch + PR instead\n'
        '  Tool call: toolu_7\n'
        '  command: git push origin main\n'
        '[WARNING] Rule 2: Something to address\n'
        '\n'
        'Checkers run: git-branch, no-todowrite\n'
        '\n'
        'runs/session.ndjson: 1 errors, 1 warnings, 0 info\n'
    )


def test_text_report_without_violations() -> None:
    clean = CheckResult(transcript_path='clean.ndjson', checkers_run=['git-branch'])

    assert render_text(clean) == '\nclean.ndjson: 0 errors, 0 warnings, 0 info\n'


# ==============================================================================
# Validation
# ==============================================================================


@pytest.fixture
def validation() -> ValidationResult:
    return ValidationResult(
        valid=False,
        issues=[
            ValidationIssue(severity='error', rule='rule-3', message='Required rule missing: Rule 3'),
            ValidationIssue(severity='warning', message='Unknown code block language: cobol'),
        ],
    )


def test_validation_json(validation: ValidationResult) -> None:
    report = json.loads(render_validation_json(validation, 'AGENTS.md'))

    assert report == {
        'valid': False,
        'file': 'AGENTS.md',
        'errors': [
            {'severity': 'error', 'rule': 'rule-3', 'message': 'Required rule missing: Rule 3'},
            {'severity': 'warning', 'message': 'Unknown code block language: cobol'},
        ],
        'summary': {'errors': 1, 'warnings': 1, 'infos': 0},
    }


def test_validation_text(validation: ValidationResult) -> None:
    assert render_validation_text(validation, 'AGENTS.md') == (
        '[ERROR] rule-3: Required rule missing: Rule 3\n'
        '[WARNING] Unknown code block language: cobol\n'
        '\n'
        'AGENTS.md: 1 errors, 1 warnings, 0 info\n'
        'Validation failed\n'
    )


def test_validation_text_passed() -> None:
    assert render_validation_text(ValidationResult(valid=True), 'AGENTS.md') == (
        '\nAGENTS.md: 0 errors, 0 warnings, 0 info\nValidation passed\n'
    )
