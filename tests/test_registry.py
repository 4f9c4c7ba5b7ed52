"""
Tests for the checker registry and result aggregation.
"""

from __future__ import annotations

import threading
from typing import ClassVar

import pytest
from builders import assistant_text, bash_session, build, system

from agents_lint.checkers import CheckerRegistry, build_default_registry, default_registry
from agents_lint.checkers.base import Checker, CheckResult, Severity, Violation
from agents_lint.config import AgentsLintSettings
from agents_lint.exceptions import DuplicateCheckerError
from agents_lint.schemas.transcript import Transcript

ALL_CHECKER_IDS = [
    'clarifying-questions',
    'commit-after-edit',
    'context-report',
    'exponential-backoff',
    'git-branch',
    'no-todowrite',
    'parallel-worktree',
    'single-line-commit',
    'static-types',
    'user-approval',
]


class FixedChecker:
    """Checker stub that reports one violation per configured severity."""

    description: ClassVar[str] = 'Reports fixed violations'

    def __init__(self, checker_id: str, *severities: Severity) -> None:
        self.id = checker_id
        self.severities = severities
        self.calls = 0

    def check(self, transcript: Transcript) -> list[Violation]:
        self.calls += 1
        return [
            Violation(checker_id=self.id, rule='Rule 0', severity=severity, message=f'{self.id} #{n}')
            for n, severity in enumerate(self.severities)
        ]


@pytest.fixture
def transcript() -> Transcript:
    return build([system(), assistant_text('hello')])


# ==============================================================================
# Registration
# ==============================================================================


def test_duplicate_id_raises() -> None:
    registry = CheckerRegistry([FixedChecker('alpha')])

    with pytest.raises(DuplicateCheckerError, match='Checker already registered: alpha'):
        registry.register(FixedChecker('alpha'))


def test_get_all_and_ids_are_sorted() -> None:
    registry = CheckerRegistry([FixedChecker('zeta'), FixedChecker('alpha'), FixedChecker('mu')])

    assert registry.ids() == ['alpha', 'mu', 'zeta']
    assert [c.id for c in registry.get_all()] == ['alpha', 'mu', 'zeta']


def test_get_unknown_returns_none() -> None:
    registry = CheckerRegistry([FixedChecker('alpha')])

    assert registry.get('alpha') is not None
    assert registry.get('missing') is None
    assert 'alpha' in registry
    assert 'missing' not in registry


def test_clear_empties_registry() -> None:
    registry = CheckerRegistry([FixedChecker('alpha'), FixedChecker('beta')])

    registry.clear()

    assert len(registry) == 0
    assert registry.ids() == []


def test_concurrent_registration_keeps_every_checker() -> None:
    registry = CheckerRegistry()

    threads = [threading.Thread(target=registry.register, args=(FixedChecker(f'c{n:02d}'),)) for n in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert registry.ids() == [f'c{n:02d}' for n in range(20)]


# ==============================================================================
# Execution
# ==============================================================================


def test_run_all_runs_in_id_order(transcript: Transcript) -> None:
    registry = CheckerRegistry(
        [FixedChecker('beta', Severity.WARNING), FixedChecker('alpha', Severity.ERROR, Severity.INFO)]
    )

    result = registry.run_all(transcript)

    assert result.checkers_run == ['alpha', 'beta']
    assert [v.message for v in result.violations] == ['alpha #0', 'alpha #1', 'beta #0']


def test_run_by_ids_keeps_requested_order_and_skips_unknown(transcript: Transcript) -> None:
    registry = CheckerRegistry([FixedChecker('alpha', Severity.INFO), FixedChecker('beta', Severity.INFO)])

    result = registry.run_by_ids(transcript, ['beta', 'nope', 'alpha'])

    assert result.checkers_run == ['beta', 'alpha']
    assert [v.checker_id for v in result.violations] == ['beta', 'alpha']


def test_run_by_ids_with_only_unknown_ids_runs_nothing(transcript: Transcript) -> None:
    registry = CheckerRegistry([FixedChecker('alpha', Severity.ERROR)])

    result = registry.run_by_ids(transcript, ['nope'])

    assert result.checkers_run == []
    assert result.violations == []


def test_runs_are_deterministic() -> None:
    transcript = bash_session('git push origin main', 'sleep 5', 'sleep 5', 'sleep 5')
    registry = build_default_registry()

    first = registry.run_all(transcript)
    second = registry.run_all(transcript)

    assert first == second
    assert first.violations


# ==============================================================================
# Check Result
# ==============================================================================


def test_summary_counts_by_severity() -> None:
    result = CheckResult(
        violations=[
            Violation(checker_id='a', rule='r', severity=Severity.ERROR, message='m'),
            Violation(checker_id='a', rule='r', severity=Severity.WARNING, message='m'),
            Violation(checker_id='a', rule='r', severity=Severity.WARNING, message='m'),
            Violation(checker_id='a', rule='r', severity=Severity.INFO, message='m'),
        ]
    )

    assert result.summary() == (1, 2, 1)
    assert result.has_errors()


@pytest.mark.parametrize(
    ('severities', 'threshold', 'expected'),
    [
        ([], Severity.INFO, False),
        ([Severity.WARNING], Severity.ERROR, False),
        ([Severity.WARNING], Severity.WARNING, True),
        ([Severity.INFO], Severity.WARNING, False),
        ([Severity.INFO], Severity.INFO, True),
        ([Severity.ERROR], Severity.INFO, True),
    ],
    ids=['none', 'warning-vs-error', 'warning-vs-warning', 'info-vs-warning', 'info-vs-info', 'error-vs-info'],
)
def test_exceeds_threshold(severities: list[Severity], threshold: Severity, expected: bool) -> None:
    result = CheckResult(
        violations=[Violation(checker_id='a', rule='r', severity=s, message='m') for s in severities]
    )

    assert result.exceeds(threshold) is expected


def test_severity_parse_and_str() -> None:
    assert Severity.parse('warning') is Severity.WARNING
    assert str(Severity.ERROR) == 'error'
    assert Severity.INFO < Severity.WARNING < Severity.ERROR

    with pytest.raises(ValueError, match='Unknown severity'):
        Severity.parse('fatal')


# ==============================================================================
# Default Registry
# ==============================================================================


def test_default_registry_holds_every_checker() -> None:
    assert default_registry.ids() == ALL_CHECKER_IDS
    assert all(isinstance(c, Checker) for c in default_registry.get_all())
    assert all(c.description for c in default_registry.get_all())
    assert all(type(c).__doc__ for c in default_registry.get_all())


def test_build_default_registry_uses_commit_window_setting() -> None:
    registry = build_default_registry(AgentsLintSettings(COMMIT_WINDOW=3))

    commit_checker = registry.get('commit-after-edit')
    assert commit_checker is not None
    assert commit_checker.window == 3  # type: ignore[attr-defined]


def test_build_default_registry_returns_independent_registries() -> None:
    first = build_default_registry()
    second = build_default_registry()

    first.clear()

    assert second.ids() == ALL_CHECKER_IDS
