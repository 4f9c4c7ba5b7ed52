"""
Policy checkers and the default registry.

build_default_registry is the single place checkers are registered; callers
that want a different set build their own CheckerRegistry.
"""

from __future__ import annotations

import lazy_object_proxy

from agents_lint.checkers.base import Checker, CheckResult, Severity, Violation
from agents_lint.checkers.clarifying_questions import ClarifyingQuestionsChecker
from agents_lint.checkers.commit_after_edit import CommitAfterEditChecker
from agents_lint.checkers.context_report import ContextReportChecker
from agents_lint.checkers.exponential_backoff import ExponentialBackoffChecker
from agents_lint.checkers.git_branch import GitBranchChecker
from agents_lint.checkers.no_todowrite import NoTodoWriteChecker
from agents_lint.checkers.parallel_worktree import ParallelWorktreeChecker
from agents_lint.checkers.registry import CheckerRegistry
from agents_lint.checkers.single_line_commit import SingleLineCommitChecker
from agents_lint.checkers.static_types import StaticTypesChecker
from agents_lint.checkers.user_approval import UserApprovalChecker
from agents_lint.config import AgentsLintSettings, settings as default_settings

__all__ = [
    'CheckResult',
    'Checker',
    'CheckerRegistry',
    'ClarifyingQuestionsChecker',
    'CommitAfterEditChecker',
    'ContextReportChecker',
    'ExponentialBackoffChecker',
    'GitBranchChecker',
    'NoTodoWriteChecker',
    'ParallelWorktreeChecker',
    'Severity',
    'SingleLineCommitChecker',
    'StaticTypesChecker',
    'UserApprovalChecker',
    'Violation',
    'build_default_registry',
    'default_registry',
]


def build_default_registry(settings: AgentsLintSettings | None = None) -> CheckerRegistry:
    """Create a registry holding every built-in checker."""
    config = settings or default_settings

    return CheckerRegistry(
        [
            NoTodoWriteChecker(),
            GitBranchChecker(),
            UserApprovalChecker(),
            ContextReportChecker(),
            CommitAfterEditChecker(window=config.COMMIT_WINDOW),
            ExponentialBackoffChecker(),
            ParallelWorktreeChecker(),
            StaticTypesChecker(),
            SingleLineCommitChecker(),
            ClarifyingQuestionsChecker(),
        ]
    )


# Module-level registry (built on first access)
default_registry: CheckerRegistry = lazy_object_proxy.Proxy(build_default_registry)
