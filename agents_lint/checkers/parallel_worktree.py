"""
parallel-worktree - parallel agents work in their own worktree (Rule 8).

A Task spawn is reported unless a `git worktree add` ran earlier in the
session. Read-only and configuration sub-agents are exempt.
"""

from __future__ import annotations

from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation
from agents_lint.schemas.transcript.models import BashToolInput, TaskToolInput, Transcript

WORKTREE_SETUP = 'git worktree add'

EXEMPT_AGENT_TYPES = frozenset(
    {
        'Explore',  # Read-only exploration
        'Plan',  # Planning only
        'claude-code-guide',  # Documentation lookup
        'statusline-setup',  # Configuration only
    }
)


class ParallelWorktreeChecker:
    """Flags Task sub-agents spawned before any `git worktree add`."""

    id: ClassVar[str] = 'parallel-worktree'
    description: ClassVar[str] = 'Ensures parallel agents use git worktrees (Rule 8)'

    def check(self, transcript: Transcript) -> list[Violation]:
        violations: list[Violation] = []
        worktree_created = False

        for tool_call in transcript.tool_calls:
            if tool_call.name == 'Bash':
                bash_input = tool_call.decode_input(BashToolInput)
                if bash_input is not None and WORKTREE_SETUP in bash_input.command:
                    worktree_created = True

            elif tool_call.name == 'Task':
                task_input = tool_call.decode_input(TaskToolInput)
                if task_input is None or task_input.subagent_type in EXEMPT_AGENT_TYPES:
                    continue
                if worktree_created:
                    continue

                violations.append(
                    Violation(
                        checker_id=self.id,
                        rule='Rule 8',
                        severity=Severity.WARNING,
                        message='Parallel agent spawned without git worktree; use `git worktree add` before spawning agents',
                        event_uuid=tool_call.event_uuid or None,
                        tool_call_id=tool_call.id or None,
                    )
                )

        return violations
