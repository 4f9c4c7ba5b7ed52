"""git-branch - work lands through feature branches, not main (Rule 3)."""

from __future__ import annotations

import re
from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation, bash_commands, truncate
from agents_lint.schemas.transcript.models import Transcript

FORCE_PUSH_MAIN_PATTERN = re.compile(r'git\s+push\s+.*(-f|--force).*origin\s+(main|master)\b')
PUSH_MAIN_PATTERN = re.compile(r'git\s+push\s+(-[^\s]+\s+)*origin\s+(main|master)\b')


class GitBranchChecker:
    """Flags pushes to main/master; a force push is reported instead of the plain push."""

    id: ClassVar[str] = 'git-branch'
    description: ClassVar[str] = 'Ensures proper git branch workflow (Rule 3: no direct commits to main)'

    def check(self, transcript: Transcript) -> list[Violation]:
        violations: list[Violation] = []

        for tool_call, command in bash_commands(transcript):
            if FORCE_PUSH_MAIN_PATTERN.search(command):
                message = 'Force push to main/master branch detected; this is extremely dangerous'
            elif PUSH_MAIN_PATTERN.search(command):
                message = 'Direct push to main/master branch; use feature branch + PR instead'
            else:
                continue

            violations.append(
                Violation(
                    checker_id=self.id,
                    rule='Rule 3',
                    severity=Severity.ERROR,
                    message=message,
                    event_uuid=tool_call.event_uuid or None,
                    tool_call_id=tool_call.id or None,
                    context={'command': truncate(command, 100)},
                )
            )

        return violations
