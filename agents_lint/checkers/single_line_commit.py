"""
single-line-commit - commit messages are one line (Commit Message Format).

A git commit built from a heredoc is always reported. Otherwise the quoted
argument of the first `-m` is scanned (honoring backslash escapes) and
reported if it spans several lines.
"""

from __future__ import annotations

import re
from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation, bash_commands, truncate
from agents_lint.schemas.transcript.models import Transcript

GIT_COMMIT_PATTERN = re.compile(r'git\s+commit')
HEREDOC_PATTERN = re.compile(r'''<<['"]?EOF['"]?|<<-['"]?EOF['"]?|\$\(cat <<''')


def has_multiline_message(command: str) -> bool:
    """True if the first quoted `-m` message contains a newline."""
    start = command.find('-m ')
    if start == -1:
        start = command.find('-m"')
        if start == -1:
            return False

    rest = command[start + 2 :].lstrip(' ')
    if not rest or rest[0] not in '"\'':
        return False

    quote = rest[0]
    escaped = False
    for position in range(1, len(rest)):
        char = rest[position]
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char == quote:
            return '\n' in rest[1:position]

    # Unterminated quote
    return False


class SingleLineCommitChecker:
    """Flags heredoc commits and multi-line `-m` messages."""

    id: ClassVar[str] = 'single-line-commit'
    description: ClassVar[str] = 'Ensures git commits use single-line messages (Commit Message Format)'

    def check(self, transcript: Transcript) -> list[Violation]:
        violations: list[Violation] = []

        for tool_call, command in bash_commands(transcript):
            if not GIT_COMMIT_PATTERN.search(command):
                continue

            if HEREDOC_PATTERN.search(command):
                message = 'Git commit uses heredoc format; use single-line -m "message" instead'
            elif has_multiline_message(command):
                message = 'Git commit message contains newlines; use single-line format'
            else:
                continue

            violations.append(
                Violation(
                    checker_id=self.id,
                    rule='Commit Message Format',
                    severity=Severity.ERROR,
                    message=message,
                    event_uuid=tool_call.event_uuid or None,
                    tool_call_id=tool_call.id or None,
                    context={'command': truncate(command, 100)},
                )
            )

        return violations
