"""
commit-after-edit - file edits must be followed by a git commit (Rule 6).

Tracks pending edits across the ordered tool-call list. A commit clears every
pending edit. Any other call ages the pending edits; an edit older than the
window is reported once and dropped. Edits still pending when the transcript
ends are reported as uncommitted.
"""

from __future__ import annotations

import re
from typing import ClassVar

import attrs

from agents_lint.checkers.base import Severity, Violation
from agents_lint.schemas.transcript.models import BashToolInput, Transcript

EDIT_TOOLS = frozenset({'Edit', 'Write', 'NotebookEdit'})
GIT_COMMIT_PATTERN = re.compile(r'git\s+commit')

DEFAULT_WINDOW = 15


@attrs.define(frozen=True)
class _PendingEdit:
    tool_call_id: str
    event_uuid: str
    tool_name: str
    index: int


@attrs.define(frozen=True)
class CommitAfterEditChecker:
    """Reports edits not committed within `window` subsequent tool calls."""

    id: ClassVar[str] = 'commit-after-edit'
    description: ClassVar[str] = 'Ensures file edits are followed by git commits (Rule 6)'

    window: int = attrs.field(default=DEFAULT_WINDOW, validator=attrs.validators.ge(1))

    def check(self, transcript: Transcript) -> list[Violation]:
        violations: list[Violation] = []
        pending: list[_PendingEdit] = []

        for index, tool_call in enumerate(transcript.tool_calls):
            if tool_call.name in EDIT_TOOLS:
                pending.append(_PendingEdit(tool_call.id, tool_call.event_uuid, tool_call.name, index))
                continue

            if tool_call.name == 'Bash':
                bash_input = tool_call.decode_input(BashToolInput)
                if bash_input is None:
                    continue
                if GIT_COMMIT_PATTERN.search(bash_input.command):
                    pending.clear()
                    continue

            expired = [edit for edit in pending if index - edit.index > self.window]
            for edit in expired:
                violations.append(
                    self._violation(
                        edit,
                        'File edit not followed by git commit within reasonable window',
                        {
                            'tool': edit.tool_name,
                            'calls_since': str(index - edit.index),
                            'max_calls': str(self.window),
                        },
                    )
                )
            pending = [edit for edit in pending if edit not in expired]

        for edit in pending:
            violations.append(self._violation(edit, 'File edit not committed by end of session', {'tool': edit.tool_name}))

        return violations

    def _violation(self, edit: _PendingEdit, message: str, context: dict[str, str]) -> Violation:
        return Violation(
            checker_id=self.id,
            rule='Rule 6',
            severity=Severity.WARNING,
            message=message,
            event_uuid=edit.event_uuid or None,
            tool_call_id=edit.tool_call_id or None,
            context=context,
        )
