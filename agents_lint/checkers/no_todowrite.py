"""no-todowrite - task tracking goes through bd, never TodoWrite (Rule 2)."""

from __future__ import annotations

from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation
from agents_lint.schemas.transcript.models import Transcript

DISALLOWED_TOOL = 'TodoWrite'


class NoTodoWriteChecker:
    """Flags every TodoWrite tool call."""

    id: ClassVar[str] = 'no-todowrite'
    description: ClassVar[str] = 'Ensures TodoWrite tool is never used (Rule 2: use bd instead)'

    def check(self, transcript: Transcript) -> list[Violation]:
        return [
            Violation(
                checker_id=self.id,
                rule='Rule 2',
                severity=Severity.ERROR,
                message='TodoWrite tool used; use bd for task tracking instead',
                event_uuid=tool_call.event_uuid or None,
                tool_call_id=tool_call.id or None,
            )
            for tool_call in transcript.tool_calls
            if tool_call.name == DISALLOWED_TOOL
        ]
