"""context-report - the final response reports context usage (Rule 5)."""

from __future__ import annotations

import re
from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation
from agents_lint.schemas.transcript.models import TextBlock, Transcript

CONTEXT_PATTERN = re.compile(r'Context:\s*\d+%\s*used')


class ContextReportChecker:
    """Checks the last non-empty assistant text block for `Context: NN% used`."""

    id: ClassVar[str] = 'context-report'
    description: ClassVar[str] = 'Ensures context usage is reported (Rule 5)'

    def check(self, transcript: Transcript) -> list[Violation]:
        last_text = ''
        last_uuid = ''

        for _, event in transcript.assistant_events():
            for block in event.message.content:
                if isinstance(block, TextBlock) and block.text:
                    last_text = block.text
                    last_uuid = event.uuid

        if not last_text or CONTEXT_PATTERN.search(last_text):
            return []

        return [
            Violation(
                checker_id=self.id,
                rule='Rule 5',
                severity=Severity.WARNING,
                message='Final response missing context usage report (Context: XX% used)',
                event_uuid=last_uuid or None,
            )
        ]
