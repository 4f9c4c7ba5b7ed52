"""
user-approval - ask before claiming a bead issue (Rule 4).

Marking an issue in progress (`bd update <id> --status in_progress`) must be
preceded by an assistant message asking the user for approval.
"""

from __future__ import annotations

import re
from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation, bash_commands, truncate
from agents_lint.schemas.transcript.models import Transcript

BD_IN_PROGRESS_PATTERN = re.compile(r'bd\s+update\s+\S+\s+--status\s+in_progress')

APPROVAL_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r'proceed\s*\?',
        r'\[yes/no\]',
        r'ready\s+to\s+work\s+on',
        r'shall\s+i\s+(start|begin|proceed)',
        r'would\s+you\s+like\s+me\s+to',
        r'should\s+i\s+(start|begin|proceed)',
    )
)


def requests_approval(text: str) -> bool:
    """True if an assistant message asks the user to approve starting work."""
    return any(pattern.search(text) for pattern in APPROVAL_PATTERNS)


class UserApprovalChecker:
    """Flags `bd update ... --status in_progress` without a prior approval request."""

    id: ClassVar[str] = 'user-approval'
    description: ClassVar[str] = 'Ensures user approval is requested before working on bead issues (Rule 4)'

    def check(self, transcript: Transcript) -> list[Violation]:
        messages = [(index, event.text) for index, event in transcript.assistant_events() if event.text]

        # tool_use id -> index of the assistant event that issued it (first occurrence)
        issued_at: dict[str, int] = {}
        for index, event in transcript.assistant_events():
            for block in event.tool_uses:
                issued_at.setdefault(block.id, index)

        violations: list[Violation] = []
        for tool_call, command in bash_commands(transcript):
            if not BD_IN_PROGRESS_PATTERN.search(command):
                continue

            call_index = issued_at.get(tool_call.id, -1)
            if any(requests_approval(text) for index, text in messages if index < call_index):
                continue

            violations.append(
                Violation(
                    checker_id=self.id,
                    rule='Rule 4',
                    severity=Severity.WARNING,
                    message='Started work on bead issue without requesting user approval',
                    event_uuid=tool_call.event_uuid or None,
                    tool_call_id=tool_call.id or None,
                    context={'command': truncate(command, 100)},
                )
            )

        return violations
