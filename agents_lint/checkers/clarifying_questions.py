"""
clarifying-questions - ask before implementing complex tasks (Rule 13).

A user message that matches a complex-task pattern opens a task. The assistant
messages after it are scanned in order: a question (in text or via the
AskUserQuestion tool) satisfies the rule, while implementation language or an
edit tool before any question is a violation.
"""

from __future__ import annotations

import re
from typing import ClassVar

import attrs

from agents_lint.checkers.base import Severity, Violation, truncate
from agents_lint.schemas.transcript.models import AssistantEvent, Transcript


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


COMPLEX_TASK_PATTERNS = _compile(
    r'add\s+(user\s+)?authentication',
    r'implement\s+.*(feature|system|module)',
    r'refactor\s+',
    r'optimize\s+',
    r'improve\s+(the\s+)?performance',
    r'add\s+(a\s+)?new\s+(feature|endpoint|api)',
    r'build\s+(a\s+)?(new\s+)?\w+\s*(feature|system|module)',
    r'create\s+(a\s+)?(new\s+)?\w+\s*(feature|system|module|service)',
    r'integrate\s+',
    r'migrate\s+',
    r'redesign\s+',
    r'add\s+.*\s+to\s+(this|the)\s+(app|application|project)',
)

QUESTION_PATTERNS = _compile(
    r'before\s+i\s+(start|begin|implement|proceed)',
    r'i\s+have\s+(a\s+few|some)\s+questions',
    r'which\s+(approach|method|option|library)',
    r'should\s+(i|we|it)\s+.*\?',
    r'would\s+you\s+(like|prefer)',
    r'do\s+you\s+(want|prefer|need)',
    r'what\s+(should|would)\s+.*\?',
    r'could\s+you\s+clarify',
    r'a\s+few\s+(clarifying\s+)?questions',
    r'option\s+(a|1|one).*option\s+(b|2|two)',
)

IMPLEMENTATION_PATTERNS = _compile(
    r'let\s+me\s+(start|begin|create|implement|write)',
    r"i('ll|'m\s+going\s+to)\s+(start|begin|create|implement|write)",
    r'i\s+will\s+(now\s+)?(start|begin|create|implement|write)',
    r'creating\s+(the|a)\s+',
    r'implementing\s+',
    r"i've\s+(created|implemented|added|written)",
    r'^starting\s+(the|to)\s+',
    r"now\s+i('ll|'m\s+going\s+to)\s+(start|begin|create|implement|write)",
)

ASK_TOOL = 'AskUserQuestion'
IMPLEMENTATION_TOOLS = frozenset({'Write', 'Edit', 'NotebookEdit'})


def _matches_any(patterns: tuple[re.Pattern[str], ...], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def is_complex_task(text: str) -> bool:
    """True if a user request reads like a complex or ambiguous task."""
    return _matches_any(COMPLEX_TASK_PATTERNS, text)


@attrs.define(frozen=True)
class AssistantTurn:
    """Classification of one assistant message."""

    index: int
    uuid: str
    asks: bool
    implements: bool

    @classmethod
    def classify(cls, index: int, event: AssistantEvent) -> AssistantTurn:
        text = event.text
        tool_names = {block.name for block in event.tool_uses}
        return cls(
            index=index,
            uuid=event.uuid,
            asks=ASK_TOOL in tool_names or _matches_any(QUESTION_PATTERNS, text),
            implements=bool(tool_names & IMPLEMENTATION_TOOLS) or _matches_any(IMPLEMENTATION_PATTERNS, text),
        )


class ClarifyingQuestionsChecker:
    """Flags implementation of a complex task that starts before any question."""

    id: ClassVar[str] = 'clarifying-questions'
    description: ClassVar[str] = 'Ensures clarifying questions are asked before complex/ambiguous tasks (Rule 13)'

    def check(self, transcript: Transcript) -> list[Violation]:
        tasks = [(index, event.text) for index, event in transcript.user_events() if is_complex_task(event.text)]
        if not tasks:
            return []

        turns = [AssistantTurn.classify(index, event) for index, event in transcript.assistant_events()]

        violations: list[Violation] = []
        for task_index, task_text in tasks:
            for turn in turns:
                if turn.index <= task_index:
                    continue
                if turn.asks:
                    break
                if turn.implements:
                    violations.append(
                        Violation(
                            checker_id=self.id,
                            rule='Rule 13',
                            severity=Severity.WARNING,
                            message='Started implementing complex task without asking clarifying questions',
                            event_uuid=turn.uuid or None,
                            context={'task': truncate(task_text, 100)},
                        )
                    )
                    break

        return violations
