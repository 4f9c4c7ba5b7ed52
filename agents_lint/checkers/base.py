"""
Checker contract, violation model and result aggregation.

Every policy checker is a pure function of a Transcript:

    class MyChecker:
        id = 'my-checker'
        description = 'What this checker enforces (Rule N)'

        def check(self, transcript: Transcript) -> list[Violation]: ...

Checkers are stateless across calls; any working state lives inside one
check() invocation. No checker may depend on another checker having run.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

import pydantic

from agents_lint.schemas.transcript.models import BashToolInput, ToolCall, Transcript
from agents_lint.schemas.types import BaseStrictModel

# ==============================================================================
# Severity
# ==============================================================================


class Severity(enum.IntEnum):
    """How serious a violation is. Ordered: INFO < WARNING < ERROR."""

    INFO = 0  # Informational findings that may not be violations
    WARNING = 1  # Violations that should be addressed but aren't critical
    ERROR = 2  # Clear rule violations that must be fixed

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> Severity:
        """Parse a lowercase severity name ('info', 'warning', 'error')."""
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f'Unknown severity: {value!r} (expected error, warning or info)') from None


# ==============================================================================
# Violation
# ==============================================================================


class Violation(BaseStrictModel):
    """A single rule violation found in a transcript."""

    checker_id: str  # Id of the checker that found this violation
    rule: str  # AGENTS.md rule number or name (e.g., "Rule 6")
    severity: Severity
    message: str  # Human-readable description
    event_uuid: str | None = None  # Event where the violation occurred
    tool_call_id: str | None = None  # tool_use id, if the violation is tied to a tool call
    context: dict[str, str] = pydantic.Field(default_factory=dict)  # Extra details for debugging


# ==============================================================================
# Checker Protocol
# ==============================================================================


@runtime_checkable
class Checker(Protocol):
    """Interface all rule checkers implement."""

    @property
    def id(self) -> str:
        """Unique, stable identifier (e.g., "no-todowrite")."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what this checker validates."""
        ...

    def check(self, transcript: Transcript) -> list[Violation]:
        """Analyze a transcript and return violations in detection order."""
        ...


# ==============================================================================
# Check Result (aggregation)
# ==============================================================================


class CheckResult(BaseStrictModel):
    """Output of running a set of checkers on one transcript."""

    transcript_path: str = ''
    violations: list[Violation] = pydantic.Field(default_factory=list)
    checkers_run: list[str] = pydantic.Field(default_factory=list)

    def summary(self) -> tuple[int, int, int]:
        """Counts of violations by severity as (errors, warnings, infos)."""
        errors = sum(1 for v in self.violations if v.severity is Severity.ERROR)
        warnings = sum(1 for v in self.violations if v.severity is Severity.WARNING)
        infos = sum(1 for v in self.violations if v.severity is Severity.INFO)
        return errors, warnings, infos

    def has_errors(self) -> bool:
        """True if any error-severity violation was found."""
        return any(v.severity is Severity.ERROR for v in self.violations)

    def exceeds(self, threshold: Severity) -> bool:
        """True if any violation is at or above the threshold severity."""
        return any(v.severity >= threshold for v in self.violations)

    def with_path(self, transcript_path: str) -> CheckResult:
        """Copy of this result labeled with the transcript path."""
        return self.model_copy(update={'transcript_path': transcript_path})


# ==============================================================================
# Shared Helpers
# ==============================================================================


def truncate(text: str, max_len: int) -> str:
    """Shorten a string for display, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + '...'


def bash_commands(transcript: Transcript) -> Iterator[tuple[ToolCall, str]]:
    """Yield (tool call, command) for each Bash call whose input decodes."""
    for tool_call in transcript.tool_calls:
        if tool_call.name != 'Bash':
            continue
        bash_input = tool_call.decode_input(BashToolInput)
        if bash_input is None:
            continue
        yield tool_call, bash_input.command
