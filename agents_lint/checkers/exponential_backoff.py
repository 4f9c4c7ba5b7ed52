"""
exponential-backoff - monitoring loops must back off (Rule 7).

Collects every `sleep N` in Bash commands together with the command that
preceded it. Three or more sleeps that all follow the same command form a
monitoring loop. A loop with a constant delay is reported on its third sleep;
otherwise the first decrease is reported, except between two delays already
at the cap.
"""

from __future__ import annotations

import re
from typing import ClassVar

import attrs

from agents_lint.checkers.base import Severity, Violation, truncate
from agents_lint.schemas.transcript.models import BashToolInput, ToolCall, Transcript

SLEEP_PATTERN = re.compile(r'\bsleep\s+(\d+)')

# Commands that typically poll a process or resource
MONITORING_PREFIXES = (
    'kubectl get',
    'kubectl describe',
    'docker ps',
    'docker logs',
    'git status',
    'ps aux',
    'tail -f',
)

BACKOFF_CAP_SECONDS = 60
MIN_LOOP_SLEEPS = 3

_SCHEDULE = '(5s → 10s → 20s → 40s → 60s cap)'


def is_monitoring_command(command: str) -> bool:
    """True if the command polls: a known monitoring command or a BashOutput check."""
    return command == 'BashOutput' or command.startswith(MONITORING_PREFIXES)


@attrs.define(frozen=True)
class SleepCall:
    """One sleep found in a Bash command."""

    duration: int
    tool_call: ToolCall
    preceding_command: str


def collect_sleeps(transcript: Transcript) -> list[SleepCall]:
    """Extract sleeps in order, each paired with the command that preceded it."""
    sleeps: list[SleepCall] = []
    last_command = ''

    for tool_call in transcript.tool_calls:
        if tool_call.name == 'BashOutput':
            last_command = 'BashOutput'
            continue
        if tool_call.name != 'Bash':
            continue

        bash_input = tool_call.decode_input(BashToolInput)
        if bash_input is None:
            continue
        command = bash_input.command

        match = SLEEP_PATTERN.search(command)
        if match:
            # A sleep with nothing before it is its own signature
            sleeps.append(SleepCall(int(match.group(1)), tool_call, last_command or command))

        last_command = command

    return sleeps


class ExponentialBackoffChecker:
    """Flags constant or decreasing sleeps inside a monitoring loop."""

    id: ClassVar[str] = 'exponential-backoff'
    description: ClassVar[str] = 'Ensures monitoring loops use exponential backoff (Rule 7)'

    def check(self, transcript: Transcript) -> list[Violation]:
        sleeps = collect_sleeps(transcript)
        if len(sleeps) < MIN_LOOP_SLEEPS:
            return []

        # Divergent preceding commands mean these sleeps are not one loop
        if len({sleep.preceding_command for sleep in sleeps}) > 1:
            return []

        durations = [sleep.duration for sleep in sleeps]
        if len(set(durations)) == 1:
            return [
                self._violation(
                    sleeps[2],
                    sleeps,
                    f'Monitoring loop detected with constant sleep; use exponential backoff {_SCHEDULE}',
                )
            ]

        for previous, current in zip(sleeps, sleeps[1:]):
            if previous.duration >= BACKOFF_CAP_SECONDS and current.duration >= BACKOFF_CAP_SECONDS:
                continue
            if current.duration < previous.duration:
                return [
                    self._violation(
                        current,
                        sleeps,
                        f'Sleep duration decreased; exponential backoff should increase {_SCHEDULE}',
                    )
                ]

        return []

    def _violation(self, sleep: SleepCall, sleeps: list[SleepCall], message: str) -> Violation:
        command = sleep.preceding_command
        return Violation(
            checker_id=self.id,
            rule='Rule 7',
            severity=Severity.WARNING,
            message=message,
            event_uuid=sleep.tool_call.event_uuid or None,
            tool_call_id=sleep.tool_call.id or None,
            context={
                'command': truncate(command, 100),
                'polling': str(is_monitoring_command(command)).lower(),
                'sleeps': ', '.join(f'{s.duration}s' for s in sleeps),
            },
        )
