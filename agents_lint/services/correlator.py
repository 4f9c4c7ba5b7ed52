"""
Tool-call correlator - matches tool_use blocks to their tool_result blocks.

Two passes over the ordered event list:
1. collect_tool_results: map tool_use id -> (result text, error flag) from every user event
2. extract_tool_calls: walk assistant events in order and build one ToolCall per tool_use block

Output order follows the order tool_use blocks appear across assistant events.
Correlation is global: a result anywhere in the transcript matches its id.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from agents_lint.schemas.transcript.models import AssistantEvent, Event, ToolCall, UserEvent


@dataclass(frozen=True)
class ToolResult:
    """Correlated result for one tool_use id."""

    text: str
    is_error: bool


def collect_tool_results(events: Sequence[Event]) -> dict[str, ToolResult]:
    """
    Map tool_use ids to their results.

    Blocks without a tool_use_id are ignored. If the same id is answered
    twice, the later result wins.
    """
    results: dict[str, ToolResult] = {}

    for event in events:
        if not isinstance(event, UserEvent):
            continue

        for block in event.tool_results:
            if not block.tool_use_id:
                continue
            results[block.tool_use_id] = ToolResult(text=block.text, is_error=bool(block.is_error))

    return results


def extract_tool_calls(events: Sequence[Event], results: dict[str, ToolResult]) -> tuple[ToolCall, ...]:
    """
    Build the ordered ToolCall list from assistant events.

    A tool_use with no matching result gets an empty result and is_error=False.
    """
    calls: list[ToolCall] = []

    for event in events:
        if not isinstance(event, AssistantEvent):
            continue

        for block in event.tool_uses:
            result = results.get(block.id)
            calls.append(
                ToolCall(
                    id=block.id,
                    name=block.name,
                    input=block.input,
                    result=result.text if result else '',
                    is_error=result.is_error if result else False,
                    event_uuid=event.uuid,
                )
            )

    return tuple(calls)


def correlate(events: Sequence[Event]) -> tuple[ToolCall, ...]:
    """Run both correlation passes over an event list."""
    return extract_tool_calls(events, collect_tool_results(events))
