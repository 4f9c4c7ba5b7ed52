"""
Transcript schema models.

This package contains Pydantic models for agent stream-json transcripts.
All models are in models.py.
"""

from __future__ import annotations

from agents_lint.schemas.transcript.models import (
    EVENT_TYPES,
    AssistantContentBlock,
    AssistantEvent,
    AssistantMessage,
    BaseEvent,
    BashToolInput,
    Event,
    EventEnvelope,
    OtherBlock,
    PermissionDenial,
    ResultContentBlock,
    ResultEvent,
    SystemEvent,
    TaskToolInput,
    TextBlock,
    ToolCall,
    ToolResultBlock,
    ToolUseBlock,
    Transcript,
    UnknownEvent,
    Usage,
    UserContentBlock,
    UserEvent,
    UserMessage,
    WriteToolInput,
    decode_tool_result_content,
)

__all__ = [
    'EVENT_TYPES',
    'AssistantContentBlock',
    'AssistantEvent',
    'AssistantMessage',
    'BaseEvent',
    'BashToolInput',
    'Event',
    'EventEnvelope',
    'OtherBlock',
    'PermissionDenial',
    'ResultContentBlock',
    'ResultEvent',
    'SystemEvent',
    'TaskToolInput',
    'TextBlock',
    'ToolCall',
    'ToolResultBlock',
    'ToolUseBlock',
    'Transcript',
    'UnknownEvent',
    'Usage',
    'UserContentBlock',
    'UserEvent',
    'UserMessage',
    'WriteToolInput',
    'decode_tool_result_content',
]
