"""
Pydantic models for agent stream-json transcripts.

A transcript is newline-delimited JSON, one event per line, discriminated by
the top-level `type` field:

    system     - session start: session id, model, working directory, tool allowlist
    assistant  - one assistant message: text blocks and tool_use blocks
    user       - one user message: text blocks and tool_result blocks
    result     - session end: turn count, total cost, error flag, final summary

Any other `type` is preserved as an UnknownEvent holding the decoded object,
so newer agent versions still parse.

Key findings from real transcripts:
- tool_result content is either a bare string or an array of typed blocks
  (text, image, ...); only text blocks carry result text
- user message content is usually a block array, but a plain prompt may be a bare string
- tool_use input is free-form JSON; only the fields checkers read are modeled
  (see Tool Input Types below) and everything else stays raw
- a tool_use id is unique within one assistant message; its result arrives in a
  later user event and is correlated globally (see services/correlator.py)

Event order is semantically load-bearing: "final" state means the last event
of a kind, and checkers reason about which message came before which.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from typing import Annotated, Any, Literal, TypeVar

import pydantic

from agents_lint.schemas.types import PathStr, PermissiveModel, TranscriptModel

_T = TypeVar('_T', bound=PermissiveModel)


# ==============================================================================
# Content Blocks
# ==============================================================================


class TextBlock(TranscriptModel):
    """Free text content block (user or assistant)."""

    type: Literal['text']
    text: str = ''


class ToolUseBlock(TranscriptModel):
    """Tool invocation block from assistant messages."""

    type: Literal['tool_use']
    id: str = ''
    name: str = ''
    input: Any = None  # Raw JSON input, decoded per tool by checkers


class ResultContentBlock(PermissiveModel):
    """One typed block inside an array-form tool_result content."""

    type: str = ''
    text: str | None = None


_RESULT_STRING: pydantic.TypeAdapter[str] = pydantic.TypeAdapter(str, config=pydantic.ConfigDict(strict=True))
_RESULT_BLOCKS: pydantic.TypeAdapter[list[ResultContentBlock]] = pydantic.TypeAdapter(list[ResultContentBlock])


def decode_tool_result_content(raw: Any, source: str | None = None) -> str:
    """
    Decode tool_result content into plain text.

    Attempts, in order:
    1. bare string - used verbatim
    2. array of typed blocks - non-empty text blocks joined with newlines
    3. anything else - the JSON source text of the value when known, else a dump of it

    Absent content decodes to an empty string.
    """
    if raw is None:
        return ''

    try:
        return _RESULT_STRING.validate_python(raw)
    except pydantic.ValidationError:
        pass

    try:
        blocks = _RESULT_BLOCKS.validate_python(raw)
    except pydantic.ValidationError:
        return source if source is not None else json.dumps(raw, ensure_ascii=False)

    return '\n'.join(block.text for block in blocks if block.type == 'text' and block.text)


class ToolResultBlock(TranscriptModel):
    """Tool result block from user messages, referencing a tool_use id."""

    type: Literal['tool_result']
    tool_use_id: str = ''
    content: Any = None  # String, block array, or missing - see decode_tool_result_content
    is_error: bool | None = None
    content_source: str | None = None  # Set by the parser for object and scalar content

    @property
    def text(self) -> str:
        """Result text extracted from the polymorphic content field."""
        return decode_tool_result_content(self.content, self.content_source)


class OtherBlock(TranscriptModel):
    """Any content block we do not model (thinking, image, document, ...)."""

    model_config = pydantic.ConfigDict(extra='allow', frozen=True)

    type: str = ''


# NOTE: OtherBlock must be last - it accepts any `type`
AssistantContentBlock = Annotated[
    TextBlock | ToolUseBlock | OtherBlock,
    pydantic.Field(union_mode='left_to_right'),
]

UserContentBlock = Annotated[
    TextBlock | ToolResultBlock | OtherBlock,
    pydantic.Field(union_mode='left_to_right'),
]


# ==============================================================================
# Messages
# ==============================================================================


class Usage(TranscriptModel):
    """Token usage counters."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


class AssistantMessage(TranscriptModel):
    """Core message structure from the assistant."""

    id: str = ''
    model: str = ''
    role: str = 'assistant'
    content: Sequence[AssistantContentBlock] = ()
    stop_reason: str | None = None
    usage: Usage | None = None


class UserMessage(TranscriptModel):
    """Message structure from the user (prompts and tool results)."""

    role: str = 'user'
    content: str | Sequence[UserContentBlock] = ()

    @property
    def blocks(self) -> Sequence[TextBlock | ToolResultBlock | OtherBlock]:
        """Content as blocks; a bare string prompt becomes one text block."""
        if isinstance(self.content, str):
            return (TextBlock(type='text', text=self.content),)
        return self.content


# ==============================================================================
# Events
# ==============================================================================


class BaseEvent(TranscriptModel):
    """Fields shared by every transcript event."""

    type: str
    subtype: str | None = None
    session_id: str = ''
    uuid: str = ''


class SystemEvent(BaseEvent):
    """Emitted at the start of a session with configuration info."""

    type: Literal['system']
    cwd: PathStr = ''
    tools: Sequence[str] = ()
    mcp_servers: Sequence[Any] = ()
    model: str = ''
    permissionMode: str | None = None
    slash_commands: Sequence[str] = ()
    claude_code_version: str | None = None


class AssistantEvent(BaseEvent):
    """One message from the assistant."""

    type: Literal['assistant']
    message: AssistantMessage = pydantic.Field(default_factory=AssistantMessage)
    parent_tool_use_id: str | None = None

    @property
    def text(self) -> str:
        """Concatenated text blocks of this message."""
        return ''.join(block.text for block in self.message.content if isinstance(block, TextBlock))

    @property
    def tool_uses(self) -> list[ToolUseBlock]:
        """Tool invocation blocks of this message, in order."""
        return [block for block in self.message.content if isinstance(block, ToolUseBlock)]


class UserEvent(BaseEvent):
    """One message from the user - typically tool results, sometimes a prompt."""

    type: Literal['user']
    message: UserMessage = pydantic.Field(default_factory=UserMessage)
    parent_tool_use_id: str | None = None
    tool_use_result: Any = None  # Opaque tool execution metadata

    @property
    def text(self) -> str:
        """Concatenated text blocks of this message."""
        return ''.join(block.text for block in self.message.blocks if isinstance(block, TextBlock))

    @property
    def tool_results(self) -> list[ToolResultBlock]:
        """Tool result blocks of this message, in order."""
        return [block for block in self.message.blocks if isinstance(block, ToolResultBlock)]


class PermissionDenial(TranscriptModel):
    """Records when a tool call was blocked by the permission system."""

    tool_name: str = ''
    tool_use_id: str = ''
    tool_input: Any = None


class ResultEvent(BaseEvent):
    """Emitted at the end of a session with summary info."""

    type: Literal['result']
    is_error: bool = False
    duration_ms: int = 0
    duration_api_ms: int = 0
    num_turns: int = 0
    result: str = ''
    total_cost_usd: float = 0.0
    usage: Usage | None = None
    modelUsage: Mapping[str, Any] = pydantic.Field(default_factory=dict)
    permission_denials: Sequence[PermissionDenial] = ()


class UnknownEvent(BaseEvent):
    """Event with an unrecognized `type`, preserved verbatim."""

    raw: Mapping[str, Any] = pydantic.Field(default_factory=dict)


# Union of all event types (validated left-to-right)
# NOTE: UnknownEvent must be last - it accepts any `type`
Event = Annotated[
    SystemEvent | AssistantEvent | UserEvent | ResultEvent | UnknownEvent,
    pydantic.Field(union_mode='left_to_right'),
]

# Concrete model per known discriminant value
EVENT_TYPES: Mapping[str, type[BaseEvent]] = {
    'system': SystemEvent,
    'assistant': AssistantEvent,
    'user': UserEvent,
    'result': ResultEvent,
}


class EventEnvelope(TranscriptModel):
    """Just the discriminant - decoded before the full event shape."""

    type: str = ''


# ==============================================================================
# Tool Input Types (fields checkers read; everything else stays raw)
# ==============================================================================


class BashToolInput(PermissiveModel):
    """Input for Bash tool."""

    command: str = ''


class WriteToolInput(PermissiveModel):
    """Input for Write tool."""

    file_path: PathStr = ''


class TaskToolInput(PermissiveModel):
    """Input for Task tool (sub-agent delegation)."""

    subagent_type: str = ''
    prompt: str = ''


# ==============================================================================
# Tool Calls
# ==============================================================================


class ToolCall(TranscriptModel):
    """
    A tool invocation correlated with its result.

    If no later tool_result references this call, result is empty and
    is_error is False.
    """

    id: str
    name: str
    input: Any = None
    result: str = ''
    is_error: bool = False
    event_uuid: str = ''  # UUID of the assistant event containing this call

    def decode_input(self, model: type[_T]) -> _T | None:
        """Decode the raw input as `model`, or None if it does not fit."""
        try:
            return model.model_validate(self.input)
        except pydantic.ValidationError:
            return None


# ==============================================================================
# Transcript
# ==============================================================================


class Transcript(TranscriptModel):
    """A complete parsed session."""

    # Session scalars (system event)
    session_id: str = ''
    model: str = ''
    cwd: PathStr = ''
    tools: Sequence[str] = ()

    # Ordered content
    events: Sequence[Event] = ()
    tool_calls: Sequence[ToolCall] = ()

    # Session scalars (result event)
    total_cost_usd: float = 0.0
    num_turns: int = 0
    is_error: bool = False
    result: str = ''

    def assistant_events(self) -> Iterator[tuple[int, AssistantEvent]]:
        """Yield (event index, event) for each assistant event, in order."""
        for index, event in enumerate(self.events):
            if isinstance(event, AssistantEvent):
                yield index, event

    def user_events(self) -> Iterator[tuple[int, UserEvent]]:
        """Yield (event index, event) for each user event, in order."""
        for index, event in enumerate(self.events):
            if isinstance(event, UserEvent):
                yield index, event
