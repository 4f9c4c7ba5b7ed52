"""
Transcript parser service - NDJSON decoding into a typed Transcript.

Each non-empty line is decoded in two steps: first only the `type`
discriminant, then the full concrete event shape. Session scalars are taken
from the system event (id, model, cwd, tools) and the result event (cost,
turns, error flag, summary). Tool calls are correlated once all events are read.

Parsing fails fast: empty input or the first malformed line raises
TranscriptParseError carrying the line number.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pydantic

from agents_lint.exceptions import TranscriptParseError, TranscriptReadError
from agents_lint.protocols import LoggerProtocol, NullLogger
from agents_lint.schemas.transcript.models import (
    EVENT_TYPES,
    BaseEvent,
    EventEnvelope,
    ResultEvent,
    SystemEvent,
    Transcript,
    UnknownEvent,
)
from agents_lint.services.correlator import correlate

logger = logging.getLogger(__name__)

_JSON_DECODER = json.JSONDecoder()
_WHITESPACE = re.compile(r'[ \t\n\r]*')


# ==============================================================================
# Parsing Functions
# ==============================================================================


def parse_file(path: str | Path) -> Transcript:
    """
    Read and parse an NDJSON transcript file.

    Raises:
        TranscriptReadError: If the file cannot be read
        TranscriptParseError: If the content is empty or malformed
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise TranscriptReadError(str(file_path), e.strerror or str(e)) from e

    return parse_bytes(data)


def parse_bytes(data: bytes | str) -> Transcript:
    """
    Parse NDJSON transcript content.

    Blank lines are skipped; line numbers in errors count non-empty lines only.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise TranscriptParseError(f'transcript is not valid UTF-8: {e}') from e
    else:
        text = data

    lines = [line for line in text.split('\n') if line.strip()]
    return parse_lines(lines)


def parse_lines(lines: Sequence[str]) -> Transcript:
    """Parse individual NDJSON lines into a Transcript."""
    if not lines:
        raise TranscriptParseError('empty transcript')

    events: list[BaseEvent] = []
    scalars: dict[str, Any] = {}

    for line_number, line in enumerate(lines, 1):
        event = decode_event(line, line_number)

        if isinstance(event, SystemEvent):
            scalars.update(session_id=event.session_id, model=event.model, cwd=event.cwd, tools=tuple(event.tools))
        elif isinstance(event, ResultEvent):
            scalars.update(
                total_cost_usd=event.total_cost_usd,
                num_turns=event.num_turns,
                is_error=event.is_error,
                result=event.result,
            )

        events.append(event)

    tool_calls = correlate(events)
    logger.debug(f'Parsed {len(events)} events with {len(tool_calls)} tool calls')

    return Transcript(events=tuple(events), tool_calls=tool_calls, **scalars)


def decode_event(line: str, line_number: int) -> BaseEvent:
    """
    Decode one NDJSON line into its concrete event model.

    Unknown event types are kept as UnknownEvent with the decoded object.

    Raises:
        TranscriptParseError: If the line is not a JSON object or does not fit its event shape
    """
    try:
        raw = json.loads(line)
    except json.JSONDecodeError as e:
        raise TranscriptParseError(f'parse event type: {e}', line_number) from e

    try:
        envelope = EventEnvelope.model_validate(raw)
    except pydantic.ValidationError as e:
        raise TranscriptParseError(f'parse event type: expected an object with a string "type" ({e})', line_number) from e

    event_model = EVENT_TYPES.get(envelope.type)
    if event_model is None:
        return UnknownEvent(type=envelope.type, raw=raw)

    attach_result_sources(line, raw)

    try:
        return event_model.model_validate(raw)
    except pydantic.ValidationError as e:
        raise TranscriptParseError(f'parse {envelope.type} event: {e}', line_number) from e


# ==============================================================================
# Tool Result Source Text
# ==============================================================================


def attach_result_sources(line: str, raw: dict[str, Any]) -> None:
    """
    Record the JSON source text of tool_result content that is not a string.

    Object, scalar and untyped array content is reported as written in the
    transcript, so the text comes from the line rather than a re-encoding of
    the decoded value. Stored under `content_source` on each block dict.
    """
    message = raw.get('message')
    if not isinstance(message, dict) or not isinstance(message.get('content'), list):
        return

    blocks = message['content']
    for block in blocks:
        if isinstance(block, dict) and block.get('type') == 'tool_result':
            block.pop('content_source', None)
    if not any(_has_structured_content(block) for block in blocks):
        return

    message_span = _member_span(line, _skip(line, 0), 'message')
    if message_span is None:
        return
    content_span = _member_span(line, message_span[0], 'content')
    if content_span is None:
        return

    for block, (start, _end) in zip(blocks, _array_items(line, content_span[0]), strict=True):
        if _has_structured_content(block):
            span = _member_span(line, start, 'content')
            if span is not None:
                block['content_source'] = line[span[0] : span[1]]


def _has_structured_content(block: object) -> bool:
    return (
        isinstance(block, dict)
        and block.get('type') == 'tool_result'
        and block.get('content') is not None
        and not isinstance(block.get('content'), str)
    )


def _skip(s: str, idx: int) -> int:
    return _WHITESPACE.match(s, idx).end()


def _value_end(s: str, idx: int) -> int:
    return _JSON_DECODER.raw_decode(s, idx)[1]


def _object_members(s: str, idx: int) -> Iterator[tuple[str, int, int]]:
    """Yield (key, start, end) for each member value of the object opening at s[idx]."""
    idx = _skip(s, idx + 1)
    if s[idx] == '}':
        return
    while True:
        key, idx = json.decoder.scanstring(s, idx + 1)
        start = _skip(s, _skip(s, idx) + 1)
        end = _value_end(s, start)
        yield key, start, end
        idx = _skip(s, end)
        if s[idx] == '}':
            return
        idx = _skip(s, idx + 1)


def _array_items(s: str, idx: int) -> Iterator[tuple[int, int]]:
    """Yield (start, end) for each item of the array opening at s[idx]."""
    idx = _skip(s, idx + 1)
    if s[idx] == ']':
        return
    while True:
        end = _value_end(s, idx)
        yield idx, end
        idx = _skip(s, end)
        if s[idx] == ']':
            return
        idx = _skip(s, idx + 1)


def _member_span(s: str, idx: int, key: str) -> tuple[int, int] | None:
    """Span of the member value named key, or None. A repeated key resolves to its last occurrence."""
    if s[idx] != '{':
        return None
    span = None
    for name, start, end in _object_members(s, idx):
        if name == key:
            span = (start, end)
    return span


# ==============================================================================
# Transcript Parser Service
# ==============================================================================


class TranscriptParserService:
    """
    Service for loading transcript files with progress logging.

    Wraps parse_file for callers that report progress through a LoggerProtocol.
    """

    def load_transcript(self, path: Path, logger: LoggerProtocol | None = None) -> Transcript:
        """
        Load and parse one transcript file.

        Args:
            path: NDJSON transcript path
            logger: Logger instance (defaults to NullLogger)

        Returns:
            Parsed, correlated Transcript
        """
        log = logger or NullLogger()
        log.info(f'Loading {path.name}')

        transcript = parse_file(path)

        log.info(f'Loaded {len(transcript.events)} events, {len(transcript.tool_calls)} tool calls from {path.name}')
        return transcript
