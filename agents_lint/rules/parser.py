"""
AGENTS.md parser - markdown policy document into RulesDocument.

The document is split on H2 headings. `Rule N: Title` headings become
numbered rules; other sections become un-numbered rules when they state
MUST/ALWAYS/NEVER behaviors, and plain sections otherwise. Behavior lines are
only read outside fenced code.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from pathlib import Path

import attrs

from agents_lint.exceptions import RulesDocumentError
from agents_lint.rules.models import Example, Rule, RulesDocument, Section

logger = logging.getLogger(__name__)

H1_PATTERN = re.compile(r'^#\s+(.+)$')
H2_PATTERN = re.compile(r'^##\s+(.+)$')
RULE_HEADING_PATTERN = re.compile(r'^Rule\s+(\d+):\s+(.+)$')

FENCE_OPEN_PATTERN = re.compile(r'^```(\w*)')
FENCE_CLOSE_PATTERN = re.compile(r'^```\s*$')

BOLD_PATTERN = re.compile(r'\*\*([^*]+)\*\*')
NEVER_PATTERN = re.compile(r'\bNEVER\b', re.IGNORECASE)
MUST_PATTERN = re.compile(r'\bMUST\b|\*\*[^*]*must[^*]*\*\*', re.IGNORECASE)
ALWAYS_PATTERN = re.compile(r'\bALWAYS\b|\*\*[^*]*always[^*]*\*\*', re.IGNORECASE)

CORRECT_MARKER = '✅'
INCORRECT_MARKER = '❌'

NUMBERED_STEP_PATTERN = re.compile(r'^(\d+)\.\s+(.+)$')
SLUG_SEPARATOR_PATTERN = re.compile(r'[^a-z0-9]+')

MIN_BEHAVIOR_LENGTH = 10


@attrs.define
class _RawSection:
    heading: str
    lines: list[str] = attrs.field(factory=list)


# ==============================================================================
# Public API
# ==============================================================================


def parse_document_file(path: str | Path) -> RulesDocument:
    """
    Read and parse an AGENTS.md file.

    Raises:
        RulesDocumentError: If the file cannot be read
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise RulesDocumentError(str(file_path), str(e)) from e

    document = parse_document(text)
    logger.debug(f'Parsed {file_path.name}: {len(document.rules)} rules, {len(document.sections)} sections')
    return document


def parse_document(text: str | Sequence[str]) -> RulesDocument:
    """Parse markdown text (or its lines) into a RulesDocument."""
    lines = text.splitlines() if isinstance(text, str) else list(text)

    title = next((m.group(1) for m in map(H1_PATTERN.match, lines) if m), '')
    rules: list[Rule] = []
    sections: list[Section] = []

    for raw in _split_by_h2(lines):
        if not raw.lines:
            continue

        heading = raw.heading
        content = '\n'.join(raw.lines)
        required, prohibited = extract_behaviors(raw.lines)

        rule_match = RULE_HEADING_PATTERN.match(heading)
        if rule_match:
            number = int(rule_match.group(1))
            rules.append(
                Rule(
                    id=f'rule-{number}',
                    number=number,
                    title=rule_match.group(2),
                    raw_title=heading,
                    description=content,
                    required=required,
                    prohibited=prohibited,
                    examples=extract_examples(raw.lines),
                )
            )
        elif required or prohibited:
            rules.append(
                Rule(
                    id=normalize_id(heading),
                    title=heading,
                    raw_title=heading,
                    description=content,
                    required=required,
                    prohibited=prohibited,
                    examples=extract_examples(raw.lines),
                )
            )
        else:
            sections.append(Section(title=heading, content=content, steps=extract_steps(raw.lines)))

    return RulesDocument(title=title, rules=rules, sections=sections)


def normalize_id(title: str) -> str:
    """Slugify a heading: lowercase, runs of non-alphanumerics become '-'."""
    return SLUG_SEPARATOR_PATTERN.sub('-', title.lower()).strip('-')


# ==============================================================================
# Section Content Extraction
# ==============================================================================


def _split_by_h2(lines: Sequence[str]) -> list[_RawSection]:
    """Group lines under their H2 heading; lines before the first H2 are dropped."""
    sections: list[_RawSection] = []

    for line in lines:
        heading = H2_PATTERN.match(line)
        if heading:
            sections.append(_RawSection(heading.group(1)))
        elif sections:
            sections[-1].lines.append(line)

    return sections


def _prose_lines(lines: Sequence[str]) -> Iterator[str]:
    """Yield lines that are outside fenced code blocks."""
    in_fence = False
    for line in lines:
        if in_fence:
            if FENCE_CLOSE_PATTERN.match(line):
                in_fence = False
            continue
        if FENCE_OPEN_PATTERN.match(line):
            in_fence = True
            continue
        yield line


def _behavior_text(line: str) -> str:
    """Strip bold markers and whitespace; too-short text is not a behavior."""
    text = BOLD_PATTERN.sub(r'\1', line).strip()
    return text if len(text) >= MIN_BEHAVIOR_LENGTH else ''


def extract_behaviors(lines: Sequence[str]) -> tuple[list[str], list[str]]:
    """Return (required, prohibited) behavior statements from prose lines."""
    required: list[str] = []
    prohibited: list[str] = []

    for line in _prose_lines(lines):
        if NEVER_PATTERN.search(line):
            behavior = _behavior_text(line)
            if behavior:
                prohibited.append(behavior)

        if MUST_PATTERN.search(line) or ALWAYS_PATTERN.search(line):
            behavior = _behavior_text(line)
            if behavior:
                required.append(behavior)

    return required, prohibited


def extract_examples(lines: Sequence[str]) -> list[Example]:
    """Collect fenced code blocks with their language and ✅/❌ markers."""
    examples: list[Example] = []
    language: str | None = None
    code_lines: list[str] = []

    for line in lines:
        if language is None:
            fence = FENCE_OPEN_PATTERN.match(line)
            if fence:
                language = fence.group(1)
                code_lines = []
            continue

        if FENCE_CLOSE_PATTERN.match(line):
            code = '\n'.join(code_lines)
            examples.append(
                Example(
                    language=language,
                    code=code,
                    is_correct=CORRECT_MARKER in code,
                    is_incorrect=INCORRECT_MARKER in code,
                )
            )
            language = None
            continue

        code_lines.append(line)

    return examples


def extract_steps(lines: Sequence[str]) -> list[str]:
    """Text of each `N. step` line, in order."""
    return [m.group(2) for m in map(NUMBERED_STEP_PATTERN.match, lines) if m]
