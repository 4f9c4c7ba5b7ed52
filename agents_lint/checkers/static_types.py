"""
static-types - new code is TypeScript, not JavaScript (Rule 9).

Only files created with the Write tool are considered. Tool configuration
files (`*.config.js`, `*rc.js`, dotfiles) are exempt since their tools
expect JavaScript.
"""

from __future__ import annotations

import posixpath
from typing import ClassVar

from agents_lint.checkers.base import Severity, Violation
from agents_lint.schemas.transcript.models import Transcript, WriteToolInput

# JavaScript extension -> suggested TypeScript extension
TYPED_ALTERNATIVES = {'.js': '.ts', '.jsx': '.tsx'}

CONFIG_FILE_SUFFIXES = ('.config.js', '.config.mjs', '.config.cjs', 'rc.js', 'rc.mjs', 'rc.cjs')


def is_config_file(file_path: str) -> bool:
    """True for JavaScript files that configure tooling (e.g. vite.config.js, .eslintrc.js)."""
    base = posixpath.basename(file_path)
    if base.endswith(CONFIG_FILE_SUFFIXES):
        return True
    return base.startswith('.') and base.endswith('.js')


def file_extension(file_path: str) -> str:
    """Lowercased suffix from the last dot of the file name ('.jsx' for a file named '.jsx')."""
    base = posixpath.basename(file_path)
    dot = base.rfind('.')
    return base[dot:].lower() if dot != -1 else ''


class StaticTypesChecker:
    """Flags JavaScript source files created with the Write tool."""

    id: ClassVar[str] = 'static-types'
    description: ClassVar[str] = 'Ensures new code uses TypeScript instead of JavaScript (Rule 9)'

    def check(self, transcript: Transcript) -> list[Violation]:
        violations: list[Violation] = []

        for tool_call in transcript.tool_calls:
            if tool_call.name != 'Write':
                continue
            write_input = tool_call.decode_input(WriteToolInput)
            if write_input is None:
                continue

            extension = file_extension(write_input.file_path)
            suggestion = TYPED_ALTERNATIVES.get(extension)
            if suggestion is None or is_config_file(write_input.file_path):
                continue

            violations.append(
                Violation(
                    checker_id=self.id,
                    rule='Rule 9',
                    severity=Severity.WARNING,
                    message=f'Creating {extension} file; prefer {suggestion} for type safety',
                    event_uuid=tool_call.event_uuid or None,
                    tool_call_id=tool_call.id or None,
                )
            )

        return violations
