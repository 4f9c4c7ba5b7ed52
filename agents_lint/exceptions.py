"""
Shared exceptions for agents-lint.

Domain-specific exceptions used across services.

Exception Hierarchy:
    AgentsLintError (base)
    ├── TranscriptError (transcript loading failures)
    │   ├── TranscriptReadError (file could not be read)
    │   └── TranscriptParseError (empty input or malformed line)
    ├── CheckerRegistryError (registry misuse)
    │   └── DuplicateCheckerError (two checkers share an id)
    ├── RulesDocumentError (AGENTS.md could not be read)
    └── ConfigurationError (invalid AGENTS_LINT_* settings or missing .env file)
"""

from __future__ import annotations


class AgentsLintError(Exception):
    """Base exception for all agents-lint errors."""


class TranscriptError(AgentsLintError):
    """Base exception for transcript loading failures."""


class TranscriptReadError(TranscriptError):
    """Raised when a transcript file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Cannot read transcript {path}: {reason}')


class TranscriptParseError(TranscriptError):
    """Raised when transcript content is empty or a line cannot be decoded.

    line_number is 1-based over the non-empty lines, or None for empty input.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        self.detail = message
        if line_number is None:
            super().__init__(message)
        else:
            super().__init__(f'line {line_number}: {message}')


class CheckerRegistryError(AgentsLintError):
    """Base exception for checker registry misuse."""


class DuplicateCheckerError(CheckerRegistryError):
    """Raised when a checker id is registered twice.

    This is a programmer error surfaced while populating the registry,
    before any checker runs.
    """

    def __init__(self, checker_id: str) -> None:
        self.checker_id = checker_id
        super().__init__(f'Checker already registered: {checker_id}')


class RulesDocumentError(AgentsLintError):
    """Raised when an AGENTS.md policy document cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Cannot read rules document {path}: {reason}')


class ConfigurationError(AgentsLintError):
    """Raised when settings cannot be loaded from the environment or .env file."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f'Invalid configuration: {reason}')
