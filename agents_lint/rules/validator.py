"""
AGENTS.md validator - structural and consistency checks on a RulesDocument.

Checks, in order:
1. Required numbered rules are present (error)
2. Required sections are present, as a section or an un-numbered rule (error)
3. Example code blocks use a known language (warning)
4. No behavior required by one rule shares a significant word with one
   prohibited by another (warning)
5. bd commands shown in examples also appear in Rule 2's examples (info)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

import attrs

from agents_lint.exceptions import RulesDocumentError
from agents_lint.rules.models import RulesDocument, ValidationIssue, ValidationResult
from agents_lint.rules.parser import normalize_id, parse_document_file

DEFAULT_REQUIRED_RULES = (1, 2, 3, 4, 5, 6)
DEFAULT_REQUIRED_SECTIONS = ('Landing the Plane',)
DEFAULT_LANGUAGES = frozenset(
    {
        '',  # No language specified
        'bash',
        'sh',
        'go',
        'python',
        'javascript',
        'typescript',
        'json',
        'yaml',
        'markdown',
        'sql',
        'rust',
        'kotlin',
    }
)
DEFAULT_COMMANDS = frozenset({'bd', 'git', 'gh', 'go', 'npm', 'cargo'})

COMMAND_PATTERN = re.compile(r'\b([a-z]+)\s+[a-z]')
MIN_OVERLAP_WORD_LENGTH = 4


def words_overlap(a: str, b: str) -> bool:
    """True if a word of at least 4 characters in `a` also appears in `b` (case-insensitive)."""
    words_b = {word.casefold() for word in b.split()}
    return any(len(word) >= MIN_OVERLAP_WORD_LENGTH and word.casefold() in words_b for word in a.split())


@attrs.define(frozen=True)
class RulesValidator:
    """Validates a policy document against a configurable baseline."""

    required_rules: tuple[int, ...] = DEFAULT_REQUIRED_RULES
    required_sections: tuple[str, ...] = DEFAULT_REQUIRED_SECTIONS
    valid_languages: frozenset[str] = DEFAULT_LANGUAGES
    known_commands: frozenset[str] = DEFAULT_COMMANDS

    def validate_file(self, path: str | Path) -> ValidationResult:
        """Parse and validate a file; a read failure becomes a single error issue."""
        try:
            document = parse_document_file(path)
        except RulesDocumentError as e:
            return ValidationResult(
                valid=False,
                issues=[ValidationIssue(severity='error', message=f'Failed to parse file: {e.reason}')],
            )

        return self.validate(document)

    def validate(self, document: RulesDocument) -> ValidationResult:
        issues = [
            *self._check_required_rules(document),
            *self._check_required_sections(document),
            *self._check_code_blocks(document),
            *self._check_conflicts(document),
            *self._check_commands(document),
        ]
        valid = not any(issue.severity == 'error' for issue in issues)
        return ValidationResult(valid=valid, issues=issues, document=document)

    def _check_required_rules(self, document: RulesDocument) -> Iterable[ValidationIssue]:
        for number in self.required_rules:
            if document.get_rule_by_number(number) is None:
                yield ValidationIssue(
                    severity='error',
                    rule=f'Rule {number}',
                    message=f'Required Rule {number} is missing',
                )

    def _check_required_sections(self, document: RulesDocument) -> Iterable[ValidationIssue]:
        for title in self.required_sections:
            # A section that states behaviors is parsed as an un-numbered rule
            if document.get_section(title) or document.get_rule_by_id(normalize_id(title)):
                continue
            yield ValidationIssue(
                severity='error',
                rule=title,
                message=f"Required section '{title}' is missing",
            )

    def _check_code_blocks(self, document: RulesDocument) -> Iterable[ValidationIssue]:
        for rule in document.rules:
            for example in rule.examples:
                if example.language not in self.valid_languages:
                    yield ValidationIssue(
                        severity='warning',
                        rule=rule.id,
                        message=f'Unknown code block language: "{example.language}"',
                    )

    def _check_conflicts(self, document: RulesDocument) -> Iterable[ValidationIssue]:
        # Lowercased behavior -> id of the rule stating it (last one wins)
        required: dict[str, str] = {}
        prohibited: dict[str, str] = {}
        for rule in document.rules:
            required.update((behavior.lower(), rule.id) for behavior in rule.required)
            prohibited.update((behavior.lower(), rule.id) for behavior in rule.prohibited)

        for required_text, required_rule in required.items():
            for prohibited_text, prohibited_rule in prohibited.items():
                if required_rule != prohibited_rule and words_overlap(required_text, prohibited_text):
                    yield ValidationIssue(
                        severity='warning',
                        rule=required_rule,
                        message=f'Potential conflict: {required_rule} requires something {prohibited_rule} prohibits',
                    )

    def _check_commands(self, document: RulesDocument) -> Iterable[ValidationIssue]:
        # Command -> ids of rules whose examples use it
        usage: dict[str, list[str]] = {}
        for rule in document.rules:
            for example in rule.examples:
                for match in COMMAND_PATTERN.finditer(example.code):
                    command = match.group(1)
                    if command in self.known_commands:
                        usage.setdefault(command, []).append(rule.id)

        if 'bd' in usage and 'rule-2' not in usage['bd']:
            yield ValidationIssue(
                severity='info',
                rule='rule-2',
                message="bd command used in examples but Rule 2 doesn't have bd examples",
            )
