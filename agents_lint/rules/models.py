"""
Models for a parsed AGENTS.md policy document and its validation report.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

import pydantic

from agents_lint.schemas.types import BaseStrictModel

IssueSeverity: TypeAlias = Literal['error', 'warning', 'info']


# ==============================================================================
# Document
# ==============================================================================


class Example(BaseStrictModel):
    """A fenced code example inside a rule section."""

    language: str = ''  # Fence info string, '' when unspecified
    code: str = ''
    is_correct: bool = False  # Marked with ✅
    is_incorrect: bool = False  # Marked with ❌


class Rule(BaseStrictModel):
    """
    A policy rule.

    Numbered rules come from `## Rule N: Title` headings and have id `rule-N`.
    Un-numbered rules are other sections that state MUST/ALWAYS/NEVER
    behaviors; their id is the slugified heading and number is 0.
    """

    id: str
    number: int = 0
    title: str
    raw_title: str  # Heading text as written
    description: str = ''  # Section body
    required: list[str] = pydantic.Field(default_factory=list)
    prohibited: list[str] = pydantic.Field(default_factory=list)
    examples: list[Example] = pydantic.Field(default_factory=list)


class Section(BaseStrictModel):
    """A non-rule section such as 'Landing the Plane'."""

    title: str
    content: str = ''
    steps: list[str] = pydantic.Field(default_factory=list)  # Text of `N. step` lines


class RulesDocument(BaseStrictModel):
    """A parsed AGENTS.md file."""

    title: str = ''  # First H1 heading
    rules: list[Rule] = pydantic.Field(default_factory=list)
    sections: list[Section] = pydantic.Field(default_factory=list)

    def get_rule_by_id(self, rule_id: str) -> Rule | None:
        return next((rule for rule in self.rules if rule.id == rule_id), None)

    def get_rule_by_number(self, number: int) -> Rule | None:
        return next((rule for rule in self.rules if rule.number == number), None)

    def get_section(self, title: str) -> Section | None:
        return next((section for section in self.sections if section.title == title), None)


# ==============================================================================
# Validation
# ==============================================================================


class ValidationIssue(BaseStrictModel):
    """One finding about a policy document."""

    severity: IssueSeverity
    rule: str = ''  # Rule id, rule label or section title the issue concerns
    message: str


class ValidationResult(BaseStrictModel):
    """Outcome of validating a policy document. Valid means no error-level issues."""

    valid: bool
    issues: list[ValidationIssue] = pydantic.Field(default_factory=list)
    document: RulesDocument | None = None

    def summary(self) -> tuple[int, int, int]:
        """Counts of issues as (errors, warnings, infos)."""
        errors = sum(1 for issue in self.issues if issue.severity == 'error')
        warnings = sum(1 for issue in self.issues if issue.severity == 'warning')
        infos = sum(1 for issue in self.issues if issue.severity == 'info')
        return errors, warnings, infos
