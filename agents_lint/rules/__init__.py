"""
AGENTS.md policy documents: parsing and validation.
"""

from __future__ import annotations

from agents_lint.rules.models import Example, Rule, RulesDocument, Section, ValidationIssue, ValidationResult
from agents_lint.rules.parser import normalize_id, parse_document, parse_document_file
from agents_lint.rules.validator import RulesValidator

__all__ = [
    'Example',
    'Rule',
    'RulesDocument',
    'RulesValidator',
    'Section',
    'ValidationIssue',
    'ValidationResult',
    'normalize_id',
    'parse_document',
    'parse_document_file',
]
