"""
agents-lint: policy compliance checks for AI coding agent transcripts.

Parses NDJSON stream-json transcripts and runs a registry of policy checkers
against them. See agents_lint.cli.main for the command-line entry point.
"""

from __future__ import annotations

__version__ = '0.1.0'
