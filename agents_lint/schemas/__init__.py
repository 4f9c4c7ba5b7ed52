"""
Schema definitions for agents-lint.

This package contains Pydantic models for the data agents-lint reads:
- transcript: stream-json transcript events, tool calls and the session aggregate
"""

from __future__ import annotations

from agents_lint.schemas.types import BaseStrictModel, PermissiveModel, TranscriptModel

__all__ = [
    'BaseStrictModel',
    'PermissiveModel',
    'TranscriptModel',
]
