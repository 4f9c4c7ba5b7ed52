"""
Shared type definitions for schemas.

Centralizes the base models used across transcript, checker and rules schemas.

Layering:
- This module provides FOUNDATION models (BaseStrictModel, PermissiveModel, TranscriptModel)
- Domain packages (transcript/, checkers/, rules/) import from here
"""

from __future__ import annotations

from typing import TypeAlias

import pydantic

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model for values agents-lint produces itself.

    Uses extra='forbid' to reject unknown fields - any field not modeled
    causes immediate validation failure (fail-fast). Violations, check results
    and parsed rules documents all inherit from this.
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# Permissive Model (Foundation)
# ==============================================================================


class PermissiveModel(pydantic.BaseModel):
    """
    Foundation permissive model for typed views over loosely shaped JSON.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - PermissiveModel: extra='allow' (accepts unknown fields)

    Used for tool inputs, where only the fields a checker reads are modeled:

        class BashToolInput(PermissiveModel):
            command: str

    Known fields are still strictly typed, so {"command": 42} fails validation.
    """

    model_config = pydantic.ConfigDict(
        extra='allow',  # Accept unknown fields (graceful fallback)
        strict=True,  # Strict type coercion for known fields
        frozen=True,  # Immutable after creation
    )

    def get_extra_fields(self) -> dict[str, object]:
        """Get extra fields captured by this permissive model."""
        return dict(self.__pydantic_extra__) if self.__pydantic_extra__ else {}


# ==============================================================================
# Transcript Model (Foundation)
# ==============================================================================


class TranscriptModel(pydantic.BaseModel):
    """
    Foundation model for records decoded from agent transcripts.

    Transcripts are produced by a tool we do not control, and new fields
    appear between releases. Unknown fields are dropped rather than rejected
    so that a newer agent version still parses; the fields checkers depend on
    are modeled explicitly.
    """

    model_config = pydantic.ConfigDict(
        extra='ignore',  # Forward compatibility with newer transcript fields
        frozen=True,  # Transcripts are immutable once parsed
    )


# ==============================================================================
# Primitive Types
# ==============================================================================

PathStr: TypeAlias = str
"""A filesystem path (file or directory) as a string."""
