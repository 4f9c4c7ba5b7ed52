"""
Base configuration for agents-lint.

Settings are read from AGENTS_LINT_* environment variables, optionally from a
.env file named by LOAD_ENV_FILE. CLI options default to these values.
"""

from __future__ import annotations

import os
import pathlib
from typing import Literal, TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

from agents_lint.exceptions import ConfigurationError

T = TypeVar('T', bound='AgentsLintSettings')


class AgentsLintSettings(pydantic_settings.BaseSettings):
    """Configuration shared by the CLI and the default checker registry."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='AGENTS_LINT_',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown settings in .env files
    )

    # Application metadata
    APP_NAME: str = 'agents-lint'
    VERSION: str = '0.1.0'

    # commit-after-edit: tool calls allowed between an edit and its commit
    COMMIT_WINDOW: int = 15

    # CLI defaults
    FAIL_ON: Literal['error', 'warning', 'info'] = 'error'
    OUTPUT_FORMAT: Literal['text', 'json'] = 'text'

    @pydantic.field_validator('COMMIT_WINDOW')
    @classmethod
    def validate_commit_window(cls, v: int) -> int:
        """Validate the commit window is a positive number of tool calls."""
        if v < 1:
            raise ValueError('COMMIT_WINDOW must be at least 1')
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Args:
        settings_class: Settings class to instantiate

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))


# Module-level singleton (lazy-loaded)
settings = lazy_settings(AgentsLintSettings)


def check_settings() -> AgentsLintSettings:
    """
    Resolve the lazy settings singleton.

    The proxy retries its factory on every access until it succeeds, so a
    failure here leaves nothing half-initialized.

    Raises:
        ConfigurationError: If an AGENTS_LINT_* value is invalid or the .env file is missing
    """
    try:
        return settings.__wrapped__
    except (pydantic.ValidationError, FileNotFoundError) as e:
        raise ConfigurationError(str(e)) from e
