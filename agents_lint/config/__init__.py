"""
Configuration for agents-lint.

Exposes the lazily loaded settings singleton.
"""

from __future__ import annotations

from agents_lint.config.base import AgentsLintSettings, check_settings, get_settings, lazy_settings, settings

__all__ = [
    'AgentsLintSettings',
    'check_settings',
    'get_settings',
    'lazy_settings',
    'settings',
]
