# File: modgen/errors.py
"""
modgen - Exception Hierarchy
=============================
Every error raised deliberately by the scaffolder derives from
``ModgenError`` so the CLI can report it without a traceback.

File-system errors (``OSError`` and subclasses) are not wrapped; a failed
write ends the invocation.
"""

from __future__ import annotations

from typing import List


class ModgenError(Exception):
    """Base class for all scaffolder errors."""


class InvalidResourceNameError(ModgenError):
    """The resource name or nested path cannot produce a valid module."""

    def __init__(self, name: str, reason: str) -> None:
        self.name: str = name
        self.reason: str = reason
        super().__init__(f"Invalid resource name '{name}': {reason}")


class TemplateError(ModgenError):
    """Unknown template id or incomplete bindings."""


class ConfigError(ModgenError):
    """The configuration file could not be loaded or validated."""


__all__: List[str] = [
    "ModgenError",
    "InvalidResourceNameError",
    "TemplateError",
    "ConfigError",
]
