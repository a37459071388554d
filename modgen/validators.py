# File: modgen/validators.py
"""
modgen - Input Validators
==========================
Pure-function checks for what the operator typed on the command line.

The naming functions in ``modgen.utils`` accept any string; this module
decides which strings are acceptable as a module directory name or nested
path before anything touches the file system.

Usage::

    from modgen.validators import validate_nested_path
    result = validate_nested_path("admin/blog-post")
    if not result.is_valid:
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from modgen.errors import InvalidResourceNameError
from modgen.utils import has_special_characters, normalize_resource_name

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.validators")

_RESERVED_SEGMENTS: frozenset = frozenset({".", ".."})

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationIssue:
    """Lightweight issue descriptor."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationIssue`` instances."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationIssue] = []

    # -- Mutation -----------------------------------------------------------

    def add_error(self, code: str, message: str, **context: Any) -> None:
        self._items.append(ValidationIssue("error", code, message, context))

    def add_warning(self, code: str, message: str, **context: Any) -> None:
        self._items.append(ValidationIssue("warning", code, message, context))

    def add_info(self, code: str, message: str, **context: Any) -> None:
        self._items.append(ValidationIssue("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    # -- Query --------------------------------------------------------------

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.level == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.level == "warning"]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.level == "info"]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [i.code for i in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"<ValidationResult errors={len(self.errors)} "
            f"warnings={len(self.warnings)}>"
        )


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_resource_name(raw: Optional[str]) -> ValidationResult:
    """
    Check a single resource segment (no slashes allowed).

    Error codes:
        ``MISSING_NAME``   nothing (or only whitespace) was supplied
        ``PATH_SEPARATOR`` the name contains ``/`` or ``\\``
        ``RESERVED_NAME``  the name is ``.`` or ``..``
        ``NO_LETTERS``     nothing survives normalization (e.g. ``"123"``)
    """
    result = ValidationResult()

    if raw is None or not raw.strip():
        result.add_error("MISSING_NAME", "Please provide a module name.")
        return result

    if "/" in raw or "\\" in raw:
        result.add_error(
            "PATH_SEPARATOR",
            f"'{raw}' contains a path separator; use nested-resource for nested modules.",
            name=raw,
        )
        return result

    if raw in _RESERVED_SEGMENTS:
        result.add_error("RESERVED_NAME", f"'{raw}' is not a valid module name.", name=raw)
        return result

    if not any(ch.isalpha() for ch in raw):
        result.add_error(
            "NO_LETTERS",
            f"'{raw}' has no letters to build an identifier from.",
            name=raw,
        )
        return result

    if raw != raw.strip():
        result.add_warning(
            "SURROUNDING_WHITESPACE",
            f"'{raw}' has leading or trailing whitespace; it is kept in file names.",
            name=raw,
        )

    if has_special_characters(raw):
        result.add_info(
            "CAMEL_CASED",
            f"'{raw}' will be referenced in code as '{normalize_resource_name(raw)}'.",
            name=raw,
        )

    return result


def validate_nested_path(path: Optional[str]) -> ValidationResult:
    """
    Check a slash-delimited nested path such as ``admin/reports/daily``.

    Every folder segment must be non-empty and not ``.``/``..``; the final
    segment must also pass :func:`validate_resource_name`.
    """
    result = ValidationResult()

    if path is None or not path.strip():
        result.add_error("MISSING_NAME", "Please provide a module name.")
        return result

    if "\\" in path:
        result.add_error(
            "BACKSLASH",
            f"'{path}' must use '/' between folders.",
            path=path,
        )
        return result

    segments: List[str] = path.split("/")
    for index, segment in enumerate(segments):
        if not segment:
            result.add_error(
                "EMPTY_SEGMENT",
                f"'{path}' has an empty segment at position {index + 1}.",
                path=path,
            )
        elif segment in _RESERVED_SEGMENTS:
            result.add_error(
                "RESERVED_SEGMENT",
                f"'{path}' may not contain '{segment}'.",
                path=path,
            )

    if not result.is_valid:
        return result

    result.merge(validate_resource_name(segments[-1]))
    return result


def ensure_valid(result: ValidationResult, name: Optional[str]) -> None:
    """Raise ``InvalidResourceNameError`` for the first error in *result*."""
    for issue in result.warnings:
        logger.warning("%s", issue.message)
    for issue in result.infos:
        logger.info("%s", issue.message)
    if result.errors:
        raise InvalidResourceNameError(name or "", result.errors[0].message)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ValidationIssue",
    "ValidationResult",
    "validate_resource_name",
    "validate_nested_path",
    "ensure_valid",
]
