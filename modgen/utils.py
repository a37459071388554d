# File: modgen/utils.py
"""
modgen - Utility Functions & Helpers
=====================================
Naming-case transformations, relative-import arithmetic and file I/O helpers
used throughout the scaffolding pipeline.

Naming rules:
- A resource name made only of letters is simply lowercased. Letters are
  whatever ``str.isalpha`` accepts, so ``café`` and ``straße`` stay whole.
- Anything else (digits, punctuation, whitespace, symbols) is treated as a
  word separator and the remaining words are joined camelCase.
- The string-conversion functions are ``lru_cache``'d; they are pure and get
  called once per template binding.
"""

from __future__ import annotations

import functools
import itertools
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.utils")

# Shared helpers in the generated project sit this many levels above a
# flat module directory (src/modules/<name>/ -> project src/).
BASE_IMPORT_DEPTH: int = 2


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


def has_special_characters(name: str) -> bool:
    """Return True if *name* contains anything other than letters."""
    return not all(ch.isalpha() for ch in name)


@functools.lru_cache(maxsize=None)
def _split_words(name: str) -> Tuple[str, ...]:
    """Split on every run of non-letters, dropping empty edge words."""
    return tuple(
        "".join(run)
        for is_letter, run in itertools.groupby(name, key=str.isalpha)
        if is_letter
    )


@functools.lru_cache(maxsize=None)
def to_camel_case(name: str) -> str:
    """
    Convert any string to camelCase, treating non-letters as separators.

    Examples:
        >>> to_camel_case("blog-post")
        'blogPost'
        >>> to_camel_case("__ORDER items 2__")
        'orderItems'
        >>> to_camel_case("v2api")
        'vApi'
    """
    words: Tuple[str, ...] = _split_words(name)
    if not words:
        return ""
    first: str = words[0].lower()
    rest: str = "".join(w[0].upper() + w[1:].lower() for w in words[1:])
    return first + rest


def capitalize(name: str) -> str:
    """
    Uppercase the first character only.

    Unlike ``str.capitalize`` the remaining characters are left untouched,
    so ``capitalize("blogPost") == "BlogPost"``.
    """
    if not name:
        return ""
    return name[0].upper() + name[1:]


@functools.lru_cache(maxsize=None)
def normalize_resource_name(name: str) -> str:
    """
    Produce the identifier used for variables and imports.

    Plain alphabetic names are lowercased; everything else is camelCased.
    The result is letters-only and empty when *name* contains no letters.
    """
    if not has_special_characters(name):
        return name.lower()
    return to_camel_case(name)


# ---------------------------------------------------------------------------
# Relative import helpers
# ---------------------------------------------------------------------------


def import_depth(nested_count: int) -> int:
    """Number of ``..`` steps from a module directory back to ``src/``."""
    if nested_count < 0:
        raise ValueError(f"nested_count must be >= 0, got {nested_count}")
    return nested_count + BASE_IMPORT_DEPTH


def relative_import_prefix(depth: int) -> str:
    """
    Build the relative import prefix for *depth* parent steps.

    Example:
        >>> relative_import_prefix(4)
        '../../../..'
    """
    return "/".join([".."] * depth)


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def _target_mode(path: Path) -> int:
    """Permission bits for *path*: kept when it exists, else 0o666 minus umask."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    mask: int = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path* and return the number of bytes written.

    When *atomic* is True the data goes to a temporary sibling file which is
    then renamed over the target, so a crash never leaves half a file. The
    temporary file gets the mode a plain write would have produced.
    Errors propagate to the caller.
    """
    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


def format_relative_path(path: Path, root: Path) -> str:
    """
    Render *path* relative to *root* with forward slashes.

    Falls back to the absolute path when *path* lives outside *root*.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "BASE_IMPORT_DEPTH",
    "has_special_characters",
    "to_camel_case",
    "capitalize",
    "normalize_resource_name",
    "import_depth",
    "relative_import_prefix",
    "ensure_directory",
    "write_file",
    "format_relative_path",
]
