# File: modgen/models.py
"""
modgen - Core Data Models
==========================
Pydantic V2 models for everything the scaffolder reasons about: the resource
identifier and its case variants, the target module directory, the four
expected file roles, the reconciliation states and the user configuration.

None of these objects outlive a single CLI invocation.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

from modgen.utils import (
    capitalize,
    import_depth as compute_import_depth,
    normalize_resource_name,
    relative_import_prefix,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.models")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_MODULES_DIR: str = "src/modules"
DEFAULT_API_PREFIX: str = "/api/v1"
DEFAULT_CONFIG_FILENAME: str = ".modgen.yaml"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FileRole(str, Enum):
    """The four files every resource module consists of (in write order)."""

    CONTROLLER = "controller"
    ROUTE = "route"
    SERVICE = "service"
    VALIDATION = "validation"

    def filename(self, resource: str) -> str:
        """``<resource>.<role>.ts``"""
        return f"{resource}.{self.value}.ts"


class ModuleState(str, Enum):
    """Outcome of comparing the expected file set against the disk."""

    NOT_FOUND = "not_found"
    COMPLETE = "complete"
    PARTIAL = "partial"
    EMPTY = "empty"


class ResolutionMode(str, Enum):
    """How the operator chose to fill in a partially present module."""

    ONE_BY_ONE = "one_by_one"
    CREATE_ALL = "create_all"

    @classmethod
    def from_answer(cls, answer: str) -> Optional["ResolutionMode"]:
        """
        Map a free-text prompt answer to a mode.

        ``yes``/``y`` selects per-file confirmation, ``create``/``c`` creates
        everything. Anything else returns None.
        """
        normalized: str = answer.strip().lower()
        if normalized in ("yes", "y"):
            return cls.ONE_BY_ONE
        if normalized in ("create", "c"):
            return cls.CREATE_ALL
        return None


# ---------------------------------------------------------------------------
# Resource identifier
# ---------------------------------------------------------------------------


class ResourceName(BaseModel):
    """
    A resource name and its derived case variants.

    ``raw`` is kept verbatim because it names the module directory, the
    generated files and the URL segments. ``identifier`` and ``capitalized``
    go into TypeScript variable, function and type names.
    """

    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., min_length=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def identifier(self) -> str:
        return normalize_resource_name(self.raw)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def capitalized(self) -> str:
        return capitalize(self.identifier)

    def __repr__(self) -> str:
        return f"<ResourceName {self.raw!r} -> {self.identifier!r}>"


# ---------------------------------------------------------------------------
# Module target
# ---------------------------------------------------------------------------


class ModuleTarget(BaseModel):
    """Where a resource module lives and how it reaches shared helpers."""

    model_config = ConfigDict(frozen=True)

    resource: ResourceName
    nested_folders: List[str] = Field(default_factory=list)
    directory: Path

    @computed_field  # type: ignore[prop-decorator]
    @property
    def import_depth(self) -> int:
        return compute_import_depth(len(self.nested_folders))

    @property
    def import_prefix(self) -> str:
        """``../..`` style prefix from the module directory to ``src/``."""
        return relative_import_prefix(self.import_depth)

    @property
    def route_base(self) -> str:
        """API path the module's router is expected to be mounted under."""
        segments: List[str] = [*self.nested_folders, self.resource.raw]
        return f"{DEFAULT_API_PREFIX}/" + "/".join(segments)

    def file_path(self, role: FileRole) -> Path:
        return self.directory / role.filename(self.resource.raw)

    def __repr__(self) -> str:
        return f"<ModuleTarget {self.directory} depth={self.import_depth}>"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ScaffoldConfig(BaseModel):
    """
    Scaffolder settings.

    Built from defaults, then an optional ``.modgen.yaml`` file, then CLI
    flags (later layers win).
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    project_root: Path = Field(default_factory=Path.cwd)
    modules_dir: str = Field(
        default=DEFAULT_MODULES_DIR,
        description="Modules root, relative to the project root.",
    )
    color: bool = Field(default=True, description="Colourise console output.")
    update_only: bool = Field(
        default=False,
        description="Never create module directories; a missing one is reported.",
    )
    assume_create_all: bool = Field(
        default=False,
        description="Answer 'create all' to the partial-module prompt.",
    )

    @field_validator("modules_dir")
    @classmethod
    def _relative_modules_dir(cls, v: str) -> str:
        stripped: str = v.strip().strip("/")
        if not stripped:
            raise ValueError("modules_dir must not be empty")
        if PurePosixPath(v).is_absolute() or ".." in PurePosixPath(stripped).parts:
            raise ValueError(
                f"modules_dir must be relative to the project root, got '{v}'"
            )
        return stripped

    @property
    def modules_root(self) -> Path:
        return self.project_root.joinpath(*PurePosixPath(self.modules_dir).parts)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DEFAULT_MODULES_DIR",
    "DEFAULT_API_PREFIX",
    "DEFAULT_CONFIG_FILENAME",
    "FileRole",
    "ModuleState",
    "ResolutionMode",
    "ResourceName",
    "ModuleTarget",
    "ScaffoldConfig",
]
