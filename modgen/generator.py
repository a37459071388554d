# File: modgen/generator.py
"""
modgen - Resource Scaffolder (Orchestrator)
============================================

Connects every step of one invocation:

    Name / Path Input -> Validation -> Target Resolution -> Inspection
        -> Reconciliation -> Template Rendering -> File Write

The ``ResourceScaffolder`` class provides both a programmatic API and the
backend for the CLI.

Workflow::

    1. Validate the resource name (flat) or nested path.
    2. Split a nested path into folder segments + resource segment and
       resolve the module directory under the modules root.
    3. Create the module directory unless running update-only.
    4. Inspect the directory against the four expected files.
    5. Let ``ModuleReconciler`` decide what to write (prompting if needed).
    6. Render each chosen file and write it, printing one CREATE line each.
    7. Return a ``ScaffoldReport``.

Error handling strategy:
    - Bad names raise ``InvalidResourceNameError`` before any disk access.
    - Bad configuration raises ``ConfigError``.
    - File-system errors propagate unchanged; earlier writes are kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from modgen.console import ConsolePrompter, ConsoleStyle
from modgen.errors import ConfigError
from modgen.models import (
    DEFAULT_CONFIG_FILENAME,
    FileRole,
    ModuleState,
    ModuleTarget,
    ResolutionMode,
    ResourceName,
    ScaffoldConfig,
)
from modgen.reconciler import AskFn, ModuleReconciler, inspect_module
from modgen.templates import TemplateRenderer
from modgen.utils import ensure_directory, format_relative_path, write_file
from modgen.validators import (
    ensure_valid,
    validate_nested_path,
    validate_resource_name,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.generator")


# ---------------------------------------------------------------------------
# Scaffold report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One file written during the invocation."""

    role: FileRole
    relative_path: str
    size_bytes: int


@dataclass(slots=True)
class ScaffoldReport:
    """Everything that happened for one resource."""

    resource: str = ""
    directory: str = ""
    state: Optional[ModuleState] = None
    mode: Optional[ResolutionMode] = None
    created_directory: bool = False
    files: List[FileRecord] = field(default_factory=list)
    declined: List[FileRole] = field(default_factory=list)
    aborted: bool = False
    message: str = ""

    @property
    def total_bytes(self) -> int:
        return sum(f.size_bytes for f in self.files)

    @property
    def written_roles(self) -> List[FileRole]:
        return [f.role for f in self.files]

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        lines.append(f"{'='*60}")
        lines.append(f"  Resource:   {self.resource}")
        lines.append(f"  Directory:  {self.directory}")
        lines.append(f"  State:      {self.state.value if self.state else '-'}")
        if self.mode is not None:
            lines.append(f"  Mode:       {self.mode.value}")
        lines.append(f"  Written:    {len(self.files)} file(s), {self.total_bytes:,} bytes")
        for record in self.files:
            lines.append(f"    + {record.relative_path} ({record.size_bytes} bytes)")
        for role in self.declined:
            lines.append(f"    - {role.filename(self.resource)} (declined)")
        if self.message:
            lines.append(f"  Result:     {self.message}")
        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Configuration loading
# ---------------------------------------------------------------------------


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    An empty file yields an empty mapping.

    Raises:
        ConfigError: If the file is missing, unparseable or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a YAML mapping at top level of {path}, got {type(data).__name__}."
        )
    return data


def build_config(
    project_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ScaffoldConfig:
    """
    Layer defaults, the YAML file and explicit overrides into a config.

    When *config_path* is None, ``.modgen.yaml`` in the project root is used
    if it exists.
    """
    root: Path = (project_root or Path.cwd()).resolve()
    data: Dict[str, Any] = {}

    if config_path is None:
        candidate: Path = root / DEFAULT_CONFIG_FILENAME
        if candidate.is_file():
            config_path = candidate

    if config_path is not None:
        logger.info("Loading configuration from %s", config_path)
        data.update(load_config_file(config_path))
        if "project_root" in data:
            raise ConfigError(
                "project_root cannot be set from a config file; use --root."
            )

    data.update(overrides or {})
    data["project_root"] = root

    try:
        return ScaffoldConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Config validation failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def split_nested_path(path: str) -> Tuple[List[str], str]:
    """
    Split ``a/b/widget`` into ``(["a", "b"], "widget")``.

    The caller is expected to have validated *path* already.
    """
    parts: List[str] = path.split("/")
    return parts[:-1], parts[-1]


def resolve_target(config: ScaffoldConfig, path: str, nested: bool = False) -> ModuleTarget:
    """Validate *path* and compute the module directory for it."""
    if nested:
        ensure_valid(validate_nested_path(path), path)
        folders, name = split_nested_path(path)
    else:
        ensure_valid(validate_resource_name(path), path)
        folders, name = [], path

    directory: Path = config.modules_root.joinpath(*folders, name)
    return ModuleTarget(
        resource=ResourceName(raw=name),
        nested_folders=folders,
        directory=directory,
    )


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class ResourceScaffolder:
    """
    Generates (or completes) resource modules.

    Usage::

        scaffolder = ResourceScaffolder(build_config(Path(".")))
        report = scaffolder.scaffold("admin/blog-post", nested=True)
        print(report.summary())

    Args:
        config: Scaffolder settings.
        ask: Prompt callable; defaults to reading the terminal.
        style: Console formatter; defaults to one honouring ``config.color``.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        ask: Optional[AskFn] = None,
        style: Optional[ConsoleStyle] = None,
    ) -> None:
        self._config: ScaffoldConfig = config
        self._style: ConsoleStyle = style or ConsoleStyle(enabled=config.color)
        self._ask: AskFn = ask or ConsolePrompter(self._style)

    @property
    def config(self) -> ScaffoldConfig:
        return self._config

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def scaffold(self, path: str, nested: bool = False) -> ScaffoldReport:
        """
        Create or complete the module for *path*.

        Raises:
            InvalidResourceNameError: *path* cannot name a module.
            OSError: A directory or file could not be written.
        """
        target: ModuleTarget = resolve_target(self._config, path, nested=nested)
        root: Path = self._config.project_root

        report = ScaffoldReport(
            resource=target.resource.raw,
            directory=format_relative_path(target.directory, root),
        )

        logger.info(
            "Scaffolding '%s' (identifier=%s, depth=%d) in %s",
            target.resource.raw,
            target.resource.identifier,
            target.import_depth,
            target.directory,
        )

        if not self._config.update_only and not target.directory.exists():
            ensure_directory(target.directory)
            report.created_directory = True

        inspection = inspect_module(target.directory, target.resource.raw)
        renderer: TemplateRenderer = TemplateRenderer.for_target(target)

        def write(role: FileRole) -> None:
            file_path: Path = target.file_path(role)
            size: int = write_file(file_path, renderer.render(role))
            relative: str = format_relative_path(file_path, root)
            self._style.created(relative, size)
            logger.info("Created %s (%d bytes)", relative, size)
            report.files.append(FileRecord(role, relative, size))

        reconciler = ModuleReconciler(
            self._ask,
            self._style,
            assume_create_all=self._config.assume_create_all,
        )
        outcome = reconciler.reconcile(inspection, write)

        report.state = outcome.state
        report.mode = outcome.mode
        report.declined = list(outcome.declined)
        report.aborted = outcome.aborted
        report.message = outcome.message
        return report


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "FileRecord",
    "ScaffoldReport",
    "load_config_file",
    "build_config",
    "split_nested_path",
    "resolve_target",
    "ResourceScaffolder",
]
