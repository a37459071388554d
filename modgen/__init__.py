# File: modgen/__init__.py
"""
modgen - Resource Module Scaffolder
====================================

Generates the four TypeScript files of an Express + Prisma + Zod resource
module (controller, route, service, validation) and fills in whatever is
missing from a partially present module.

Architecture overview::

    ┌──────────────┐     ┌────────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ ResourceScaffolder │────▶│ TemplateRenderer │
    │   (cli.py)   │     │   (generator.py)   │     │  (templates.py)  │
    └──────────────┘     └─────────┬──────────┘     └──────────────────┘
                                   │
                    ┌──────────────┼──────────────┐
                    ▼              ▼              ▼
             ┌────────────┐ ┌────────────┐ ┌────────────┐
             │ validators │ │ reconciler │ │  console   │
             │   (.py)    │ │   (.py)    │ │   (.py)    │
             └────────────┘ └────────────┘ └────────────┘

Usage::

    # As a library
    from modgen import ResourceScaffolder, build_config
    scaffolder = ResourceScaffolder(build_config(Path(".")), ask=input)
    scaffolder.scaffold("blog")

    # From the command line
    modgen resource blog
    modgen nested-resource admin/reports/daily-sales
"""

from __future__ import annotations

__version__: str = "1.0.0"

from modgen.errors import (
    ConfigError,
    InvalidResourceNameError,
    ModgenError,
    TemplateError,
)
from modgen.models import (
    FileRole,
    ModuleState,
    ModuleTarget,
    ResolutionMode,
    ResourceName,
    ScaffoldConfig,
)
from modgen.utils import (
    capitalize,
    import_depth,
    normalize_resource_name,
    relative_import_prefix,
    to_camel_case,
)
from modgen.templates import TemplateRenderer, render
from modgen.reconciler import ModuleReconciler, expected_files, inspect_module
from modgen.console import ConsoleStyle
from modgen.generator import (
    FileRecord,
    ResourceScaffolder,
    ScaffoldReport,
    build_config,
    resolve_target,
)

__all__: list[str] = [
    "__version__",
    # Errors
    "ModgenError",
    "InvalidResourceNameError",
    "TemplateError",
    "ConfigError",
    # Models
    "FileRole",
    "ModuleState",
    "ModuleTarget",
    "ResolutionMode",
    "ResourceName",
    "ScaffoldConfig",
    # Naming
    "capitalize",
    "import_depth",
    "normalize_resource_name",
    "relative_import_prefix",
    "to_camel_case",
    # Templates
    "TemplateRenderer",
    "render",
    # Reconciliation
    "ModuleReconciler",
    "expected_files",
    "inspect_module",
    # Console
    "ConsoleStyle",
    # Orchestration
    "FileRecord",
    "ResourceScaffolder",
    "ScaffoldReport",
    "build_config",
    "resolve_target",
]
