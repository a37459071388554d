# File: modgen/cli.py
"""
modgen - Command-Line Interface
================================

Usage examples::

    # Flat module: src/modules/blog/blog.{controller,route,service,validation}.ts
    modgen resource blog

    # Nested module: src/modules/admin/reports/daily-sales/...
    modgen nested-resource admin/reports/daily-sales

    # Only complete an existing module, never create its directory
    modgen resource blog --update-only

    # Non-interactive: create every missing file of a partial module
    modgen resource blog --yes --no-color

Exit codes:
    0 - every flow that ran a known command (including reports and aborts)
    1 - unknown command
    2 - configuration error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from modgen.console import ConsoleStyle
from modgen.errors import ConfigError, InvalidResourceNameError
from modgen.generator import ResourceScaffolder, ScaffoldReport, build_config
from modgen.reconciler import AskFn

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.cli")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_UNKNOWN_COMMAND: int = 1
EXIT_CONFIG_ERROR: int = 2

# command -> nested?
COMMANDS: Dict[str, bool] = {
    "resource": False,
    "nested-resource": True,
}


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int, quiet: bool = False) -> None:
    """
    Configure the root modgen logger based on verbosity level.

    Only the ``modgen`` logger tree is touched; process-wide logging state
    is left to whoever embeds the CLI.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
        quiet: Silence every modgen log record.
    """
    if quiet:
        level = logging.CRITICAL + 1
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root_logger: logging.Logger = logging.getLogger("modgen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from modgen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="modgen",
        description=(
            "Generate controller, route, service and validation files for "
            "an Express/Prisma resource module."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Commands:\n"
            "  resource <name>          module under the modules root\n"
            "  nested-resource <path>   module under folder1/folder2/.../<name>\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"modgen v{__version__}",
    )

    parser.add_argument("command", metavar="COMMAND", help="resource | nested-resource")
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        metavar="NAME",
        help="Resource name, or slash-delimited path for nested-resource.",
    )

    location_group = parser.add_argument_group("location")
    location_group.add_argument(
        "--root",
        type=str,
        default=".",
        metavar="DIR",
        help="Project root (default: current directory).",
    )
    location_group.add_argument(
        "--modules-dir",
        type=str,
        default=None,
        metavar="PATH",
        help="Modules root relative to the project root (default: src/modules).",
    )
    location_group.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="YAML config file (default: <root>/.modgen.yaml if present).",
    )

    behaviour_group = parser.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--update-only",
        action="store_true",
        default=None,
        help="Never create the module directory; report a missing module instead.",
    )
    behaviour_group.add_argument(
        "-y", "--yes",
        dest="assume_create_all",
        action="store_true",
        default=None,
        help="Create every missing file of a partial module without prompting.",
    )
    behaviour_group.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable coloured output.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress log output.",
    )

    return parser


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Only flags the operator actually passed override the config file."""
    overrides: Dict[str, Any] = {}
    if args.modules_dir is not None:
        overrides["modules_dir"] = args.modules_dir
    if args.update_only is not None:
        overrides["update_only"] = args.update_only
    if args.assume_create_all is not None:
        overrides["assume_create_all"] = args.assume_create_all
    if args.color is not None:
        overrides["color"] = args.color
    return overrides


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None, ask: Optional[AskFn] = None) -> int:
    """
    Run the CLI and return the exit code.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``).
        ask: Prompt callable, for driving the interactive flow from tests.
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    _setup_logging(args.verbose, quiet=args.quiet)

    if args.command not in COMMANDS:
        logger.error("Unknown command: %s", args.command)
        return EXIT_UNKNOWN_COMMAND

    nested: bool = COMMANDS[args.command]
    style = ConsoleStyle(enabled=args.color is not False)

    if not args.name:
        style.error("Please provide a module name.")
        return EXIT_SUCCESS

    try:
        config = build_config(
            project_root=Path(args.root),
            config_path=Path(args.config) if args.config else None,
            overrides=_build_config_overrides(args),
        )
    except ConfigError as exc:
        style.error(str(exc))
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    style = ConsoleStyle(enabled=config.color)
    scaffolder = ResourceScaffolder(config, ask=ask, style=style)

    try:
        report: ScaffoldReport = scaffolder.scaffold(args.name, nested=nested)
    except InvalidResourceNameError as exc:
        style.error(exc.reason)
        return EXIT_SUCCESS

    logger.info("%s", report.message)
    if args.verbose >= 1:
        print(report.summary(), file=sys.stderr)

    return EXIT_SUCCESS


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Console-script entry point."""
    sys.exit(main(argv))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "main",
    "cli_main",
    "COMMANDS",
    "EXIT_SUCCESS",
    "EXIT_UNKNOWN_COMMAND",
    "EXIT_CONFIG_ERROR",
]
