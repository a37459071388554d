# File: modgen/reconciler.py
"""
modgen - Existing-File Reconciler
==================================
Decides which of a module's four files get written.

State machine (input: module directory, output: files to write)::

    directory missing                 -> NOT_FOUND  report, write nothing
    all four files present            -> COMPLETE   report, write nothing
    none of the four files present    -> EMPTY      write all four, no prompt
    some present, some missing        -> PARTIAL    ask the operator

In the PARTIAL state the operator picks per-file confirmation (``yes``/``y``)
or create-all (``create``/``c``). Any other answer aborts before a single
file is written.

The reconciler never writes files itself: it calls the ``write`` callback
once per chosen role, in role order, and lets exceptions from that callback
propagate. Files written before a failure stay on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from modgen.console import ConsoleStyle
from modgen.models import FileRole, ModuleState, ResolutionMode
from modgen.utils import capitalize

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("modgen.reconciler")

AskFn = Callable[[str], str]
WriteFn = Callable[[FileRole], None]

_AFFIRMATIVE: Tuple[str, ...] = ("yes", "y")


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


def expected_files(name: str) -> List[str]:
    """File names a complete module called *name* consists of."""
    return [role.filename(name) for role in FileRole]


@dataclass(frozen=True, slots=True)
class ModuleInspection:
    """Snapshot of a module directory against the expected file set."""

    directory: Path
    name: str
    state: ModuleState
    present: Tuple[FileRole, ...] = ()
    missing: Tuple[FileRole, ...] = ()

    @property
    def missing_files(self) -> List[str]:
        return [role.filename(self.name) for role in self.missing]


def inspect_module(directory: Path, name: str) -> ModuleInspection:
    """Classify *directory* into one of the four ``ModuleState`` values."""
    if not directory.is_dir():
        return ModuleInspection(directory, name, ModuleState.NOT_FOUND)

    found: set = {entry.name for entry in directory.iterdir()}
    present: Tuple[FileRole, ...] = tuple(
        role for role in FileRole if role.filename(name) in found
    )
    missing: Tuple[FileRole, ...] = tuple(
        role for role in FileRole if role not in present
    )

    if not missing:
        state = ModuleState.COMPLETE
    elif not present:
        state = ModuleState.EMPTY
    else:
        state = ModuleState.PARTIAL

    logger.debug(
        "Inspected %s: state=%s present=%d missing=%d",
        directory,
        state.value,
        len(present),
        len(missing),
    )
    return ModuleInspection(directory, name, state, present, missing)


def confirm(ask: AskFn, question: str) -> bool:
    """True only for a ``yes``/``y`` answer (case-insensitive)."""
    return ask(question).strip().lower() in _AFFIRMATIVE


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ReconcileOutcome:
    """What the reconciler decided and did."""

    state: ModuleState
    mode: Optional[ResolutionMode] = None
    written: List[FileRole] = field(default_factory=list)
    declined: List[FileRole] = field(default_factory=list)
    aborted: bool = False
    message: str = ""


class ModuleReconciler:
    """
    Runs the reconciliation state machine for one module.

    Args:
        ask: Returns the operator's raw answer to a question.
        style: Console formatter for the operator-facing lines.
        assume_create_all: Skip the PARTIAL prompt and create every
            missing file.
    """

    def __init__(
        self,
        ask: AskFn,
        style: ConsoleStyle,
        *,
        assume_create_all: bool = False,
    ) -> None:
        self._ask: AskFn = ask
        self._style: ConsoleStyle = style
        self._assume_create_all: bool = assume_create_all

    def reconcile(self, inspection: ModuleInspection, write: WriteFn) -> ReconcileOutcome:
        title: str = capitalize(inspection.name)
        outcome = ReconcileOutcome(state=inspection.state)

        if inspection.state is ModuleState.NOT_FOUND:
            outcome.message = f"Module {inspection.name} not found."
            self._style.error(outcome.message)
            return outcome

        if inspection.state is ModuleState.COMPLETE:
            outcome.message = f"{title} module already exists."
            self._style.error(outcome.message)
            return outcome

        if inspection.state is ModuleState.EMPTY:
            outcome.mode = ResolutionMode.CREATE_ALL
            self._write_all(inspection.missing, write, outcome)
            outcome.message = f"{title} module created."
            return outcome

        # PARTIAL
        self._style.print(
            f"{self._style.green(title)} module exists, but some files are missing:"
        )
        self._style.numbered(inspection.missing_files)

        mode: Optional[ResolutionMode] = self._choose_mode()
        outcome.mode = mode

        if mode is None:
            outcome.aborted = True
            outcome.message = "Invalid option. No files will be created."
            self._style.error(outcome.message)
            logger.info("Reconciliation of %s aborted by operator.", inspection.directory)
            return outcome

        if mode is ResolutionMode.CREATE_ALL:
            self._write_all(inspection.missing, write, outcome)
        else:
            for role in inspection.missing:
                filename: str = role.filename(inspection.name)
                question: str = (
                    f"{self._style.blue('Do you want to create')} "
                    f"{self._style.green(filename + '?')} (yes/no)"
                )
                if confirm(self._ask, question):
                    write(role)
                    outcome.written.append(role)
                else:
                    outcome.declined.append(role)

        outcome.message = (
            f"{title} module updated: {len(outcome.written)} file(s) created, "
            f"{len(outcome.declined)} declined."
        )
        return outcome

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _choose_mode(self) -> Optional[ResolutionMode]:
        if self._assume_create_all:
            logger.info("Creating all missing files without prompting.")
            return ResolutionMode.CREATE_ALL
        answer: str = self._ask(
            f"{self._style.blue('Do you want to create missing files one by one (Yes/Y) or all at once (Create/C)?')}"
            " Enter (Yes/Y) or (Create/C)"
        )
        return ResolutionMode.from_answer(answer)

    @staticmethod
    def _write_all(
        roles: Tuple[FileRole, ...],
        write: WriteFn,
        outcome: ReconcileOutcome,
    ) -> None:
        for role in roles:
            write(role)
            outcome.written.append(role)


__all__: List[str] = [
    "AskFn",
    "WriteFn",
    "expected_files",
    "ModuleInspection",
    "inspect_module",
    "confirm",
    "ReconcileOutcome",
    "ModuleReconciler",
]
