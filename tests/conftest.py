"""
tests/conftest.py
Shared fixtures for the modgen test suite.

No external mocking libraries are used; real file I/O is performed inside
pytest's tmp_path directories and operator answers come from a scripted
callable instead of the terminal.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Callable, Iterable, List, Optional

import pytest

from modgen.console import ConsoleStyle
from modgen.generator import ResourceScaffolder
from modgen.models import FileRole, ScaffoldConfig


# ---------------------------------------------------------------------------
# Scripted operator
# ---------------------------------------------------------------------------


class ScriptedAnswers:
    """Prompt callable that replays canned answers and records questions."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers: List[str] = list(answers)
        self.questions: List[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._answers)


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_modgen_logging() -> Iterable[None]:
    """The CLI reconfigures the ``modgen`` logger; undo that after each test."""
    yield
    root_logger = logging.getLogger("modgen")
    root_logger.handlers.clear()
    root_logger.propagate = True
    root_logger.setLevel(logging.NOTSET)
    logging.disable(logging.NOTSET)


# ---------------------------------------------------------------------------
# Project layout fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """A project root with an empty ``src/modules`` directory."""
    (tmp_path / "src" / "modules").mkdir(parents=True)
    return tmp_path


@pytest.fixture()
def modules_root(project_root: pathlib.Path) -> pathlib.Path:
    return project_root / "src" / "modules"


@pytest.fixture()
def config(project_root: pathlib.Path) -> ScaffoldConfig:
    return ScaffoldConfig(project_root=project_root, color=False)


@pytest.fixture()
def plain_style() -> ConsoleStyle:
    return ConsoleStyle(enabled=False)


@pytest.fixture()
def make_scaffolder(
    config: ScaffoldConfig, plain_style: ConsoleStyle
) -> Callable[..., ResourceScaffolder]:
    """Factory: ``make_scaffolder(answers=[...], **config_updates)``."""

    def _factory(
        answers: Iterable[str] = (), **updates: object
    ) -> ResourceScaffolder:
        cfg = config.model_copy(update=updates) if updates else config
        return ResourceScaffolder(cfg, ask=ScriptedAnswers(answers), style=plain_style)

    return _factory


@pytest.fixture()
def populate_module() -> Callable[..., pathlib.Path]:
    """Create a module directory holding the given roles as placeholder files."""

    def _populate(
        directory: pathlib.Path,
        name: str,
        roles: Optional[Iterable[FileRole]] = None,
    ) -> pathlib.Path:
        directory.mkdir(parents=True, exist_ok=True)
        for role in roles if roles is not None else FileRole:
            (directory / role.filename(name)).write_text(
                f"// existing {role.value}\n", encoding="utf-8"
            )
        return directory

    return _populate
