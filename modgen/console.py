# File: modgen/console.py
"""
modgen - Console Output & Prompts
==================================
Operator-facing output goes through :class:`ConsoleStyle`, a thin wrapper
around a ``rich`` console with an explicit colour switch. Diagnostics go to
``logging`` instead (see ``modgen.cli``).

:class:`ConsolePrompter` is the terminal implementation of the ``ask``
callable the reconciler takes; tests pass a plain function instead.
"""

from __future__ import annotations

import logging
from typing import IO, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

logger: logging.Logger = logging.getLogger("modgen.console")


class ConsoleStyle:
    """
    Colour formatter bound to one output stream.

    With ``enabled=False`` the same calls produce plain text, which is what
    tests and non-interactive pipelines want.
    """

    def __init__(
        self,
        enabled: bool = True,
        *,
        file: Optional[IO[str]] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.enabled: bool = enabled
        self.console: Console = console or Console(
            file=file,
            no_color=not enabled,
            highlight=False,
            soft_wrap=True,
            emoji=False,
        )

    # -- Markup helpers -----------------------------------------------------

    def _wrap(self, style: str, text: str) -> str:
        safe: str = escape(text)
        if not self.enabled:
            return safe
        return f"[{style}]{safe}[/{style}]"

    def red(self, text: str) -> str:
        return self._wrap("red", text)

    def green(self, text: str) -> str:
        return self._wrap("green", text)

    def blue(self, text: str) -> str:
        return self._wrap("blue", text)

    # -- Output -------------------------------------------------------------

    def print(self, markup: str) -> None:
        """Print a line built from the markup helpers above."""
        self.console.print(markup)

    def error(self, text: str) -> None:
        self.print(self.red(text))

    def created(self, relative_path: str, size: int) -> None:
        """``CREATE src/modules/x/x.route.ts (123 bytes)``"""
        self.print(
            f"{self.green('CREATE')} {escape(relative_path)} "
            f"{self.blue(f'({size} bytes)')}"
        )

    def numbered(self, items: List[str]) -> None:
        for index, item in enumerate(items, start=1):
            self.print(self.green(f"{index}. {item}"))


class ConsolePrompter:
    """Reads one line of operator input per question."""

    def __init__(self, style: ConsoleStyle) -> None:
        self._style: ConsoleStyle = style

    def __call__(self, question: str) -> str:
        try:
            return Prompt.ask(question, console=self._style.console, default="", show_default=False)
        except EOFError:
            # Closed stdin counts as no answer; callers treat "" as a refusal.
            logger.debug("stdin closed while waiting for an answer.")
            return ""


__all__: List[str] = ["ConsoleStyle", "ConsolePrompter"]
