"""Stage bookkeeping shared by the client and server generators.

A generator runs a fixed, linear list of stages.  The first failure is
wrapped in ``StageError`` naming the side and stage, and nothing after it
runs.  Nothing already written is undone.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from ..utils import CommandError, FileSystemWriter, console, run_checked
from .templates import TemplateRenderer


class CommandRunner(Protocol):
    def __call__(
        self, cmd: str, cwd: str | Path | None = None, *, out: Console | None = None
    ) -> Awaitable[None]: ...


class StageError(Exception):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, side: str, stage: str, cause: Exception) -> None:
        self.side = side
        self.stage = stage
        self.cause = cause
        super().__init__(f"{side} setup failed at '{stage}': {cause}")

    @property
    def command(self) -> str:
        return getattr(self.cause, "command", "")

    @property
    def returncode(self) -> int | None:
        return getattr(self.cause, "returncode", None)


class StagedGenerator:
    """Base class wiring the collaborators every generator needs."""

    side: str = ""

    def __init__(
        self,
        *,
        runner: CommandRunner | None = None,
        files: FileSystemWriter | None = None,
        renderer: TemplateRenderer | None = None,
        out: Console | None = None,
    ) -> None:
        self.runner: CommandRunner = runner or run_checked
        self.files = files or FileSystemWriter()
        self.renderer = renderer or TemplateRenderer()
        self.out = out or console
        self.completed: list[str] = []

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Run the body as stage *name*, converting failures to ``StageError``."""
        try:
            yield
        except (CommandError, OSError, ValueError) as exc:
            self.out.print(f"[bold red]x {escape(str(exc))}[/bold red]")
            raise StageError(self.side, name, exc) from exc
        self.completed.append(name)

    async def run(self, cmd: str, cwd: Path) -> None:
        await self.runner(cmd, cwd, out=self.out)

    def done(self, message: str) -> None:
        self.out.print(f"[green]+[/green] {message}")
