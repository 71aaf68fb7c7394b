"""Shared utility functions for Dev Starter.

Provides async command execution, file-system helpers, JSON I/O, and
Rich-based console reporting.  The pipelines receive the command runner,
the file-system writer and the console as collaborators so each step can be
exercised in isolation.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """Raised when an external command cannot start or exits non-zero.

    ``returncode`` is ``None`` when the process never started.
    """

    def __init__(self, message: str, command: str = "", returncode: int | None = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(cmd: str, cwd: str | Path | None = None) -> int:
    """Run a shell command with the parent's standard streams and wait for it.

    Args:
        cmd: Shell command string.
        cwd: Working directory for the child process.

    Returns:
        The process exit code.

    Raises:
        OSError: If the process could not be spawned (e.g. missing *cwd*).
    """
    process = await asyncio.create_subprocess_shell(
        cmd,
        cwd=str(cwd) if cwd else None,
    )
    return await process.wait()


async def run_checked(
    cmd: str,
    cwd: str | Path | None = None,
    *,
    out: Console | None = None,
) -> None:
    """Run a shell command with inherited streams and fail on non-zero exit.

    The user sees the command's live output and can answer its prompts.
    There is no timeout: a hung command hangs the caller.

    Raises:
        CommandError: If the command could not start or exited non-zero.
    """
    out = out or console
    location = Path(cwd) if cwd else Path.cwd()
    out.print(f"[dim]Running command: {escape(cmd)} in {escape(str(location))}[/dim]")

    try:
        returncode = await run_command(cmd, cwd=cwd)
    except OSError as exc:
        raise CommandError(
            f'Failed to start command "{cmd}": {exc}', command=cmd
        ) from exc

    if returncode != 0:
        raise CommandError(
            f'Command "{cmd}" exited with code {returncode}. '
            "Check the output above for details.",
            command=cmd,
            returncode=returncode,
        )


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class FileSystemWriter:
    """Synchronous file-system operations used by the pipelines."""

    def ensure_dir(self, path: str | Path) -> Path:
        """Create a directory (and parents) if it does not exist."""
        dir_path = Path(path)
        if not dir_path.exists():
            dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path

    def write_text(self, path: str | Path, content: str) -> Path:
        """Create or overwrite *path* with *content*.

        The parent directory must already exist.
        """
        file_path = Path(path)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    def remove_if_exists(self, path: str | Path) -> bool:
        """Delete a file if present.  Returns ``True`` when something was removed."""
        file_path = Path(path)
        if not file_path.exists():
            return False
        file_path.unlink()
        return True


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* the way npm writes ``package.json`` (2-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


SIDE_COLORS: dict[str, str] = {
    "client": "bright_cyan",
    "server": "bright_magenta",
}


def print_side_header(side: str, folder: str, out: Console | None = None) -> None:
    """Print a full-width rule announcing the setup of one side."""
    out = out or console
    color = SIDE_COLORS.get(side, "white")
    out.print()
    out.print(
        Rule(
            f"[bold {color}] {side.capitalize()}: {escape(folder)} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(
    rows: list[tuple[str, ...]],
    columns: tuple[str, ...],
    title: str = "Summary",
    out: Console | None = None,
) -> None:
    """Print a summary table with the given column headers."""
    out = out or console
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for index, column in enumerate(columns):
        if index == 0:
            table.add_column(column, style="dim", no_wrap=True)
        else:
            table.add_column(column)

    for row in rows:
        table.add_row(*row)

    out.print(table)
    out.print()


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{message}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{message}[/bold red]")

