"""Dev Starter Pipeline Orchestrator.

Sets up a two-project workspace in one run:

client -- ``create-vite`` React app with routing, Tailwind CSS and Prettier.
server -- Express API with nodemon, ``.env`` and Vercel deployment config.

The client pipeline runs to completion before the server pipeline starts.
The first failure stops the run; whatever was already created stays on disk.

Usage::

    devstarter
    devstarter --client web --server api --yes
    python -m devstarter --base-dir ./workspace
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from devstarter.config import DEFAULT_CLIENT_NAME, DEFAULT_SERVER_NAME, Config
from devstarter.results import RunReport, SideResult, SideStatus, StageFailure
from devstarter.scaffolder import ClientGenerator, ServerGenerator, StageError
from devstarter.scaffolder.stages import CommandRunner, StagedGenerator
from devstarter.utils import (
    FileSystemWriter,
    console,
    format_duration,
    print_error,
    print_side_header,
    print_success,
    print_summary_table,
)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def prompt_folder_names(
    client_name: str | None = None,
    server_name: str | None = None,
    *,
    client_default: str = DEFAULT_CLIENT_NAME,
    server_default: str = DEFAULT_SERVER_NAME,
    assume_defaults: bool = False,
    out: Console | None = None,
) -> tuple[str, str]:
    """Ask for the client and server folder names.

    A name passed in is used as-is and its prompt is skipped.  With
    *assume_defaults* no prompt is shown at all.  Answers are not validated.
    """
    out = out or console

    def _ask(preset: str | None, question: str, default: str) -> str:
        if preset is not None:
            return preset
        if assume_defaults:
            return default
        return Prompt.ask(question, default=default, console=out)

    client = _ask(client_name, "What is the name of the client-side folder?", client_default)
    server = _ask(server_name, "What is the name of the server-side folder?", server_default)
    return client, server


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs the client pipeline, then the server pipeline.

    Attributes:
        config: Folder names, base directory and per-side settings.
        report: Outcome of each side, filled in by ``run``.
    """

    def __init__(
        self,
        config: Config,
        *,
        runner: CommandRunner | None = None,
        files: FileSystemWriter | None = None,
        out: Console | None = None,
    ) -> None:
        self.config = config
        self.out = out or console
        collaborators = {"runner": runner, "files": files, "out": self.out}
        self.client = ClientGenerator(config.client, npm=config.npm, **collaborators)
        self.server = ServerGenerator(config.server, npm=config.npm, **collaborators)
        self.report = RunReport()

    def _sides(self) -> list[tuple[StagedGenerator, str]]:
        return [
            (self.client, self.config.client_name),
            (self.server, self.config.server_name),
        ]

    async def run(self) -> RunReport:
        """Execute both pipelines in order and return the run report.

        Never raises ``StageError``: a failing side is recorded as ``failed``
        and every later side as ``skipped``.
        """
        base_dir = self.config.base_dir
        self.report = RunReport()
        failed = False

        for generator, folder in self._sides():
            if failed:
                self.report.results.append(
                    SideResult(side=generator.side, folder=folder, status=SideStatus.SKIPPED)
                )
                continue

            print_side_header(generator.side, folder, out=self.out)
            started = time.monotonic()
            try:
                await generator.generate(folder, base_dir)
            except StageError as exc:
                failed = True
                self.report.results.append(
                    SideResult(
                        side=generator.side,
                        folder=folder,
                        status=SideStatus.FAILED,
                        failure=StageFailure(
                            stage=exc.stage,
                            cause=str(exc.cause),
                            command=exc.command,
                            returncode=exc.returncode,
                        ),
                        duration_seconds=time.monotonic() - started,
                    )
                )
                print_error(escape(str(exc)), out=self.out)
                continue

            elapsed = time.monotonic() - started
            self.report.results.append(
                SideResult(side=generator.side, folder=folder, duration_seconds=elapsed)
            )
            print_success(
                f"{generator.side.capitalize()} ready in {format_duration(elapsed)}",
                out=self.out,
            )

        return self.report

    def print_report(self) -> None:
        """Print a per-side summary table."""
        rows: list[tuple[str, ...]] = []
        for result in self.report.results:
            detail = ""
            if result.failure is not None:
                detail = f"{result.failure.stage}: {result.failure.cause}"
            rows.append(
                (
                    result.side,
                    escape(result.folder),
                    result.status.value,
                    format_duration(result.duration_seconds),
                    escape(detail),
                )
            )
        print_summary_table(
            rows,
            ("Side", "Folder", "Status", "Duration", "Detail"),
            title="Setup Summary",
            out=self.out,
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``devstarter`` / ``python -m devstarter``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="devstarter",
        description="Dev Starter -- scaffold a React client and an Express server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  devstarter\n"
            "  devstarter --client web --server api\n"
            "  devstarter --yes --base-dir ./workspace\n"
        ),
    )
    parser.add_argument("--client", default=None, help="Client folder name (skips the prompt)")
    parser.add_argument("--server", default=None, help="Server folder name (skips the prompt)")
    parser.add_argument(
        "--base-dir",
        default=None,
        help="Directory in which both projects are created (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept default folder names instead of prompting",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValidationError as exc:
        print_error(f"Invalid configuration: {escape(str(exc))}", out=console)
        sys.exit(1)
    if args.base_dir:
        config.base_dir = Path(args.base_dir)

    console.print(
        Panel(
            "[bold red]Dev Starter CLI[/bold red]",
            subtitle=f"Base directory: {escape(str(config.base_dir.resolve()))}",
            border_style="red",
        )
    )

    try:
        client_name, server_name = prompt_folder_names(
            args.client,
            args.server,
            client_default=config.client_name,
            server_default=config.server_name,
            assume_defaults=args.yes,
        )
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.", out=console)
        sys.exit(130)

    config.client_name = client_name
    config.server_name = server_name

    pipeline = Pipeline(config)
    report = asyncio.run(pipeline.run())

    if report.success:
        console.print()
        console.print("[black on green] Project setup complete! You are ready to build. [/black on green]")
        return

    pipeline.print_report()
    failure = report.failure
    if failure is not None and failure.failure is not None:
        print_error(
            f"{failure.side.capitalize()} setup stopped at '{failure.failure.stage}'. "
            "Files created so far were left in place.",
            out=console,
        )
    sys.exit(1)


if __name__ == "__main__":
    main()
