"""Shared pytest fixtures for the Dev Starter test suite.

Provides reusable fixtures for:
- A fake command runner that imitates ``create-vite`` and ``npm``
- A file-system writer that records every call
- A console that writes into a buffer
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from devstarter.utils import CommandError, FileSystemWriter


# ---------------------------------------------------------------------------
# Fake external tools
# ---------------------------------------------------------------------------

VITE_MANIFEST: dict[str, Any] = {
    "name": "placeholder",
    "private": True,
    "version": "0.0.0",
    "type": "module",
    "scripts": {
        "dev": "vite",
        "build": "vite build",
        "lint": "eslint .",
        "preview": "vite preview",
    },
    "dependencies": {"react": "^19.1.0", "react-dom": "^19.1.0"},
}


def _fake_create_vite(project_root: Path) -> None:
    """Lay down what ``npm create vite@latest -- <name> --template react`` leaves."""
    (project_root / "src" / "assets").mkdir(parents=True)
    manifest = {**VITE_MANIFEST, "name": project_root.name}
    (project_root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    (project_root / "vite.config.js").write_text("export default {};\n", encoding="utf-8")
    for name in ("App.jsx", "App.css", "main.jsx", "index.css"):
        (project_root / "src" / name).write_text(f"/* {name} */\n", encoding="utf-8")
    (project_root / "src" / "assets" / "react.svg").write_text("<svg/>\n", encoding="utf-8")


def _fake_npm_init(project_root: Path) -> None:
    manifest = {
        "name": project_root.name,
        "version": "1.0.0",
        "main": "index.js",
        "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
        "keywords": [],
        "author": "",
        "license": "ISC",
    }
    (project_root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")


class FakeRunner:
    """Records commands and simulates their effect on disk.

    A command containing *fail_on* raises ``CommandError`` with *returncode*
    instead of running.
    """

    def __init__(self, fail_on: str | None = None, returncode: int = 1) -> None:
        self.fail_on = fail_on
        self.returncode = returncode
        self.calls: list[tuple[str, Path]] = []

    async def __call__(self, cmd: str, cwd: str | Path | None = None, *, out: Console | None = None) -> None:
        where = Path(cwd) if cwd else Path.cwd()
        self.calls.append((cmd, where))

        if self.fail_on and self.fail_on in cmd:
            raise CommandError(
                f'Command "{cmd}" exited with code {self.returncode}. '
                "Check the output above for details.",
                command=cmd,
                returncode=self.returncode,
            )

        if " create vite@latest -- " in cmd:
            folder = cmd.split(" -- ", 1)[1].split()[0]
            _fake_create_vite(where / folder)
        elif cmd.endswith(" init -y"):
            _fake_npm_init(where)

    @property
    def commands(self) -> list[str]:
        return [cmd for cmd, _ in self.calls]


class RecordingWriter(FileSystemWriter):
    """Real file-system writer that remembers each operation."""

    def __init__(self) -> None:
        self.ops: list[tuple[str, Path]] = []

    def ensure_dir(self, path: str | Path) -> Path:
        self.ops.append(("ensure_dir", Path(path)))
        return super().ensure_dir(path)

    def write_text(self, path: str | Path, content: str) -> Path:
        self.ops.append(("write_text", Path(path)))
        return super().write_text(path, content)

    def remove_if_exists(self, path: str | Path) -> bool:
        self.ops.append(("remove_if_exists", Path(path)))
        return super().remove_if_exists(path)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that succeeds and fakes create-vite / npm init output."""
    return FakeRunner()


@pytest.fixture
def failing_runner():
    """Factory for runners that fail on a command substring."""

    def factory(fail_on: str, returncode: int = 1) -> FakeRunner:
        return FakeRunner(fail_on=fail_on, returncode=returncode)

    return factory


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def buffer_console() -> Console:
    """Console writing plain text into ``console.file`` (an ``io.StringIO``)."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Base directory in which the projects are generated."""
    base = tmp_path / "workspace"
    base.mkdir()
    yield base
