"""Express server generation.

Creates the server folder, initialises ``package.json`` with ``npm init -y``,
installs runtime and development dependencies, points ``main``/``scripts``
at the entry file, and writes the entry file, ``.env`` and ``vercel.json``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.markup import escape

from ..config import ServerSetup
from .manifest import MANIFEST_NAME, patch_manifest, server_manifest_fields
from .stages import StagedGenerator


class ServerGenerator(StagedGenerator):
    """Sets up the server project.  Stages run strictly in order."""

    side = "server"

    # Template name -> output file name
    _TEMPLATE_FILES: dict[str, str] = {
        "server/env.j2": ".env",
        "server/vercel.json.j2": "vercel.json",
    }

    def __init__(self, setup: ServerSetup | None = None, npm: str = "npm", **kwargs) -> None:
        super().__init__(**kwargs)
        self.setup = setup or ServerSetup()
        self.npm = npm

    def install_commands(self) -> list[str]:
        return [
            f"{self.npm} install {' '.join(self.setup.dependencies)}",
            f"{self.npm} install --save-dev {' '.join(self.setup.dev_dependencies)}",
        ]

    def _context(self) -> dict[str, Any]:
        return {"port": self.setup.port, "entry_point": self.setup.entry_point}

    async def generate(self, folder: str, base_dir: str | Path) -> Path:
        """Create the server project ``base_dir/folder``.

        Returns:
            Path to the generated project root.

        Raises:
            StageError: On the first failing stage.
        """
        project_root = Path(base_dir) / folder
        context = self._context()

        self.out.print(f"[cyan]Creating Express backend in {escape(folder)}...[/cyan]")

        with self.stage("folder"):
            self.files.ensure_dir(project_root)

        with self.stage("init"):
            await self.run(f"{self.npm} init -y", project_root)

        with self.stage("install"):
            for cmd in self.install_commands():
                await self.run(cmd, project_root)
            self.out.print(
                "[dim]Skipping full ESLint configuration (but 'eslint' package is installed).[/dim]"
            )

        with self.stage("manifest"):
            patch_manifest(
                project_root / MANIFEST_NAME,
                server_manifest_fields(self.setup.entry_point),
                self.files,
            )
            self.done("Dev scripts added.")

        with self.stage("templates"):
            self.files.write_text(
                project_root / self.setup.entry_point,
                self.renderer.render("server/index.js.j2", context),
            )
            for template_name, output_name in self._TEMPLATE_FILES.items():
                self.files.write_text(
                    project_root / output_name,
                    self.renderer.render(template_name, context),
                )
            self.done("vercel.json added to server folder.")

        self.done("Server setup complete.")
        return project_root
