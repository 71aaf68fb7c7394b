"""React + Vite client generation.

Runs ``create-vite`` for the chosen folder, installs the client stack
(React Router, TanStack Query, Tailwind CSS + daisyUI, Prettier, ...), lays
out the ``src/`` skeleton, writes the formatter/build/router/entry files,
patches ``package.json`` scripts, and removes the Vite starter assets.
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from ..config import ClientSetup
from .manifest import MANIFEST_NAME, client_manifest_fields, patch_manifest
from .stages import StagedGenerator

SRC_FOLDERS: list[str] = [
    "API",
    "Assets",
    "Auth",
    "Components/Common",
    "Components/Custom",
    "Components/Error",
    "Components/Private",
    "Firebase",
    "Hooks",
    "Layouts",
    "Router",
]

# Template name -> output path relative to the project root
_TEMPLATE_FILES: dict[str, str] = {
    "client/vite.config.js.j2": "vite.config.js",
    "client/router.jsx.j2": "src/Router/router.jsx",
    "client/main.jsx.j2": "src/main.jsx",
    "client/index.css.j2": "src/index.css",
}

# Left behind by the react template, relative to src/
STARTER_FILES: list[str] = ["App.css", "App.jsx", "assets/react.svg"]


class ClientGenerator(StagedGenerator):
    """Sets up the client project.  Stages run strictly in order."""

    side = "client"

    def __init__(self, setup: ClientSetup | None = None, npm: str = "npm", **kwargs) -> None:
        super().__init__(**kwargs)
        self.setup = setup or ClientSetup()
        self.npm = npm

    def scaffold_command(self, folder: str) -> str:
        return f"{self.npm} create vite@latest -- {folder} --template {self.setup.template}"

    def install_command(self) -> str:
        return f"{self.npm} install {' '.join(self.setup.dependencies)}"

    async def generate(self, folder: str, base_dir: str | Path) -> Path:
        """Create the client project ``base_dir/folder``.

        Returns:
            Path to the generated project root.

        Raises:
            StageError: On the first failing stage.
        """
        base = Path(base_dir)
        project_root = base / folder
        src = project_root / "src"

        self.out.print(f"[cyan]Creating React Vite client in {escape(folder)}...[/cyan]")

        with self.stage("scaffold"):
            await self.run(self.scaffold_command(folder), base)

        with self.stage("install"):
            await self.run(self.install_command(), project_root)

        with self.stage("folders"):
            for rel in SRC_FOLDERS:
                self.files.ensure_dir(src / rel)
            self.done("Custom folder structure created.")

        with self.stage("formatter"):
            self.files.write_text(
                project_root / ".prettierrc.json",
                self.renderer.render("client/prettierrc.json.j2", {}),
            )
            self.done(".prettierrc.json added.")

        with self.stage("manifest"):
            patch_manifest(project_root / MANIFEST_NAME, client_manifest_fields(), self.files)
            self.done("Client package.json scripts updated.")

        with self.stage("templates"):
            for template_name, output_name in _TEMPLATE_FILES.items():
                self.files.write_text(
                    project_root / output_name,
                    self.renderer.render(template_name, {}),
                )

        with self.stage("cleanup"):
            for rel in STARTER_FILES:
                self.files.remove_if_exists(src / rel)

        self.done("Client setup complete.")
        return project_root
