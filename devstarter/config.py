"""Dev Starter configuration.

Typed settings for both pipelines.  All settings use Pydantic v2 models so
they are validated at construction time and can be built from environment
variables without boiler-plate.  Command-line flags override whatever
``Config.from_env`` produced.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_CLIENT_NAME = "client"
DEFAULT_SERVER_NAME = "server"


class ClientSetup(BaseModel):
    """Settings for the React + Vite client project."""

    template: str = Field(default="react", description="create-vite template name")
    dependencies: list[str] = Field(
        default_factory=lambda: [
            "react-router",
            "react-icons",
            "sweetalert2",
            "@tanstack/react-query",
            "axios",
            "firebase",
            "tailwindcss@latest",
            "@tailwindcss/vite@latest",
            "daisyui@latest",
            "prettier",
            "prettier-plugin-tailwindcss",
        ],
    )


class ServerSetup(BaseModel):
    """Settings for the Express server project."""

    dependencies: list[str] = Field(
        default_factory=lambda: ["express", "cors", "dotenv", "firebase-admin", "mongodb"],
    )
    dev_dependencies: list[str] = Field(default_factory=lambda: ["nodemon", "eslint"])
    port: int = Field(default=5000, ge=1, le=65535, description="PORT written to .env")
    entry_point: str = Field(default="index.js")


class Config(BaseModel):
    """Global Dev Starter configuration.

    Created once by the CLI entry point and passed to ``Pipeline``.  Folder
    names are used verbatim as path segments under ``base_dir``.
    """

    client_name: str = Field(default=DEFAULT_CLIENT_NAME)
    server_name: str = Field(default=DEFAULT_SERVER_NAME)
    base_dir: Path = Field(default=Path("."))
    npm: str = Field(default="npm", description="Package manager executable")
    client: ClientSetup = Field(default_factory=ClientSetup)
    server: ServerSetup = Field(default_factory=ServerSetup)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DEVSTARTER_CLIENT_NAME, DEVSTARTER_SERVER_NAME,
            DEVSTARTER_BASE_DIR, DEVSTARTER_NPM, DEVSTARTER_SERVER_PORT.
        """
        server_kwargs: dict[str, Any] = {}
        if os.environ.get("DEVSTARTER_SERVER_PORT"):
            server_kwargs["port"] = os.environ["DEVSTARTER_SERVER_PORT"]

        return cls(
            client_name=os.environ.get("DEVSTARTER_CLIENT_NAME") or DEFAULT_CLIENT_NAME,
            server_name=os.environ.get("DEVSTARTER_SERVER_NAME") or DEFAULT_SERVER_NAME,
            base_dir=Path(os.environ.get("DEVSTARTER_BASE_DIR") or "."),
            npm=os.environ.get("DEVSTARTER_NPM") or "npm",
            server=ServerSetup(**server_kwargs),
        )
