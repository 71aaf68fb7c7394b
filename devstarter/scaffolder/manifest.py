"""``package.json`` patching.

The scaffold tools leave a manifest behind; both pipelines overwrite a fixed
set of its top-level fields and keep everything else as it was.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils import FileSystemWriter, dump_json, load_json

MANIFEST_NAME = "package.json"

_PRETTIER_GLOB = "'src/**/*.{js,jsx,ts,tsx,json,css,md,html}'"

CLIENT_SCRIPTS: dict[str, str] = {
    "dev": "vite",
    "build": "vite build",
    "format": f"prettier --write {_PRETTIER_GLOB}",
    "format:check": f"prettier --check {_PRETTIER_GLOB}",
    "lint": "eslint .",
    "lint:fix": f"eslint . --fix && prettier --write {_PRETTIER_GLOB}",
    "preview": "vite preview",
}

SERVER_MAIN = "index.js"

SERVER_TEST_SCRIPT = 'echo "Error: no test specified" && exit 1'


class ManifestError(ValueError):
    """Raised when a manifest is valid JSON but not a JSON object."""


def client_manifest_fields() -> dict[str, Any]:
    return {"scripts": dict(CLIENT_SCRIPTS)}


def server_manifest_fields(entry_point: str = SERVER_MAIN) -> dict[str, Any]:
    return {
        "main": entry_point,
        "scripts": {
            "start": f"nodemon {entry_point}",
            "test": SERVER_TEST_SCRIPT,
        },
    }


def patch_manifest(
    path: str | Path,
    updates: dict[str, Any],
    files: FileSystemWriter | None = None,
) -> dict[str, Any]:
    """Overwrite top-level fields of the JSON manifest at *path*.

    Existing keys keep their position; new keys are appended.  Values are
    replaced wholesale, so ``scripts`` ends up exactly equal to the given
    mapping.

    Returns:
        The manifest as written.

    Raises:
        FileNotFoundError: If the manifest does not exist.
        json.JSONDecodeError: If it is not valid JSON.
        ManifestError: If the top-level JSON value is not an object.
    """
    files = files or FileSystemWriter()
    manifest = load_json(path)
    if not isinstance(manifest, dict):
        raise ManifestError(f"{path} does not contain a JSON object")

    manifest.update(updates)
    files.write_text(path, dump_json(manifest))
    return manifest
