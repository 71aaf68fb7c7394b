"""Dev Starter scaffolder -- generates the client and server projects.

Quick usage::

    from devstarter.scaffolder import ClientGenerator, ServerGenerator

    client_root = await ClientGenerator().generate("client", ".")
    server_root = await ServerGenerator().generate("server", ".")
"""

from devstarter.scaffolder.client_gen import ClientGenerator
from devstarter.scaffolder.manifest import ManifestError, patch_manifest
from devstarter.scaffolder.server_gen import ServerGenerator
from devstarter.scaffolder.stages import StageError
from devstarter.scaffolder.templates import TemplateRenderer

__all__ = [
    "ClientGenerator",
    "ManifestError",
    "ServerGenerator",
    "StageError",
    "TemplateRenderer",
    "patch_manifest",
]
