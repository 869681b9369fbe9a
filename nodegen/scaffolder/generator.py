"""Main scaffolding orchestrator.

Takes a validated ``ProjectRequest`` and generates the project directory:
a ``package.json`` manifest, a ``.env`` file and the type-specific source
stubs (plus the grammar file for ANTLR4 projects).  Rendering is kept
separate from writing so the file set can be inspected without touching the
file system.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from nodegen.models import ProjectRequest

from .project_types import ENTRY_POINT, ProjectTypeSpec, get_spec
from .templates import TemplateRenderer, write_files


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a generator run has to abort."""


# ---------------------------------------------------------------------------
# Files shared by every project type (output name -> template)
# ---------------------------------------------------------------------------

COMMON_FILES: dict[str, str] = {
    "package.json": "common/package.json.j2",
    ".env": "common/env.j2",
}


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Scaffolds one project from a ``ProjectRequest``.

    The generated tree contains:
    - ``package.json`` with the resolved name and the type's dependencies
    - ``.env`` silencing Node's experimental-feature warnings
    - ``src/index.ts`` and any extra files from the type's template directory
    """

    def __init__(
        self,
        request: ProjectRequest,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.request = request
        self.spec: ProjectTypeSpec = get_spec(request.project_type)
        self.renderer = renderer or TemplateRenderer()
        self.written_files: list[Path] = []

    # -- Public API --------------------------------------------------------

    def generate(self) -> Path:
        """Create the project directory and write every rendered file.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: If the project directory cannot be created.
        """
        root = self.create_directory()
        self.written_files = write_files(root, self.render_files())
        return root

    def create_directory(self) -> Path:
        """Create the (new, empty) project root.

        An existing directory of the same name is an error; nothing inside
        it is touched.
        """
        target = self.request.target_directory
        root = self.request.project_root
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError(f"Failed to create directory '{target}': {exc}") from exc
        try:
            root.mkdir()
        except FileExistsError:
            raise ScaffoldError(f"Directory '{root}' already exists.") from None
        except OSError as exc:
            raise ScaffoldError(f"Failed to create directory '{root}': {exc}") from exc
        return root

    def render_files(self) -> dict[str, str]:
        """Render the full file set without writing anything.

        Returns:
            Mapping of project-relative path to file content.
        """
        context = self.build_context()
        files = {
            output_name: self.renderer.render(template_name, context)
            for output_name, template_name in COMMON_FILES.items()
        }
        files.update(self.renderer.render_tree(self.spec.template_dir, context))
        return files

    # -- Context building --------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the request and type spec."""
        return {
            "project_name": self.request.name,
            "project_type": self.spec.project_type.value,
            "type_label": self.spec.label,
            "entry_point": ENTRY_POINT,
            "dependencies": dict(sorted(self.spec.dependencies.items())),
            "dev_dependencies": self.spec.all_dev_dependencies,
            **self.spec.extra_context,
        }
