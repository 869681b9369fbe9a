"""nodegen -- scaffolds starter NodeJS/TypeScript projects.

Three project types are available (plain TypeScript, ANTLR4 grammar, Blessed
terminal UI).  Each generator writes a ``package.json``, a ``.env`` file and
source stubs from Jinja2 templates, then runs the package manager and the
TypeScript/ANTLR4 tooling on a best-effort basis.

Quick usage::

    from pathlib import Path

    from nodegen import ProjectGenerator, ProjectRequest, ProjectType

    request = ProjectRequest(
        name="my-app",
        project_type=ProjectType.PLAIN,
        target_directory=Path.cwd(),
    )
    project_path = ProjectGenerator(request).generate()
"""

from nodegen.models import ProjectRequest, ProjectType, RunReport, StepResult
from nodegen.scaffolder import PROJECT_TYPES, ProjectGenerator, TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "PROJECT_TYPES",
    "ProjectGenerator",
    "ProjectRequest",
    "ProjectType",
    "RunReport",
    "StepResult",
    "TemplateRenderer",
]
