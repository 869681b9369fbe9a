"""nodegen scaffolder -- renders and writes starter project trees.

Quick usage::

    from nodegen.scaffolder import ProjectGenerator

    generator = ProjectGenerator(request)
    files = generator.render_files()   # {"package.json": "...", ...}
    project_path = generator.generate()
"""

from nodegen.scaffolder.generator import COMMON_FILES, ProjectGenerator, ScaffoldError
from nodegen.scaffolder.project_types import PROJECT_TYPES, ProjectTypeSpec, get_spec
from nodegen.scaffolder.templates import TemplateRenderer, write_files

__all__ = [
    "COMMON_FILES",
    "PROJECT_TYPES",
    "ProjectGenerator",
    "ProjectTypeSpec",
    "ScaffoldError",
    "TemplateRenderer",
    "get_spec",
    "write_files",
]
