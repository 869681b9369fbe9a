"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``nodegen/scaffolder/templates/`` directory and renders them with
project-specific context data.  Rendering never touches the file system
outside the template directory: every render method returns content, and
``write_files`` persists a rendered file set in a separate step.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary that
    typically contains the project name, the type label and the dependency
    tables.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["title_case"] = _title_case_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"common/package.json.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Tree rendering ------------------------------------------------------

    def render_tree(self, template_prefix: str, context: dict[str, Any]) -> dict[str, str]:
        """Render every ``*.j2`` file under *template_prefix*.

        The directory structure is preserved: a template at
        ``antlr4/src/grammar/Expr.g4.j2`` rendered with
        ``template_prefix="antlr4"`` is returned under the key
        ``"src/grammar/Expr.g4"``.

        Returns:
            Mapping of project-relative POSIX path to rendered content.
        """
        prefix_path = self.template_dir / template_prefix
        if not prefix_path.is_dir():
            return {}

        rendered: dict[str, str] = {}
        for template_file in sorted(prefix_path.rglob("*.j2")):
            rel_str = template_file.relative_to(prefix_path).as_posix()
            output_name = rel_str[: -len(".j2")]
            rendered[output_name] = self.render(f"{template_prefix}/{rel_str}", context)

        return rendered


# ---------------------------------------------------------------------------
# Writing rendered files
# ---------------------------------------------------------------------------


def write_files(root: Path, files: dict[str, str]) -> list[Path]:
    """Write a rendered file set below *root*.

    Parent directories inside *root* are created automatically; *root* itself
    must already exist.

    Returns:
        The written paths, in the order of *files*.
    """
    written: list[Path] = []
    for rel_path, content in files.items():
        out = root / rel_path
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        written.append(out)
    return written


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _title_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``Some Thing``."""
    parts = re.split(r"[-_\s]+", value)
    return " ".join(word.capitalize() for word in parts if word)
