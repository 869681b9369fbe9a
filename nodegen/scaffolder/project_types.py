"""Per-type definitions for the three project generators.

Each ``ProjectType`` maps to a ``ProjectTypeSpec`` describing what makes that
generator different: its menu label, the default project name, the template
subdirectory with its extra files, the pinned npm dependencies and the
toolchain steps that run after the shared ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nodegen.models import ProjectType, ToolchainStep


# ---------------------------------------------------------------------------
# Shared manifest content
# ---------------------------------------------------------------------------

ENTRY_POINT = "src/index.ts"

BASE_DEV_DEPENDENCIES: dict[str, str] = {
    "@types/node": "^22.15.17",
    "typescript": "^5.8.3",
}

GRAMMAR_PATH = "src/grammar/Expr.g4"
GRAMMAR_OUTPUT_DIR = "src/generated"

FILLER_PARAGRAPHS: list[str] = [
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Integer nec odio. "
    "Praesent libero. Sed cursus ante dapibus diam. Sed nisi.",
    "Nulla quis sem at nibh elementum imperdiet. Duis sagittis ipsum. Praesent "
    "mauris. Fusce nec tellus sed augue semper porta. Mauris massa.",
    "Vestibulum lacinia arcu eget nulla. Class aptent taciti sociosqu ad litora "
    "torquent per conubia nostra, per inceptos himenaeos.",
    "Curabitur sodales ligula in libero. Sed dignissim lacinia nunc. Curabitur "
    "tortor. Pellentesque nibh. Aenean quam. In scelerisque sem at dolor.",
]


# ---------------------------------------------------------------------------
# Spec model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProjectTypeSpec:
    """Static description of one project type."""

    project_type: ProjectType
    label: str
    default_name: str
    template_dir: str
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    extra_steps: tuple[ToolchainStep, ...] = ()
    requires_java: bool = False
    extra_context: dict[str, Any] = field(default_factory=dict)

    @property
    def all_dev_dependencies(self) -> dict[str, str]:
        """Base dev-dependencies merged with the type's own, sorted by name."""
        merged = {**BASE_DEV_DEPENDENCIES, **self.dev_dependencies}
        return dict(sorted(merged.items()))


# ---------------------------------------------------------------------------
# The three project types
# ---------------------------------------------------------------------------

PROJECT_TYPES: dict[ProjectType, ProjectTypeSpec] = {
    ProjectType.PLAIN: ProjectTypeSpec(
        project_type=ProjectType.PLAIN,
        label="NodeJS/TypeScript project",
        default_name="my-new-project",
        template_dir="plain",
    ),
    ProjectType.ANTLR4: ProjectTypeSpec(
        project_type=ProjectType.ANTLR4,
        label="NodeJS/TypeScript project with ANTLR4",
        default_name="my-antlr4-project",
        template_dir="antlr4",
        dependencies={"antlr4": "^4.13.2"},
        extra_steps=(
            ToolchainStep(
                name="Compile grammar",
                tool="antlr4",
                args=[
                    "-Dlanguage=TypeScript",
                    "-visitor",
                    "-o",
                    GRAMMAR_OUTPUT_DIR,
                    "-Xexact-output-dir",
                    GRAMMAR_PATH,
                ],
                missing_hint="install antlr4-tools ('pip install antlr4-tools') and re-run the step",
            ),
        ),
        requires_java=True,
        extra_context={"grammar_path": GRAMMAR_PATH, "grammar_output_dir": GRAMMAR_OUTPUT_DIR},
    ),
    ProjectType.BLESSED_TUI: ProjectTypeSpec(
        project_type=ProjectType.BLESSED_TUI,
        label="NodeJS/TypeScript TUI project with Blessed",
        default_name="my-blessed-tui",
        template_dir="blessed",
        dependencies={"blessed": "^0.1.81"},
        dev_dependencies={"@types/blessed": "^0.1.25"},
        extra_context={"filler_paragraphs": FILLER_PARAGRAPHS},
    ),
}


def get_spec(project_type: ProjectType) -> ProjectTypeSpec:
    return PROJECT_TYPES[project_type]
