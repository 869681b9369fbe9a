"""Pydantic models shared by the generators, the toolchain and the CLI."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


_PATH_SEPARATORS = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())


class ProjectType(str, Enum):
    """Kinds of project a generator can scaffold."""

    PLAIN = "plain"
    ANTLR4 = "antlr4"
    BLESSED_TUI = "blessed"


class ProjectRequest(BaseModel):
    """A validated request to scaffold one project.

    Constructing the model validates the name, so a request that exists has
    a name that is safe to use as a directory.
    """

    name: str
    project_type: ProjectType
    target_directory: Path
    color_output: bool = False
    non_interactive: bool = False

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value:
            raise ValueError("project name must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError(f"project name '{value}' must not contain whitespace")
        if value in (".", "..") or any(sep in value for sep in _PATH_SEPARATORS):
            raise ValueError(f"project name '{value}' must be a single directory name")
        return value

    @property
    def project_root(self) -> Path:
        return self.target_directory / self.name


class ToolchainStep(BaseModel):
    """One external command run inside a freshly generated project.

    ``tool`` is looked up on PATH, or in ``node_modules/.bin`` of the
    project when ``project_local`` is set.  A step whose tool is missing is
    skipped with a warning instead of being run.
    """

    name: str
    tool: str
    args: list[str] = Field(default_factory=list)
    project_local: bool = False
    missing_hint: str = ""


class StepStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    SKIPPED = "skipped"


class StepResult(BaseModel):
    """Outcome of one toolchain step."""

    name: str
    status: StepStatus
    message: str = ""


class RunReport(BaseModel):
    """Ordered results of every toolchain step in a generator run."""

    steps: list[StepResult] = Field(default_factory=list)

    def add(self, result: StepResult) -> StepResult:
        self.steps.append(result)
        return result

    @property
    def warnings(self) -> list[StepResult]:
        """Every step that did not finish cleanly."""
        return [s for s in self.steps if s.status != StepStatus.OK]

    @property
    def ok(self) -> bool:
        return not self.warnings

    def rows(self) -> list[tuple[str, str, str]]:
        return [(s.name, s.status.value, s.message) for s in self.steps]
