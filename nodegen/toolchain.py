"""Best-effort external tooling for generated projects.

After the files are written, a generator runs an ordered list of
``ToolchainStep`` objects (dependency install, ``tsc --init``, and the ANTLR4
grammar compiler for grammar projects).  A missing tool or a failing command
never aborts the run: each step yields a ``StepResult`` and the results are
collected in a ``RunReport``.

The ANTLR4 generator additionally runs ``ensure_java_runtime`` before it asks
for a project name, attempting an OS package-manager install when ``java`` is
not on PATH.
"""

from __future__ import annotations

import platform
import shutil
from collections.abc import Callable
from pathlib import Path

from nodegen.config import ToolchainConfig
from nodegen.models import RunReport, StepResult, StepStatus, ToolchainStep
from nodegen.scaffolder.project_types import ProjectTypeSpec
from nodegen.utils import Terminal, run_command

Runner = Callable[..., tuple[int, str, str]]
Which = Callable[..., str | None]


# ---------------------------------------------------------------------------
# Step lists
# ---------------------------------------------------------------------------


def build_steps(spec: ProjectTypeSpec, config: ToolchainConfig) -> list[ToolchainStep]:
    """Return the ordered toolchain steps for a project type."""
    steps = [
        ToolchainStep(
            name="Install dependencies",
            tool=config.package_manager,
            args=list(config.install_args),
            missing_hint=f"install {config.package_manager} and run it in the project directory",
        ),
        ToolchainStep(
            name="Create tsconfig.json",
            tool="tsc",
            args=[
                "--init",
                "--target", "es2022",
                "--module", "nodenext",
                "--rootDir", "src",
                "--outDir", "dist",
            ],
            project_local=True,
            missing_hint="TypeScript was not installed into node_modules; run 'npx tsc --init' later",
        ),
    ]
    steps.extend(spec.extra_steps)
    return steps


# ---------------------------------------------------------------------------
# Java runtime installers (probe executable, commands run in order)
# ---------------------------------------------------------------------------

LINUX_JAVA_INSTALLERS: list[tuple[str, list[list[str]]]] = [
    (
        "apt-get",
        [
            ["sudo", "apt-get", "update"],
            ["sudo", "apt-get", "install", "-y", "default-jre"],
        ],
    ),
    ("dnf", [["sudo", "dnf", "install", "-y", "java-17-openjdk"]]),
    ("yum", [["sudo", "yum", "install", "-y", "java-17-openjdk"]]),
]

MACOS_JAVA_INSTALLERS: list[tuple[str, list[list[str]]]] = [
    ("brew", [["brew", "install", "openjdk"]]),
]


# ---------------------------------------------------------------------------
# Invoker
# ---------------------------------------------------------------------------


class ToolchainInvoker:
    """Runs toolchain steps inside a project directory.

    Args:
        terminal: Where progress and warnings are reported.
        config: Package manager and timeout settings.
        runner: Command runner with the signature of ``run_command``.
        which: Executable lookup with the signature of ``shutil.which``.
        system: OS name as returned by ``platform.system()``.
    """

    def __init__(
        self,
        terminal: Terminal,
        config: ToolchainConfig | None = None,
        *,
        runner: Runner = run_command,
        which: Which = shutil.which,
        system: str | None = None,
    ) -> None:
        self.terminal = terminal
        self.config = config or ToolchainConfig()
        self.runner = runner
        self.which = which
        self.system = system or platform.system()

    # -- Steps ---------------------------------------------------------------

    def run(self, steps: list[ToolchainStep], cwd: Path) -> RunReport:
        """Run every step in order and collect the outcomes."""
        report = RunReport()
        for step in steps:
            result = report.add(self.run_step(step, cwd))
            if result.status == StepStatus.OK:
                self.terminal.success(f"{step.name}: done.")
            else:
                self.terminal.warning(f"{step.name}: {result.message}")
        return report

    def run_step(self, step: ToolchainStep, cwd: Path) -> StepResult:
        """Resolve the step's tool and run it; never raises for tool failures."""
        executable = self._resolve(step, cwd)
        if executable is None:
            message = f"'{step.tool}' not found, skipped."
            if step.missing_hint:
                message = f"{message} To finish setup, {step.missing_hint}."
            return StepResult(name=step.name, status=StepStatus.SKIPPED, message=message)

        self.terminal.info(f"Running {step.tool} {' '.join(step.args)}".rstrip())
        returncode, _stdout, stderr = self.runner(
            [executable, *step.args],
            cwd=cwd,
            timeout=self.config.command_timeout,
        )
        if returncode != 0:
            tail = stderr.splitlines()[-1] if stderr else "no error output"
            return StepResult(
                name=step.name,
                status=StepStatus.WARNING,
                message=f"exited with code {returncode} ({tail})",
            )
        return StepResult(name=step.name, status=StepStatus.OK)

    def _resolve(self, step: ToolchainStep, cwd: Path) -> str | None:
        if step.project_local:
            return self.which(step.tool, path=str(cwd / "node_modules" / ".bin"))
        return self.which(step.tool)

    # -- Java pre-flight -----------------------------------------------------

    def ensure_java_runtime(self) -> StepResult:
        """Make sure ``java`` is available, installing it when possible.

        Returns:
            ``OK`` when Java was found or installed, ``WARNING`` when no
            installer is available for this OS or the install failed.
        """
        name = "Java runtime"
        if self.which("java"):
            return StepResult(name=name, status=StepStatus.OK, message="already installed")

        self.terminal.warning("Java runtime not found; the ANTLR4 grammar compiler needs it.")
        commands = self._java_install_commands()
        if commands is None:
            result = StepResult(
                name=name,
                status=StepStatus.WARNING,
                message=f"no supported package manager on {self.system}; install Java manually",
            )
            self.terminal.warning(result.message)
            return result

        returncode, stderr = 0, ""
        for command in commands:
            self.terminal.info(f"Attempting to install Java: {' '.join(command)}")
            returncode, _stdout, stderr = self.runner(command, timeout=self.config.command_timeout)
            if returncode != 0:
                break
        if returncode != 0 or not self.which("java"):
            detail = stderr.splitlines()[-1] if stderr else f"exit code {returncode}"
            result = StepResult(
                name=name,
                status=StepStatus.WARNING,
                message=f"installation failed ({detail}); grammar compilation may be skipped",
            )
            self.terminal.warning(result.message)
            return result

        self.terminal.success("Java runtime installed.")
        return StepResult(name=name, status=StepStatus.OK, message="installed")

    def _java_install_commands(self) -> list[list[str]] | None:
        if self.system == "Linux":
            candidates = LINUX_JAVA_INSTALLERS
        elif self.system == "Darwin":
            candidates = MACOS_JAVA_INSTALLERS
        else:
            return None
        for probe, commands in candidates:
            if self.which(probe):
                return [list(command) for command in commands]
        return None
