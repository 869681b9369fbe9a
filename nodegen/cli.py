"""Command-line entry points for the project generators.

Every generator follows the same flow::

    ParseArgs -> [Java pre-flight] -> ResolveName -> ValidateName
      -> CreateDirectory -> EmitFiles -> InvokeToolchain -> Done

Only name resolution, name validation and directory creation can abort a run
(exit code 1).  Toolchain steps only add warnings to the run report.

Usage::

    project-generator my-app
    project-generator-antlr4 -y --color
    project-generator-blessedjs my-tui -o ~/code
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from nodegen.config import Config
from nodegen.models import ProjectRequest, ProjectType, StepResult
from nodegen.scaffolder import ProjectGenerator, ScaffoldError, get_spec
from nodegen.scaffolder.project_types import ProjectTypeSpec
from nodegen.toolchain import ToolchainInvoker, build_steps
from nodegen.utils import Terminal


GENERATOR_COMMANDS: dict[ProjectType, str] = {
    ProjectType.PLAIN: "project-generator",
    ProjectType.ANTLR4: "project-generator-antlr4",
    ProjectType.BLESSED_TUI: "project-generator-blessedjs",
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser(
    prog: str,
    description: str,
    *,
    with_name: bool = True,
    with_output: bool = True,
) -> argparse.ArgumentParser:
    """Create the parser shared by the generators and the selector."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Unknown options and extra arguments are ignored with a warning.\n"
            "Environment: NODEGEN_OUTPUT_DIR, NODEGEN_PACKAGE_MANAGER, NODEGEN_COLOR"
        ),
    )
    if with_name:
        parser.add_argument(
            "names",
            nargs="*",
            metavar="PROJECT_NAME",
            help="Name of the project directory to create (no whitespace)",
        )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize status output",
    )
    parser.add_argument(
        "-y", "--yes",
        dest="yes",
        action="store_true",
        help="Non-interactive: skip confirmation prompts and accept defaults",
    )
    if with_output:
        parser.add_argument(
            "--output-dir", "-o",
            default=None,
            help="Directory in which the project is created (default: current directory)",
        )
    return parser


def parse_args(
    parser: argparse.ArgumentParser, argv: list[str] | None
) -> tuple[argparse.Namespace, list[str], list[str]]:
    """Parse *argv* permissively.

    Returns:
        ``(namespace, unknown_flags, extra_positionals)``.  The first
        positional stays in ``namespace.names``; everything else that was not
        understood is returned so the caller can warn about it.

    Raises:
        SystemExit: For ``--help`` and for malformed known options.
    """
    args, extras = parser.parse_known_args(argv)
    names: list[str] = list(getattr(args, "names", []))
    unknown_flags = [tok for tok in extras if tok.startswith("-") and tok != "-"]
    positionals = names[1:] + [tok for tok in extras if tok not in unknown_flags]
    if hasattr(args, "names"):
        args.names = names[:1]
    return args, unknown_flags, positionals


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    """Overlay command-line flags on a config loaded from the environment."""
    update: dict[str, object] = {
        "color": config.color or args.color,
        "assume_yes": config.assume_yes or args.yes,
    }
    output_dir = getattr(args, "output_dir", None)
    if output_dir:
        update["output_dir"] = Path(output_dir).expanduser()
    return config.model_copy(update=update)


def warn_ignored(terminal: Terminal, unknown_flags: list[str], positionals: list[str]) -> None:
    for flag in unknown_flags:
        terminal.warning(f"Unknown option '{flag}' ignored.")
    for token in positionals:
        terminal.warning(f"Extra argument '{token}' ignored.")


def exit_code_of(exc: SystemExit) -> int:
    if exc.code is None:
        return 0
    return exc.code if isinstance(exc.code, int) else 1


# ---------------------------------------------------------------------------
# Generator flow
# ---------------------------------------------------------------------------


def resolve_name(
    spec: ProjectTypeSpec,
    name: str | None,
    config: Config,
    terminal: Terminal,
) -> str:
    """Decide the project name from the argument, the prompt or the default.

    Raises:
        ScaffoldError: If the user declines the supplied name.
    """
    if name is not None:
        if config.assume_yes:
            return name
        if terminal.confirm(f"Use '{name}' as the project name?", default=False):
            return name
        raise ScaffoldError("Project name not confirmed. Aborting.")

    if config.assume_yes:
        terminal.info(f"No project name given, using default '{spec.default_name}'.")
        return spec.default_name
    return terminal.ask("Enter a name for the new project")


def build_request(spec: ProjectTypeSpec, name: str, config: Config) -> ProjectRequest:
    """Validate *name* by building the request.

    Raises:
        ScaffoldError: If the name is empty or contains whitespace.
    """
    try:
        return ProjectRequest(
            name=name,
            project_type=spec.project_type,
            target_directory=config.output_dir,
            color_output=config.color,
            non_interactive=config.assume_yes,
        )
    except ValidationError:
        raise ScaffoldError(
            f"Invalid project name '{name}': it must be a single directory name with no whitespace."
        ) from None


def generate_project(
    project_type: ProjectType,
    name: str | None,
    *,
    config: Config,
    terminal: Terminal,
    invoker: ToolchainInvoker | None = None,
) -> int:
    """Run one generator from pre-flight to summary.

    Returns:
        The process exit code: 0 on completion (toolchain warnings included),
        1 when the run was aborted.
    """
    spec = get_spec(project_type)
    invoker = invoker or ToolchainInvoker(terminal, config.toolchain)
    terminal.info(f"Creating a new {spec.label}.")

    preflight: StepResult | None = None
    if spec.requires_java:
        preflight = invoker.ensure_java_runtime()

    try:
        resolved = resolve_name(spec, name, config, terminal)
        request = build_request(spec, resolved, config)
        generator = ProjectGenerator(request)
        root = generator.generate()
        terminal.success(f"Created directory {root}")
        for path in generator.written_files:
            terminal.detail(f"wrote {path.relative_to(root).as_posix()}")
    except ScaffoldError as exc:
        terminal.error(str(exc))
        return 1

    report = invoker.run(build_steps(spec, config.toolchain), root)
    if preflight is not None:
        report.steps.insert(0, preflight)

    terminal.blank()
    terminal.summary_table(report.rows(), title=f"{request.name} setup")
    if report.warnings:
        terminal.warning(
            f"Setup finished with {len(report.warnings)} warning(s); see the table above."
        )
    terminal.success(f"Project '{request.name}' is ready.")
    terminal.panel(
        [f"cd {root}", "npm start"] + (["npm run grammar"] if spec.requires_java else []),
        title="Next steps",
    )
    return 0


def run_generator(
    project_type: ProjectType,
    argv: list[str] | None = None,
    *,
    config: Config | None = None,
    terminal: Terminal | None = None,
    invoker: ToolchainInvoker | None = None,
) -> int:
    """Parse *argv* and run the generator for *project_type*.

    Args:
        project_type: Which generator to run.
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).
        config: Base configuration; loaded from the environment if omitted.
        terminal: Output/prompt target; built from the color flag if omitted.
        invoker: Toolchain invoker; a real one is built if omitted.

    Returns:
        The process exit code.
    """
    spec = get_spec(project_type)
    parser = build_parser(
        GENERATOR_COMMANDS[project_type],
        f"Scaffold a new {spec.label} in a new directory.",
    )
    try:
        args, unknown_flags, positionals = parse_args(parser, argv)
    except SystemExit as exc:
        return exit_code_of(exc)

    config = apply_args(config or Config.from_env(), args)
    terminal = terminal or Terminal(color=config.color)
    warn_ignored(terminal, unknown_flags, positionals)

    name = args.names[0] if args.names else None
    return generate_project(
        project_type, name, config=config, terminal=terminal, invoker=invoker
    )


# ---------------------------------------------------------------------------
# Console scripts
# ---------------------------------------------------------------------------


def run_main(entry: Callable[[], int]) -> None:
    try:
        code = entry()
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


def main_plain() -> None:
    """Entry point for ``project-generator``."""
    run_main(lambda: run_generator(ProjectType.PLAIN))


def main_antlr4() -> None:
    """Entry point for ``project-generator-antlr4``."""
    run_main(lambda: run_generator(ProjectType.ANTLR4))


def main_blessed() -> None:
    """Entry point for ``project-generator-blessedjs``."""
    run_main(lambda: run_generator(ProjectType.BLESSED_TUI))
