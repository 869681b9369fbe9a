"""Interactive menu that dispatches to one of the project generators.

The selector lists every ``ProjectType`` plus an Exit entry, reads a choice
and runs the matching generator with the same configuration, so ``--color``
and ``-y`` given to the selector apply to the generator unchanged.
"""

from __future__ import annotations

import sys

from nodegen.cli import (
    apply_args,
    build_parser,
    exit_code_of,
    generate_project,
    parse_args,
    run_main,
    warn_ignored,
)
from nodegen.config import Config
from nodegen.models import ProjectType
from nodegen.scaffolder import PROJECT_TYPES
from nodegen.toolchain import ToolchainInvoker
from nodegen.utils import Terminal

EXIT_WORDS = {"exit", "quit", "q"}


def menu_entries() -> list[tuple[str, ProjectType | None]]:
    """Numbered menu rows in display order; ``None`` marks Exit."""
    entries: list[tuple[str, ProjectType | None]] = [
        (spec.label, project_type) for project_type, spec in PROJECT_TYPES.items()
    ]
    entries.append(("Exit", None))
    return entries


def match_choice(
    answer: str, entries: list[tuple[str, ProjectType | None]]
) -> tuple[bool, ProjectType | None]:
    """Interpret one menu answer.

    Accepts the entry number, the label (case-insensitive), the project type
    value (``plain``, ``antlr4``, ``blessed``) or an exit word.

    Returns:
        ``(recognized, project_type)``; an Exit choice is ``(True, None)``.
    """
    text = answer.strip().lower()
    if not text:
        return False, None
    if text in EXIT_WORDS:
        return True, None
    if text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(entries):
            return True, entries[index][1]
        return False, None
    for label, project_type in entries:
        if text == label.lower():
            return True, project_type
        if project_type is not None and text == project_type.value:
            return True, project_type
    return False, None


def select_project_type(terminal: Terminal) -> tuple[bool, ProjectType | None]:
    """Show the menu until a valid choice is made.

    Returns:
        ``(True, type)`` for a project choice, ``(True, None)`` for Exit and
        ``(False, None)`` when input ended before a choice.
    """
    entries = menu_entries()
    terminal.panel(
        [f"{number}) {label}" for number, (label, _) in enumerate(entries, start=1)],
        title="Select a project type",
    )
    while True:
        try:
            answer = terminal.read_choice(f"Enter choice [1-{len(entries)}]:")
        except EOFError:
            terminal.blank()
            return False, None
        recognized, project_type = match_choice(answer, entries)
        if recognized:
            return True, project_type
        terminal.error(f"Invalid choice '{answer}'. Please pick a number from 1 to {len(entries)}.")


def run_selector(
    argv: list[str] | None = None,
    *,
    config: Config | None = None,
    terminal: Terminal | None = None,
    invoker: ToolchainInvoker | None = None,
) -> int:
    """Parse shared flags, show the menu and run the chosen generator.

    Returns:
        The chosen generator's exit code, 0 for Exit, or 1 when input ended
        before a choice was made.
    """
    parser = build_parser(
        "project-selector",
        "Choose a project type and scaffold it in a new directory.",
        with_name=False,
    )
    try:
        args, unknown_flags, positionals = parse_args(parser, argv)
    except SystemExit as exc:
        return exit_code_of(exc)

    config = apply_args(config or Config.from_env(), args)
    terminal = terminal or Terminal(color=config.color)
    warn_ignored(terminal, unknown_flags, positionals)

    chosen, project_type = select_project_type(terminal)
    if not chosen:
        terminal.error("No project type selected.")
        return 1
    if project_type is None:
        terminal.info("Exiting.")
        return 0
    return generate_project(
        project_type, None, config=config, terminal=terminal, invoker=invoker
    )


def main() -> None:
    """Entry point for ``project-selector`` and ``python -m nodegen``."""
    run_main(lambda: run_selector(sys.argv[1:]))
