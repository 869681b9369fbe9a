"""Shared utility functions for nodegen.

Provides blocking command execution and the ``Terminal`` object that every
component uses for Rich-based status output and interactive prompts.  The
terminal is passed around explicitly so that color and input handling are
configured once per run and can be swapped out in tests.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
) -> tuple[int, str, str]:
    """Run a command and wait for it to finish.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A command that cannot be
        started returns ``127`` and a timeout returns ``-1``; neither raises.
    """
    display = " ".join(cmd)
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except subprocess.TimeoutExpired:
        return (-1, "", f"Command timed out after {timeout}s: {display}")
    except FileNotFoundError:
        return (127, "", f"Command not found: {display}")
    except OSError as exc:
        return (126, "", f"Cannot run {display}: {exc}")

    stdout_str = (completed.stdout or "").strip()
    stderr_str = (completed.stderr or "").strip()
    return (completed.returncode, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Terminal output and prompts
# ---------------------------------------------------------------------------


def make_console(color: bool = False, file: TextIO | None = None) -> Console:
    """Create a Rich console that only emits color codes when *color* is set."""
    if color:
        return Console(file=file, force_terminal=True, color_system="standard", highlight=False)
    return Console(file=file, color_system=None, highlight=False)


class Terminal:
    """Categorized status output and prompts for one CLI run.

    Messages fall into four categories (info, success, warning, error).
    Warnings and errors carry a textual marker so they stay distinguishable
    when color is disabled.

    Attributes:
        console: The Rich console all output is written to.
        stream: Input stream for prompts; ``None`` reads from stdin.
    """

    def __init__(
        self,
        console: Console | None = None,
        stream: TextIO | None = None,
        *,
        color: bool = False,
    ) -> None:
        self.console = console or make_console(color)
        self.stream = stream

    # -- Messages ------------------------------------------------------------

    def info(self, message: str) -> None:
        """Print a neutral progress message."""
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def success(self, message: str) -> None:
        """Print a green success message."""
        self.console.print(f"[bold green]{escape(message)}[/bold green]")

    def warning(self, message: str) -> None:
        """Print a yellow warning message."""
        self.console.print(f"[bold yellow]Warning:[/bold yellow] [yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print a red error message."""
        self.console.print(f"[bold red]Error:[/bold red] [red]{escape(message)}[/red]")

    def detail(self, message: str) -> None:
        self.console.print(f"  [dim]{escape(message)}[/dim]")

    def blank(self) -> None:
        self.console.print()

    # -- Prompts -------------------------------------------------------------

    def ask(self, prompt: str) -> str:
        """Prompt for a line of text.

        An empty answer and end of input are both returned as ``""``.
        """
        try:
            return Prompt.ask(escape(prompt), console=self.console, stream=self.stream)
        except EOFError:
            self.console.print()
            return ""

    def confirm(self, prompt: str, default: bool = False) -> bool:
        """Ask a yes/no question.  End of input counts as *default*."""
        try:
            return Confirm.ask(
                escape(prompt), console=self.console, default=default, stream=self.stream
            )
        except EOFError:
            self.console.print()
            return default

    def read_choice(self, prompt: str) -> str:
        """Read one raw answer from the user.

        Raises:
            EOFError: When the input stream is exhausted.
        """
        line = self.console.input(f"{escape(prompt)} ", stream=self.stream)
        if self.stream is not None and line == "":
            raise EOFError("end of input")
        return line.strip()

    # -- Structured output ---------------------------------------------------

    def panel(self, lines: list[str], title: str) -> None:
        """Print pre-formatted lines inside a titled box."""
        body = "\n".join(escape(line) for line in lines)
        self.console.print(Panel(body, title=escape(title), expand=False))

    def summary_table(self, rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
        """Print a three-column step/status/detail table.

        Args:
            rows: ``(step, status, detail)`` tuples.
            title: Table title.
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Step", style="dim", no_wrap=True)
        table.add_column("Status", no_wrap=True)
        table.add_column("Detail")

        styles = {"ok": "green", "warning": "yellow", "skipped": "yellow"}
        for step, status, detail in rows:
            style = styles.get(status, "white")
            table.add_row(escape(step), f"[{style}]{escape(status)}[/{style}]", escape(detail))

        self.console.print(table)
        self.console.print()
