"""Shared pytest fixtures for the nodegen test suite.

Provides reusable fixtures for:
- A Terminal that records output and reads prompt answers from a string
- A fake command runner and ``which`` lookup for the toolchain
- A Config pointing at a temporary output directory
"""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from nodegen.config import Config
from nodegen.toolchain import ToolchainInvoker
from nodegen.utils import Terminal


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class RecordingTerminal(Terminal):
    """Terminal writing plain text into a buffer, answering prompts from *answers*."""

    def __init__(self, answers: str = "", color: bool = False) -> None:
        self.buffer = io.StringIO()
        console = Console(
            file=self.buffer,
            color_system="truecolor" if color else None,
            force_terminal=color,
            highlight=False,
            soft_wrap=True,
            width=200,
        )
        super().__init__(console=console, stream=io.StringIO(answers))

    @property
    def output(self) -> str:
        return self.buffer.getvalue()

    @property
    def unread_input(self) -> str:
        return self.stream.read()


@pytest.fixture
def make_terminal() -> Callable[..., RecordingTerminal]:
    """Factory: ``make_terminal("y\\n")`` answers the first prompt with yes."""
    return RecordingTerminal


@pytest.fixture
def terminal() -> RecordingTerminal:
    """A terminal with no prompt answers (every read hits end of input)."""
    return RecordingTerminal()


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


class FakeRunner:
    """Stands in for ``run_command``; records calls and returns canned results.

    ``results`` maps the executable's basename to ``(returncode, stdout, stderr)``.
    Unlisted commands succeed.
    """

    def __init__(self, results: dict[str, tuple[int, str, str]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[dict[str, Any]] = []
        self.on_call: Callable[[list[str]], None] | None = None

    def __call__(self, cmd: list[str], cwd: Path | None = None, timeout: int | None = None, **kwargs: Any):
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "timeout": timeout})
        if self.on_call is not None:
            self.on_call(cmd)
        return self.results.get(Path(cmd[0]).name, (0, "", ""))

    @property
    def commands(self) -> list[list[str]]:
        return [call["cmd"] for call in self.calls]


class FakeWhich:
    """Stands in for ``shutil.which`` with a mutable set of installed tools."""

    def __init__(self, available: set[str] | None = None) -> None:
        self.available = set(available or ())
        self.lookups: list[tuple[str, str | None]] = []

    def __call__(self, tool: str, mode: int = 0, path: str | None = None) -> str | None:
        self.lookups.append((tool, path))
        if tool not in self.available:
            return None
        if path is not None:
            return str(Path(path) / tool)
        return f"/usr/bin/{tool}"


ALL_TOOLS = {"npm", "tsc", "antlr4", "java"}


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_which() -> FakeWhich:
    """Every tool the generators use is installed."""
    return FakeWhich(ALL_TOOLS)


@pytest.fixture
def make_invoker(fake_runner: FakeRunner, fake_which: FakeWhich):
    """Factory building a ToolchainInvoker wired to the fakes."""

    def _make(terminal: Terminal, system: str = "Linux") -> ToolchainInvoker:
        return ToolchainInvoker(terminal, runner=fake_runner, which=fake_which, system=system)

    return _make


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config creating projects under a temporary directory."""
    output = tmp_path / "projects"
    output.mkdir()
    return Config(output_dir=output, bin_dir=tmp_path / "bin")


def project_files(root: Path) -> set[str]:
    """All files below *root*, as POSIX paths relative to it."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


@pytest.fixture
def list_files() -> Callable[[Path], set[str]]:
    return project_files
