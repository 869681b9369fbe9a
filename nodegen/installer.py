"""Install the nodegen commands into a user-local bin directory.

pip places the console scripts next to the interpreter (for example inside a
virtualenv).  The installer links each of them into ``~/.local/bin`` so the
generators can be run from anywhere, and warns when that directory is not on
``PATH``.

Usage::

    project-generator-install
    project-generator-install --bin-dir ~/bin --source-dir .venv/bin
"""

from __future__ import annotations

import os
import stat
import sys
import sysconfig
from dataclasses import dataclass, field
from pathlib import Path

from nodegen.cli import apply_args, build_parser, exit_code_of, parse_args, run_main, warn_ignored
from nodegen.config import Config
from nodegen.utils import Terminal


# (script name in the source directory, link name in the bin directory)
DEFAULT_ENTRIES: list[tuple[str, str]] = [
    ("project-selector", "project-selector"),
    ("project-generator", "project-generator"),
    ("project-generator-antlr4", "project-generator-antlr4"),
    ("project-generator-blessedjs", "project-generator-blessedjs"),
]


class InstallerError(Exception):
    """Raised when the bin directory cannot be created."""


@dataclass
class InstallReport:
    """What happened to each entry during one installer run."""

    linked: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    on_path: bool = True


def default_source_dir() -> Path:
    """Directory holding the console scripts of the running interpreter."""
    return Path(sysconfig.get_path("scripts"))


class Installer:
    """Links console scripts into *bin_dir*.

    Re-running is safe: an existing file or link with the alias name is
    replaced.
    """

    def __init__(
        self,
        terminal: Terminal,
        source_dir: Path,
        bin_dir: Path,
        entries: list[tuple[str, str]] | None = None,
        *,
        path_env: str | None = None,
    ) -> None:
        self.terminal = terminal
        self.source_dir = Path(source_dir).expanduser().absolute()
        self.bin_dir = Path(bin_dir).expanduser().absolute()
        self.entries = list(entries) if entries is not None else list(DEFAULT_ENTRIES)
        self.path_env = os.environ.get("PATH", "") if path_env is None else path_env

    def install(self) -> InstallReport:
        """Install every entry and check ``PATH``.

        Raises:
            InstallerError: If the bin directory cannot be created.
        """
        report = InstallReport()
        self.terminal.info("Starting installation of project generation commands...")
        self.ensure_bin_dir()

        for script, alias in self.entries:
            self.install_script(script, alias, report)

        report.on_path = self.bin_dir_on_path()
        if not report.on_path:
            self.terminal.warning(f"{self.bin_dir} is not in your PATH.")
            self.terminal.detail(
                f"Add 'export PATH=\"{self.bin_dir}:$PATH\"' to your ~/.bashrc or ~/.zshrc,"
            )
            self.terminal.detail("then run 'source ~/.bashrc' or restart your terminal.")

        self.terminal.success("Installation complete!")
        if report.linked:
            self.terminal.success(f"You can now run '{report.linked[0]}' from anywhere in your terminal.")
        return report

    def ensure_bin_dir(self) -> None:
        if self.bin_dir.is_dir():
            return
        self.terminal.warning(f"Directory {self.bin_dir} not found. Creating it...")
        try:
            self.bin_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InstallerError(
                f"Failed to create {self.bin_dir}: {exc}. Please check permissions."
            ) from exc
        self.terminal.success(f"Created {self.bin_dir}.")

    def install_script(self, script: str, alias: str, report: InstallReport) -> bool:
        """Make one script executable and link it as *alias*.

        Returns:
            ``True`` when the link is in place.
        """
        source = self.source_dir / script
        link = self.bin_dir / alias
        self.terminal.info(f"Processing {script}...")

        if not source.is_file():
            self.terminal.error(f"Source script '{source}' not found. Skipping.")
            report.missing.append(script)
            return False

        try:
            _make_executable(source)
        except OSError as exc:
            message = f"Failed to make '{source}' executable: {exc}"
            self.terminal.warning(message)
            report.warnings.append(message)

        if os.path.normcase(str(link)) == os.path.normcase(str(source)):
            self.terminal.success(f"'{alias}' already lives in {self.bin_dir}.")
            report.linked.append(alias)
            return True

        try:
            if link.is_symlink() or link.exists():
                link.unlink()
            link.symlink_to(source)
        except OSError as exc:
            self.terminal.error(f"Failed to link '{alias}' -> '{source}': {exc}")
            report.failed.append(alias)
            return False

        self.terminal.success(f"Linked '{alias}' -> {source}")
        report.linked.append(alias)
        return True

    def bin_dir_on_path(self) -> bool:
        target = os.path.normcase(str(self.bin_dir))
        for entry in self.path_env.split(os.pathsep):
            if not entry:
                continue
            candidate = os.path.normcase(os.path.abspath(os.path.expanduser(entry)))
            if candidate == target:
                return True
        return False


def _make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run_installer(
    argv: list[str] | None = None,
    *,
    config: Config | None = None,
    terminal: Terminal | None = None,
) -> int:
    """Parse installer flags and link every command.

    Returns:
        0 when the run completed (individual link failures are reported but
        do not change the exit code), 1 when the bin directory is unusable.
    """
    parser = build_parser(
        "project-generator-install",
        "Link the nodegen commands into a user-local bin directory.",
        with_name=False,
        with_output=False,
    )
    parser.add_argument(
        "--source-dir",
        default=None,
        help="Directory containing the installed console scripts (default: this interpreter's scripts directory)",
    )
    parser.add_argument(
        "--bin-dir",
        default=None,
        help="Directory to create the links in (default: ~/.local/bin)",
    )
    try:
        args, unknown_flags, positionals = parse_args(parser, argv)
    except SystemExit as exc:
        return exit_code_of(exc)

    config = apply_args(config or Config.from_env(), args)
    terminal = terminal or Terminal(color=config.color)
    warn_ignored(terminal, unknown_flags, positionals)

    installer = Installer(
        terminal,
        source_dir=Path(args.source_dir) if args.source_dir else default_source_dir(),
        bin_dir=Path(args.bin_dir) if args.bin_dir else config.bin_dir,
    )
    try:
        installer.install()
    except InstallerError as exc:
        terminal.error(str(exc))
        return 1
    return 0


def main() -> None:
    """Entry point for ``project-generator-install``."""
    run_main(lambda: run_installer(sys.argv[1:]))
