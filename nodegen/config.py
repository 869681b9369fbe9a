"""nodegen configuration.

Typed run options for the generators, the selector and the installer. All
settings use Pydantic v2 models so they are validated at construction time
and can be overridden from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class ToolchainConfig(BaseModel):
    """Settings for the external commands run after file emission."""

    package_manager: str = Field(default="npm", min_length=1)
    install_args: list[str] = Field(default_factory=lambda: ["install"])
    command_timeout: int | None = Field(
        default=None,
        ge=1,
        description="Per-command timeout in seconds (None waits indefinitely)",
    )


class Config(BaseModel):
    """Global nodegen configuration.

    Instances are created once by a CLI entry point and passed explicitly to
    every component that prints, prompts or runs commands.
    """

    color: bool = Field(default=False, description="Colorize status output")
    assume_yes: bool = Field(default=False, description="Skip prompts and accept defaults")
    output_dir: Path = Field(default_factory=Path.cwd)
    bin_dir: Path = Field(default_factory=lambda: Path.home() / ".local" / "bin")
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NODEGEN_COLOR, NODEGEN_ASSUME_YES, NODEGEN_OUTPUT_DIR,
            NODEGEN_BIN_DIR, NODEGEN_PACKAGE_MANAGER, NODEGEN_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NODEGEN_COLOR"):
            kwargs["color"] = os.environ["NODEGEN_COLOR"].strip().lower() in _TRUTHY
        if os.environ.get("NODEGEN_ASSUME_YES"):
            kwargs["assume_yes"] = os.environ["NODEGEN_ASSUME_YES"].strip().lower() in _TRUTHY
        if os.environ.get("NODEGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["NODEGEN_OUTPUT_DIR"]).expanduser()
        if os.environ.get("NODEGEN_BIN_DIR"):
            kwargs["bin_dir"] = Path(os.environ["NODEGEN_BIN_DIR"]).expanduser()

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("NODEGEN_PACKAGE_MANAGER"):
            toolchain_kwargs["package_manager"] = os.environ["NODEGEN_PACKAGE_MANAGER"]
        if os.environ.get("NODEGEN_COMMAND_TIMEOUT"):
            toolchain_kwargs["command_timeout"] = int(os.environ["NODEGEN_COMMAND_TIMEOUT"])

        return cls(toolchain=ToolchainConfig(**toolchain_kwargs), **kwargs)
