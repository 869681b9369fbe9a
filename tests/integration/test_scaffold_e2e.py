"""Integration tests for the generate-then-toolchain flow.

These tests run the real generators and the real command runner against
small shell scripts standing in for npm, tsc, antlr4 and java, and verify
the resulting project directory.

No Node.js or Java installation is required.
"""

from __future__ import annotations

import json
import shutil
import sys
from pathlib import Path

import pytest

from nodegen.cli import run_generator
from nodegen.models import ProjectType
from nodegen.toolchain import ToolchainInvoker


pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts"),
]


# ---------------------------------------------------------------------------
# Fake tools
# ---------------------------------------------------------------------------

FAKE_NPM = """#!/bin/sh
mkdir -p node_modules/.bin
cat > node_modules/.bin/tsc <<'EOF'
#!/bin/sh
echo '{"compilerOptions": {"target": "es2022"}}' > tsconfig.json
EOF
chmod +x node_modules/.bin/tsc
echo "added 2 packages"
"""

FAKE_ANTLR4 = """#!/bin/sh
mkdir -p src/generated
touch src/generated/ExprLexer.ts src/generated/ExprParser.ts
"""

FAKE_JAVA = """#!/bin/sh
exit 0
"""

FAILING_NPM = """#!/bin/sh
echo "npm ERR! code ENOTFOUND" >&2
exit 1
"""


def _write_tool(bin_dir: Path, name: str, body: str) -> None:
    path = bin_dir / name
    path.write_text(body, encoding="utf-8")
    path.chmod(0o755)


@pytest.fixture
def fake_bin(tmp_path: Path) -> Path:
    bin_dir = tmp_path / "fake-bin"
    bin_dir.mkdir()
    _write_tool(bin_dir, "npm", FAKE_NPM)
    _write_tool(bin_dir, "antlr4", FAKE_ANTLR4)
    _write_tool(bin_dir, "java", FAKE_JAVA)
    return bin_dir


@pytest.fixture
def invoker_for(fake_bin: Path):
    """Real invoker whose PATH lookups only see the fake tools."""

    def _which(tool: str, mode: int = 0, path: str | None = None) -> str | None:
        return shutil.which(tool, path=path or str(fake_bin))

    def _make(terminal) -> ToolchainInvoker:
        return ToolchainInvoker(terminal, which=_which, system="Linux")

    return _make


def _generate(project_type, argv, *, config, terminal, invoker) -> int:
    return run_generator(project_type, argv, config=config, terminal=terminal, invoker=invoker)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_plain_project(self, config, terminal, invoker_for, list_files):
        code = _generate(
            ProjectType.PLAIN, ["e2e-plain", "-y"],
            config=config, terminal=terminal, invoker=invoker_for(terminal),
        )
        assert code == 0

        root = config.output_dir / "e2e-plain"
        files = {f for f in list_files(root) if not f.startswith("node_modules/")}
        assert files == {"package.json", ".env", "src/index.ts", "tsconfig.json"}

        manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "e2e-plain"
        tsconfig = json.loads((root / "tsconfig.json").read_text(encoding="utf-8"))
        assert tsconfig["compilerOptions"]["target"] == "es2022"
        assert "Warning:" not in terminal.output

    def test_antlr4_project_compiles_grammar(self, config, terminal, invoker_for, list_files):
        code = _generate(
            ProjectType.ANTLR4, ["e2e-calc", "-y"],
            config=config, terminal=terminal, invoker=invoker_for(terminal),
        )
        assert code == 0

        files = list_files(config.output_dir / "e2e-calc")
        assert "src/grammar/Expr.g4" in files
        assert "src/generated/ExprParser.ts" in files
        assert "src/generated/ExprLexer.ts" in files

    def test_blessed_project(self, config, terminal, invoker_for):
        code = _generate(
            ProjectType.BLESSED_TUI, ["-y"],
            config=config, terminal=terminal, invoker=invoker_for(terminal),
        )
        assert code == 0

        root = config.output_dir / "my-blessed-tui"
        manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert manifest["dependencies"] == {"blessed": "^0.1.81"}
        assert (root / "tsconfig.json").is_file()

    def test_missing_grammar_tool(self, config, terminal, invoker_for, fake_bin):
        (fake_bin / "antlr4").unlink()
        code = _generate(
            ProjectType.ANTLR4, ["e2e-nogrammar", "-y"],
            config=config, terminal=terminal, invoker=invoker_for(terminal),
        )
        assert code == 0
        assert not (config.output_dir / "e2e-nogrammar" / "src" / "generated").exists()
        assert "'antlr4' not found" in terminal.output

    def test_failing_install_skips_local_compiler(self, config, terminal, invoker_for, fake_bin):
        _write_tool(fake_bin, "npm", FAILING_NPM)
        code = _generate(
            ProjectType.PLAIN, ["e2e-offline", "-y"],
            config=config, terminal=terminal, invoker=invoker_for(terminal),
        )
        assert code == 0
        out = terminal.output
        assert "npm ERR! code ENOTFOUND" in out
        assert "'tsc' not found" in out
        assert "Setup finished with 2 warning(s)" in out
        assert (config.output_dir / "e2e-offline" / "package.json").is_file()
