"""Tests for the project type menu (nodegen.selector)."""

from __future__ import annotations

import pytest

from nodegen.models import ProjectType
from nodegen.selector import match_choice, menu_entries, run_selector, select_project_type


pytestmark = pytest.mark.unit


@pytest.fixture
def select(config, make_invoker):
    def _select(argv: list[str], terminal) -> int:
        return run_selector(argv, config=config, terminal=terminal, invoker=make_invoker(terminal))

    return _select


class TestMenu:
    def test_entries_in_order_with_exit_last(self):
        entries = menu_entries()
        assert [t for _, t in entries] == [
            ProjectType.PLAIN,
            ProjectType.ANTLR4,
            ProjectType.BLESSED_TUI,
            None,
        ]
        assert entries[-1][0] == "Exit"

    @pytest.mark.parametrize(
        ("answer", "expected"),
        [
            ("1", (True, ProjectType.PLAIN)),
            (" 2 ", (True, ProjectType.ANTLR4)),
            ("3", (True, ProjectType.BLESSED_TUI)),
            ("4", (True, None)),
            ("exit", (True, None)),
            ("Q", (True, None)),
            ("blessed", (True, ProjectType.BLESSED_TUI)),
            ("nodejs/typescript project with antlr4", (True, ProjectType.ANTLR4)),
            ("0", (False, None)),
            ("5", (False, None)),
            ("", (False, None)),
            ("banana", (False, None)),
        ],
    )
    def test_match_choice(self, answer, expected):
        assert match_choice(answer, menu_entries()) == expected

    def test_menu_shows_numbered_labels(self, make_terminal):
        term = make_terminal("4\n")
        select_project_type(term)
        assert "1) NodeJS/TypeScript project" in term.output
        assert "4) Exit" in term.output
        assert "Select a project type" in term.output

    def test_reprompts_after_invalid_choice(self, make_terminal):
        term = make_terminal("9\nfoo\n2\n")
        assert select_project_type(term) == (True, ProjectType.ANTLR4)
        assert term.output.count("Invalid choice") == 2
        assert "Invalid choice '9'. Please pick a number from 1 to 4." in term.output

    def test_end_of_input(self, terminal):
        assert select_project_type(terminal) == (False, None)


class TestRunSelector:
    def test_exit_choice(self, select, make_terminal, config):
        term = make_terminal("4\n")
        assert select([], term) == 0
        assert "Exiting." in term.output
        assert list(config.output_dir.iterdir()) == []

    def test_end_of_input_fails(self, select, terminal):
        assert select([], terminal) == 1
        assert "Error: No project type selected." in terminal.output

    def test_dispatches_to_generator(self, select, make_terminal, config):
        term = make_terminal("1\nsel-app\n")
        assert select([], term) == 0
        assert (config.output_dir / "sel-app" / "src" / "index.ts").is_file()

    def test_yes_flag_passes_through(self, select, make_terminal, config):
        term = make_terminal("3\n")
        assert select(["-y"], term) == 0
        assert (config.output_dir / "my-blessed-tui" / "package.json").is_file()

    def test_generator_failure_propagates(self, select, make_terminal, config):
        (config.output_dir / "my-new-project").mkdir()
        assert select(["-y"], make_terminal("1\n")) == 1

    def test_stray_argument_warned(self, select, make_terminal):
        term = make_terminal("exit\n")
        assert select(["my-app"], term) == 0
        assert "Extra argument 'my-app' ignored." in term.output
