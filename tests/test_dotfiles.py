"""Tests for the dotfiles browser."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dotmenu import dotfiles
from dotmenu.config import load_settings
from dotmenu.menu import run_menu
from tests.support import make_prompter, output_of

ALIASES = """\
# BASH ALIASES

#------------------#
# Section: General #
#------------------#

alias c='clear'
alias l='ls -alh'

#------------------------------------#
# Section: [Git](http://git-scm.com) #
#------------------------------------#

alias gs='git status --short'
"""

FUNCTIONS = """\
#--------------#
# Section: Git #
#--------------#

# Label: Git Root
# Description: Change to repository root directory regardless of current depth.
groot() {
  cd "$(dirname $(git rev-parse --git-dir))"
}

# Label: Private Helper
# Description: Not listed.
_helper() {
  true
}

# Label: Git Branch Switch
# Description: Switch between branches.
gbs() {
  true
}
"""

HOOK = """\
# Label: Commit Message Check
# Description: Validate commit message format.
check_commit_message() {
  true
}
"""


class ParseTests(unittest.TestCase):
    def test_parse_aliases_tracks_sections(self) -> None:
        entries = dotfiles.parse_aliases(ALIASES.splitlines())

        self.assertEqual([entry.name for entry in entries], ["c", "l", "gs"])
        self.assertEqual(entries[0].section, "General")
        self.assertEqual(entries[2].section, "[Git](http://git-scm.com)")
        self.assertEqual(entries[1].display_name, "l = 'ls -alh'")

    def test_parse_functions_skips_private(self) -> None:
        entries = dotfiles.parse_functions(FUNCTIONS.splitlines())

        self.assertEqual([entry.name for entry in entries], ["groot", "gbs"])
        self.assertEqual(
            entries[0].display_name,
            "groot = Git Root - Change to repository root directory regardless of current depth.",
        )

    def test_render_entries_groups_by_section(self) -> None:
        lines = list(dotfiles.render_entries(dotfiles.parse_aliases(ALIASES.splitlines())))

        self.assertEqual(
            lines,
            [
                "##### General",
                "    c = 'clear'",
                "    l = 'ls -alh'",
                "##### [Git](http://git-scm.com)",
                "    gs = 'git status --short'",
            ],
        )


class DotsMenuTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        (root / "aliases.sh").write_text(ALIASES)
        (root / "functions-public.sh").write_text(FUNCTIONS)
        hooks = root / "hooks"
        hooks.mkdir()
        (hooks / "commit-msg-check").write_text(HOOK)
        self.settings = load_settings({"DOTMENU_DOTFILES_DIR": str(root), "DOTMENU_GIT_HOOKS_DIR": str(hooks)})

    def run_dots(self, code: str | None = None, argument: str | None = None, input_text: str = "") -> str:
        prompter = make_prompter(input_text)
        actions = dotfiles.DotfileActions(settings=self.settings, console=prompter.console)
        run_menu(dotfiles.build_option_set(actions), code, argument, prompter=prompter)
        return output_of(prompter)

    def test_print_aliases(self) -> None:
        output = self.run_dots("a")
        self.assertIn("##### General\n    c = 'clear'\n", output)
        self.assertNotIn("Dotfile Options", output)

    def test_print_functions(self) -> None:
        output = self.run_dots("f")
        self.assertIn("    gbs = Git Branch Switch - Switch between branches.", output)
        self.assertNotIn("_helper", output)

    def test_print_hooks(self) -> None:
        output = self.run_dots("g")
        self.assertIn("check_commit_message = Commit Message Check - Validate commit message format.", output)

    def test_print_all(self) -> None:
        output = self.run_dots("p")
        self.assertLess(output.index("#### Aliases"), output.index("#### Functions"))
        self.assertLess(output.index("#### Functions"), output.index("#### Git Hooks"))

    def test_search(self) -> None:
        output = self.run_dots("s", "gs")
        self.assertIn('"gs" Search Results:', output)
        self.assertIn("    Alias: gs = 'git status --short'", output)

        output = self.run_dots("s", "groot")
        self.assertIn("    Function: groot = Git Root", output)

    def test_search_requires_term(self) -> None:
        self.assertIn(dotfiles.NOTHING_TO_SEARCH, self.run_dots("s"))

    def test_interactive_search_with_inline_term(self) -> None:
        output = self.run_dots(input_text="s gbs\n")
        self.assertIn("Dotfile Options:", output)
        self.assertIn("    Function: gbs = Git Branch Switch", output)

    def test_missing_files_print_nothing(self) -> None:
        settings = load_settings({"DOTMENU_DOTFILES_DIR": "/nonexistent/dotfiles", "DOTMENU_GIT_HOOKS_DIR": "/nonexistent/hooks"})
        prompter = make_prompter()
        actions = dotfiles.DotfileActions(settings=settings, console=prompter.console)
        run_menu(dotfiles.build_option_set(actions), "p", prompter=prompter)
        self.assertIn("#### Aliases", output_of(prompter))


if __name__ == "__main__":
    unittest.main()
