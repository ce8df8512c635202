"""Tests for the Rails template menu."""

from __future__ import annotations

import unittest
from pathlib import Path

from dotmenu import rails
from dotmenu.menu import run_menu
from tests.support import make_prompter, output_of


class RailsNewCommandTests(unittest.TestCase):
    def test_default_template_is_plain(self) -> None:
        self.assertEqual(rails.rails_new_command("blog", "default", "master"), ["rails", "new", "blog"])

    def test_named_template_adds_flags_and_url(self) -> None:
        command = rails.rails_new_command("blog", "slim", "develop")
        self.assertEqual(command[:3], ["rails", "new", "blog"])
        self.assertIn("--skip-bundle", command)
        self.assertEqual(
            command[-1],
            "https://raw.github.com/bkuhlmann/rails_slim_template/develop/template.rb",
        )


class RewMenuTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[tuple[list[str], Path]] = []

    def runner(self, command, cwd) -> int:
        self.calls.append((list(command), cwd))
        return 0

    def build(self, prompter):
        actions = rails.RailsActions(
            app_name="blog",
            branch="master",
            cwd=Path("/tmp"),
            console=prompter.console,
            runner=self.runner,
        )
        return rails.build_option_set(actions)

    def test_direct_template(self) -> None:
        prompter = make_prompter()
        run_menu(self.build(prompter), "api", "main", prompter=prompter)

        self.assertEqual(len(self.calls), 1)
        command, cwd = self.calls[0]
        self.assertEqual(command[-1], "https://raw.github.com/bkuhlmann/rails_api_template/main/template.rb")
        self.assertEqual(cwd, Path("/tmp"))
        self.assertIn("rails new blog", output_of(prompter))

    def test_interactive_invalid_then_default(self) -> None:
        prompter = make_prompter("bogus\ndefault\n")
        run_menu(self.build(prompter), prompter=prompter)

        self.assertEqual(self.calls, [(["rails", "new", "blog"], Path("/tmp"))])
        output = output_of(prompter)
        self.assertIn("Invalid option.", output)
        self.assertEqual(output.count("Available Ruby on Rails Templates:"), 2)
        self.assertIn("  default: Rails Default Template", output)


if __name__ == "__main__":
    unittest.main()
