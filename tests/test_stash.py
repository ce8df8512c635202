"""Tests for stash selection."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from dotmenu import stash
from dotmenu.models import StashEntry
from tests.support import make_prompter, output_of

REPO = Path("/tmp/repo")
FIRST = StashEntry(index=0, sha="a" * 40, subject="WIP on main", age="1 hour ago")
SECOND = StashEntry(index=1, sha="b" * 40, subject="WIP on feature", age="2 days ago")


class StashTests(unittest.TestCase):
    def test_empty_stash_reports_nothing_to_do(self) -> None:
        prompter = make_prompter()
        with mock.patch("dotmenu.git.list_stashes", return_value=[]), mock.patch("dotmenu.git.stash_pop") as pop:
            self.assertIsNone(stash.pop(REPO, prompter))
        pop.assert_not_called()
        self.assertIn(stash.EMPTY_MESSAGE, output_of(prompter))

    def test_single_stash_is_used_without_prompt(self) -> None:
        prompter = make_prompter()
        with mock.patch("dotmenu.git.list_stashes", return_value=[FIRST]), mock.patch(
            "dotmenu.git.stash_drop", return_value=0
        ) as drop:
            self.assertEqual(stash.drop(REPO, prompter), FIRST)
        drop.assert_called_once_with(REPO, "stash@{0}")
        self.assertNotIn("Enter selection", output_of(prompter))

    def test_multiple_stashes_prompt(self) -> None:
        prompter = make_prompter("1\n")
        with mock.patch("dotmenu.git.list_stashes", return_value=[FIRST, SECOND]), mock.patch(
            "dotmenu.git.stash_pop", return_value=0
        ) as pop:
            stash.pop(REPO, prompter)
        pop.assert_called_once_with(REPO, "stash@{1}")
        output = output_of(prompter)
        self.assertIn("Git Stash Pop Options (select stash to pop):", output)
        self.assertIn("  1: stash@{1} " + "b" * 40 + " WIP on feature (2 days ago)", output)

    def test_show_prints_details(self) -> None:
        prompter = make_prompter()
        with mock.patch("dotmenu.git.list_stashes", return_value=[FIRST]), mock.patch(
            "dotmenu.git.show_details", return_value="\x1b[33mdetails\x1b[m\n"
        ) as details:
            stash.show(REPO, prompter)
        details.assert_called_once_with(REPO, "stash@{0}")
        self.assertIn("details", output_of(prompter))

    def test_show_diff_and_difftool_options(self) -> None:
        with mock.patch("dotmenu.git.list_stashes", return_value=[FIRST]), mock.patch(
            "dotmenu.git.stash_patch", return_value="+added\n"
        ) as patch, mock.patch("dotmenu.git.difftool", return_value=0) as difftool:
            prompter = make_prompter()
            stash.show(REPO, prompter, "d")
            stash.show(REPO, make_prompter(), "t")

        patch.assert_called_once_with(REPO, "stash@{0}")
        difftool.assert_called_once_with(REPO, "stash@{0}")
        self.assertIn("+added", output_of(prompter))

    def test_show_unknown_option_prints_usage(self) -> None:
        prompter = make_prompter()
        with mock.patch("dotmenu.git.list_stashes") as list_stashes:
            stash.show(REPO, prompter, "x")
        list_stashes.assert_not_called()
        output = output_of(prompter)
        self.assertIn("Usage: gashs OPTION", output)
        self.assertIn("d: Git diff.", output)
        self.assertIn("t: Git difftool.", output)


if __name__ == "__main__":
    unittest.main()
