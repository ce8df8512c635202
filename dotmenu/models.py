"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BranchEntry:
    """A local or ``origin`` branch as listed by ``git for-each-ref``."""

    name: str
    author: str
    age: str

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.author} ({self.age})"


@dataclass(frozen=True)
class StashEntry:
    """A single ``stash@{n}`` entry."""

    index: int
    sha: str
    subject: str
    age: str

    @property
    def ref(self) -> str:
        return f"stash@{{{self.index}}}"

    @property
    def display_name(self) -> str:
        return f"{self.ref} {self.sha} {self.subject} ({self.age})"


@dataclass(frozen=True)
class CommitEntry:
    """A commit summarised on one line."""

    sha: str
    author: str
    subject: str
    age: str

    @property
    def display_name(self) -> str:
        return f"{self.sha} {self.author} {self.subject} ({self.age})"


@dataclass(frozen=True)
class DotfileEntry:
    """An alias or public function parsed from a dotfiles script."""

    kind: str
    name: str
    value: str
    section: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.name} = {self.value}"


@dataclass(frozen=True)
class PullRequestRef:
    """A fetched pull request ref under ``refs/remotes/pull_requests``."""

    number: str
    author: str
    subject: str
    age: str

    @property
    def display_name(self) -> str:
        return f"{self.number} {self.subject} {self.author} ({self.age})"
