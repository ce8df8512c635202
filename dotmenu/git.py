"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Iterable

from loguru import logger

from .exceptions import GitCommandError
from .models import BranchEntry, CommitEntry, PullRequestRef, StashEntry

FIELD_SEP = "\x1f"
COMMIT_FORMAT = FIELD_SEP.join(["%H", "%an", "%s", "%cr"])
LOG_LINE_FORMAT = "%C(yellow)%H%C(reset) %G? %C(bold blue)%an%C(reset) %s%C(bold cyan)%d%C(reset) %C(green)(%cr)%C(reset)"
LOG_DETAILS_FORMAT = f"{LOG_LINE_FORMAT} %n%b%n%N%-%n"

_STASH_REF = re.compile(r"^stash@\{(\d+)\}$")


def run_git(
    args: Iterable[str],
    *,
    cwd: Path,
    raise_on_error: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command, capturing output, and optionally raise on failure."""

    cmd = ["git", *args]
    logger.debug("running {} in {}", " ".join(cmd), cwd)
    proc = subprocess.run(
        cmd,
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=False,
    )
    if raise_on_error and proc.returncode != 0:
        raise GitCommandError(cmd, proc.returncode, proc.stderr)
    return proc


def run_git_attached(args: Iterable[str], *, cwd: Path) -> int:
    """Execute a git command attached to the terminal (difftool, pull, checkout)."""

    cmd = ["git", *args]
    logger.debug("running {} attached in {}", " ".join(cmd), cwd)
    proc = subprocess.run(cmd, cwd=str(cwd), check=False)
    if proc.returncode != 0:
        logger.warning("{} exited with status {}", " ".join(cmd), proc.returncode)
    return proc.returncode


def rev_parse_toplevel(path: Path) -> Path:
    proc = run_git(["rev-parse", "--show-toplevel"], cwd=path)
    return Path(proc.stdout.strip())


def remote_url(path: Path, remote: str = "origin") -> str:
    proc = run_git(["remote", "get-url", remote], cwd=path)
    return proc.stdout.strip()


def current_branch(path: Path) -> str:
    proc = run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=path)
    return proc.stdout.strip()


def last_commit(path: Path) -> str:
    proc = run_git(["log", "--pretty=format:%H", "-1"], cwd=path)
    return proc.stdout.strip()


def branch_exists(path: Path, branch: str) -> bool:
    proc = run_git(
        ["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
        cwd=path,
        raise_on_error=False,
    )
    return proc.returncode == 0


def remote_branch_exists(path: Path, branch: str, remote: str = "origin") -> bool:
    proc = run_git(
        ["show-ref", "--verify", "--quiet", f"refs/remotes/{remote}/{branch}"],
        cwd=path,
        raise_on_error=False,
    )
    return proc.returncode == 0


def list_branches(path: Path) -> list[BranchEntry]:
    """Local and origin branches, most recently authored first, one entry per name."""

    proc = run_git(
        [
            "for-each-ref",
            "--sort=-authordate:iso8601",
            f"--format=%(refname){FIELD_SEP}%(authorname){FIELD_SEP}%(authordate:relative)",
            "refs/heads",
            "refs/remotes/origin",
        ],
        cwd=path,
    )
    seen: set[str] = set()
    entries: list[BranchEntry] = []
    for raw in proc.stdout.splitlines():
        if not raw.strip():
            continue
        refname, author, age = (raw.split(FIELD_SEP) + ["", ""])[:3]
        name = normalize_branch_name(refname)
        if name == "HEAD" or name in seen:
            continue
        seen.add(name)
        entries.append(BranchEntry(name=name, author=author, age=age))
    return entries


def normalize_branch_name(refname: str) -> str:
    for prefix in ("refs/heads/", "refs/remotes/origin/"):
        if refname.startswith(prefix):
            return refname[len(prefix):]
    return refname


def checkout(path: Path, branch: str) -> int:
    return run_git_attached(["checkout", branch], cwd=path)


def delete_local_branch(path: Path, branch: str) -> int:
    return run_git_attached(["branch", "-D", branch], cwd=path)


def delete_remote_branch(path: Path, branch: str, remote: str = "origin") -> int:
    return run_git_attached(["push", remote, "--delete", branch], cwd=path)


def list_stashes(path: Path) -> list[StashEntry]:
    proc = run_git(
        ["stash", "list", f"--pretty=format:%gd{FIELD_SEP}%H{FIELD_SEP}%s{FIELD_SEP}%cr"],
        cwd=path,
    )
    entries: list[StashEntry] = []
    for raw in proc.stdout.splitlines():
        if not raw.strip():
            continue
        ref, sha, subject, age = (raw.split(FIELD_SEP) + ["", "", ""])[:4]
        match = _STASH_REF.match(ref)
        if not match:
            logger.debug("skipping unrecognised stash line: {}", raw)
            continue
        entries.append(StashEntry(index=int(match.group(1)), sha=sha, subject=subject, age=age))
    return entries


def stash_patch(path: Path, ref: str) -> str:
    proc = run_git(["stash", "show", "--patch", "--color=always", ref], cwd=path)
    return proc.stdout


def stash_pop(path: Path, ref: str) -> int:
    return run_git_attached(["stash", "pop", ref], cwd=path)


def stash_drop(path: Path, ref: str) -> int:
    return run_git_attached(["stash", "drop", ref], cwd=path)


def show_details(path: Path, *revisions: str, paths: Iterable[str] = ()) -> str:
    """Concise commit details with file stats, colored for the console."""

    args = ["show", "--stat", "--color=always", f"--pretty=format:{LOG_DETAILS_FORMAT}", *revisions]
    path_args = list(paths)
    if path_args:
        args.extend(["--", *path_args])
    return run_git(args, cwd=path).stdout


def difftool(path: Path, *revisions: str, paths: Iterable[str] = ()) -> int:
    args = ["difftool", *revisions]
    path_args = list(paths)
    if path_args:
        args.extend(["--", *path_args])
    return run_git_attached(args, cwd=path)


def log_entries(path: Path, args: Iterable[str]) -> list[CommitEntry]:
    proc = run_git(["log", f"--pretty=format:{COMMIT_FORMAT}", *args], cwd=path)
    return parse_commit_lines(proc.stdout)


def parse_commit_lines(output: str) -> list[CommitEntry]:
    entries: list[CommitEntry] = []
    for raw in output.splitlines():
        if not raw.strip():
            continue
        sha, author, subject, age = (raw.split(FIELD_SEP) + ["", "", ""])[:4]
        entries.append(CommitEntry(sha=sha, author=author, subject=subject, age=age))
    return entries


def recent_commits(path: Path, limit: int) -> list[CommitEntry]:
    return log_entries(path, ["--no-merges", "--max-count", str(limit), "HEAD"])


def file_commits(path: Path, file: str) -> list[CommitEntry]:
    return log_entries(path, ["--reverse", "HEAD", "--", file])


def blame_commits(path: Path, file: str, lines: str | None = None) -> list[CommitEntry]:
    args = ["blame", "-l", "-s", "-C", "-M"]
    if lines:
        args.extend(["-L", lines])
    args.append(file)
    proc = run_git(args, cwd=path)
    shas = sorted({line.split()[0].lstrip("^") for line in proc.stdout.splitlines() if line.strip()})
    # uncommitted lines blame to the all-zero sha
    shas = [sha for sha in shas if sha.strip("0")]
    if not shas:
        return []
    return log_entries(path, ["--no-walk=unsorted", *shas])


def upstream_commits(path: Path) -> list[CommitEntry]:
    return log_entries(path, ["--reverse", "--no-merges", "..@{upstream}"])


def fetch(path: Path, remote: str | None = None, prune: bool = True, quiet: bool = True) -> None:
    args = ["fetch"]
    if remote:
        args.append(remote)
    if prune:
        args.append("--prune")
    if quiet:
        args.append("--quiet")
    run_git(args, cwd=path)


def pull(path: Path) -> int:
    return run_git_attached(["pull"], cwd=path)


def pull_request_refs(path: Path) -> list[PullRequestRef]:
    """Fetched pull request refs (``refs/remotes/pull_requests/<n>``) in numeric order."""

    proc = run_git(
        [
            "for-each-ref",
            f"--format=%(refname:lstrip=3){FIELD_SEP}%(authorname){FIELD_SEP}%(subject){FIELD_SEP}%(committerdate:relative)",
            "refs/remotes/pull_requests",
        ],
        cwd=path,
    )
    refs: list[PullRequestRef] = []
    for raw in proc.stdout.splitlines():
        if not raw.strip():
            continue
        number, author, subject, age = (raw.split(FIELD_SEP) + ["", "", ""])[:4]
        refs.append(PullRequestRef(number=number, author=author, subject=subject, age=age))
    return sorted(refs, key=_pull_request_sort_key)


def _pull_request_sort_key(ref: PullRequestRef) -> tuple[bool, int, str]:
    if ref.number.isdigit():
        return False, int(ref.number), ref.number
    return True, 0, ref.number
