"""Snapshot of the environment gathered before executing an intent."""

import dataclasses
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

_PROJECT_MARKERS = ("Cargo.toml", "package.json", ".git")


@dataclass
class FilesystemContext:
    current_dir: str = ""
    recent_files: list[str] = field(default_factory=list)
    project_root: str | None = None


@dataclass
class GitContext:
    is_repo: bool = False
    branch: str = ""
    last_commit: str = ""
    remote_url: str | None = None
    uncommitted_changes: list[str] = field(default_factory=list)
    recent_commits: list[str] = field(default_factory=list)


@dataclass
class SolanaContext:
    current_slot: int | None = None
    current_epoch: int | None = None
    connected_endpoint: str = ""
    rpc_health: str = ""
    recent_queries: list[str] = field(default_factory=list)


@dataclass
class SessionContext:
    action_count: int = 0
    last_intent: str | None = None
    last_subsystem: str | None = None
    preferences: dict[str, str] = field(default_factory=dict)


def _git(*args: str) -> str | None:
    """Stdout of a git command, stripped; None if git cannot be started."""
    try:
        completed = subprocess.run(["git", *args], capture_output=True, check=False)
    except OSError:
        return None
    return completed.stdout.decode("utf-8", errors="replace").strip()


def _lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line]


def _find_project_root() -> str | None:
    try:
        cwd = Path.cwd()
    except OSError:
        return None
    for directory in (cwd, *cwd.parents):
        if any((directory / marker).exists() for marker in _PROJECT_MARKERS):
            return str(directory)
    return None


def _gather_git() -> GitContext:
    git = GitContext()
    inside = _git("rev-parse", "--is-inside-work-tree")
    if inside is not None:
        if inside != "true":
            return git
        git.is_repo = True

    branch = _git("branch", "--show-current")
    if branch is not None:
        git.branch = branch
    last_commit = _git("log", "-1", "--format=%H")
    if last_commit is not None:
        git.last_commit = last_commit
    remote = _git("remote", "get-url", "origin")
    if remote:
        git.remote_url = remote
    diff = _git("diff", "--name-only")
    if diff is not None:
        git.uncommitted_changes = _lines(diff)
    recent = _git("log", "-5", "--format=%s")
    if recent is not None:
        git.recent_commits = _lines(recent)
    return git


@dataclass
class RuntimeContext:
    """Filesystem, git, Solana and session state known to the orchestrator."""

    fs: FilesystemContext = field(default_factory=FilesystemContext)
    git: GitContext = field(default_factory=GitContext)
    solana: SolanaContext = field(default_factory=SolanaContext)
    session: SessionContext = field(default_factory=SessionContext)

    @classmethod
    def gather(cls) -> "RuntimeContext":
        """Collect context from every available source; missing ones are skipped."""
        ctx = cls()
        try:
            ctx.fs.current_dir = os.getcwd()
        except OSError:
            pass
        ctx.fs.project_root = _find_project_root()
        ctx.git = _gather_git()
        ctx.session.preferences["lang"] = os.environ.get("LANG", "en")
        return ctx

    def with_solana(self, endpoint: str) -> "RuntimeContext":
        """A copy of this context attached to a Solana endpoint."""
        solana = dataclasses.replace(
            self.solana, connected_endpoint=endpoint, rpc_health="unknown"
        )
        return dataclasses.replace(self, solana=solana)