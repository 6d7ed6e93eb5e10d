"""Small helpers for running Git commands and performing repo operations."""

from __future__ import annotations

import os
import re
import subprocess

from .constants import GIT_TIMEOUT_SEC
from .errors import GitError, RepoNotFoundError
from .types import ChangeSummary

_NOT_FOUND_RE = re.compile(r"not found|couldn't find remote ref|does not appear to be a git repository", re.I)
_CREDENTIALS_RE = re.compile(r"://[^/@\s]+@")
_FILES_RE = re.compile(r"(\d+) files? changed")
_INSERTIONS_RE = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS_RE = re.compile(r"(\d+) deletions?\(-\)")


def _redact(text: str) -> str:
    return _CREDENTIALS_RE.sub("://***@", text)


def _last_line(text: str) -> str:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    return lines[-1] if lines else ""


class GitClient:
    def __init__(self, *, timeout: float = GIT_TIMEOUT_SEC, shallow: bool = False) -> None:
        self.timeout = timeout
        self.shallow = shallow

    # ---------- process helpers ----------
    def _run_out(self, cmd: list[str], cwd: str | None = None) -> str:
        # never block on a credential prompt; fail fast instead
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        try:
            proc = subprocess.run(
                cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git timed out after {self.timeout}s: {_redact(cmd[-1])}") from e

        if proc.returncode != 0:
            stderr = _redact(proc.stderr or proc.stdout or "")
            message = _last_line(stderr) or f"git exited with status {proc.returncode}"
            if _NOT_FOUND_RE.search(stderr):
                raise RepoNotFoundError(message)
            raise GitError(message)
        return proc.stdout

    # ---------- clone ----------
    def clone(self, url: str, target: str, *, branch: str | None = None) -> None:
        cmd = ["git", "-c", "credential.helper=", "clone"]
        if branch:
            cmd += ["--branch", branch]
        if self.shallow:
            cmd += ["--depth", "1", "--single-branch"]
        cmd += [url, target]
        self._run_out(cmd)

    # ---------- pull ----------
    def pull(self, repo_dir: str) -> ChangeSummary:
        # only pull a real worktree; never let git pick up an enclosing repository
        if not os.path.exists(os.path.join(repo_dir, ".git")):
            raise GitError(f"{repo_dir} is not a git worktree")
        out = self._run_out(["git", "-c", "credential.helper=", "pull", "--ff-only", "--stat"], cwd=repo_dir)
        return self.parse_pull_summary(out)

    @staticmethod
    def parse_pull_summary(output: str) -> ChangeSummary:
        """Read the diffstat footer (' 2 files changed, 5 insertions(+), 1 deletion(-)')."""

        def _count(regex: re.Pattern[str]) -> int:
            m = regex.search(output)
            return int(m.group(1)) if m else 0

        return ChangeSummary(
            changes=_count(_FILES_RE),
            insertions=_count(_INSERTIONS_RE),
            deletions=_count(_DELETIONS_RE),
        )
