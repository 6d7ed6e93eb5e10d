"""Clone-or-pull for a single repository, with failures kept to that repository."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .constants import CLONE_BASE, CLONE_BRANCHES
from .errors import ManifestUnavailable, RepoNotFoundError, SyncError
from .github_client import GitHubClient
from .types import ChangeSummary, Outcome
from .utils import local_repo_path, path_exists, remove_tree
from .version_gate import VersionGate

logger = logging.getLogger(__name__)


class GitTransport(Protocol):
    def clone(self, url: str, target: str, *, branch: str | None = None) -> None: ...

    def pull(self, repo_dir: str) -> ChangeSummary: ...


class RepositoryFetcher:
    def __init__(
        self,
        git: GitTransport,
        gate: VersionGate,
        repo_base_path: str,
        *,
        clone_base: str = CLONE_BASE,
        token: str | None = None,
        clone_branches: Sequence[str] = CLONE_BRANCHES,
    ) -> None:
        self.git = git
        self.gate = gate
        self.repo_base_path = repo_base_path
        self.clone_base = clone_base.rstrip("/")
        self.token = token
        self.clone_branches = tuple(clone_branches)

    def clone_url(self, repo: str) -> str:
        url = f"{self.clone_base}/{repo}.git"
        if self.token and url.startswith("https://"):
            url = GitHubClient.inject_token_into_https(url, self.token)
        return url

    def fetch(self, repo: str) -> Outcome:
        """Clone `repo` if it is not on disk yet, pull it otherwise."""
        try:
            target = local_repo_path(self.repo_base_path, repo)
        except ValueError as e:
            return Outcome.failed(repo, e)
        if path_exists(target):
            return self._pull(repo, target)
        return self._clone(repo, target)

    # ---------- clone ----------
    def _clone(self, repo: str, target: str) -> Outcome:
        url = self.clone_url(repo)
        error: Exception | None = None
        for branch in self.clone_branches:
            try:
                self.git.clone(url, target, branch=branch)
                return Outcome.new(repo)
            except RepoNotFoundError as e:
                logger.debug("%s: branch %s not found, trying next", repo, branch)
                error = e
                remove_tree(target)
            except Exception as e:
                error = e
                break
        remove_tree(target)
        return Outcome.failed(repo, error or SyncError(f"no branch to clone for {repo}"))

    # ---------- pull ----------
    def _pull(self, repo: str, target: str) -> Outcome:
        try:
            try:
                if not self.gate.should_check_for_updates(repo):
                    return Outcome.skipped(repo)
            except ManifestUnavailable as e:
                logger.info("%s; pulling anyway", e)
            summary = self.git.pull(target)
        except Exception as e:
            # leave the existing checkout untouched
            return Outcome.failed(repo, e)
        if summary.is_empty:
            return Outcome.skipped(repo)
        return Outcome.updated(repo, summary)
