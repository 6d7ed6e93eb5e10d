"""Service: clone or update a list of repositories in bounded parallel waves."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Protocol, Sequence

import typer

from ..core.constants import CLONE_BASE, GIT_TIMEOUT_SEC
from ..core.fetcher import RepositoryFetcher
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient
from ..core.types import BatchResult, Outcome, SyncOptions
from ..core.version_gate import VersionGate

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, repo: str) -> Outcome: ...


def _fetch_one(fetcher: Fetcher, repo: str) -> Outcome:
    try:
        return fetcher.fetch(repo)
    except Exception as e:
        logger.exception("unexpected error while syncing %s", repo)
        return Outcome.failed(repo, e)


def process_repositories(
    repos: Sequence[str],
    fetcher: Fetcher,
    options: SyncOptions,
    on_complete: Callable[[Outcome], None] | None = None,
) -> BatchResult:
    """
    Sync every repo in `repos` and bucket the outcomes.

    Repos are taken off the end of a private copy of the list, `job_count` at a
    time; a wave is fully drained before the next one starts. `on_complete`
    fires once per repo, in completion order, from the calling thread.
    """
    pending = list(repos)
    result = BatchResult(track_skipped=options.track_skipped)

    with ThreadPoolExecutor(max_workers=options.job_count) as pool:
        while pending:
            wave = [pending.pop() for _ in range(min(options.job_count, len(pending)))]
            futures = {pool.submit(_fetch_one, fetcher, repo): repo for repo in wave}
            for fut in as_completed(futures):
                outcome = fut.result()
                logger.debug("%s -> %s", outcome.repo, outcome.kind.value)
                result.record(outcome)
                if on_complete is not None:
                    on_complete(outcome)

    return result


def build_fetcher(
    *,
    repo_base_path: str,
    options: SyncOptions,
    gh: GitHubClient,
    token: str | None = None,
    clone_base: str = CLONE_BASE,
    git_timeout: float = GIT_TIMEOUT_SEC,
    shallow: bool = False,
) -> RepositoryFetcher:
    gate = VersionGate(gh, repo_base_path, options)
    git = GitClient(timeout=git_timeout, shallow=shallow)
    return RepositoryFetcher(git, gate, repo_base_path, clone_base=clone_base, token=token)


def sync_repos(
    repos: Sequence[str],
    fetcher: Fetcher,
    options: SyncOptions,
    *,
    show_progress: bool = True,
) -> BatchResult:
    """Run the batch with a progress bar that ticks once per finished repo."""
    if not show_progress or not repos:
        return process_repositories(repos, fetcher, options)

    with typer.progressbar(length=len(repos), label="Syncing", item_show_func=lambda r: r) as bar:

        def _tick(outcome: Outcome) -> None:
            bar.update(1, outcome.repo)

        return process_repositories(repos, fetcher, options, on_complete=_tick)
