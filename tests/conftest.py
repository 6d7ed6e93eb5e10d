"""Shared fakes for the git transport and the raw manifest endpoint."""

from __future__ import annotations

import json
import os
import threading
import time
from pathlib import Path
from typing import Any

import pytest

from repofleet.core.errors import RepoNotFoundError
from repofleet.core.fetcher import RepositoryFetcher
from repofleet.core.types import ChangeSummary, SyncOptions
from repofleet.core.version_gate import VersionGate


class FakeManifestSource:
    """Serves manifests keyed by (repo, branch); everything else is a 404."""

    def __init__(self, manifests: dict[tuple[str, str], Any] | None = None) -> None:
        self.manifests = dict(manifests or {})
        self.calls: list[tuple[str, str]] = []

    def fetch_raw_json(self, repo: str, branch: str, path: str) -> Any:
        self.calls.append((repo, branch))
        value = self.manifests.get((repo, branch))
        if value is None:
            raise RepoNotFoundError(f"404 Not Found: {repo}/{branch}/{path}")
        if isinstance(value, Exception):
            raise value
        return value


class FakeGit:
    """
    Clone writes a checkout (with manifest.json) unless a failure is queued
    for the repo. Failures may be an exception or a {branch: exception} map.
    """

    def __init__(self, *, delay: float = 0.0, version: str = "1.0.0") -> None:
        self.clone_failures: dict[str, Any] = {}
        self.pull_results: dict[str, Any] = {}
        self.partial_on_failure = True
        self.clones: list[tuple[str, str, str | None]] = []
        self.pulls: list[str] = []
        self.version = version
        self.delay = delay
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0

    def _enter(self) -> None:
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)

    def _leave(self) -> None:
        with self._lock:
            self.in_flight -= 1

    @staticmethod
    def _repo_from_url(url: str) -> str:
        return "/".join(url.removesuffix(".git").split("/")[-2:])

    def clone(self, url: str, target: str, *, branch: str | None = None) -> None:
        self._enter()
        try:
            if self.delay:
                time.sleep(self.delay)
            repo = self._repo_from_url(url)
            self.clones.append((repo, target, branch))
            failure = self.clone_failures.get(repo)
            if isinstance(failure, dict):
                failure = failure.get(branch)
            if failure is not None:
                if self.partial_on_failure:
                    os.makedirs(os.path.join(target, ".git"), exist_ok=True)
                raise failure
            os.makedirs(os.path.join(target, ".git"), exist_ok=True)
            with open(os.path.join(target, "manifest.json"), "w", encoding="utf-8") as f:
                json.dump({"id": repo, "version": self.version}, f)
        finally:
            self._leave()

    def pull(self, repo_dir: str) -> ChangeSummary:
        self._enter()
        try:
            if self.delay:
                time.sleep(self.delay)
            self.pulls.append(repo_dir)
            result = self.pull_results.get(repo_dir, ChangeSummary())
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self._leave()


def write_manifest(base: Path, repo: str, version: str) -> Path:
    root = base.joinpath(*repo.split("/"))
    root.mkdir(parents=True, exist_ok=True)
    path = root / "manifest.json"
    path.write_text(json.dumps({"version": version}), encoding="utf-8")
    return root


@pytest.fixture
def base(tmp_path: Path) -> Path:
    return tmp_path / "repositories"


@pytest.fixture
def options() -> SyncOptions:
    return SyncOptions(job_count=3, only_new_versions=True)


@pytest.fixture
def source() -> FakeManifestSource:
    return FakeManifestSource()


@pytest.fixture
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def make_fetcher(base: Path, source: FakeManifestSource, git: FakeGit):
    def _make(opts: SyncOptions, **kwargs: Any) -> RepositoryFetcher:
        gate = VersionGate(source, str(base), opts)
        return RepositoryFetcher(git, gate, str(base), **kwargs)

    return _make
