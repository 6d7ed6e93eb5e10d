"""Lightweight helpers for batch orchestration (globs, paths)."""
from __future__ import annotations

import fnmatch
import logging
import os
import shutil
from typing import Iterable, Sequence

from .errors import CleanupFailure

logger = logging.getLogger(__name__)


def matches_any_glob(name: str, patterns: Sequence[str]) -> bool:
    if not patterns:
        return True  # no filters = match all
    return any(fnmatch.fnmatchcase(name, pat) for pat in patterns)


def filter_repos(repos: Iterable[str], only_globs: Sequence[str], exclude_globs: Sequence[str]) -> list[str]:
    """Apply --only/--exclude globs and drop duplicate ids (first one wins)."""
    seen: set[str] = set()
    out: list[str] = []
    for repo in repos:
        if repo in seen:
            continue
        if only_globs and not matches_any_glob(repo, only_globs):
            continue
        if exclude_globs and matches_any_glob(repo, exclude_globs):
            continue
        seen.add(repo)
        out.append(repo)
    return out


def split_repo_id(repo: str) -> tuple[str, str]:
    """'owner/name' -> ('owner', 'name'); anything else is rejected."""
    parts = repo.split("/")
    if len(parts) != 2 or any(p in ("", ".", "..") for p in parts):
        raise ValueError(f"invalid repository id {repo!r} (expected 'owner/name')")
    return parts[0], parts[1]


def local_repo_path(base: str, repo: str) -> str:
    owner, name = split_repo_id(repo)
    return os.path.join(base, owner, name)


def path_exists(path: str) -> bool:
    """True only if `path` can be confirmed to exist; never raises."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def remove_tree(path: str) -> None:
    """Best-effort recursive removal; failures are logged, not raised."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)
    except OSError as e:
        logger.warning("%s", CleanupFailure(f"could not remove {path}: {e}"))
