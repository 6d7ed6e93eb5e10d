"""Decide whether an existing checkout needs a pull, based on manifest versions."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Protocol, Sequence

from pydantic import ValidationError

from .constants import MANIFEST_BRANCHES, MANIFEST_FILE
from .errors import ManifestUnavailable, SyncError
from .types import Manifest, SyncOptions
from .utils import local_repo_path, path_exists

logger = logging.getLogger(__name__)


class RawContentSource(Protocol):
    def fetch_raw_json(self, repo: str, branch: str, path: str) -> Any: ...


class VersionGate:
    def __init__(
        self,
        source: RawContentSource,
        repo_base_path: str,
        options: SyncOptions,
        *,
        branches: Sequence[str] = MANIFEST_BRANCHES,
    ) -> None:
        self.source = source
        self.repo_base_path = repo_base_path
        self.options = options
        self.branches = tuple(branches)

    def _local_manifest(self, repo: str) -> str:
        return os.path.join(local_repo_path(self.repo_base_path, repo), MANIFEST_FILE)

    def should_check_for_updates(self, repo: str) -> bool:
        """
        True when the remote manifest version differs from the local one.
        The first branch that yields a readable manifest decides; raises
        ManifestUnavailable when none does.
        """
        if not self.options.only_new_versions:
            return True

        local_path = self._local_manifest(repo)
        for branch in self.branches:
            try:
                if not path_exists(local_path):
                    return True
                with open(local_path, encoding="utf-8") as f:
                    local = Manifest.model_validate(json.load(f))
                remote = Manifest.model_validate(self.source.fetch_raw_json(repo, branch, MANIFEST_FILE))
            except (OSError, ValueError, ValidationError, SyncError) as e:
                logger.debug("manifest check for %s@%s failed: %s", repo, branch, e)
                continue
            logger.debug("%s@%s: local=%s remote=%s", repo, branch, local.version, remote.version)
            return local.version != remote.version

        raise ManifestUnavailable(f"Failed to read manifest for {repo}.")
