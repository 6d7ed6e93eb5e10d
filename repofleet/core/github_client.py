"""GitHub API operations: repository listings, plugin catalog and raw file reads."""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import urlparse, urlunparse

from .constants import API_BASE, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, RAW_CONTENT_BASE, USER_AGENT
from .errors import GitHubError, RepoNotFoundError


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        *,
        raw_content_base: str = RAW_CONTENT_BASE,
        timeout: float = HTTP_TIMEOUT_SEC,
    ) -> None:
        self.token = token
        self.raw_content_base = raw_content_base.rstrip("/")
        self.timeout = timeout

    # ---------- low-level HTTP ----------
    def _request_json(self, url: str, *, api: bool = True) -> Any:
        req = urllib.request.Request(url)
        req.add_header("User-Agent", USER_AGENT)
        if api:
            req.add_header("Accept", GITHUB_API_ACCEPT)
            if self.token:
                req.add_header("Authorization", f"Bearer {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise RepoNotFoundError(f"404 Not Found: {url}") from e
            raise GitHubError(f"HTTP {e.code} for {url}") from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise GitHubError(f"request to {url} failed: {e!r}") from e
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise GitHubError(f"invalid JSON from {url}: {e}") from e

    # ---------- public API ----------
    @staticmethod
    def inject_token_into_https(clone_url: str, token: str) -> str:
        """https://github.com/owner/repo.git -> https://x-access-token:<token>@github.com/owner/repo.git"""
        u = urlparse(clone_url)
        netloc = f"x-access-token:{token}@{u.netloc}"
        return urlunparse((u.scheme, netloc, u.path, u.params, u.query, u.fragment))

    def list_org_repos(
        self,
        org: str,
        include_archived: bool = False,
        visibility: str = "all",
    ) -> list[dict[str, Any]]:
        repos: list[dict[str, Any]] = []
        page, per_page = 1, 100
        while True:
            url = (
                f"{API_BASE}/orgs/{org}/repos"
                f"?per_page={per_page}&page={page}&type=all&sort=full_name&direction=asc&visibility={visibility}"
            )
            data = self._request_json(url)
            if not data:
                break
            for r in data:
                if (not include_archived) and r.get("archived"):
                    continue
                repos.append(r)
            page += 1
        return repos

    def fetch_catalog(self, url: str) -> list[str]:
        """Return the `repo` field of every entry in a community-plugins style catalog."""
        data = self._request_json(url, api=False)
        if not isinstance(data, list):
            raise GitHubError(f"catalog at {url} is not a JSON list")
        return [entry["repo"] for entry in data if isinstance(entry, dict) and isinstance(entry.get("repo"), str)]

    def fetch_raw_json(self, repo: str, branch: str, path: str) -> Any:
        """GET <raw-content-host>/<owner>/<name>/<branch>/<path> as JSON."""
        return self._request_json(f"{self.raw_content_base}/{repo}/{branch}/{path}", api=False)
