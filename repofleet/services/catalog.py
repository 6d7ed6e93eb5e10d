"""Service: work out which repositories a run should touch."""

from __future__ import annotations

from ..core.github_client import GitHubClient
from ..core.utils import filter_repos


def resolve_repo_ids(
    *,
    gh: GitHubClient,
    catalog_url: str,
    org: str | None = None,
    explicit: list[str] | None = None,
    include_archived: bool = False,
    visibility: str = "all",
    only_globs: list[str] | None = None,
    exclude_globs: list[str] | None = None,
) -> list[str]:
    """
    Explicit ids win over an organisation listing, which wins over the catalog.
    Globs match against the full 'owner/name' id.
    """
    if explicit:
        repos = list(explicit)
    elif org:
        repos = [
            r["full_name"]
            for r in gh.list_org_repos(org, include_archived=include_archived, visibility=visibility)
        ]
    else:
        repos = gh.fetch_catalog(catalog_url)
    return filter_repos(repos, only_globs or [], exclude_globs or [])
