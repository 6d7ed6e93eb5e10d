"""CLI: clone new repositories and pull updates for existing ones."""

from __future__ import annotations

import os

import typer

from ...config.settings import get_settings
from ...core.errors import SyncError
from ...core.github_client import GitHubClient
from ...core.types import SyncOptions, Visibility
from ...services.catalog import resolve_repo_ids
from ...services.report import print_report
from ...services.sync import build_fetcher, sync_repos

app = typer.Typer(add_completion=False)


def _split_globs(value: str | None) -> list[str]:
    return [g.strip() for g in value.split(",") if g.strip()] if value else []


def _load_repo_ids(
    gh: GitHubClient,
    *,
    catalog_url: str | None,
    org: str | None,
    repo: list[str] | None,
    include_archived: bool,
    visibility: Visibility,
    only: str | None,
    exclude: str | None,
) -> list[str]:
    s = get_settings()
    try:
        return resolve_repo_ids(
            gh=gh,
            catalog_url=catalog_url or s.catalog_url,
            org=org,
            explicit=repo,
            include_archived=include_archived,
            visibility=visibility.value,
            only_globs=_split_globs(only),
            exclude_globs=_split_globs(exclude),
        )
    except SyncError as e:
        typer.secho(f"Error: could not retrieve repository list: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def sync(
    dest: str | None = typer.Option(None, "--dest", help="Root folder for repositories"),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Number of parallel jobs"),
    all_changes: bool = typer.Option(
        False, "--all-changes", "-a", help="Pull all changes, not only when the manifest version changed"
    ),
    catalog_url: str | None = typer.Option(None, "--catalog-url", help="JSON catalog listing {'repo': 'owner/name'}"),
    org: str | None = typer.Option(None, "--org", help="Sync an organisation's repositories instead of the catalog"),
    repo: list[str] = typer.Option(None, "--repo", help="Explicit owner/name to sync (repeatable)"),
    include_archived: bool = typer.Option(False, "--include-archived", help="Include archived repos (with --org)"),
    visibility: Visibility = typer.Option(Visibility.all, case_sensitive=False),  # noqa: B008
    only: str | None = typer.Option(None, "--only", help="Comma-separated owner/name globs to include"),
    exclude: str | None = typer.Option(None, "--exclude", help="Comma-separated owner/name globs to exclude"),
    token: str | None = typer.Option(None, "--token", help="GitHub PAT"),
    shallow: bool = typer.Option(False, "--shallow", help="Shallow clones (depth 1)"),
    show_skipped: bool = typer.Option(False, "--show-skipped", help="Also list repositories with nothing to pull"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress bar"),
):
    """Clone missing repositories and pull the ones already on disk.

    Examples:
      repofleet sync -j 20
      repofleet sync --org pallets --dest repos
      repofleet sync --repo owner/plugin --all-changes
    """
    s = get_settings()
    _dest = dest or s.repo_base_path
    _token = token if token is not None else s.github_token
    options = SyncOptions(
        job_count=jobs or s.jobs,
        only_new_versions=(not all_changes) and s.only_new_versions,
        track_skipped=show_skipped,
    )
    gh = GitHubClient(token=_token, raw_content_base=s.raw_content_base, timeout=s.http_timeout)

    repos = _load_repo_ids(
        gh,
        catalog_url=catalog_url,
        org=org,
        repo=repo,
        include_archived=include_archived,
        visibility=visibility,
        only=only,
        exclude=exclude,
    )
    if not repos:
        typer.echo("No repositories found.")
        raise typer.Exit(code=0)

    os.makedirs(_dest, exist_ok=True)
    typer.echo(f"Found {len(repos)} repositories. Syncing to '{_dest}' (jobs={options.job_count})...")
    fetcher = build_fetcher(
        repo_base_path=_dest,
        options=options,
        gh=gh,
        token=_token,
        clone_base=s.clone_base,
        git_timeout=s.git_timeout,
        shallow=shallow or s.shallow,
    )
    result = sync_repos(repos, fetcher, options, show_progress=not no_progress)
    print_report(result)


@app.command("list")
def list_repos(
    catalog_url: str | None = typer.Option(None, "--catalog-url", help="JSON catalog listing {'repo': 'owner/name'}"),
    org: str | None = typer.Option(None, "--org", help="List an organisation's repositories instead of the catalog"),
    include_archived: bool = typer.Option(False, "--include-archived", help="Include archived repos (with --org)"),
    visibility: Visibility = typer.Option(Visibility.all, case_sensitive=False),  # noqa: B008
    only: str | None = typer.Option(None, "--only", help="Comma-separated owner/name globs to include"),
    exclude: str | None = typer.Option(None, "--exclude", help="Comma-separated owner/name globs to exclude"),
    token: str | None = typer.Option(None, "--token", help="GitHub PAT"),
):
    """Print the repositories a sync would touch, one per line."""
    s = get_settings()
    gh = GitHubClient(
        token=token if token is not None else s.github_token,
        raw_content_base=s.raw_content_base,
        timeout=s.http_timeout,
    )
    repos = _load_repo_ids(
        gh,
        catalog_url=catalog_url,
        org=org,
        repo=None,
        include_archived=include_archived,
        visibility=visibility,
        only=only,
        exclude=exclude,
    )
    for r in repos:
        typer.echo(r)
    typer.echo(f"{len(repos)} repositories.", err=True)
