"""Render a BatchResult for the terminal."""

from __future__ import annotations

import typer

from ..core.types import BatchResult

DIVIDER = "-----------"


def format_report(result: BatchResult, *, color: bool = True) -> list[str]:
    def style(text: str, fg: str) -> str:
        return typer.style(text, fg=fg) if color else text

    if result.is_empty and not result.skipped_repos:
        return ["Everything is up to date."]

    lines: list[str] = []
    if result.new_repos:
        lines += ["", f"{style('*', typer.colors.YELLOW)}  {len(result.new_repos)} new", DIVIDER]
        lines += [f"   {o.repo}" for o in result.new_repos]

    if result.updated_repos:
        lines += ["", f"{style('v', typer.colors.BLUE)}  {len(result.updated_repos)} updated", DIVIDER]
        for o in result.updated_repos:
            s = o.summary
            lines.append(
                f"   {o.repo} [{s.changes}{style('~', typer.colors.BLUE)}, "
                f"{s.insertions}{style('+', typer.colors.GREEN)}, "
                f"{s.deletions}{style('-', typer.colors.RED)}]"
            )

    if result.failed_repos:
        lines += ["", f"{style('!', typer.colors.RED)}  {len(result.failed_repos)} failed", DIVIDER]
        lines += [f"   {o.repo}: {o.error}" for o in result.failed_repos]

    if result.skipped_repos:
        lines += ["", f"{style('=', typer.colors.WHITE)}  {len(result.skipped_repos)} skipped", DIVIDER]
        lines += [f"   {o.repo}" for o in result.skipped_repos]

    return lines


def print_report(result: BatchResult) -> None:
    for line in format_report(result):
        typer.echo(line)
