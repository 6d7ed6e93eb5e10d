"""Small types and Enums used by repofleet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Visibility(str, Enum):
    """Repository visibility options used by commands."""

    all = "all"
    public = "public"
    private = "private"


class OutcomeKind(str, Enum):
    new = "new"
    updated = "updated"
    failed = "failed"
    skipped = "skipped"


class SyncOptions(BaseModel):
    """Knobs the sync engine reads; passed explicitly, never global."""

    model_config = ConfigDict(frozen=True)

    job_count: int = Field(default=10, ge=1)
    only_new_versions: bool = True
    track_skipped: bool = False


class Manifest(BaseModel):
    """manifest.json: only `version` matters, anything else is carried along."""

    model_config = ConfigDict(extra="allow")

    version: str

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_number(cls, v):
        # some manifests ship "version": 1 or 1.2
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass(frozen=True)
class ChangeSummary:
    changes: int = 0
    insertions: int = 0
    deletions: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.changes or self.insertions or self.deletions)


@dataclass(frozen=True)
class Outcome:
    repo: str
    kind: OutcomeKind
    summary: ChangeSummary | None = None
    error: str | None = None

    @classmethod
    def new(cls, repo: str) -> Outcome:
        return cls(repo, OutcomeKind.new)

    @classmethod
    def updated(cls, repo: str, summary: ChangeSummary) -> Outcome:
        return cls(repo, OutcomeKind.updated, summary=summary)

    @classmethod
    def failed(cls, repo: str, error: BaseException | str) -> Outcome:
        return cls(repo, OutcomeKind.failed, error=str(error) or type(error).__name__)

    @classmethod
    def skipped(cls, repo: str) -> Outcome:
        return cls(repo, OutcomeKind.skipped)


@dataclass
class BatchResult:
    """Per-kind buckets of outcomes, filled in completion order."""

    new_repos: list[Outcome] = field(default_factory=list)
    updated_repos: list[Outcome] = field(default_factory=list)
    failed_repos: list[Outcome] = field(default_factory=list)
    skipped_repos: list[Outcome] = field(default_factory=list)
    track_skipped: bool = False

    def record(self, outcome: Outcome) -> None:
        if outcome.kind is OutcomeKind.new:
            self.new_repos.append(outcome)
        elif outcome.kind is OutcomeKind.updated:
            self.updated_repos.append(outcome)
        elif outcome.kind is OutcomeKind.failed:
            self.failed_repos.append(outcome)
        elif self.track_skipped:
            self.skipped_repos.append(outcome)

    @property
    def is_empty(self) -> bool:
        return not (self.new_repos or self.updated_repos or self.failed_repos)
