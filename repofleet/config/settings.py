from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import (
    CLONE_BASE,
    COMMUNITY_PLUGINS_URL,
    DEFAULT_DEST,
    DEFAULT_JOBS,
    GIT_TIMEOUT_SEC,
    HTTP_TIMEOUT_SEC,
    RAW_CONTENT_BASE,
)

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env), REPOFLEET_* variables."""

    model_config = SettingsConfigDict(env_prefix="REPOFLEET_", env_file=None, extra="ignore")

    github_token: str | None = Field(default_factory=lambda: os.getenv("GITHUB_TOKEN"))
    repo_base_path: str = Field(default=DEFAULT_DEST)
    jobs: int = Field(default=DEFAULT_JOBS, ge=1)
    only_new_versions: bool = True
    shallow: bool = False
    catalog_url: str = COMMUNITY_PLUGINS_URL
    raw_content_base: str = RAW_CONTENT_BASE
    clone_base: str = CLONE_BASE
    http_timeout: float = Field(default=HTTP_TIMEOUT_SEC, gt=0)
    git_timeout: float = Field(default=GIT_TIMEOUT_SEC, gt=0)


def get_settings() -> Settings:
    return Settings()
