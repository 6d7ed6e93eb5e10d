"""Module holding constants used across repofleet."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
USER_AGENT = "repofleet/0.1 (+https://github.com/repofleet)"
CLONE_BASE = "https://github.com"
RAW_CONTENT_BASE = "https://raw.githubusercontent.com"
COMMUNITY_PLUGINS_URL = (
    "https://raw.githubusercontent.com/obsidianmd/obsidian-releases/master/community-plugins.json"
)
DEFAULT_DEST = "repositories"
DEFAULT_JOBS = 10
MANIFEST_FILE = "manifest.json"
# Clone tries the conventional default first and falls back on "not found".
CLONE_BRANCHES = ("master", "main")
MANIFEST_BRANCHES = ("master", "main")
GIT_TIMEOUT_SEC = 600
HTTP_TIMEOUT_SEC = 30
