"""Exceptions raised while synchronizing repositories."""


class SyncError(RuntimeError):
    pass


class GitError(SyncError):
    """A git clone/pull failed (network, auth, timeout, missing binary...)."""


class RepoNotFoundError(GitError):
    """The repository or the requested branch does not exist upstream."""


class GitHubError(SyncError):
    pass


class ManifestUnavailable(SyncError):
    """No candidate branch yielded a readable manifest."""


class CleanupFailure(SyncError):
    pass
