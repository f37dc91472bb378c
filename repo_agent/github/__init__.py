"""GitHub API integration for the agent."""

from .api import GitHubAPI
from .errors import (
    GitHubAPIError, MissingTokenError, NotFoundError, AuthenticationFailedError,
    ForbiddenError, InvalidRequestError, InvalidTargetError, DownloadFailedError,
    RemoteError,
)
from .types import (
    Repository, FileContent, DirectoryEntry, CodeSearchResult,
    CodeSearchRepository, Commit, CommitPerson, RepositoryArchive,
    SearchOptions, HistoryOptions,
)
from .tools import GitHubDeps, GITHUB_TOOLS

__all__ = [
    # API classes
    'GitHubAPI',
    'GitHubDeps',

    # Errors
    'GitHubAPIError',
    'MissingTokenError',
    'NotFoundError',
    'AuthenticationFailedError',
    'ForbiddenError',
    'InvalidRequestError',
    'InvalidTargetError',
    'DownloadFailedError',
    'RemoteError',

    # Type definitions
    'Repository',
    'FileContent',
    'DirectoryEntry',
    'CodeSearchResult',
    'CodeSearchRepository',
    'Commit',
    'CommitPerson',
    'RepositoryArchive',
    'SearchOptions',
    'HistoryOptions',

    # Tool functions
    'GITHUB_TOOLS',
]
