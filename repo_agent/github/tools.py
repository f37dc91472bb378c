from dataclasses import dataclass
from typing import List, Literal, Optional, Union

import httpx
from pydantic_ai import RunContext

from .api import GitHubAPI
from .errors import GitHubAPIError
from .types import (
    CodeSearchResult, Commit, DirectoryEntry, FileContent, HistoryOptions,
    Repository, RepositoryArchive, SearchOptions,
)


@dataclass
class GitHubDeps:
    client: httpx.AsyncClient
    github_token: str | None = None
    github_api_url: str | None = None


def _api(ctx: RunContext[GitHubDeps]) -> GitHubAPI:
    return GitHubAPI(ctx.deps.client, ctx.deps.github_token, ctx.deps.github_api_url)


def format_contents(path: str, entries: List[DirectoryEntry]) -> str:
    """Format a directory listing for display."""
    lines = [f"📂 {path or '/'}"]
    for entry in sorted(entries, key=lambda e: (e.type != "dir", e.name)):
        prefix = {"dir": "📁", "symlink": "🔗", "submodule": "📦"}.get(entry.type, "📄")
        size = f"({entry.size} bytes)" if entry.type == "file" and entry.size is not None else ""
        lines.append(f"  {prefix} {entry.name} {size}".rstrip())
    if not entries:
        lines.append("  (empty)")
    return "\n".join(lines)


async def get_repository(ctx: RunContext[GitHubDeps], owner: str, repo: str) -> Union[Repository, str]:
    """Get repository information and metadata.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
    """
    try:
        return await _api(ctx).get_repository(owner, repo)
    except GitHubAPIError as e:
        return str(e)


async def download_file(
    ctx: RunContext[GitHubDeps], owner: str, repo: str, path: str, ref: Optional[str] = None
) -> Union[FileContent, str]:
    """Download a single file from a repository.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        path: File path in repository.
        ref: Branch, tag, or commit SHA.
    """
    try:
        return await _api(ctx).download_file(owner, repo, path, ref)
    except GitHubAPIError as e:
        return str(e)


async def list_contents(
    ctx: RunContext[GitHubDeps], owner: str, repo: str, path: str = "", ref: Optional[str] = None
) -> str:
    """List the files and directories at a path of a repository.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        path: Directory path in repository, empty for the root.
        ref: Branch, tag, or commit SHA.
    """
    try:
        entries = await _api(ctx).get_repository_contents(owner, repo, path, ref)
        return format_contents(path, entries)
    except GitHubAPIError as e:
        return str(e)


async def download_directory(
    ctx: RunContext[GitHubDeps], owner: str, repo: str, path: str = "", ref: Optional[str] = None
) -> Union[List[FileContent], str]:
    """Download every file below a directory of a repository.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        path: Directory path in repository, empty for the root.
        ref: Branch, tag, or commit SHA.
    """
    try:
        return await _api(ctx).download_directory(owner, repo, path, ref)
    except GitHubAPIError as e:
        return str(e)


async def search_repositories(
    ctx: RunContext[GitHubDeps], query: str, options: Optional[SearchOptions] = None
) -> Union[List[Repository], str]:
    """Search for repositories on GitHub.

    Args:
        ctx: The context containing dependencies.
        query: Search query.
        options: Paging (per_page 1-100, page) and sort (updated, stars, forks) / order (asc, desc).
    """
    try:
        return await _api(ctx).search_repositories(query, options)
    except GitHubAPIError as e:
        return str(e)


async def search_code(
    ctx: RunContext[GitHubDeps], query: str, owner: Optional[str] = None, repo: Optional[str] = None
) -> Union[List[CodeSearchResult], str]:
    """Search for code within repositories.

    Args:
        ctx: The context containing dependencies.
        query: Code search query.
        owner: Repository owner.
        repo: Repository name.
    """
    try:
        return await _api(ctx).search_code(query, owner, repo)
    except GitHubAPIError as e:
        return str(e)


async def get_file_history(
    ctx: RunContext[GitHubDeps], owner: str, repo: str, path: str, options: Optional[HistoryOptions] = None
) -> Union[List[Commit], str]:
    """Get the commit history of a file.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        path: File path in repository.
        options: Paging (per_page, page).
    """
    try:
        return await _api(ctx).get_file_history(owner, repo, path, options)
    except GitHubAPIError as e:
        return str(e)


async def get_commit_diff(ctx: RunContext[GitHubDeps], owner: str, repo: str, ref: str) -> str:
    """Get the diff introduced by a single commit.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        ref: Commit SHA, branch or tag.
    """
    try:
        return await _api(ctx).get_commit_diff(owner, repo, ref)
    except GitHubAPIError as e:
        return str(e)


async def compare_commits(ctx: RunContext[GitHubDeps], owner: str, repo: str, base: str, head: str) -> str:
    """Get the diff between two refs.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        base: Base ref.
        head: Head ref.
    """
    try:
        return await _api(ctx).compare_commits(owner, repo, base, head)
    except GitHubAPIError as e:
        return str(e)


async def get_repository_archive(
    ctx: RunContext[GitHubDeps],
    owner: str,
    repo: str,
    format: Literal["zipball", "tarball"] = "zipball",
    ref: Optional[str] = None,
) -> Union[RepositoryArchive, str]:
    """Get a temporary download link for a zip or tarball of a repository.

    Args:
        ctx: The context containing dependencies.
        owner: Repository owner/organization.
        repo: Repository name.
        format: zipball or tarball.
        ref: Branch, tag, or commit SHA. Defaults to HEAD.
    """
    try:
        return await _api(ctx).get_repository_archive(owner, repo, format, ref)
    except GitHubAPIError as e:
        return str(e)


GITHUB_TOOLS = [
    get_repository,
    download_file,
    list_contents,
    download_directory,
    search_repositories,
    search_code,
    get_file_history,
    get_commit_diff,
    compare_commits,
    get_repository_archive,
]
