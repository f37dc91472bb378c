import base64
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from .errors import (
    DownloadFailedError, InvalidTargetError, MissingTokenError,
    error_from_response, normalize_errors,
)
from .types import (
    ArchiveFormat, CodeSearchResult, Commit, CommitPerson, ContentsResponse,
    DirectoryEntry, FileContent, HistoryOptions, Repository, RepositoryArchive,
    SearchOptions,
)

logger = logging.getLogger(__name__)

_contents_adapter = TypeAdapter(ContentsResponse)

DIFF_MEDIA_TYPE = 'application/vnd.github.diff'


class GitHubAPI:
    """Client for reading repositories through the GitHub REST API."""

    BASE_URL = 'https://api.github.com'
    API_VERSION = '2022-11-28'

    def __init__(self, client: httpx.AsyncClient, token: Optional[str] = None, base_url: Optional[str] = None):
        if not token:
            raise MissingTokenError("GitHub token is required. Set GITHUB_TOKEN environment variable.")
        self.client = client
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.headers = {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': self.API_VERSION,
        }

    async def _request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        accept: Optional[str] = None,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        """Make a single GET request; non-2xx/3xx statuses raise a normalized error."""
        headers = dict(self.headers)
        if accept:
            headers['Accept'] = accept

        logger.debug("GET %s params=%s", endpoint, params)
        response = await self.client.get(
            f'{self.base_url}{endpoint}',
            headers=headers,
            params=params,
            follow_redirects=follow_redirects,
        )
        logger.debug("GET %s -> %d", endpoint, response.status_code)

        if response.is_error:
            raise error_from_response(response)
        return response

    @staticmethod
    def _contents_endpoint(owner: str, repo: str, path: str) -> str:
        return f'/repos/{owner}/{repo}/contents/{quote(path.strip("/"))}'

    async def _get_contents(
        self, owner: str, repo: str, path: str, ref: Optional[str]
    ) -> ContentsResponse:
        """Fetch a contents path and tag the response as a single item or a listing."""
        params = {'ref': ref} if ref else None
        response = await self._request(self._contents_endpoint(owner, repo, path), params=params)
        payload = response.json()

        # A directory comes back as a JSON array, anything else as an object
        if isinstance(payload, list):
            tagged = {'kind': 'listing', 'items': payload}
        else:
            tagged = {'kind': 'single', 'item': payload}
        return _contents_adapter.validate_python(tagged)

    @normalize_errors
    async def get_repository(self, owner: str, repo: str) -> Repository:
        response = await self._request(f'/repos/{owner}/{repo}')
        return Repository.model_validate(response.json())

    @normalize_errors
    async def get_file_content(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> FileContent:
        """Get a file with its content decoded to text.

        The ref defaults to the repository's default branch. The remote
        encoding tag is kept on the result even though the content is decoded.
        """
        contents = await self._get_contents(owner, repo, path, ref)
        if contents.kind != 'single':
            raise InvalidTargetError(f'Path "{path}" is a directory, not a file')

        item = contents.item
        if item.type != 'file':
            raise InvalidTargetError(f'Path "{path}" is not a file')

        raw = item.content or ''
        encoding = item.encoding or ''
        if encoding == 'base64':
            # Binary or non-UTF-8 bytes become U+FFFD
            text = base64.b64decode(raw).decode('utf-8', errors='replace')
        else:
            text = raw

        return FileContent(
            name=item.name,
            path=item.path,
            content=text,
            encoding=encoding,
            size=item.size or 0,
            sha=item.sha,
        )

    async def download_file(
        self, owner: str, repo: str, path: str, ref: Optional[str] = None
    ) -> FileContent:
        return await self.get_file_content(owner, repo, path, ref)

    @normalize_errors
    async def get_repository_contents(
        self, owner: str, repo: str, path: str = '', ref: Optional[str] = None
    ) -> List[DirectoryEntry]:
        """List a directory in the order the remote returns it."""
        contents = await self._get_contents(owner, repo, path, ref)
        if contents.kind != 'listing':
            raise InvalidTargetError(f'Path "{path}" is a file, not a directory')

        return [
            DirectoryEntry(
                name=item.name,
                path=item.path,
                type=item.type,
                size=item.size,
                sha=item.sha,
                url=item.url,
                html_url=item.html_url,
                download_url=item.download_url,
            )
            for item in contents.items
        ]

    @normalize_errors
    async def download_directory(
        self, owner: str, repo: str, path: str = '', ref: Optional[str] = None
    ) -> List[FileContent]:
        """Recursively fetch every file below a directory.

        Walks depth-first in listing order. Symlinks and submodules are
        skipped. The first failure aborts the walk and is raised as is.
        """
        files: List[FileContent] = []

        for entry in await self.get_repository_contents(owner, repo, path, ref):
            if entry.type == 'file':
                files.append(await self.download_file(owner, repo, entry.path, ref))
            elif entry.type == 'dir':
                files.extend(await self.download_directory(owner, repo, entry.path, ref))

        return files

    @normalize_errors
    async def search_repositories(
        self, query: str, options: Optional[SearchOptions] = None
    ) -> List[Repository]:
        options = options or SearchOptions()
        params: Dict[str, Any] = {
            'q': query,
            'per_page': options.per_page,
            'page': options.page,
        }
        # Unset sort/order are left to the remote's defaults
        if options.sort:
            params['sort'] = options.sort
        if options.order:
            params['order'] = options.order

        response = await self._request('/search/repositories', params=params)
        return [Repository.model_validate(item) for item in response.json()['items']]

    @normalize_errors
    async def search_code(
        self, query: str, owner: Optional[str] = None, repo: Optional[str] = None
    ) -> List[CodeSearchResult]:
        """Search code, optionally scoped to a repository or an account.

        Scoping appends `repo:` or `user:` qualifiers to the query, so the
        query itself should not carry conflicting ones.
        """
        search_query = query
        if owner and repo:
            search_query += f' repo:{owner}/{repo}'
        elif owner:
            search_query += f' user:{owner}'

        response = await self._request('/search/code', params={'q': search_query, 'per_page': 30})
        return [CodeSearchResult.model_validate(item) for item in response.json()['items']]

    @normalize_errors
    async def get_repository_archive(
        self,
        owner: str,
        repo: str,
        format: ArchiveFormat = 'zipball',
        ref: Optional[str] = None,
    ) -> RepositoryArchive:
        """Resolve the signed download location of a repository archive."""
        ref = ref or 'HEAD'
        response = await self._request(
            f'/repos/{owner}/{repo}/{format}/{quote(ref, safe="")}', follow_redirects=False
        )

        if response.is_redirect:
            download_url = response.headers['Location']
        else:
            download_url = str(response.url)

        extension = 'zip' if format == 'zipball' else 'tar.gz'
        return RepositoryArchive(
            download_url=download_url,
            filename=f'{repo}-{ref}.{extension}',
            ref=ref,
            format=format,
        )

    @normalize_errors
    async def download_repository_archive(
        self,
        owner: str,
        repo: str,
        format: ArchiveFormat = 'zipball',
        ref: Optional[str] = None,
    ) -> bytes:
        archive = await self.get_repository_archive(owner, repo, format, ref)

        # The signed location needs no credentials
        logger.debug("Downloading archive %s", archive.filename)
        response = await self.client.get(archive.download_url, follow_redirects=True)
        if not response.is_success:
            raise DownloadFailedError(
                f"Failed to download archive: {response.reason_phrase}",
                response.status_code,
            )
        return response.content

    @normalize_errors
    async def get_file_history(
        self, owner: str, repo: str, path: str, options: Optional[HistoryOptions] = None
    ) -> List[Commit]:
        """List the commits touching a path, newest first."""
        options = options or HistoryOptions()
        response = await self._request(
            f'/repos/{owner}/{repo}/commits',
            params={'path': path, 'per_page': options.per_page, 'page': options.page},
        )

        return [
            Commit(
                sha=item['sha'],
                message=item['commit']['message'],
                author=_commit_person(item['commit'].get('author')),
                committer=_commit_person(item['commit'].get('committer')),
                url=item['url'],
                html_url=item['html_url'],
            )
            for item in response.json()
        ]

    @normalize_errors
    async def get_commit_diff(self, owner: str, repo: str, ref: str) -> str:
        response = await self._request(
            f'/repos/{owner}/{repo}/commits/{quote(ref, safe="")}', accept=DIFF_MEDIA_TYPE
        )
        return response.text

    @normalize_errors
    async def compare_commits(self, owner: str, repo: str, base: str, head: str) -> str:
        basehead = f'{quote(base, safe="")}...{quote(head, safe="")}'
        response = await self._request(f'/repos/{owner}/{repo}/compare/{basehead}', accept=DIFF_MEDIA_TYPE)
        return response.text


def _commit_person(data: Optional[Dict[str, Any]]) -> CommitPerson:
    # Missing author/committer details decode to empty strings
    data = data or {}
    return CommitPerson(
        name=data.get('name') or '',
        email=data.get('email') or '',
        date=data.get('date') or '',
    )
