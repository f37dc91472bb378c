"""Exceptions for the GitHub API facade."""

import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

T = TypeVar("T")


class GitHubAPIError(Exception):
    """Raised when GitHub API requests fail."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class MissingTokenError(GitHubAPIError):
    """No token was supplied to the client."""


class NotFoundError(GitHubAPIError):
    pass


class AuthenticationFailedError(GitHubAPIError):
    pass


class ForbiddenError(GitHubAPIError):
    pass


class InvalidRequestError(GitHubAPIError):
    pass


class InvalidTargetError(GitHubAPIError):
    """The path resolved to a directory where a file was expected, or the reverse."""


class DownloadFailedError(GitHubAPIError):
    """Fetching the bytes behind a resolved download location failed."""


class RemoteError(GitHubAPIError):
    """Any failure that does not fall into a more specific kind."""


def _remote_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("message") or None
    return None


def error_from_response(response: httpx.Response) -> GitHubAPIError:
    """Map an unsuccessful response onto the error taxonomy."""
    status = response.status_code
    message = _remote_message(response)

    if status == 404:
        return NotFoundError(f"Resource not found: {message or 'Not found'}", status)
    if status == 401:
        return AuthenticationFailedError("Authentication failed. Check your GitHub token.", status)
    if status == 403:
        return ForbiddenError(f"Access forbidden: {message or 'Forbidden'}", status)
    if status == 422:
        return InvalidRequestError(f"Invalid request: {message or 'Unprocessable entity'}", status)

    return RemoteError(f"GitHub API error: {message or f'{status} {response.reason_phrase}'}", status)


def normalize_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Translate every failure of an API coroutine into a GitHubAPIError.

    Errors that are already normalized (including those raised by nested
    calls) pass through unchanged.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except GitHubAPIError:
            raise
        except httpx.HTTPStatusError as e:
            raise error_from_response(e.response) from e
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise RemoteError(f"GitHub API error: {str(e)}") from e

    return wrapper
