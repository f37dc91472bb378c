"""Shared fixtures: a GitHubAPI wired to an in-memory httpx transport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from repo_agent.github import GitHubAPI

TOKEN = "ghp_test_token_12345"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_api():
    """Build a GitHubAPI whose requests are answered by ``handler``."""

    def _make(handler: Handler) -> GitHubAPI:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GitHubAPI(client, TOKEN)

    return _make
