"""Tests for the agent-facing tool functions."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest

from repo_agent.github import DirectoryEntry, GitHubDeps, Repository
from repo_agent.github import tools
from tests.helpers import entry_json, repo_json


def make_ctx(handler, token: str | None = "ghp_test") -> SimpleNamespace:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SimpleNamespace(deps=GitHubDeps(client=client, github_token=token))


class TestFormatContents:
    def test_directories_first_then_files(self):
        entries = [
            DirectoryEntry(**entry_json("b.py")),
            DirectoryEntry(**entry_json("src", type="dir")),
            DirectoryEntry(**entry_json("current", type="symlink")),
        ]

        text = tools.format_contents("", entries)

        assert text.splitlines() == [
            "📂 /",
            "  📁 src",
            "  📄 b.py (10 bytes)",
            "  🔗 current",
        ]

    def test_empty_directory(self):
        assert tools.format_contents("docs", []) == "📂 docs\n  (empty)"


class TestTools:
    @pytest.mark.anyio
    async def test_get_repository_returns_model(self):
        ctx = make_ctx(lambda request: httpx.Response(200, json=repo_json()))

        result = await tools.get_repository(ctx, "octo", "hello")

        assert isinstance(result, Repository)
        assert result.full_name == "octo/hello"

    @pytest.mark.anyio
    async def test_errors_are_reported_as_message_text(self):
        ctx = make_ctx(lambda request: httpx.Response(404, json={"message": "Not Found"}))

        result = await tools.download_file(ctx, "octo", "hello", "missing.txt")

        assert result == "Resource not found: Not Found"

    @pytest.mark.anyio
    async def test_missing_token_is_reported_as_message_text(self):
        ctx = make_ctx(lambda request: httpx.Response(200, json={}), token=None)

        result = await tools.search_code(ctx, "def main")

        assert result == "GitHub token is required. Set GITHUB_TOKEN environment variable."

    @pytest.mark.anyio
    async def test_list_contents_formats_listing(self):
        ctx = make_ctx(lambda request: httpx.Response(200, json=[entry_json("src/app.py")]))

        result = await tools.list_contents(ctx, "octo", "hello", "src")

        assert result == "📂 src\n  📄 app.py (10 bytes)"

    @pytest.mark.anyio
    async def test_list_contents_on_file_reports_invalid_target(self):
        ctx = make_ctx(lambda request: httpx.Response(200, json=entry_json("setup.py")))

        result = await tools.list_contents(ctx, "octo", "hello", "setup.py")

        assert result == 'Path "setup.py" is a file, not a directory'
