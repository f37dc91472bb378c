"""Tests for the agent wiring and the HTTP endpoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient
from pydantic_ai.models.test import TestModel as ScriptedModel

from repo_agent import endpoint
from repo_agent.agent import build_agent
from repo_agent.config import Settings
from repo_agent.github import GitHubDeps
from tests.helpers import repo_json


@pytest.fixture
def client():
    return TestClient(endpoint.app)


class TestBuildAgent:
    @pytest.mark.anyio
    async def test_without_token_runs_without_tools(self):
        agent = build_agent(Settings(github_token=None))

        with agent.override(model=ScriptedModel()):
            async with httpx.AsyncClient() as http:
                result = await agent.run("hello", deps=GitHubDeps(client=http))

        assert isinstance(result.output, str)

    @pytest.mark.anyio
    async def test_with_token_calls_github_tools(self):
        agent = build_agent(Settings(github_token="ghp_test"))
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=repo_json()))

        with agent.override(model=ScriptedModel(call_tools=["get_repository"])):
            async with httpx.AsyncClient(transport=transport) as http:
                result = await agent.run(
                    "describe octo/hello",
                    deps=GitHubDeps(client=http, github_token="ghp_test"),
                )

        assert "octo/hello" in result.output


class TestEndpoint:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_returns_agent_output(self, client):
        agent = MagicMock()
        agent.run = AsyncMock(return_value=MagicMock(output="[Using octo/hello] It is a demo."))

        with patch.object(endpoint, "get_agent", return_value=agent):
            response = client.post("/api/github-agent", json={"query": "what is octo/hello?"})

        assert response.json() == {
            "success": True,
            "message": "[Using octo/hello] It is a demo.",
            "error": None,
        }
        assert agent.run.await_args.args == ("what is octo/hello?",)

    def test_agent_failure_returns_apology(self, client):
        agent = MagicMock()
        agent.run = AsyncMock(side_effect=RuntimeError("model unavailable"))

        with patch.object(endpoint, "get_agent", return_value=agent):
            response = client.post("/api/github-agent", json={"query": "hi"})

        assert response.json() == {
            "success": False,
            "message": endpoint.ERROR_MESSAGE,
            "error": "model unavailable",
        }
