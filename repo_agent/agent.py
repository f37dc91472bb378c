from __future__ import annotations

import logging

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from .config import Settings
from .github import GITHUB_TOOLS, GitHubDeps

logger = logging.getLogger(__name__)

github_prompt = """
You have access to a GitHub tool that can:
- Retrieve repository information and metadata
- Download individual files or entire directories
- Search repositories and code across GitHub
- Get file history and commit diffs
- Download repository archives (zip/tarball)

When users ask about code repositories, GitHub projects, or want to analyze code, you can use these capabilities to help them.
"""

no_github_prompt = """
GitHub integration is not available (no GITHUB_TOKEN provided).
"""

system_prompt = """
You are a helpful AI assistant with GitHub repository access capabilities.
{capabilities}
Provide concise and accurate information to help users with their requests.
"""


def build_agent(settings: Settings) -> Agent[GitHubDeps, str]:
    """Create the agent, registering the GitHub tools only when a token is configured."""
    model = OpenAIChatModel(
        settings.llm_model,
        provider=OpenAIProvider(base_url=settings.llm_base_url, api_key=settings.llm_api_key),
    )

    if settings.github_token:
        capabilities, tools = github_prompt, GITHUB_TOOLS
    else:
        logger.warning("GitHub tools not available: GITHUB_TOKEN is not set")
        capabilities, tools = no_github_prompt, []

    return Agent(
        model,
        system_prompt=system_prompt.format(capabilities=capabilities),
        deps_type=GitHubDeps,
        tools=tools,
        retries=2,
    )
