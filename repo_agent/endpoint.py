import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

import httpx
import logfire
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from pydantic_ai import Agent

from .agent import build_agent
from .config import Settings
from .github import GitHubDeps

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Sorry, there was an error processing your request."


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_agent() -> Agent[GitHubDeps, str]:
    return build_agent(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logfire.configure(send_to_logfire='if-token-present')
    logfire.instrument_pydantic_ai()
    yield


app = FastAPI(title="GitHub Agent API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AgentRequest(BaseModel):
    """Request model for the GitHub agent endpoint."""
    query: str


class AgentResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


@app.post("/api/github-agent")
async def github_agent_endpoint(request: AgentRequest) -> AgentResponse:
    settings = get_settings()
    try:
        logger.info("Received query: %s", request.query)

        async with httpx.AsyncClient() as client:
            deps = GitHubDeps(
                client=client,
                github_token=settings.github_token,
                github_api_url=settings.github_api_url,
            )
            result = await get_agent().run(request.query, deps=deps)

        return AgentResponse(success=True, message=result.output)

    except Exception as e:
        logger.error("Error running agent: %s", e, exc_info=True)
        return AgentResponse(success=False, error=str(e), message=ERROR_MESSAGE)


@app.get("/health")
async def health_check():
    """Health check endpoint to verify the server is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    logger.info("Starting FastAPI server on http://127.0.0.1:8000")
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
