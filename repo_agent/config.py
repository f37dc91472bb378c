import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    github_token: str | None = None
    github_api_url: str = 'https://api.github.com'
    llm_model: str = 'google/gemini-2.0-flash-001'
    llm_base_url: str = 'https://openrouter.ai/api/v1'
    llm_api_key: str | None = None
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment (and .env, loaded on import)."""
        return cls(
            github_token=os.getenv('GITHUB_TOKEN') or None,
            github_api_url=os.getenv('GITHUB_API_URL', cls.github_api_url),
            llm_model=os.getenv('LLM_MODEL', cls.llm_model),
            llm_base_url=os.getenv('LLM_BASE_URL', cls.llm_base_url),
            llm_api_key=os.getenv('OPEN_ROUTER_API_KEY'),
            log_level=os.getenv('LOG_LEVEL', cls.log_level),
        )
