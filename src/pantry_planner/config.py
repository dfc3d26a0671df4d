"""
Configuration for the Pantry Planner.

Settings come from environment variables; a local .env file is loaded by
Settings.from_env() via python-dotenv.

Environment Variables:
    ANTHROPIC_API_KEY: API key for AnthropicProvider
    USE_NULL_LLM: Set to "true" to use NullLLMProvider
    PANTRY_PLANNER_MODEL: Model used for plan proposals
    PANTRY_PLANNER_MAX_TOKENS: Response budget for plan proposals
    PANTRY_PLANNER_CATALOG: Path to a recipe catalog JSON file
    PANTRY_PLANNER_LOG_LEVEL: Logging level for the CLI
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# A weekly plan needs at least one distinct recipe per day
DAYS_PER_PLAN = 7
MIN_POOL_SIZE = 7

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 2000


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""
    anthropic_api_key: Optional[str] = None
    use_null_llm: bool = False
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    catalog_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        return cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY") or None,
            use_null_llm=os.environ.get("USE_NULL_LLM", "").lower() == "true",
            model=os.environ.get("PANTRY_PLANNER_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.environ.get("PANTRY_PLANNER_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
            catalog_path=os.environ.get("PANTRY_PLANNER_CATALOG") or None,
            log_level=os.environ.get("PANTRY_PLANNER_LOG_LEVEL", "INFO").upper(),
        )
