"""
LLM Provider Abstraction.

Provides a unified interface for the plan-proposal LLM call that can be
swapped between:
- AnthropicProvider: Real Claude API calls
- NullLLMProvider: Test stub for CI/CD without API keys
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

from pantry_planner.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, Settings

logger = logging.getLogger(__name__)

NULL_RESPONSE_TEXT = "[NullLLM: No real LLM call made]"


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Send a single-turn prompt and return the response text."""
        pass

    @property
    @abstractmethod
    def is_null(self) -> bool:
        """Return True if this is a null/mock provider."""
        pass


class AnthropicProvider(LLMProvider):
    """Real Anthropic Claude API provider."""

    def __init__(self, api_key: str):
        from anthropic import Anthropic
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY required for AnthropicProvider")
        self.client = Anthropic(api_key=api_key)

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        params: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            params["system"] = system
        response = self.client.messages.create(**params)
        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")

    @property
    def is_null(self) -> bool:
        return False


class NullLLMProvider(LLMProvider):
    """
    NullLLMProvider is NOT a mock of Claude behavior.
    It exists to:
    - run the CLI and tests without an API key
    - verify control flow
    - assert call boundaries

    It returns `response_text` verbatim for every call.
    """

    def __init__(self, response_text: str = NULL_RESPONSE_TEXT):
        self.response_text = response_text
        self.call_count = 0
        self.prompts: List[str] = []
        self.last_model: Optional[str] = None
        logger.info("NullLLMProvider initialized - LLM calls will return canned responses")

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        self.call_count += 1
        self.prompts.append(prompt)
        self.last_model = model
        logger.debug(f"NullLLM call #{self.call_count}: model={model}, prompt={len(prompt)} chars")
        return self.response_text

    @property
    def is_null(self) -> bool:
        return True


def get_llm_provider(settings: Optional[Settings] = None, use_null: bool = False) -> LLMProvider:
    """
    Get an LLM provider instance.

    Falls back to NullLLMProvider when no API key is configured.
    """
    settings = settings or Settings.from_env()
    if use_null or settings.use_null_llm:
        return NullLLMProvider()

    if not settings.anthropic_api_key:
        logger.warning("No ANTHROPIC_API_KEY found, using NullLLMProvider")
        return NullLLMProvider()

    return AnthropicProvider(api_key=settings.anthropic_api_key)


def require_llm_provider(settings: Optional[Settings] = None) -> LLMProvider:
    """
    Get an LLM provider, raising if no API key is available.

    Use this when LLM calls are required (not optional).
    """
    settings = settings or Settings.from_env()
    if settings.use_null_llm:
        return NullLLMProvider()

    if not settings.anthropic_api_key:
        raise ValueError(
            "ANTHROPIC_API_KEY required. "
            "Set environment variable or use USE_NULL_LLM=true for testing."
        )

    return AnthropicProvider(api_key=settings.anthropic_api_key)
