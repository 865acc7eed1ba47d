"""
Base LLM Provider interface.
Providers implement this abstract class so the pipeline can share one
long-lived, stateless service handle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


class LLMError(Exception):
    """Base exception for LLM provider errors."""
    pass


class LLMTransientError(LLMError):
    """Upstream availability problem worth retrying."""
    pass


class LLMRateLimitError(LLMTransientError):
    """Rate limit or quota exceeded (HTTP 429)."""
    pass


class LLMOverloadedError(LLMTransientError):
    """Service overloaded or unavailable (HTTP 503)."""
    pass


class LLMConnectionError(LLMTransientError):
    """Connection to LLM provider failed."""
    pass


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""
    content: str
    model: str
    provider: str
    usage: Dict[str, int]  # input_tokens, output_tokens
    raw_response: Optional[Any] = None

    @property
    def total_tokens(self) -> int:
        return self.usage.get("input_tokens", 0) + self.usage.get("output_tokens", 0)


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    """

    provider_name: str = "base"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        *,
        use_search: bool = False,
        response_schema: Optional[Dict[str, Any]] = None,
        max_tokens: int = 5000,
    ) -> LLMResponse:
        """
        Generate content for a single prompt.

        Args:
            prompt: Prompt text
            model: Model to use (provider-specific). If None, uses default.
            use_search: Enable the provider's web search tool
            response_schema: JSON schema the output must follow. When set,
                the provider is asked for JSON output.
            max_tokens: Maximum tokens in response

        Returns:
            LLMResponse with content (possibly empty) and metadata

        Raises:
            LLMRateLimitError, LLMOverloadedError, LLMConnectionError: transient
            LLMError: anything else
        """
        pass

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the default model for this provider."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is properly configured and available."""
        pass
