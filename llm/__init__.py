"""
LLM Provider Abstraction Layer.
Google Gemini with search grounding and schema-constrained output.
"""

from llm.base import (
    LLMProvider,
    LLMResponse,
    LLMError,
    LLMTransientError,
    LLMRateLimitError,
    LLMOverloadedError,
    LLMConnectionError,
)
from llm.factory import get_llm_provider, create_provider, reset_provider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMError",
    "LLMTransientError",
    "LLMRateLimitError",
    "LLMOverloadedError",
    "LLMConnectionError",
    "get_llm_provider",
    "create_provider",
    "reset_provider",
]
