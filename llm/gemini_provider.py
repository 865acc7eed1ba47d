"""
Google Gemini provider implementation.
"""

import time
from typing import Any, Dict, List, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from config.settings import Settings, get_settings
from llm.base import (
    LLMProvider,
    LLMResponse,
    LLMError,
    LLMRateLimitError,
    LLMOverloadedError,
    LLMConnectionError,
)
from utils.logging import log_llm_call


# News content routinely trips the default filters; the brief needs all of it.
SAFETY_SETTINGS: List[types.SafetySetting] = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]


def classify_error(error: Exception) -> LLMError:
    """Map an SDK/transport exception onto the provider error hierarchy."""
    if isinstance(error, LLMError):
        return error

    if isinstance(error, genai_errors.APIError):
        code = getattr(error, "code", None)
        status = str(getattr(error, "status", "") or "").upper()
        message = str(error)
        if code == 429 or status == "RESOURCE_EXHAUSTED" or "quota" in message.lower():
            return LLMRateLimitError(f"Gemini rate limit: {message}")
        if code == 503 or status == "UNAVAILABLE" or "overloaded" in message.lower():
            return LLMOverloadedError(f"Gemini overloaded: {message}")
        return LLMError(f"Gemini API error ({code}): {message}")

    if isinstance(error, (httpx.ConnectError, httpx.TimeoutException)):
        return LLMConnectionError(f"Gemini connection error: {error}")

    error_str = str(error).lower()
    if "429" in error_str or "quota" in error_str:
        return LLMRateLimitError(f"Gemini rate limit: {error}")
    if "503" in error_str or "overloaded" in error_str:
        return LLMOverloadedError(f"Gemini overloaded: {error}")
    if "connection" in error_str or "timeout" in error_str:
        return LLMConnectionError(f"Gemini connection error: {error}")
    return LLMError(f"Gemini API error: {error}")


class GeminiProvider(LLMProvider):
    """
    Google Gemini API provider.

    Uses the async surface of the google-genai SDK. One client is created
    lazily and reused for every call.
    """

    provider_name = "gemini"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        """Lazy initialization of Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    def get_default_model(self) -> str:
        return self.settings.gemini_rewrite_model

    def is_available(self) -> bool:
        return bool(self.settings.gemini_api_key)

    def build_config(
        self,
        use_search: bool = False,
        response_schema: Optional[Dict[str, Any]] = None,
        max_tokens: int = 5000,
    ) -> types.GenerateContentConfig:
        """Build the request config for one call."""
        config_kwargs: Dict[str, Any] = {
            "safety_settings": SAFETY_SETTINGS,
            "max_output_tokens": max_tokens,
        }
        if use_search:
            config_kwargs["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = response_schema

        return types.GenerateContentConfig(**config_kwargs)

    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        *,
        use_search: bool = False,
        response_schema: Optional[Dict[str, Any]] = None,
        max_tokens: int = 5000,
    ) -> LLMResponse:
        """Generate content using the Gemini API."""
        client = self._get_client()
        model_name = model or self.get_default_model()
        config = self.build_config(use_search, response_schema, max_tokens)
        purpose = "search" if use_search else "structured" if response_schema else "text"

        start = time.monotonic()
        try:
            response = await client.aio.models.generate_content(
                model=model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            error = classify_error(e)
            log_llm_call(
                self.provider_name, model_name, purpose,
                success=False,
                duration_ms=(time.monotonic() - start) * 1000,
                error=str(error),
            )
            raise error from e

        content = response.text or ""

        usage = {"input_tokens": 0, "output_tokens": 0}
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None:
            usage["input_tokens"] = getattr(metadata, "prompt_token_count", 0) or 0
            usage["output_tokens"] = getattr(metadata, "candidates_token_count", 0) or 0

        result = LLMResponse(
            content=content,
            model=model_name,
            provider=self.provider_name,
            usage=usage,
            raw_response=response,
        )
        log_llm_call(
            self.provider_name, model_name, purpose,
            success=True,
            duration_ms=(time.monotonic() - start) * 1000,
            total_tokens=result.total_tokens,
        )
        return result
