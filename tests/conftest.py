"""Shared fixtures: a scripted provider and test settings."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import pytest

from config.settings import Settings
from llm.base import LLMProvider, LLMResponse


def story_payload(count: int) -> List[Dict[str, str]]:
    return [
        {
            "headline": f"Headline {i}",
            "summary": f"Summary {i}",
            "originalSource": f"Source {i}",
            "publishedTime": f"{i} hours ago",
        }
        for i in range(count)
    ]


class ScriptedLLM(LLMProvider):
    """Provider double that answers from a handler and records every call."""

    provider_name = "scripted"

    def __init__(self, handler: Callable[[Dict[str, Any]], Any]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        *,
        use_search: bool = False,
        response_schema: Optional[Dict[str, Any]] = None,
        max_tokens: int = 5000,
    ) -> LLMResponse:
        call = {
            "prompt": prompt,
            "model": model,
            "use_search": use_search,
            "response_schema": response_schema,
            "max_tokens": max_tokens,
        }
        self.calls.append(call)
        result = self.handler(call)
        if isinstance(result, BaseException):
            raise result
        if not isinstance(result, str):
            result = json.dumps(result)
        return LLMResponse(content=result, model=model or "test-model", provider="scripted", usage={})

    def get_default_model(self) -> str:
        return "test-model"

    def is_available(self) -> bool:
        return True


def style_echo_handler(story_count: int = 6) -> Callable[[Dict[str, Any]], Any]:
    """Search calls return ``story_count`` stories; rewrites tag each input."""

    def handler(call: Dict[str, Any]) -> Any:
        if call["use_search"]:
            return story_payload(story_count)
        payload = json.loads(call["prompt"].split("Input: ", 1)[1])
        style = call["prompt"].split('style of: "', 1)[1].split('"', 1)[0]
        return [
            {"headline": f"[{style}] {item['headline']}", "content": f"[{style}] {item['summary']}"}
            for item in payload
        ]

    return handler


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        gemini_api_key="test-key",
        retry_attempts=2,
        retry_initial_delay=0.001,
        style_delay=0,
        output_path=tmp_path / "public" / "news-data.json",
    )
