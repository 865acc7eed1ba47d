"""
Story fetcher: one search-grounded call that returns the edition's
baseline stories.
"""

import time
from typing import Any, Callable, List, Optional

from config.settings import Settings, get_settings
from llm.base import LLMProvider, LLMResponse, LLMTransientError
from briefing.errors import EmptyResponseError, ResponseFormatError
from briefing.models import (
    Story,
    DEFAULT_HEADLINE,
    DEFAULT_CONTENT,
    DEFAULT_SOURCE,
    DEFAULT_PUBLISHED_TIME,
)
from briefing.normalizer import parse_json_array
from briefing.prompts import build_fetch_prompt
from utils.logging import get_logger
from utils.retry import retry_with_backoff

logger = get_logger("fetcher")


def _text(value: Any) -> Optional[str]:
    """Return a stripped string, or None for blanks and non-strings."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def to_story(item: Any, index: int, captured_ms: int) -> Story:
    """
    Map one upstream element onto a Story, filling defaults.

    Non-object elements become an all-default story so positions stay
    aligned with the upstream array.
    """
    if not isinstance(item, dict):
        logger.warning(f"Story element {index} is {type(item).__name__}, using defaults")
        item = {}

    return Story(
        id=f"story-{captured_ms}-{index}",
        headline=_text(item.get("headline")) or DEFAULT_HEADLINE,
        content=(
            _text(item.get("summary"))
            or _text(item.get("content"))
            or DEFAULT_CONTENT
        ),
        original_source=_text(item.get("originalSource")) or DEFAULT_SOURCE,
        source_url=_text(item.get("sourceUrl")),
        published_time=_text(item.get("publishedTime")) or DEFAULT_PUBLISHED_TIME,
    )


def parse_stories(text: str, limit: int, captured_ms: int) -> List[Story]:
    """
    Turn the fetch response text into at most ``limit`` stories.

    Raises:
        EmptyResponseError: No text at all
        ResponseFormatError: Unparseable, not an array, or an empty array
    """
    if not text or not text.strip():
        raise EmptyResponseError("API returned empty response. Usage limit may be reached.")

    data = parse_json_array(text)
    if not data:
        raise ResponseFormatError("No stories found in response.", raw_text=text)

    if len(data) > limit:
        logger.debug(f"Upstream returned {len(data)} stories, keeping first {limit}")

    return [to_story(item, i, captured_ms) for i, item in enumerate(data[:limit])]


class StoryFetcher:
    """
    Fetches current headlines through the search-augmented model.
    """

    def __init__(
        self,
        llm: LLMProvider,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            llm: Shared provider handle
            settings: Application settings
            clock: Seconds-since-epoch source used for story ids
        """
        self.llm = llm
        self.settings = settings or get_settings()
        self._clock = clock

    async def _request(self) -> LLMResponse:
        prompt = build_fetch_prompt(self.settings.story_count)
        return await retry_with_backoff(
            lambda: self.llm.generate(
                prompt,
                model=self.settings.get_model("search"),
                use_search=True,
                max_tokens=self.settings.max_output_tokens,
            ),
            retries=self.settings.retry_attempts,
            delay=self.settings.retry_initial_delay,
            retry_on=(LLMTransientError,),
        )

    async def fetch(self) -> List[Story]:
        """
        Fetch the baseline stories.

        Returns:
            Up to ``story_count`` stories in upstream order

        Raises:
            LLMError: The remote call failed (after retries for transient errors)
            EmptyResponseError, ResponseFormatError: Malformed response
        """
        count = self.settings.story_count
        logger.info(f"Fetching live news ({count} stories)...")

        response = await self._request()
        captured_ms = int(self._clock() * 1000)

        try:
            stories = parse_stories(response.content, count, captured_ms)
        except ResponseFormatError as e:
            logger.error(f"Failed to parse news data. Raw: {e.raw_text[:500]!r}")
            raise

        logger.info(f"Fetched {len(stories)} raw stories")
        return stories
