"""
Style rewriter: restyles a batch of baseline stories in one call and merges
the result back onto the originals by position.
"""

from dataclasses import replace
from typing import Any, List, Optional, Sequence

from config.settings import Settings, get_settings
from config.styles import NewsStyle
from llm.base import LLMProvider, LLMTransientError
from briefing.models import Story
from briefing.normalizer import parse_json_array
from briefing.prompts import REWRITE_RESPONSE_SCHEMA, build_rewrite_prompt
from utils.logging import get_logger
from utils.retry import retry_with_backoff

logger = get_logger("rewriter")


def _field(item: Any, name: str) -> Optional[str]:
    if isinstance(item, dict):
        value = item.get(name)
        if isinstance(value, str) and value.strip():
            return value
    return None


def merge_rewrites(stories: Sequence[Story], rewritten: Sequence[Any]) -> List[Story]:
    """
    Overlay rewritten headline/content onto ``stories`` by index.

    Missing elements or fields keep the baseline text. Extra elements are
    ignored. Everything other than headline and content is carried over.
    """
    merged = []
    for index, original in enumerate(stories):
        item = rewritten[index] if index < len(rewritten) else None
        headline = _field(item, "headline")
        content = _field(item, "content")
        if headline is None or content is None:
            logger.warning(f"Rewrite incomplete for story {original.id}, keeping baseline text")
        merged.append(replace(
            original,
            headline=headline or original.headline,
            content=content or original.content,
        ))
    return merged


class StyleRewriter:
    """
    Rewrites stories in a given style using schema-constrained output.
    """

    def __init__(self, llm: LLMProvider, settings: Optional[Settings] = None):
        self.llm = llm
        self.settings = settings or get_settings()

    async def rewrite(self, stories: Sequence[Story], style: NewsStyle) -> List[Story]:
        """
        Rewrite ``stories`` in ``style``.

        The baseline style is returned as-is without a remote call.

        Returns:
            New list with the same length and order as ``stories``

        Raises:
            LLMError: The remote call failed (after retries for transient errors)
            ResponseFormatError: The response was not a JSON array
        """
        if style.is_baseline:
            return list(stories)

        if not stories:
            return []

        logger.info(f"Rewriting stories for style: {style.value}...")

        # Only headline/summary go upstream
        prompt = build_rewrite_prompt(
            style,
            [{"headline": s.headline, "summary": s.content} for s in stories],
        )

        response = await retry_with_backoff(
            lambda: self.llm.generate(
                prompt,
                model=self.settings.get_model("rewrite"),
                response_schema=REWRITE_RESPONSE_SCHEMA,
                max_tokens=self.settings.max_output_tokens,
            ),
            retries=self.settings.retry_attempts,
            delay=self.settings.retry_initial_delay,
            retry_on=(LLMTransientError,),
        )

        rewritten = parse_json_array(response.content)
        if len(rewritten) != len(stories):
            logger.warning(
                f"{style.value}: got {len(rewritten)} rewrites for {len(stories)} stories"
            )

        return merge_rewrites(stories, rewritten)
