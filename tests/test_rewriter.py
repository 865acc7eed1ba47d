"""Unit tests for briefing.rewriter."""

from __future__ import annotations

import json

import pytest

from briefing.errors import ResponseFormatError
from briefing.models import Story
from briefing.prompts import REWRITE_RESPONSE_SCHEMA
from briefing.rewriter import StyleRewriter, merge_rewrites
from config.styles import NewsStyle
from llm.base import LLMRateLimitError

from tests.conftest import ScriptedLLM, style_echo_handler


def _baseline(count=6):
    return [
        Story(
            id=f"story-1-{i}",
            headline=f"Headline {i}",
            content=f"Summary {i}",
            original_source=f"Source {i}",
            source_url=f"https://example.com/{i}",
            published_time="Today",
        )
        for i in range(count)
    ]


def test_short_rewrite_keeps_baseline_for_missing_positions():
    baseline = [
        Story(id="1", headline="A", content="a"),
        Story(id="2", headline="B", content="b"),
    ]

    merged = merge_rewrites(baseline, [{"headline": "A2", "content": "c2"}])

    assert [s.id for s in merged] == ["1", "2"]
    assert merged[0].headline == "A2"
    assert merged[0].content == "c2"
    assert merged[1].headline == "B"
    assert merged[1].content == "b"


def test_merge_preserves_provenance_and_never_mutates_baseline():
    baseline = _baseline(2)
    rewritten = [{"headline": "New 0", "content": "Body 0"}, {"headline": "New 1", "content": "Body 1"}]

    merged = merge_rewrites(baseline, rewritten)

    for original, new in zip(baseline, merged):
        assert new is not original
        assert new.id == original.id
        assert new.original_source == original.original_source
        assert new.source_url == original.source_url
        assert new.published_time == original.published_time
    assert baseline[0].headline == "Headline 0"


def test_merge_ignores_extra_and_malformed_elements():
    baseline = _baseline(2)

    merged = merge_rewrites(baseline, [{"headline": "", "content": "only body"}, "junk", {"headline": "x"}])

    assert len(merged) == 2
    assert merged[0].headline == "Headline 0"
    assert merged[0].content == "only body"
    assert merged[1] == baseline[1]


@pytest.mark.asyncio
async def test_baseline_style_is_passthrough_without_call(settings):
    llm = ScriptedLLM(lambda call: pytest.fail("no remote call expected"))
    baseline = _baseline()

    result = await StyleRewriter(llm, settings).rewrite(baseline, NewsStyle.NEUTRAL)

    assert result == baseline
    assert result is not baseline
    assert llm.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("style", [s for s in NewsStyle if s is not NewsStyle.NEUTRAL])
async def test_rewrite_keeps_length_and_order(settings, style):
    llm = ScriptedLLM(style_echo_handler())
    baseline = _baseline()

    result = await StyleRewriter(llm, settings).rewrite(baseline, style)

    assert len(result) == len(baseline)
    assert [s.id for s in result] == [s.id for s in baseline]
    assert result[3].headline == f"[{style.value}] Headline 3"


@pytest.mark.asyncio
async def test_request_carries_only_headline_and_summary(settings):
    llm = ScriptedLLM(style_echo_handler())

    await StyleRewriter(llm, settings).rewrite(_baseline(2), NewsStyle.SATIRE)

    call = llm.calls[0]
    payload = json.loads(call["prompt"].split("Input: ", 1)[1])
    assert payload == [
        {"headline": "Headline 0", "summary": "Summary 0"},
        {"headline": "Headline 1", "summary": "Summary 1"},
    ]
    assert "example.com" not in call["prompt"]
    assert "The Onion style" in call["prompt"]
    assert call["response_schema"] == REWRITE_RESPONSE_SCHEMA
    assert call["use_search"] is False


@pytest.mark.asyncio
async def test_empty_response_degrades_to_baseline(settings):
    llm = ScriptedLLM(lambda call: "")
    baseline = _baseline(3)

    result = await StyleRewriter(llm, settings).rewrite(baseline, NewsStyle.LEFT)

    assert result == baseline


@pytest.mark.asyncio
async def test_non_array_response_is_an_error(settings):
    llm = ScriptedLLM(lambda call: '{"headline": "x", "content": "y"}')

    with pytest.raises(ResponseFormatError):
        await StyleRewriter(llm, settings).rewrite(_baseline(1), NewsStyle.RIGHT)


@pytest.mark.asyncio
async def test_quota_error_is_retried_then_surfaced(settings):
    llm = ScriptedLLM(lambda call: LLMRateLimitError("429 quota"))

    with pytest.raises(LLMRateLimitError):
        await StyleRewriter(llm, settings).rewrite(_baseline(1), NewsStyle.ELI12)

    assert len(llm.calls) == settings.retry_attempts + 1
