"""Tests for the generation pipeline end to end, with a scripted provider."""

from __future__ import annotations

import json

import pytest

from briefing.errors import PipelineError
from briefing.pipeline import BriefingPipeline, PipelineStage
from config.styles import NewsStyle
from llm.base import LLMError, LLMOverloadedError
from output.dataset_store import load_dataset

from tests.conftest import ScriptedLLM, style_echo_handler, story_payload


class _Pauses:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.mark.asyncio
async def test_full_run_produces_every_style(settings):
    llm = ScriptedLLM(style_echo_handler())
    pipeline = BriefingPipeline(llm, settings, sleep=_Pauses(), clock=lambda: 1700000000.0)

    dataset = await pipeline.run()

    assert pipeline.stage is PipelineStage.DONE
    assert list(dataset.stories) == [s.value for s in NewsStyle]
    assert len(dataset.stories) == 6
    assert all(len(stories) == 6 for stories in dataset.stories.values())
    assert dataset.timestamp == 1700000000000

    baseline_ids = [s.id for s in dataset.baseline]
    for stories in dataset.stories.values():
        assert [s.id for s in stories] == baseline_ids

    assert dataset.stories["Satire"][0].headline == "[Satire] Headline 0"
    assert dataset.stories["Neutral"][0].headline == "Headline 0"

    # one fetch + five rewrites, one at a time
    assert len(llm.calls) == 6
    assert llm.calls[0]["use_search"] is True


@pytest.mark.asyncio
async def test_dataset_file_matches_contract(settings):
    pipeline = BriefingPipeline(ScriptedLLM(style_echo_handler()), settings, sleep=_Pauses())

    dataset = await pipeline.run()

    raw = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert set(raw) == {"timestamp", "stories"}
    story = raw["stories"]["Right Wing"][2]
    assert set(story) == {"id", "headline", "content", "originalSource", "publishedTime"}
    assert story["originalSource"] == "Source 2"
    assert load_dataset(settings.output_path).to_dict() == dataset.to_dict()


@pytest.mark.asyncio
async def test_pauses_after_each_style(settings):
    settings.style_delay = 2.0
    pauses = _Pauses()
    pipeline = BriefingPipeline(ScriptedLLM(style_echo_handler()), settings, sleep=pauses)

    await pipeline.run()

    assert pauses.calls == [2.0] * 6


@pytest.mark.asyncio
async def test_style_subset_always_includes_baseline(settings):
    llm = ScriptedLLM(style_echo_handler())
    pipeline = BriefingPipeline(
        llm, settings, styles=[NewsStyle.FICTION, NewsStyle.LEFT], sleep=_Pauses()
    )

    dataset = await pipeline.run()

    assert list(dataset.stories) == ["Left Wing", "Neutral", "Micro Fiction"]
    assert len(llm.calls) == 3


@pytest.mark.asyncio
async def test_fetch_failure_aborts_without_writing(settings):
    llm = ScriptedLLM(lambda call: LLMError("permission denied"))
    pipeline = BriefingPipeline(llm, settings, sleep=_Pauses())

    with pytest.raises(PipelineError) as exc_info:
        await pipeline.run()

    assert exc_info.value.stage == "fetching"
    assert pipeline.stage is PipelineStage.FAILED
    assert not settings.output_path.exists()


@pytest.mark.asyncio
async def test_style_failure_aborts_whole_run_by_default(settings):
    echo = style_echo_handler()

    def handler(call):
        if '"Satire"' in call["prompt"]:
            return LLMOverloadedError("503 overloaded")
        return echo(call)

    llm = ScriptedLLM(handler)
    pipeline = BriefingPipeline(llm, settings, sleep=_Pauses())

    with pytest.raises(PipelineError) as exc_info:
        await pipeline.run()

    assert exc_info.value.style == "Satire"
    assert isinstance(exc_info.value.__cause__, LLMOverloadedError)
    assert pipeline.stage is PipelineStage.FAILED
    assert not settings.output_path.exists()
    # Satire retried, later styles never attempted
    satire_calls = [c for c in llm.calls if '"Satire"' in c["prompt"]]
    assert len(satire_calls) == settings.retry_attempts + 1
    assert not any('"Micro Fiction"' in c["prompt"] for c in llm.calls)


@pytest.mark.asyncio
async def test_relaxed_run_keeps_baseline_for_failed_style(settings):
    echo = style_echo_handler()

    def handler(call):
        if '"12-Year-Old"' in call["prompt"]:
            return "not json at all"
        return echo(call)

    pipeline = BriefingPipeline(ScriptedLLM(handler), settings, strict=False, sleep=_Pauses())

    dataset = await pipeline.run()

    assert dataset.degraded_styles == ["12-Year-Old"]
    assert dataset.stories["12-Year-Old"] == dataset.baseline
    assert len(dataset.stories) == 6
    raw = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert raw["degradedStyles"] == ["12-Year-Old"]


@pytest.mark.asyncio
async def test_calls_are_never_concurrent(settings):
    in_flight = {"now": 0, "max": 0}
    echo = style_echo_handler()

    class _TrackingLLM(ScriptedLLM):
        async def generate(self, prompt, model=None, **kwargs):
            in_flight["now"] += 1
            in_flight["max"] = max(in_flight["max"], in_flight["now"])
            try:
                return await super().generate(prompt, model, **kwargs)
            finally:
                in_flight["now"] -= 1

    await BriefingPipeline(_TrackingLLM(echo), settings, sleep=_Pauses()).run()

    assert in_flight["max"] == 1


@pytest.mark.asyncio
async def test_upstream_surplus_is_truncated_before_rewrite(settings):
    echo = style_echo_handler()

    def handler(call):
        if call["use_search"]:
            return story_payload(9)
        return echo(call)

    dataset = await BriefingPipeline(ScriptedLLM(handler), settings, sleep=_Pauses()).run()

    assert all(len(stories) == 6 for stories in dataset.stories.values())
