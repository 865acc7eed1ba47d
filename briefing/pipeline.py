"""
Pipeline orchestrator: fetch the baseline once, rewrite it once per style,
then persist the complete edition.

    START -> FETCHING -> REWRITING(style_1 .. style_k) -> PERSISTING -> DONE
                 \\______________ any unrecovered failure ______________/-> FAILED

Remote calls are issued one at a time, with a fixed pause after each style,
to stay under the upstream rate limits.
"""

import asyncio
import time
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from config.settings import Settings, get_settings
from config.styles import NewsStyle, BASELINE_STYLE, all_styles
from llm.base import LLMProvider, LLMError
from briefing.errors import BriefingError, PipelineError
from briefing.fetcher import StoryFetcher
from briefing.models import Dataset, Story, StyledCollection
from briefing.rewriter import StyleRewriter
from output.dataset_store import save_dataset
from utils.logging import get_logger, StageLogger

logger = get_logger("pipeline")


class PipelineStage(Enum):
    """Run states."""

    START = "start"
    FETCHING = "fetching"
    REWRITING = "rewriting"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class BriefingPipeline:
    """
    Runs one generation pass and writes the dataset.

    The fetcher and rewriter share the same provider handle.
    """

    def __init__(
        self,
        llm: LLMProvider,
        settings: Optional[Settings] = None,
        styles: Optional[Sequence[NewsStyle]] = None,
        output_path: Optional[Path] = None,
        strict: Optional[bool] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            llm: Provider used for both stages
            settings: Application settings
            styles: Styles to produce, in order (default: all declared styles).
                The baseline is always included.
            output_path: Where to write the dataset (default: settings.output_path)
            strict: Abort on any style failure (default: settings.strict_styles)
            sleep: Awaitable pause used between styles
            clock: Seconds-since-epoch source for ids and the capture timestamp
        """
        self.settings = settings or get_settings()
        self.fetcher = StoryFetcher(llm, self.settings, clock=clock)
        self.rewriter = StyleRewriter(llm, self.settings)
        self.styles = self._resolve_styles(styles)
        self.output_path = Path(output_path or self.settings.output_path)
        self.strict = self.settings.strict_styles if strict is None else strict
        self._sleep = sleep
        self._clock = clock

        self.stage = PipelineStage.START
        self.current_style: Optional[NewsStyle] = None

    @staticmethod
    def _resolve_styles(styles: Optional[Sequence[NewsStyle]]) -> List[NewsStyle]:
        if styles is None:
            return all_styles()
        selected = set(styles) | {BASELINE_STYLE}
        return [s for s in all_styles() if s in selected]

    def _enter(self, stage: PipelineStage, style: Optional[NewsStyle] = None) -> None:
        self.stage = stage
        self.current_style = style
        suffix = f" ({style.value})" if style else ""
        logger.debug(f"Pipeline stage -> {stage.value}{suffix}")

    async def _fetch(self) -> List[Story]:
        self._enter(PipelineStage.FETCHING)
        with StageLogger("fetch"):
            try:
                return await self.fetcher.fetch()
            except (LLMError, BriefingError) as e:
                raise PipelineError(self.stage.value, str(e)) from e

    async def _rewrite_all(self, baseline: List[Story]) -> Tuple[StyledCollection, List[str]]:
        collection: StyledCollection = {}
        degraded: List[str] = []

        for style in self.styles:
            self._enter(PipelineStage.REWRITING, style)
            with StageLogger("rewrite", style=style.value):
                try:
                    collection[style.value] = await self.rewriter.rewrite(baseline, style)
                except (LLMError, BriefingError) as e:
                    if self.strict:
                        raise PipelineError(self.stage.value, str(e), style=style.value) from e
                    logger.warning(f"{style.value} rewrite failed, keeping baseline text: {e}")
                    collection[style.value] = list(baseline)
                    degraded.append(style.value)

            await self._sleep(self.settings.style_delay)

        return collection, degraded

    async def run(self) -> Dataset:
        """
        Execute the full run.

        Returns:
            The dataset that was written

        Raises:
            PipelineError: A stage failed; nothing was written
        """
        try:
            baseline = await self._fetch()
            collection, degraded = await self._rewrite_all(baseline)

            self._enter(PipelineStage.PERSISTING)
            dataset = Dataset(
                timestamp=int(self._clock() * 1000),
                stories=collection,
                degraded_styles=degraded,
            )
            try:
                save_dataset(dataset, self.output_path)
            except OSError as e:
                raise PipelineError(self.stage.value, f"Failed to write dataset: {e}") from e

        except Exception:
            self._enter(PipelineStage.FAILED)
            raise

        self._enter(PipelineStage.DONE)
        logger.info(f"Successfully generated news data at: {self.output_path}")
        return dataset
