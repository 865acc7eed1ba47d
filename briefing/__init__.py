"""
Edition generation pipeline.

Modules:
- normalizer: extract the JSON array from raw model text
- fetcher: search-grounded baseline stories
- rewriter: per-style rewrites merged onto the baseline
- pipeline: run orchestration and persistence (import from briefing.pipeline)
"""

from briefing.errors import (
    BriefingError,
    EmptyResponseError,
    ResponseFormatError,
    PipelineError,
    DatasetReadError,
)
from briefing.models import Story, Dataset, StyledCollection
from briefing.normalizer import clean_json_string, parse_json_array
from briefing.fetcher import StoryFetcher
from briefing.rewriter import StyleRewriter, merge_rewrites

__all__ = [
    "BriefingError",
    "EmptyResponseError",
    "ResponseFormatError",
    "PipelineError",
    "DatasetReadError",
    "Story",
    "Dataset",
    "StyledCollection",
    "clean_json_string",
    "parse_json_array",
    "StoryFetcher",
    "StyleRewriter",
    "merge_rewrites",
]
