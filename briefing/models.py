"""
Data model for an edition: stories, styled collections, and the dataset
handed to the presentation layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config.styles import NewsStyle, BASELINE_STYLE

DEFAULT_HEADLINE = "News Alert"
DEFAULT_CONTENT = "Summary unavailable."
DEFAULT_SOURCE = "News Wire"
DEFAULT_PUBLISHED_TIME = "Today"


@dataclass(frozen=True)
class Story:
    """A single news item. Rewrites produce new instances."""

    id: str
    headline: str
    content: str
    original_source: str = DEFAULT_SOURCE
    source_url: Optional[str] = None
    published_time: Optional[str] = DEFAULT_PUBLISHED_TIME

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the field names the front end reads."""
        data: Dict[str, Any] = {
            "id": self.id,
            "headline": self.headline,
            "content": self.content,
            "originalSource": self.original_source,
        }
        if self.source_url:
            data["sourceUrl"] = self.source_url
        if self.published_time is not None:
            data["publishedTime"] = self.published_time
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Story":
        return cls(
            id=str(data["id"]),
            headline=data["headline"],
            content=data["content"],
            original_source=data.get("originalSource") or DEFAULT_SOURCE,
            source_url=data.get("sourceUrl"),
            published_time=data.get("publishedTime"),
        )


# Style label -> stories in baseline order
StyledCollection = Dict[str, List[Story]]


@dataclass
class Dataset:
    """The persisted artifact of one pipeline run."""

    timestamp: int  # capture time, epoch milliseconds
    stories: StyledCollection
    degraded_styles: List[str] = field(default_factory=list)

    @property
    def baseline(self) -> List[Story]:
        return self.stories.get(BASELINE_STYLE.value, [])

    def get_style(self, style: NewsStyle) -> List[Story]:
        """Stories for a style, falling back to the baseline when absent."""
        return self.stories.get(style.value) or self.baseline

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "timestamp": self.timestamp,
            "stories": {
                label: [story.to_dict() for story in stories]
                for label, stories in self.stories.items()
            },
        }
        if self.degraded_styles:
            data["degradedStyles"] = list(self.degraded_styles)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        return cls(
            timestamp=int(data["timestamp"]),
            stories={
                label: [Story.from_dict(item) for item in items]
                for label, items in data["stories"].items()
            },
            degraded_styles=list(data.get("degradedStyles", [])),
        )
