"""
Rewriting styles ("lenses") offered by the edition.

Declaration order is the order styles are generated and displayed.
"""

from enum import Enum
from typing import Dict, List


class NewsStyle(Enum):
    """Named rewriting lenses. Values are the labels used in the data file."""

    LEFT = "Left Wing"
    NEUTRAL = "Neutral"
    RIGHT = "Right Wing"
    SATIRE = "Satire"
    ELI12 = "12-Year-Old"
    FICTION = "Micro Fiction"

    @property
    def is_baseline(self) -> bool:
        return self is BASELINE_STYLE

    @classmethod
    def from_label(cls, label: str) -> "NewsStyle":
        """
        Look up a style by its label or enum name (case-insensitive).

        Raises:
            ValueError: If no style matches
        """
        needle = label.strip().lower()
        for style in cls:
            if needle in (style.value.lower(), style.name.lower()):
                return style
        available = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown style: {label!r}. Available: {available}")


BASELINE_STYLE = NewsStyle.NEUTRAL

STYLE_GUIDES: Dict[NewsStyle, str] = {
    NewsStyle.LEFT: "Progressive perspective, focus on systemic issues",
    NewsStyle.RIGHT: "Conservative perspective, focus on tradition/liberty",
    NewsStyle.SATIRE: "Exaggerated, ironic, funny (The Onion style)",
    NewsStyle.FICTION: "100-word flash fiction story",
    NewsStyle.ELI12: "Simple language for a 12-year-old",
}


def get_style_description(style: NewsStyle) -> str:
    """Short style guide sent to the model alongside the style label."""
    return STYLE_GUIDES.get(style, "Objective facts")


def all_styles() -> List[NewsStyle]:
    """All styles in declared order, baseline included."""
    return list(NewsStyle)
