"""
Prompt templates for the two generation stages.
"""

import json
from typing import Any, Dict, List, Sequence

from config.styles import NewsStyle, get_style_description

FETCH_PROMPT_TEMPLATE = """
Task: Find {count} major trending US news headlines from the last 24 hours using Google Search.

CRITICAL OUTPUT INSTRUCTIONS:
1. Use the Google Search tool to find the stories.
2. Output the results STRICTLY as a valid JSON array.
3. Do NOT output any conversational text, markdown, or explanations. JUST the JSON array.

JSON Structure:
[
  {{
    "headline": "Story Headline",
    "summary": "Brief summary (40-50 words)",
    "originalSource": "News Source Name",
    "publishedTime": "e.g. '2 hours ago'"
  }}
]
"""

REWRITE_PROMPT_TEMPLATE = """
Rewrite these news stories in the style of: "{style}".
Style Guide: "{guide}".

CRITICAL INSTRUCTIONS:
1. Headlines must be COMPLETE sentences or phrases (minimum 5 words for 12-Year-Old style).
2. Maintain the full meaning and context of the original story.
3. Return exactly {count} items, in the same order as the input.
4. Output valid JSON only.

Input: {payload}
"""

# Output contract for the rewrite call (Gemini schema dialect)
REWRITE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "headline": {"type": "STRING"},
            "content": {"type": "STRING"},
        },
        "required": ["headline", "content"],
    },
}


def build_fetch_prompt(count: int) -> str:
    return FETCH_PROMPT_TEMPLATE.format(count=count)


def build_rewrite_prompt(style: NewsStyle, pairs: Sequence[Dict[str, str]]) -> str:
    """
    Build the rewrite prompt.

    Args:
        style: Target style
        pairs: ``{"headline", "summary"}`` dicts, one per story, in order
    """
    payload: List[Dict[str, str]] = list(pairs)
    return REWRITE_PROMPT_TEMPLATE.format(
        style=style.value,
        guide=get_style_description(style),
        count=len(payload),
        payload=json.dumps(payload, ensure_ascii=False),
    )


CONNECTION_CHECK_PROMPT = "Say hello world"
