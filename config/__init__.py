from .settings import Settings, ConfigurationError, get_settings
from .styles import NewsStyle, BASELINE_STYLE, STYLE_GUIDES, get_style_description, all_styles

__all__ = [
    "Settings",
    "ConfigurationError",
    "get_settings",
    "NewsStyle",
    "BASELINE_STYLE",
    "STYLE_GUIDES",
    "get_style_description",
    "all_styles",
]
