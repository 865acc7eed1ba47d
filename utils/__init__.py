"""
Utility modules for the Perspective News generator.
"""

from utils.logging import setup_logging, get_logger, StageLogger, log_llm_call
from utils.retry import retry_with_backoff

__all__ = [
    "setup_logging",
    "get_logger",
    "StageLogger",
    "log_llm_call",
    "retry_with_backoff",
]
