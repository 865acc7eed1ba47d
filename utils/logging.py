"""
Logging configuration for the Perspective News generator.
Uses loguru for structured, colored logging with optional file output.
"""

import sys
from pathlib import Path
from typing import Optional
from datetime import datetime

from loguru import logger

from config.settings import get_settings


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings value.
        log_file: Path to log file. Defaults to settings value.
        rotation: When to rotate log files. Default "10 MB".
        retention: How long to keep log files. Default "7 days".
    """
    settings = get_settings()
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=console_format,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )

        logger.add(
            log_path,
            format=file_format,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="gz",
            enqueue=True,  # Thread-safe
        )

    logger.debug(f"Logging configured: level={level}, file={log_file}")


def get_logger(name: str):
    """
    Get a logger instance bound to a specific name/context.

    Args:
        name: Logger name (typically module or class name)

    Returns:
        Bound logger instance
    """
    return logger.bind(name=name)


class StageLogger:
    """
    Context manager for logging a pipeline stage with timing.

    Usage:
        with StageLogger("rewrite", style="Satire") as log:
            log.info("Rewriting...")
    """

    def __init__(self, stage_name: str, **context):
        self.stage_name = stage_name
        self.context = context
        self.logger = logger.bind(stage=stage_name, **context)
        self.start_time: Optional[datetime] = None

    def _label(self) -> str:
        if not self.context:
            return self.stage_name
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.stage_name} ({details})"

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info(f"Starting {self._label()}")
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            self.logger.error(f"{self._label()} failed after {duration:.2f}s: {exc_val}")
        else:
            self.logger.info(f"{self._label()} completed in {duration:.2f}s")

        return False  # Don't suppress exceptions


def log_llm_call(
    provider: str,
    model: str,
    purpose: str,
    success: bool,
    duration_ms: float,
    total_tokens: int = 0,
    error: Optional[str] = None,
) -> None:
    """
    Log a remote generation call with structured data.

    Args:
        provider: Provider name (e.g., "gemini")
        model: Model identifier
        purpose: Kind of request ("search", "structured" or "text")
        success: Whether call succeeded
        duration_ms: Call duration in milliseconds
        total_tokens: Tokens reported by the provider
        error: Error message if failed
    """
    log_data = {
        "provider": provider,
        "model": model,
        "purpose": purpose,
        "success": success,
        "duration_ms": round(duration_ms, 2),
        "total_tokens": total_tokens,
    }

    if error:
        log_data["error"] = error
        logger.warning(f"LLM call failed: {log_data}")
    else:
        logger.debug(f"LLM call: {log_data}")
