"""
Exceptions raised by the briefing pipeline.
"""

from typing import Optional


class BriefingError(Exception):
    """Base exception for pipeline errors."""
    pass


class EmptyResponseError(BriefingError):
    """The model returned no text payload."""
    pass


class ResponseFormatError(BriefingError):
    """The model returned text that is not the expected JSON array."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class PipelineError(BriefingError):
    """A pipeline stage failed and the run was aborted."""

    def __init__(self, stage: str, message: str, style: Optional[str] = None):
        self.stage = stage
        self.style = style
        where = f"{stage} [{style}]" if style else stage
        super().__init__(f"{where}: {message}")


class DatasetReadError(BriefingError):
    """The persisted dataset could not be loaded or is malformed."""
    pass
