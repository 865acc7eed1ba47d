"""
Persistence of the edition dataset and the read contract used by the
presentation side.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config.styles import BASELINE_STYLE
from briefing.errors import DatasetReadError
from briefing.models import Dataset
from utils.logging import get_logger

logger = get_logger("dataset_store")

READ_ERROR_NOTICE = "Failed to load today's edition. Please try again later."


def save_dataset(dataset: Dataset, path: Union[str, Path]) -> Path:
    """
    Write ``dataset`` as JSON, replacing any previous file atomically.

    Args:
        dataset: Complete dataset for the run
        path: Destination file

    Returns:
        Path to the saved file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(dataset.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Saved dataset to {path}")
    return path


def _validate(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DatasetReadError("Invalid news data format: top level is not an object")

    stories = data.get("stories")
    if not isinstance(stories, dict) or not stories.get(BASELINE_STYLE.value):
        raise DatasetReadError(
            f"Invalid news data format: missing '{BASELINE_STYLE.value}' stories"
        )

    if "timestamp" not in data:
        raise DatasetReadError("Invalid news data format: missing timestamp")

    return data


def load_dataset(path: Union[str, Path]) -> Dataset:
    """
    Read and validate a persisted dataset.

    Raises:
        DatasetReadError: Missing file, bad JSON, or no baseline stories
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise DatasetReadError(f"Dataset not found: {path}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DatasetReadError(f"Dataset is not valid JSON: {e}") from e
    except OSError as e:
        raise DatasetReadError(f"Failed to read dataset: {e}") from e

    data = _validate(raw)
    try:
        return Dataset.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DatasetReadError(f"Invalid news data format: {e}") from e


class DatasetReader:
    """
    One-shot reader for a display session.

    The first call to ``load`` reads the file; later calls return the same
    outcome without touching disk. Failures are kept as a user-facing
    notice instead of being raised.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._loaded = False
        self.dataset: Optional[Dataset] = None
        self.error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.dataset is not None

    def load(self) -> Optional[Dataset]:
        if self._loaded:
            return self.dataset
        self._loaded = True

        try:
            self.dataset = load_dataset(self.path)
        except DatasetReadError as e:
            logger.error(f"Failed to load static news: {e}")
            self.error = READ_ERROR_NOTICE

        return self.dataset
