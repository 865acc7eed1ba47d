"""
Edition output: the persisted data file and terminal rendering.
"""

from output.dataset_store import (
    save_dataset,
    load_dataset,
    DatasetReader,
    READ_ERROR_NOTICE,
)
from output.renderer import print_edition, print_read_error, summary_table

__all__ = [
    "save_dataset",
    "load_dataset",
    "DatasetReader",
    "READ_ERROR_NOTICE",
    "print_edition",
    "print_read_error",
    "summary_table",
]
