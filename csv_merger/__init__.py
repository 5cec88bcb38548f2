"""Core logic for CSV Merger.

The Gradio UI lives in `app.py` and the command line in `csv_merger.cli`.
This package contains pure functions that:
- read delimited files or in-memory tables
- validate headers and index rows on identifying columns
- cross-reference every dataset against every other one
- flatten merged records into rows and report inconsistent keys
"""

from .config import MergeOptions
from .errors import DuplicateKeyWarning, FatalSchemaError, MissingKeyWarning
from .io_utils import from_records, load_datasets, read_delimited, to_dataframe, write_delimited
from .pipeline import MergeOutcome, merge_datasets
from .records import Dataset, dataset_from_rows

__all__ = [
    'Dataset',
    'DuplicateKeyWarning',
    'FatalSchemaError',
    'MergeOptions',
    'MergeOutcome',
    'MissingKeyWarning',
    'dataset_from_rows',
    'from_records',
    'load_datasets',
    'merge_datasets',
    'read_delimited',
    'to_dataframe',
    'write_delimited',
]
