from __future__ import annotations

import logging
import os
from typing import List
from uuid import uuid4

import gradio as gr

from .config import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, OUTPUT_DIR, MergeOptions
from .diagnostics import missing_key_report
from .io_utils import read_delimited, write_delimited
from .pipeline import merge_datasets
from .records import common_columns

logger = logging.getLogger(__name__)


def update_key_column_dropdown(headers, current_selection):
    common = common_columns(headers or [])

    if not common:
        return gr.update(choices=[], value=[], interactive=False)

    if current_selection is None:
        current_selection = []
    if isinstance(current_selection, str):
        current_selection = [current_selection]

    retained = [c for c in current_selection if c in common]
    value = retained if retained else [common[0]]
    return gr.update(choices=common, value=value, interactive=True)


def handle_datasets_upload(file_objs, delimiter, current_selection):
    if not file_objs:
        return None, "No files uploaded.", gr.update(choices=[], value=[], interactive=False)

    if not isinstance(file_objs, list):
        file_objs = [file_objs]
    delimiter = delimiter or DEFAULT_DELIMITER

    datasets = []
    for file_obj in file_objs:
        try:
            datasets.append(read_delimited(file_obj, delimiter))
        except Exception as e:
            return None, f"Error parsing {getattr(file_obj, 'name', file_obj)}: {str(e)}", gr.update(choices=[], value=[], interactive=False)

    lines = [f"{i}. {d.name}: {len(d)} rows, {len(d.header)} columns" for i, d in enumerate(datasets, 1)]
    if len(datasets) < 2:
        lines.append("Upload at least one more file to merge.")
    headers = [list(d.header) for d in datasets]
    return datasets, "\n".join(lines), update_key_column_dropdown(headers, current_selection)


def merge_datasets_handler(datasets, key_columns, allow_duplicates, separator, file_name):
    key_columns = key_columns or []
    if isinstance(key_columns, str):
        key_columns = [key_columns]

    if not datasets:
        return None, "Upload the datasets before merging.", None, None

    options = MergeOptions(
        key_columns=key_columns,
        separator=separator or DEFAULT_SEPARATOR,
        allow_duplicates=bool(allow_duplicates),
    )
    try:
        outcome = merge_datasets(datasets, options)
    except ValueError as exc:
        return None, str(exc), None, None

    if not outcome.rows:
        return None, "Merge produced no rows.", None, None

    output_name = (file_name or f"merged_{uuid4().hex}").strip()
    if not output_name.lower().endswith('.csv'):
        output_name += '.csv'
    path = os.path.join(str(OUTPUT_DIR), os.path.basename(output_name))

    try:
        write_delimited(outcome.columns, outcome.rows, path)
    except Exception as exc:
        return None, f"Error writing merged file: {str(exc)}", None, None

    summary = (
        f"Rows: {len(outcome.rows)} | Keys: {len(outcome.result.records)} | "
        f"Duplicate warnings: {len(outcome.duplicate_warnings)} | "
        f"Keys missing from some dataset: {len(outcome.missing_warnings)}."
    )
    messages: List[str] = [w.message for w in outcome.warnings]
    if messages:
        summary += "\n" + "\n".join(messages)

    report = missing_key_report(outcome.result, options.separator)
    return path, summary, outcome.rows[:3], report or None
