import logging

import gradio as gr

from csv_merger.config import DEFAULT_DELIMITER, DEFAULT_SEPARATOR
from csv_merger.handlers import (
    handle_datasets_upload,
    merge_datasets_handler,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

# --- UI Definition ---
with gr.Blocks(title="CSV Merger") as demo:
    gr.Markdown("# CSV Merger")
    gr.Markdown("Upload two or more CSV files and merge them on the columns they share.")

    # State
    datasets_state = gr.State()

    gr.Markdown("### 1. Upload datasets")
    with gr.Row():
        with gr.Column(scale=2):
            dataset_files = gr.File(label="CSV Files", file_types=[".csv", ".tsv", ".txt"], file_count="multiple")
        with gr.Column(scale=1):
            delimiter_input = gr.Textbox(label="Delimiter", value=DEFAULT_DELIMITER, max_lines=1)
            upload_status = gr.Textbox(label="Status", interactive=False, lines=4)

    gr.Markdown("### 2. Configure merge")
    key_column_selector = gr.Dropdown(
        label="Identifying Columns",
        choices=[],
        value=[],
        multiselect=True,
        interactive=False,
        allow_custom_value=False,
        info="Select one or more columns present in every dataset.",
    )
    with gr.Row():
        allow_duplicates = gr.Checkbox(label="Allow duplicate identifying values", value=False)
        separator_input = gr.Textbox(label="Report key separator", value=DEFAULT_SEPARATOR, max_lines=1)
    merge_filename = gr.Textbox(label="Merged Output Filename", placeholder="merged_output.csv")

    gr.Markdown("### 3. Merge & export")
    merge_btn = gr.Button("Merge & Download", variant="primary")
    merge_download = gr.File(label="Merged Result")
    merge_status = gr.Textbox(label="Merge Status", interactive=False, lines=6)
    merge_preview = gr.JSON(label="Preview (first 3 rows)")
    missing_report = gr.JSON(label="Keys missing from some dataset")

    dataset_files.upload(
        fn=handle_datasets_upload,
        inputs=[dataset_files, delimiter_input, key_column_selector],
        outputs=[datasets_state, upload_status, key_column_selector],
    )

    merge_btn.click(
        fn=merge_datasets_handler,
        inputs=[
            datasets_state,
            key_column_selector,
            allow_duplicates,
            separator_input,
            merge_filename,
        ],
        outputs=[merge_download, merge_status, merge_preview, missing_report],
    )

if __name__ == "__main__":
    demo.launch()
