import logging

import gradio as gr
from dotenv import load_dotenv

from openapi_dereferencer.config import DereferenceSettings
from openapi_dereferencer.handlers import load_document_handler, process_document_handler

load_dotenv()
settings = DereferenceSettings.from_env()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# --- UI Definition ---
with gr.Blocks(title="OpenAPI Dereferencer") as demo:
    gr.Markdown("# OpenAPI Dereferencer")
    gr.Markdown("Upload an OpenAPI document, inline its `$ref`s and optionally flatten `allOf` / `oneOf` / `anyOf`.")

    # State
    document_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Scope
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload OpenAPI Document", file_types=[".json", ".yaml", ".yml"])
            status_msg = gr.Textbox(label="Status", interactive=False)
            document_summary = gr.Textbox(label="Document Summary", interactive=False)

            gr.Markdown("### 2. Scope")
            start_path_selector = gr.Dropdown(
                label="Start At (path expression)",
                choices=["$"],
                value="$",
                allow_custom_value=True,
                interactive=True,
            )
            ignore_paths_input = gr.Textbox(
                label="Ignore Paths (one per line)",
                placeholder="$.components.x-stackQL-resources",
                lines=3,
            )

        # Right Panel: Normalization & Output
        with gr.Column(scale=1):
            gr.Markdown("### 3. Normalize")
            flatten_all_of_cb = gr.Checkbox(label="Flatten allOf", value=False)
            one_of_cb = gr.Checkbox(label="Select first of oneOf", value=False)
            any_of_cb = gr.Checkbox(label="Select first of anyOf", value=False)

            gr.Markdown("### 4. Export")
            output_format = gr.Radio(choices=["JSON", "YAML"], value="JSON", label="Output Format")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="dereferenced")
            run_btn = gr.Button("Dereference", variant="primary")
            download_output = gr.File(label="Download Result")
            result_preview = gr.JSON(label="Result")

    file_input.upload(
        fn=load_document_handler,
        inputs=[file_input],
        outputs=[document_state, start_path_selector, status_msg, document_summary],
    )

    run_btn.click(
        fn=process_document_handler,
        inputs=[
            document_state,
            start_path_selector,
            ignore_paths_input,
            flatten_all_of_cb,
            one_of_cb,
            any_of_cb,
            output_format,
            output_filename,
        ],
        outputs=[download_output, status_msg, result_preview],
    )

if __name__ == "__main__":
    demo.launch()
