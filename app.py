import logging
import os
from functools import partial

import gradio as gr

from json_schema_docs.accessors import as_schema
from json_schema_docs.extraction import (
    child_properties,
    extract_definitions,
    extract_properties,
    one_of_options,
    sort_properties,
)
from json_schema_docs.handlers import (
    anchor_handler,
    collapse_all_handler,
    expand_all_handler,
    export_table_handler,
    load_schema_handler,
    refresh_table_handler,
    save_settings_handler,
    search_handler,
    select_branch,
    set_expanded,
)
from json_schema_docs.paths import join_path
from json_schema_docs.rendering import TABLE_COLUMNS, format_property_details, property_label
from json_schema_docs.resolver import resolve_schema
from json_schema_docs.schema_info import branch_label
from json_schema_docs.settings import LOG_LEVEL_ENV_VAR, load_options

SITE_KEY = os.environ.get("JSON_SCHEMA_DOCS_SITE", "default")

# --- UI Definition ---
with gr.Blocks(title="JSON Schema Docs") as demo:
    gr.Markdown("# JSON Schema Documentation")
    gr.Markdown("Upload a JSON Schema to browse its properties, search them, and link to any field.")

    # State
    schema_state = gr.State()
    property_states = gr.State(value={})
    branch_state = gr.State(value={})
    options_state = gr.State(value=load_options(SITE_KEY))

    with gr.Tab("Documentation"):
        with gr.Row():
            # Left Panel: Input & Controls
            with gr.Column(scale=1):
                gr.Markdown("### 1. Import")
                file_input = gr.File(label="Upload JSON Schema", file_types=[".json"])
                status_msg = gr.Textbox(label="Status", interactive=False)
                warnings_md = gr.Markdown()

                gr.Markdown("### 2. Find")
                search_box = gr.Textbox(label="Search properties", placeholder="name, description, type or example")
                search_count = gr.Markdown()
                anchor_box = gr.Textbox(label="Jump to anchor", placeholder="#sdk-(pattern-0)-image")
                anchor_status = gr.Markdown()
                with gr.Row():
                    expand_btn = gr.Button("Expand all")
                    collapse_btn = gr.Button("Collapse all")

                with gr.Accordion("Settings", open=False):
                    auto_expand_cb = gr.Checkbox(label="Auto-expand properties", value=options_state.value.auto_expand)
                    examples_cb = gr.Checkbox(label="Show examples", value=options_state.value.include_examples)
                    definitions_cb = gr.Checkbox(label="Show definitions", value=options_state.value.include_definitions)
                    save_settings_btn = gr.Button("Save settings")
                    settings_status = gr.Markdown()

            # Right Panel: Property tree
            with gr.Column(scale=2):
                gr.Markdown("### 3. Properties")

                @gr.render(
                    inputs=[schema_state, property_states, branch_state, options_state, search_box],
                    triggers=[schema_state.change, property_states.change, branch_state.change, options_state.change],
                )
                def render_properties(schema, states, branches, options, query):
                    if schema is None:
                        gr.Markdown("No schema loaded.")
                        return

                    states = states or {}
                    branches = branches or {}
                    searching = bool((query or "").strip())

                    def recursive_ui(prop, stack):
                        state = states.get(prop.key)
                        if searching and state is not None and not state.matches_search:
                            return
                        expanded = bool(state and state.expanded)

                        with gr.Accordion(property_label(prop, state), open=expanded) as acc:
                            gr.Markdown(format_property_details(prop, schema, options.include_examples))

                            options_list = one_of_options(prop.schema)
                            if options_list:
                                labels = [
                                    branch_label(resolve_schema(as_schema(o) or {}, schema), o if isinstance(o, dict) else None)
                                    for o in options_list
                                ]
                                selected = branches.get(prop.key, 0)
                                if selected >= len(labels):
                                    selected = 0
                                radio = gr.Radio(choices=labels, value=labels[selected], type="index", label="oneOf")
                                radio.change(
                                    fn=partial(select_branch, prop.key),
                                    inputs=[radio, branch_state],
                                    outputs=[branch_state],
                                )

                            # Children are extracted only once a property is opened.
                            if expanded:
                                child_stack = stack + (join_path(prop.path[:-1]),)
                                children = child_properties(prop, schema, child_stack, branches)
                                for child in sort_properties(children):
                                    recursive_ui(child, child_stack)

                        acc.expand(fn=partial(set_expanded, prop.key, True), inputs=[property_states], outputs=[property_states])
                        acc.collapse(fn=partial(set_expanded, prop.key, False), inputs=[property_states], outputs=[property_states])

                    for prop in sort_properties(extract_properties(schema, [], 0, schema)):
                        recursive_ui(prop, ())

                    if options.include_definitions:
                        definitions = extract_definitions(schema)
                        if definitions:
                            gr.Markdown("### Definitions")
                            for prop in sort_properties(definitions):
                                recursive_ui(prop, ())

    with gr.Tab("Property Table"):
        gr.Markdown("Every reachable property, flattened. Search narrows the table to hits.")
        property_table = gr.Dataframe(
            headers=TABLE_COLUMNS,
            col_count=(len(TABLE_COLUMNS), "fixed"),
            interactive=False,
            label="Properties",
        )
        with gr.Row():
            output_format = gr.Radio(choices=["CSV", "JSON"], value="CSV", label="Output Format")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="schema_properties")
        export_btn = gr.Button("Export Table", variant="primary")
        download_output = gr.File(label="Download Result")
        export_status = gr.Textbox(label="Export Status", interactive=False)

    file_input.upload(
        fn=load_schema_handler,
        inputs=[file_input, options_state],
        outputs=[schema_state, property_states, branch_state, status_msg, warnings_md, property_table],
    )

    search_box.change(
        fn=search_handler,
        inputs=[schema_state, search_box, branch_state, options_state],
        outputs=[property_states, search_count],
    ).then(
        fn=refresh_table_handler,
        inputs=[schema_state, search_box, branch_state],
        outputs=[property_table],
    )

    anchor_box.submit(
        fn=anchor_handler,
        inputs=[property_states, anchor_box],
        outputs=[property_states, anchor_status],
    )

    branch_state.change(
        fn=refresh_table_handler,
        inputs=[schema_state, search_box, branch_state],
        outputs=[property_table],
    )

    expand_btn.click(fn=expand_all_handler, inputs=[property_states], outputs=[property_states])
    collapse_btn.click(fn=collapse_all_handler, inputs=[property_states], outputs=[property_states])

    save_settings_btn.click(
        fn=partial(save_settings_handler, SITE_KEY),
        inputs=[auto_expand_cb, examples_cb, definitions_cb, options_state],
        outputs=[options_state, settings_status],
    )

    export_btn.click(
        fn=export_table_handler,
        inputs=[property_table, output_format, output_filename],
        outputs=[download_output, export_status],
    )

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    demo.launch()
