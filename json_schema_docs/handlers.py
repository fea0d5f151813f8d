from __future__ import annotations

import csv
import json
import logging
import os
import tempfile
from dataclasses import replace
from typing import Dict, Optional

import gradio as gr
import pandas as pd

from .extraction import walk_properties
from .io_utils import read_schema_content
from .models import PropertyState
from .rendering import TABLE_COLUMNS, build_property_rows
from .schema_info import collect_warnings
from .search import create_search_based_states
from .settings import DocsOptions, save_options
from .state import collapse_all, expand_all, expand_for_anchor, initialize_property_states

logger = logging.getLogger(__name__)


def format_warnings(warnings) -> str:
    if not warnings:
        return ""
    return "\n".join(f"- ⚠ {w}" for w in warnings)


def rows_to_frame(rows) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def load_schema_handler(file_obj, options: Optional[DocsOptions] = None):
    """Parse an uploaded schema and build the initial view state.

    Returns schema, property states, branch selection, status message,
    warnings markdown and the property table.
    """
    options = options or DocsOptions()
    empty = rows_to_frame([])
    if file_obj is None:
        return None, {}, {}, "No file uploaded.", "", empty

    try:
        schema = read_schema_content(file_obj)
    except Exception as e:
        logger.warning("Could not load schema: %s", e)
        return None, {}, {}, f"Error parsing schema: {str(e)}", "", empty

    states = initialize_property_states(schema, schema, auto_expand=options.auto_expand)
    warnings = collect_warnings(schema)
    rows = build_property_rows(schema)
    title = schema.get('title') or 'Schema'
    message = f"Loaded {title}. Found {len(states)} properties."
    return schema, states, {}, message, format_warnings(warnings), rows_to_frame(rows)


def search_handler(schema, query: str, branch_selection, options: Optional[DocsOptions] = None):
    """Recompute property states for a new query; returns states and a count line."""
    options = options or DocsOptions()
    if schema is None:
        return {}, gr.update(value="", visible=False)
    props = [prop for prop, _ in walk_properties(schema, schema, branch_selection)]
    states = create_search_based_states(props, query or '', schema, auto_expand=options.auto_expand)
    if not (query or '').strip():
        return states, gr.update(value="", visible=False)
    hits = sum(1 for s in states.values() if s.matches_search)
    return states, gr.update(value=f"{hits} matching properties", visible=True)


def anchor_handler(states, anchor: str):
    if not anchor:
        return states or {}, ""
    updated, path_key = expand_for_anchor(states or {}, anchor)
    if path_key not in updated:
        return updated, f"No property at #{anchor.lstrip('#')}"
    return updated, f"Showing {path_key}"


def set_expanded(key: str, expanded: bool, states):
    updated = dict(states or {})
    current = updated.get(key, PropertyState())
    updated[key] = replace(current, expanded=expanded)
    return updated


def select_branch(key: str, index, branch_selection):
    updated: Dict[str, int] = dict(branch_selection or {})
    try:
        updated[key] = max(0, int(index))
    except (TypeError, ValueError):
        updated[key] = 0
    return updated


def expand_all_handler(states):
    return expand_all(states or {})


def collapse_all_handler(states):
    return collapse_all(states or {})


def refresh_table_handler(schema, query: str, branch_selection):
    if schema is None:
        return rows_to_frame([])
    return rows_to_frame(build_property_rows(schema, query or '', branch_selection))


def export_table_handler(table_df, output_format: str, file_name: str):
    """Write the property table to a temp file as CSV or JSON."""
    if table_df is None or (isinstance(table_df, pd.DataFrame) and table_df.empty):
        return None, "No properties to export."

    try:
        records = table_df.to_dict(orient='records')
    except AttributeError:
        records = [dict(zip(TABLE_COLUMNS, row)) for row in table_df]

    if not file_name or not file_name.strip():
        file_name = "schema_properties"

    ext = f".{output_format.lower()}"
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)

    try:
        if output_format == "CSV":
            with open(path, 'w', newline='', encoding='utf-8') as f:
                writer = csv.DictWriter(f, fieldnames=TABLE_COLUMNS)
                writer.writeheader()
                writer.writerows(records)
        else:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        return path, f"Export successful! Saved to {path}"
    except Exception as e:
        logger.exception("Export to %s failed", path)
        return None, f"Error during export: {str(e)}"


def save_settings_handler(
    site_key: str,
    auto_expand: bool,
    include_examples: bool,
    include_definitions: bool,
    current: Optional[DocsOptions] = None,
):
    base = (current or DocsOptions()).to_dict()
    base.update(
        auto_expand=bool(auto_expand),
        include_examples=bool(include_examples),
        include_definitions=bool(include_definitions),
    )
    options = DocsOptions(**base)
    try:
        path = save_options(options, site_key or 'default')
    except OSError as e:
        logger.warning("Could not save settings: %s", e)
        return options, f"Could not save settings: {e}"
    return options, f"Settings saved to {path}"
