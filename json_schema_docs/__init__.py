"""Core logic for JSON Schema Docs.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- resolve `$ref` pointers and merge `allOf` compositions
- extract documented properties, including pattern and oneOf branches
- classify properties against a search query
- convert property paths to URL anchors and back
"""
from .extraction import extract_properties, walk_properties
from .models import SchemaProperty, SearchHit
from .paths import anchor_to_path, branch_index, path_to_anchor
from .resolver import resolve_schema
from .search import classify

__all__ = [
    "SchemaProperty",
    "SearchHit",
    "anchor_to_path",
    "branch_index",
    "classify",
    "extract_properties",
    "path_to_anchor",
    "resolve_schema",
    "walk_properties",
]
