from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from .extraction import walk_properties
from .models import PropertyState, SchemaProperty, SearchHit
from .paths import path_to_anchor
from .schema_info import (
    describe_type,
    get_constraints,
    get_enum_description,
    get_schema_type,
    has_examples,
)
from .search import classify

TABLE_COLUMNS = ["Path", "Anchor", "Name", "Type", "Required", "Description", "Search Hit"]


def _inline_json(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def property_label(prop: SchemaProperty, state: Optional[PropertyState] = None) -> str:
    """One-line accordion label: name, type and markers."""
    parts = [prop.name]
    type_label = get_schema_type(prop.schema)
    if type_label:
        parts.append(f"({type_label})")
    if prop.required:
        parts.append("required")
    if state is not None and state.is_direct_match:
        parts.insert(0, "●")
    elif state is not None and state.has_nested_matches:
        parts.insert(0, "○")
    return " ".join(parts)


def format_property_details(
    prop: SchemaProperty,
    root: Optional[Mapping[str, Any]] = None,
    include_examples: bool = False,
) -> str:
    """Markdown body for a property row."""
    schema = prop.schema
    lines: List[str] = []

    if prop.is_pattern:
        lines.append(f"Keys matching `{prop.pattern}`")

    if schema.get('title'):
        lines.append(f"**{schema['title']}**")

    type_label = get_schema_type(schema)
    if type_label:
        lines.append(f"*{type_label}*: {describe_type(type_label)}")

    if schema.get('enum') is not None:
        lines.append(get_enum_description(schema, root))
        values = ", ".join(f"`{_inline_json(v)}`" for v in schema['enum'])
        lines.append(f"Allowed values: {values}")
    elif schema.get('description'):
        lines.append(schema['description'])

    constraints = get_constraints(schema)
    if constraints:
        lines.append(" · ".join(f"{c.label}: `{c.value}`" for c in constraints))

    if 'default' in schema:
        lines.append(f"Default: `{_inline_json(schema['default'])}`")

    if include_examples and has_examples(schema):
        lines.append("Examples:")
        for example in schema['examples']:
            lines.append(f"```json\n{json.dumps(example, indent=2, ensure_ascii=False)}\n```")

    lines.append(f"[#{path_to_anchor(prop.key)}](#{path_to_anchor(prop.key)})")
    return "\n\n".join(lines)


def property_row(prop: SchemaProperty, hit: SearchHit = SearchHit.NONE) -> Dict[str, Any]:
    return {
        "Path": prop.key,
        "Anchor": path_to_anchor(prop.key),
        "Name": prop.name if not prop.is_pattern else f"{prop.name} ~ {prop.pattern}",
        "Type": get_schema_type(prop.schema),
        "Required": prop.required,
        "Description": prop.schema.get('description', ''),
        "Search Hit": hit.value,
    }


def build_property_rows(
    schema: Mapping[str, Any],
    query: str = '',
    branch_selection: Optional[Mapping[str, int]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Flatten every reachable property into table rows.

    With a query, only rows whose property is a hit are kept.
    """
    rows: List[Dict[str, Any]] = []
    for prop, _ in walk_properties(schema, schema, branch_selection):
        hit = classify(prop, query, schema) if query else SearchHit.NONE
        if query and hit is SearchHit.NONE:
            continue
        rows.append(property_row(prop, hit))
        if limit is not None and len(rows) >= max(1, int(limit)):
            break
    return rows
