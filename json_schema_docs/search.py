"""Classify properties against a search query.

A *direct* hit is on the property itself: its name, description, type
label, examples, or the description of one of its ``oneOf``/``anyOf``
branches. An *indirect* hit is a direct hit somewhere below it.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Sequence, Set

from .extraction import extract_properties
from .models import PropertyState, SchemaProperty, SearchHit, SearchResult
from .schema_info import get_schema_type


def _example_text(example: Any) -> str:
    if isinstance(example, str):
        return example
    try:
        return json.dumps(example, separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError):
        return str(example)


def _contains(text: Any, query_lower: str) -> bool:
    return isinstance(text, str) and query_lower in text.lower()


def is_direct_match(prop: SchemaProperty, query: str) -> bool:
    query_lower = query.lower()
    schema = prop.schema

    if _contains(prop.name, query_lower):
        return True
    if _contains(schema.get('description'), query_lower):
        return True
    if _contains(get_schema_type(schema), query_lower):
        return True

    examples = schema.get('examples')
    if isinstance(examples, list):
        if any(query_lower in _example_text(e).lower() for e in examples):
            return True

    # Branches are alternative shapes of this same property.
    for keyword in ('oneOf', 'anyOf'):
        branches = schema.get(keyword)
        if not isinstance(branches, list):
            continue
        for branch in branches:
            if isinstance(branch, Mapping) and _contains(branch.get('description'), query_lower):
                return True

    return False


def has_nested_matches(
    prop: SchemaProperty,
    query: str,
    root: Mapping[str, Any],
    visited: Optional[Set[str]] = None,
    ancestors: Sequence[str] = (),
) -> bool:
    """True if any descendant of ``prop`` is a direct match.

    ``visited`` is shared across the whole search so each path key is
    examined once; ``ancestors`` is the recursion stack handed to the
    extractor, which also applies the depth ceiling.
    """
    if visited is None:
        visited = set()
    key = prop.key
    if key in visited:
        return False
    visited.add(key)

    children = extract_properties(prop.schema, prop.path, prop.depth + 1, root, ancestors)
    child_ancestors = tuple(ancestors) + (key,)

    for child in children:
        if is_direct_match(child, query):
            return True
        if has_nested_matches(child, query, root, visited, child_ancestors):
            return True
    return False


def evaluate_search_hit(prop: SchemaProperty, query: str, root: Mapping[str, Any]) -> SearchResult:
    if not query or not query.strip():
        return SearchResult(hit=SearchHit.NONE, should_expand=False)

    direct = is_direct_match(prop, query)
    nested = has_nested_matches(prop, query, root)

    if direct and nested:
        hit = SearchHit.BOTH
    elif direct:
        hit = SearchHit.DIRECT
    elif nested:
        hit = SearchHit.INDIRECT
    else:
        hit = SearchHit.NONE
    return SearchResult(hit=hit, should_expand=hit is not SearchHit.NONE)


def classify(prop: SchemaProperty, query: str, root: Mapping[str, Any]) -> SearchHit:
    return evaluate_search_hit(prop, query, root).hit


def create_search_based_states(
    properties: Sequence[SchemaProperty],
    query: str,
    root: Mapping[str, Any],
    auto_expand: bool = False,
) -> Dict[str, PropertyState]:
    """Per-path-key expansion and highlight state for a query."""
    states: Dict[str, PropertyState] = {}
    for prop in properties:
        result = evaluate_search_hit(prop, query, root)
        states[prop.key] = PropertyState(
            expanded=result.should_expand if query else auto_expand,
            has_details=True,
            matches_search=result.hit is not SearchHit.NONE,
            is_direct_match=result.hit in (SearchHit.DIRECT, SearchHit.BOTH),
            has_nested_matches=result.hit in (SearchHit.INDIRECT, SearchHit.BOTH),
        )
    return states
