"""Flatten a JSON Schema node into documented properties.

:func:`extract_properties` returns only the direct children of a node.
Nested properties come from calling it again on a child's schema with the
child's path, ``depth + 1`` and the recursion stack extended by the
parent's path key. :func:`walk_properties` does that eagerly.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

from .accessors import as_schema
from .models import (
    PATTERN_MARKER_KEY,
    PATTERN_PLACEHOLDER,
    PATTERN_SOURCE_KEY,
    SchemaProperty,
)
from .paths import branch_path, join_path, pattern_segment
from .resolver import resolve_schema

logger = logging.getLogger(__name__)

MAX_DEPTH = 10

DEFINITION_KEYS = ('definitions', '$defs')


def extract_properties(
    node: Mapping[str, Any],
    path: Sequence[str],
    depth: int,
    root: Mapping[str, Any],
    recursion_stack: Sequence[str] = (),
) -> List[SchemaProperty]:
    """Return the direct child properties of ``node``.

    Regular ``properties`` come first in mapping order, followed by one
    synthetic ``{name}`` property per ``patternProperties`` rule with the
    path segment ``(pattern-N)``. A path key already on the recursion stack
    or a depth above :data:`MAX_DEPTH` yields no children.
    """
    if not isinstance(node, Mapping):
        raise TypeError(f"Schema node must be a mapping, got {type(node).__name__}.")
    if depth < 0:
        raise ValueError(f"Depth must be non-negative, got {depth}.")

    path = tuple(path)
    current_key = join_path(path)

    if current_key in recursion_stack:
        logger.debug("Cycle at %r; not expanding.", current_key)
        return []
    if depth > MAX_DEPTH:
        logger.debug("Depth %d exceeds %d at %r; not expanding.", depth, MAX_DEPTH, current_key)
        return []

    extended_stack = tuple(recursion_stack) + (current_key,)
    resolved = resolve_schema(node, root)

    raw_required = resolved.get('required')
    required = set(raw_required) if isinstance(raw_required, list) else set()

    properties: List[SchemaProperty] = []

    declared = resolved.get('properties')
    if isinstance(declared, Mapping):
        for name, raw in declared.items():
            prop_schema = as_schema(raw)
            if prop_schema is None:
                logger.debug("Skipping non-schema property %r at %r.", name, current_key)
                continue
            properties.append(
                SchemaProperty(
                    name=name,
                    schema=resolve_schema(prop_schema, root),
                    required=name in required,
                    path=path + (name,),
                    depth=depth,
                )
            )

    patterns = resolved.get('patternProperties')
    if isinstance(patterns, Mapping):
        for ordinal, (pattern, raw) in enumerate(patterns.items()):
            prop_path = path + (pattern_segment(ordinal),)
            if join_path(prop_path) in extended_stack:
                continue
            prop_schema = as_schema(raw)
            if prop_schema is None:
                continue
            synthetic = dict(resolve_schema(prop_schema, root))
            synthetic[PATTERN_MARKER_KEY] = True
            synthetic[PATTERN_SOURCE_KEY] = pattern
            properties.append(
                SchemaProperty(
                    name=PATTERN_PLACEHOLDER,
                    schema=synthetic,
                    required=False,
                    path=prop_path,
                    depth=depth,
                )
            )

    return properties


def one_of_options(schema: Mapping[str, Any]) -> List[Any]:
    options = schema.get('oneOf')
    return list(options) if isinstance(options, list) else []


def extract_branch_properties(
    prop: SchemaProperty,
    index: int,
    root: Mapping[str, Any],
    recursion_stack: Sequence[str] = (),
) -> List[SchemaProperty]:
    """Children of the selected ``oneOf`` branch of ``prop``.

    Paths run through ``<prop path>.oneOf.<index>``. An index outside the
    available branches selects branch 0.
    """
    options = one_of_options(prop.schema)
    if not options:
        return []
    if index < 0 or index >= len(options):
        index = 0
    option = as_schema(options[index])
    if option is None:
        return []
    return extract_properties(
        option,
        branch_path(prop.path, index),
        prop.depth + 1,
        root,
        tuple(recursion_stack) + (prop.key,),
    )


def child_properties(
    prop: SchemaProperty,
    root: Mapping[str, Any],
    recursion_stack: Sequence[str] = (),
    branch_selection: Optional[Mapping[str, int]] = None,
) -> List[SchemaProperty]:
    """The children a UI shows when ``prop`` is expanded.

    Properties with ``oneOf`` show the selected branch; everything else
    shows its own properties.
    """
    if one_of_options(prop.schema):
        index = (branch_selection or {}).get(prop.key, 0)
        return extract_branch_properties(prop, index, root, recursion_stack)
    return extract_properties(
        prop.schema,
        prop.path,
        prop.depth + 1,
        root,
        recursion_stack,
    )


def walk_properties(
    schema: Mapping[str, Any],
    root: Optional[Mapping[str, Any]] = None,
    branch_selection: Optional[Mapping[str, int]] = None,
    path: Sequence[str] = (),
    depth: int = 0,
) -> Iterator[Tuple[SchemaProperty, Tuple[str, ...]]]:
    """Depth-first walk over every reachable property.

    Yields ``(property, recursion_stack)`` pairs, where the stack is the one
    to pass when expanding that property further. Recursive schemas stop
    at the extractor's cycle and depth guards.
    """
    if root is None:
        root = schema

    def _walk(props: List[SchemaProperty], stack: Tuple[str, ...]):
        for prop in props:
            child_stack = stack + (join_path(prop.path[:-1]),)
            yield prop, child_stack
            children = child_properties(prop, root, child_stack, branch_selection)
            yield from _walk(children, child_stack)

    top = extract_properties(schema, path, depth, root)
    yield from _walk(top, ())


def extract_definitions(root: Mapping[str, Any]) -> List[SchemaProperty]:
    """List ``definitions`` and ``$defs`` entries as top-level properties."""
    found: List[SchemaProperty] = []
    for container in DEFINITION_KEYS:
        entries = root.get(container)
        if not isinstance(entries, Mapping):
            continue
        found.extend(extract_properties({'properties': entries}, (container,), 0, root))
    return found


def sort_properties(props: Sequence[SchemaProperty]) -> List[SchemaProperty]:
    """Display order: case-insensitive by name, then by path."""
    return sorted(props, key=lambda p: (p.name.casefold(), p.path))
