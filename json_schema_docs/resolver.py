"""Dereference ``$ref`` pointers and merge ``allOf`` compositions.

Both operations return new dicts; the input schema and the root document
are never modified. Unresolvable references degrade to the original node.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .accessors import as_schema, get_value_by_pointer

logger = logging.getLogger(__name__)

ORIGINAL_REF_KEY = '__originalRef'

# Collections that allOf unions instead of first-writer-wins copying.
_MAPPING_UNION_KEYS = ('properties', 'patternProperties')


def resolve_reference(ref: str, root: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Return the schema a root-relative ``$ref`` points at, or None."""
    return get_value_by_pointer(root, ref)


def _check_node(node: Any) -> None:
    if not isinstance(node, Mapping):
        raise TypeError(f"Schema node must be a mapping, got {type(node).__name__}.")


def resolve_schema(node: Mapping[str, Any], root: Mapping[str, Any]) -> Dict[str, Any]:
    """Resolve ``$ref`` and ``allOf`` on ``node`` one level deep.

    - ``$ref``: the target is the base, the node's own fields (minus
      ``$ref``) are laid over it. ``description`` falls back to the
      target's when the node does not set one.
    - ``allOf``: entries are resolved and merged into the node.
    - Otherwise the node is returned as is.
    """
    _check_node(node)
    return _resolve(node, root, frozenset())


def _resolve(node: Mapping[str, Any], root: Mapping[str, Any], active: FrozenSet[str]) -> Dict[str, Any]:
    ref = node.get('$ref')
    if ref is not None:
        if not isinstance(ref, str) or ref in active:
            return node
        target = resolve_reference(ref, root)
        if target is None:
            logger.debug("Could not resolve $ref %r; keeping the unresolved node.", ref)
            return node

        active = active | {ref}
        # Reference chains: the target may itself be a $ref or an allOf.
        base = _resolve(target, root, active)
        merged = dict(base)
        for key, value in node.items():
            if key != '$ref':
                merged[key] = value
        description = node.get('description') or base.get('description')
        if description:
            merged['description'] = description
        else:
            merged.pop('description', None)
        merged[ORIGINAL_REF_KEY] = ref

        if 'allOf' in merged:
            return _merge_all_of(merged, root, active)
        return merged

    if 'allOf' in node:
        return _merge_all_of(node, root, active)

    return node


def _merge_all_of(node: Mapping[str, Any], root: Mapping[str, Any], active: FrozenSet[str]) -> Dict[str, Any]:
    entries = node.get('allOf')
    merged: Dict[str, Any] = {k: v for k, v in node.items() if k != 'allOf'}
    if not isinstance(entries, list):
        return merged

    for key in _MAPPING_UNION_KEYS:
        if isinstance(merged.get(key), Mapping):
            merged[key] = dict(merged[key])

    own_required = merged.get('required')
    required: List[str] = list(own_required) if isinstance(own_required, list) else []

    for raw in entries:
        entry = as_schema(raw)
        if entry is None:
            continue
        resolved = _resolve(entry, root, active)

        for key in _MAPPING_UNION_KEYS:
            incoming = resolved.get(key)
            if not isinstance(incoming, Mapping):
                continue
            # Last writer wins for same-named keys.
            combined = dict(merged.get(key) or {})
            combined.update(incoming)
            merged[key] = combined

        incoming_required = resolved.get('required')
        if isinstance(incoming_required, list):
            required.extend(incoming_required)

        for key, value in resolved.items():
            if key in _MAPPING_UNION_KEYS or key in ('required', '$ref', 'allOf', ORIGINAL_REF_KEY):
                continue
            # First writer wins for everything else.
            if key not in merged:
                merged[key] = value

    if required:
        merged['required'] = list(dict.fromkeys(required))
    return merged
