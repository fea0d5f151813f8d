from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from .extraction import walk_properties
from .models import PropertyState
from .paths import ancestor_keys, anchor_to_path


def initialize_property_states(
    schema: Mapping[str, Any],
    root: Optional[Mapping[str, Any]] = None,
    auto_expand: bool = False,
    branch_selection: Optional[Mapping[str, int]] = None,
) -> Dict[str, PropertyState]:
    """One state per reachable property, keyed by path key."""
    states: Dict[str, PropertyState] = {}
    for prop, _ in walk_properties(schema, root, branch_selection):
        states[prop.key] = PropertyState(expanded=bool(auto_expand))
    return states


def expand_for_anchor(states: Mapping[str, PropertyState], anchor: str):
    """Expand the property an anchor points at and all of its ancestors.

    Returns ``(new_states, path_key)``. Unknown keys are left alone, so an
    anchor into a oneOf branch still opens the property that owns it.
    """
    path_key = anchor_to_path(anchor)
    updated = dict(states)
    for key in ancestor_keys(path_key):
        if key in updated:
            updated[key] = replace(updated[key], expanded=True)
    return updated, path_key


def expand_all(states: Mapping[str, PropertyState]) -> Dict[str, PropertyState]:
    return {
        key: replace(state, expanded=True) if state.has_details else state
        for key, state in states.items()
    }


def collapse_all(states: Mapping[str, PropertyState]) -> Dict[str, PropertyState]:
    return {key: replace(state, expanded=False) for key, state in states.items()}
