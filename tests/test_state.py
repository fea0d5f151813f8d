from json_schema_docs.state import (
    collapse_all,
    expand_all,
    expand_for_anchor,
    initialize_property_states,
)


NESTED = {"properties": {"a": {"properties": {"b": {"properties": {"c": {"type": "string"}}}}}}}


def test_initialize_covers_nested_properties():
    states = initialize_property_states(NESTED)
    assert set(states) == {"a", "a.b", "a.b.c"}
    assert not any(s.expanded for s in states.values())
    assert all(s.expanded for s in initialize_property_states(NESTED, auto_expand=True).values())


def test_expand_for_anchor_opens_ancestors():
    states = initialize_property_states(NESTED)
    updated, key = expand_for_anchor(states, "#a-b")
    assert key == "a.b"
    assert updated["a"].expanded and updated["a.b"].expanded
    assert not updated["a.b.c"].expanded
    assert not states["a"].expanded


def test_expand_for_pattern_anchor(sdk_schema):
    states = initialize_property_states(sdk_schema)
    updated, key = expand_for_anchor(states, "sdk-(pattern-0)-image")
    assert key == "sdk.(pattern-0).image"
    assert updated["sdk"].expanded
    assert updated["sdk.(pattern-0)"].expanded


def test_bulk_expand_and_collapse():
    states = initialize_property_states(NESTED)
    assert all(s.expanded for s in expand_all(states).values())
    assert not any(s.expanded for s in collapse_all(expand_all(states)).values())
