from json_schema_docs.extraction import extract_properties, walk_properties
from json_schema_docs.models import SearchHit
from json_schema_docs.search import (
    classify,
    create_search_based_states,
    evaluate_search_hit,
    is_direct_match,
)


SDK_DOCS = {
    "properties": {
        "sdk": {
            "description": "uses SDK",
            "properties": {"detail": {"description": "no match here"}},
        }
    }
}


def _top(schema, name):
    return next(p for p in extract_properties(schema, [], 0, schema) if p.name == name)


def test_classify_direct_indirect_none():
    sdk = _top(SDK_DOCS, "sdk")
    assert classify(sdk, "SDK", SDK_DOCS) is SearchHit.DIRECT
    assert classify(sdk, "no match", SDK_DOCS) is SearchHit.INDIRECT
    assert classify(sdk, "xyz", SDK_DOCS) is SearchHit.NONE


def test_classify_both():
    schema = {
        "properties": {
            "sdk": {"description": "SDK settings", "properties": {"sdkVersion": {"type": "string"}}},
        }
    }
    assert classify(_top(schema, "sdk"), "sdk", schema) is SearchHit.BOTH


def test_blank_query_matches_nothing():
    result = evaluate_search_hit(_top(SDK_DOCS, "sdk"), "   ", SDK_DOCS)
    assert result.hit is SearchHit.NONE
    assert result.should_expand is False


def test_one_of_branch_description_is_a_direct_match(one_of_schema):
    deps = _top(one_of_schema, "dependencies")
    assert is_direct_match(deps, "local path")
    assert classify(deps, "local path", one_of_schema) is SearchHit.DIRECT


def test_type_label_and_examples_match():
    schema = {
        "properties": {
            "port": {"type": "integer", "examples": [8080]},
            "env": {"type": "object", "examples": [{"a": 1}]},
        }
    }
    assert is_direct_match(_top(schema, "port"), "INTEGER")
    assert is_direct_match(_top(schema, "port"), "808")
    assert is_direct_match(_top(schema, "env"), '"a":1')


def test_nested_match_through_pattern_slot(sdk_schema):
    sdk = _top(sdk_schema, "sdk")
    assert classify(sdk, "docker image", sdk_schema) is SearchHit.INDIRECT


def test_recursive_schema_search_terminates(recursive_schema):
    root = _top(recursive_schema, "root")
    assert classify(root, "nothing like this", recursive_schema) is SearchHit.NONE
    assert classify(root, "name", recursive_schema) is SearchHit.INDIRECT


def test_nested_match_below_ref_with_local_properties():
    schema = {
        "properties": {"tree": {"$ref": "#/definitions/node"}},
        "definitions": {
            "node": {
                "type": "object",
                "properties": {
                    "a": {"type": "string"},
                    "child": {
                        "$ref": "#/definitions/node",
                        "properties": {"secret": {"description": "needle"}},
                    },
                },
            },
        },
    }
    assert classify(_top(schema, "tree"), "needle", schema) is SearchHit.INDIRECT


def test_create_search_based_states():
    props = [p for p, _ in walk_properties(SDK_DOCS)]
    states = create_search_based_states(props, "no match", SDK_DOCS)

    assert states["sdk"].matches_search
    assert states["sdk"].has_nested_matches
    assert not states["sdk"].is_direct_match
    assert states["sdk"].expanded
    assert states["sdk.detail"].is_direct_match


def test_states_without_query_follow_auto_expand():
    props = [p for p, _ in walk_properties(SDK_DOCS)]
    states = create_search_based_states(props, "", SDK_DOCS, auto_expand=True)
    assert all(s.expanded for s in states.values())
    assert not any(s.matches_search for s in states.values())
