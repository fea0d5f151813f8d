import pytest

from json_schema_docs.paths import (
    ancestor_keys,
    anchor_to_path,
    branch_index,
    path_to_anchor,
    pattern_segment,
)


def test_path_to_anchor_simple_paths():
    assert path_to_anchor("default.target") == "default-target"
    assert path_to_anchor("provision.profiles.dev.settings") == "provision-profiles-dev-settings"


def test_path_to_anchor_keeps_pattern_segments_whole():
    assert path_to_anchor("sdk.(pattern-0)") == "sdk-(pattern-0)"
    assert path_to_anchor("sdk.(pattern-0).dependencies") == "sdk-(pattern-0)-dependencies"
    assert path_to_anchor("sdk.(pattern-0).ext.(pattern-1)") == "sdk-(pattern-0)-ext-(pattern-1)"


def test_anchor_to_path_restores_dots_outside_pattern_segments():
    assert anchor_to_path("#default-target") == "default.target"
    assert anchor_to_path("default-target") == "default.target"
    assert anchor_to_path("#sdk-(pattern-0)") == "sdk.(pattern-0)"
    assert anchor_to_path("#ext-(pattern-1)-config-value") == "ext.(pattern-1).config.value"
    assert anchor_to_path("#sdk-(pattern-0)-ext-(pattern-1)") == "sdk.(pattern-0).ext.(pattern-1)"


def test_empty_inputs():
    assert path_to_anchor("") == ""
    assert anchor_to_path("") == ""
    assert anchor_to_path("#") == ""


@pytest.mark.parametrize(
    "path_key",
    [
        "default.target",
        "sdk.(pattern-0)",
        "ext.(pattern-1).dependencies",
        "sdk.(pattern-0).ext.(pattern-1).config",
        "dependencies.oneOf.2.config",
    ],
)
def test_anchor_round_trip(path_key):
    assert anchor_to_path(path_to_anchor(path_key)) == path_key


def test_branch_index():
    assert branch_index("dependencies.oneOf.2.config") == 2
    assert branch_index("dependencies.oneOf.3") == 3
    assert branch_index("plain.path") == 0
    assert branch_index("") == 0
    assert branch_index("a.oneOf.invalid.b") == 0
    assert branch_index("dependencies.oneOf..config") == 0
    assert branch_index("dependencies.oneOf") == 0
    assert branch_index("settings.oneOf.name.oneOf.3") == 3


def test_pattern_segment():
    assert pattern_segment(0) == "(pattern-0)"
    with pytest.raises(ValueError):
        pattern_segment(-1)


def test_ancestor_keys():
    assert ancestor_keys("sdk.(pattern-0).image") == ["sdk", "sdk.(pattern-0)", "sdk.(pattern-0).image"]
    assert ancestor_keys("") == []
