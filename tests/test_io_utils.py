import io
import json

import pytest

from json_schema_docs.io_utils import read_schema_content


def test_reads_path_and_stream(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"title": "T"}), encoding="utf-8")
    assert read_schema_content(str(path)) == {"title": "T"}
    assert read_schema_content(io.BytesIO(b'{"title": "B"}')) == {"title": "B"}


def test_rejects_missing_or_non_object_content():
    with pytest.raises(ValueError):
        read_schema_content(None)
    with pytest.raises(ValueError):
        read_schema_content(io.StringIO("[1, 2]"))
    with pytest.raises(ValueError):
        read_schema_content(io.StringIO("{not json"))
