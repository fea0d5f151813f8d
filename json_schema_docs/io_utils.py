from __future__ import annotations

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _load_upload(upload) -> Any:
    # Gradio hands over a path string, a tempfile wrapper, or an open stream.
    if hasattr(upload, 'read'):
        if hasattr(upload, 'seek'):
            upload.seek(0)
        raw = upload.read()
        return json.loads(raw.decode('utf-8') if isinstance(raw, bytes) else raw)
    source = getattr(upload, 'name', upload)
    with open(source, 'r', encoding='utf-8') as handle:
        return json.load(handle)


def read_schema_content(upload) -> Dict[str, Any]:
    """Load a JSON Schema document from an upload or a path.

    Raises ``ValueError`` when nothing was uploaded, the content is not JSON,
    or the top level is not an object.
    """
    if upload is None:
        raise ValueError("No schema file uploaded.")
    schema = _load_upload(upload)
    if not isinstance(schema, dict):
        raise ValueError(f"Expected a JSON object at the top level, got {type(schema).__name__}.")
    logger.debug("Loaded schema %r", schema.get('title') or schema.get('$id') or '(untitled)')
    return schema
