from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

ROOT_POINTER_PREFIX = '#/'


def unescape_pointer_segment(segment: str) -> str:
    # RFC 6901: '~1' is '/', '~0' is '~'. Order matters.
    return segment.replace('~1', '/').replace('~0', '~')


def split_pointer(ref: str) -> Optional[List[str]]:
    """Split a root-relative pointer (``#/a/b``) into decoded segments.

    Returns None for anything that is not a root-relative pointer.
    """
    if not isinstance(ref, str) or not ref.startswith(ROOT_POINTER_PREFIX):
        return None
    return [unescape_pointer_segment(s) for s in ref[len(ROOT_POINTER_PREFIX):].split('/')]


def get_value_by_pointer(root: Any, ref: str) -> Optional[Dict[str, Any]]:
    """Walk ``root`` along the pointer ``ref``.

    Only mappings are traversed. A missing segment, a non-mapping
    intermediate value or a non-mapping target all yield None.
    """
    segments = split_pointer(ref)
    if segments is None:
        return None

    current: Any = root
    for segment in segments:
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]

    if isinstance(current, Mapping):
        return dict(current)
    return None


def as_schema(value: Any) -> Optional[Dict[str, Any]]:
    """Coerce a schema position into a dict schema.

    Boolean schemas become ``{}`` (true) and ``{"not": {}}`` (false);
    anything else that is not a mapping yields None.
    """
    if isinstance(value, bool):
        return {} if value else {'not': {}}
    if isinstance(value, Mapping):
        return dict(value)
    return None
