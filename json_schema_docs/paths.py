from __future__ import annotations

from typing import Iterable, List, Sequence

PATTERN_SEGMENT_PREFIX = '(pattern-'
ONE_OF_SEGMENT = 'oneOf'


def pattern_segment(ordinal: int) -> str:
    """Path segment used for the ``ordinal``-th patternProperties rule."""
    if ordinal < 0:
        raise ValueError(f"Pattern ordinal must be non-negative, got {ordinal}.")
    return f"{PATTERN_SEGMENT_PREFIX}{ordinal})"


def join_path(path: Iterable[str]) -> str:
    """Join path segments into the dot-delimited path key."""
    return '.'.join(path)


def split_path(path_key: str) -> List[str]:
    if not path_key:
        return []
    return path_key.split('.')


def _inside_parentheses(text: str) -> List[bool]:
    """Flag every character that sits before an unmatched ')' further ahead.

    Scans right to left so each position knows whether a closing
    parenthesis is still waiting for its opener.
    """
    flags = [False] * len(text)
    pending = 0
    for i in range(len(text) - 1, -1, -1):
        ch = text[i]
        if ch == ')':
            pending += 1
        elif ch == '(':
            pending = max(0, pending - 1)
        else:
            flags[i] = pending > 0
    return flags


def _swap_separator(text: str, old: str, new: str) -> str:
    inside = _inside_parentheses(text)
    out: List[str] = []
    for ch, protected in zip(text, inside):
        if ch == old and not protected:
            out.append(new)
        else:
            out.append(ch)
    return ''.join(out)


def path_to_anchor(path_key: str) -> str:
    """Convert a dot path key into a URL-fragment anchor.

    Dots become dashes, except inside parenthesised pattern segments:
    ``sdk.(pattern-0).dependencies`` -> ``sdk-(pattern-0)-dependencies``.
    """
    if not path_key:
        return ''
    return _swap_separator(path_key, '.', '-')


def anchor_to_path(anchor: str) -> str:
    """Inverse of :func:`path_to_anchor`. A leading '#' is ignored."""
    if not anchor:
        return ''
    if anchor.startswith('#'):
        anchor = anchor[1:]
    return _swap_separator(anchor, '-', '.')


def branch_index(path_key: str) -> int:
    """Return the oneOf branch index selected in ``path_key``.

    Scans for a ``oneOf`` segment immediately followed by a non-negative
    integer segment. Without one, branch 0 is selected.
    """
    parts = split_path(path_key)
    for i, part in enumerate(parts[:-1]):
        if part != ONE_OF_SEGMENT:
            continue
        candidate = parts[i + 1]
        if candidate.isascii() and candidate.isdigit():
            return int(candidate)
    return 0


def branch_path(path: Sequence[str], index: int) -> tuple:
    """Path prefix for the children of the ``index``-th oneOf branch."""
    return tuple(path) + (ONE_OF_SEGMENT, str(index))


def ancestor_keys(path_key: str) -> List[str]:
    """All path keys from the first segment down to ``path_key`` itself."""
    parts = split_path(path_key)
    return [join_path(parts[:i]) for i in range(1, len(parts) + 1)]
