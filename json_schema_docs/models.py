from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .paths import join_path

PATTERN_PLACEHOLDER = '{name}'
PATTERN_MARKER_KEY = '__isPatternProperty'
PATTERN_SOURCE_KEY = '__pattern'


@dataclass(frozen=True)
class SchemaProperty:
    """One documented property.

    ``schema`` is already resolved. ``path`` runs from the document root and
    is the join key for expansion state, search state and anchors.
    """

    name: str
    schema: Dict[str, Any] = field(compare=False, hash=False)
    required: bool
    path: Tuple[str, ...]
    depth: int

    @property
    def key(self) -> str:
        return join_path(self.path)

    @property
    def is_pattern(self) -> bool:
        return bool(self.schema.get(PATTERN_MARKER_KEY))

    @property
    def pattern(self) -> str:
        return self.schema.get(PATTERN_SOURCE_KEY, '')


class SearchHit(str, Enum):
    NONE = 'none'
    DIRECT = 'direct'
    INDIRECT = 'indirect'
    BOTH = 'both'


@dataclass(frozen=True)
class SearchResult:
    hit: SearchHit
    should_expand: bool


@dataclass(frozen=True)
class PropertyConstraint:
    type: str
    label: str
    value: Union[str, int, float, bool]


@dataclass
class PropertyState:
    expanded: bool = False
    has_details: bool = True
    matches_search: bool = True
    is_direct_match: bool = False
    has_nested_matches: bool = False


@dataclass(frozen=True)
class ResolutionDiagnostic:
    """A ``$ref`` that could not be resolved, and where it was found."""

    ref: str
    location: str
    reason: str

    def message(self) -> str:
        where = self.location or '(root)'
        return f"Unresolved reference {self.ref!r} at {where}: {self.reason}"
