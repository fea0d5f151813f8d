from __future__ import annotations

import logging
import re
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from .accessors import split_pointer
from .models import PropertyConstraint, ResolutionDiagnostic
from .resolver import ORIGINAL_REF_KEY, resolve_reference

logger = logging.getLogger(__name__)

_DEFINITION_REF = re.compile(r'#/definitions/(.+)$')

_TYPE_DESCRIPTIONS = {
    'string': 'Text data - can contain letters, numbers, and symbols.',
    'number': 'Numeric data - integers and decimal numbers.',
    'integer': 'Whole number data - no decimal places allowed.',
    'boolean': 'True or false value.',
    'array': 'List of items - can contain multiple values.',
    'object': 'Structured data with properties and values.',
    'null': 'Represents no value or empty data.',
    'oneof': 'Must match exactly one of the defined schemas.',
    'anyof': 'Must match at least one of the defined schemas.',
    'enum': 'Must be one of a specific set of predefined values.',
}

# (schema key, constraint type, label)
_CONSTRAINT_FIELDS = (
    ('format', 'format', 'format'),
    ('pattern', 'pattern', 'pattern'),
    ('minimum', 'range', 'min'),
    ('maximum', 'range', 'max'),
    ('minLength', 'length', 'minLength'),
    ('maxLength', 'length', 'maxLength'),
    ('minItems', 'items', 'minItems'),
    ('maxItems', 'items', 'maxItems'),
    ('multipleOf', 'multipleOf', 'multipleOf'),
)


def _join_types(value: Any) -> str:
    if isinstance(value, list):
        return ' | '.join(str(v) for v in value)
    return str(value)


def _is_schema_like(value: Any) -> bool:
    # An empty object still counts; only `false` and null are absent.
    return value is True or isinstance(value, (Mapping, list))


def get_schema_type(schema: Mapping[str, Any]) -> str:
    """Short type label shown next to a property name and matched by search."""
    if schema.get('type'):
        return _join_types(schema['type'])
    if isinstance(schema.get('oneOf'), list):
        return 'oneOf'
    if isinstance(schema.get('anyOf'), list):
        return 'anyOf'
    if isinstance(schema.get('allOf'), list):
        return 'object'
    if isinstance(schema.get('properties'), Mapping):
        return 'object'
    if _is_schema_like(schema.get('items')):
        return 'array'
    if isinstance(schema.get('enum'), list):
        return 'enum'
    return ''


def describe_type(type_label: str) -> str:
    text = _TYPE_DESCRIPTIONS.get(type_label.lower())
    if text:
        return text
    if '|' in type_label:
        return 'Can be one of multiple data types.'
    return 'The expected data type for this property.'


def has_examples(schema: Mapping[str, Any]) -> bool:
    examples = schema.get('examples')
    return isinstance(examples, list) and len(examples) > 0


def get_constraints(schema: Mapping[str, Any]) -> List[PropertyConstraint]:
    constraints: List[PropertyConstraint] = []
    for key, kind, label in _CONSTRAINT_FIELDS:
        value = schema.get(key)
        if value is None or value == '':
            continue
        constraints.append(PropertyConstraint(type=kind, label=label, value=value))
    return constraints


def get_unsupported_features(schema: Mapping[str, Any]) -> List[str]:
    """Keywords the documentation view cannot represent faithfully."""
    unsupported: List[str] = []

    if _is_schema_like(schema.get('not')):
        unsupported.append('not')
    if any(_is_schema_like(schema.get(key)) for key in ('if', 'then', 'else')):
        unsupported.append('conditional schemas (if/then/else)')
    if _is_schema_like(schema.get('contains')):
        unsupported.append('contains')
    if _is_schema_like(schema.get('propertyNames')):
        unsupported.append('propertyNames')
    if isinstance(schema.get('anyOf'), list):
        unsupported.append('anyOf')
    if isinstance(schema.get('additionalProperties'), Mapping):
        unsupported.append('complex additionalProperties')
    if isinstance(schema.get('additionalItems'), Mapping):
        unsupported.append('complex additionalItems')
    if schema.get('contentMediaType'):
        unsupported.append('contentMediaType')
    if schema.get('contentEncoding'):
        unsupported.append('contentEncoding')
    if 'unevaluatedProperties' in schema:
        unsupported.append('unevaluatedProperties')
    if 'unevaluatedItems' in schema:
        unsupported.append('unevaluatedItems')

    return unsupported


def get_enum_id(schema: Mapping[str, Any]) -> Optional[str]:
    """Name of the ``#/definitions/<id>`` entry a schema was taken from."""
    for key in (ORIGINAL_REF_KEY, '$ref'):
        ref = schema.get(key)
        if not isinstance(ref, str):
            continue
        match = _DEFINITION_REF.search(ref)
        if match and match.group(1).strip():
            return match.group(1)
    return None


def get_enum_description(schema: Mapping[str, Any], root: Optional[Mapping[str, Any]] = None) -> str:
    enum_id = get_enum_id(schema)
    if enum_id and root is not None:
        definitions = root.get('definitions')
        if isinstance(definitions, Mapping) and isinstance(definitions.get(enum_id), Mapping):
            description = definitions[enum_id].get('description')
            if description:
                return description
    if schema.get('description'):
        return schema['description']
    return 'No description provided for this enumerated type.'


def branch_label(option: Mapping[str, Any], raw_option: Optional[Mapping[str, Any]] = None) -> str:
    """Label for one ``oneOf`` branch in a selector.

    ``option`` is the resolved branch; ``raw_option`` is the branch as
    written, used to name ``$ref`` branches after their target.
    """
    if option.get('title'):
        return str(option['title'])
    raw_ref = (raw_option or {}).get('$ref')
    if isinstance(raw_ref, str):
        name = raw_ref.split('/')[-1] or 'object'
        return name[:1].upper() + name[1:]
    if option.get('type'):
        return _join_types(option['type'])
    return 'Unknown'


def _iter_refs(node: Any) -> Iterator[Tuple[str, Any]]:
    for location, schema in _iter_schema_nodes(node):
        if '$ref' in schema:
            yield location, schema['$ref']


def find_dangling_refs(schema: Mapping[str, Any], root: Optional[Mapping[str, Any]] = None) -> List[ResolutionDiagnostic]:
    """Every ``$ref`` under ``schema`` that does not resolve against ``root``."""
    if root is None:
        root = schema
    diagnostics: List[ResolutionDiagnostic] = []
    for location, ref in _iter_refs(schema):
        if not isinstance(ref, str):
            reason = 'reference is not a string'
        elif split_pointer(ref) is None:
            reason = 'only root-relative references (#/...) are supported'
        elif resolve_reference(ref, root) is None:
            reason = 'target not found in the document'
        else:
            continue
        diagnostics.append(ResolutionDiagnostic(ref=str(ref), location=location, reason=reason))
    return diagnostics


_SCHEMA_MAP_KEYS = ('properties', 'patternProperties', 'definitions', '$defs', 'dependencies')


def _iter_schema_nodes(node: Any, location: Tuple[str, ...] = ()) -> Iterator[Tuple[str, Mapping[str, Any]]]:
    if not isinstance(node, Mapping):
        return
    yield '/'.join(location), node
    for key, value in node.items():
        if key in ('enum', 'const', 'default', 'examples'):
            continue
        if key in _SCHEMA_MAP_KEYS and isinstance(value, Mapping):
            for name, child in value.items():
                yield from _iter_schema_nodes(child, location + (str(key), str(name)))
        elif isinstance(value, Mapping):
            yield from _iter_schema_nodes(value, location + (str(key),))
        elif isinstance(value, list):
            for i, item in enumerate(value):
                yield from _iter_schema_nodes(item, location + (str(key), str(i)))


def collect_warnings(schema: Mapping[str, Any]) -> List[str]:
    """Non-fatal warnings for a whole document.

    Unsupported keywords and unresolved references are reported; rendering
    goes ahead regardless.
    """
    warnings: List[str] = []
    for location, node in _iter_schema_nodes(schema):
        features = get_unsupported_features(node)
        if features:
            where = location or '(root)'
            warnings.append(f"Unsupported at {where}: {', '.join(features)}")
    for diagnostic in find_dangling_refs(schema):
        warnings.append(diagnostic.message())
    if warnings:
        logger.info("Schema has %d documentation warning(s).", len(warnings))
    return warnings
