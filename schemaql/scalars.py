"""Mapping from client type identifiers to GraphQL output scalars."""
from __future__ import annotations
from typing import Any, Dict

import strawberry

from .core.definitions import ClientSchemaField
from .core.fields import Resolved, Unresolved

__all__ = ['PRIMITIVE_TYPES', 'map_type_identifier', 'is_relation', 'is_identity']

# Password is a presentation hint only; on the wire it is a plain String.
PRIMITIVE_TYPES: Dict[str, Any] = {
    'String': str,
    'Int': int,
    'Float': float,
    'Boolean': bool,
    'ID': strawberry.ID,
    'Password': str,
}

IDENTITY_FIELD = 'id'


def map_type_identifier(type_identifier: str) -> Resolved | Unresolved:
    """Map a declared type identifier to a primitive output type.

    Unknown identifiers are assumed to name another model and come back as an
    ``Unresolved`` marker; nothing is validated here.
    """
    py_t = PRIMITIVE_TYPES.get(type_identifier)
    if py_t is None:
        return Unresolved(type_identifier)
    return Resolved(py_t)


def is_relation(field: ClientSchemaField) -> bool:
    return type_identifier_is_relation(field.type_identifier)


def type_identifier_is_relation(type_identifier: str) -> bool:
    return isinstance(map_type_identifier(type_identifier), Unresolved)


def is_identity(field: ClientSchemaField) -> bool:
    return field.field_name == IDENTITY_FIELD
