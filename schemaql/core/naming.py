from __future__ import annotations

import keyword
from typing import Iterable

__all__ = [
    'python_attr_name',
    'unique_attr_name',
    'relation_id_key',
    'listing_field_name',
    'connection_type_name',
    'edge_type_name',
]


def python_attr_name(field_name: str) -> str:
    """Return a safe Python attribute name for a GraphQL field name.

    Client field names are used verbatim when they are valid identifiers;
    keywords get a trailing underscore (``from`` -> ``from_``). The GraphQL
    name is always set explicitly, so this never leaks into the schema.
    """
    name = str(field_name)
    if keyword.iskeyword(name):
        return name + '_'
    if not name.isidentifier():
        return '_' + ''.join(ch if ch.isalnum() or ch == '_' else '_' for ch in name)
    return name


def relation_id_key(field_name: str) -> str:
    """Key under which a singular relation's target id is stored (``manager`` -> ``managerId``)."""
    return f"{field_name}Id"


def listing_field_name(model_name: str, *, prefix: str = 'all', suffix: str = 's') -> str:
    """Root listing field for a model (``User`` -> ``allUsers``)."""
    return f"{prefix}{model_name}{suffix}"


def connection_type_name(model_name: str) -> str:
    return f"{model_name}Connection"


def edge_type_name(model_name: str) -> str:
    return f"{model_name}Edge"


def unique_attr_name(field_name: str, taken: Iterable[str]) -> str:
    """``python_attr_name`` that avoids names already in ``taken``.

    Two client fields can sanitize to the same attribute (``from`` and
    ``from_``); the later one gets a numeric suffix (``from__2``).
    """
    base = python_attr_name(field_name)
    taken = set(taken)
    name, n = base, 1
    while name in taken:
        n += 1
        name = f"{base}_{n}"
    return name
