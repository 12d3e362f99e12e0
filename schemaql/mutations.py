"""Create/update mutation argument derivation.

Arguments are derived from a model's client fields with two predicates: a
scalar filter and a singular-relation filter. Scalar fields keep their name
and mapped primitive type; singular relations become ``<field>Id: ID``.
List relations are never mutation arguments; they are edited through separate
relation operations.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping

import strawberry

from .core.definitions import ClientSchema, ClientSchemaField
from .core.fields import FieldType, NonNull, Resolved, to_annotation, wrap_non_null
from .core.naming import relation_id_key
from .errors import ArgumentKeyCollisionError
from .scalars import is_identity, is_relation, map_type_identifier

__all__ = [
    'MutationArgument',
    'MutationArguments',
    'generate_mutation_input_arguments',
    'generate_create_mutation_input_arguments',
    'generate_update_mutation_input_arguments',
]

_logger = logging.getLogger("schemaql")

FieldFilter = Callable[[ClientSchemaField], bool]


@dataclass(frozen=True)
class MutationArgument:
    name: str
    field_type: FieldType
    source_field: ClientSchemaField

    @property
    def required(self) -> bool:
        return isinstance(self.field_type, NonNull)

    @property
    def annotation(self) -> Any:
        return to_annotation(self.field_type)


class MutationArguments(Mapping[str, MutationArgument]):
    """Read-only mapping of argument name -> :class:`MutationArgument`."""

    def __init__(self, model_name: str, arguments: Dict[str, MutationArgument]):
        self.model_name = model_name
        self._arguments = dict(arguments)

    def __getitem__(self, key: str) -> MutationArgument:
        return self._arguments[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def annotations(self) -> Dict[str, Any]:
        """Argument name -> annotation (``T`` for non-null, ``Optional[T]`` otherwise)."""
        return {name: arg.annotation for name, arg in self._arguments.items()}

    def __repr__(self) -> str:
        return f"MutationArguments({self.model_name!r}, {sorted(self._arguments)!r})"


def _argument_type(base: Resolved, required: bool) -> FieldType:
    return wrap_non_null(base) if required else base


def generate_mutation_input_arguments(
    client_schema: ClientSchema,
    scalar_filter: FieldFilter,
    one_to_one_filter: FieldFilter,
    *,
    kind: str = 'create',
) -> MutationArguments:
    scalar_arguments: Dict[str, MutationArgument] = {}
    for f in client_schema.fields:
        if not scalar_filter(f):
            continue
        base = map_type_identifier(f.type_identifier)
        if not isinstance(base, Resolved):
            raise TypeError(f"Scalar filter selected relation field '{client_schema.model_name}.{f.field_name}'")
        scalar_arguments[f.field_name] = MutationArgument(f.field_name, _argument_type(base, f.is_required), f)

    one_to_one_arguments: Dict[str, MutationArgument] = {}
    for f in client_schema.fields:
        if not one_to_one_filter(f):
            continue
        key = relation_id_key(f.field_name)
        one_to_one_arguments[key] = MutationArgument(key, _argument_type(Resolved(strawberry.ID), f.is_required), f)

    collisions = sorted(set(scalar_arguments) & set(one_to_one_arguments))
    if collisions:
        raise ArgumentKeyCollisionError(client_schema.model_name, collisions[0], kind)
    merged = dict(scalar_arguments)
    merged.update(one_to_one_arguments)
    _logger.debug("schemaql.mutations: %s %s args=%s", kind, client_schema.model_name, sorted(merged))
    return MutationArguments(client_schema.model_name, merged)


def _is_singular_relation(f: ClientSchemaField) -> bool:
    return is_relation(f) and not f.is_list


def generate_create_mutation_input_arguments(client_schema: ClientSchema) -> MutationArguments:
    return generate_mutation_input_arguments(
        client_schema,
        lambda f: not is_relation(f) and not is_identity(f),
        _is_singular_relation,
        kind='create',
    )


def generate_update_mutation_input_arguments(client_schema: ClientSchema) -> MutationArguments:
    # Updates address an existing record, so the identity field is an argument too.
    return generate_mutation_input_arguments(
        client_schema,
        lambda f: not is_relation(f),
        _is_singular_relation,
        kind='update',
    )
