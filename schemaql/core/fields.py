from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from .definitions import ClientSchemaField

__all__ = [
    'Unresolved',
    'Resolved',
    'NonNull',
    'FieldType',
    'FieldSpec',
    'wrap_non_null',
    'to_annotation',
]


@dataclass(frozen=True)
class Unresolved:
    """Placeholder for a relation whose target type is not known yet.

    Produced by the scalar mapper for any non-primitive type identifier and
    replaced during relation injection.
    """

    target: str


@dataclass(frozen=True)
class Resolved:
    """A concrete output type: a Python scalar or a (plain or Strawberry) class."""

    annotation: Any


@dataclass(frozen=True)
class NonNull:
    of_type: Resolved


FieldType = Union[Unresolved, Resolved, NonNull]


def wrap_non_null(field_type: FieldType) -> NonNull:
    """Wrap a concrete type as non-null. Idempotent for already wrapped types."""
    if isinstance(field_type, NonNull):
        return field_type
    if isinstance(field_type, Unresolved):
        raise TypeError(f"Cannot wrap unresolved relation to '{field_type.target}' as non-null")
    return NonNull(field_type)


def to_annotation(field_type: FieldType, *, nullable: bool = False) -> Any:
    """Render a field type as the annotation Strawberry expects.

    GraphQL nullability maps to ``Optional``: bare ``Resolved`` types are
    nullable, ``NonNull`` ones are not. ``nullable=True`` renders ``NonNull``
    as ``Optional`` too.
    """
    if isinstance(field_type, NonNull):
        if nullable:
            return Optional[field_type.of_type.annotation]
        return field_type.of_type.annotation
    if isinstance(field_type, Resolved):
        return Optional[field_type.annotation]
    raise TypeError(f"Relation to '{field_type.target}' was never resolved")


@dataclass
class FieldSpec:
    """Mutable description of one output field on a generated type.

    Attributes:
        name: GraphQL field name (the client ``field_name``).
        python_name: Attribute name used on the generated class.
        field_type: Tagged type; moves from ``Unresolved`` to ``Resolved`` in
            relation injection and to ``NonNull`` in the non-null pass.
        args: Argument name -> annotation for resolvers that take arguments.
        resolver: Callable attached as the Strawberry resolver; receives the
            parent value as ``self``.
        client_field: The originating client field, if any.
        description: GraphQL description of the field.
        relation: Set during relation injection. Relation fields resolve
            through the backend, so they are exposed nullable in GraphQL even
            when ``field_type`` is ``NonNull``; a failed fetch then nulls only
            this field and not its parent.
    """

    name: str
    python_name: str
    field_type: FieldType
    resolver: Optional[Callable[..., Any]] = None
    args: Dict[str, Any] = field(default_factory=dict)
    client_field: Optional[ClientSchemaField] = None
    description: Optional[str] = None
    relation: bool = False

    @property
    def is_unresolved(self) -> bool:
        return isinstance(self.field_type, Unresolved)

    @property
    def annotation(self) -> Any:
        return to_annotation(self.field_type, nullable=self.relation)
