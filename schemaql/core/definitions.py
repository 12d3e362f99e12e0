from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

__all__ = [
    'Permission',
    'ClientSchemaField',
    'ClientSchema',
    'load_client_schema',
    'load_client_schemas',
]


@dataclass(frozen=True)
class Permission:
    """Per-user-type access flags attached to a client field.

    Carried through as data only; the type builder does not enforce them.
    """

    id: str
    user_type: str
    allow_read: bool = False
    allow_create: bool = False
    allow_update: bool = False
    allow_delete: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Permission':
        return cls(
            id=str(data.get('id', '')),
            user_type=str(data.get('userType', '')),
            allow_read=bool(data.get('allowRead', False)),
            allow_create=bool(data.get('allowCreate', False)),
            allow_update=bool(data.get('allowUpdate', False)),
            allow_delete=bool(data.get('allowDelete', False)),
        )


@dataclass(frozen=True)
class ClientSchemaField:
    """A single declared field of a client model.

    Attributes:
        field_name: Name exposed on the generated GraphQL type.
        type_identifier: One of the primitive tags (``String``, ``Int``,
            ``Float``, ``Boolean``, ``ID``, ``Password``) or the ``model_name``
            of another client schema (relation).
        is_required: Wrap the final field type as non-null.
        is_list: For relations, selects a to-many (connection) field.
        back_relation_name: Name of the inverse field on the target model.
    """

    field_name: str
    type_identifier: str
    is_required: bool = False
    is_list: bool = False
    is_unique: bool = False
    back_relation_name: Optional[str] = None
    enum_values: Tuple[str, ...] = ()
    is_system: bool = False
    permissions: Tuple[Permission, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ClientSchemaField':
        return cls(
            field_name=data['fieldName'],
            type_identifier=data['typeIdentifier'],
            is_required=bool(data.get('isRequired', False)),
            is_list=bool(data.get('isList', False)),
            is_unique=bool(data.get('isUnique', False)),
            back_relation_name=data.get('backRelationName'),
            enum_values=tuple(data.get('enumValues') or ()),
            is_system=bool(data.get('isSystem', False)),
            permissions=tuple(Permission.from_dict(p) for p in (data.get('permissions') or ())),
        )


@dataclass(frozen=True)
class ClientSchema:
    """Immutable description of one model: its name plus its fields."""

    model_name: str
    fields: Tuple[ClientSchemaField, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers while keeping the instance hashable/immutable
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, 'fields', tuple(self.fields))

    def field_map(self) -> Dict[str, ClientSchemaField]:
        return {f.field_name: f for f in self.fields}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ClientSchema':
        return cls(
            model_name=data['modelName'],
            fields=tuple(ClientSchemaField.from_dict(f) for f in (data.get('fields') or ())),
        )


def load_client_schema(value: Any) -> ClientSchema:
    """Return ``value`` as a :class:`ClientSchema`, parsing the camelCase dict form."""
    if isinstance(value, ClientSchema):
        return value
    if isinstance(value, Mapping):
        return ClientSchema.from_dict(value)
    raise TypeError(f"Expected ClientSchema or mapping, got {type(value).__name__}")


def load_client_schemas(values: Iterable[Any]) -> Tuple[ClientSchema, ...]:
    return tuple(load_client_schema(v) for v in values)
