from __future__ import annotations
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Set, Type

import strawberry

from .config import Settings
from .core.definitions import ClientSchema, load_client_schemas
from .core.fields import FieldSpec, Resolved, Unresolved, wrap_non_null
from .core.naming import connection_type_name, edge_type_name, listing_field_name, unique_attr_name
from .errors import InvalidModelError, SchemaInconsistencyError, UnresolvedNodeTypeError
from .mutations import (
    MutationArguments,
    generate_create_mutation_input_arguments,
    generate_update_mutation_input_arguments,
)
from .pagination import CONNECTION_ARGS, build_connection_types
from .resolvers import (
    make_listing_resolver,
    make_root_id_resolver,
    make_scalar_resolver,
    make_to_many_resolver,
    make_to_one_resolver,
    read_value,
)
from .scalars import IDENTITY_FIELD, PRIMITIVE_TYPES, map_type_identifier

try:  # Provide StrawberryConfig for type annotations (optional)
    from strawberry.schema.config import StrawberryConfig  # type: ignore
except Exception:  # pragma: no cover
    StrawberryConfig = Any  # type: ignore

__all__ = [
    'NodeInterface',
    'TypeRegistryEntry',
    'BuiltSchema',
    'SchemaBuilder',
    'create_types',
    'resolve_node_type',
]

# Project logger
_logger = logging.getLogger("schemaql")

FIELDS_ATTR = '__schemaql_fields__'

# Class attributes a generated field must not shadow.
_RESERVED_ATTRS = ('resolve_type', 'is_type_of', FIELDS_ATTR)


def resolve_node_type(obj: Any) -> str:
    """Determine the concrete model of an arbitrary node.

    Not implemented: nodes carry no stable type discriminator yet (neither in
    the id nor in the record), and guessing would return a wrong type.
    """
    raise UnresolvedNodeTypeError(
        f"Cannot resolve the concrete type of node {read_value(obj, 'id')!r}: "
        "NodeInterface type resolution is not implemented"
    )


@strawberry.interface(name='NodeInterface', description='An object with an id.')
class NodeInterface:
    id: Optional[strawberry.ID]

    @classmethod
    def resolve_type(cls, obj: Any, info: Any, abstract_type: Any) -> str:
        return resolve_node_type(obj)

    @classmethod
    def is_type_of(cls, obj: Any, info: Any) -> bool:
        # Backend nodes are plain mappings; resolvers already pick the right type.
        return isinstance(obj, (cls, Mapping))


@dataclass
class TypeRegistryEntry:
    """Everything generated for one model, keyed by ``model_name`` in the registry."""

    client_schema: ClientSchema
    object_type: Type[Any]
    connection_type: Type[Any]
    edge_type: Type[Any]
    create_mutation_input_arguments: MutationArguments
    update_mutation_input_arguments: MutationArguments

    @property
    def model_name(self) -> str:
        return self.client_schema.model_name

    @property
    def fields(self) -> Dict[str, FieldSpec]:
        return getattr(self.object_type, FIELDS_ATTR)


@dataclass(frozen=True)
class BuiltSchema:
    registry: Mapping[str, TypeRegistryEntry]
    viewer_type: Type[Any]
    node_interface: Type[Any]
    schema: strawberry.Schema

    def __getitem__(self, model_name: str) -> TypeRegistryEntry:
        return self.registry[model_name]


class SchemaBuilder:
    """Builds the type graph for a set of client schemas.

    ``build()`` runs three barrier-separated passes over the registry:

    1. per model: object type (relations left ``Unresolved``), connection and
       edge types, create/update mutation arguments;
    2. relation injection, which needs every entry from pass 1;
    3. non-null wrapping of required fields, which needs concrete types.

    The root ``Viewer`` type is assembled last, then all classes are
    decorated with Strawberry and the registry is frozen.
    """

    def __init__(
        self,
        client_schemas: Iterable[Any],
        *,
        settings: Optional[Settings] = None,
        strawberry_config: Optional[StrawberryConfig] = None,
    ):
        self.client_schemas = load_client_schemas(client_schemas)
        self.settings = settings or Settings()
        self.strawberry_config = strawberry_config
        self.types: Dict[str, TypeRegistryEntry] = {}
        self._built: Optional[BuiltSchema] = None

    # ---------- pass 1 ----------
    def _generate_object_type(self, client_schema: ClientSchema) -> Type[Any]:
        model_name = client_schema.model_name
        cls = type(model_name, (NodeInterface,), {'__doc__': f'Generated type for model {model_name}.'})
        cls.__module__ = __name__
        fields: Dict[str, FieldSpec] = {}
        for f in client_schema.fields:
            taken = [s.python_name for s in fields.values() if s.name != f.field_name] + list(_RESERVED_ATTRS)
            fields[f.field_name] = FieldSpec(
                name=f.field_name,
                python_name=unique_attr_name(f.field_name, taken),
                field_type=map_type_identifier(f.type_identifier),
                resolver=make_scalar_resolver(f.field_name),
                client_field=f,
            )
        if IDENTITY_FIELD not in fields:
            # Every model implements NodeInterface, so it always exposes an id.
            fields[IDENTITY_FIELD] = FieldSpec(
                name=IDENTITY_FIELD,
                python_name=IDENTITY_FIELD,
                field_type=Resolved(strawberry.ID),
                resolver=make_scalar_resolver(IDENTITY_FIELD),
            )
        setattr(cls, FIELDS_ATTR, fields)
        return cls

    def _generate_entry(self, client_schema: ClientSchema) -> TypeRegistryEntry:
        object_type = self._generate_object_type(client_schema)
        connection_type, edge_type = build_connection_types(client_schema.model_name, object_type)
        return TypeRegistryEntry(
            client_schema=client_schema,
            object_type=object_type,
            connection_type=connection_type,
            edge_type=edge_type,
            create_mutation_input_arguments=generate_create_mutation_input_arguments(client_schema),
            update_mutation_input_arguments=generate_update_mutation_input_arguments(client_schema),
        )

    def _reserved_type_names(self) -> Set[str]:
        names = {'PageInfo', 'NodeInterface', self.settings.root_type_name}
        names.update(PRIMITIVE_TYPES)
        for client_schema in self.client_schemas:
            names.add(connection_type_name(client_schema.model_name))
            names.add(edge_type_name(client_schema.model_name))
        return names

    def _check_model(self, client_schema: ClientSchema, reserved: Set[str]) -> None:
        model_name = client_schema.model_name
        if model_name in reserved:
            raise InvalidModelError(model_name, "the name clashes with a generated or built-in GraphQL type")
        id_field = client_schema.field_map().get(IDENTITY_FIELD)
        if id_field is not None and id_field.type_identifier != 'ID':
            raise InvalidModelError(
                model_name, f"field '{IDENTITY_FIELD}' must have type 'ID', got '{id_field.type_identifier}'"
            )

    def _generate_types(self) -> None:
        reserved = self._reserved_type_names()
        for client_schema in self.client_schemas:
            self._check_model(client_schema, reserved)
            self.types[client_schema.model_name] = self._generate_entry(client_schema)
        _logger.debug("schemaql: pass 1 built %d types: %s", len(self.types), sorted(self.types))

    # ---------- pass 2 ----------
    def _inject_relationships(self, entry: TypeRegistryEntry) -> None:
        model_name = entry.model_name
        swallow = self.settings.swallow_fetch_errors
        for spec in entry.fields.values():
            if not isinstance(spec.field_type, Unresolved):
                continue
            target = spec.field_type.target
            target_entry = self.types.get(target)
            if target_entry is None:
                raise SchemaInconsistencyError(model_name, spec.name, target)
            if spec.client_field is not None and spec.client_field.is_list:
                # 1:n relationship
                spec.field_type = Resolved(target_entry.connection_type)
                spec.args = dict(CONNECTION_ARGS)
                spec.resolver = make_to_many_resolver(model_name, spec.name, swallow=swallow)
                spec.description = f"Related {target} items, paginated."
            else:
                # 1:1 relationship
                spec.field_type = Resolved(target_entry.object_type)
                spec.resolver = make_to_one_resolver(model_name, spec.name, target, swallow=swallow)
            spec.relation = True
            _logger.debug("schemaql: resolved %s.%s -> %s", model_name, spec.name, target)

    # ---------- pass 3 ----------
    def _wrap_with_non_null(self, entry: TypeRegistryEntry) -> None:
        fields = entry.fields
        for f in entry.client_schema.fields:
            if f.is_required:
                fields[f.field_name].field_type = wrap_non_null(fields[f.field_name].field_type)

    # ---------- root ----------
    def _build_viewer(self) -> Type[Any]:
        s = self.settings
        swallow = s.swallow_fetch_errors
        viewer = type(s.root_type_name, (NodeInterface,), {'__doc__': 'Root type listing every model.'})
        viewer.__module__ = __name__
        fields: Dict[str, FieldSpec] = {}
        for model_name, entry in self.types.items():
            name = listing_field_name(model_name, prefix=s.listing_field_prefix, suffix=s.listing_field_suffix)
            taken = [spec.python_name for spec in fields.values()] + [IDENTITY_FIELD, *_RESERVED_ATTRS]
            fields[name] = FieldSpec(
                name=name,
                python_name=unique_attr_name(name, taken),
                field_type=Resolved(entry.connection_type),
                resolver=make_listing_resolver(model_name, name, swallow=swallow),
                args=dict(CONNECTION_ARGS),
                description=f"Every {model_name}, paginated.",
            )
        fields[IDENTITY_FIELD] = FieldSpec(
            name=IDENTITY_FIELD,
            python_name=IDENTITY_FIELD,
            field_type=Resolved(strawberry.ID),
            resolver=make_root_id_resolver(),
        )
        setattr(viewer, FIELDS_ATTR, fields)
        return viewer

    # ---------- materialize ----------
    @staticmethod
    def _apply_fields(cls: Type[Any]) -> None:
        annotations: Dict[str, Any] = {}
        for spec in getattr(cls, FIELDS_ATTR).values():
            annotations[spec.python_name] = spec.annotation
            setattr(
                cls,
                spec.python_name,
                strawberry.field(resolver=spec.resolver, name=spec.name, description=spec.description),
            )
        cls.__annotations__ = annotations

    def _materialize(self, viewer: Type[Any]) -> Type[Any]:
        for model_name, entry in self.types.items():
            self._apply_fields(entry.object_type)
            entry.object_type = strawberry.type(entry.object_type, name=model_name, description=entry.object_type.__doc__)
            entry.edge_type = strawberry.type(entry.edge_type, name=entry.edge_type.__name__, description=entry.edge_type.__doc__)
            entry.connection_type = strawberry.type(
                entry.connection_type, name=entry.connection_type.__name__, description=entry.connection_type.__doc__
            )
        self._apply_fields(viewer)
        return strawberry.type(viewer, name=self.settings.root_type_name, description=viewer.__doc__)

    def build(self) -> BuiltSchema:
        if self._built is not None:
            return self._built
        self._generate_types()
        for entry in self.types.values():
            self._inject_relationships(entry)
        _logger.debug("schemaql: pass 2 relations injected")
        for entry in self.types.values():
            self._wrap_with_non_null(entry)
        _logger.debug("schemaql: pass 3 non-null wrapping done")
        viewer = self._materialize(self._build_viewer())
        if self.strawberry_config is not None:
            schema = strawberry.Schema(query=viewer, config=self.strawberry_config)
        else:
            schema = strawberry.Schema(query=viewer)
        # Resolvers only read the registry from here on.
        self.types = MappingProxyType(self.types)  # type: ignore[assignment]
        self._built = BuiltSchema(registry=self.types, viewer_type=viewer, node_interface=NodeInterface, schema=schema)
        _logger.info("schemaql: built schema with %d models", len(self.types))
        return self._built


def create_types(
    client_schemas: Iterable[Any],
    *,
    settings: Optional[Settings] = None,
    strawberry_config: Optional[StrawberryConfig] = None,
) -> BuiltSchema:
    """Build the full type graph for ``client_schemas`` in one call."""
    return SchemaBuilder(client_schemas, settings=settings, strawberry_config=strawberry_config).build()
