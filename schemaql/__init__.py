"""schemaql: derive a Relay-style Strawberry type graph from client schemas.

Public API:
- create_types, SchemaBuilder, BuiltSchema, TypeRegistryEntry, NodeInterface
- ClientSchema, ClientSchemaField, Permission
- Settings
- Backend (data-access protocol) and the error types
"""
from .config import Settings
from .core.definitions import ClientSchema, ClientSchemaField, Permission
from .backend import Backend
from .errors import (
    SchemaQLError,
    SchemaInconsistencyError,
    ArgumentKeyCollisionError,
    FetchFailure,
    UnresolvedNodeTypeError,
    MissingBackendError,
    InvalidModelError,
)
from .registry import BuiltSchema, NodeInterface, SchemaBuilder, TypeRegistryEntry, create_types

__all__ = [
    'create_types', 'SchemaBuilder', 'BuiltSchema', 'TypeRegistryEntry', 'NodeInterface',
    'ClientSchema', 'ClientSchemaField', 'Permission',
    'Settings', 'Backend',
    'SchemaQLError', 'SchemaInconsistencyError', 'ArgumentKeyCollisionError',
    'FetchFailure', 'UnresolvedNodeTypeError', 'MissingBackendError', 'InvalidModelError',
]
