"""Exception types raised while building or resolving the generated schema."""
from __future__ import annotations
from typing import Optional

__all__ = [
    'SchemaQLError',
    'SchemaInconsistencyError',
    'ArgumentKeyCollisionError',
    'FetchFailure',
    'UnresolvedNodeTypeError',
    'MissingBackendError',
    'InvalidModelError',
]


class SchemaQLError(Exception):
    """Base class for all schemaql errors."""


class SchemaInconsistencyError(SchemaQLError, ValueError):
    """A relation field points at a model that is not part of the build."""

    def __init__(self, model_name: str, field_name: str, target: str):
        self.model_name = model_name
        self.field_name = field_name
        self.target = target
        super().__init__(
            f"Field '{model_name}.{field_name}' references unknown model '{target}'"
        )


class ArgumentKeyCollisionError(SchemaQLError, ValueError):
    """Scalar and relation arguments of a mutation derive the same key."""

    def __init__(self, model_name: str, key: str, kind: str = 'create'):
        self.model_name = model_name
        self.key = key
        self.kind = kind
        super().__init__(
            f"{kind} arguments for '{model_name}' derive the key '{key}' from both a scalar and a relation field"
        )


class FetchFailure(SchemaQLError, RuntimeError):
    """The data-access backend failed while resolving a single field."""

    def __init__(self, model_name: str, field_name: str, cause: Optional[BaseException] = None):
        self.model_name = model_name
        self.field_name = field_name
        detail = f": {cause}" if cause is not None else ''
        super().__init__(f"Failed to fetch '{model_name}.{field_name}'{detail}")


class UnresolvedNodeTypeError(SchemaQLError, NotImplementedError):
    """Concrete type resolution for ``NodeInterface`` values is not implemented."""


class MissingBackendError(SchemaQLError, LookupError):
    """No data-access backend found in the execution context or root value."""


class InvalidModelError(SchemaQLError, ValueError):
    """A client schema cannot be turned into a GraphQL type as declared."""

    def __init__(self, model_name: str, reason: str):
        self.model_name = model_name
        self.reason = reason
        super().__init__(f"Model '{model_name}' is invalid: {reason}")
