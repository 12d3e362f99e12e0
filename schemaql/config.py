from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ['Settings']

_TRUTHY = {'1', 'true', 't', 'yes', 'y', 'on'}


@dataclass(frozen=True)
class Settings:
    """Build options for :class:`schemaql.registry.SchemaBuilder`.

    Attributes:
        swallow_fetch_errors: When True, a failing backend call is logged and
            the field resolves to an empty connection (or ``None``) instead of
            surfacing a per-field error.
        root_type_name: GraphQL name of the root type.
        listing_field_prefix / listing_field_suffix: Root listing field naming
            (``all`` + ``User`` + ``s``).
    """

    swallow_fetch_errors: bool = False
    root_type_name: str = 'Viewer'
    listing_field_prefix: str = 'all'
    listing_field_suffix: str = 's'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        env = os.environ if environ is None else environ
        defaults = cls()
        swallow = env.get('SCHEMAQL_SWALLOW_FETCH_ERRORS')
        return cls(
            swallow_fetch_errors=(swallow.strip().lower() in _TRUTHY) if swallow is not None else defaults.swallow_fetch_errors,
            root_type_name=env.get('SCHEMAQL_ROOT_TYPE_NAME') or defaults.root_type_name,
            listing_field_prefix=env.get('SCHEMAQL_LISTING_FIELD_PREFIX') or defaults.listing_field_prefix,
            listing_field_suffix=env.get('SCHEMAQL_LISTING_FIELD_SUFFIX', defaults.listing_field_suffix),
        )
