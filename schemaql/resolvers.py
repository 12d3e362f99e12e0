"""Resolver factories attached to generated fields.

Every resolver receives the parent value as ``self`` (the way Strawberry binds
resolvers on generated classes). Backend failures are captured in a
:class:`FetchResult` and then either surfaced as :class:`FetchFailure` (a
per-field GraphQL error, siblings keep resolving) or, with
``swallow_fetch_errors``, logged and turned into an empty result.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, Optional, TypeVar

from strawberry.types import Info as StrawberryInfo

from .backend import get_backend
from .core.naming import relation_id_key
from .errors import FetchFailure
from .pagination import CONNECTION_ARGS, PaginationArgs, connection_from_nodes

__all__ = [
    'FetchResult',
    'read_value',
    'make_scalar_resolver',
    'make_to_one_resolver',
    'make_to_many_resolver',
    'make_listing_resolver',
    'make_root_id_resolver',
]

_logger = logging.getLogger("schemaql")

T = TypeVar('T')


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a single backend call: either ``value`` or ``error``."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def fetch(call: Callable[[], Awaitable[T]]) -> FetchResult[T]:
    try:
        return FetchResult(value=await call())
    except Exception as exc:
        return FetchResult(error=exc)


def unwrap(result: FetchResult[T], *, model_name: str, field_name: str, swallow: bool, empty: Any) -> Any:
    if result.ok:
        return result.value
    if swallow:
        _logger.warning("schemaql: fetch for %s.%s failed", model_name, field_name, exc_info=result.error)
        return empty
    _logger.debug("schemaql: fetch for %s.%s failed, raising", model_name, field_name)
    raise FetchFailure(model_name, field_name, result.error) from result.error


def read_value(record: Any, key: str) -> Any:
    """Read ``key`` from a backend node (mapping first, attribute second)."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _with_signature(fn: Callable[..., Any], args: Optional[Dict[str, Any]] = None) -> Callable[..., Any]:
    # Strawberry derives GraphQL arguments from the resolver's annotations.
    anns: Dict[str, Any] = {'info': StrawberryInfo}
    anns.update(args or {})
    fn.__annotations__ = anns
    fn.__module__ = __name__
    return fn


def make_scalar_resolver(field_name: str) -> Callable[..., Any]:
    def _resolver(self, info):  # noqa: D401
        return read_value(self, field_name)
    _resolver.__name__ = f"_scalar_{field_name}_resolver"
    return _with_signature(_resolver)


def make_to_one_resolver(
    model_name: str, field_name: str, target_model: str, *, swallow: bool = False
) -> Callable[..., Any]:
    """Resolver for a singular relation: look up ``<field>Id`` and fetch that node."""
    id_key = relation_id_key(field_name)

    async def _resolver(self, info):  # noqa: D401
        target_id = read_value(self, id_key)
        if target_id is None or target_id == '':
            return None
        backend = get_backend(info)
        result = await fetch(lambda: backend.fetch_node_by_id(target_model, target_id))
        return unwrap(result, model_name=model_name, field_name=field_name, swallow=swallow, empty=None)

    _resolver.__name__ = f"_rel_{field_name}_resolver"
    return _with_signature(_resolver)


def make_to_many_resolver(model_name: str, field_name: str, *, swallow: bool = False) -> Callable[..., Any]:
    """Resolver for a list relation: fetch the related array and paginate it."""

    async def _resolver(self, info, first=None, after=None, last=None, before=None):  # noqa: D401
        args = PaginationArgs(first=first, after=after, last=last, before=before)
        backend = get_backend(info)
        parent_id = read_value(self, 'id')
        result = await fetch(
            lambda: backend.fetch_related_collection(model_name, parent_id, field_name, args.as_dict())
        )
        nodes = unwrap(result, model_name=model_name, field_name=field_name, swallow=swallow, empty=[])
        return connection_from_nodes(nodes or [], args)

    _resolver.__name__ = f"_rel_{field_name}_resolver"
    return _with_signature(_resolver, CONNECTION_ARGS)


def make_listing_resolver(model_name: str, field_name: str, *, swallow: bool = False) -> Callable[..., Any]:
    """Root ``all<Model>s`` resolver."""

    async def _resolver(self, info, first=None, after=None, last=None, before=None):  # noqa: D401
        args = PaginationArgs(first=first, after=after, last=last, before=before)
        backend = get_backend(info)
        result = await fetch(lambda: backend.fetch_all_of_type(model_name, args.as_dict()))
        nodes = unwrap(result, model_name=model_name, field_name=field_name, swallow=swallow, empty=[])
        return connection_from_nodes(nodes or [], args)

    _resolver.__name__ = f"_root_{field_name}_resolver"
    return _with_signature(_resolver, CONNECTION_ARGS)


def make_root_id_resolver() -> Callable[..., Any]:
    # Root fields receive the execution root value as the parent.
    def _resolver(self, info):  # noqa: D401
        return read_value(self, 'id')
    _resolver.__name__ = '_root_id_resolver'
    return _with_signature(_resolver)
