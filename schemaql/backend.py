from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .errors import MissingBackendError

__all__ = ['Node', 'Backend', 'get_backend']

Node = Mapping[str, Any]


@runtime_checkable
class Backend(Protocol):
    """Data-access collaborator called from generated resolvers.

    Nodes are mappings keyed by ``id``, the declared field names and
    ``<relationField>Id`` for singular relations. ``pagination_args`` is a dict
    with the keys ``first``, ``after``, ``last`` and ``before``.
    """

    async def fetch_related_collection(
        self, model_name: str, parent_id: Any, relation_field_name: str, pagination_args: Dict[str, Any]
    ) -> List[Node]:
        ...

    async def fetch_node_by_id(self, model_name: str, id: Any) -> Optional[Node]:
        ...

    async def fetch_all_of_type(self, model_name: str, pagination_args: Dict[str, Any]) -> List[Node]:
        ...


def _lookup(container: Any, key: str) -> Any:
    if container is None:
        return None
    get = getattr(container, 'get', None)
    if callable(get):
        value = get(key, None)
        if value is not None:
            return value
    return getattr(container, key, None)


def get_backend(info: Any) -> Backend:
    """Find the backend for the current execution.

    Looks at ``info.context['backend']`` (mapping or attribute) first and falls
    back to the root value's ``backend``.
    """
    backend = _lookup(getattr(info, 'context', None), 'backend')
    if backend is None:
        backend = _lookup(getattr(info, 'root_value', None), 'backend')
    if backend is None:
        raise MissingBackendError("No 'backend' found in execution context or root value")
    return backend
