"""In-memory data-access backend used by the tests."""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Set

from schemaql import ClientSchema


class BackendDown(RuntimeError):
    pass


class InMemoryBackend:
    """Serves nodes from dicts keyed by model name.

    To-many relations are looked up through the relation field's
    ``back_relation_name``: children of ``Post`` for ``User.posts`` (back
    relation ``author``) are the posts whose ``authorId`` equals the parent id.
    The pagination arguments are recorded but not applied; the resolvers
    paginate the full list themselves.
    """

    def __init__(
        self,
        client_schemas: Iterable[ClientSchema],
        data: Dict[str, List[Dict[str, Any]]],
        *,
        fail_on: Optional[Set[str]] = None,
    ):
        self.schemas = {s.model_name: s for s in client_schemas}
        self.data = data
        self.fail_on = set(fail_on or ())
        self.calls: List[tuple] = []

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise BackendDown(f"{op} unavailable")

    async def fetch_related_collection(self, model_name, parent_id, relation_field_name, pagination_args):
        self.calls.append(('fetch_related_collection', model_name, parent_id, relation_field_name, dict(pagination_args)))
        self._maybe_fail('fetch_related_collection')
        rel = self.schemas[model_name].field_map()[relation_field_name]
        back_key = f"{rel.back_relation_name}Id"
        return [r for r in self.data.get(rel.type_identifier, []) if r.get(back_key) == parent_id]

    async def fetch_node_by_id(self, model_name, id):
        self.calls.append(('fetch_node_by_id', model_name, id))
        self._maybe_fail('fetch_node_by_id')
        for r in self.data.get(model_name, []):
            if str(r.get('id')) == str(id):
                return r
        return None

    async def fetch_all_of_type(self, model_name, pagination_args):
        self.calls.append(('fetch_all_of_type', model_name, dict(pagination_args)))
        self._maybe_fail('fetch_all_of_type')
        return list(self.data.get(model_name, []))
