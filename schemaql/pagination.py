"""Relay-style connection types and list projection.

Every model gets a ``<Model>Connection``/``<Model>Edge`` pair built over its
object class. Resolvers fetch a plain list from the backend and project it into
edges and page info with ``graphql_relay.connection_from_array``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Iterable, List, Optional, Tuple, Type

import strawberry
from graphql_relay import connection_from_array

from .core.naming import connection_type_name, edge_type_name

__all__ = [
    'PageInfo',
    'PaginationArgs',
    'ConnectionPayload',
    'CONNECTION_ARGS',
    'TOTAL_COUNT_PLACEHOLDER',
    'build_connection_types',
    'connection_from_nodes',
]

# totalCount is not computed from the data; resolvers always report this value.
TOTAL_COUNT_PLACEHOLDER = 0

_ARG_DESC_FIRST = "Return at most this many edges after the `after` cursor."
_ARG_DESC_AFTER = "Opaque cursor; return edges after this position."
_ARG_DESC_LAST = "Return at most this many edges before the `before` cursor."
_ARG_DESC_BEFORE = "Opaque cursor; return edges before this position."

# Argument annotations shared by every connection-typed field.
CONNECTION_ARGS: Dict[str, Any] = {
    'first': Annotated[Optional[int], strawberry.argument(description=_ARG_DESC_FIRST)],
    'after': Annotated[Optional[str], strawberry.argument(description=_ARG_DESC_AFTER)],
    'last': Annotated[Optional[int], strawberry.argument(description=_ARG_DESC_LAST)],
    'before': Annotated[Optional[str], strawberry.argument(description=_ARG_DESC_BEFORE)],
}


@strawberry.type(description="Information about pagination in a connection.")
class PageInfo:
    has_next_page: bool = strawberry.field(name='hasNextPage')
    has_previous_page: bool = strawberry.field(name='hasPreviousPage')
    start_cursor: Optional[str] = strawberry.field(name='startCursor', default=None)
    end_cursor: Optional[str] = strawberry.field(name='endCursor', default=None)


@dataclass(frozen=True)
class PaginationArgs:
    """Forward (first/after) and backward (last/before) cursor pagination."""

    first: Optional[int] = None
    after: Optional[str] = None
    last: Optional[int] = None
    before: Optional[str] = None

    def __post_init__(self):
        for name in ('first', 'last'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")

    def as_dict(self) -> Dict[str, Any]:
        return {'first': self.first, 'after': self.after, 'last': self.last, 'before': self.before}


@dataclass
class ConnectionPayload:
    """Runtime value returned by connection resolvers.

    Attribute names match the python names of the generated connection class,
    so Strawberry's default resolvers read them directly.
    """

    edges: List[Any] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=lambda: PageInfo(has_next_page=False, has_previous_page=False))
    total_count: Optional[int] = TOTAL_COUNT_PLACEHOLDER


def connection_from_nodes(nodes: Iterable[Any], args: PaginationArgs) -> ConnectionPayload:
    """Project a fetched node list into edges/page info using ``args``.

    ``total_count`` is always :data:`TOTAL_COUNT_PLACEHOLDER`; it is not the
    size of ``nodes`` nor of the returned slice.
    """
    conn = connection_from_array(list(nodes), args.as_dict())
    page = conn.pageInfo
    return ConnectionPayload(
        edges=list(conn.edges),
        page_info=PageInfo(
            has_next_page=bool(page.hasNextPage),
            has_previous_page=bool(page.hasPreviousPage),
            start_cursor=page.startCursor,
            end_cursor=page.endCursor,
        ),
        total_count=TOTAL_COUNT_PLACEHOLDER,
    )


def build_connection_types(model_name: str, node_cls: Type[Any]) -> Tuple[Type[Any], Type[Any]]:
    """Create plain ``<Model>Connection`` and ``<Model>Edge`` classes over ``node_cls``.

    The classes carry their final annotations but are decorated with
    ``strawberry.type`` only when the whole registry is materialized, so
    ``node_cls`` may still be an undecorated placeholder class here.
    """
    edge_name = edge_type_name(model_name)
    EdgePlain = type(edge_name, (), {
        '__doc__': f'An edge in a {connection_type_name(model_name)}.',
        '__module__': __name__,
        '__annotations__': {'node': Optional[node_cls], 'cursor': str},
        'node': strawberry.field(name='node', description='The item at the end of the edge.'),
        'cursor': strawberry.field(name='cursor', description='A cursor for use in pagination.'),
    })
    conn_name = connection_type_name(model_name)
    ConnPlain = type(conn_name, (), {
        '__doc__': f'A connection to a list of {model_name} items.',
        '__module__': __name__,
        '__annotations__': {
            'edges': List[EdgePlain],  # type: ignore[valid-type]
            'page_info': PageInfo,
            'total_count': Optional[int],
        },
        'edges': strawberry.field(name='edges'),
        'page_info': strawberry.field(name='pageInfo'),
        'total_count': strawberry.field(name='totalCount', description='Placeholder; always 0.'),
    })
    return ConnPlain, EdgePlain
