import pytest

from schemaql import create_types
from schemaql.pagination import TOTAL_COUNT_PLACEHOLDER
from tests.backend import InMemoryBackend
from schemaql.core.definitions import load_client_schemas
from tests.schema import schema


@pytest.mark.asyncio
async def test_root_listing_returns_all_nodes(context):
    q = """
    query { allUsers { edges { cursor node { id name email } } pageInfo { hasNextPage hasPreviousPage } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    edges = res.data['allUsers']['edges']
    assert [e['node']['name'] for e in edges] == ['Alice Johnson', 'Bob Smith', 'Charlie Brown']
    assert edges[2]['node']['email'] is None
    assert res.data['allUsers']['pageInfo'] == {'hasNextPage': False, 'hasPreviousPage': False}
    assert context['backend'].calls == [
        ('fetch_all_of_type', 'User', {'first': None, 'after': None, 'last': None, 'before': None})
    ]


@pytest.mark.asyncio
async def test_to_one_relation_fetches_by_id(context):
    q = """
    query { allUsers { edges { node { id manager { id name } } } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    managers = {e['node']['id']: e['node']['manager'] for e in res.data['allUsers']['edges']}
    assert managers['u1'] is None
    assert managers['u2'] == {'id': 'u1', 'name': 'Alice Johnson'}
    assert managers['u3'] == {'id': 'u1', 'name': 'Alice Johnson'}
    lookups = [c for c in context['backend'].calls if c[0] == 'fetch_node_by_id']
    # u1 has no managerId, so only two lookups happen
    assert lookups == [('fetch_node_by_id', 'User', 'u1'), ('fetch_node_by_id', 'User', 'u1')]


@pytest.mark.asyncio
async def test_to_one_relation_with_missing_target_resolves_null(context):
    q = """
    query { allPostComments { edges { node { id author { name } post { title } } } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    nodes = [e['node'] for e in res.data['allPostComments']['edges']]
    assert nodes[0] == {'id': 'c1', 'author': {'name': 'Bob Smith'}, 'post': {'title': 'First Post'}}
    assert nodes[1]['author'] is None
    assert nodes[1]['post'] == {'title': 'First Post'}


@pytest.mark.asyncio
async def test_to_many_relation_edges_match_fetched_array(context):
    q = """
    query { allUsers { edges { node { id posts { edges { node { title } } totalCount } } } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    by_user = {e['node']['id']: e['node']['posts'] for e in res.data['allUsers']['edges']}
    assert [e['node']['title'] for e in by_user['u1']['edges']] == [
        'First Post', 'GraphQL is Great', 'Python Best Practices'
    ]
    assert len(by_user['u2']['edges']) == 1
    assert by_user['u3']['edges'] == []
    related = [c for c in context['backend'].calls if c[0] == 'fetch_related_collection']
    assert ('fetch_related_collection', 'User', 'u1', 'posts',
            {'first': None, 'after': None, 'last': None, 'before': None}) in related


@pytest.mark.asyncio
async def test_total_count_is_a_fixed_placeholder(context):
    # Known limitation: totalCount is not computed from the relation size.
    q = """
    query { allUsers { totalCount edges { node { id posts { totalCount edges { cursor } } } } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    assert res.data['allUsers']['totalCount'] == TOTAL_COUNT_PLACEHOLDER == 0
    alice = res.data['allUsers']['edges'][0]['node']
    assert len(alice['posts']['edges']) == 3
    assert alice['posts']['totalCount'] == 0


@pytest.mark.asyncio
async def test_to_many_relation_forward_pagination(context):
    q = """
    query ($after: String) {
      allUsers(first: 1) {
        edges { node { posts(first: 2, after: $after) {
          edges { cursor node { title } }
          pageInfo { hasNextPage hasPreviousPage startCursor endCursor }
        } } }
        pageInfo { hasNextPage }
      }
    }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    assert res.data['allUsers']['pageInfo'] == {'hasNextPage': True}
    users = res.data['allUsers']['edges']
    assert len(users) == 1
    page = users[0]['node']['posts']
    assert [e['node']['title'] for e in page['edges']] == ['First Post', 'GraphQL is Great']
    assert page['pageInfo']['hasNextPage'] is True
    assert page['pageInfo']['startCursor'] == page['edges'][0]['cursor']
    assert page['pageInfo']['endCursor'] == page['edges'][-1]['cursor']

    res2 = await schema.execute(q, context_value=context, variable_values={'after': page['pageInfo']['endCursor']})
    assert res2.errors is None, res2.errors
    page2 = res2.data['allUsers']['edges'][0]['node']['posts']
    assert [e['node']['title'] for e in page2['edges']] == ['Python Best Practices']
    assert page2['pageInfo']['hasNextPage'] is False


@pytest.mark.asyncio
async def test_to_many_relation_backward_pagination(context):
    q = """
    query { allPosts(last: 2) { edges { node { id } } pageInfo { hasPreviousPage hasNextPage } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    assert [e['node']['id'] for e in res.data['allPosts']['edges']] == ['p3', 'p4']
    assert res.data['allPosts']['pageInfo'] == {'hasPreviousPage': True, 'hasNextPage': False}


@pytest.mark.asyncio
async def test_self_referencing_to_many(context):
    q = """
    query { allUsers(first: 1) { edges { node { name reports { edges { node { name manager { name } } } } } } } }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    reports = res.data['allUsers']['edges'][0]['node']['reports']['edges']
    assert [r['node']['name'] for r in reports] == ['Bob Smith', 'Charlie Brown']
    assert all(r['node']['manager'] == {'name': 'Alice Johnson'} for r in reports)


@pytest.mark.asyncio
async def test_mutually_referencing_models_resolve_in_one_build():
    schemas = [
        {'modelName': 'Author', 'fields': [
            {'fieldName': 'id', 'typeIdentifier': 'ID', 'isRequired': True},
            {'fieldName': 'books', 'typeIdentifier': 'Book', 'isList': True, 'backRelationName': 'author'},
        ]},
        {'modelName': 'Book', 'fields': [
            {'fieldName': 'id', 'typeIdentifier': 'ID', 'isRequired': True},
            {'fieldName': 'title', 'typeIdentifier': 'String'},
            {'fieldName': 'author', 'typeIdentifier': 'Author', 'backRelationName': 'books'},
        ]},
    ]
    res = create_types(schemas)
    assert res['Author'].fields['books'].field_type.annotation is res['Book'].connection_type
    assert res['Book'].fields['author'].field_type.annotation is res['Author'].object_type

    backend = InMemoryBackend(load_client_schemas(schemas), {
        'Author': [{'id': 'a1'}],
        'Book': [{'id': 'b1', 'title': 'Dune', 'authorId': 'a1'}, {'id': 'b2', 'title': 'Emma', 'authorId': 'a1'}],
    })
    q = """
    query { allAuthors { edges { node { id books { edges { node { title author { id } } } } } } } }
    """
    out = await res.schema.execute(q, context_value={'backend': backend})
    assert out.errors is None, out.errors
    books = out.data['allAuthors']['edges'][0]['node']['books']['edges']
    assert [b['node']['title'] for b in books] == ['Dune', 'Emma']
    assert all(b['node']['author'] == {'id': 'a1'} for b in books)


@pytest.mark.asyncio
async def test_backend_can_come_from_root_value(backend):
    q = """
    query { id allPosts(first: 1) { edges { node { title author { name } } } } }
    """
    res = await schema.execute(q, root_value={'id': 'viewer-1', 'backend': backend})
    assert res.errors is None, res.errors
    assert res.data['id'] == 'viewer-1'
    assert res.data['allPosts']['edges'][0]['node'] == {'title': 'First Post', 'author': {'name': 'Alice Johnson'}}
