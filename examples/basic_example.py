"""
Basic example of using schemaql with Strawberry GraphQL.

This example demonstrates:
- Describing models as client schemas (the JSON form a schema service returns)
- Building the cross-referenced type graph in one call
- Plugging in a data-access backend through the execution context
- Paginating a to-many relation with Relay cursors
"""

import asyncio
import logging

from schemaql import create_types

logging.basicConfig(level=logging.DEBUG)


CLIENT_SCHEMAS = [
    {
        "modelName": "User",
        "fields": [
            {"fieldName": "id", "typeIdentifier": "ID", "isRequired": True},
            {"fieldName": "name", "typeIdentifier": "String", "isRequired": True},
            {"fieldName": "email", "typeIdentifier": "String"},
            {"fieldName": "posts", "typeIdentifier": "Post", "isList": True, "backRelationName": "author"},
        ],
    },
    {
        "modelName": "Post",
        "fields": [
            {"fieldName": "id", "typeIdentifier": "ID", "isRequired": True},
            {"fieldName": "title", "typeIdentifier": "String", "isRequired": True},
            {"fieldName": "content", "typeIdentifier": "String"},
            {"fieldName": "author", "typeIdentifier": "User", "isRequired": True, "backRelationName": "posts"},
        ],
    },
]

DATA = {
    "User": [
        {"id": "1", "name": "Alice Johnson", "email": "alice@example.com"},
        {"id": "2", "name": "Bob Smith", "email": "bob@example.com"},
    ],
    "Post": [
        {"id": "10", "title": "First Post", "content": "Hello world!", "authorId": "1"},
        {"id": "11", "title": "GraphQL is Great", "content": "I love GraphQL!", "authorId": "1"},
        {"id": "12", "title": "SQLAlchemy Tips", "content": "Some useful tips...", "authorId": "2"},
    ],
}


class DictBackend:
    """Serves nodes from DATA; a real application would query its database here."""

    async def fetch_related_collection(self, model_name, parent_id, relation_field_name, pagination_args):
        if (model_name, relation_field_name) == ("User", "posts"):
            return [p for p in DATA["Post"] if p["authorId"] == parent_id]
        return []

    async def fetch_node_by_id(self, model_name, id):
        return next((n for n in DATA.get(model_name, []) if n["id"] == id), None)

    async def fetch_all_of_type(self, model_name, pagination_args):
        return list(DATA.get(model_name, []))


built = create_types(CLIENT_SCHEMAS)
schema = built.schema


async def main():
    """Main demo function."""
    print(schema.as_str())

    query = """
    query {
        allUsers(first: 1) {
            edges {
                node {
                    id
                    name
                    posts(first: 1) {
                        edges { cursor node { title author { name } } }
                        pageInfo { hasNextPage endCursor }
                        totalCount
                    }
                }
            }
        }
    }
    """

    result = await schema.execute(query, context_value={"backend": DictBackend()})

    if result.errors:
        print("Errors:", result.errors)
    else:
        print("Result:", result.data)

    print("Create arguments for Post:", built["Post"].create_mutation_input_arguments.annotations())


if __name__ == "__main__":
    asyncio.run(main())
