"""
Mock Server

Convenience wrapper: install mocks on a schema (or on SDL text) and run
queries against it. Root value and context are both empty dicts.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union
import logging

from graphql import ExecutionResult, GraphQLSchema, build_schema, graphql, graphql_sync

from .installer import add_mocks_to_schema

logger = logging.getLogger(__name__)


class MockServer:
    """Runs queries against a mocked schema"""

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema

    def query(
        self,
        source: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None
    ) -> ExecutionResult:
        """Execute synchronously; fails if any resolver returns an awaitable"""
        return graphql_sync(
            self.schema,
            source,
            root_value={},
            context_value={},
            variable_values=variables,
            operation_name=operation_name,
        )

    async def query_async(
        self,
        source: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None
    ) -> ExecutionResult:
        return await graphql(
            self.schema,
            source,
            root_value={},
            context_value={},
            variable_values=variables,
            operation_name=operation_name,
        )


def mock_server(
    schema: Union[GraphQLSchema, str],
    mocks: Optional[Mapping[str, Callable]] = None,
    preserve_resolvers: bool = False,
    extended_scalars: bool = False
) -> MockServer:
    """
    Build a MockServer from a schema or from SDL text

    Args:
        schema: A GraphQLSchema, or type definitions in SDL
        mocks: Overrides keyed by type name
        preserve_resolvers: Keep existing resolvers and merge their results
        extended_scalars: Mock common custom scalars with Faker

    Returns:
        MockServer
    """
    if isinstance(schema, str):
        schema = build_schema(schema)
        logger.debug(f"Built schema with {len(schema.type_map)} types from SDL")

    mocked = add_mocks_to_schema(
        schema,
        mocks=mocks,
        preserve_resolvers=preserve_resolvers,
        extended_scalars=extended_scalars,
    )
    return MockServer(mocked)
