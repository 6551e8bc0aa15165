"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request, Response
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionResult

from ..logging import get_logger
from .context import OperationContext, build_context
from .mutations.root import Mutation
from .queries.root import Query
from .scalars import DATE_SCALAR, Date

logger = get_logger(__name__)

# The field-to-resolver mapping is fixed here, once per process
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(scalar_map={Date: DATE_SCALAR}),
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Introspection catches most type resolution issues
        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


async def execute_operation(
    query: str,
    context: OperationContext,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
) -> ExecutionResult:
    """Execute one operation against the schema.

    Field failures are isolated: the failing field is null and an entry is
    added to ``errors`` while sibling fields still resolve.
    """
    result = await schema.execute(
        query,
        variable_values=variables,
        context_value=context,
        operation_name=operation_name,
    )
    if result.errors:
        logger.warning(
            "Operation completed with errors",
            operation_name=operation_name,
            errors=[error.message for error in result.errors],
        )
    return result


def result_to_dict(result: ExecutionResult) -> dict[str, Any]:
    """Render an execution result in the GraphQL response shape."""
    response: dict[str, Any] = {"data": result.data}
    if result.errors:
        response["errors"] = [error.formatted for error in result.errors]
    return response


def create_graphql_router() -> GraphQLRouter[OperationContext, None]:
    """Create a GraphQL router for FastAPI."""

    async def get_context(request: Request, response: Response) -> OperationContext:
        """Build a fresh operation context from the inbound request."""
        return build_context(request.app.state.stores, request=request, response=response)

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
    )
