"""
GraphQL package: the single query/mutation surface of the service.

The executable schema is built once at import time and is immutable
afterwards. Unexpected failures inside resolvers are masked; domain
errors (``app.core.exceptions.ResolutionError``) reach the client with
their ``extensions.code``.

Example query::

    query {
        menu {
            entrees { _id itemDescription itemPrice sides { itemDescription } }
        }
    }
"""

from __future__ import annotations

import logging

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors, QueryDepthLimiter
from strawberry.fastapi import GraphQLRouter

from app.core.config import settings
from app.core.exceptions import ResolutionError
from app.graphql.context import get_context
from app.graphql.mutations import Mutation
from app.graphql.queries import Query

logger = logging.getLogger(__name__)


def _should_mask(error: GraphQLError) -> bool:
    # validation-phase errors carry no original_error and stay visible
    original = error.original_error
    return original is not None and not isinstance(original, ResolutionError)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[
        QueryDepthLimiter(max_depth=settings.MAX_QUERY_DEPTH),
        MaskErrors(should_mask_error=_should_mask),
    ],
)

logger.info("GraphQL schema created (max query depth %d)", settings.MAX_QUERY_DEPTH)


def create_graphql_router() -> GraphQLRouter:
    """Create the GraphQL router for FastAPI (no in-browser IDE)."""
    return GraphQLRouter(
        schema,
        path=settings.GRAPHQL_PATH,
        context_getter=get_context,
        graphql_ide=None,
    )


__all__ = ["schema", "create_graphql_router"]
