"""
V1 API router aggregator: wires the GraphQL surface and the probe together.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health
from app.graphql import create_graphql_router

api_router = APIRouter()

# GraphQL (all queries and mutations)
api_router.include_router(create_graphql_router())

# Health probe
api_router.include_router(health.router)
