"""
FastAPI HTTP API for GraphQL Mocks

Provides endpoints for:
- Running GraphQL operations against a mocked schema
- Health checks
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from graphql import GraphQLError, GraphQLSchema, parse
from datetime import datetime
import logging
import os

# Import our modules
from graphql_mocks import __version__
from graphql_mocks.config import Config, ConfigLoader, build_mocks, get_default_config
from graphql_mocks.server import mock_server
from graphql_mocks.utils import read_schema, setup_logging

logger = logging.getLogger(__name__)


# Pydantic models
class GraphQLRequest(BaseModel):
    """GraphQL request body"""
    query: str = Field(..., description="GraphQL document")
    variables: Optional[Dict[str, Any]] = Field(None, description="Variable values")
    operation_name: Optional[str] = Field(
        None, alias="operationName", description="Operation to run")

    model_config = {"populate_by_name": True}


def create_app(schema: GraphQLSchema, config: Optional[Config] = None) -> FastAPI:
    """
    Build the API for one schema

    Args:
        schema: Schema to mock
        config: Configuration; defaults are used when omitted

    Returns:
        FastAPI application
    """
    config = config or get_default_config()

    server = mock_server(
        schema,
        mocks=build_mocks(config),
        preserve_resolvers=config.mocking.preserve_resolvers,
        extended_scalars=config.mocking.extended_scalars,
    )

    app = FastAPI(
        title="GraphQL Mocks API",
        description="Answer any GraphQL operation with mock data",
        version=__version__
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["General"])
    async def root():
        """API root endpoint"""
        return {
            "name": "GraphQL Mocks API",
            "version": __version__,
            "status": "running",
            "endpoints": {
                "graphql": "/graphql",
                "health": "/health",
            }
        }

    @app.get("/health", tags=["General"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "types": len(server.schema.type_map),
        }

    @app.post("/graphql", tags=["GraphQL"])
    async def run_operation(request: GraphQLRequest):
        """
        Run a GraphQL operation

        Syntax errors are rejected with 400; validation and field errors
        are reported in the response body
        """
        try:
            parse(request.query)
        except GraphQLError as e:
            raise HTTPException(status_code=400, detail=e.message)

        result = await server.query_async(request.query, request.variables, request.operation_name)

        response: Dict[str, Any] = {"data": result.data}
        if result.errors:
            logger.info(f"Operation finished with {len(result.errors)} errors")
            response["errors"] = [error.formatted for error in result.errors]
        return response

    return app


# Run with: GRAPHQL_MOCKS_SCHEMA=schema.graphql python api.py
if __name__ == "__main__":
    import uvicorn

    config_path = os.getenv("GRAPHQL_MOCKS_CONFIG")
    config = ConfigLoader().load_from_file(config_path) if config_path else get_default_config()
    setup_logging(level=config.logging.level, log_file=config.logging.log_file)

    app = create_app(read_schema(os.environ["GRAPHQL_MOCKS_SCHEMA"]), config)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
