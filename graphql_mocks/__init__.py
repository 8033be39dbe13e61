"""
GraphQL Mocks Package

Mock data for any GraphQL schema: type-driven value synthesis, user
overrides, list cardinality control, and merging with real resolvers.
"""

__version__ = "1.0.0"

from .config import Config, ConfigLoader, ConfigValidator, build_mocks
from .generators import MockList
from .resolvers import MockError, Value, Sequence, Pending, Failure
from .installer import add_mocks_to_schema
from .server import MockServer, mock_server

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigValidator",
    "build_mocks",
    "MockList",
    "MockError",
    "Value",
    "Sequence",
    "Pending",
    "Failure",
    "add_mocks_to_schema",
    "MockServer",
    "mock_server",
]
