"""
Test Suite for GraphQL Mocks

Provides tests for:
- Value generators (scalars, MockList)
- Field value synthesis and deep merging
- Resolver installation and preservation of real resolvers
- Configuration management
- HTTP API and result export
"""

__version__ = "1.0.0"
