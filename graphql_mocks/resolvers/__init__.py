"""
Resolvers Module

Pieces the installer wires into a schema:
- Registry of user overrides
- Result variants returned by overrides
- Merging of mocked and real resolver outcomes
"""

from .variants import MockError, Value, Sequence, Pending, Failure, tag, untag
from .registry import MockRegistry
from .merge import merge_outcomes, preserving_resolver, preserving_subscriber, mock_subscriber

__all__ = [
    "MockError",
    "Value",
    "Sequence",
    "Pending",
    "Failure",
    "tag",
    "untag",
    "MockRegistry",
    "merge_outcomes",
    "preserving_resolver",
    "preserving_subscriber",
    "mock_subscriber",
]
