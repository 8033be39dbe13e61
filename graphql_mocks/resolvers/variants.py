"""
Mock Result Variants

Everything an override can hand back is one of four variants:
- Value: a plain value used as is
- Sequence: a MockList to expand against a list type
- Pending: an awaitable resolved before use
- Failure: a reason the value could not be mocked

Overrides may return a variant directly; plain returns are classified
once by tag().
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Union

from graphql.pyutils import is_awaitable

from ..generators.mock_list import MockList


class MockError(Exception):
    """
    Returned, not raised, when no value can be synthesized for a type

    graphql-core reports a returned exception as a field error, and the
    preserving resolver can swap it for a real value first.
    """


@dataclass(frozen=True)
class Value:
    value: Any


@dataclass(frozen=True)
class Sequence:
    mock_list: MockList


@dataclass(frozen=True)
class Pending:
    awaitable: Awaitable


@dataclass(frozen=True)
class Failure:
    reason: str

    def error(self) -> MockError:
        return MockError(self.reason)


MockResult = Union[Value, Sequence, Pending, Failure]


def tag(result: Any) -> MockResult:
    """Classify an override's return value"""
    if isinstance(result, (Value, Sequence, Pending, Failure)):
        return result
    if isinstance(result, MockList):
        return Sequence(result)
    if isinstance(result, MockError):
        return Failure(str(result))
    if is_awaitable(result):
        return Pending(result)
    return Value(result)


def untag(variant: MockResult) -> Any:
    """Turn a variant back into what graphql-core expects from a resolver"""
    if isinstance(variant, Value):
        return variant.value
    if isinstance(variant, Pending):
        return variant.awaitable
    if isinstance(variant, Failure):
        return variant.error()
    return variant.mock_list
