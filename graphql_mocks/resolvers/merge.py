"""
Merge Outcome Combinator

Used when real resolvers are preserved: the mock resolver and the real
resolver both run, and their outcomes are reconciled field by field.
"""

from asyncio import gather, iscoroutine
from dataclasses import fields as dataclass_fields, is_dataclass
from datetime import date, time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping
import logging

from graphql import get_named_type, is_interface_type, is_object_type
from graphql.pyutils import is_awaitable

from .variants import MockError

logger = logging.getLogger(__name__)


async def _as_awaitable(value: Any) -> Any:
    if is_awaitable(value):
        return await value
    return value


def _is_date_like(value: Any) -> bool:
    return isinstance(value, (date, time))


def _is_composite(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (type, Enum, str, bytes)) or callable(value):
        return False
    return is_dataclass(value) or hasattr(value, "__dict__")


def structural_copy(value: Any, field_names: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Copy a composite value into a plain dict

    Mappings are copied key by key, dataclasses field by field, other
    objects by their public instance attributes. Declared GraphQL field
    names that are only reachable as attributes (properties, for example)
    are copied as well.
    """
    if isinstance(value, Mapping):
        return dict(value)

    if is_dataclass(value):
        record = {f.name: getattr(value, f.name) for f in dataclass_fields(value)}
    else:
        record = {key: item for key, item in vars(value).items() if not key.startswith("_")}

    for name in field_names:
        if name not in record and hasattr(value, name):
            record[name] = getattr(value, name)
    return record


def merge_outcomes(mocked: Any, resolved: Any, field_names: Iterable[str] = ()) -> Any:
    """
    Reconcile a mocked value with the real resolver's value

    Args:
        mocked: Outcome of the mock resolver
        resolved: Outcome of the real resolver
        field_names: Declared fields of the return type, if it has any

    Returns:
        The real value where it exists, completed with mocked keys for
        composite values

    Raises:
        MockError: The value could not be mocked and the real resolver
            returned None
    """
    if isinstance(mocked, MockError):
        if resolved is None:
            raise mocked
        logger.debug(f"Mock failed ({mocked}), using resolved value")
        return resolved

    # a returned exception is the real resolver reporting a field error
    if isinstance(resolved, Exception):
        return resolved

    if _is_date_like(mocked) and _is_date_like(resolved):
        return resolved if resolved is not None else mocked

    if _is_composite(mocked) and _is_composite(resolved):
        merged = structural_copy(resolved, field_names)
        for key, value in structural_copy(mocked).items():
            merged.setdefault(key, value)
        return merged

    return resolved if resolved is not None else mocked


def _declared_fields(info: Any) -> Iterable[str]:
    return_type = getattr(info, "return_type", None)
    if return_type is None:
        return ()
    named_type = get_named_type(return_type)
    if is_object_type(named_type) or is_interface_type(named_type):
        return tuple(named_type.fields)
    return ()


def preserving_resolver(mock_resolver: Callable, real_resolver: Callable) -> Callable:
    """
    Combine a mock resolver with a real one

    Both resolvers are always called. When either returns an awaitable the
    two are awaited together before merging; otherwise the merge happens
    synchronously so graphql_sync keeps working.
    """

    def resolve(parent, info, **args):
        mocked = mock_resolver(parent, info, **args)
        try:
            resolved = real_resolver(parent, info, **args)
        except Exception:
            if iscoroutine(mocked):
                mocked.close()
            raise
        field_names = _declared_fields(info)

        if is_awaitable(mocked) or is_awaitable(resolved):
            async def join():
                mocked_value, resolved_value = await gather(
                    _as_awaitable(mocked), _as_awaitable(resolved)
                )
                return merge_outcomes(mocked_value, resolved_value, field_names)

            return join()

        return merge_outcomes(mocked, resolved, field_names)

    return resolve


async def mock_subscriber(parent, info, **args):
    """An event source that ends before producing anything"""
    return
    yield  # pragma: no cover


def preserving_subscriber(mock_subscribe: Callable, real_subscribe: Callable) -> Callable:
    """Prefer the real event source, falling back to the mock one"""

    async def subscribe(parent, info, **args):
        mock_stream, real_stream = await gather(
            _as_awaitable(mock_subscribe(parent, info, **args)),
            _as_awaitable(real_subscribe(parent, info, **args)),
        )
        return real_stream or mock_stream

    return subscribe
