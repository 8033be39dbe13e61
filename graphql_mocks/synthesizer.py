"""
Field Value Synthesizer

Decides what value a field produces, from its output type and from
whatever the parent already holds. Order of precedence:

1. the parent already has the field: use it (calling it if callable),
   merged with the override for the field's type if there is one
2. list types: two items, each synthesized from the item type
3. an override for the named type (non-abstract types)
4. object types: an empty dict, their own fields resolve separately
5. interfaces and unions: the override's pick, or a random implementation
6. enums: a random declared value
7. scalars: the default generator, or a MockError when there is none
"""

from typing import Any, Callable, Dict, Mapping, Optional
import logging

import numpy as np
from graphql import (
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLSchema,
    get_named_type,
    get_nullable_type,
    is_abstract_type,
    is_enum_type,
    is_list_type,
    is_object_type,
)
from graphql.pyutils import is_awaitable

from .resolvers.registry import MockRegistry
from .resolvers.variants import MockError, Pending, Sequence, tag, untag

logger = logging.getLogger(__name__)

_MISSING = object()


def then(value: Any, callback: Callable[[Any], Any]) -> Any:
    """Apply callback now, or after awaiting value if it is awaitable"""
    if is_awaitable(value):
        async def await_value():
            result = callback(await value)
            if is_awaitable(result):
                result = await result
            return result

        return await_value()
    return callback(value)


def merge_mocks(generic_mock: Callable[[], Any], custom_mock: Any) -> Any:
    """
    Complete a custom value with defaults from a generic mock

    Lists merge element by element, awaitables are awaited first, and
    mappings are laid over a fresh default so explicit keys win. Anything
    else is returned unchanged.

    Args:
        generic_mock: Zero-argument callable producing the default value
        custom_mock: The value supplied by the parent or a field function

    Returns:
        The merged value (an awaitable if anything had to be awaited)
    """
    if isinstance(custom_mock, list):
        return [merge_mocks(generic_mock, item) for item in custom_mock]

    if is_awaitable(custom_mock):
        return then(custom_mock, lambda resolved: merge_mocks(generic_mock, resolved))

    if isinstance(custom_mock, Mapping):
        def overlay(default):
            if isinstance(default, Mapping):
                return {**default, **custom_mock}
            return dict(custom_mock)

        return then(generic_mock(), overlay)

    return custom_mock


def _lookup(parent: Any, field_name: str) -> Any:
    if parent is None:
        return _MISSING
    if isinstance(parent, Mapping):
        return parent.get(field_name, _MISSING)
    return getattr(parent, field_name, _MISSING)


class FieldSynthesizer:
    """
    Produces mock values for any output type of one schema

    Args:
        schema: Schema whose types are being mocked (used for
            implementation lookups of interfaces and unions)
        registry: User overrides
        scalars: Default scalar generators for this installation
        rng: Random source for list lengths and random picks
    """

    DEFAULT_LIST_LENGTH = 2

    def __init__(
        self,
        schema: GraphQLSchema,
        registry: MockRegistry,
        scalars: Mapping[str, Callable[[], Any]],
        rng: Optional[np.random.Generator] = None
    ):
        self.schema = schema
        self.registry = registry
        self.scalars = scalars
        self.rng = rng if rng is not None else np.random.default_rng()

    def resolver(
        self,
        type_: GraphQLOutputType,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None
    ) -> Callable:
        """Build the resolver for one field (or for a bare type without a field name)"""

        def resolve(parent, info, **args):
            return self.synthesize(type_, parent, info, args, field_name)

        resolve.__name__ = f"mock_{type_name}_{field_name}" if type_name else "mock_resolver"
        return resolve

    def synthesize(
        self,
        type_: GraphQLOutputType,
        parent: Any,
        info: Any,
        args: Dict[str, Any],
        field_name: Optional[str] = None
    ) -> Any:
        # nullability does not matter for mocking
        field_type = get_nullable_type(type_)
        named_type = get_named_type(field_type)

        if field_name is not None:
            existing = _lookup(parent, field_name)
            if existing is not _MISSING:
                return self._from_parent(existing, field_type, parent, info, args)

        if is_list_type(field_type):
            return [
                self.synthesize(field_type.of_type, parent, info, args)
                for _ in range(self.DEFAULT_LIST_LENGTH)
            ]

        if named_type.name in self.registry and not is_abstract_type(field_type):
            result = self.registry.invoke(named_type.name, parent, info, args)
            return self.complete(field_type, result, parent, info, args)

        if is_object_type(field_type):
            return {}

        if is_abstract_type(field_type):
            return self._mock_abstract(field_type, parent, info, args)

        if is_enum_type(field_type):
            name, value = self._choice(list(field_type.values.items()))
            return name if value.value is None else value.value

        generator = self.scalars.get(field_type.name)
        if generator is None:
            # returned rather than raised so a preserved resolver can still supply a value
            return MockError(f'No mock defined for type "{field_type.name}"')
        return generator()

    def complete(
        self,
        type_: GraphQLOutputType,
        result: Any,
        parent: Any,
        info: Any,
        args: Dict[str, Any]
    ) -> Any:
        """Turn whatever an override or field function returned into a field value"""
        variant = tag(result)

        if isinstance(variant, Sequence):
            list_type = get_nullable_type(type_)
            if not is_list_type(list_type):
                return MockError(f'MockList returned for non-list type "{type_}"')
            return variant.mock_list.mock(parent, info, args, list_type, self)

        if isinstance(variant, Pending):
            return then(variant.awaitable, lambda resolved: self.complete(type_, resolved, parent, info, args))

        return untag(variant)

    def _from_parent(self, existing, field_type, parent, info, args):
        result = existing
        if callable(result):
            result = result(info, **args)
        result = self.complete(field_type, result, parent, info, args)

        # merge with the type's override so a partial value still gets defaults
        named_type = get_named_type(field_type)
        if named_type.name in self.registry:
            result = merge_mocks(lambda: self._invoke_override(named_type.name, parent, info, args), result)
        return result

    def _invoke_override(self, type_name, parent, info, args):
        return untag(tag(self.registry.invoke(type_name, parent, info, args)))

    def _mock_abstract(self, abstract_type, parent, info, args):
        if abstract_type.name in self.registry:
            result = self._invoke_override(abstract_type.name, parent, info, args)
            return then(result, lambda value: self._complete_abstract(abstract_type, value, parent, info, args))

        implementations = self.schema.get_possible_types(abstract_type)
        if not implementations:
            return MockError(f'No implementations found for "{abstract_type.name}"')

        implementation = self._choice(implementations)
        return self._with_typename(implementation, {}, parent, info, args)

    def _complete_abstract(self, abstract_type, value, parent, info, args):
        if isinstance(value, MockError):
            return value
        if not isinstance(value, Mapping) or not value.get("__typename"):
            return MockError(f'Please return a __typename in "{abstract_type.name}"')

        implementation = self.schema.get_type(value["__typename"])
        if not isinstance(implementation, GraphQLObjectType):
            return MockError(
                f'__typename "{value["__typename"]}" returned for "{abstract_type.name}" '
                f'is not an object type'
            )
        if not self.schema.is_sub_type(abstract_type, implementation):
            return MockError(
                f'__typename "{implementation.name}" returned for "{abstract_type.name}" '
                f'is not a possible type'
            )
        return self._with_typename(implementation, value, parent, info, args)

    def _with_typename(self, implementation, override_value, parent, info, args):
        def combine(concrete):
            if isinstance(concrete, MockError):
                return concrete
            concrete = concrete if isinstance(concrete, Mapping) else {}
            return {**override_value, **concrete, "__typename": implementation.name}

        return then(self.synthesize(implementation, parent, info, args), combine)

    def _choice(self, items):
        return items[int(self.rng.integers(len(items)))]
