"""
Resolver Installer

Walks a whole schema once and returns a copy in which every object field
resolves to mock data, every field can be subscribed to, and every
interface and union can tell which concrete type a mocked value is.
"""

from copy import deepcopy
from typing import Any, Callable, Mapping, Optional
import logging

import numpy as np
from graphql import (
    GraphQLField,
    GraphQLSchema,
    default_type_resolver,
    is_abstract_type,
    is_introspection_type,
    is_object_type,
)

from .synthesizer import FieldSynthesizer, then
from .generators.scalars import default_scalars
from .resolvers.merge import mock_subscriber, preserving_resolver, preserving_subscriber
from .resolvers.registry import MockRegistry
from .resolvers.variants import MockError, tag, untag

logger = logging.getLogger(__name__)

TYPENAME_KEY = "__typename"


def resolve_type_from_typename(value: Any, info: Any, abstract_type: Any) -> Any:
    """Read the concrete type name that mocking put on an abstract value"""
    if isinstance(value, Mapping):
        type_name = value.get(TYPENAME_KEY)
    else:
        type_name = getattr(value, TYPENAME_KEY, None)

    if isinstance(type_name, str):
        return type_name
    return default_type_resolver(value, info, abstract_type)


class ResolverInstaller:
    """
    Installs mock resolvers across a schema

    Args:
        schema: Schema to mock; it is copied, never modified
        registry: Validated user overrides
        preserve_resolvers: Keep real resolvers and merge their results
            with mocked ones instead of replacing them
        scalars: Default scalar generators for this installation
        rng: Random source shared by the installation
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        registry: MockRegistry,
        preserve_resolvers: bool = False,
        scalars: Optional[Mapping[str, Callable]] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.schema = schema
        self.registry = registry
        self.preserve_resolvers = preserve_resolvers
        self.rng = rng if rng is not None else np.random.default_rng()
        self.scalars = scalars if scalars is not None else default_scalars(self.rng)

    def install(self) -> GraphQLSchema:
        mocked_schema = deepcopy(self.schema)
        synthesizer = FieldSynthesizer(mocked_schema, self.registry, self.scalars, self.rng)

        root_type_names = {
            root_type.name
            for root_type in (
                mocked_schema.query_type,
                mocked_schema.mutation_type,
                mocked_schema.subscription_type,
            )
            if root_type is not None
        }

        num_fields = 0
        num_abstract = 0

        for type_name, named_type in mocked_schema.type_map.items():
            if is_introspection_type(named_type):
                continue

            if is_object_type(named_type):
                named_type.fields = {
                    field_name: self._mock_field(
                        synthesizer, field, type_name, field_name, type_name in root_type_names
                    )
                    for field_name, field in named_type.fields.items()
                }
                num_fields += len(named_type.fields)

            elif is_abstract_type(named_type):
                if self._patch_resolve_type(named_type):
                    num_abstract += 1

        logger.info(
            f"Installed mocks on {num_fields} fields and {num_abstract} abstract types "
            f"(preserve_resolvers={self.preserve_resolvers}, overrides={len(self.registry)})"
        )
        return mocked_schema

    def _mock_field(
        self,
        synthesizer: FieldSynthesizer,
        field: GraphQLField,
        type_name: str,
        field_name: str,
        is_root: bool
    ) -> GraphQLField:
        mock_resolver = synthesizer.resolver(field.type, type_name, field_name)

        # root fields have no parent resolver that could supply the override's data
        if is_root and type_name in self.registry:
            mock_resolver = self._root_resolver(mock_resolver, type_name, field_name)

        if self.preserve_resolvers and field.resolve is not None:
            resolve = preserving_resolver(mock_resolver, field.resolve)
            logger.debug(f"Preserving resolver of {type_name}.{field_name}")
        else:
            resolve = mock_resolver
            logger.debug(f"Mocked {type_name}.{field_name}")

        if self.preserve_resolvers and field.subscribe is not None:
            subscribe = preserving_subscriber(mock_subscriber, field.subscribe)
        else:
            subscribe = mock_subscriber

        kwargs = field.to_kwargs()
        kwargs.update(resolve=resolve, subscribe=subscribe)
        return GraphQLField(**kwargs)

    def _root_resolver(self, mock_resolver: Callable, type_name: str, field_name: str) -> Callable:
        """
        Seed the root value with the root override's data for this field

        Root overrides return plain data, an explicit variant, or an awaitable
        of either. A callable value is called like any other field function
        once it sits on the parent.
        """
        registry = self.registry

        def resolve(parent, info, **args):
            def seed(root_values):
                if isinstance(root_values, MockError):
                    return root_values

                seeded = parent
                if isinstance(root_values, Mapping) and field_name in root_values:
                    seeded = dict(parent) if isinstance(parent, Mapping) else {}
                    seeded[field_name] = root_values[field_name]
                return mock_resolver(seeded, info, **args)

            # async overrides seed the parent once they resolve
            return then(untag(tag(registry.invoke(type_name, parent, info, args))), seed)

        return resolve

    def _patch_resolve_type(self, abstract_type) -> bool:
        if self.preserve_resolvers and abstract_type.resolve_type is not None:
            logger.debug(f"Preserving resolve_type of {abstract_type.name}")
            return False

        abstract_type.resolve_type = resolve_type_from_typename
        logger.debug(f"Patched resolve_type of {abstract_type.name}")
        return True


def add_mocks_to_schema(
    schema: GraphQLSchema,
    mocks: Optional[Mapping[str, Callable]] = None,
    preserve_resolvers: bool = False,
    extended_scalars: bool = False,
    locale: str = "en_US"
) -> GraphQLSchema:
    """
    Return a copy of the schema that answers any query with mock data

    Args:
        schema: The schema to mock
        mocks: Overrides keyed by type name, each called as
            mock(parent, info, **args)
        preserve_resolvers: Keep existing resolvers and merge their results
            with mocked ones
        extended_scalars: Also mock DateTime, Date, Time, Email, URL, UUID
            and JSON scalars using Faker
        locale: Faker locale for extended scalars

    Returns:
        A new GraphQLSchema with mock resolvers installed

    Raises:
        ValueError: No schema given
        TypeError: Schema is not a GraphQLSchema, mocks is not a mapping,
            or an override is not callable
    """
    if schema is None:
        raise ValueError("Must provide schema to mock")
    if not isinstance(schema, GraphQLSchema):
        raise TypeError('Value at "schema" must be of type GraphQLSchema')

    registry = MockRegistry({} if mocks is None else mocks)

    rng = np.random.default_rng()
    scalars = default_scalars(rng, extended=extended_scalars, locale=locale)

    return ResolverInstaller(schema, registry, preserve_resolvers, scalars, rng).install()
