"""
Default Scalar Generators

Builtin value producers for the GraphQL scalar types:
- Int: integers in [-100, 100]
- Float: reals in [-100, 100)
- String: a fixed placeholder
- Boolean: fair coin flip
- ID: version-4 UUID shaped strings

An optional extended table backed by Faker covers common custom scalars
(DateTime, Date, Time, Email, URL, UUID, JSON).
"""

import uuid
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

import numpy as np
from faker import Faker
import logging

logger = logging.getLogger(__name__)

ScalarGenerator = Callable[[], Any]

PLACEHOLDER_STRING = "Hello World"
INT_RANGE = (-100, 100)
FLOAT_RANGE = (-100.0, 100.0)


class ScalarGenerators:
    """
    Value producers for the builtin GraphQL scalars

    All generators share one random source so a single installation draws
    from a single stream.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def int_value(self) -> int:
        low, high = INT_RANGE
        return int(self.rng.integers(low, high, endpoint=True))

    def float_value(self) -> float:
        low, high = FLOAT_RANGE
        return float(self.rng.uniform(low, high))

    def string_value(self) -> str:
        return PLACEHOLDER_STRING

    def boolean_value(self) -> bool:
        return bool(self.rng.random() < 0.5)

    def id_value(self) -> str:
        """Random UUID4-shaped string; not suitable for anything secret"""
        return str(uuid.UUID(bytes=self.rng.bytes(16), version=4))

    def table(self) -> Dict[str, ScalarGenerator]:
        return {
            "Int": self.int_value,
            "Float": self.float_value,
            "String": self.string_value,
            "Boolean": self.boolean_value,
            "ID": self.id_value,
        }


class ExtendedScalarGenerators:
    """
    Faker-backed producers for custom scalars that most schemas declare

    Values keep their native Python types (datetime, date, time) so that
    date-like results merge the same way real resolver output does.
    """

    def __init__(self, locale: str = "en_US"):
        self.faker = Faker(locale)

    def table(self) -> Dict[str, ScalarGenerator]:
        return {
            "DateTime": self.faker.date_time,
            "Date": self.faker.date_object,
            "Time": self.faker.time_object,
            "Email": self.faker.email,
            "URL": self.faker.url,
            "UUID": self.faker.uuid4,
            "JSON": dict,
        }


def default_scalars(
    rng: Optional[np.random.Generator] = None,
    extended: bool = False,
    locale: str = "en_US"
) -> Mapping[str, ScalarGenerator]:
    """
    Build the read-only default generator table for one installation

    Args:
        rng: Random source shared by the builtin generators
        extended: Also include the Faker-backed custom scalar generators
        locale: Faker locale for the extended generators

    Returns:
        Immutable mapping of scalar name to zero-argument generator
    """
    table: Dict[str, ScalarGenerator] = {}

    if extended:
        table.update(ExtendedScalarGenerators(locale).table())

    # builtins always win over same-named extended entries
    table.update(ScalarGenerators(rng).table())

    logger.debug(f"Default scalar table: {sorted(table)}")
    return MappingProxyType(table)
