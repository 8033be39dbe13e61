"""
Generators Module

Value producers the field synthesizer draws on:
- Scalars: default generators for Int, Float, String, Boolean and ID,
  plus optional Faker-backed custom scalars
- MockList: list length and per-item generation
"""

from .scalars import ScalarGenerators, ExtendedScalarGenerators, default_scalars
from .mock_list import MockList

__all__ = [
    # Scalar generators
    "ScalarGenerators",
    "ExtendedScalarGenerators",
    "default_scalars",

    # Lists
    "MockList",
]
