"""
List Cardinality

MockList is returned from an override (or from a field value on the
parent) to control how many items a list field gets and, optionally,
how each item is produced.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from graphql import GraphQLList


class MockList:
    """
    Describes the length of a mocked list and how to fill it

    Example:
        mocks = {
            "User": lambda *_, **__: {
                "friends": lambda info, **args: MockList((2, 6)),
            },
        }
    """

    def __init__(
        self,
        length: Union[int, Sequence[int]],
        item_generator: Optional[Callable] = None
    ):
        """
        Args:
            length: Exact number of items, or an inclusive (low, high) range
            item_generator: Called as item_generator(parent, info, **args)
                for every item. It may return another MockList for nested
                lists. Without it each item is synthesized from the item type.
        """
        self._length = self._validate_length(length)

        if item_generator is not None and not callable(item_generator):
            raise TypeError("Second argument to MockList must be a function or None")
        self._item_generator = item_generator

    @property
    def length(self) -> Union[int, Tuple[int, int]]:
        return self._length

    @property
    def item_generator(self) -> Optional[Callable]:
        return self._item_generator

    @staticmethod
    def _validate_length(length) -> Union[int, Tuple[int, int]]:
        if isinstance(length, bool):
            raise ValueError(f"MockList length must be an int or a (low, high) pair, got {length!r}")

        if isinstance(length, (int, np.integer)):
            if length < 0:
                raise ValueError(f"MockList length must be non-negative, got {length}")
            return int(length)

        if isinstance(length, (list, tuple)) and len(length) == 2:
            low, high = length
            if all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in (low, high)):
                if 0 <= low <= high:
                    return int(low), int(high)

        raise ValueError(
            f"MockList length must be a non-negative int or an inclusive "
            f"(low, high) range with 0 <= low <= high, got {length!r}"
        )

    def draw_length(self, rng: np.random.Generator) -> int:
        if isinstance(self.length, tuple):
            low, high = self.length
            return int(rng.integers(low, high, endpoint=True))
        return self.length

    def mock(
        self,
        parent: Any,
        info: Any,
        args: Dict[str, Any],
        list_type: GraphQLList,
        synthesizer
    ) -> List[Any]:
        """
        Expand into a concrete list for the given list type

        Args:
            parent: Parent value of the field being resolved
            info: graphql-core resolve info
            args: Field arguments
            list_type: The field's list type with non-null stripped
            synthesizer: FieldSynthesizer used for items without a generator

        Returns:
            List of item values (items may be awaitables)
        """
        item_type = list_type.of_type
        items = []

        for _ in range(self.draw_length(synthesizer.rng)):
            if self.item_generator is None:
                items.append(synthesizer.synthesize(item_type, parent, info, args))
            else:
                result = self.item_generator(parent, info, **args)
                items.append(synthesizer.complete(item_type, result, parent, info, args))

        return items

    def __repr__(self) -> str:
        return f"MockList({self.length!r})"
