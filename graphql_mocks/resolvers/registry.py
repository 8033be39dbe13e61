# graphql_mocks/resolvers/registry.py

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping


class MockRegistry(Mapping):
    """
    Read-only snapshot of user overrides keyed by type name

    Every override is called like a graphql-core resolver:
    override(parent, info, **args).
    """

    def __init__(self, mocks: Mapping[str, Callable]):
        if not isinstance(mocks, Mapping):
            raise TypeError("mocks must be a mapping of type name to callable")

        for type_name, mock in mocks.items():
            if not callable(mock):
                raise TypeError(f"mocks[{type_name!r}] must be callable")

        self._mocks = MappingProxyType(dict(mocks))

    def __getitem__(self, type_name: str) -> Callable:
        return self._mocks[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mocks)

    def __len__(self) -> int:
        return len(self._mocks)

    def invoke(self, type_name: str, parent: Any, info: Any, args: Dict[str, Any]) -> Any:
        return self._mocks[type_name](parent, info, **args)
