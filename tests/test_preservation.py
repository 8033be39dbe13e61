"""
Test Suite for Resolver Preservation

Tests that real resolvers keep working when mocks are installed with
preserve_resolvers=True, and how their results combine with mocks.
"""

import asyncio
import pytest
from dataclasses import dataclass
from datetime import date
from graphql import graphql, graphql_sync

from graphql_mocks import add_mocks_to_schema
from graphql_mocks.resolvers import MockError, merge_outcomes, preserving_resolver, preserving_subscriber
from graphql_mocks.resolvers.merge import structural_copy


@dataclass
class UserRecord:
    name: str


class UserObject:
    def __init__(self, name):
        self._name = name

    @property
    def name(self):
        return self._name


def run(schema, query):
    return graphql_sync(schema, query, root_value={}, context_value={})


class TestPreservedResolvers:
    """Test real resolvers running alongside mocks"""

    def test_real_object_completed_with_mocks(self, schema):
        schema.query_type.fields["user"].resolve = lambda parent, info: {"name": "Alice"}
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ user { name age } }")

        assert result.errors is None
        assert result.data["user"]["name"] == "Alice"
        assert -100 <= result.data["user"]["age"] <= 100

    def test_real_resolver_ignored_without_preservation(self, schema):
        schema.query_type.fields["hello"].resolve = lambda parent, info: "real"
        mocked = add_mocks_to_schema(schema)

        assert run(mocked, "{ hello }").data == {"hello": "Hello World"}

    def test_real_scalar_wins(self, schema):
        schema.query_type.fields["hello"].resolve = lambda parent, info: "real"
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        assert run(mocked, "{ hello }").data == {"hello": "real"}

    def test_real_none_falls_back_to_mock(self, schema):
        schema.query_type.fields["hello"].resolve = lambda parent, info: None
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        assert run(mocked, "{ hello }").data == {"hello": "Hello World"}

    def test_real_value_masks_missing_scalar_mock(self, schema):
        schema.query_type.fields["custom"].resolve = lambda parent, info: 42
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ custom }")

        assert result.errors is None
        assert result.data == {"custom": 42}

    def test_missing_scalar_mock_without_real_value(self, schema):
        schema.query_type.fields["custom"].resolve = lambda parent, info: None
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ custom }")

        assert result.data == {"custom": None}
        assert result.errors[0].message == 'No mock defined for type "Custom"'

    def test_real_resolver_always_called(self, schema):
        calls = []

        def hello(parent, info):
            calls.append(info.field_name)
            return None

        schema.query_type.fields["hello"].resolve = hello
        mocked = add_mocks_to_schema(schema, mocks={"String": lambda parent, info, **args: "mocked"},
                                     preserve_resolvers=True)

        assert run(mocked, "{ hello }").data == {"hello": "mocked"}
        assert calls == ["hello"]

    def test_dataclass_result(self, schema):
        schema.query_type.fields["user"].resolve = lambda parent, info: UserRecord(name="Dataclass")
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ user { name active } }")

        assert result.data["user"]["name"] == "Dataclass"
        assert isinstance(result.data["user"]["active"], bool)

    def test_property_result(self, schema):
        schema.query_type.fields["user"].resolve = lambda parent, info: UserObject("Property")
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ user { name } }")

        assert result.data == {"user": {"name": "Property"}}

    def test_async_real_resolver(self, schema):
        async def user(parent, info):
            return {"name": "Async Alice"}

        schema.query_type.fields["user"].resolve = user
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = asyncio.run(graphql(mocked, "{ user { name age } }", root_value={}))

        assert result.errors is None
        assert result.data["user"]["name"] == "Async Alice"
        assert isinstance(result.data["user"]["age"], int)

    def test_returned_error_is_kept(self, schema):
        schema.query_type.fields["user"].resolve = lambda parent, info: ValueError("db down")
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, "{ user { name } }")

        assert result.data == {"user": None}
        assert result.errors[0].message == "db down"

    def test_raising_resolver_closes_pending_mock(self):
        async def pending_mock():
            return {}

        coroutine = pending_mock()

        def failing(parent, info, **args):
            raise RuntimeError("boom")

        resolve = preserving_resolver(lambda parent, info, **args: coroutine, failing)

        with pytest.raises(RuntimeError, match="boom"):
            resolve(None, None)
        assert coroutine.cr_frame is None

    def test_real_resolver_receives_arguments(self, schema):
        schema.mutation_type.fields["rename"].resolve = lambda parent, info, name: {"name": name * 2}
        mocked = add_mocks_to_schema(schema, preserve_resolvers=True)

        result = run(mocked, 'mutation { rename(name: "ab") { name } }')

        assert result.data == {"rename": {"name": "abab"}}


class TestMergeOutcomes:
    """Test reconciling a mocked value with a resolved one"""

    def test_resolved_scalar_wins(self):
        assert merge_outcomes("mocked", "resolved") == "resolved"

    def test_none_keeps_mock(self):
        assert merge_outcomes("mocked", None) == "mocked"

    def test_falsy_resolved_value_kept(self):
        assert merge_outcomes(5, 0) == 0
        assert merge_outcomes("mocked", "") == ""

    def test_dates_not_merged(self):
        assert merge_outcomes(date(2000, 1, 1), date(2024, 2, 29)) == date(2024, 2, 29)

    def test_composite_merge(self):
        merged = merge_outcomes({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert merged == {"a": 1, "b": 3, "c": 4}

    def test_merge_does_not_mutate(self):
        mocked = {"a": 1}
        resolved = {"b": 2}
        merge_outcomes(mocked, resolved)

        assert mocked == {"a": 1}
        assert resolved == {"b": 2}

    def test_dataclass_merge(self):
        assert merge_outcomes({"age": 3}, UserRecord(name="Ada")) == {"name": "Ada", "age": 3}

    def test_declared_property_copied(self):
        merged = merge_outcomes({"age": 3}, UserObject("Ada"), field_names=("name", "age"))
        assert merged == {"name": "Ada", "age": 3}

    def test_list_not_merged(self):
        assert merge_outcomes([1, 2], [3]) == [3]

    def test_mock_error_with_resolved_value(self):
        assert merge_outcomes(MockError("no mock"), 42) == 42

    def test_resolved_exception_not_merged(self):
        error = ValueError("db down")
        assert merge_outcomes({"name": "mocked"}, error) is error

    def test_mock_error_without_resolved_value(self):
        with pytest.raises(MockError, match="no mock"):
            merge_outcomes(MockError("no mock"), None)

    def test_structural_copy_skips_private(self):
        assert structural_copy(UserObject("Ada")) == {}
        assert structural_copy(UserObject("Ada"), ["name"]) == {"name": "Ada"}


class TestPreservingSubscriber:
    """Test choosing between real and mocked event sources"""

    @staticmethod
    async def empty(parent, info, **args):
        return
        yield  # pragma: no cover

    def test_real_stream_preferred(self):
        async def real(parent, info, **args):
            yield "event"

        async def events():
            stream = await preserving_subscriber(self.empty, real)(None, None)
            return [event async for event in stream]

        assert asyncio.run(events()) == ["event"]

    def test_falls_back_to_mock_stream(self):
        async def real(parent, info, **args):
            return None

        async def events():
            stream = await preserving_subscriber(self.empty, real)(None, None)
            return [event async for event in stream]

        assert asyncio.run(events()) == []
