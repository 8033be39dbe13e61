"""
Test Suite for Utilities and the CLI
"""

import json
import logging
import pytest
import pandas as pd

from cli import CLI, read_query
from graphql_mocks.utils import FileHandler, read_schema, setup_logging, write_results
from tests.conftest import SDL

RESULTS = [
    {"user": {"name": "Ada", "age": 36}, "hello": "hi"},
    {"user": {"name": "Grace", "age": 45}, "hello": "hey"},
]


class TestFileHandler:
    """Test file input and output"""

    def test_read_schema(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text(SDL)

        assert read_schema(path).query_type.name == "Query"

    def test_read_schema_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_schema(tmp_path / "missing.graphql")

    def test_read_variables_inline(self):
        assert FileHandler.read_variables('{"first": 3}') == {"first": 3}

    def test_read_variables_file(self, tmp_path):
        path = tmp_path / "vars.json"
        path.write_text(json.dumps({"name": "x"}))

        assert FileHandler.read_variables(str(path)) == {"name": "x"}

    def test_read_variables_empty(self):
        assert FileHandler.read_variables(None) == {}

    def test_read_variables_not_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            FileHandler.read_variables("[1, 2]")

    def test_results_flattened(self):
        data = FileHandler.results_to_frame(RESULTS)

        assert set(data.columns) == {"user.name", "user.age", "hello"}
        assert len(data) == 2

    def test_write_csv(self, tmp_path):
        path = tmp_path / "out" / "results.csv"
        write_results(RESULTS, path)

        data = pd.read_csv(path)
        assert list(data["user.name"]) == ["Ada", "Grace"]

    def test_write_json(self, tmp_path):
        path = tmp_path / "results.json"
        write_results(RESULTS, path)

        records = json.loads(path.read_text())
        assert records[1]["user.age"] == 45

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file format"):
            write_results(RESULTS, tmp_path / "results.xml")


class TestLogging:
    """Test logging setup"""

    def test_level_by_name(self):
        setup_logging(level="debug")
        assert logging.getLogger("graphql_mocks").level == logging.DEBUG

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "mocks.log"
        setup_logging(level=logging.INFO, log_file=str(log_file))

        logging.getLogger("graphql_mocks.test").info("written")
        for handler in logging.getLogger("graphql_mocks").handlers:
            handler.flush()

        assert "written" in log_file.read_text()


class TestCLI:
    """Test CLI commands end to end"""

    @pytest.fixture
    def schema_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text(SDL)
        return path

    def test_read_query_inline(self):
        assert read_query("{ hello }") == "{ hello }"

    def test_read_query_file(self, tmp_path):
        path = tmp_path / "query.graphql"
        path.write_text("{ users { id } }")

        assert read_query(str(path)) == "{ users { id } }"

    def test_query(self, schema_file, capsys):
        CLI().run(["query", str(schema_file), "{ hello }"])

        assert "Hello World" in capsys.readouterr().out

    def test_query_with_errors_exits(self, schema_file):
        with pytest.raises(SystemExit) as excinfo:
            CLI().run(["query", str(schema_file), "{ custom }"])

        assert excinfo.value.code == 1

    def test_sample(self, schema_file, tmp_path):
        output = tmp_path / "users.csv"
        CLI().run(["sample", str(schema_file), "{ user { name age } }", str(output), "--count", "5"])

        data = pd.read_csv(output)
        assert len(data) == 5
        assert set(data["user.name"]) == {"Hello World"}

    def test_config_create(self, tmp_path):
        output = tmp_path / "config.yaml"
        CLI().run(["config", "create", str(output)])

        assert output.exists()
        assert "mocking" in output.read_text()
