"""Tests for the openapi-tools command line."""

import json
import logging

import pytest
import yaml

from src.cli.main import _split_list, build_parser, main


def ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


def ok_response(schema_name):
    return {
        "200": {"description": "ok", "content": {"application/json": {"schema": ref(schema_name)}}}
    }


DOCUMENT = {
    "openapi": "3.1.0",
    "info": {"title": "Test API", "version": "1.0.0"},
    "paths": {
        "/v1/models": {"get": {"responses": ok_response("ModelList")}},
        "/v1/users": {"get": {"responses": ok_response("User")}},
        "/admin/stats": {"get": {"responses": ok_response("Stats")}},
    },
    "components": {
        "schemas": {
            "ModelList": {"type": "object", "properties": {"data": {"type": "array", "items": ref("Model")}}},
            "Model": {"type": "object", "properties": {"id": {"type": "string"}}, "required": ["id"]},
            "User": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Stats": {"type": "object", "additionalProperties": {"type": "integer"}},
        }
    },
}


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; put its handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "openapi.yaml"
    path.write_text(yaml.safe_dump(DOCUMENT, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def invalid_spec_file(tmp_path):
    """A document without an info section."""
    doc = {key: value for key, value in DOCUMENT.items() if key != "info"}
    path = tmp_path / "invalid.yaml"
    path.write_text(yaml.safe_dump(doc, sort_keys=False), encoding="utf-8")
    return path


class TestParser:
    def test_split_list(self):
        assert _split_list("/v1/chat/completions, /v1/models,") == ["/v1/chat/completions", "/v1/models"]

    def test_filter_requires_a_selector(self, spec_file, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["filter", "--input", str(spec_file), "--output", str(tmp_path / "o.yaml")])

        assert exc_info.value.code == 2

    def test_filter_selectors_are_exclusive(self, spec_file, tmp_path):
        argv = ["filter", "--input", str(spec_file), "--output", "o.yaml", "--filter", "/a", "--prefix", "/b"]

        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)

    def test_no_command_prints_help(self, capsys):
        main([])

        assert "usage: openapi-tools" in capsys.readouterr().out


class TestFilterCommand:
    """Test cases for the filter subcommand."""

    def test_filter_writes_yaml(self, spec_file, tmp_path, capsys):
        output = tmp_path / "out" / "filtered.yaml"

        main(["filter", "--input", str(spec_file), "--output", str(output), "--filter", "/v1/models"])

        filtered = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert list(filtered["paths"]) == ["/v1/models"]
        assert set(filtered["components"]["schemas"]) == {"ModelList", "Model"}
        assert "Filtered OpenAPI spec written to" in capsys.readouterr().out

    def test_filter_by_prefix_writes_json(self, spec_file, tmp_path):
        output = tmp_path / "filtered.json"

        main(["filter", "--input", str(spec_file), "--output", str(output), "--prefix", "/v1"])

        filtered = json.loads(output.read_text(encoding="utf-8"))
        assert list(filtered["paths"]) == ["/v1/models", "/v1/users"]
        assert set(filtered["components"]["schemas"]) == {"ModelList", "Model", "User"}

    def test_unmatched_filter_writes_original(self, spec_file, tmp_path, capsys):
        output = tmp_path / "filtered.yaml"

        main(["filter", "--input", str(spec_file), "--output", str(output), "--filter", "/nope"])

        assert yaml.safe_load(output.read_text(encoding="utf-8")) == DOCUMENT
        assert "Path '/nope' not found" in capsys.readouterr().err

    def test_invalid_document_exits_with_1(self, invalid_spec_file, tmp_path, capsys):
        output = tmp_path / "filtered.yaml"

        with pytest.raises(SystemExit) as exc_info:
            main(["filter", "--input", str(invalid_spec_file), "--output", str(output), "--filter", "/v1/models"])

        assert exc_info.value.code == 1
        assert not output.exists()
        assert "Missing required 'info' section" in capsys.readouterr().err

    def test_skip_validation(self, invalid_spec_file, tmp_path):
        output = tmp_path / "filtered.yaml"

        main(
            [
                "filter",
                "--input",
                str(invalid_spec_file),
                "--output",
                str(output),
                "--filter",
                "/v1/users",
                "--skip-validation",
            ]
        )

        assert list(yaml.safe_load(output.read_text(encoding="utf-8"))["paths"]) == ["/v1/users"]

    def test_missing_input_exits_with_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["filter", "--input", str(tmp_path / "missing.yaml"), "--output", "o.yaml", "--filter", "/a"])

        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err


class TestGenerateCommands:
    """Test cases for generate-zod and generate-python-dict."""

    def test_generate_zod(self, spec_file, tmp_path, capsys):
        output = tmp_path / "schemas.ts"

        main(["generate-zod", "--input", str(spec_file), "--output", str(output)])

        source = output.read_text(encoding="utf-8")
        assert 'import { z } from "zod";' in source
        assert "export const modelSchema = z.object({ \"id\": z.string() });" in source
        assert "export const statsSchema = z.record(z.string(), z.number().int());" in source
        assert "Generated zod definitions written to" in capsys.readouterr().out

    def test_generate_python_dict_with_prefix(self, spec_file, tmp_path):
        output = tmp_path / "models.py"

        main(["generate-python-dict", "--input", str(spec_file), "--output", str(output), "--prefix", "/v1/models"])

        source = output.read_text(encoding="utf-8")
        compile(source, str(output), "exec")
        assert "class Model(TypedDict):" in source
        assert "class ModelList(TypedDict):" in source
        assert "User" not in source

    def test_no_matching_schemas_writes_nothing(self, spec_file, tmp_path, capsys):
        output = tmp_path / "schemas.ts"

        main(["generate-zod", "--input", str(spec_file), "--output", str(output), "--prefix", "/v9"])

        assert not output.exists()
        assert "No schemas matched" in capsys.readouterr().err

    def test_schema_suffix_from_config(self, spec_file, tmp_path, monkeypatch):
        monkeypatch.setenv("ZOD_SCHEMA_SUFFIX", "Validator")
        output = tmp_path / "schemas.ts"

        main(["generate-zod", "--input", str(spec_file), "--output", str(output), "--prefix", "/v1/users"])

        source = output.read_text(encoding="utf-8")
        assert "export const userValidator = " in source
        assert "export type User = z.infer<typeof userValidator>;" in source
