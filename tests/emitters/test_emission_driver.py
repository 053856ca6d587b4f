"""Tests for the Emission Driver."""

import logging

import pytest

from src.emitters.emission_driver import EmissionDriver
from src.emitters.typed_dict_renderer import TypedDictRenderer
from src.emitters.zod_renderer import ZodRenderer
from src.type_compiler.typed_dict_compiler import TypedDictCompiler
from src.type_compiler.zod_compiler import ZodCompiler


def ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


def build_document():
    return {
        "openapi": "3.1.0",
        "info": {"title": "Test API", "version": "1.0.0"},
        "paths": {
            "/v1/models": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "ok",
                            "content": {"application/json": {"schema": ref("ModelList")}},
                        }
                    }
                }
            },
            "/v1/users": {
                "get": {
                    "responses": {
                        "200": {"description": "ok", "content": {"application/json": {"schema": ref("User")}}}
                    }
                }
            },
        },
        "components": {
            "schemas": {
                "ModelList": {
                    "type": "object",
                    "properties": {"data": {"type": "array", "items": ref("Model")}},
                    "required": ["data"],
                },
                "Model": {"type": "object", "properties": {"id": {"type": "string"}}, "required": ["id"]},
                "User": {"type": "object", "properties": {"name": {"type": "string"}}},
            }
        },
    }


class TestForTarget:
    def test_known_targets(self):
        zod = EmissionDriver.for_target("zod", schema_suffix="Validator")
        typed_dict = EmissionDriver.for_target("typed-dict")

        assert isinstance(zod.compiler, ZodCompiler)
        assert isinstance(zod.renderer, ZodRenderer)
        assert zod.compiler.schema_suffix == "Validator"
        assert isinstance(typed_dict.compiler, TypedDictCompiler)
        assert isinstance(typed_dict.renderer, TypedDictRenderer)

    def test_unknown_target(self):
        with pytest.raises(ValueError, match="Unknown target"):
            EmissionDriver.for_target("protobuf")


class TestBuildDefinitions:
    """Test cases for EmissionDriver.build_definitions."""

    def test_dependencies_come_first(self):
        schemas = build_document()["components"]["schemas"]

        definitions = EmissionDriver.for_target("zod").build_definitions(schemas)

        assert [definition.name for definition in definitions] == ["Model", "ModelList", "User"]

    def test_auxiliary_definitions_precede_owner(self):
        schemas = {"Order": {"type": "object", "properties": {"item": {"type": "object", "properties": {}}}}}

        definitions = EmissionDriver.for_target("typed-dict").build_definitions(schemas)

        assert [(d.name, d.synthesized) for d in definitions] == [("OrderItem", True), ("Order", False)]
        assert all(d.expression.auxiliary == () for d in definitions)

    def test_synthesized_names_avoid_schema_names(self):
        schemas = {
            "Order": {"type": "object", "properties": {"item": {"type": "object", "properties": {}}}},
            "OrderItem": {"type": "string"},
        }

        definitions = EmissionDriver.for_target("typed-dict").build_definitions(schemas)

        assert [d.name for d in definitions] == ["OrderItem2", "Order", "OrderItem"]

    def test_synthesized_names_unique_across_schemas(self, caplog):
        """Test a name synthesized for one schema is reserved for the next."""
        inline = {"type": "object", "properties": {"v": {"type": "string"}}}
        schemas = {
            "A": {"type": "object", "properties": {"b_c": inline}},
            "AB": {"type": "object", "properties": {"c": inline}},
        }

        with caplog.at_level(logging.WARNING):
            definitions = EmissionDriver.for_target("typed-dict").build_definitions(schemas)

        names = [d.name for d in definitions]
        assert names == ["ABC", "A", "ABC2", "AB"]
        assert "ABC2" in caplog.text

    def test_schema_description_is_kept(self):
        schemas = {"Tag": {"type": "string", "description": "A label"}}

        definitions = EmissionDriver.for_target("zod").build_definitions(schemas)

        assert definitions[0].description == "A label"

    def test_clashing_identifiers_are_renamed(self, caplog):
        """Test User and user would both declare userSchema."""
        schemas = {
            "User": {"type": "object", "properties": {"friend": ref("user")}},
            "user": {"type": "integer"},
        }
        driver = EmissionDriver.for_target("zod")

        with caplog.at_level(logging.WARNING):
            source = driver.renderer.render(driver.build_definitions(schemas))

        assert source.count("export const userSchema = ") == 1
        assert "export const user2Schema = z.number().int();" in source
        assert "z.lazy(() => user2Schema)" in source
        assert "emitting it as 'user2'" in caplog.text

    def test_sanitised_names_are_renamed(self):
        schemas = {"foo-bar": {"type": "string"}, "foo_bar": {"type": "integer"}}

        definitions = EmissionDriver.for_target("typed-dict").build_definitions(schemas)

        assert [(d.name, d.expression.expression) for d in definitions] == [("foo-bar", "str"), ("foo_bar2", "int")]


class TestEmit:
    """Test cases for EmissionDriver.emit."""

    def test_emit_with_prefix(self):
        source = EmissionDriver.for_target("zod").emit(build_document(), ["/v1/models"])

        assert "export const modelSchema" in source
        assert "export const modelListSchema" in source
        assert "userSchema" not in source
        assert source.index("export const modelSchema") < source.index("export const modelListSchema")

    def test_emit_all_schemas_without_prefix(self):
        source = EmissionDriver.for_target("typed-dict").emit(build_document())

        assert "class Model(TypedDict):" in source
        assert "class ModelList(TypedDict):" in source
        assert "class User(TypedDict):" in source

    def test_emit_nothing_matched(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = EmissionDriver.for_target("zod").emit(build_document(), ["/v2"])

        assert result is None
        assert "No schemas matched" in caplog.text

    def test_emit_document_without_schemas(self):
        doc = {"openapi": "3.1.0", "info": {"title": "t", "version": "1"}, "paths": {}}

        assert EmissionDriver.for_target("typed-dict").emit(doc) is None
