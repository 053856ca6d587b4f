"""Tests for naming helpers."""

from src.type_compiler.naming import (
    is_python_identifier,
    single_line,
    to_camel_case,
    to_identifier,
    to_pascal_case,
    unique_name,
)


class TestCaseConversion:
    def test_to_pascal_case(self):
        assert to_pascal_case("my_schema-name") == "MySchemaName"
        assert to_pascal_case("created_at") == "CreatedAt"
        assert to_pascal_case("userId") == "UserId"

    def test_to_camel_case(self):
        assert to_camel_case("my_schema-name") == "mySchemaName"
        assert to_camel_case("User") == "user"


class TestIdentifiers:
    def test_to_identifier(self):
        assert to_identifier("User") == "User"
        assert to_identifier("user.profile-v2") == "user_profile_v2"
        assert to_identifier("2fa") == "_2fa"
        assert to_identifier("class") == "class_"

    def test_is_python_identifier(self):
        assert is_python_identifier("created_at")
        assert not is_python_identifier("content-type")
        assert not is_python_identifier("from")


class TestUniqueName:
    def test_free_name_is_kept(self):
        assert unique_name("UserAddress", {"User"}) == "UserAddress"

    def test_suffix_added_on_collision(self):
        assert unique_name("UserAddress", {"UserAddress"}) == "UserAddress2"
        assert unique_name("UserAddress", {"UserAddress", "UserAddress2"}) == "UserAddress3"


def test_single_line():
    assert single_line("first line\n  second line\n\nthird") == "first line second line third"
