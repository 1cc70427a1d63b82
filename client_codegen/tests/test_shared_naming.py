import pytest

from client_codegen.shared.naming import (
    is_general_type,
    is_identifier,
    quote_literal,
    to_camel_case,
    to_pascal_case,
)


class TestToPascalCase:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("hello_world", "HelloWorld"),
            ("hello-world", "HelloWorld"),
            ("helloWorld", "HelloWorld"),
            ("HelloWorld", "HelloWorld"),
            ("pet", "Pet"),
            ("Pet", "Pet"),
            ("HTTPError", "HttpError"),
            ("v1.Pet", "V1Pet"),
            ("list pets", "ListPets"),
            ("", ""),
        ],
    )
    def test_to_pascal_case(self, input_str, expected):
        assert to_pascal_case(input_str) == expected

    def test_to_pascal_case_caching(self):
        result1 = to_pascal_case("pet_store")
        result2 = to_pascal_case("pet_store")
        assert result1 == result2 == "PetStore"


class TestToCamelCase:
    @pytest.mark.parametrize(
        "input_str,expected",
        [
            ("PetStore", "petStore"),
            ("list_pets", "listPets"),
            ("listPets", "listPets"),
            ("Pet", "pet"),
            ("Pet | Error", "petError"),
            ("Pet[]", "pet"),
            ("{name: string}", "nameString"),
            ("{}", ""),
        ],
    )
    def test_to_camel_case(self, input_str, expected):
        assert to_camel_case(input_str) == expected


class TestIsIdentifier:
    @pytest.mark.parametrize("value", ["name", "_private", "$ref", "camelCase", "a1"])
    def test_valid(self, value):
        assert is_identifier(value)

    @pytest.mark.parametrize("value", ["", "1st", "date-time", "with space", "a.b"])
    def test_invalid(self, value):
        assert not is_identifier(value)


class TestQuoteLiteral:
    def test_quote_string(self):
        assert quote_literal("asc") == '"asc"'

    def test_quote_number(self):
        assert quote_literal(20) == "20"

    def test_quote_boolean(self):
        assert quote_literal(True) == "true"


class TestIsGeneralType:
    @pytest.mark.parametrize("name", ["number", "string", "unknown", "BlobPart", "null", "any"])
    def test_general(self, name):
        assert is_general_type(name)

    @pytest.mark.parametrize("name", ["Pet", "PetResponse", "Error"])
    def test_named(self, name):
        assert not is_general_type(name)
