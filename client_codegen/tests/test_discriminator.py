import copy
import logging

import pytest

from client_codegen.api_codegen.discriminator import resolve_discriminator
from client_codegen.shared.errors import DiscriminatorMappingError


def _pet_document():
    return {
        "openapi": "3.0.0",
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "discriminator": {
                        "propertyName": "petType",
                        "mapping": {
                            "dog": "#/components/schemas/Dog",
                            "cat": "#/components/schemas/Cat",
                        },
                    },
                    "properties": {"petType": {"type": "string"}},
                },
                "Dog": {
                    "type": "object",
                    "properties": {"petType": {"type": "string"}, "bark": {"type": "boolean"}},
                },
                "Cat": {
                    "type": "object",
                    "properties": {"petType": {"$ref": "#/components/schemas/PetType"}},
                },
                "PetType": {"type": "string"},
            }
        },
    }


class TestResolveDiscriminator:
    def test_sets_enum_on_mapped_schema(self):
        result = resolve_discriminator(_pet_document())
        dog = result["components"]["schemas"]["Dog"]
        assert dog["properties"]["petType"] == {"type": "string", "enum": ["dog"]}
        assert dog["properties"]["bark"] == {"type": "boolean"}

    def test_reference_property_untouched(self):
        result = resolve_discriminator(_pet_document())
        cat = result["components"]["schemas"]["Cat"]
        assert cat["properties"]["petType"] == {"$ref": "#/components/schemas/PetType"}

    def test_input_not_mutated(self):
        document = _pet_document()
        snapshot = copy.deepcopy(document)
        resolve_discriminator(document)
        assert document == snapshot

    def test_idempotent(self):
        once = resolve_discriminator(_pet_document())
        twice = resolve_discriminator(once)
        assert once == twice

    def test_document_without_components(self):
        assert resolve_discriminator({"openapi": "3.0.0"}) == {"openapi": "3.0.0"}

    def test_discriminator_without_mapping(self):
        document = _pet_document()
        del document["components"]["schemas"]["Pet"]["discriminator"]["mapping"]
        assert resolve_discriminator(document) == document

    def test_mapping_outside_schemas(self):
        document = _pet_document()
        document["components"]["schemas"]["Pet"]["discriminator"]["mapping"]["dog"] = (
            "#/components/responses/Dog"
        )
        with pytest.raises(DiscriminatorMappingError) as exc_info:
            resolve_discriminator(document)
        assert exc_info.value.ref == "#/components/responses/Dog"
        assert exc_info.value.pointer == "#/components/schemas/Pet/discriminator"

    def test_missing_target_is_skipped(self, caplog):
        document = _pet_document()
        document["components"]["schemas"]["Pet"]["discriminator"]["mapping"]["bird"] = (
            "#/components/schemas/Bird"
        )
        with caplog.at_level(logging.WARNING):
            result = resolve_discriminator(document)

        assert "Bird" in caplog.text
        assert result["components"]["schemas"]["Dog"]["properties"]["petType"]["enum"] == ["dog"]

    def test_target_without_property(self):
        document = _pet_document()
        document["components"]["schemas"]["Dog"]["properties"].pop("petType")
        result = resolve_discriminator(document)
        assert "petType" not in result["components"]["schemas"]["Dog"]["properties"]
