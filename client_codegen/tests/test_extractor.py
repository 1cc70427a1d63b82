from client_codegen.api_codegen.extractor import UNKNOWN_TYPE, get_res_req_types


def _json(schema):
    return {"content": {"application/json": {"schema": schema}}}


class TestGetResReqTypes:
    def test_json_schema(self):
        result = get_res_req_types([("#/r/200", _json({"$ref": "#/components/schemas/Pet"}))])
        assert result.value == "Pet"
        assert result.imports == ("Pet",)
        assert result.content_types == ("application/json",)

    def test_reference_to_response(self):
        result = get_res_req_types([("#/r/404", {"$ref": "#/components/responses/NotFound"})])
        assert result.value == "NotFoundResponse"
        assert result.imports == ("NotFoundResponse",)
        assert result.content_types == (None,)

    def test_union_is_deduplicated(self):
        items = [
            ("#/r/200", _json({"$ref": "#/components/schemas/Pet"})),
            ("#/r/201", _json({"$ref": "#/components/schemas/Pet"})),
            ("#/r/202", _json({"type": "string"})),
        ]
        result = get_res_req_types(items)
        assert result.values == ("Pet", "string")
        assert result.value == "Pet | string"

    def test_json_has_priority(self):
        item = {
            "content": {
                "application/pdf": {"schema": {"type": "string", "format": "binary"}},
                "application/json": {"schema": {"type": "integer"}},
            }
        }
        assert get_res_req_types([("#", item)]).value == "number"

    def test_pdf_binary(self):
        item = {"content": {"application/pdf": {"schema": {"type": "string", "format": "binary"}}}}
        result = get_res_req_types([("#", item)])
        assert result.value == "BlobPart"
        assert result.binary_content_type == "application/pdf"

    def test_octet_stream_before_pdf(self):
        item = {
            "content": {
                "application/pdf": {"schema": {"type": "string", "format": "binary"}},
                "application/octet-stream": {"schema": {"type": "string", "format": "binary"}},
            }
        }
        assert get_res_req_types([("#", item)]).binary_content_type == "application/octet-stream"

    def test_pdf_with_string_schema(self):
        item = {"content": {"application/pdf": {"schema": {"type": "string"}}}}
        result = get_res_req_types([("#", item)])
        assert result.value == "string"
        assert result.binary_content_type == "application/pdf"

    def test_json_is_never_binary(self):
        item = _json({"type": "string", "format": "binary"})
        assert get_res_req_types([("#", item)]).binary_content_type is None

    def test_no_binary_content_type_for_mixed_union(self):
        items = [
            ("#/a", {"content": {"application/pdf": {"schema": {"type": "string", "format": "binary"}}}}),
            ("#/b", _json({"type": "string"})),
        ]
        assert get_res_req_types(items).binary_content_type is None

    def test_unknown_content_type(self):
        item = {"content": {"text/plain": {"schema": {"type": "string"}}}}
        assert get_res_req_types([("#", item)]).value == UNKNOWN_TYPE

    def test_no_content(self):
        assert get_res_req_types([("#", {"description": "No content"})]).value == "unknown"

    def test_media_without_schema(self):
        assert get_res_req_types([("#", {"content": {"application/json": {}}})]).value == "unknown"

    def test_missing_entries_are_skipped(self):
        assert get_res_req_types([("#", None)]).value == ""
        assert get_res_req_types([]).values == ()

    def test_unknown_deduplicated(self):
        items = [("#/a", {"description": "a"}), ("#/b", {"description": "b"})]
        assert get_res_req_types(items).values == ("unknown",)
