from unittest.mock import MagicMock, patch

from client_codegen.api_codegen.validation import (
    ValidationIssue,
    ValidationReport,
    format_report,
    validate_document,
)

MINIMAL = {
    "openapi": "3.0.0",
    "info": {"title": "Pets", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "responses": {"200": {"description": "ok"}},
            }
        }
    },
}


class TestValidateDocument:
    def test_valid_document(self):
        report = validate_document(MINIMAL)
        assert report.ok
        assert report.errors == ()
        assert report.warnings == ()

    def test_schema_errors(self):
        document = {"openapi": "3.0.0", "paths": {}}
        report = validate_document(document)
        assert not report.ok
        assert any("info" in issue.message for issue in report.errors)

    def test_lint_warnings(self):
        document = {
            "openapi": "3.0.0",
            "info": {"title": "Pets", "version": "1.0.0"},
            "paths": {"/pets/{id}": {"delete": {"operationId": "deletePet", "responses": {"default": {"description": "x"}}}}},
        }
        report = validate_document(document)
        assert report.warnings == (
            ValidationIssue("Operations should have a summary or description", "#/paths/~1pets~1{id}/delete"),
            ValidationIssue(
                "Operations should define at least one successful (2xx) response",
                "#/paths/~1pets~1{id}/delete/responses",
            ),
        )

    @patch("client_codegen.api_codegen.validation.OpenAPIV30SpecValidator")
    def test_error_paths(self, mock_validator_cls):
        error = MagicMock(message="'responses' is a required property")
        error.absolute_path = ["paths", "/pets", "get"]
        mock_validator_cls.return_value.iter_errors.return_value = [error]

        report = validate_document(MINIMAL)
        assert report.errors == (
            ValidationIssue("'responses' is a required property", "#/paths/~1pets/get"),
        )

    @patch("client_codegen.api_codegen.validation.OpenAPIV30SpecValidator")
    def test_validator_failure_is_reported(self, mock_validator_cls):
        mock_validator_cls.return_value.iter_errors.side_effect = RuntimeError("boom")

        report = validate_document(MINIMAL)
        assert report.errors == (ValidationIssue("Validator failed: boom", "#"),)


class TestFormatReport:
    def test_format(self):
        report = ValidationReport(
            errors=(ValidationIssue("bad", "#/info"),),
            warnings=(ValidationIssue("meh", "#/paths/~1pets/get"),),
        )
        assert format_report(report) == (
            "(!) Warnings\n"
            "Message : meh\n"
            "Path    : #/paths/~1pets/get\n"
            "\n"
            "(!) Errors\n"
            "Message : bad\n"
            "Path    : #/info"
        )

    def test_empty(self):
        assert format_report(ValidationReport()) == ""
