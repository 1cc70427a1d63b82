"""Advisory document validation.

Findings are returned as a :class:`ValidationReport`; they are reported to the
user but never stop generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from openapi_spec_validator import OpenAPIV30SpecValidator

from .operations import HTTP_VERBS, escape_pointer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    message: str
    path: str


@dataclass(frozen=True, slots=True)
class ValidationReport:
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def _format_path(parts: Any) -> str:
    return "#/" + "/".join(escape_pointer(str(part)) for part in parts)


def _schema_errors(document: dict[str, Any]) -> Iterator[ValidationIssue]:
    try:
        for error in OpenAPIV30SpecValidator(document).iter_errors():
            yield ValidationIssue(error.message, _format_path(error.absolute_path))
    except Exception as e:  # a validator crash is reported as a finding
        logger.debug("OpenAPI validator failed", exc_info=True)
        yield ValidationIssue(f"Validator failed: {e}", "#")


def _lint_operations(document: dict[str, Any]) -> Iterator[ValidationIssue]:
    for route, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for verb in HTTP_VERBS:
            operation = path_item.get(verb)
            if not isinstance(operation, dict):
                continue
            path = f"#/paths/{escape_pointer(route)}/{verb}"
            if not operation.get("summary") and not operation.get("description"):
                yield ValidationIssue("Operations should have a summary or description", path)
            responses = operation.get("responses") or {}
            if not any(str(code).startswith("2") for code in responses):
                yield ValidationIssue("Operations should define at least one successful (2xx) response", f"{path}/responses")


def validate_document(document: dict[str, Any]) -> ValidationReport:
    """Validate a document against the OpenAPI 3.0 schema and lint its operations."""
    errors = tuple(_schema_errors(document))
    warnings = tuple(_lint_operations(document))
    logger.debug("Validation finished with %d error(s), %d warning(s)", len(errors), len(warnings))
    return ValidationReport(errors=errors, warnings=warnings)


def format_report(report: ValidationReport) -> str:
    """Render a report for console output."""
    lines: list[str] = []
    for title, issues in (("(!) Warnings", report.warnings), ("(!) Errors", report.errors)):
        if not issues:
            continue
        lines.append(title)
        for issue in issues:
            lines.append(f"Message : {issue.message}")
            lines.append(f"Path    : {issue.path}")
            lines.append("")
    return "\n".join(lines).rstrip("\n")
