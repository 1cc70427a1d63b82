"""Shared utilities for the client generator."""

from .schema_loader import (
    check_openapi_version,
    fetch_spec_text,
    infer_format,
    load_spec,
    parse_spec,
    read_spec_text,
)
from .naming import (
    to_pascal_case,
    to_camel_case,
    is_identifier,
    is_general_type,
    quote_literal,
    TS_GENERAL_TYPES,
)
from .errors import (
    CodegenError,
    ConfigError,
    CyclicSchemaError,
    DiscriminatorMappingError,
    DuplicateOperationIdError,
    MissingOperationIdError,
    MissingPathParameterError,
    OperationError,
    SchemaValidationError,
    SpecFormatError,
    UnresolvedReferenceError,
    UnsupportedReferenceError,
)

__all__ = [
    # Document loading
    "check_openapi_version",
    "fetch_spec_text",
    "infer_format",
    "load_spec",
    "parse_spec",
    "read_spec_text",
    # Naming utilities
    "to_pascal_case",
    "to_camel_case",
    "is_identifier",
    "is_general_type",
    "quote_literal",
    "TS_GENERAL_TYPES",
    # Errors
    "CodegenError",
    "ConfigError",
    "CyclicSchemaError",
    "DiscriminatorMappingError",
    "DuplicateOperationIdError",
    "MissingOperationIdError",
    "MissingPathParameterError",
    "OperationError",
    "SchemaValidationError",
    "SpecFormatError",
    "UnresolvedReferenceError",
    "UnsupportedReferenceError",
]
