"""API Client Generator - Generates a typed TypeScript client from OpenAPI specs."""

from .assembler import (
    ApiArtifact,
    GeneratedClient,
    generate_client,
    import_open_api,
)
from .discriminator import resolve_discriminator
from .extractor import get_res_req_types
from .main import GeneratorContext, generate, write_client
from .models import NamedModel
from .operations import CompiledOperation, ParamSpec, compile_operation
from .resolver import ResolvedType, resolve_value
from .validation import ValidationReport, validate_document

__all__ = [
    "ApiArtifact",
    "CompiledOperation",
    "GeneratedClient",
    "GeneratorContext",
    "NamedModel",
    "ParamSpec",
    "ResolvedType",
    "ValidationReport",
    "compile_operation",
    "generate",
    "generate_client",
    "get_res_req_types",
    "import_open_api",
    "resolve_discriminator",
    "resolve_value",
    "validate_document",
    "write_client",
]
